"""Collect the model declarations of a type universe."""

from __future__ import annotations

from dataclasses import dataclass

from modeldoc.core.diagnostics import DiagnosticKind, DiagnosticLog
from modeldoc.core.keys import KEY_PATTERN, compile_key_pattern
from modeldoc.core.logging import get_logger
from modeldoc.core.universe.declarations import Declaration, DeclarationKind
from modeldoc.core.universe.tags import TagName, model_key, tag_text
from modeldoc.core.universe.universe import TypeUniverse

logger = get_logger(__name__)

# Declaration kinds that can be instantiated as models
_MODEL_KINDS = frozenset({DeclarationKind.CLASS, DeclarationKind.RECORD})


@dataclass(frozen=True, slots=True)
class ModelCandidate:
    """A model declaration with its validated key and cosmetic facets."""

    declaration: Declaration
    key: str
    name: str
    group: str
    description: str


class ModelCollector:
    """Enumerate the models of a universe and resolve their names, groups and descriptions.

    Parameters
    ----------
    universe : TypeUniverse
        Universe to scan
    diagnostics : DiagnosticLog | None
        Sink for excluded candidates and defaulted facets
    key_pattern : str
        Regular expression every model key must match in full

    Raises
    ------
    ValidationError
        If ``key_pattern`` is not a valid regular expression
    """

    def __init__(
        self,
        universe: TypeUniverse,
        diagnostics: DiagnosticLog | None = None,
        key_pattern: str = KEY_PATTERN,
    ) -> None:
        self.universe = universe
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self.key_pattern = compile_key_pattern(key_pattern)

    def collect(self) -> list[ModelCandidate]:
        """Every valid model of the universe, in universe order."""
        candidates = []
        for declaration in self.universe.declarations:
            candidate = self.candidate(declaration)
            if candidate is not None:
                candidates.append(candidate)
        logger.info(f"Collected {len(candidates)} model candidates")
        return candidates

    def candidate(self, declaration: Declaration) -> ModelCandidate | None:
        """Build the candidate for ``declaration``; None if it is not a (valid) model."""
        key = model_key(declaration)
        if key is None:
            return None

        if declaration.kind not in _MODEL_KINDS:
            self.diagnostics.report(
                DiagnosticKind.INVALID_DECLARATION_KIND,
                declaration.name,
                f"only classes and records can be models, not a {declaration.kind}",
            )
            return None

        if self.key_pattern.fullmatch(key) is None:
            self.diagnostics.report(
                DiagnosticKind.INVALID_KEY_FORMAT,
                declaration.name,
                f"model key '{key}' does not match {self.key_pattern.pattern}",
            )
            return None

        return ModelCandidate(
            declaration=declaration,
            key=key,
            name=tag_text(declaration, TagName.NAME) or declaration.simple_name,
            group=self._group(declaration),
            description=self._description(declaration),
        )

    def _description(self, declaration: Declaration) -> str:
        description = tag_text(declaration, TagName.DESCRIPTION)
        if description is None:
            self.diagnostics.report(
                DiagnosticKind.MISSING_REQUIRED_ANNOTATION,
                declaration.name,
                "model has no description",
                severity="warning",
            )
            return ""
        return description

    def _group(self, declaration: Declaration) -> str:
        group = tag_text(declaration, TagName.GROUP)
        if group is not None:
            return group

        scope = self.universe.scope_of(declaration)
        if scope is not None:
            group = tag_text(scope, TagName.GROUP)
            if group is not None:
                return group

        self.diagnostics.report(
            DiagnosticKind.MISSING_GROUP,
            declaration.name,
            f"no group on the model or its scope '{declaration.scope}'",
            severity="warning",
        )
        return ""
