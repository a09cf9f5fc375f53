"""Assemble the documentation of every model into one document set."""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor

from modeldoc.core.diagnostics import DiagnosticLog
from modeldoc.core.docs.collector import ModelCandidate, ModelCollector
from modeldoc.core.docs.factory import FactoryResolver
from modeldoc.core.docs.models import DocumentSet, ModelDoc, Settings
from modeldoc.core.docs.parameters import ParameterExtractor
from modeldoc.core.docs.type_names import TypeNameResolver
from modeldoc.core.exceptions import ModelResolutionError
from modeldoc.core.keys import KEY_PATTERN
from modeldoc.core.logging import get_logger
from modeldoc.core.universe.universe import TypeUniverse

logger = get_logger(__name__)


def current_time_millis() -> int:
    return time.time_ns() // 1_000_000


class ModelAssembler:
    """Drive collection, factory resolution and parameter extraction for every model.

    A model that fails to resolve is dropped with its diagnostic; the run
    continues with the remaining candidates. Only a
    :class:`~modeldoc.core.exceptions.TypeUniverseError` aborts it.

    Parameters
    ----------
    universe : TypeUniverse
        Universe to document
    settings : Settings
        Project settings copied into the document set
    diagnostics : DiagnosticLog | None
        Shared diagnostic sink; a new one when None
    key_pattern : str
        Pattern every model key must match
    max_workers : int
        Resolve models on this many threads; 1 resolves them in order
    capture_time : int | None
        Fixed capture time in epoch milliseconds; the current time when None

    Examples
    --------
    >>> assembler = ModelAssembler(universe, Settings(record_time=False))  # doctest: +SKIP
    >>> document_set = assembler.assemble()  # doctest: +SKIP
    """

    def __init__(
        self,
        universe: TypeUniverse,
        settings: Settings,
        diagnostics: DiagnosticLog | None = None,
        key_pattern: str = KEY_PATTERN,
        max_workers: int = 1,
        capture_time: int | None = None,
    ) -> None:
        self.universe = universe
        self.settings = settings
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self.max_workers = max(1, max_workers)
        self.capture_time = capture_time

        self.collector = ModelCollector(universe, self.diagnostics, key_pattern)
        self.factories = FactoryResolver(universe, self.diagnostics)
        self.parameters = ParameterExtractor(
            universe, self.diagnostics, TypeNameResolver(universe, self.diagnostics)
        )

    def assemble(self) -> DocumentSet:
        """Document every model of the universe.

        Returns
        -------
        DocumentSet
            Documents sorted by model key, plus the settings
        """
        last_updated = 0
        if self.settings.record_time:
            last_updated = (
                self.capture_time if self.capture_time is not None else current_time_millis()
            )

        candidates = self.collector.collect()
        if self.max_workers > 1 and len(candidates) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                results = list(
                    executor.map(lambda candidate: self.document(candidate, last_updated), candidates)
                )
        else:
            results = [self.document(candidate, last_updated) for candidate in candidates]

        elements = sorted((doc for doc in results if doc is not None), key=lambda doc: doc.type)
        logger.info(
            f"Documented {len(elements)} of {len(candidates)} models "
            f"({len(self.diagnostics)} diagnostics)"
        )
        return DocumentSet(elements=tuple(elements), settings=self.settings)

    def document(self, candidate: ModelCandidate, last_updated: int = 0) -> ModelDoc | None:
        """Document one candidate; None if it fails to resolve."""
        declaration = candidate.declaration
        try:
            factory = self.factories.resolve(declaration)
            parameters = self.parameters.extract(declaration, factory)
        except ModelResolutionError as e:
            self.diagnostics.report(e.kind, e.subject, e.reason)
            return None

        return ModelDoc(
            type=candidate.key,
            name=candidate.name,
            group=candidate.group,
            description=candidate.description,
            parameters=tuple(parameters),
            last_updated=last_updated,
        )
