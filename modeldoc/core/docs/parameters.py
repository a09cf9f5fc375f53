"""Turn a model's data carrier into documented parameters."""

from __future__ import annotations

from modeldoc.core.diagnostics import DiagnosticKind, DiagnosticLog
from modeldoc.core.docs.factory import FactoryDescriptor
from modeldoc.core.docs.models import ParameterDoc
from modeldoc.core.docs.type_names import TypeNameResolver
from modeldoc.core.logging import get_logger
from modeldoc.core.universe.declarations import Declaration, RecordComponent
from modeldoc.core.universe.tags import TagName, model_key, tag_text
from modeldoc.core.universe.universe import TypeUniverse

logger = get_logger(__name__)


class ParameterExtractor:
    """Build the ordered parameter list of a model.

    Parameters come from exactly one source: the model's explicit
    ``parameter`` tags when it has any, otherwise the components of its
    record-shaped data carrier.

    Parameters
    ----------
    universe : TypeUniverse
        Universe the model belongs to
    diagnostics : DiagnosticLog | None
        Sink for non-fatal problems
    type_names : TypeNameResolver | None
        Resolver for component types; one sharing ``diagnostics`` when None
    """

    def __init__(
        self,
        universe: TypeUniverse,
        diagnostics: DiagnosticLog | None = None,
        type_names: TypeNameResolver | None = None,
    ) -> None:
        self.universe = universe
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self.type_names = type_names or TypeNameResolver(universe, self.diagnostics)

    def extract(self, model: Declaration, factory: FactoryDescriptor) -> list[ParameterDoc]:
        """Document the parameters of ``model``.

        Parameters
        ----------
        model : Declaration
            The model declaration (explicit parameter tags are read from it)
        factory : FactoryDescriptor
            The model's resolved factory

        Returns
        -------
        list[ParameterDoc]
            Parameters in declaration order; empty when there is no data carrier
        """
        carrier = factory.data_carrier
        if carrier is None:
            return []

        overrides = model.tags_named(TagName.PARAMETER)
        if overrides:
            logger.debug(f"{model.name}: using {len(overrides)} explicit parameters")
            return [
                ParameterDoc(
                    type=str(tag.get("type", "")),
                    name=str(tag.get("name", "")),
                    behavior=str(tag.get("behavior", "")),
                )
                for tag in overrides
            ]

        if not carrier.is_record:
            self.diagnostics.report(
                DiagnosticKind.UNRESOLVABLE_PARAMETER_SET,
                model.name,
                f"data carrier {carrier.name} is a {carrier.kind}, not a record",
            )
            return []

        return [self._document(model, factory, component) for component in carrier.components]

    def _document(
        self, model: Declaration, factory: FactoryDescriptor, component: RecordComponent
    ) -> ParameterDoc:
        subject = f"{model.name}.{component.name}"

        behavior = tag_text(component, TagName.DESCRIPTION)
        if behavior is None:
            self.diagnostics.report(
                DiagnosticKind.MISSING_REQUIRED_ANNOTATION,
                subject,
                "parameter has no description",
                severity="warning",
            )
            behavior = ""

        return ParameterDoc(
            type=self._type_of(model, factory, component, subject),
            name=tag_text(component, TagName.NAME) or component.name,
            behavior=behavior,
        )

    def _type_of(
        self,
        model: Declaration,
        factory: FactoryDescriptor,
        component: RecordComponent,
        subject: str,
    ) -> str:
        explicit = tag_text(component, TagName.TYPE)
        if explicit is not None:
            return explicit

        return self.type_names.simplify(
            component.type, link=self._child_link(model, factory, component), subject=subject
        )

    def _child_link(
        self, model: Declaration, factory: FactoryDescriptor, component: RecordComponent
    ) -> str | None:
        """Model key of the child parameter the component is linked to, if any."""
        path = tag_text(component, TagName.CHILD_PATH)
        if path is None:
            return None

        parameter = factory.child_mappings.get(path)
        if parameter is None:
            self.diagnostics.report(
                DiagnosticKind.UNKNOWN_CHILD_PATH,
                f"{model.name}.{component.name}",
                f"no child parameter is registered under '{path}'",
                severity="warning",
            )
            return None

        declaration = self.universe.declaration_of(parameter.type)
        return model_key(declaration) if declaration is not None else None
