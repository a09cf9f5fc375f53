"""Factory operation resolution.

Every model has exactly one factory operation: a constructor or a static
method tagged ``factory``. The resolver finds it and derives the data
carrier (the type whose fields are the model's parameters) plus the child
mappings (child key -> constructor parameter) that data fields may link to.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from modeldoc.core.diagnostics import DiagnosticKind, DiagnosticLog
from modeldoc.core.exceptions import ModelResolutionError
from modeldoc.core.keys import DEFAULT_KEY
from modeldoc.core.logging import get_logger
from modeldoc.core.universe.declarations import Constructor, Declaration, Method, Parameter
from modeldoc.core.universe.tags import TagName, model_key
from modeldoc.core.universe.types import DeclaredType, describe
from modeldoc.core.universe.universe import TypeUniverse

logger = get_logger(__name__)


class FactoryKind(StrEnum):
    CONSTRUCTOR = "constructor"
    STATIC = "static"


@dataclass(frozen=True, slots=True)
class FactoryDescriptor:
    """Resolved factory operation of one model.

    Attributes
    ----------
    kind : FactoryKind
        Constructor or static method
    operation : Constructor | Method
        The tagged member
    data_carrier : Declaration | None
        Declaration supplying the parameters; None when the model takes none
    child_mappings : Mapping[str, Parameter]
        Child key -> constructor parameter, first mapping per key
    """

    kind: FactoryKind
    operation: Constructor | Method
    data_carrier: Declaration | None = None
    child_mappings: Mapping[str, Parameter] = field(
        default_factory=lambda: MappingProxyType({})
    )


class FactoryResolver:
    """Find the factory operation, data carrier and child mappings of a model.

    Parameters
    ----------
    universe : TypeUniverse
        Universe the model belongs to
    diagnostics : DiagnosticLog | None
        Sink for non-fatal problems (duplicate or invalid child mappings)
    """

    def __init__(self, universe: TypeUniverse, diagnostics: DiagnosticLog | None = None) -> None:
        self.universe = universe
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()

    def resolve(self, declaration: Declaration) -> FactoryDescriptor:
        """Resolve the factory operation of ``declaration``.

        Returns
        -------
        FactoryDescriptor
            The factory descriptor

        Raises
        ------
        ModelResolutionError
            ``NoFactoryOperation``, ``MultipleFactoryOperations``,
            ``InvalidFactoryShape`` or ``MultipleDataCarriers``
        """
        operations: list[Constructor | Method] = [
            *(c for c in declaration.constructors if c.has_tag(TagName.FACTORY)),
            *(m for m in declaration.methods if m.has_tag(TagName.FACTORY)),
        ]
        if not operations:
            raise ModelResolutionError(
                DiagnosticKind.NO_FACTORY_OPERATION,
                declaration.name,
                "no constructor or method is tagged as the factory operation",
            )
        if len(operations) > 1:
            raise ModelResolutionError(
                DiagnosticKind.MULTIPLE_FACTORY_OPERATIONS,
                declaration.name,
                f"{len(operations)} members are tagged as the factory operation",
            )

        operation = operations[0]
        if isinstance(operation, Method):
            return self._resolve_static(declaration, operation)
        return self._resolve_constructor(declaration, operation)

    # ========================================================================
    # Static factories
    # ========================================================================

    def _resolve_static(self, declaration: Declaration, method: Method) -> FactoryDescriptor:
        if not method.static:
            raise ModelResolutionError(
                DiagnosticKind.INVALID_FACTORY_SHAPE,
                declaration.name,
                f"factory method '{method.name}' must be static",
            )
        if method.parameters:
            raise ModelResolutionError(
                DiagnosticKind.INVALID_FACTORY_SHAPE,
                declaration.name,
                f"factory method '{method.name}' must take no parameters",
            )

        return_type = method.return_type
        carrier = None
        if isinstance(return_type, DeclaredType) and len(return_type.arguments) == 2:
            carrier = self.universe.declaration_of(return_type.arguments[0])
        if carrier is None:
            raise ModelResolutionError(
                DiagnosticKind.INVALID_FACTORY_SHAPE,
                declaration.name,
                f"factory method '{method.name}' returns {describe(return_type)}; expected a "
                "generic of two type arguments whose first argument is the data type",
            )

        logger.debug(f"{declaration.name}: static factory '{method.name}' -> {carrier.name}")
        return FactoryDescriptor(kind=FactoryKind.STATIC, operation=method, data_carrier=carrier)

    # ========================================================================
    # Constructor factories
    # ========================================================================

    def _resolve_constructor(
        self, declaration: Declaration, constructor: Constructor
    ) -> FactoryDescriptor:
        mappings: dict[str, Parameter] = {}
        candidates: list[Parameter] = []

        for parameter in constructor.parameters:
            parameter_type = self.universe.declaration_of(parameter.type)

            child = parameter.tag(TagName.CHILD)
            if child is not None:
                self._map_child(declaration, parameter, child.value, parameter_type, mappings)

            if parameter.has_tag(TagName.DATA) or (
                parameter_type is not None and parameter_type.has_tag(TagName.DATA)
            ):
                candidates.append(parameter)

        if len(candidates) > 1:
            names = ", ".join(p.name for p in candidates)
            raise ModelResolutionError(
                DiagnosticKind.MULTIPLE_DATA_CARRIERS,
                declaration.name,
                f"constructor parameters {names} are all data carriers",
            )

        if candidates:
            carrier = self.universe.declaration_of(candidates[0].type)
            if carrier is None:
                self.diagnostics.report(
                    DiagnosticKind.UNRESOLVABLE_PARAMETER_SET,
                    declaration.name,
                    f"data parameter '{candidates[0].name}' has type "
                    f"{describe(candidates[0].type)}, which is not declared",
                )
        else:
            carrier = self._nested_carrier(declaration)

        return FactoryDescriptor(
            kind=FactoryKind.CONSTRUCTOR,
            operation=constructor,
            data_carrier=carrier,
            child_mappings=MappingProxyType(mappings),
        )

    def _map_child(
        self,
        declaration: Declaration,
        parameter: Parameter,
        key: str | None,
        parameter_type: Declaration | None,
        mappings: dict[str, Parameter],
    ) -> None:
        if key is None or key == DEFAULT_KEY:
            key = model_key(parameter_type) if parameter_type is not None else None
            if key is None:
                self.diagnostics.report(
                    DiagnosticKind.INVALID_CHILD_MAPPING,
                    declaration.name,
                    f"child parameter '{parameter.name}' has no key and its type "
                    f"{describe(parameter.type)} is not a model",
                )
                return

        if key in mappings:
            self.diagnostics.report(
                DiagnosticKind.AMBIGUOUS_CHILD_MAPPING,
                declaration.name,
                f"child key '{key}' maps to both '{mappings[key].name}' and "
                f"'{parameter.name}'; keeping '{mappings[key].name}'",
            )
            return
        mappings[key] = parameter

    def _nested_carrier(self, declaration: Declaration) -> Declaration | None:
        nested = [self.universe.declaration(name) for name in declaration.nested]
        carriers = [
            candidate
            for candidate in nested
            if candidate is not None and candidate.is_record and candidate.has_tag(TagName.DATA)
        ]
        if len(carriers) > 1:
            names = ", ".join(c.simple_name for c in carriers)
            raise ModelResolutionError(
                DiagnosticKind.MULTIPLE_DATA_CARRIERS,
                declaration.name,
                f"nested data types {names} are all data carriers",
            )
        return carriers[0] if carriers else None
