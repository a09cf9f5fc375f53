"""Type references of the type universe.

A type reference is one variant of a closed, discriminated union. Frontends
(reflection, declarative loader) produce these; the engine only reads them.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class PrimitiveKind(StrEnum):
    """Unboxed primitive kinds of statically typed source universes."""

    BOOLEAN = "boolean"
    BYTE = "byte"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    CHAR = "char"
    FLOAT = "float"
    DOUBLE = "double"


class _TypeRefBase(BaseModel):
    model_config = ConfigDict(frozen=True)


class PrimitiveType(_TypeRefBase):
    """An unboxed primitive such as ``int`` or ``boolean``."""

    kind: Literal["primitive"] = "primitive"
    primitive: PrimitiveKind


class ArrayType(_TypeRefBase):
    """A fixed array of ``component``."""

    kind: Literal["array"] = "array"
    component: TypeRef


class DeclaredType(_TypeRefBase):
    """A reference to a declared class, optionally parameterized.

    Attributes
    ----------
    name : str
        Qualified name of the declaration (e.g., "builtins.list")
    arguments : tuple[TypeRef, ...]
        Type arguments; empty for raw or non-generic references
    """

    kind: Literal["declared"] = "declared"
    name: str
    arguments: tuple[TypeRef, ...] = ()

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    @property
    def is_raw(self) -> bool:
        return not self.arguments

    def erasure(self) -> DeclaredType:
        return DeclaredType(name=self.name)


class TypeVariable(_TypeRefBase):
    """A type parameter; ``upper_bound`` of None means the universal top type."""

    kind: Literal["typevar"] = "typevar"
    name: str
    upper_bound: TypeRef | None = None


class WildcardType(_TypeRefBase):
    """A wildcard argument; ``extends_bound`` of None means unbounded."""

    kind: Literal["wildcard"] = "wildcard"
    extends_bound: TypeRef | None = None


class UnknownType(_TypeRefBase):
    """A construct the frontend could not express in this vocabulary."""

    kind: Literal["unknown"] = "unknown"
    description: str


TypeRef = Annotated[
    PrimitiveType | ArrayType | DeclaredType | TypeVariable | WildcardType | UnknownType,
    Field(discriminator="kind"),
]

ArrayType.model_rebuild()
DeclaredType.model_rebuild()
TypeVariable.model_rebuild()
WildcardType.model_rebuild()


# ============================================================================
# Construction helpers
# ============================================================================


def declared(name: str, *arguments: TypeRef) -> DeclaredType:
    """Build a declared type reference.

    Examples
    --------
    >>> declared("builtins.list", declared("builtins.str")).arguments[0].name
    'builtins.str'
    """
    return DeclaredType(name=name, arguments=tuple(arguments))


def primitive(kind: PrimitiveKind | str) -> PrimitiveType:
    return PrimitiveType(primitive=PrimitiveKind(kind))


def array_of(component: TypeRef) -> ArrayType:
    return ArrayType(component=component)


def type_var(name: str, upper_bound: TypeRef | None = None) -> TypeVariable:
    return TypeVariable(name=name, upper_bound=upper_bound)


def wildcard(extends_bound: TypeRef | None = None) -> WildcardType:
    return WildcardType(extends_bound=extends_bound)


def describe(type_ref: TypeRef) -> str:
    """Render a type reference in a compact, source-like form for log messages."""
    if isinstance(type_ref, PrimitiveType):
        return str(type_ref.primitive)
    if isinstance(type_ref, ArrayType):
        return f"{describe(type_ref.component)}[]"
    if isinstance(type_ref, DeclaredType):
        if type_ref.arguments:
            return f"{type_ref.name}[{', '.join(describe(a) for a in type_ref.arguments)}]"
        return type_ref.name
    if isinstance(type_ref, TypeVariable):
        return type_ref.name
    if isinstance(type_ref, WildcardType):
        if type_ref.extends_bound is None:
            return "?"
        return f"? extends {describe(type_ref.extends_bound)}"
    return f"<{type_ref.description}>"
