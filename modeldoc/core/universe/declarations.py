"""Declarations, members and metadata tags of the type universe."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from modeldoc.core.universe.types import DeclaredType, TypeRef, TypeVariable


class Tag(BaseModel):
    """A metadata tag attached to a declaration, member, parameter or scope.

    Attributes
    ----------
    name : str
        Tag name (see :class:`modeldoc.core.universe.tags.TagName`)
    values : dict[str, Any]
        Tag fields; single-valued tags use the ``"value"`` field
    """

    model_config = ConfigDict(frozen=True)

    name: str
    values: dict[str, Any] = Field(default_factory=dict)

    @property
    def value(self) -> Any:
        return self.values.get("value")

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)


class Tagged(BaseModel):
    """Base for everything that can carry tags."""

    model_config = ConfigDict(frozen=True)

    tags: tuple[Tag, ...] = ()

    def tag(self, name: str) -> Tag | None:
        """First tag called ``name``, or None."""
        return next((tag for tag in self.tags if tag.name == name), None)

    def tags_named(self, name: str) -> list[Tag]:
        """All tags called ``name``, in declaration order."""
        return [tag for tag in self.tags if tag.name == name]

    def has_tag(self, name: str) -> bool:
        return self.tag(name) is not None


class Parameter(Tagged):
    """A parameter of a constructor or method."""

    name: str
    type: TypeRef


class Constructor(Tagged):
    member: Literal["constructor"] = "constructor"
    parameters: tuple[Parameter, ...] = ()


class Method(Tagged):
    member: Literal["method"] = "method"
    name: str
    static: bool = False
    parameters: tuple[Parameter, ...] = ()
    return_type: TypeRef


class RecordComponent(Tagged):
    """A named, typed field of a record-shaped declaration, in declaration order."""

    name: str
    type: TypeRef


class DeclarationKind(StrEnum):
    CLASS = "class"
    RECORD = "record"
    INTERFACE = "interface"
    ENUM = "enum"


class Declaration(Tagged):
    """A class-like type of the universe.

    Attributes
    ----------
    name : str
        Qualified name, unique within the universe
    kind : DeclarationKind
        Class, record, interface or enum
    scope : str
        Name of the enclosing scope (module or package)
    type_parameters : tuple[TypeVariable, ...]
        Declared type parameters, in order
    supertypes : tuple[DeclaredType, ...]
        Direct supertypes, referencing type parameters as type variables
    constructors, methods : tuple
        Members that may be factory operations
    components : tuple[RecordComponent, ...]
        Record fields; empty for non-record declarations
    nested : tuple[str, ...]
        Qualified names of nested declarations
    """

    name: str
    kind: DeclarationKind = DeclarationKind.CLASS
    scope: str = ""
    type_parameters: tuple[TypeVariable, ...] = ()
    supertypes: tuple[DeclaredType, ...] = ()
    constructors: tuple[Constructor, ...] = ()
    methods: tuple[Method, ...] = ()
    components: tuple[RecordComponent, ...] = ()
    nested: tuple[str, ...] = ()

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(".", 1)[-1]

    @property
    def is_record(self) -> bool:
        return self.kind == DeclarationKind.RECORD

    def as_type(self) -> DeclaredType:
        """This declaration referenced with its own type parameters as arguments."""
        return DeclaredType(name=self.name, arguments=self.type_parameters)


class Scope(Tagged):
    """An enclosing scope (Python module or JVM package) that can carry tags."""

    name: str
