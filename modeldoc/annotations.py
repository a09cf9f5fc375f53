"""Metadata markers for declaring documented models in Python code.

Class-level metadata is attached with decorators; field- and
parameter-level metadata goes into :data:`typing.Annotated`.

Examples
--------
Example usage::

    from dataclasses import dataclass
    from typing import Annotated

    from modeldoc.annotations import (
        Child, ChildPath, Description, data_object, description, factory_method, model,
    )

    __group__ = "Combat"


    @model("combat:weapon/sword")
    @description("A melee weapon.")
    class Sword:
        @data_object
        @dataclass
        class Data:
            damage: Annotated[int, Description("Damage dealt per hit")]
            enchantment: Annotated[str, ChildPath("enchantment"), Description("Applied effect")]

        @factory_method
        def __init__(self, data: Data, enchantment: Annotated[Enchantment, Child()]) -> None:
            ...
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from modeldoc.core.keys import DEFAULT_KEY
from modeldoc.core.universe.declarations import Tag
from modeldoc.core.universe.tags import TagName

T = TypeVar("T")

# Attribute holding the markers attached to a class or function
MARKERS_ATTR = "__modeldoc_markers__"

# Module-level attribute naming the group of every model defined in the module
MODULE_GROUP_ATTR = "__group__"


# ============================================================================
# Markers
# ============================================================================


@dataclass(frozen=True, slots=True)
class Marker(ABC):
    """Base class for metadata markers.

    A marker can be placed in ``Annotated[...]`` or applied as a decorator.
    """

    @abstractmethod
    def to_tag(self) -> Tag:
        """The declaration tag this marker stands for."""

    def __call__(self, target: T) -> T:
        attach(target, self)
        return target


@dataclass(frozen=True, slots=True)
class Model(Marker):
    key: str

    def to_tag(self) -> Tag:
        return Tag(name=TagName.MODEL, values={"value": self.key})


@dataclass(frozen=True, slots=True)
class FactoryMethod(Marker):
    def to_tag(self) -> Tag:
        return Tag(name=TagName.FACTORY)


@dataclass(frozen=True, slots=True)
class DataObject(Marker):
    def to_tag(self) -> Tag:
        return Tag(name=TagName.DATA)


@dataclass(frozen=True, slots=True)
class Child(Marker):
    """Marks a factory parameter as a child model; the default key is the child's model key."""

    key: str = DEFAULT_KEY

    def to_tag(self) -> Tag:
        return Tag(name=TagName.CHILD, values={"value": self.key})


@dataclass(frozen=True, slots=True)
class ChildPath(Marker):
    """Links a data field to the child registered under ``key``."""

    key: str

    def to_tag(self) -> Tag:
        return Tag(name=TagName.CHILD_PATH, values={"value": self.key})


@dataclass(frozen=True, slots=True)
class Name(Marker):
    text: str

    def to_tag(self) -> Tag:
        return Tag(name=TagName.NAME, values={"value": self.text})


@dataclass(frozen=True, slots=True)
class Description(Marker):
    text: str

    def to_tag(self) -> Tag:
        return Tag(name=TagName.DESCRIPTION, values={"value": inspect.cleandoc(self.text)})


@dataclass(frozen=True, slots=True)
class Group(Marker):
    text: str

    def to_tag(self) -> Tag:
        return Tag(name=TagName.GROUP, values={"value": self.text})


@dataclass(frozen=True, slots=True)
class TypeName(Marker):
    """Overrides the documented type of a data field."""

    text: str

    def to_tag(self) -> Tag:
        return Tag(name=TagName.TYPE, values={"value": self.text})


@dataclass(frozen=True, slots=True)
class Parameter(Marker):
    """Explicitly documented parameter; replaces structural extraction."""

    type: str
    name: str
    behavior: str

    def to_tag(self) -> Tag:
        return Tag(
            name=TagName.PARAMETER,
            values={"type": self.type, "name": self.name, "behavior": self.behavior},
        )


# ============================================================================
# Attaching and reading
# ============================================================================


def _unwrap(target: Any) -> Any:
    if isinstance(target, (staticmethod, classmethod)):
        return target.__func__
    return target


def attach(target: Any, marker: Marker) -> None:
    """Attach ``marker`` to a class or function.

    Decorators run bottom-up, so markers are prepended to keep them in
    source order.
    """
    target = _unwrap(target)
    existing = vars(target).get(MARKERS_ATTR, ())
    setattr(target, MARKERS_ATTR, (marker, *existing))


def markers_of(target: Any) -> tuple[Marker, ...]:
    """Markers attached directly to ``target`` (never inherited)."""
    target = _unwrap(target)
    try:
        return tuple(vars(target).get(MARKERS_ATTR, ()))
    except TypeError:
        return ()


def tags_from(markers: Iterable[Any]) -> tuple[Tag, ...]:
    """Tags for the markers among ``markers``; other objects are ignored."""
    return tuple(marker.to_tag() for marker in markers if isinstance(marker, Marker))


# ============================================================================
# Decorators
# ============================================================================


def model(key: str) -> Model:
    """Register a class as a model under ``key``."""
    return Model(key)


def factory_method(target: T) -> T:
    """Mark ``__init__`` or a static method as the model's factory operation."""
    attach(target, FactoryMethod())
    return target


def data_object(target: T) -> T:
    """Mark a class as a data carrier."""
    attach(target, DataObject())
    return target


def description(text: str) -> Description:
    return Description(text)


def group(text: str) -> Group:
    return Group(text)


def display_name(text: str) -> Name:
    return Name(text)


def parameter(type: str, name: str, behavior: str) -> Parameter:  # noqa: A002
    return Parameter(type, name, behavior)


__all__ = [
    "Child",
    "ChildPath",
    "DataObject",
    "Description",
    "FactoryMethod",
    "Group",
    "MODULE_GROUP_ATTR",
    "Marker",
    "Model",
    "Name",
    "Parameter",
    "TypeName",
    "data_object",
    "description",
    "display_name",
    "factory_method",
    "group",
    "markers_of",
    "model",
    "parameter",
    "tags_from",
]
