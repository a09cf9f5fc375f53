"""Models scanned by the reflection tests.

Annotations are evaluated eagerly here (no ``from __future__ import
annotations``) so that factory parameters can name nested data classes.
"""

from dataclasses import dataclass
from typing import Annotated, Any, Generic, NamedTuple, Optional, TypeVar

from pydantic import BaseModel, Field

from modeldoc.annotations import (
    Child,
    ChildPath,
    Description,
    Name,
    TypeName,
    data_object,
    description,
    display_name,
    factory_method,
    group,
    model,
    parameter,
)

__group__ = "Samples"

D = TypeVar("D")
M = TypeVar("M")
N = TypeVar("N", bound=int)


class ModelFactory(Generic[D, M]):
    """Builds a model of type M from data of type D."""


class TagSet(set[str]):
    pass


class Registry(dict[str, int]):
    pass


class Point(NamedTuple):
    x: int
    y: int


@model("sample:enchantment/fire")
@description("Sets the target on fire.")
class FireEnchantment:
    @factory_method
    def __init__(self) -> None:
        pass


@model("sample:weapon/sword")
@description("A melee weapon.")
@group("Combat")
@display_name("Long Sword")
class Sword:
    @data_object
    @dataclass
    class Data:
        damage: Annotated[int, Description("Damage dealt per hit")]
        title: Annotated[str, Name("label"), Description("Display name")]
        tags: Annotated[list[str], Description("Free-form tags")]
        bonuses: Annotated[dict[str, int], Description("Bonus per stat")]
        labels: Annotated[TagSet, Description("Labels")]
        registry: Annotated[Registry, Description("Named values")]
        weight: Annotated[Optional[float], Description("Weight in kg")]
        extra: Annotated[Any, Description("Anything")]
        enchantment: Annotated[str, ChildPath("enchantment"), Description("Applied effect")]
        rarity: Annotated[str, TypeName("rarity level"), Description("How rare")]
        grid: Annotated[list[list[str]], Description("Rows of cells")]
        table: Annotated[dict[str, dict[str, int]], Description("Scores per team and player")]

    @factory_method
    def __init__(
        self, data: Data, enchantment: Annotated[FireEnchantment, Child("enchantment")]
    ) -> None:
        self.data = data
        self.enchantment = enchantment


@model("sample:spell/heal")
@description(
    """
    Restores health.
    """
)
class Heal:
    @data_object
    class Data(BaseModel):
        amount: int = Field(description="Health restored")
        target_name: str = Field(alias="target", description="Who is healed")

    @staticmethod
    @factory_method
    def create() -> ModelFactory[Data, "Heal"]:
        return ModelFactory()


@model("sample:spell/bolt")
@description("Explicitly documented.")
@parameter("whole number", "power", "Damage of the bolt")
@parameter("string", "element", "Element of the bolt")
class Bolt:
    @data_object
    @dataclass
    class Data:
        power: int

    @factory_method
    def __init__(self, data: Data) -> None:
        self.data = data


@model("sample:misc/documented")
class Documented:
    """Uses its docstring.

    Further details are not part of the description.
    """

    @factory_method
    def __init__(self, size: Annotated[int, Child("size")]) -> None:
        self.size = size


class Holder(Generic[N]):
    def __init__(self, value: N) -> None:
        self.value = value
