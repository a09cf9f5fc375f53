"""Tests for modeldoc.annotations."""

from dataclasses import dataclass
from typing import Annotated, get_args

import pytest

from modeldoc.annotations import (
    Child,
    ChildPath,
    Description,
    Marker,
    Name,
    TypeName,
    data_object,
    description,
    factory_method,
    group,
    markers_of,
    model,
    parameter,
    tags_from,
)
from modeldoc.core.keys import DEFAULT_KEY
from modeldoc.core.universe.tags import TagName


class TestDecorators:
    """Tests for class and method decorators."""

    def test_markers_keep_source_order(self) -> None:
        """Stacked decorators are recorded top to bottom."""

        @model("demo:widget")
        @description("A widget.")
        @group("Tools")
        class Widget:
            pass

        tags = tags_from(markers_of(Widget))
        assert [tag.name for tag in tags] == [TagName.MODEL, TagName.DESCRIPTION, TagName.GROUP]
        assert tags[0].value == "demo:widget"

    def test_markers_are_not_inherited(self) -> None:
        """A subclass of a model is not itself a model."""

        @model("demo:base")
        class Base:
            pass

        class Derived(Base):
            pass

        assert markers_of(Derived) == ()

    def test_static_method_markers(self) -> None:
        """Markers on a static method are readable through the wrapper."""

        class Widget:
            @staticmethod
            @factory_method
            def create() -> None:
                return None

        raw = vars(Widget)["create"]
        assert [tag.name for tag in tags_from(markers_of(raw))] == [TagName.FACTORY]

    def test_data_object_returns_class(self) -> None:
        @data_object
        class Data:
            pass

        assert isinstance(Data, type)
        assert tags_from(markers_of(Data))[0].name == TagName.DATA

    def test_parameter_marker_fields(self) -> None:
        """Explicit parameters carry type, name and behavior."""
        (tag,) = tags_from([parameter("whole number", "power", "Damage")])
        assert tag.name == TagName.PARAMETER
        assert tag.values == {"type": "whole number", "name": "power", "behavior": "Damage"}

    def test_markers_of_non_class(self) -> None:
        """Objects without a namespace have no markers."""
        assert markers_of(42) == ()


class TestFieldMarkers:
    """Tests for markers used inside Annotated."""

    def test_tags_from_ignores_foreign_metadata(self) -> None:
        hint = Annotated[int, "unrelated", Description("Count"), Name("amount")]
        tags = tags_from(get_args(hint)[1:])
        assert [(tag.name, tag.value) for tag in tags] == [
            (TagName.DESCRIPTION, "Count"),
            (TagName.NAME, "amount"),
        ]

    def test_description_is_cleaned(self) -> None:
        """Indented multi-line text is dedented."""
        tag = Description(
            """
            First line.
              Indented.
            """
        ).to_tag()
        assert tag.value == "First line.\n  Indented."

    def test_child_defaults_to_model_key(self) -> None:
        assert Child().to_tag().value == DEFAULT_KEY
        assert Child("blade").to_tag().value == "blade"

    def test_child_path_and_type_name(self) -> None:
        assert ChildPath("blade").to_tag().name == TagName.CHILD_PATH
        assert TypeName("rarity").to_tag().name == TagName.TYPE


class TestMarkerBase:
    """Tests for the abstract marker base."""

    def test_base_cannot_be_created(self) -> None:
        with pytest.raises(TypeError):
            Marker()

    def test_subclass_without_tag_fails_on_creation(self) -> None:
        """A marker that forgets ``to_tag`` is rejected before it is ever applied."""

        @dataclass(frozen=True, slots=True)
        class Incomplete(Marker):
            text: str

        with pytest.raises(TypeError, match="to_tag"):
            Incomplete("x")
