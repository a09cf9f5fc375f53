"""Names of the metadata tags the engine reads.

This is the only place where tag names are spelled out; everything else
refers to :class:`TagName` members.
"""

from __future__ import annotations

from enum import StrEnum

from modeldoc.core.universe.declarations import Tagged


class TagName(StrEnum):
    MODEL = "model"  # value: model key
    FACTORY = "factory"
    DATA = "data"
    CHILD = "child"  # value: child key or DEFAULT_KEY
    CHILD_PATH = "child_path"  # value: child key
    NAME = "name"  # value: display name
    DESCRIPTION = "description"  # value: text
    GROUP = "group"  # value: group name
    PARAMETER = "parameter"  # type, name, behavior
    TYPE = "type"  # value: explicit type name


def tag_text(tagged: Tagged, name: TagName) -> str | None:
    """String value of the first ``name`` tag on ``tagged``, or None."""
    tag = tagged.tag(name)
    if tag is None or tag.value is None:
        return None
    return str(tag.value)


def model_key(tagged: Tagged) -> str | None:
    """Key of the model tag on ``tagged``, or None if it is not a model."""
    return tag_text(tagged, TagName.MODEL)
