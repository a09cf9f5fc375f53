"""Load a type universe from a JSON or YAML description.

The description mirrors :class:`~modeldoc.core.universe.declarations.Declaration`.
Wherever a type is expected, a compact string may be used instead of a
mapping::

    java.util.Map<java.lang.String, java.util.List<java.lang.Integer>>
    int[]
    ? extends java.lang.Number

Primitive names become primitive types; every other name is a declared
type. Type variables must be written as mappings (``{kind: typevar, ...}``).

Examples
--------
A minimal YAML description::

    vocabulary: jvm
    declarations:
      - name: demo.Widget
        tags: [{name: model, values: {value: demo.widget}}]
        constructors:
          - tags: [{name: factory}]
            parameters:
              - {name: data, type: demo.Widget.Data}
        nested: [demo.Widget.Data]
      - name: demo.Widget.Data
        kind: record
        tags: [{name: data}]
        components:
          - {name: count, type: int}
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Literal

import pydantic
import yaml
from pydantic import BaseModel, Field

from modeldoc.core.exceptions import TypeUniverseError
from modeldoc.core.logging import get_logger
from modeldoc.core.universe.declarations import Declaration, Scope
from modeldoc.core.universe.types import PrimitiveKind
from modeldoc.core.universe.universe import TypeUniverse
from modeldoc.core.universe.vocabulary import VOCABULARIES

logger = get_logger(__name__)

# Keys whose value is a single type / a list of types
_TYPE_KEYS = frozenset({"type", "return_type", "component", "upper_bound", "extends_bound"})
_TYPE_LIST_KEYS = frozenset({"arguments", "supertypes"})

_TOKEN_PATTERN = re.compile(r"\s*(\[\]|[<>,?]|[A-Za-z_$][\w$.]*)")


class UniverseDocument(BaseModel):
    """Validated shape of a universe description."""

    vocabulary: Literal["python", "jvm"] = "python"
    declarations: list[Declaration] = Field(default_factory=list)
    scopes: list[Scope] = Field(default_factory=list)
    aliases: dict[str, str] = Field(default_factory=dict)

    def to_universe(self) -> TypeUniverse:
        return TypeUniverse(
            self.declarations,
            scopes=self.scopes,
            aliases=self.aliases,
            vocabulary=VOCABULARIES[self.vocabulary],
        )


# ============================================================================
# Type shorthand
# ============================================================================


class _ShorthandParser:
    """Recursive-descent parser for the compact type notation."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens = self._tokenize(text)
        self.position = 0

    def _tokenize(self, text: str) -> list[str]:
        tokens = []
        index = 0
        while index < len(text):
            if text[index].isspace():
                index += 1
                continue
            match = _TOKEN_PATTERN.match(text, index)
            if match is None:
                raise TypeUniverseError(f"Invalid type notation {text!r} at offset {index}")
            tokens.append(match.group(1))
            index = match.end()
        return tokens

    def _peek(self) -> str | None:
        return self.tokens[self.position] if self.position < len(self.tokens) else None

    def _take(self, expected: str | None = None) -> str:
        token = self._peek()
        if token is None or (expected is not None and token != expected):
            raise TypeUniverseError(
                f"Invalid type notation {self.text!r}: expected {expected or 'a type'}"
            )
        self.position += 1
        return token

    def parse(self) -> dict[str, Any]:
        result = self._type()
        if self._peek() is not None:
            raise TypeUniverseError(f"Invalid type notation {self.text!r}: trailing input")
        return result

    def _type(self) -> dict[str, Any]:
        result = self._base()
        while self._peek() == "[]":
            self._take("[]")
            result = {"kind": "array", "component": result}
        return result

    def _base(self) -> dict[str, Any]:
        if self._peek() == "?":
            self._take("?")
            if self._peek() == "extends":
                self._take("extends")
                return {"kind": "wildcard", "extends_bound": self._type()}
            return {"kind": "wildcard"}

        name = self._take()
        if name in PrimitiveKind.__members__.values():
            return {"kind": "primitive", "primitive": name}

        arguments = []
        if self._peek() == "<":
            self._take("<")
            arguments.append(self._type())
            while self._peek() == ",":
                self._take(",")
                arguments.append(self._type())
            self._take(">")
        return {"kind": "declared", "name": name, "arguments": arguments}


def parse_type_notation(text: str) -> dict[str, Any]:
    """Parse compact type notation into a type-reference mapping.

    Examples
    --------
    >>> parse_type_notation("int[]")["kind"]
    'array'
    >>> parse_type_notation("java.util.List<? extends java.lang.String>")["arguments"][0]["kind"]
    'wildcard'
    """
    return _ShorthandParser(text).parse()


def _expand_shorthand(data: Any) -> Any:
    """Replace compact type strings with mappings, leaving tag values untouched."""
    if isinstance(data, list):
        return [_expand_shorthand(item) for item in data]
    if not isinstance(data, dict):
        return data

    expanded: dict[str, Any] = {}
    for key, value in data.items():
        if key == "values":
            expanded[key] = value
        elif key in _TYPE_KEYS and isinstance(value, str):
            expanded[key] = parse_type_notation(value)
        elif key in _TYPE_LIST_KEYS and isinstance(value, list):
            expanded[key] = [
                parse_type_notation(item) if isinstance(item, str) else _expand_shorthand(item)
                for item in value
            ]
        else:
            expanded[key] = _expand_shorthand(value)
    return expanded


# ============================================================================
# Loading
# ============================================================================


def universe_from_data(data: dict[str, Any]) -> TypeUniverse:
    """Validate raw description data into a universe.

    Raises
    ------
    TypeUniverseError
        If the data does not describe a valid universe
    """
    if not isinstance(data, dict):
        raise TypeUniverseError("Universe description must be a mapping")
    try:
        document = UniverseDocument.model_validate(_expand_shorthand(data))
    except pydantic.ValidationError as e:
        raise TypeUniverseError(f"Invalid universe description: {e}") from e
    return document.to_universe()


def load_universe(path: str | Path) -> TypeUniverse:
    """Load a universe description from a ``.json``, ``.yaml`` or ``.yml`` file.

    Raises
    ------
    TypeUniverseError
        If the file is missing, unparsable or invalid
    """
    universe_path = Path(path)
    if not universe_path.exists():
        raise TypeUniverseError(f"Universe description not found: {universe_path}")

    logger.info("Loading type universe from {path}", path=universe_path)
    text = universe_path.read_text(encoding="utf-8")
    try:
        if universe_path.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise TypeUniverseError(f"Could not parse {universe_path}: {e}") from e

    universe = universe_from_data(data or {})
    logger.debug("Loaded {count} declarations", count=len(universe))
    return universe
