"""Introspection facts about built-in scalar and container types.

A vocabulary names, by qualified declaration name, the types that the type
name resolver classifies before falling back to structural names. It holds
data only.
"""

from __future__ import annotations

from dataclasses import dataclass

from modeldoc.core.universe.types import DeclaredType, PrimitiveKind

STRING = "string"
BOOLEAN = "boolean"
WHOLE_NUMBER = "whole number"
DECIMAL_NUMBER = "decimal number"
NUMBER = "number"
ANY = "any"

PRIMITIVE_WORDS: dict[PrimitiveKind, str] = {
    PrimitiveKind.BOOLEAN: BOOLEAN,
    PrimitiveKind.BYTE: WHOLE_NUMBER,
    PrimitiveKind.SHORT: WHOLE_NUMBER,
    PrimitiveKind.INT: WHOLE_NUMBER,
    PrimitiveKind.LONG: WHOLE_NUMBER,
    PrimitiveKind.FLOAT: DECIMAL_NUMBER,
    PrimitiveKind.DOUBLE: DECIMAL_NUMBER,
    PrimitiveKind.CHAR: STRING,
}


@dataclass(frozen=True, slots=True)
class TypeVocabulary:
    """Qualified names of the types with a fixed description.

    Attributes
    ----------
    string_types, boolean_types, whole_number_types, decimal_types : frozenset[str]
        Scalar (boxed) types mapped to "string", "boolean", "whole number"
        and "decimal number"
    number_type : str
        The numeric supertype, described as "number"
    top_type : str
        The universal top type, described as "any"
    set_type, collection_type, map_type : str
        Erasures of the container families, tested in this order
    """

    string_types: frozenset[str]
    boolean_types: frozenset[str]
    whole_number_types: frozenset[str]
    decimal_types: frozenset[str]
    number_type: str
    top_type: str
    set_type: str
    collection_type: str
    map_type: str

    def scalar_word(self, name: str) -> str | None:
        """Description of a scalar type by its canonical name, or None."""
        # Boolean first: in Python bool is a subtype of int
        if name in self.boolean_types:
            return BOOLEAN
        if name in self.string_types:
            return STRING
        if name in self.whole_number_types:
            return WHOLE_NUMBER
        if name in self.decimal_types:
            return DECIMAL_NUMBER
        return None

    @property
    def top(self) -> DeclaredType:
        return DeclaredType(name=self.top_type)

    @property
    def set_erasure(self) -> DeclaredType:
        return DeclaredType(name=self.set_type)

    @property
    def collection_erasure(self) -> DeclaredType:
        return DeclaredType(name=self.collection_type)

    @property
    def map_erasure(self) -> DeclaredType:
        return DeclaredType(name=self.map_type)


# Lists are sequences: ``Collection[str]`` and ``Iterable[str]`` have no list
# semantics and are described by their own names ("collection", "iterable").
PYTHON_VOCABULARY = TypeVocabulary(
    string_types=frozenset({"builtins.str"}),
    boolean_types=frozenset({"builtins.bool"}),
    whole_number_types=frozenset({"builtins.int", "numbers.Integral"}),
    decimal_types=frozenset({"builtins.float", "decimal.Decimal", "numbers.Real"}),
    number_type="numbers.Number",
    top_type="builtins.object",
    set_type="collections.abc.Set",
    collection_type="collections.abc.Sequence",
    map_type="collections.abc.Mapping",
)

JVM_VOCABULARY = TypeVocabulary(
    string_types=frozenset({"java.lang.String", "java.lang.Character"}),
    boolean_types=frozenset({"java.lang.Boolean"}),
    whole_number_types=frozenset(
        {"java.lang.Byte", "java.lang.Short", "java.lang.Integer", "java.lang.Long"}
    ),
    decimal_types=frozenset({"java.lang.Float", "java.lang.Double"}),
    number_type="java.lang.Number",
    top_type="java.lang.Object",
    set_type="java.util.Set",
    collection_type="java.util.Collection",
    map_type="java.util.Map",
)

VOCABULARIES: dict[str, TypeVocabulary] = {
    "python": PYTHON_VOCABULARY,
    "jvm": JVM_VOCABULARY,
}
