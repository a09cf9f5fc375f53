"""The type universe: declarations, tags, type references and type-system queries."""

from modeldoc.core.universe.declarations import (
    Constructor,
    Declaration,
    DeclarationKind,
    Method,
    Parameter,
    RecordComponent,
    Scope,
    Tag,
)
from modeldoc.core.universe.loader import load_universe, universe_from_data
from modeldoc.core.universe.tags import TagName
from modeldoc.core.universe.types import (
    ArrayType,
    DeclaredType,
    PrimitiveKind,
    PrimitiveType,
    TypeRef,
    TypeVariable,
    UnknownType,
    WildcardType,
)
from modeldoc.core.universe.universe import TypeUniverse
from modeldoc.core.universe.vocabulary import JVM_VOCABULARY, PYTHON_VOCABULARY, TypeVocabulary

__all__ = [
    "ArrayType",
    "Constructor",
    "Declaration",
    "DeclarationKind",
    "DeclaredType",
    "JVM_VOCABULARY",
    "Method",
    "PYTHON_VOCABULARY",
    "Parameter",
    "PrimitiveKind",
    "PrimitiveType",
    "RecordComponent",
    "Scope",
    "Tag",
    "TagName",
    "TypeRef",
    "TypeUniverse",
    "TypeVariable",
    "TypeVocabulary",
    "UnknownType",
    "WildcardType",
    "load_universe",
    "universe_from_data",
]
