"""Reduce type references to short descriptive names.

Reduction happens in two steps. :func:`classify` maps a type reference to
one variant of the closed :data:`TypeShape` union, then the resolver renders
that shape, recursing into element, key and bound types.

Rules, in strict priority:

1. Primitives: boolean, whole number, decimal number, string (char)
2. Arrays: "list of X"
3. Vocabulary scalars (boxed forms, ``str``, ``int``, ...) by canonical name
4. Types whose declaration is a model: the model key
5. Containers, exact erasure first then via the supertype closure:
   "set of X", "list of X", "map of K -> V"; missing arguments are "any"
6. The numeric supertype is "number", the top type "any"
7. Type variables and wildcards: their bound, "any" when unbounded
8. Anything else: the unqualified, lower-cased declaration name

Examples
--------
>>> from modeldoc.core.universe.types import declared
>>> resolver = TypeNameResolver(universe)  # doctest: +SKIP
>>> resolver.simplify(declared("builtins.list", declared("builtins.str")))  # doctest: +SKIP
'list of string'
"""

from __future__ import annotations

from dataclasses import dataclass

from modeldoc.core.diagnostics import DiagnosticKind, DiagnosticLog
from modeldoc.core.exceptions import ModelResolutionError
from modeldoc.core.logging import get_logger
from modeldoc.core.universe.tags import model_key
from modeldoc.core.universe.types import (
    ArrayType,
    DeclaredType,
    PrimitiveType,
    TypeRef,
    TypeVariable,
    UnknownType,
    WildcardType,
    describe,
)
from modeldoc.core.universe.universe import TypeUniverse
from modeldoc.core.universe.vocabulary import ANY, NUMBER, PRIMITIVE_WORDS

logger = get_logger(__name__)


# ============================================================================
# Shapes
# ============================================================================


@dataclass(frozen=True, slots=True)
class ScalarShape:
    """A type with a fixed description such as "string" or "any"."""

    word: str


@dataclass(frozen=True, slots=True)
class ListShape:
    """An array or a member of the collection family; None element means "any"."""

    element: TypeRef | None


@dataclass(frozen=True, slots=True)
class SetShape:
    element: TypeRef | None


@dataclass(frozen=True, slots=True)
class MapShape:
    key: TypeRef | None
    value: TypeRef | None


@dataclass(frozen=True, slots=True)
class ModelLinkShape:
    """A reference to another model, rendered as its key."""

    key: str


@dataclass(frozen=True, slots=True)
class BoundShape:
    """A type variable or wildcard, described by its bound; None means unbounded."""

    bound: TypeRef | None


@dataclass(frozen=True, slots=True)
class NamedShape:
    name: str


@dataclass(frozen=True, slots=True)
class UnrecognizedShape:
    description: str


TypeShape = (
    ScalarShape
    | ListShape
    | SetShape
    | MapShape
    | ModelLinkShape
    | BoundShape
    | NamedShape
    | UnrecognizedShape
)


# ============================================================================
# Classification
# ============================================================================


def _argument(type_ref: DeclaredType, index: int, arity: int) -> TypeRef | None:
    if len(type_ref.arguments) != arity:
        return None
    return type_ref.arguments[index]


def _container_shape(type_ref: DeclaredType, universe: TypeUniverse) -> TypeShape | None:
    vocabulary = universe.vocabulary
    families = (
        (vocabulary.set_erasure, lambda t: SetShape(_argument(t, 0, 1))),
        (vocabulary.collection_erasure, lambda t: ListShape(_argument(t, 0, 1))),
        (vocabulary.map_erasure, lambda t: MapShape(_argument(t, 0, 2), _argument(t, 1, 2))),
    )
    for erasure, build in families:
        if universe.has_erasure(type_ref, erasure):
            return build(type_ref)
        # Subtypes take the arguments of the matching edge of their supertype closure
        supertype = universe.find_supertype(type_ref, erasure)
        if supertype is not None:
            return build(supertype)
    return None


def classify(type_ref: TypeRef, universe: TypeUniverse) -> TypeShape:
    """Classify ``type_ref`` into a :data:`TypeShape`; the first matching rule wins.

    Parameters
    ----------
    type_ref : TypeRef
        The type to classify
    universe : TypeUniverse
        Universe supplying declarations, supertypes and the vocabulary

    Returns
    -------
    TypeShape
        The shape variant of ``type_ref``
    """
    if isinstance(type_ref, PrimitiveType):
        return ScalarShape(PRIMITIVE_WORDS[type_ref.primitive])

    if isinstance(type_ref, ArrayType):
        return ListShape(type_ref.component)

    if isinstance(type_ref, DeclaredType):
        vocabulary = universe.vocabulary
        name = universe.canonical(type_ref.name)

        word = vocabulary.scalar_word(name)
        if word is not None:
            return ScalarShape(word)

        declaration = universe.declaration(name)
        key = model_key(declaration) if declaration is not None else None
        if key is not None:
            return ModelLinkShape(key)

        container = _container_shape(type_ref, universe)
        if container is not None:
            return container

        if name == vocabulary.number_type:
            return ScalarShape(NUMBER)
        if name == vocabulary.top_type:
            return ScalarShape(ANY)

        return NamedShape(name.rsplit(".", 1)[-1].lower())

    if isinstance(type_ref, TypeVariable):
        return BoundShape(type_ref.upper_bound)

    if isinstance(type_ref, WildcardType):
        return BoundShape(type_ref.extends_bound)

    if isinstance(type_ref, UnknownType):
        return UnrecognizedShape(type_ref.description)

    return UnrecognizedShape(repr(type_ref))


# ============================================================================
# Resolver
# ============================================================================


class TypeNameResolver:
    """Render type references as descriptive names.

    Parameters
    ----------
    universe : TypeUniverse
        Universe the types belong to
    diagnostics : DiagnosticLog | None
        Sink for ``UnrecognizedType`` reports; a private log when None
    """

    def __init__(self, universe: TypeUniverse, diagnostics: DiagnosticLog | None = None) -> None:
        self.universe = universe
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()

    def simplify(self, type_ref: TypeRef, link: str | None = None, subject: str = "") -> str:
        """Describe ``type_ref``, or return ``link`` when the caller already resolved one.

        Parameters
        ----------
        type_ref : TypeRef
            Type to describe
        link : str | None
            Model key the value is linked to through a child mapping
        subject : str
            Name reported with diagnostics (usually the owning declaration)

        Returns
        -------
        str
            The description, or "" if some part of the type is unrecognized
        """
        if link is not None:
            return link
        try:
            return self._render(type_ref, frozenset())
        except ModelResolutionError as e:
            self.diagnostics.report(e.kind, subject or e.subject, e.reason)
            return ""

    def _render(self, type_ref: TypeRef | None, active: frozenset[str]) -> str:
        if type_ref is None:
            return ANY

        # The same reference inside itself, as in a container of its own type
        if isinstance(type_ref, DeclaredType):
            key = describe(type_ref)
            if key in active:
                return self.universe.canonical(type_ref.name).rsplit(".", 1)[-1].lower()
            active = active | {key}

        shape = classify(type_ref, self.universe)
        match shape:
            case ScalarShape(word):
                return word
            case ModelLinkShape(key):
                return key
            case NamedShape(name):
                return name
            case ListShape(element):
                return f"list of {self._render(element, active)}"
            case SetShape(element):
                return f"set of {self._render(element, active)}"
            case MapShape(key, value):
                return f"map of {self._render(key, active)} -> {self._render(value, active)}"
            case BoundShape(bound):
                return self._render(bound, active)
            case UnrecognizedShape(description):
                logger.debug(f"Unrecognized type {describe(type_ref)}")
                raise ModelResolutionError(
                    DiagnosticKind.UNRECOGNIZED_TYPE,
                    describe(type_ref),
                    f"cannot describe type construct {description}",
                )
        raise AssertionError(f"Unhandled type shape {shape!r}")
