"""The type universe and its type-system queries.

A :class:`TypeUniverse` is built once per run by a frontend and then only
read. Resolution functions receive it by reference; it keeps no caches that
change after construction.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from modeldoc.core.exceptions import TypeUniverseError
from modeldoc.core.universe.declarations import Declaration, Scope
from modeldoc.core.universe.types import (
    ArrayType,
    DeclaredType,
    PrimitiveType,
    TypeRef,
    TypeVariable,
    WildcardType,
)
from modeldoc.core.universe.vocabulary import PYTHON_VOCABULARY, TypeVocabulary


def substitute(type_ref: TypeRef, bindings: Mapping[str, TypeRef]) -> TypeRef:
    """Replace type variables named in ``bindings`` throughout ``type_ref``.

    Examples
    --------
    >>> from modeldoc.core.universe.types import declared, type_var
    >>> t = substitute(declared("builtins.list", type_var("T")), {"T": declared("builtins.str")})
    >>> t.arguments[0].name
    'builtins.str'
    """
    if not bindings:
        return type_ref
    if isinstance(type_ref, TypeVariable):
        return bindings.get(type_ref.name, type_ref)
    if isinstance(type_ref, DeclaredType):
        if not type_ref.arguments:
            return type_ref
        return DeclaredType(
            name=type_ref.name,
            arguments=tuple(substitute(arg, bindings) for arg in type_ref.arguments),
        )
    if isinstance(type_ref, ArrayType):
        return ArrayType(component=substitute(type_ref.component, bindings))
    if isinstance(type_ref, WildcardType) and type_ref.extends_bound is not None:
        return WildcardType(extends_bound=substitute(type_ref.extends_bound, bindings))
    return type_ref


class TypeUniverse:
    """Read-only collection of declarations plus type-system queries.

    Parameters
    ----------
    declarations : Iterable[Declaration]
        All declarations; names must be unique
    scopes : Iterable[Scope]
        Enclosing scopes that carry tags (e.g., a module-level group)
    aliases : Mapping[str, str] | None
        Alias name -> target name; aliases resolve transitively
    vocabulary : TypeVocabulary
        Built-in type facts for the source language of the declarations

    Raises
    ------
    TypeUniverseError
        On duplicate declaration names or cyclic aliases
    """

    def __init__(
        self,
        declarations: Iterable[Declaration],
        scopes: Iterable[Scope] = (),
        aliases: Mapping[str, str] | None = None,
        vocabulary: TypeVocabulary = PYTHON_VOCABULARY,
    ) -> None:
        self.vocabulary = vocabulary

        by_name: dict[str, Declaration] = {}
        for declaration in declarations:
            if declaration.name in by_name:
                raise TypeUniverseError(f"Duplicate declaration '{declaration.name}'")
            by_name[declaration.name] = declaration

        self._declarations = MappingProxyType(by_name)
        self._scopes = MappingProxyType({scope.name: scope for scope in scopes})
        self._aliases = MappingProxyType(dict(aliases or {}))

        for alias in self._aliases:
            self.canonical(alias)

    # ========================================================================
    # Lookups
    # ========================================================================

    @property
    def declarations(self) -> tuple[Declaration, ...]:
        return tuple(self._declarations.values())

    @property
    def scopes(self) -> tuple[Scope, ...]:
        return tuple(self._scopes.values())

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def canonical(self, name: str) -> str:
        """Follow aliases from ``name`` to the declaration name they denote."""
        seen = {name}
        while name in self._aliases:
            name = self._aliases[name]
            if name in seen:
                raise TypeUniverseError(f"Cyclic type alias involving '{name}'")
            seen.add(name)
        return name

    def declaration(self, name: str) -> Declaration | None:
        return self._declarations.get(self.canonical(name))

    def declaration_of(self, type_ref: TypeRef) -> Declaration | None:
        """Declaration behind a declared type reference, if the universe has it."""
        if isinstance(type_ref, DeclaredType):
            return self.declaration(type_ref.name)
        return None

    def scope_of(self, declaration: Declaration) -> Scope | None:
        return self._scopes.get(declaration.scope)

    # ========================================================================
    # Type-system queries
    # ========================================================================

    def erasure(self, type_ref: TypeRef) -> TypeRef:
        """Strip type arguments, resolving aliases of declared types."""
        if isinstance(type_ref, DeclaredType):
            return DeclaredType(name=self.canonical(type_ref.name))
        if isinstance(type_ref, ArrayType):
            return ArrayType(component=self.erasure(type_ref.component))
        return type_ref

    def is_same_type(self, first: TypeRef, second: TypeRef) -> bool:
        """Type identity, alias-aware for declared types."""
        if isinstance(first, DeclaredType) and isinstance(second, DeclaredType):
            if self.canonical(first.name) != self.canonical(second.name):
                return False
            if len(first.arguments) != len(second.arguments):
                return False
            return all(
                self.is_same_type(a, b)
                for a, b in zip(first.arguments, second.arguments, strict=True)
            )
        if isinstance(first, ArrayType) and isinstance(second, ArrayType):
            return self.is_same_type(first.component, second.component)
        if isinstance(first, PrimitiveType) and isinstance(second, PrimitiveType):
            return first.primitive == second.primitive
        return first == second

    def has_erasure(self, type_ref: TypeRef, erasure: DeclaredType) -> bool:
        """Whether the erasure of ``type_ref`` is exactly ``erasure``."""
        return isinstance(type_ref, DeclaredType) and self.canonical(
            type_ref.name
        ) == self.canonical(erasure.name)

    def direct_supertypes(self, type_ref: DeclaredType) -> tuple[DeclaredType, ...]:
        """Direct supertypes of ``type_ref`` with its type arguments substituted.

        A raw reference to a generic declaration yields erased supertypes.
        """
        declaration = self.declaration(type_ref.name)
        if declaration is None:
            return ()

        parameters = [parameter.name for parameter in declaration.type_parameters]
        if parameters and len(type_ref.arguments) == len(parameters):
            bindings = dict(zip(parameters, type_ref.arguments, strict=True))
            return tuple(substitute(s, bindings) for s in declaration.supertypes)  # type: ignore[misc]
        if parameters:
            return tuple(s.erasure() for s in declaration.supertypes)
        return declaration.supertypes

    def supertype_closure(self, type_ref: DeclaredType) -> Iterator[DeclaredType]:
        """All supertypes of ``type_ref``, breadth-first, each erasure once."""
        seen = {self.canonical(type_ref.name)}
        queue = deque(self.direct_supertypes(type_ref))
        while queue:
            supertype = queue.popleft()
            name = self.canonical(supertype.name)
            if name in seen:
                continue
            seen.add(name)
            yield supertype
            queue.extend(self.direct_supertypes(supertype))

    def find_supertype(self, type_ref: DeclaredType, erasure: DeclaredType) -> DeclaredType | None:
        """First edge of the supertype closure whose erasure is ``erasure``."""
        for supertype in self.supertype_closure(type_ref):
            if self.has_erasure(supertype, erasure):
                return supertype
        return None

    def is_assignable(self, type_ref: TypeRef, erasure: DeclaredType) -> bool:
        """Whether ``type_ref`` is ``erasure`` or one of its subtypes."""
        if not isinstance(type_ref, DeclaredType):
            return False
        if self.has_erasure(type_ref, erasure):
            return True
        return self.find_supertype(type_ref, erasure) is not None

    def __len__(self) -> int:
        return len(self._declarations)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.canonical(name) in self._declarations
