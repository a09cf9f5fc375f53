"""Build a type universe from imported Python modules.

Every class defined in the scanned modules becomes a declaration, plus every
class those declarations reference through supertypes, tagged members and
record fields. Builtin containers and ``collections.abc`` classes carry no
generic base information at runtime, so their type parameters and generic
supertypes come from explicit tables.

Examples
--------
>>> from modeldoc.core.universe.reflection import build_universe_from_modules
>>> universe = build_universe_from_modules(["myproject.models"])  # doctest: +SKIP
"""

from __future__ import annotations

import collections
import collections.abc as abc
import dataclasses
import enum
import importlib
import inspect
import pkgutil
import sys
import types
import typing
from collections import deque
from collections.abc import Callable, Iterable
from typing import Annotated, Any, ForwardRef, Literal, Union, get_args, get_origin

from pydantic import BaseModel

from modeldoc.annotations import MODULE_GROUP_ATTR, markers_of, tags_from
from modeldoc.core.exceptions import TypeUniverseError
from modeldoc.core.logging import get_logger
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
from modeldoc.core.universe.tags import TagName
from modeldoc.core.universe.types import (
    DeclaredType,
    TypeRef,
    TypeVariable,
    UnknownType,
)
from modeldoc.core.universe.universe import TypeUniverse
from modeldoc.core.universe.vocabulary import PYTHON_VOCABULARY

logger = get_logger(__name__)

OBJECT_NAME = "builtins.object"

# Bases that carry no documentation value
_IGNORED_BASES: frozenset[Any] = frozenset({object, typing.Generic, typing.Protocol})

# Type parameters and generic supertypes of builtin containers. Base arguments
# are either a parameter name or a concrete class.
_BUILTIN_GENERICS: dict[type, tuple[tuple[str, ...], tuple[tuple[type, tuple[Any, ...]], ...]]] = {
    list: (("T",), ((abc.MutableSequence, ("T",)),)),
    tuple: (("T",), ((abc.Sequence, ("T",)),)),
    set: (("T",), ((abc.MutableSet, ("T",)),)),
    frozenset: (("T",), ((abc.Set, ("T",)),)),
    dict: (("K", "V"), ((abc.MutableMapping, ("K", "V")),)),
    collections.deque: (("T",), ((abc.MutableSequence, ("T",)),)),
    collections.OrderedDict: (("K", "V"), ((dict, ("K", "V")),)),
    collections.defaultdict: (("K", "V"), ((dict, ("K", "V")),)),
    collections.ChainMap: (("K", "V"), ((abc.MutableMapping, ("K", "V")),)),
    collections.Counter: (("T",), ((dict, ("T", int)),)),
}

# Type parameters of collections.abc classes; unlisted abstract classes take one
_ABC_PARAMETERS: dict[type, tuple[str, ...]] = {
    abc.Hashable: (),
    abc.Sized: (),
    abc.Callable: (),
    abc.Mapping: ("K", "V"),
    abc.MutableMapping: ("K", "V"),
}


def qualified_name(cls: type) -> str:
    """Declaration name of ``cls``, e.g. ``"builtins.list"``."""
    return f"{cls.__module__}.{cls.__qualname__}"


def _is_abc_class(cls: type) -> bool:
    return cls.__module__ == "collections.abc"


def _is_record(cls: type) -> bool:
    if dataclasses.is_dataclass(cls):
        return True
    if issubclass(cls, tuple) and hasattr(cls, "_fields"):
        return True
    return issubclass(cls, BaseModel) and cls is not BaseModel


def _type_hints(obj: Any) -> dict[str, Any]:
    """Resolved type hints with ``Annotated`` metadata, or raw annotations on failure."""
    try:
        return typing.get_type_hints(obj, include_extras=True)
    except Exception as e:  # unresolvable forward references, missing names
        logger.debug(f"Could not resolve type hints for {obj!r}: {e}")
        return dict(getattr(obj, "__annotations__", {}) or {})


class ReflectionUniverseBuilder:
    """Collect declarations from Python classes.

    Parameters
    ----------
    docstrings_as_descriptions : bool, default=False
        Use the first paragraph of a model class docstring as its
        description when no explicit description marker is present
    """

    def __init__(self, *, docstrings_as_descriptions: bool = False) -> None:
        self.docstrings_as_descriptions = docstrings_as_descriptions
        self._declarations: dict[str, Declaration] = {}
        self._scopes: dict[str, Scope] = {}
        self._queue: deque[type] = deque()
        self._seen: set[type] = set()

    # ========================================================================
    # Inputs
    # ========================================================================

    def add_module(self, module: types.ModuleType) -> None:
        """Add every class defined (not merely imported) in ``module``."""
        for obj in list(vars(module).values()):
            if isinstance(obj, type) and obj.__module__ == module.__name__:
                self.add_class(obj)

    def add_class(self, cls: type) -> None:
        if cls in self._seen or cls in _IGNORED_BASES:
            return
        self._seen.add(cls)
        self._queue.append(cls)

    def build(self) -> TypeUniverse:
        """Declare every queued class and everything it references."""
        while self._queue:
            cls = self._queue.popleft()
            declaration = self._declare(cls)
            self._declarations[declaration.name] = declaration
        return TypeUniverse(
            self._declarations.values(),
            scopes=self._scopes.values(),
            vocabulary=PYTHON_VOCABULARY,
        )

    # ========================================================================
    # Declarations
    # ========================================================================

    def _declare(self, cls: type) -> Declaration:
        name = qualified_name(cls)
        self._declare_scope(cls.__module__)

        if cls in _BUILTIN_GENERICS:
            parameters, bases = _BUILTIN_GENERICS[cls]
            return Declaration(
                name=name,
                scope=cls.__module__,
                type_parameters=tuple(TypeVariable(name=p) for p in parameters),
                supertypes=tuple(self._builtin_base(base, args) for base, args in bases),
            )

        if _is_abc_class(cls):
            return self._declare_abc(cls, name)

        return Declaration(
            name=name,
            kind=self._kind_of(cls),
            scope=cls.__module__,
            tags=self._class_tags(cls),
            type_parameters=tuple(
                self._translate(p)  # type: ignore[misc]
                for p in getattr(cls, "__parameters__", ())
                if isinstance(p, typing.TypeVar)
            ),
            supertypes=self._supertypes(cls),
            constructors=self._constructors(cls),
            methods=self._methods(cls),
            components=self._components(cls) if _is_record(cls) else (),
            nested=self._nested(cls),
        )

    def _declare_abc(self, cls: type, name: str) -> Declaration:
        parameters = _ABC_PARAMETERS.get(cls, ("T",))
        supertypes = []
        for base in cls.__bases__:
            if base is object or not _is_abc_class(base):
                continue
            self.add_class(base)
            base_parameters = _ABC_PARAMETERS.get(base, ("T",))
            arguments = tuple(TypeVariable(name=p) for p in parameters[: len(base_parameters)])
            if len(arguments) != len(base_parameters):
                arguments = ()
            supertypes.append(DeclaredType(name=qualified_name(base), arguments=arguments))
        return Declaration(
            name=name,
            kind=DeclarationKind.INTERFACE,
            scope=cls.__module__,
            type_parameters=tuple(TypeVariable(name=p) for p in parameters),
            supertypes=tuple(supertypes),
        )

    def _builtin_base(self, base: type, arguments: tuple[Any, ...]) -> DeclaredType:
        self.add_class(base)
        translated: list[TypeRef] = []
        for argument in arguments:
            if isinstance(argument, str):
                translated.append(TypeVariable(name=argument))
            else:
                translated.append(self._translate(argument))
        return DeclaredType(name=qualified_name(base), arguments=tuple(translated))

    def _declare_scope(self, module_name: str) -> None:
        if module_name in self._scopes:
            return
        module = sys.modules.get(module_name)
        group = getattr(module, MODULE_GROUP_ATTR, None)
        tags: tuple[Tag, ...] = ()
        if isinstance(group, str):
            tags = (Tag(name=TagName.GROUP, values={"value": group}),)
        self._scopes[module_name] = Scope(name=module_name, tags=tags)

    def _kind_of(self, cls: type) -> DeclarationKind:
        if issubclass(cls, enum.Enum):
            return DeclarationKind.ENUM
        if _is_record(cls):
            return DeclarationKind.RECORD
        if getattr(cls, "_is_protocol", False) or inspect.isabstract(cls):
            return DeclarationKind.INTERFACE
        return DeclarationKind.CLASS

    def _class_tags(self, cls: type) -> tuple[Tag, ...]:
        tags = tags_from(markers_of(cls))
        if (
            self.docstrings_as_descriptions
            and not any(tag.name == TagName.DESCRIPTION for tag in tags)
            and any(tag.name == TagName.MODEL for tag in tags)
        ):
            docstring = inspect.cleandoc(vars(cls).get("__doc__") or "")
            if docstring:
                summary = docstring.split("\n\n", 1)[0].replace("\n", " ")
                tags += (Tag(name=TagName.DESCRIPTION, values={"value": summary}),)
        return tags

    def _supertypes(self, cls: type) -> tuple[DeclaredType, ...]:
        bases = vars(cls).get("__orig_bases__", cls.__bases__)
        supertypes = []
        for base in bases:
            origin = get_origin(base) or base
            if origin in _IGNORED_BASES:
                continue
            translated = self._translate(base)
            if isinstance(translated, DeclaredType):
                supertypes.append(translated)
        return tuple(supertypes)

    def _nested(self, cls: type) -> tuple[str, ...]:
        nested = []
        for attribute, value in vars(cls).items():
            if isinstance(value, type) and value.__qualname__ == f"{cls.__qualname__}.{attribute}":
                self.add_class(value)
                nested.append(qualified_name(value))
        return tuple(nested)

    # ========================================================================
    # Members
    # ========================================================================

    def _parameters(self, function: Callable[..., Any]) -> tuple[Parameter, ...]:
        try:
            signature = inspect.signature(function)
        except (TypeError, ValueError) as e:
            logger.warning(f"Could not get signature for {function!r}: {e}")
            return ()

        hints = _type_hints(function)
        parameters = []
        for index, (name, parameter) in enumerate(signature.parameters.items()):
            if index == 0 and name in ("self", "cls"):
                continue
            if parameter.kind in (
                inspect.Parameter.VAR_POSITIONAL,
                inspect.Parameter.VAR_KEYWORD,
            ):
                continue
            hint = hints.get(name, parameter.annotation)
            if hint is inspect.Parameter.empty:
                hint = Any
            parameters.append(
                Parameter(name=name, type=self._translate(hint), tags=self._metadata_tags(hint))
            )
        return tuple(parameters)

    def _constructors(self, cls: type) -> tuple[Constructor, ...]:
        init = vars(cls).get("__init__")
        if init is None or not markers_of(init):
            return ()
        return (Constructor(tags=tags_from(markers_of(init)), parameters=self._parameters(init)),)

    def _methods(self, cls: type) -> tuple[Method, ...]:
        methods = []
        for attribute, value in vars(cls).items():
            if attribute == "__init__":
                continue
            function = value.__func__ if isinstance(value, (staticmethod, classmethod)) else value
            if not inspect.isfunction(function) or not markers_of(function):
                continue
            return_hint = _type_hints(function).get("return", Any)
            methods.append(
                Method(
                    name=attribute,
                    static=isinstance(value, (staticmethod, classmethod)),
                    parameters=self._parameters(value.__get__(None, cls)),
                    return_type=self._translate(return_hint),
                    tags=tags_from(markers_of(function)),
                )
            )
        return tuple(methods)

    def _components(self, cls: type) -> tuple[RecordComponent, ...]:
        hints = _type_hints(cls)
        if dataclasses.is_dataclass(cls):
            names = [field.name for field in dataclasses.fields(cls)]
        elif issubclass(cls, BaseModel):
            names = list(cls.model_fields)
        else:
            names = list(cls._fields)  # type: ignore[attr-defined]

        components = []
        for name in names:
            hint = hints.get(name, Any)
            tags = self._metadata_tags(hint)
            if issubclass(cls, BaseModel):
                tags += self._pydantic_field_tags(cls, name, tags)
            components.append(RecordComponent(name=name, type=self._translate(hint), tags=tags))
        return tuple(components)

    def _pydantic_field_tags(
        self, cls: type[BaseModel], name: str, existing: tuple[Tag, ...]
    ) -> tuple[Tag, ...]:
        field = cls.model_fields[name]
        present = {tag.name for tag in existing}
        extra: list[Tag] = []
        # pydantic strips Annotated metadata into field.metadata
        extra.extend(tag for tag in tags_from(field.metadata) if tag.name not in present)
        present.update(tag.name for tag in extra)
        if field.description and TagName.DESCRIPTION not in present:
            extra.append(Tag(name=TagName.DESCRIPTION, values={"value": field.description}))
        if field.alias and TagName.NAME not in present:
            extra.append(Tag(name=TagName.NAME, values={"value": field.alias}))
        return tuple(extra)

    @staticmethod
    def _metadata_tags(hint: Any) -> tuple[Tag, ...]:
        if get_origin(hint) is Annotated:
            return tags_from(hint.__metadata__)
        return ()

    # ========================================================================
    # Annotations -> type references
    # ========================================================================

    def _translate(self, hint: Any) -> TypeRef:
        """Translate a Python annotation into a type reference."""
        if hint is Any or hint is object:
            return DeclaredType(name=OBJECT_NAME)
        if hint is None or hint is type(None):
            return UnknownType(description="None")
        if isinstance(hint, (str, ForwardRef)):
            return UnknownType(description=f"unresolved reference {hint!r}")
        if isinstance(hint, typing.TypeVar):
            bound = hint.__bound__
            return TypeVariable(
                name=hint.__name__,
                upper_bound=self._translate(bound) if bound is not None else None,
            )
        if hasattr(hint, "__supertype__"):  # typing.NewType
            return self._translate(hint.__supertype__)
        alias_type = getattr(typing, "TypeAliasType", None)
        if alias_type is not None and isinstance(hint, alias_type):
            return self._translate(hint.__value__)

        origin = get_origin(hint)
        arguments = get_args(hint)

        if origin is Annotated:
            return self._translate(arguments[0])
        if origin is Union or origin is types.UnionType:
            members = [argument for argument in arguments if argument is not type(None)]
            if len(members) == 1:
                return self._translate(members[0])
            return UnknownType(description=f"union {hint!r}")
        if origin is Literal:
            value_types = {type(argument) for argument in arguments}
            if len(value_types) == 1:
                return self._translate(value_types.pop())
            return UnknownType(description=f"mixed literal {hint!r}")

        if isinstance(origin, type):
            self.add_class(origin)
            name = qualified_name(origin)
            if origin is tuple:
                return DeclaredType(name=name, arguments=self._tuple_arguments(arguments))
            if origin is abc.Callable:
                return DeclaredType(name=name)
            return DeclaredType(
                name=name, arguments=tuple(self._translate(argument) for argument in arguments)
            )

        if isinstance(hint, type):
            self.add_class(hint)
            return DeclaredType(name=qualified_name(hint))

        return UnknownType(description=repr(hint))

    def _tuple_arguments(self, arguments: tuple[Any, ...]) -> tuple[TypeRef, ...]:
        members = [argument for argument in arguments if argument is not Ellipsis]
        if not members:
            return ()
        translated = [self._translate(member) for member in members]
        if all(t == translated[0] for t in translated):
            return (translated[0],)
        return (DeclaredType(name=OBJECT_NAME),)


# ============================================================================
# Module discovery
# ============================================================================


def iter_module_names(module_name: str, recursive: bool = True) -> list[str]:
    """Import ``module_name`` and list it plus, for packages, its submodules.

    Raises
    ------
    TypeUniverseError
        If the module or one of its submodules cannot be imported
    """
    try:
        module = importlib.import_module(module_name)
    except Exception as e:
        raise TypeUniverseError(f"Could not import module '{module_name}': {e}") from e

    names = [module_name]
    if recursive and hasattr(module, "__path__"):

        def _on_error(name: str) -> None:
            raise TypeUniverseError(f"Could not import package '{name}'")

        for _finder, name, _ispkg in pkgutil.walk_packages(
            module.__path__, prefix=f"{module_name}.", onerror=_on_error
        ):
            names.append(name)
    return names


def build_universe_from_modules(
    module_names: Iterable[str],
    *,
    recursive: bool = True,
    docstrings_as_descriptions: bool = False,
) -> TypeUniverse:
    """Import modules and build a universe from the classes they define.

    Parameters
    ----------
    module_names : Iterable[str]
        Dotted module or package names
    recursive : bool, default=True
        Also scan submodules of packages
    docstrings_as_descriptions : bool, default=False
        See :class:`ReflectionUniverseBuilder`

    Raises
    ------
    TypeUniverseError
        If a module cannot be imported
    """
    builder = ReflectionUniverseBuilder(docstrings_as_descriptions=docstrings_as_descriptions)
    for module_name in module_names:
        for name in iter_module_names(module_name, recursive=recursive):
            try:
                module = importlib.import_module(name)
            except Exception as e:
                raise TypeUniverseError(f"Could not import module '{name}': {e}") from e
            logger.debug("Scanning module {name}", name=name)
            builder.add_module(module)
    universe = builder.build()
    logger.info(
        "Built type universe with {count} declarations", count=len(universe.declarations)
    )
    return universe
