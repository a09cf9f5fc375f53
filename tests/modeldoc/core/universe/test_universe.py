"""Tests for modeldoc.core.universe.universe."""

import pytest

from modeldoc.core.exceptions import TypeUniverseError
from modeldoc.core.universe.declarations import Declaration
from modeldoc.core.universe.types import declared, primitive, type_var
from modeldoc.core.universe.universe import TypeUniverse, substitute


class TestSubstitute:
    """Tests for type-variable substitution."""

    def test_replaces_nested_variables(self) -> None:
        """Variables are replaced inside type arguments."""
        result = substitute(
            declared("java.util.Map", type_var("K"), declared("java.util.List", type_var("V"))),
            {"K": declared("java.lang.String"), "V": primitive("int")},
        )
        assert result == declared(
            "java.util.Map", declared("java.lang.String"), declared("java.util.List", primitive("int"))
        )

    def test_unbound_variables_are_kept(self) -> None:
        """Variables without a binding stay as they are."""
        assert substitute(type_var("T"), {"U": primitive("int")}) == type_var("T")


class TestConstruction:
    """Tests for TypeUniverse construction."""

    def test_duplicate_declarations_raise(self) -> None:
        """Declaration names must be unique."""
        with pytest.raises(TypeUniverseError, match="Duplicate"):
            TypeUniverse([Declaration(name="a.A"), Declaration(name="a.A")])

    def test_cyclic_aliases_raise(self) -> None:
        """Alias cycles are rejected when the universe is built."""
        with pytest.raises(TypeUniverseError, match="Cyclic"):
            TypeUniverse([Declaration(name="a.A")], aliases={"x": "y", "y": "x"})

    def test_len_and_contains(self) -> None:
        """The universe reports its size and membership, aliases included."""
        universe = TypeUniverse([Declaration(name="a.A")], aliases={"a.Alias": "a.A"})
        assert len(universe) == 1
        assert "a.A" in universe
        assert "a.Alias" in universe
        assert "a.B" not in universe


class TestQueries:
    """Tests for supertype and assignability queries."""

    def test_direct_supertypes_substitute_arguments(self, jvm_universe) -> None:
        """Type arguments of the subtype flow into its supertypes."""
        supertypes = jvm_universe.direct_supertypes(
            declared("java.util.ArrayList", declared("java.lang.String"))
        )
        assert supertypes == (declared("java.util.List", declared("java.lang.String")),)

    def test_raw_type_yields_erased_supertypes(self, jvm_universe) -> None:
        """A raw reference to a generic declaration has raw supertypes."""
        assert jvm_universe.direct_supertypes(declared("java.util.HashSet")) == (
            declared("java.util.Set"),
        )

    def test_find_supertype_walks_closure(self, jvm_universe) -> None:
        """The matching edge is found beyond the direct supertypes."""
        found = jvm_universe.find_supertype(
            declared("java.util.ArrayList", declared("java.lang.String")),
            declared("java.util.Collection"),
        )
        assert found == declared("java.util.Collection", declared("java.lang.String"))

    def test_find_supertype_returns_none(self, jvm_universe) -> None:
        """Unrelated types have no matching supertype."""
        assert (
            jvm_universe.find_supertype(declared("java.util.HashMap"), declared("java.util.Set"))
            is None
        )

    def test_is_assignable(self, jvm_universe) -> None:
        """Assignability covers the type itself and its subtypes."""
        set_type = declared("java.util.Set")
        assert jvm_universe.is_assignable(declared("java.util.Set"), set_type)
        assert jvm_universe.is_assignable(declared("demo.TagSet"), set_type)
        assert not jvm_universe.is_assignable(declared("java.util.ArrayList"), set_type)
        assert not jvm_universe.is_assignable(primitive("int"), set_type)

    def test_is_same_type_follows_aliases(self, make_universe) -> None:
        """Aliases denote the same type as their target."""
        universe = make_universe([], aliases={"demo.Text": "java.lang.String"})
        assert universe.is_same_type(declared("demo.Text"), declared("java.lang.String"))
        assert not universe.is_same_type(declared("demo.Text"), declared("java.lang.Integer"))

    def test_scope_of(self, jvm_universe) -> None:
        """Declarations find their enclosing scope."""
        scope = jvm_universe.scope_of(jvm_universe.declaration("demo.Sword"))
        assert scope is not None
        assert scope.tag("group").value == "Demo"
