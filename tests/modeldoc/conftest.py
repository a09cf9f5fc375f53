"""Shared fixtures for modeldoc tests.

- jvm_universe: a small JVM-style universe with containers and four models
- make_universe: builds a universe from declaration mappings (shorthand types allowed)
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
import yaml

from modeldoc.core.config.loader import clear_config_cache
from modeldoc.core.universe.loader import universe_from_data
from modeldoc.core.universe.universe import TypeUniverse

JAVA_BASE = """
- {name: java.lang.Object}
- {name: java.lang.Number}
- {name: java.lang.String}
- {name: java.lang.Boolean}
- name: java.lang.Integer
  supertypes: [java.lang.Number]
- name: java.lang.Long
  supertypes: [java.lang.Number]
- name: java.lang.Double
  supertypes: [java.lang.Number]
- name: java.util.Collection
  kind: interface
  type_parameters: [{name: E}]
- name: java.util.List
  kind: interface
  type_parameters: [{name: E}]
  supertypes:
    - name: java.util.Collection
      arguments: [{kind: typevar, name: E}]
- name: java.util.ArrayList
  type_parameters: [{name: E}]
  supertypes:
    - name: java.util.List
      arguments: [{kind: typevar, name: E}]
- name: java.util.Set
  kind: interface
  type_parameters: [{name: E}]
  supertypes:
    - name: java.util.Collection
      arguments: [{kind: typevar, name: E}]
- name: java.util.HashSet
  type_parameters: [{name: E}]
  supertypes:
    - name: java.util.Set
      arguments: [{kind: typevar, name: E}]
- name: java.util.Map
  kind: interface
  type_parameters: [{name: K}, {name: V}]
- name: java.util.HashMap
  type_parameters: [{name: K}, {name: V}]
  supertypes:
    - name: java.util.Map
      arguments: [{kind: typevar, name: K}, {kind: typevar, name: V}]
- name: demo.Factory
  kind: interface
  type_parameters: [{name: D}, {name: M}]
"""

DEMO_MODELS = """
vocabulary: jvm
scopes:
  - name: demo
    tags: [{name: group, values: {value: Demo}}]
declarations:
  - name: demo.TagSet
    scope: demo
    supertypes: [java.util.HashSet]
  - name: demo.Sword
    scope: demo
    tags:
      - {name: model, values: {value: "combat:weapon/sword"}}
      - {name: description, values: {value: A melee weapon.}}
      - {name: group, values: {value: Combat}}
    constructors:
      - tags: [{name: factory}]
        parameters:
          - {name: data, type: demo.Sword.Data}
          - name: enchantment
            type: demo.Enchantment
            tags: [{name: child, values: {value: __default__}}]
    nested: [demo.Sword.Data]
  - name: demo.Sword.Data
    scope: demo
    kind: record
    tags: [{name: data}]
    components:
      - name: name
        type: java.lang.String
        tags: [{name: description, values: {value: Display name}}]
      - name: count
        type: int
        tags: [{name: description, values: {value: How many}}]
      - name: tags
        type: java.util.List<java.lang.String>
        tags: [{name: description, values: {value: Free-form tags}}]
      - name: bonuses
        type: java.util.Map<java.lang.String, java.lang.Integer>
        tags: [{name: description, values: {value: Bonus per stat}}]
      - name: labels
        type: demo.TagSet
        tags: [{name: description, values: {value: Labels}}]
      - name: effect
        type: java.lang.String
        tags:
          - {name: child_path, values: {value: "magic:enchantment"}}
          - {name: description, values: {value: Applied enchantment}}
  - name: demo.Enchantment
    scope: demo
    tags:
      - {name: model, values: {value: "magic:enchantment"}}
      - {name: description, values: {value: Magic applied to a weapon.}}
    methods:
      - name: factory
        static: true
        return_type: demo.Factory<demo.Enchantment.Data, demo.Enchantment>
        tags: [{name: factory}]
    nested: [demo.Enchantment.Data]
  - name: demo.Enchantment.Data
    scope: demo
    kind: record
    tags: [{name: data}]
    components:
      - name: power
        type: double
        tags:
          - {name: name, values: {value: strength}}
          - {name: description, values: {value: Power of the effect}}
  - name: demo.Broken
    scope: demo
    tags:
      - {name: model, values: {value: "broken:twice"}}
      - {name: description, values: {value: Two factories.}}
    constructors:
      - tags: [{name: factory}]
      - tags: [{name: factory}]
  - name: demo.Lamp
    scope: demo
    tags:
      - {name: model, values: {value: "light:lamp"}}
      - {name: description, values: {value: Takes no data.}}
    constructors:
      - tags: [{name: factory}]
"""


def _java_base() -> list[dict[str, Any]]:
    return yaml.safe_load(JAVA_BASE)


@pytest.fixture(autouse=True)
def _reset_config_cache():
    """Configuration is cached per path; start every test from a clean cache."""
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def demo_data() -> dict[str, Any]:
    """Raw description of the demo universe (JVM vocabulary)."""
    data = yaml.safe_load(DEMO_MODELS)
    data["declarations"] = _java_base() + data["declarations"]
    return data


@pytest.fixture
def jvm_universe(demo_data: dict[str, Any]) -> TypeUniverse:
    """The demo universe."""
    return universe_from_data(demo_data)


@pytest.fixture
def make_universe() -> Callable[..., TypeUniverse]:
    """Build a JVM-vocabulary universe from extra declarations on top of java.lang/java.util."""

    def _make(
        declarations: list[dict[str, Any]],
        scopes: list[dict[str, Any]] | None = None,
        aliases: dict[str, str] | None = None,
    ) -> TypeUniverse:
        return universe_from_data({
            "vocabulary": "jvm",
            "declarations": _java_base() + declarations,
            "scopes": scopes or [],
            "aliases": aliases or {},
        })

    return _make

