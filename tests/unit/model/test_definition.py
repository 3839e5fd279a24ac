"""Tests for task definitions, task sets and customization resolution."""

from __future__ import annotations

import json

import pytest

from taskdeck.model.definition import (
    TaskDefinition,
    TaskSet,
    resolve_customizations,
    unresolved_customizations,
)
from tests.factories import (
    make_composite_task,
    make_configuring_task,
    make_contributed_task,
    make_custom_task,
    npm_identifier,
)

NPM = TaskDefinition(
    task_type="npm",
    required=("script",),
    properties={"script": {"type": "string"}, "path": {"type": "string"}},
)


def test_create_identifier_keys_required_properties_only() -> None:
    identifier = NPM.create_identifier({"type": "npm", "script": "build", "path": "web"})

    assert identifier is not None
    assert identifier.type == "npm"
    assert identifier.properties == {"script": "build"}
    assert json.loads(identifier.key) == {"type": "npm", "script": "build"}
    assert identifier.key == npm_identifier("build").key


def test_create_identifier_is_order_independent() -> None:
    two = TaskDefinition(task_type="gulp", required=("task", "file"))
    first = two.create_identifier({"type": "gulp", "task": "watch", "file": "gulpfile.js"})
    second = two.create_identifier({"file": "gulpfile.js", "task": "watch", "type": "gulp"})

    assert first is not None and second is not None
    assert first.key == second.key


def test_create_identifier_rejects_mismatches() -> None:
    assert NPM.create_identifier({"type": "gulp", "script": "build"}) is None
    assert NPM.create_identifier({"type": "npm"}) is None

    with pytest.raises(ValueError, match="missing required properties"):
        NPM.create_identifier({"type": "npm"}, strict=True)
    with pytest.raises(ValueError, match="does not match"):
        NPM.create_identifier({"type": "gulp"}, strict=True)


def test_task_set_by_key() -> None:
    build = make_custom_task("Build", identifier="build")
    npm = make_contributed_task("npm: build")
    all_ = make_composite_task("All", identifier="all")

    index = TaskSet(tasks=[build, npm, all_]).by_key()

    assert index == {"build": build, npm.defines.key: npm, "all": all_}


def test_resolve_customizations_pairs_by_key() -> None:
    build = make_contributed_task("npm: build", script="build")
    lint = make_contributed_task("npm: lint", script="lint")
    wants_build = make_configuring_task("npm: build", script="build")
    wants_test = make_configuring_task("npm: test", script="test")

    resolved, unresolved = resolve_customizations([wants_build, wants_test], [build, lint])

    assert [(pair.configuring, pair.contributed) for pair in resolved] == [(wants_build, build)]
    assert unresolved == [wants_test]


def test_unresolved_customizations() -> None:
    npm = make_contributed_task("npm: build", script="build")
    good = make_custom_task("Build", customizes=npm_identifier("build"))
    dangling = make_custom_task("Test", customizes=npm_identifier("test"))
    plain = make_custom_task("Clean")

    assert unresolved_customizations([npm, good, dangling, plain]) == [dangling]
