# tests/test_imports_smoke.py
# -----------------------------------------------------------------------------
# Smoke tests for imports and the public facade contract.
#
# Goals:
# - Ensure the package and every sub-module are importable.
# - Validate the facade exposes the expected public API.
# -----------------------------------------------------------------------------

from __future__ import annotations

import importlib

import pytest

import zettelforest


@pytest.mark.parametrize("module", [
    "zettelforest.domain.identifier",
    "zettelforest.domain.lettering",
    "zettelforest.domain.config",
    "zettelforest.core.forest.builder",
    "zettelforest.core.forest.compaction",
    "zettelforest.core.services.workflow",
    "zettelforest.infra.fs",
    "zettelforest.infra.logging",
    "zettelforest.validate_config",
])
def test_module_importable(module):
    assert importlib.import_module(module) is not None


def test_public_api_contract():
    required = [
        "Identifier",
        "compare_identifiers",
        "is_valid_identifier",
        "build_forest",
        "compact_forest",
        "plan_renames",
        "compact_and_apply",
        "compact_folder",
        "render_forest",
    ]
    for name in required:
        assert hasattr(zettelforest, name), f"zettelforest missing: {name}"
    assert set(required) <= set(zettelforest.__all__)
