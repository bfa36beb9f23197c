from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for records and configuration dictionaries.
"""

import os
import sys
from typing import Any, Callable, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from zettelforest.domain.forest_models import FileRecord  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def make_records() -> Callable[..., List[FileRecord]]:
    """
    Return a factory building one note record per identifier string.

    Each record lives at 'notes/<id>.md' with the bare id as basename,
    mirroring what the folder provider produces.
    """
    def _factory(*ids: str, folder: str = "notes") -> List[FileRecord]:
        return [
            FileRecord(id_string=i, path=f"{folder}/{i}.md", basename=i)
            for i in ids
        ]
    return _factory


@pytest.fixture
def mock_config_dict(tmp_path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        "notes_folder": str(tmp_path / "notes"),
        "extensions": [".md"],
        "recursive": True,
        "duplicate_policy": "last",
        "temp_suffix": "zf-tmp",
        "dry_run": False,
        "log_level": "INFO",
        "log_file": "",
    }
