from __future__ import annotations

"""
Domain Constants.

Centralized policy names, defaults and versioning shared by the builder,
the rename workflow and the configuration layer.
"""

from typing import List, Tuple

CURRENT_CONFIG_VERSION = "1.0.0"

# Duplicate identifier resolution in the forest builder
DUPLICATE_POLICY_LAST = "last"
DUPLICATE_POLICY_FIRST = "first"
DUPLICATE_POLICIES: Tuple[str, ...] = (DUPLICATE_POLICY_LAST, DUPLICATE_POLICY_FIRST)

# Separator inserted when a renamed basename did not start with its identifier
BASENAME_SEPARATOR = "-"

# Suffix appended to temporary paths used to break rename cycles
DEFAULT_TEMP_SUFFIX = "zf-tmp"

DEFAULT_NOTE_EXTENSIONS: List[str] = [".md"]

# Rename conflict reasons
CONFLICT_TARGET_EXISTS = "target-exists"
CONFLICT_DUPLICATE_TARGET = "duplicate-target"
CONFLICT_MISSING_SOURCE = "missing-source"
