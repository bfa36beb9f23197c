from __future__ import annotations

"""
Forest Domain Data Models.

Defines the record shape accepted at the collaborator boundary, the
immutable node/forest structure reconstructed from records, and the result
object returned by compaction.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from zettelforest.domain.errors import RecordError
from zettelforest.domain.identifier import Identifier

# Accepted spellings for the identifier field of an incoming mapping
_ID_KEYS: Tuple[str, ...] = ("idString", "id_string")

# -----------------------------------------------------------------------------
# BOUNDARY MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileReference:
    """
    Opaque handle on the note file backing a node.

    Attributes:
        path: Storage path of the file (collaborator-defined, '/' separated).
        basename: File name as used for identifier prefix rewriting.
    """
    path: str
    basename: str


@dataclass(frozen=True)
class FileRecord:
    """
    Snapshot entry supplied by a record provider.

    Attributes:
        id_string: Candidate identifier extracted from the file name.
        path: Storage path of the file.
        basename: File name used for rename rewriting.
    """
    id_string: str
    path: str
    basename: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "FileRecord":
        """
        Build a record from a loosely shaped mapping, rejecting bad shapes.

        Args:
            data: Mapping with 'idString' (or 'id_string'), 'path' and 'basename'.

        Raises:
            RecordError: If the mapping misses a field or holds a non-string.
        """
        if not isinstance(data, Mapping):
            raise RecordError(f"Record must be a mapping, received {type(data).__name__}.")

        id_key = next((k for k in _ID_KEYS if k in data), None)
        if id_key is None:
            raise RecordError(f"Record is missing 'idString': {dict(data)!r}")

        values = {}
        for name, key in (("id_string", id_key), ("path", "path"), ("basename", "basename")):
            if key not in data:
                raise RecordError(f"Record is missing '{key}': {dict(data)!r}")
            value = data[key]
            if not isinstance(value, str):
                raise RecordError(
                    f"Record field '{key}' must be str, received {type(value).__name__}."
                )
            values[name] = value

        return cls(**values)

    @property
    def file(self) -> FileReference:
        return FileReference(path=self.path, basename=self.basename)

# -----------------------------------------------------------------------------
# TREE MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Node:
    """
    Immutable forest node.

    Attributes:
        identifier: Position of the node in the tree.
        children: Child nodes, sorted by identifier order.
        file: Backing file; None only for implied positions.
    """
    identifier: Identifier
    children: Tuple["Node", ...] = ()
    file: Optional[FileReference] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", tuple(self.children))

    @property
    def id_string(self) -> str:
        return str(self.identifier)


Forest = Tuple[Node, ...]


@dataclass(frozen=True)
class CompactionResult:
    """
    Outcome of a compaction pass.

    Attributes:
        new_forest: Relabelled forest, sorted at every level.
        id_renames: Old identifier string -> new identifier string.
        path_renames: Old file path -> new file path.
    """
    new_forest: Forest
    id_renames: Dict[str, str] = field(default_factory=dict)
    path_renames: Dict[str, str] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return bool(self.id_renames)
