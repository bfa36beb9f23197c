from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path resolution for persistent application data and the local
folder implementations of the collaborator interfaces: a record provider
that snapshots note files and a rename applier that moves them. Storage
paths exchanged with the engine are relative to the notes folder and use
'/' separators on every platform.
"""

import logging
import os
from typing import Iterator, List, Optional, Sequence

from zettelforest.domain.constants import DEFAULT_NOTE_EXTENSIONS
from zettelforest.domain.errors import RenameApplyError
from zettelforest.domain.forest_models import FileRecord
from zettelforest.domain.interfaces import RecordProvider, RenameApplier
from zettelforest.domain.rename_models import RenameStep

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "ZettelForest"
UNIX_APP_DIR_NAME = ".zettelforest"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/ZettelForest
    - Linux/Mac: ~/.zettelforest

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion and user home shortcuts (~/).
    Reverts to fallback if the input is empty.
    """
    p = (path or "").strip() or fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def to_storage_path(root: str, full_path: str) -> str:
    """Convert an absolute path under `root` into a '/' separated relative path."""
    return os.path.relpath(full_path, root).replace(os.sep, "/")


def to_filesystem_path(root: str, storage_path: str) -> str:
    """Inverse of to_storage_path."""
    return os.path.join(root, *storage_path.split("/"))

# -----------------------------------------------------------------------------
# COLLABORATOR IMPLEMENTATIONS
# -----------------------------------------------------------------------------

class FolderRecordProvider(RecordProvider):
    """
    Snapshots note files under a local folder.

    Each note becomes a record whose identifier candidate and basename are
    the file name without its extension. Hidden directories are skipped.
    """

    def __init__(
            self,
            folder: str,
            extensions: Optional[Sequence[str]] = None,
            recursive: bool = True,
    ) -> None:
        self.folder = os.path.abspath(folder)
        self.extensions = [e.lower() for e in (extensions or DEFAULT_NOTE_EXTENSIONS)]
        self.recursive = recursive

    def snapshot(self) -> List[FileRecord]:
        records: List[FileRecord] = []
        for full_path in self._walk_files():
            stem, ext = os.path.splitext(os.path.basename(full_path))
            if ext.lower() not in self.extensions:
                continue
            records.append(FileRecord(
                id_string=stem,
                path=to_storage_path(self.folder, full_path),
                basename=stem,
            ))

        logger.debug(f"Snapshot of '{self.folder}': {len(records)} note file(s)")
        return records

    def existing_paths(self) -> List[str]:
        return [to_storage_path(self.folder, p) for p in self._walk_files()]

    def _walk_files(self) -> Iterator[str]:
        if not os.path.isdir(self.folder):
            logger.warning(f"Notes folder does not exist: {self.folder}")
            return

        for root, dirs, files in os.walk(self.folder):
            # In-place pruning keeps os.walk out of hidden and skipped directories
            dirs[:] = sorted(d for d in dirs if not d.startswith(".")) if self.recursive else []
            for file_name in sorted(files):
                yield os.path.join(root, file_name)


class FileSystemRenameApplier(RenameApplier):
    """
    Moves note files inside a local folder, refusing to overwrite.
    """

    def __init__(self, folder: str) -> None:
        self.folder = os.path.abspath(folder)

    def apply(self, step: RenameStep) -> None:
        source = to_filesystem_path(self.folder, step.source)
        target = to_filesystem_path(self.folder, step.target)

        if not os.path.exists(source):
            raise RenameApplyError(step, "source does not exist")
        if os.path.exists(target):
            raise RenameApplyError(step, "target already exists")

        try:
            os.makedirs(os.path.dirname(target), exist_ok=True)
            os.rename(source, target)
        except OSError as e:
            raise RenameApplyError(step, str(e)) from e

        logger.debug(f"Renamed '{step.source}' -> '{step.target}'")
