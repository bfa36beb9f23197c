from __future__ import annotations

"""
Collaborator Interfaces.

Abstract contracts for the storage side of the system: a read-only provider
of record snapshots and an applier that performs rename steps. The engine
itself never touches storage.
"""

from abc import ABC, abstractmethod
from typing import List

from zettelforest.domain.forest_models import FileRecord
from zettelforest.domain.rename_models import RenameStep


class RecordProvider(ABC):
    """
    Supplies snapshots of identifier-bearing records.
    """

    @abstractmethod
    def snapshot(self) -> List[FileRecord]:
        """
        Capture the current records of the note store.

        Returns:
            List[FileRecord]: One record per note file, valid identifier or not.
        """
        pass

    @abstractmethod
    def existing_paths(self) -> List[str]:
        """
        List every path currently present in the store.

        Returns:
            List[str]: Storage paths, in the same format as FileRecord.path.
        """
        pass


class RenameApplier(ABC):
    """
    Performs rename steps on the note store.
    """

    @abstractmethod
    def apply(self, step: RenameStep) -> None:
        """
        Move one file.

        Args:
            step: Source and target path of the move.

        Raises:
            RenameApplyError: If the move cannot be performed.
        """
        pass
