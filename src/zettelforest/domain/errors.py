from __future__ import annotations

"""
Domain Error Taxonomy.

Exceptions raised by the identifier model, the record boundary and the
rename workflow. Parse failures are recoverable (the offending record is
skipped); validation failures signal a programming error at the call site.
"""

from enum import Enum
from typing import Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from zettelforest.domain.rename_models import RenameConflict, RenameStep


class ParseErrorKind(Enum):
    """Reasons a raw identifier string is rejected."""
    EMPTY_INPUT = "EMPTY_INPUT"
    EXPECTED_LETTERS = "EXPECTED_LETTERS"
    EXPECTED_NUMBERS = "EXPECTED_NUMBERS"
    INVALID_LETTERS_SEGMENT = "INVALID_LETTERS_SEGMENT"
    INVALID_NUMBERS_SEGMENT = "INVALID_NUMBERS_SEGMENT"


class ValidationErrorKind(Enum):
    """Reasons a directly supplied segment sequence is rejected."""
    EMPTY_SEGMENTS = "EMPTY_SEGMENTS"
    INVALID_LETTERS_SEGMENT = "INVALID_LETTERS_SEGMENT"
    INVALID_NUMBERS_SEGMENT = "INVALID_NUMBERS_SEGMENT"


class ZettelForestError(Exception):
    """Base class for every error raised by the package."""


class IdentifierParseError(ZettelForestError, ValueError):
    """
    Raised when a raw string does not follow the identifier grammar.

    Attributes:
        kind: Classified reason of the failure.
        raw: The rejected input.
        position: Character offset where scanning stopped.
    """

    def __init__(self, kind: ParseErrorKind, raw: str, position: int = 0) -> None:
        self.kind = kind
        self.raw = raw
        self.position = position
        super().__init__(f"{kind.value} at position {position} in {raw!r}")


class IdentifierValidationError(ZettelForestError, ValueError):
    """
    Raised when a segment sequence breaks the alternation or charset rules.

    Attributes:
        kind: Classified reason of the failure.
        index: Offending segment index (-1 for an empty sequence).
    """

    def __init__(self, kind: ValidationErrorKind, index: int = -1, detail: str = "") -> None:
        self.kind = kind
        self.index = index
        message = f"{kind.value} at segment {index}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class RecordError(ZettelForestError, ValueError):
    """Raised when a record mapping misses a required field or has a bad type."""


class RenameConflictError(ZettelForestError):
    """Raised when a rename plan with conflicts is about to be applied."""

    def __init__(self, conflicts: Sequence["RenameConflict"]) -> None:
        self.conflicts = tuple(conflicts)
        super().__init__(f"{len(self.conflicts)} rename conflict(s) detected")


class RenameApplyError(ZettelForestError):
    """Raised by a rename applier when a single step cannot be performed."""

    def __init__(self, step: "RenameStep", reason: str) -> None:
        self.step = step
        self.reason = reason
        super().__init__(f"Failed to rename '{step.source}' -> '{step.target}': {reason}")
