from __future__ import annotations

"""
Zettelkasten Identifier Model.

An identifier is a non-empty sequence of segments that strictly alternates
between a run of lowercase letters and a run of decimal digits, starting with
letters (e.g. "a", "a1", "a1b", "a12c3"). The segment sequence encodes a
position in a tree: dropping the last segment yields the parent.

This module owns the grammar (parse/validate), the canonical string form and
the total order used everywhere else in the package.
"""

import re
from dataclasses import dataclass
from enum import Enum, IntEnum
from functools import cmp_to_key
from typing import Iterable, List, Optional, Tuple

from zettelforest.domain.errors import (
    IdentifierParseError,
    IdentifierValidationError,
    ParseErrorKind,
    ValidationErrorKind,
)
from zettelforest.domain.lettering import increment_letters

_LETTERS_RX = re.compile(r"[a-z]+")
_NUMBERS_RX = re.compile(r"[0-9]+")

# -----------------------------------------------------------------------------
# SEGMENTS
# -----------------------------------------------------------------------------

class SegmentType(Enum):
    """Kind of a single identifier segment."""
    LETTERS = "letters"
    NUMBERS = "numbers"

    @property
    def opposite(self) -> "SegmentType":
        return SegmentType.NUMBERS if self is SegmentType.LETTERS else SegmentType.LETTERS


class Ordering(IntEnum):
    """Three-way comparison outcome."""
    LESS = -1
    EQUAL = 0
    GREATER = 1


@dataclass(frozen=True)
class Segment:
    """
    One letters-run or numbers-run within an identifier.

    Attributes:
        type: Whether the run is made of letters or digits.
        value: Raw characters of the run.
    """
    type: SegmentType
    value: str

    @classmethod
    def letters(cls, value: str) -> "Segment":
        return cls(SegmentType.LETTERS, value)

    @classmethod
    def numbers(cls, value: str) -> "Segment":
        return cls(SegmentType.NUMBERS, value)

    @property
    def is_letters(self) -> bool:
        return self.type is SegmentType.LETTERS

# -----------------------------------------------------------------------------
# GRAMMAR
# -----------------------------------------------------------------------------

def parse_segments(raw: str) -> List[Segment]:
    """
    Scan a raw string into alternating segments, starting with letters.

    Each run is taken greedily over its character class (alphabetic or
    digit) and then checked against the strict ASCII charset, so "aB" fails
    as an invalid letters segment while "a-1" fails as missing digits.

    Args:
        raw: Candidate identifier string.

    Returns:
        List[Segment]: The full segment sequence.

    Raises:
        IdentifierParseError: If the string does not follow the grammar.
    """
    if not raw:
        raise IdentifierParseError(ParseErrorKind.EMPTY_INPUT, raw or "", 0)

    segments: List[Segment] = []
    i = 0
    expect_letters = True

    while i < len(raw):
        start = i
        if expect_letters:
            while i < len(raw) and raw[i].isalpha():
                i += 1
            if i == start:
                raise IdentifierParseError(ParseErrorKind.EXPECTED_LETTERS, raw, start)
            value = raw[start:i]
            if not _LETTERS_RX.fullmatch(value):
                raise IdentifierParseError(ParseErrorKind.INVALID_LETTERS_SEGMENT, raw, start)
            segments.append(Segment.letters(value))
        else:
            while i < len(raw) and raw[i].isdigit():
                i += 1
            if i == start:
                raise IdentifierParseError(ParseErrorKind.EXPECTED_NUMBERS, raw, start)
            value = raw[start:i]
            if not _NUMBERS_RX.fullmatch(value):
                raise IdentifierParseError(ParseErrorKind.INVALID_NUMBERS_SEGMENT, raw, start)
            segments.append(Segment.numbers(value))
        expect_letters = not expect_letters

    return segments


def validate_segments(segments: Iterable[Segment]) -> None:
    """
    Re-check alternation, type and charset for a directly supplied sequence.

    Raises:
        IdentifierValidationError: On the first offending segment.
    """
    seq = list(segments)
    if not seq:
        raise IdentifierValidationError(ValidationErrorKind.EMPTY_SEGMENTS)

    expect_letters = True
    for index, seg in enumerate(seq):
        if expect_letters:
            if not _is_segment_of(seg, SegmentType.LETTERS, _LETTERS_RX):
                raise IdentifierValidationError(
                    ValidationErrorKind.INVALID_LETTERS_SEGMENT, index, repr(seg)
                )
        else:
            if not _is_segment_of(seg, SegmentType.NUMBERS, _NUMBERS_RX):
                raise IdentifierValidationError(
                    ValidationErrorKind.INVALID_NUMBERS_SEGMENT, index, repr(seg)
                )
        expect_letters = not expect_letters


def _is_segment_of(seg: object, seg_type: SegmentType, charset: "re.Pattern[str]") -> bool:
    return (
        isinstance(seg, Segment)
        and seg.type is seg_type
        and isinstance(seg.value, str)
        and charset.fullmatch(seg.value) is not None
    )

# -----------------------------------------------------------------------------
# IDENTIFIER VALUE OBJECT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Identifier:
    """
    Immutable, validated Zettelkasten identifier.

    Equality is structural (same segment values); ordering follows
    compare_identifiers.

    Attributes:
        segments: Alternating segment sequence, letters first.
    """
    segments: Tuple[Segment, ...]

    def __post_init__(self) -> None:
        segs = tuple(self.segments)
        validate_segments(segs)
        object.__setattr__(self, "segments", segs)

    @classmethod
    def parse(cls, raw: str) -> "Identifier":
        """Build an identifier from its canonical string form."""
        return cls(tuple(parse_segments(raw)))

    def __str__(self) -> str:
        return "".join(seg.value for seg in self.segments)

    def __repr__(self) -> str:
        return f"Identifier({str(self)!r})"

    @property
    def depth(self) -> int:
        return len(self.segments)

    @property
    def last_segment(self) -> Segment:
        return self.segments[-1]

    def parent(self) -> Optional["Identifier"]:
        """Drop the last segment; None for a root identifier."""
        if len(self.segments) <= 1:
            return None
        return Identifier(self.segments[:-1])

    def next_child(self) -> "Identifier":
        """First child position: appends "1" after letters, "a" after digits."""
        if self.last_segment.is_letters:
            return Identifier(self.segments + (Segment.numbers("1"),))
        return Identifier(self.segments + (Segment.letters("a"),))

    def next_sibling(self) -> "Identifier":
        """Following position at the same depth ("a1" -> "a2", "a1z" -> "a1aa")."""
        last = self.last_segment
        if last.is_letters:
            bumped = Segment.letters(increment_letters(last.value))
        else:
            bumped = Segment.numbers(_increment_digits(last.value))
        return Identifier(self.segments[:-1] + (bumped,))

    def replace_segment(self, index: int, segment: Segment) -> "Identifier":
        """Return a copy with the segment at `index` swapped (re-validated)."""
        segs = list(self.segments)
        segs[index] = segment
        return Identifier(tuple(segs))

    def compare(self, other: "Identifier") -> Ordering:
        return compare_identifiers(self, other)

    def __lt__(self, other: "Identifier") -> bool:
        return compare_identifiers(self, other) is Ordering.LESS

    def __le__(self, other: "Identifier") -> bool:
        return compare_identifiers(self, other) is not Ordering.GREATER

    def __gt__(self, other: "Identifier") -> bool:
        return compare_identifiers(self, other) is Ordering.GREATER

    def __ge__(self, other: "Identifier") -> bool:
        return compare_identifiers(self, other) is not Ordering.LESS

# -----------------------------------------------------------------------------
# ORDERING
# -----------------------------------------------------------------------------

def compare_identifiers(a: Identifier, b: Identifier) -> Ordering:
    """
    Total order over identifiers, segment by segment.

    - A missing segment sorts before a present one ("a" < "a1").
    - Letters sort before numbers when types differ.
    - Numbers compare as unsigned integers ("a9" < "a10").
    - Letters compare as plain strings ("aa" < "z"), which is not the
      generation order of letters_for_index once a run exceeds 26 labels.
    """
    sa, sb = a.segments, b.segments
    for i in range(max(len(sa), len(sb))):
        if i >= len(sa):
            return Ordering.LESS
        if i >= len(sb):
            return Ordering.GREATER

        x, y = sa[i], sb[i]
        if x.type is not y.type:
            return Ordering.LESS if x.is_letters else Ordering.GREATER

        if x.is_letters:
            if x.value != y.value:
                return Ordering.LESS if x.value < y.value else Ordering.GREATER
        else:
            order = _compare_digits(x.value, y.value)
            if order is not Ordering.EQUAL:
                return order

    return Ordering.EQUAL


def _compare_digits(left: str, right: str) -> Ordering:
    """Numeric comparison of digit strings of any length, without int()."""
    left, right = left.lstrip("0"), right.lstrip("0")
    if len(left) != len(right):
        return Ordering.LESS if len(left) < len(right) else Ordering.GREATER
    if left != right:
        return Ordering.LESS if left < right else Ordering.GREATER
    return Ordering.EQUAL


def _increment_digits(value: str) -> str:
    """Add one to a digit string, dropping leading zeros ("09" -> "10", "99" -> "100")."""
    digits = value.lstrip("0") or "0"
    head = digits.rstrip("9")
    zeros = "0" * (len(digits) - len(head))
    if not head:
        return "1" + zeros
    return head[:-1] + str(int(head[-1]) + 1) + zeros


identifier_sort_key = cmp_to_key(compare_identifiers)


def is_valid_identifier(raw: str) -> bool:
    """Parse success, discarding the error detail."""
    try:
        parse_segments(raw)
    except IdentifierParseError:
        return False
    return True
