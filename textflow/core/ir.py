"""Value types for incremental line layout.

WHY: The layout engine reasons about a stream of pre-measured symbols, not
about characters. Symbols, cursors, spans, and step results are the stable
contract between measurement policies, the stepping engine, the assembler,
and the formatters.

HOW: Small frozen dataclasses and str enums. Units are plain non-negative
ints; UNIT_MAX stands in for "unbounded" and all unit additions saturate
at it.

RULES:
- Symbol order is significant and is never changed by any stage.
- A Cursor points *at* the next symbol to lay out. offset counts the units
  of that symbol already consumed by an earlier partial break.
- A Span is a half-open symbol index range [start, end) plus its units.
- StepResult.carry is None exactly when the stream is exhausted.
- Negative units or cursor fields raise ValueError at construction.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional

UNIT_MAX = 2 ** 64 - 1
"""Largest representable unit count; used as the unbounded extent."""


def saturating_add(a: int, b: int) -> int:
    """Add two unit counts, clamping at UNIT_MAX."""
    return min(a + b, UNIT_MAX)


class Cohesion(str, enum.Enum):
    """How a symbol may be treated when it meets the end of a line.

    RULES:
    - ATOMIC: must fit wholly or wait for a later line
    - BREAKABLE: may be split, the remainder resumes on the next line
    - ELIDABLE: skipped for free, never opens a span on its own
    """

    ATOMIC = "atomic"
    BREAKABLE = "breakable"
    ELIDABLE = "elidable"


class Fit(str, enum.Enum):
    """How much of the symbol stream a single step consumed."""

    NONE = "none"
    PARTIAL = "partial"
    FULL = "full"


@dataclass(frozen=True)
class Symbol:
    """One measured unit of layout.

    Attributes:
        units: Inline space the symbol occupies.
        cohesion: Whether the symbol may be split or dropped.
    """

    units: int
    cohesion: Cohesion = Cohesion.ATOMIC

    def __post_init__(self) -> None:
        if self.units < 0:
            raise ValueError("Symbol units must be non-negative, got {}".format(self.units))
        # Accept plain strings ("atomic") from JSON or config input
        object.__setattr__(self, "cohesion", Cohesion(self.cohesion))


@dataclass(frozen=True)
class Cursor:
    """Resume position in a symbol stream."""

    index: int = 0
    offset: int = 0

    def __post_init__(self) -> None:
        if self.index < 0 or self.offset < 0:
            raise ValueError(
                "Cursor fields must be non-negative, got index={} offset={}".format(
                    self.index, self.offset
                )
            )


@dataclass(frozen=True)
class Span:
    """Contiguous run of symbols consumed by one step."""

    start: int
    end: int
    units: int


@dataclass(frozen=True)
class StepResult:
    """Outcome of one call to layout.step().

    Attributes:
        span: The span emitted by this call, or None when nothing contributed.
        consumed: Total units consumed by this call.
        carry: Where the next call must resume, or None when exhausted.
        fit: Whether the call made no progress, some, or drained the stream.
    """

    span: Optional[Span]
    consumed: int
    carry: Optional[Cursor]
    fit: Fit

    @property
    def span_count(self) -> int:
        return 0 if self.span is None else 1


@dataclass
class Line:
    """One laid-out line of text.

    Attributes:
        start: Index of the first symbol on the line.
        end: One past the last symbol on the line.
        units: Units the line occupies.
        text: Rendered text of the line.
    """

    start: int
    end: int
    units: int
    text: str


@dataclass
class LaidOutText:
    """The complete result of laying out a text.

    RULES:
    - lines are in reading order; hard line breaks in the input produce
      separate lines (empty paragraphs produce empty lines)
    - symbols and clusters are parallel lists: symbols[i] measures clusters[i]
    - width is the extent every line was laid out against
    """

    lines: List[Line]
    width: int
    policy: str
    clusters: List[str] = field(default_factory=list)
    symbols: List[Symbol] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(line.text for line in self.lines)
