"""Incremental, resumable line-layout stepping.

WHY: Text arrives as a stream of measured symbols and has to be cut into
lines of bounded width. Callers want to lay out one line at a time, resume
where the previous call stopped, and never hold more state than a cursor.
Some symbols must stay whole (words, clusters), some may be split across
lines (long runs of whitespace, tabs), and some cost nothing (zero-width
marks), and each needs a precise, predictable policy.

HOW: step() walks the symbols left to right from the cursor, tracking the
remaining extent. ELIDABLE symbols are skipped. ATOMIC symbols are taken
when they fit and stop the walk otherwise. BREAKABLE symbols are taken
when they fit; otherwise the remaining extent is taken from them and the
walk stops *at* that symbol, so the next call resumes inside it. Everything
consumed forms at most one contiguous span.

RULES:
- At most one span per call; elided symbols never open a span on their own.
- An ATOMIC symbol is never partially consumed and never dropped.
- After a partial break the carry cursor points at the broken symbol, with
  offset recording how many of its units are already laid out.
- fit is FULL exactly when the stream is exhausted, whatever extent is left;
  NONE when nothing contributed to a span and symbols remain; else PARTIAL.
- No allocation beyond the result objects; no exceptions for valid input.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from textflow.core.ir import (
    UNIT_MAX,
    Cohesion,
    Cursor,
    Fit,
    Span,
    StepResult,
    Symbol,
    saturating_add,
)


def step(
    symbols: Sequence[Symbol],
    cursor: Cursor,
    extent: Optional[int] = None,
    out_spans: Optional[List[Optional[Span]]] = None,
) -> StepResult:
    """Lay out one span of symbols starting at cursor.

    Args:
        symbols: The full symbol buffer for the current text. Never mutated.
        cursor: Where to start; cursor.offset units of the symbol at
            cursor.index are treated as already consumed.
        extent: Remaining inline units available, or None for unbounded.
        out_spans: Optional caller-owned buffer; when given, the emitted span
            is written to out_spans[0]. Must have at least one slot.

    Returns:
        StepResult with the emitted span (or None), units consumed, the
        carry cursor for the next call (or None), and the fit.
    """
    count = len(symbols)
    start_index = cursor.index

    if start_index > count:
        return StepResult(span=None, consumed=0, carry=None, fit=Fit.FULL)

    remaining = UNIT_MAX if extent is None else extent
    index = start_index
    consumed = 0
    span_start = None  # type: Optional[int]
    span_units = 0
    partial_index = None  # type: Optional[int]
    partial_units = 0

    while index < count and remaining > 0:
        symbol = symbols[index]
        cohesion = symbol.cohesion

        if cohesion is Cohesion.ELIDABLE:
            index += 1
            continue

        units = symbol.units
        if index == start_index and cursor.offset:
            units = max(0, units - cursor.offset)

        if units <= remaining:
            if span_start is None:
                span_start = index
            span_units = saturating_add(span_units, units)
            consumed = saturating_add(consumed, units)
            remaining -= units
            index += 1
        elif cohesion is Cohesion.BREAKABLE:
            if span_start is None:
                span_start = index
            partial_index = index
            partial_units = remaining
            span_units = saturating_add(span_units, remaining)
            consumed = saturating_add(consumed, remaining)
            remaining = 0
            break
        else:
            # ATOMIC that does not fit waits for a later call
            break

    span = None  # type: Optional[Span]
    if span_start is not None:
        end = partial_index + 1 if partial_index is not None else index
        span = Span(start=span_start, end=end, units=span_units)
        if out_spans is not None:
            out_spans[0] = span

    if partial_index is not None:
        offset = partial_units
        if partial_index == start_index:
            offset += cursor.offset
        carry = Cursor(index=partial_index, offset=offset)  # type: Optional[Cursor]
    elif index >= count:
        carry = None
    elif index == start_index:
        carry = cursor
    else:
        carry = Cursor(index=index)

    if partial_index is None and index >= count:
        fit = Fit.FULL
    elif span is None:
        fit = Fit.NONE
    else:
        fit = Fit.PARTIAL

    return StepResult(span=span, consumed=consumed, carry=carry, fit=fit)
