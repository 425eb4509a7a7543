"""Cluster assembly, symbol measurement, and line-by-line layout driving.

WHY: step() and transition() are deliberately small: one works on symbols,
the other on one character at a time. Callers with a plain string need the
glue: split the text into grapheme clusters, measure each cluster, honour
hard line breaks, call step() once per line until the carry runs out, and
render each span back into text. This module is that glue.

HOW: assemble_symbols() runs the grapheme machine over the text and feeds
every cluster to the measurement policy; with words=True, runs of ATOMIC
clusters are merged into one ATOMIC symbol so words move between lines as
a whole. layout_symbols() threads the carry cursor through repeated step()
calls with a fresh extent per line. layout_text() does both per paragraph
and renders the lines.

RULES:
- Every cluster is measured exactly once and keeps its position.
- Hard line breaks (the boundaries str.splitlines() uses) end a paragraph;
  a trailing break does not create an extra empty line.
- An ATOMIC symbol wider than the whole line is placed alone on its own
  line (overflow) so layout always terminates.
- A cluster's text appears on the first line whose span covers it; ELIDABLE
  clusters are never rendered.
- With trim=True, trailing whitespace is stripped from every line and
  leading whitespace from continuation lines. Line.units is not adjusted.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple, Union

from textflow.core.classify import classify
from textflow.core.ir import (
    Cohesion,
    Cursor,
    LaidOutText,
    Line,
    Span,
    Symbol,
    saturating_add,
)
from textflow.core.layout import step
from textflow.core.machine import Classifier, iter_graphemes
from textflow.core.measure import DEFAULT_TAB_SIZE, MeasurePolicy, get_policy

logger = logging.getLogger(__name__)

# Clusters that str.splitlines() treats as line boundaries.
HARD_BREAKS = frozenset({
    "\n", "\r", "\r\n", "\x0b", "\x0c", "\x1c", "\x1d", "\x1e",
    "\x85", "\u2028", "\u2029",
})


def assemble_symbols(
    text: str,
    policy: MeasurePolicy,
    words: bool = False,
    classifier: Classifier = classify,
) -> Tuple[List[str], List[Symbol]]:
    """Split text into clusters and measure each one.

    Args:
        text: The text to measure.
        policy: Measurement callable (cluster, index) -> Symbol.
        words: Merge runs of ATOMIC clusters into single ATOMIC symbols.
        classifier: Grapheme property lookup used by the boundary machine.

    Returns:
        (clusters, symbols) as parallel lists.
    """
    clusters: List[str] = []
    symbols: List[Symbol] = []

    for index, cluster in enumerate(iter_graphemes(text, classifier)):
        symbol = policy(cluster, index)
        if (words and clusters
                and symbol.cohesion is Cohesion.ATOMIC
                and symbols[-1].cohesion is Cohesion.ATOMIC
                and cluster not in HARD_BREAKS
                and clusters[-1] not in HARD_BREAKS):
            clusters[-1] += cluster
            symbols[-1] = Symbol(saturating_add(symbols[-1].units, symbol.units), Cohesion.ATOMIC)
            continue
        clusters.append(cluster)
        symbols.append(symbol)

    return clusters, symbols


def layout_symbols(symbols: Sequence[Symbol], width: int) -> List[Span]:
    """Cut a symbol stream into line spans of at most width units.

    WHY: step() only ever produces one span; a caller wants all of them.

    HOW: Calls step() with a fresh extent of width per line, threading the
    carry cursor, until the carry is None. When a line makes no progress the
    blocking ATOMIC symbol is emitted alone as an overflow line.

    Raises:
        ValueError: If width < 1.
    """
    if width < 1:
        raise ValueError("width must be at least 1, got {}".format(width))

    spans: List[Span] = []
    cursor = Cursor()  # type: Optional[Cursor]

    while cursor is not None:
        result = step(symbols, cursor, width)
        if result.span is not None:
            spans.append(result.span)
            cursor = result.carry
            continue
        if result.carry is None:
            break
        index = result.carry.index
        wide = symbols[index]
        logger.debug(
            "Symbol %d is wider than the line (%d > %d units), placing it alone",
            index, wide.units, width,
        )
        spans.append(Span(start=index, end=index + 1, units=wide.units))
        cursor = Cursor(index + 1) if index + 1 < len(symbols) else None

    return spans


def _paragraph_ranges(clusters: Sequence[str]) -> List[Tuple[int, int]]:
    """Return [start, end) cluster ranges between hard line breaks."""
    ranges: List[Tuple[int, int]] = []
    start = 0
    for index, cluster in enumerate(clusters):
        if cluster in HARD_BREAKS:
            ranges.append((start, index))
            start = index + 1
    if start < len(clusters):
        ranges.append((start, len(clusters)))
    return ranges


def _render(
    clusters: Sequence[str],
    symbols: Sequence[Symbol],
    span: Span,
    first_unrendered: int,
) -> str:
    parts: List[str] = []
    for index in range(max(span.start, first_unrendered), span.end):
        if symbols[index].cohesion is not Cohesion.ELIDABLE:
            parts.append(clusters[index])
    return "".join(parts)


def layout_text(
    text: str,
    width: int,
    policy: Union[str, MeasurePolicy] = "default",
    words: bool = False,
    trim: bool = True,
    tab_size: int = DEFAULT_TAB_SIZE,
) -> LaidOutText:
    """Lay out text into lines no wider than width units.

    Args:
        text: Input text; hard line breaks start new paragraphs.
        width: Inline extent of every line, in policy units. Must be >= 1.
        policy: A POLICIES name or a measurement callable.
        words: Keep runs of ATOMIC clusters together (word wrapping).
        trim: Strip whitespace at line edges as described in the module rules.
        tab_size: Tab width for the terminal policy.

    Returns:
        LaidOutText with lines in reading order. Line start/end index into
        the returned symbols list.

    Raises:
        ValueError: If width < 1 or the policy name is unknown.
    """
    if width < 1:
        raise ValueError("width must be at least 1, got {}".format(width))

    if isinstance(policy, str):
        policy_name = policy
        measure = get_policy(policy, tab_size=tab_size)
    else:
        policy_name = getattr(policy, "__name__", "custom")
        measure = policy

    clusters, symbols = assemble_symbols(text, measure, words=words)
    lines: List[Line] = []

    for p_start, p_end in _paragraph_ranges(clusters):
        spans = layout_symbols(symbols[p_start:p_end], width) if p_start < p_end else []
        if not spans:
            # empty paragraph, or nothing but elided clusters
            lines.append(Line(start=p_start, end=p_end, units=0, text=""))
            continue

        first_unrendered = p_start
        for n, local in enumerate(spans):
            span = Span(start=local.start + p_start, end=local.end + p_start, units=local.units)
            rendered = _render(clusters, symbols, span, first_unrendered)
            first_unrendered = max(first_unrendered, span.end)
            if trim:
                rendered = rendered.rstrip() if n == 0 else rendered.strip()
            lines.append(Line(start=span.start, end=span.end, units=span.units, text=rendered))

    logger.debug(
        "Laid out %d clusters into %d lines (width=%d, policy=%s)",
        len(clusters), len(lines), width, policy_name,
    )
    return LaidOutText(
        lines=lines,
        width=width,
        policy=policy_name,
        clusters=clusters,
        symbols=symbols,
    )
