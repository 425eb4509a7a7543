"""Grapheme break property lookup for single scalars.

WHY: The boundary machine needs the Grapheme_Cluster_Break and
Indic_Conjunct_Break properties of every scalar it sees. Shipping our own
Unicode tables would mean regenerating them for every Unicode release;
wcwidth already ships current UAX #29 tables for its own grapheme support.

HOW: CR, LF, and ZWJ are matched by code point. Every other category is a
binary search over the corresponding wcwidth range table, in the same order
UAX #29 lists them. Extended_Pictographic is only consulted when no break
table matched, so it stays mutually exclusive with the other categories.
Results are cached per code point.

RULES:
- classify() is total over single-character strings.
- Anything that is not exactly one character raises ValueError.
- The lookup is pure; the cache never changes a result.
"""

from __future__ import annotations

from functools import lru_cache

from wcwidth.bisearch import bisearch
from wcwidth.table_grapheme import (
    EXTENDED_PICTOGRAPHIC,
    GRAPHEME_CONTROL,
    GRAPHEME_EXTEND,
    GRAPHEME_L,
    GRAPHEME_LV,
    GRAPHEME_LVT,
    GRAPHEME_PREPEND,
    GRAPHEME_REGIONAL_INDICATOR,
    GRAPHEME_SPACINGMARK,
    GRAPHEME_T,
    GRAPHEME_V,
    INCB_CONSONANT,
    INCB_EXTEND,
    INCB_LINKER,
)

from textflow.core.props import GraphemeCategory, GraphemeProps, IndicConjunctCategory

# Range tables in UAX #29 lookup order, after the single code point checks.
_CATEGORY_TABLES = (
    (GRAPHEME_CONTROL, GraphemeCategory.CONTROL),
    (GRAPHEME_EXTEND, GraphemeCategory.EXTEND),
    (GRAPHEME_REGIONAL_INDICATOR, GraphemeCategory.REGIONAL_INDICATOR),
    (GRAPHEME_PREPEND, GraphemeCategory.PREPEND),
    (GRAPHEME_SPACINGMARK, GraphemeCategory.SPACING_MARK),
    (GRAPHEME_L, GraphemeCategory.L),
    (GRAPHEME_V, GraphemeCategory.V),
    (GRAPHEME_T, GraphemeCategory.T),
    (GRAPHEME_LV, GraphemeCategory.LV),
    (GRAPHEME_LVT, GraphemeCategory.LVT),
)

_SINGLE_CODE_POINTS = {
    0x000D: GraphemeCategory.CR,
    0x000A: GraphemeCategory.LF,
    0x200D: GraphemeCategory.ZWJ,
}


def _category_for(ucs: int) -> GraphemeCategory:
    single = _SINGLE_CODE_POINTS.get(ucs)
    if single is not None:
        return single
    for table, category in _CATEGORY_TABLES:
        if bisearch(ucs, table):
            return category
    if bisearch(ucs, EXTENDED_PICTOGRAPHIC):
        return GraphemeCategory.EXTENDED_PICTOGRAPHIC
    return GraphemeCategory.OTHER


def _incb_for(ucs: int) -> IndicConjunctCategory:
    if bisearch(ucs, INCB_CONSONANT):
        return IndicConjunctCategory.CONSONANT
    if bisearch(ucs, INCB_LINKER):
        return IndicConjunctCategory.LINKER
    if bisearch(ucs, INCB_EXTEND):
        return IndicConjunctCategory.EXTEND
    return IndicConjunctCategory.NONE


@lru_cache(maxsize=1024)
def _classify_code_point(ucs: int) -> GraphemeProps:
    return GraphemeProps(_category_for(ucs), _incb_for(ucs))


def classify(char: str) -> GraphemeProps:
    """Return the grapheme break properties of one character.

    Args:
        char: A string of exactly one Unicode scalar.

    Returns:
        GraphemeProps with the Grapheme_Cluster_Break and
        Indic_Conjunct_Break values of the scalar.

    Raises:
        ValueError: If char is not exactly one character long.
    """
    if len(char) != 1:
        raise ValueError(
            "classify() expects a single character, got {!r}".format(char)
        )
    return _classify_code_point(ord(char))
