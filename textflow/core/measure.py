"""Measurement policies that turn grapheme clusters into layout symbols.

WHY: The layout engine only sees (units, cohesion) pairs. How wide a
cluster is and whether it may be split depends on the target: a fixed-pitch
"one cluster, one unit" count, or real terminal cells where CJK takes two
columns and combining marks take none. Keeping measurement pluggable lets
the same engine serve both without knowing about either.

HOW: A policy is a plain callable (cluster, index) -> Symbol with no
retained state. POLICIES maps policy names to callables, the way presets
map names to configs. Terminal widths come from wcwidth.

RULES:
- Policies are pure: the same cluster always yields the same Symbol.
- "default": width 1, BREAKABLE on whitespace, ATOMIC otherwise.
- "terminal": wcwidth cell width; whitespace is BREAKABLE (tabs expand to
  tab_size units); controls and zero-width clusters are ELIDABLE.
- get_policy() raises ValueError for unknown names.
"""

from __future__ import annotations

from typing import Callable, Dict

from wcwidth import wcswidth

from textflow.core.ir import Cohesion, Symbol

MeasurePolicy = Callable[[str, int], Symbol]

DEFAULT_TAB_SIZE = 4

_ELIDED = Symbol(0, Cohesion.ELIDABLE)

# Whitespace that must not become a break opportunity
_NO_BREAK_SPACES = frozenset({"\u00a0", "\u2007", "\u202f"})


def measure_default(cluster: str, index: int) -> Symbol:
    """Width 1 per cluster; whitespace may break, everything else is atomic."""
    if cluster.isspace():
        return Symbol(1, Cohesion.BREAKABLE)
    return Symbol(1, Cohesion.ATOMIC)


def make_terminal_policy(tab_size: int = DEFAULT_TAB_SIZE, ambiguous_width: int = 1) -> MeasurePolicy:
    """Build a terminal-cell measurement policy.

    Args:
        tab_size: Units a horizontal tab occupies. Must be >= 1.
        ambiguous_width: Width of East Asian Ambiguous characters (1 or 2).

    Returns:
        A policy callable.

    Raises:
        ValueError: If tab_size < 1 or ambiguous_width is not 1 or 2.
    """
    if tab_size < 1:
        raise ValueError("tab_size must be at least 1, got {}".format(tab_size))
    if ambiguous_width not in (1, 2):
        raise ValueError("ambiguous_width must be 1 or 2, got {}".format(ambiguous_width))

    def measure_terminal(cluster: str, index: int) -> Symbol:
        if cluster == "\t":
            return Symbol(tab_size, Cohesion.BREAKABLE)
        cells = wcswidth(cluster, ambiguous_width=ambiguous_width)
        if cells < 0:
            # not printable: control characters and the like
            return _ELIDED
        if cluster.isspace() and cluster not in _NO_BREAK_SPACES:
            return Symbol(cells, Cohesion.BREAKABLE)
        if cells == 0:
            return _ELIDED
        return Symbol(cells, Cohesion.ATOMIC)

    return measure_terminal


measure_terminal = make_terminal_policy()

POLICIES: Dict[str, MeasurePolicy] = {
    "default": measure_default,
    "terminal": measure_terminal,
}


def get_policy(name: str, tab_size: int = DEFAULT_TAB_SIZE) -> MeasurePolicy:
    """Resolve a policy name to a measurement callable.

    Args:
        name: A key of POLICIES.
        tab_size: Tab width for the terminal policy; ignored otherwise.

    Raises:
        ValueError: If name is not a registered policy.
    """
    if name not in POLICIES:
        raise ValueError(
            "Unknown policy '{}'. Available: {}".format(name, ", ".join(POLICIES.keys()))
        )
    if name == "terminal" and tab_size != DEFAULT_TAB_SIZE:
        return make_terminal_policy(tab_size)
    return POLICIES[name]
