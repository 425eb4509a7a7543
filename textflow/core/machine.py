"""Extended grapheme cluster boundary state machine.

WHY: Line layout must never split a user-perceived character: a base
letter with combining marks, a CRLF pair, a flag, or an emoji ZWJ sequence.
The UAX #29 rules that decide this need a little context (regional
indicator parity, emoji and Indic conjunct sequences), so a pure pairwise
check is not enough, but the context fits in a six-valued state.

HOW: transition() takes the current state, the properties of the previous
character (None at start of text), and the properties of the next one.
It first computes the next state from the next character alone, then
walks the boundary rules in UAX #29 order and stops at the first match.
GraphemeMachine wraps transition() for callers that would rather feed
characters than thread (state, prev) themselves, and split_graphemes()
builds clusters on top of it.

RULES:
- Rule order is load-bearing: CR x LF, controls, Hangul, Extend/ZWJ,
  SpacingMark, Prepend, Indic conjuncts, emoji ZWJ, regional pairs, default.
- The new state is always computed, even when prev is None.
- transition() never looks ahead and has no side effects.
- Characters must be fed in order with the previously returned state;
  skipping or reordering gives unspecified but safe results.
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Optional, Tuple

from textflow.core.classify import classify
from textflow.core.props import (
    GraphemeBoundary,
    GraphemeCategory,
    GraphemeMachineState,
    GraphemeProps,
    IndicConjunctCategory,
)

Classifier = Callable[[str], GraphemeProps]

_HANGUL_AFTER_L = frozenset({
    GraphemeCategory.L, GraphemeCategory.V, GraphemeCategory.LV, GraphemeCategory.LVT,
})
_HANGUL_LV_V = frozenset({GraphemeCategory.LV, GraphemeCategory.V})
_HANGUL_V_T = frozenset({GraphemeCategory.V, GraphemeCategory.T})
_HANGUL_LVT_T = frozenset({GraphemeCategory.LVT, GraphemeCategory.T})
_EXTEND_OR_ZWJ = frozenset({GraphemeCategory.EXTEND, GraphemeCategory.ZWJ})
_INCB_JOINERS = frozenset({IndicConjunctCategory.LINKER, IndicConjunctCategory.EXTEND})


def next_state(state: GraphemeMachineState, nxt: GraphemeProps) -> GraphemeMachineState:
    """Compute the machine state after consuming nxt.

    ExtendedPictographic and InCB consonants restart their sequences from
    any state. Every other transition depends on the current state; a
    regional indicator only opens a pair from BASE.
    """
    if nxt.category is GraphemeCategory.EXTENDED_PICTOGRAPHIC:
        return GraphemeMachineState.BEFORE_ZWJ
    if nxt.incb is IndicConjunctCategory.CONSONANT:
        return GraphemeMachineState.INDIC_CONSONANT

    if state is GraphemeMachineState.BASE:
        if nxt.category is GraphemeCategory.REGIONAL_INDICATOR:
            return GraphemeMachineState.AWAIT_REGIONAL_PAIR
        return GraphemeMachineState.BASE

    if state is GraphemeMachineState.BEFORE_ZWJ:
        if nxt.category is GraphemeCategory.ZWJ:
            return GraphemeMachineState.AFTER_ZWJ
        if nxt.category is GraphemeCategory.EXTEND:
            return GraphemeMachineState.BEFORE_ZWJ
        return GraphemeMachineState.BASE

    if state is GraphemeMachineState.INDIC_CONSONANT:
        if nxt.incb is IndicConjunctCategory.LINKER:
            return GraphemeMachineState.INDIC_LINKER
        if nxt.incb is IndicConjunctCategory.EXTEND:
            return GraphemeMachineState.INDIC_CONSONANT
        return GraphemeMachineState.BASE

    if state is GraphemeMachineState.INDIC_LINKER:
        if nxt.incb in _INCB_JOINERS:
            return GraphemeMachineState.INDIC_LINKER
        return GraphemeMachineState.BASE

    # AWAIT_REGIONAL_PAIR and AFTER_ZWJ hold for one character only
    return GraphemeMachineState.BASE


def _has_boundary(
    state: GraphemeMachineState,
    prev: GraphemeProps,
    nxt: GraphemeProps,
) -> bool:
    before = prev.category
    after = nxt.category

    # GB3
    if before is GraphemeCategory.CR and after is GraphemeCategory.LF:
        return False
    # GB4, GB5
    if prev.is_control() or nxt.is_control():
        return True
    # GB6, GB7, GB8
    if before is GraphemeCategory.L and after in _HANGUL_AFTER_L:
        return False
    if before in _HANGUL_LV_V and after in _HANGUL_V_T:
        return False
    if before in _HANGUL_LVT_T and after is GraphemeCategory.T:
        return False
    # GB9, GB9a, GB9b
    if after in _EXTEND_OR_ZWJ:
        return False
    if after is GraphemeCategory.SPACING_MARK:
        return False
    if before is GraphemeCategory.PREPEND:
        return False
    # GB9c
    if (state is GraphemeMachineState.INDIC_LINKER
            and prev.incb in _INCB_JOINERS
            and nxt.incb is IndicConjunctCategory.CONSONANT):
        return False
    # GB11
    if (state is GraphemeMachineState.AFTER_ZWJ
            and before is GraphemeCategory.ZWJ
            and after is GraphemeCategory.EXTENDED_PICTOGRAPHIC):
        return False
    # GB12, GB13
    if (state is GraphemeMachineState.AWAIT_REGIONAL_PAIR
            and before is GraphemeCategory.REGIONAL_INDICATOR
            and after is GraphemeCategory.REGIONAL_INDICATOR):
        return False
    # GB999
    return True


def transition(
    state: GraphemeMachineState,
    prev: Optional[GraphemeProps],
    nxt: GraphemeProps,
) -> Tuple[bool, GraphemeMachineState]:
    """Decide whether a cluster boundary falls before nxt.

    Args:
        state: The state returned by the previous call (BASE at start).
        prev: Properties of the previous character, or None at start of text.
        nxt: Properties of the character being consumed.

    Returns:
        (has_boundary, new_state). has_boundary is True when nxt starts a
        new cluster.
    """
    new_state = next_state(state, nxt)
    if prev is None:
        return True, new_state
    return _has_boundary(state, prev, nxt), new_state


class GraphemeMachine:
    """Stateful wrapper that remembers the previous character and state.

    WHY: Most callers walk a string character by character. Threading
    (state, prev) through every call is easy to get wrong, so this class
    holds them.

    HOW: next_props() calls transition() with the remembered state and
    previous properties, then stores the results. next_char() classifies
    first using the injected classifier.

    RULES:
    - A fresh machine reports SPLIT for its first character.
    - end_of_input() forgets the previous character, so the next character
      always starts a new cluster.
    - One machine per text stream; machines are cheap to create.
    """

    def __init__(self, classifier: Classifier = classify) -> None:
        self._classifier = classifier
        self.state = GraphemeMachineState.BASE
        self.prev: Optional[GraphemeProps] = None

    def reset(self) -> None:
        """Return to the start-of-text state."""
        self.state = GraphemeMachineState.BASE
        self.prev = None

    def end_of_input(self) -> None:
        """Mark the end of the current text; the next character splits."""
        self.reset()

    def next_props(self, props: GraphemeProps) -> GraphemeBoundary:
        """Feed pre-classified properties and report the boundary before them."""
        boundary, self.state = transition(self.state, self.prev, props)
        self.prev = props
        return GraphemeBoundary.SPLIT if boundary else GraphemeBoundary.CONTINUE

    def next_char(self, char: str) -> GraphemeBoundary:
        """Feed one character and report the boundary before it."""
        return self.next_props(self._classifier(char))

    def iter_chars(self, text: str) -> Iterator[Tuple[GraphemeBoundary, str]]:
        """Yield (boundary, char) for each character of text, in order."""
        for char in text:
            yield self.next_char(char), char


def iter_graphemes(text: str, classifier: Classifier = classify) -> Iterator[str]:
    """Yield the extended grapheme clusters of text, in order."""
    machine = GraphemeMachine(classifier)
    current: List[str] = []
    for boundary, char in machine.iter_chars(text):
        if boundary is GraphemeBoundary.SPLIT and current:
            yield "".join(current)
            current = []
        current.append(char)
    if current:
        yield "".join(current)


def split_graphemes(text: str, classifier: Classifier = classify) -> List[str]:
    """Split text into extended grapheme clusters.

    Example: "e\\u0301!" -> ["e\\u0301", "!"]
    """
    return list(iter_graphemes(text, classifier))
