"""Grapheme break property values and segmentation machine states.

WHY: The grapheme boundary machine decides cluster boundaries from two
Unicode properties per scalar (Grapheme_Cluster_Break and
Indic_Conjunct_Break) plus a small amount of remembered context. Keeping
these closed value sets in one module gives the classifier, the machine,
and the tests a single shared vocabulary.

HOW: Each property is a str-valued enum so values print and serialize
cleanly. GraphemeProps bundles both properties of one scalar into an
immutable pair. GraphemeMachineState lists the six context states the
machine can be in between characters.

RULES:
- Every scalar has exactly one GraphemeCategory and one IndicConjunctCategory.
- ExtendedPictographic is treated as mutually exclusive with the other
  break categories (the classifier checks the break tables first).
- GraphemeMachineState.BASE is the initial state; there is no terminal state.
- These are closed sets; never subclass or extend them at runtime.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class GraphemeCategory(str, enum.Enum):
    """Grapheme_Cluster_Break property values (UAX #29, section 3.1)."""

    OTHER = "Other"
    CR = "CR"
    LF = "LF"
    CONTROL = "Control"
    EXTEND = "Extend"
    ZWJ = "ZWJ"
    REGIONAL_INDICATOR = "Regional_Indicator"
    PREPEND = "Prepend"
    SPACING_MARK = "SpacingMark"
    L = "L"
    V = "V"
    T = "T"
    LV = "LV"
    LVT = "LVT"
    EXTENDED_PICTOGRAPHIC = "Extended_Pictographic"


class IndicConjunctCategory(str, enum.Enum):
    """Indic_Conjunct_Break property values, used by rule GB9c."""

    NONE = "None"
    CONSONANT = "Consonant"
    EXTEND = "Extend"
    LINKER = "Linker"


_CONTROLS = frozenset({GraphemeCategory.CR, GraphemeCategory.LF, GraphemeCategory.CONTROL})


@dataclass(frozen=True)
class GraphemeProps:
    """Both break properties of a single scalar.

    Attributes:
        category: The Grapheme_Cluster_Break value.
        incb: The Indic_Conjunct_Break value (NONE for most scalars).
    """

    category: GraphemeCategory
    incb: IndicConjunctCategory = IndicConjunctCategory.NONE

    def is_control(self) -> bool:
        """True for CR, LF, or Control (rules GB4/GB5)."""
        return self.category in _CONTROLS


class GraphemeMachineState(str, enum.Enum):
    """Context remembered by the boundary machine between characters.

    RULES:
    - BASE: no pending multi-character sequence
    - AWAIT_REGIONAL_PAIR: one regional indicator seen, a second may join it
    - BEFORE_ZWJ: inside ExtPict Extend*, a ZWJ may follow
    - AFTER_ZWJ: ExtPict Extend* ZWJ seen, an ExtPict may join
    - INDIC_CONSONANT: InCB consonant seen, possibly followed by InCB extends
    - INDIC_LINKER: consonant then at least one InCB linker seen
    """

    BASE = "base"
    AWAIT_REGIONAL_PAIR = "await_regional_pair"
    BEFORE_ZWJ = "before_zwj"
    AFTER_ZWJ = "after_zwj"
    INDIC_CONSONANT = "indic_consonant"
    INDIC_LINKER = "indic_linker"


class GraphemeBoundary(str, enum.Enum):
    """Outcome of feeding one character to a GraphemeMachine."""

    SPLIT = "split"
    CONTINUE = "continue"
