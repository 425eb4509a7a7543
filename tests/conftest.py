"""Shared test fixtures for the textflow test suite.

WHY: Several test modules need the same symbol streams and sample texts:
the stepping scenario with a breakable symbol in the middle, the mixed
ASCII/CRLF/emoji text that exercises the grapheme machine, and a small
laid-out document for the formatters.

HOW: Pytest fixtures return fresh objects so tests can mutate them freely.

RULES:
- SCENARIO_SYMBOLS is [Atomic(3), Breakable(4), Atomic(2)].
- HELLO_TEXT contains a CRLF pair and an emoji ZWJ sequence (farmer).
- HELLO_CLUSTERS is the exact cluster split of HELLO_TEXT.
"""

from typing import List

import pytest

from textflow.core.assembler import layout_text
from textflow.core.ir import Cohesion, LaidOutText, Symbol


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------

SCENARIO_SYMBOLS: List[Symbol] = [
    Symbol(3, Cohesion.ATOMIC),
    Symbol(4, Cohesion.BREAKABLE),
    Symbol(2, Cohesion.ATOMIC),
]

FARMER = "\U0001F9D1\u200d\U0001F33E"

HELLO_TEXT = "Hello!\r\nBeep " + FARMER

HELLO_CLUSTERS = ["H", "e", "l", "l", "o", "!", "\r\n", "B", "e", "e", "p", " ", FARMER]

PANGRAM = "the quick brown fox jumps over the lazy dog"


@pytest.fixture
def scenario_symbols():
    """[Atomic(3), Breakable(4), Atomic(2)]."""
    return list(SCENARIO_SYMBOLS)


@pytest.fixture
def hello_text():
    """Mixed ASCII, CRLF and emoji ZWJ sample text."""
    return HELLO_TEXT


@pytest.fixture
def pangram():
    return PANGRAM


@pytest.fixture
def wrapped_pangram() -> LaidOutText:
    """The pangram laid out word-by-word at width 16 with the default policy."""
    return layout_text(PANGRAM, 16, words=True)


@pytest.fixture
def hello_clusters():
    """Expected cluster split of HELLO_TEXT."""
    return list(HELLO_CLUSTERS)


@pytest.fixture
def farmer():
    """Person + ZWJ + sheaf of rice: one cluster, three scalars."""
    return FARMER
