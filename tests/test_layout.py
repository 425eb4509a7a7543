"""Unit tests for the incremental line-layout stepper.

WHY: step() is called once per line by every layout in the package, and
resumed from its own carry. Off-by-one mistakes in the carry or the fit
show up as dropped, duplicated or reordered text several lines later, so
the stepping contract is pinned down call by call.

HOW: Tests build small symbol streams by hand and check span, consumed,
carry and fit after each call. Property-style tests loop step() with the
carried cursor until the stream is exhausted.

RULES:
- Symbols are written as (units, cohesion) pairs via the A/B/E helpers.
- scenario_symbols comes from conftest.py.
"""

import pytest

from textflow.core.ir import UNIT_MAX, Cohesion, Cursor, Fit, Span, StepResult, Symbol
from textflow.core.layout import step


def A(units):
    return Symbol(units, Cohesion.ATOMIC)


def B(units):
    return Symbol(units, Cohesion.BREAKABLE)


def E(units=0):
    return Symbol(units, Cohesion.ELIDABLE)


def _drain(symbols, extent):
    """Step until the carry runs out; return the list of results."""
    results = []
    cursor = Cursor()
    for _ in range(len(symbols) * 4 + 4):
        result = step(symbols, cursor, extent)
        results.append(result)
        if result.carry is None:
            return results
        cursor = result.carry
    raise AssertionError("step() did not exhaust the stream")


# ---------------------------------------------------------------------------
# Concrete scenario
# ---------------------------------------------------------------------------


class TestConcreteScenario:
    """[Atomic(3), Breakable(4), Atomic(2)] laid out in two calls."""

    def test_first_call_breaks_inside_breakable(self, scenario_symbols):
        result = step(scenario_symbols, Cursor(), 5)
        assert result.consumed == 5
        assert result.fit is Fit.PARTIAL
        assert result.span == Span(start=0, end=2, units=5)
        assert result.carry is not None
        assert result.carry.index == 1
        assert result.carry.offset == 2

    def test_second_call_finishes_the_stream(self, scenario_symbols):
        first = step(scenario_symbols, Cursor(), 5)
        second = step(scenario_symbols, first.carry, 10)
        assert second.consumed == 4
        assert second.fit is Fit.FULL
        assert second.carry is None
        assert second.span == Span(start=1, end=3, units=4)

    def test_plain_index_cursor_resumes_whole_symbol(self, scenario_symbols):
        result = step(scenario_symbols, Cursor(1), 10)
        assert result.consumed == 6
        assert result.fit is Fit.FULL


# ---------------------------------------------------------------------------
# Cohesion rules
# ---------------------------------------------------------------------------


class TestElision:
    """ELIDABLE symbols are skipped for free."""

    def test_elision_is_free(self):
        result = step([A(2), E(7), A(3)], Cursor())
        assert result.span == Span(start=0, end=3, units=5)
        assert result.consumed == 5
        assert result.fit is Fit.FULL

    def test_elidable_does_not_open_a_span(self):
        result = step([E(), E(), A(4)], Cursor(), 2)
        assert result.span is None
        assert result.fit is Fit.NONE
        assert result.carry == Cursor(2)

    def test_all_elidable_remainder_is_full(self):
        result = step([E(), E()], Cursor())
        assert result.span is None
        assert result.span_count == 0
        assert result.consumed == 0
        assert result.fit is Fit.FULL
        assert result.carry is None

    def test_elidable_after_exhausted_extent_is_left_for_next_call(self):
        symbols = [A(2), E()]
        first = step(symbols, Cursor(), 2)
        assert first.fit is Fit.PARTIAL
        assert first.carry == Cursor(1)
        second = step(symbols, first.carry, 2)
        assert second.fit is Fit.FULL
        assert second.span is None


class TestAtomic:
    """ATOMIC symbols are never split."""

    def test_wide_atomic_is_not_consumed(self):
        cursor = Cursor()
        result = step([A(8)], cursor, 5)
        assert result.span_count == 0
        assert result.consumed == 0
        assert result.fit is Fit.NONE
        assert result.carry == cursor

    def test_atomic_stops_the_walk(self):
        result = step([A(2), A(4), A(1)], Cursor(), 5)
        assert result.span == Span(start=0, end=1, units=2)
        assert result.carry == Cursor(1)
        assert result.fit is Fit.PARTIAL

    def test_exact_fit(self):
        result = step([A(2), A(3)], Cursor(), 5)
        assert result.consumed == 5
        assert result.fit is Fit.FULL
        assert result.carry is None

    def test_zero_extent_makes_no_progress(self):
        cursor = Cursor(1)
        result = step([A(1), A(1)], cursor, 0)
        assert result.span is None
        assert result.fit is Fit.NONE
        assert result.carry == cursor


class TestBreakable:
    """BREAKABLE symbols split at the extent and resume from the carry."""

    @pytest.mark.parametrize("width, k", [(4, 1), (4, 3), (9, 5), (2, 1)])
    def test_resumability(self, width, k):
        symbols = [B(width)]
        first = step(symbols, Cursor(), k)
        assert first.consumed == k
        assert first.fit is Fit.PARTIAL
        second = step(symbols, first.carry, width - k)
        assert second.consumed == width - k
        assert first.consumed + second.consumed == width
        assert second.span.start == first.span.start
        assert second.fit is Fit.FULL
        assert second.carry is None

    def test_breakable_split_across_three_calls(self):
        results = _drain([B(7)], 3)
        assert [r.consumed for r in results] == [3, 3, 1]
        assert [r.carry for r in results] == [Cursor(0, 3), Cursor(0, 6), None]

    def test_breakable_that_fits_is_taken_whole(self):
        result = step([A(1), B(2), A(1)], Cursor(), 3)
        assert result.span == Span(start=0, end=2, units=3)
        assert result.carry == Cursor(2)

    def test_offset_beyond_units_clamps_to_zero(self):
        result = step([B(3)], Cursor(0, 5))
        assert result.consumed == 0
        assert result.fit is Fit.FULL


# ---------------------------------------------------------------------------
# Stream-level properties
# ---------------------------------------------------------------------------


class TestFitClassification:
    """FULL exactly when the stream is exhausted, whatever extent is left."""

    def test_full_with_extent_left_over(self):
        result = step([A(1)], Cursor(), 100)
        assert result.fit is Fit.FULL

    def test_partial_when_symbols_remain(self):
        result = step([A(1), A(1)], Cursor(), 1)
        assert result.fit is Fit.PARTIAL

    def test_full_iff_carry_is_none(self):
        symbols = [A(2), B(3), E(), A(1), B(5), A(2)]
        for extent in range(2, 8):
            for result in _drain(symbols, extent):
                if result.fit is Fit.NONE:
                    continue
                assert (result.fit is Fit.FULL) == (result.carry is None)

    def test_cursor_at_end(self):
        result = step([A(1)], Cursor(1))
        assert result == StepResult(span=None, consumed=0, carry=None, fit=Fit.FULL)

    def test_cursor_beyond_end(self):
        result = step([A(1)], Cursor(5), 3)
        assert result.fit is Fit.FULL
        assert result.carry is None


class TestExhaustiveStepping:
    """Repeated stepping consumes every symbol once, in order."""

    @pytest.mark.parametrize("extent", [None, 3, 6, 50])
    def test_units_sum_to_non_elidable_total(self, extent):
        symbols = [A(1), B(2), E(9), A(3), B(1), E(), A(2)]
        results = _drain(symbols, extent)
        total = sum(s.units for s in symbols if s.cohesion is not Cohesion.ELIDABLE)
        assert sum(r.consumed for r in results) == total
        spans = [r.span for r in results if r.span is not None]
        assert sum(s.units for s in spans) == total

    def test_spans_are_ordered_and_contiguous(self):
        symbols = [A(2), B(4), A(2), A(3), B(2)]
        spans = [r.span for r in _drain(symbols, 4) if r.span is not None]
        assert spans[0].start == 0
        assert spans[-1].end == len(symbols)
        for before, after in zip(spans, spans[1:]):
            # a partially consumed symbol appears at the end of one span and
            # the start of the next
            assert after.start in (before.end, before.end - 1)


class TestOutputBuffer:
    """The caller-owned buffer form."""

    def test_span_written_to_buffer(self):
        buf = [None]
        result = step([A(1), A(2)], Cursor(), None, buf)
        assert buf[0] == result.span == Span(0, 2, 3)

    def test_buffer_untouched_without_span(self):
        sentinel = Span(9, 9, 9)
        buf = [sentinel]
        step([A(5)], Cursor(), 2, buf)
        assert buf[0] is sentinel


class TestUnits:
    """Unit arithmetic saturates instead of overflowing."""

    def test_unbounded_extent_takes_everything(self):
        result = step([A(UNIT_MAX - 1), A(1)], Cursor())
        assert result.consumed == UNIT_MAX
        assert result.fit is Fit.FULL

    def test_symbol_rejects_negative_units(self):
        with pytest.raises(ValueError, match="non-negative"):
            Symbol(-1)

    def test_symbol_accepts_cohesion_strings(self):
        assert Symbol(1, "breakable").cohesion is Cohesion.BREAKABLE

    def test_cursor_rejects_negative_fields(self):
        with pytest.raises(ValueError):
            Cursor(-1)
        with pytest.raises(ValueError):
            Cursor(0, -2)
