"""textflow: grapheme-aware, resumable line layout.

WHY: Wrapping text to a width is easy to get subtly wrong: combining marks
split from their base letters, flags cut in half, emoji ZWJ sequences torn
apart, wide CJK cells overflowing the line. textflow segments text into
extended grapheme clusters, measures each one, and lays the result out one
line at a time with a small resumable stepping engine.

HOW: Three-stage pipeline: segment (grapheme machine), measure (pluggable
policies), lay out (step + assembler), then by pluggable formatters.
Each stage is independently testable.

RULES:
- transition() and step() are the stable low-level API
- layout_text() is the one-call entry point for plain strings
- Adding an output format = one new formatter module, no core changes
"""

from textflow.core.assembler import assemble_symbols, layout_symbols, layout_text
from textflow.core.classify import classify
from textflow.core.ir import (
    UNIT_MAX,
    Cohesion,
    Cursor,
    Fit,
    LaidOutText,
    Line,
    Span,
    StepResult,
    Symbol,
)
from textflow.core.layout import step
from textflow.core.machine import GraphemeMachine, split_graphemes, transition
from textflow.core.measure import POLICIES, get_policy
from textflow.core.props import (
    GraphemeBoundary,
    GraphemeCategory,
    GraphemeMachineState,
    GraphemeProps,
    IndicConjunctCategory,
)

__version__ = "0.1.0"

__all__ = [
    "UNIT_MAX",
    "Cohesion",
    "Cursor",
    "Fit",
    "GraphemeBoundary",
    "GraphemeCategory",
    "GraphemeMachine",
    "GraphemeMachineState",
    "GraphemeProps",
    "IndicConjunctCategory",
    "LaidOutText",
    "Line",
    "POLICIES",
    "Span",
    "StepResult",
    "Symbol",
    "assemble_symbols",
    "classify",
    "get_policy",
    "layout_symbols",
    "layout_text",
    "split_graphemes",
    "step",
    "transition",
]
