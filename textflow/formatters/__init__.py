"""Output formatter registry.

WHY: The CLI needs a single lookup to find a formatter by name. A central
dict makes adding a format a matter of one class and one line here.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["plain_text"]()``.

RULES:
- Keys are snake_case identifiers (used in the --formats flag)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Type

from textflow.formatters.plain_text import PlainTextFormatter
from textflow.formatters.spans_json import SpansJsonFormatter

if TYPE_CHECKING:
    from textflow.formatters.base import BaseFormatter

FORMATTERS: Dict[str, Type[BaseFormatter]] = {
    "plain_text": PlainTextFormatter,
    "spans_json": SpansJsonFormatter,
}
