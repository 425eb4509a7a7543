"""Plain text formatter: the wrapped text itself.

WHY: The most common use of the wrapper is to get text back, cut to the
requested width, ready to paste into a terminal, a commit message or a
fixed-width document.

HOW: Joins the rendered lines with newlines and ends the file with a
single newline.

RULES:
- One output line per laid-out line, in order
- Empty input produces an empty file, not a lone newline
- Output suffix: "-wrapped.txt"
- Media type: "text/plain"
"""

from __future__ import annotations

from typing import List

from textflow.core.ir import LaidOutText
from textflow.formatters.base import BaseFormatter, FormatterOutput


class PlainTextFormatter(BaseFormatter):
    """Render laid-out lines as newline-separated text."""

    @property
    def name(self) -> str:
        return "Plain text"

    def format(self, laid_out: LaidOutText) -> List[FormatterOutput]:
        content = laid_out.text
        if laid_out.lines:
            content += "\n"
        return [FormatterOutput(suffix="-wrapped.txt", content=content, media_type="text/plain")]
