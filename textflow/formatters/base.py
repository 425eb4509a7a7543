"""Abstract base formatter and output container.

WHY: Every output format consumes the same LaidOutText but produces
different file content. This base class keeps the interface uniform so the
CLI and library callers can drive any formatter generically.

HOW: BaseFormatter is an ABC with a ``name`` property and a ``format()``
method. FormatterOutput is a plain dataclass bundling a file suffix with
its content and MIME type.

RULES:
- Subclasses MUST implement ``name`` and ``format()``
- ``format()`` returns a list, usually of one item
- ``suffix`` starts with a hyphen, e.g. ``"-wrapped.txt"``
- The caller prepends the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Union

from textflow.core.ir import LaidOutText


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-layout.json"`` -> ``"notes-layout.json"``.
        content: The file content.
        media_type: MIME type for the content.
    """

    suffix: str
    content: Union[str, bytes]
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Plain text'."""

    @abstractmethod
    def format(self, laid_out: LaidOutText) -> List[FormatterOutput]:
        """Render laid-out text into one or more output files.

        Args:
            laid_out: Lines, width and policy produced by layout_text().

        Returns:
            List of FormatterOutput objects.
        """
