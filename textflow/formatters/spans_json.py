"""Spans JSON formatter: machine-readable line layout.

WHY: Tools that draw text themselves (editors, caption renderers, test
harnesses) need to know which symbols ended up on which line and how many
units each line occupies, not just the rendered text.

HOW: Builds a document of the form
``{"width", "policy", "lines": [{"start", "end", "units", "text"}]}``,
validates it against ``schemas/layout.schema.json`` with jsonschema, and
serializes it with ``ensure_ascii=False`` so clusters stay readable.

RULES:
- start/end are half-open symbol indices into the whole text
- units is the measured extent of the line before trimming
- Every document is schema-validated before it is returned; a failure
  raises jsonschema.ValidationError
- Output suffix: "-layout.json"
- Media type: "application/json"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from textflow.core.ir import LaidOutText
from textflow.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "schemas" / "layout.schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def _get_schema() -> dict:
    """Load and cache the layout JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def build_document(laid_out: LaidOutText) -> Dict[str, Any]:
    """Convert LaidOutText into the JSON-ready layout document."""
    return {
        "width": laid_out.width,
        "policy": laid_out.policy,
        "lines": [
            {
                "start": line.start,
                "end": line.end,
                "units": line.units,
                "text": line.text,
            }
            for line in laid_out.lines
        ],
    }


class SpansJsonFormatter(BaseFormatter):
    """Render laid-out lines as a schema-validated JSON document."""

    @property
    def name(self) -> str:
        return "Spans JSON"

    def format(self, laid_out: LaidOutText) -> List[FormatterOutput]:
        document = build_document(laid_out)
        jsonschema.validate(instance=document, schema=_get_schema())
        content = json.dumps(document, indent=2, ensure_ascii=False)
        return [FormatterOutput(suffix="-layout.json", content=content, media_type="application/json")]
