"""Command-line interface for textflow.

WHY: Most uses of a wrapper are one-offs from the terminal: wrap a file to
72 columns, see how a string breaks at a given width, or dump the line
spans for a renderer. The CLI wires together input reading, segmentation,
measurement, layout, pluggable formatters and file saving behind a single
command.

HOW: Uses argparse to accept an input path (or stdin), width, policy, tab
size, word mode, trimming and output selection. Without --output-dir the
first selected formatter's content goes to stdout, so the CLI can sit in a
pipe. With --output-dir every selected formatter's files are saved as
{stem}{suffix}. Status messages go to stderr.

RULES:
- Positional argument: input file path; "-" or omitted reads stdin
- Input files are decoded as UTF-8
- --width defaults to TEXTFLOW_WIDTH, --policy to TEXTFLOW_POLICY,
  --tab-size to TEXTFLOW_TAB_SIZE
- --formats: comma-separated formatter keys (default: plain_text)
- Output naming: {stem}{suffix}, numeric suffix for conflicts (-wrapped-2.txt)
- Stdin input uses the stem "stdin"
- Errors print "Error: ..." to stderr and exit with status 1
"""

from __future__ import annotations

import argparse
import itertools
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from textflow.config import load_log_level, load_policy, load_tab_size, load_width
from textflow.core.assembler import layout_text
from textflow.core.measure import POLICIES
from textflow.formatters import FORMATTERS
from textflow.formatters.base import FormatterOutput

logger = logging.getLogger(__name__)

DEFAULT_FORMATS = "plain_text"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else load_log_level()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        raise ValueError("Unknown log level '{}'".format(level_name))
    logging.basicConfig(level=level, format=_LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("textflow").setLevel(level)


def _read_input(source: Optional[str]) -> Tuple[str, str]:
    """Read the input text and pick an output stem.

    Returns:
        (text, stem) where stem names output files.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid UTF-8 or does not exist.
    """
    if source is None or source == "-":
        return sys.stdin.read(), "stdin"

    input_path = Path(source).resolve()
    if not input_path.is_file():
        raise ValueError("File not found: {}".format(input_path))
    return input_path.read_text(encoding="utf-8"), input_path.stem


def _parse_formats(raw: str) -> List[str]:
    keys = [f.strip() for f in raw.split(",") if f.strip()]
    if not keys:
        raise ValueError("No output formats given")
    for key in keys:
        if key not in FORMATTERS:
            raise ValueError(
                "Unknown format '{}'. Available: {}".format(key, ", ".join(sorted(FORMATTERS.keys())))
            )
    return keys


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Pick a free file name for one formatter output.

    Wrapped files are cheap to regenerate but often hand-edited afterwards,
    so a second run with the same input writes notes-wrapped-2.txt next to
    notes-wrapped.txt instead of replacing it. The counter goes before the
    extension so editors still recognise the file type; a suffix without an
    extension gets the counter appended.
    """
    candidate = output_dir / (stem + suffix)
    name, dot, ext = suffix.rpartition(".")
    if not dot or not name:
        name, ext = suffix, ""
    else:
        ext = dot + ext

    for counter in itertools.count(2):
        if not candidate.exists():
            return candidate
        candidate = output_dir / "{}{}-{}{}".format(stem, name, counter, ext)


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    path = _resolve_output_path(stem, output.suffix, output_dir)
    if isinstance(output.content, bytes):
        path.write_bytes(output.content)
    else:
        path.write_text(output.content, encoding="utf-8")
    return path


def _write_stdout(output: FormatterOutput) -> None:
    if isinstance(output.content, bytes):
        sys.stdout.buffer.write(output.content)
    else:
        sys.stdout.write(output.content)
    sys.stdout.flush()


def _run(args: argparse.Namespace) -> None:
    """Read, lay out, format and emit.

    RULES:
    - Validate every option before reading input
    - Without --output-dir only the first formatter's first output is
      written, to stdout
    """
    width = args.width if args.width is not None else load_width()
    if width < 1:
        raise ValueError("--width must be at least 1, got {}".format(width))
    tab_size = args.tab_size if args.tab_size is not None else load_tab_size()
    if tab_size < 1:
        raise ValueError("--tab-size must be at least 1, got {}".format(tab_size))
    policy = args.policy if args.policy is not None else load_policy()
    format_keys = _parse_formats(args.formats)

    output_dir = None  # type: Optional[Path]
    if args.output_dir:
        output_dir = Path(args.output_dir).resolve()
        if not output_dir.is_dir():
            raise ValueError("Output directory does not exist: {}".format(output_dir))

    text, stem = _read_input(args.input_file)
    logger.debug("Read %d characters from %s", len(text), args.input_file or "stdin")

    laid_out = layout_text(
        text,
        width,
        policy=policy,
        words=args.words,
        trim=args.trim,
        tab_size=tab_size,
    )

    if output_dir is None:
        formatter = FORMATTERS[format_keys[0]]()
        outputs = formatter.format(laid_out)
        if outputs:
            _write_stdout(outputs[0])
        return

    saved_files = []  # type: List[Path]
    for key in format_keys:
        formatter = FORMATTERS[key]()
        _status("  Running {} formatter...".format(formatter.name))
        for output in formatter.format(laid_out):
            saved_path = _save_output(output, stem, output_dir)
            saved_files.append(saved_path)
            _status("  Saved: {}".format(saved_path.name))

    _status("Done! Saved {} file(s) to {}".format(len(saved_files), output_dir))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without running a layout.

    RULES:
    - Positional: input_file (optional, "-" for stdin)
    - Optional: --width, --policy, --tab-size, --words, --no-trim
    - Optional: --formats (comma-separated), --output-dir, --verbose
    """
    parser = argparse.ArgumentParser(
        prog="textflow",
        description="Wrap text to a width without splitting grapheme clusters, "
                    "and emit the wrapped text or its line spans.",
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        default=None,
        help="Path to a UTF-8 text file, or '-' for stdin (default: stdin).",
    )

    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Line width in policy units (default: TEXTFLOW_WIDTH or 80).",
    )

    parser.add_argument(
        "--policy",
        default=None,
        help="Measurement policy. Available: {}. "
             "Default: TEXTFLOW_POLICY or 'default'.".format(", ".join(POLICIES.keys())),
    )

    parser.add_argument(
        "--tab-size",
        type=int,
        default=None,
        help="Tab width for the terminal policy (default: TEXTFLOW_TAB_SIZE or 4).",
    )

    parser.add_argument(
        "--words",
        action="store_true",
        help="Keep runs of non-space clusters together (word wrapping).",
    )

    parser.add_argument(
        "--no-trim",
        dest="trim",
        action="store_false",
        help="Keep whitespace at line edges.",
    )

    parser.add_argument(
        "--formats",
        default=DEFAULT_FORMATS,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: %(default)s.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: print to stdout).",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        _configure_logging(args.verbose)
        _run(args)
    except (ValueError, OSError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)


if __name__ == "__main__":
    main()
