"""Command-line interface for the CG stream parser.

WHY: Users need a simple way to turn disambiguator output (or raw text
plus a grammar) into a readable or machine-friendly form from the
terminal, and to check that a stream parses cleanly.

HOW: Uses argparse to accept an input file (or "-" for stdin), optional
grammar / MWE-split stages, output format selection and an output
directory. Optional engine stages run first, then the stream is parsed
and each selected formatter renders it. Without --output-dir the
rendered content goes to stdout; status messages always go to stderr.

RULES:
- Positional argument: input file path, "-" reads stdin
- --grammar runs vislcg3 on the input first; --mwesplit runs cg-mwesplit
  after it
- --formats: comma-separated formatter keys (default: cg)
- --strict (default) aborts on the first malformed line; --no-strict
  reports malformed lines and drops them
- Output naming with --output-dir: {stem}{suffix}, numeric suffix on
  conflicts (-blocks-2.json)
- Exit status 1 on errors, 130 on Ctrl-C
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from cg3_stream.config import CLAUSE_BOUNDARY_TAG, LOG_FORMAT, LOG_LEVEL
from cg3_stream.core.errors import ParseError
from cg3_stream.core.output import Output
from cg3_stream.engine import Applicator, EngineError, MweSplit
from cg3_stream.formatters import FORMATTERS
from cg3_stream.formatters.base import FormatterOutput
from cg3_stream.formatters.plain_text import SentencesFormatter

logger = logging.getLogger(__name__)

_STDIN = "-"


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Return output_dir/{stem}{suffix}, numbered -2, -3, ... when taken.

    Formatter suffixes always end in an extension ("-blocks.json"), so the
    counter goes right before it ("-blocks-2.json").
    """
    name, _, ext = suffix.rpartition(".")
    candidate = output_dir / "{}{}".format(stem, suffix)
    counter = 2
    while candidate.exists():
        candidate = output_dir / "{}{}-{}.{}".format(stem, name, counter, ext)
        counter += 1
    return candidate


def _save_output(output: FormatterOutput, stem: str, output_dir: Path) -> Path:
    path = _resolve_output_path(stem, output.suffix, output_dir)
    path.write_text(output.content, encoding="utf-8")
    return path


def _read_input(input_file: str) -> str:
    if input_file == _STDIN:
        return sys.stdin.read()
    return Path(input_file).read_text(encoding="utf-8")


def _drop_malformed(output: Output) -> Output:
    """Report every malformed line and rebuild the stream without them."""
    kept: List[str] = []
    errors = 0
    for block in output.iter():
        if isinstance(block, ParseError):
            errors += 1
            _status("  Skipped: {}".format(block))
            continue
        kept.append(str(block))
    if errors:
        _status("  {} malformed line(s) dropped".format(errors))
    return Output("".join(kept))


def _parse_format_keys(formats: Optional[str]) -> List[str]:
    if not formats:
        return ["cg"]
    keys = [f.strip() for f in formats.split(",") if f.strip()]
    for key in keys:
        if key not in FORMATTERS:
            available = ", ".join(sorted(FORMATTERS.keys()))
            raise ValueError(
                "Unknown format '{}'. Available formats: {}".format(key, available)
            )
    return keys


def _run(args: argparse.Namespace) -> None:
    format_keys = _parse_format_keys(args.formats)

    output_dir: Optional[Path] = None
    if args.output_dir:
        output_dir = Path(args.output_dir).resolve()
        if not output_dir.is_dir():
            raise ValueError("Output directory does not exist: {}".format(output_dir))

    text = _read_input(args.input_file)
    stem = "stdin" if args.input_file == _STDIN else Path(args.input_file).stem

    if args.grammar:
        _status("Applying grammar {}...".format(args.grammar))
        text = Applicator(args.grammar).run(text)
    if args.mwesplit:
        _status("Splitting multi-word expressions...")
        text = MweSplit().run(text)

    output = Output(text)
    if not args.strict:
        output = _drop_malformed(output)

    for key in format_keys:
        if key == "sentences":
            formatter = SentencesFormatter(boundary_tag=args.boundary_tag)
        else:
            formatter = FORMATTERS[key]()
        logger.info("Running %s formatter", formatter.name)
        for rendered in formatter.format(output):
            if output_dir is None:
                sys.stdout.write(rendered.content)
            else:
                saved = _save_output(rendered, stem, output_dir)
                _status("  Saved: {}".format(saved))


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="cg3_stream",
        description="Parse VISL CG-3 stream output and render it as CG text, "
                    "plain sentences or JSON.",
    )

    parser.add_argument(
        "input_file",
        help="Stream file to parse, or '-' to read standard input.",
    )

    parser.add_argument(
        "--grammar",
        default=None,
        help="Apply this CG-3 grammar to the input with vislcg3 before parsing.",
    )

    parser.add_argument(
        "--mwesplit",
        action="store_true",
        help="Run cg-mwesplit on the stream before parsing.",
    )

    parser.add_argument(
        "--formats",
        default=None,
        help="Comma-separated list of output formats. "
             "Available: {}. Default: cg.".format(", ".join(sorted(FORMATTERS.keys()))),
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save output files (default: write to stdout).",
    )

    parser.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Abort on the first malformed line (default: %(default)s).",
    )

    parser.add_argument(
        "--boundary-tag",
        default=CLAUSE_BOUNDARY_TAG,
        help="Tag that ends a sentence for the sentences format (default: %(default)s).",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log engine calls and parse details to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m cg3_stream`` and the cg3-stream script.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format=LOG_FORMAT,
    )

    try:
        _run(args)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except (ParseError, EngineError, ValueError, OSError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
