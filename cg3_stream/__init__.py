"""CG stream: parse and re-serialize VISL CG-3 stream output.

WHY: The constraint grammar disambiguator prints a line-oriented stream
of cohorts, readings and escaped text. Tools built on top of it need
that stream as structured data, as plain sentences, or re-rendered
unchanged after inspection.

HOW: Three-stage pipeline: produce (engine handles wrapping the CG-3
tools), parse (core IR built lazily from the text), render (pluggable
formatters). Each stage is independently testable.

RULES:
- All formatters consume the same Output
- Adding an output format = one new formatter module, no core changes
- Parsing never mutates or re-reads the source buffer
"""

from cg3_stream.core import (
    Cohort,
    Escaped,
    InvalidLineError,
    InvalidReadingError,
    Output,
    ParseError,
    Reading,
    Text,
)

__version__ = "0.1.0"

__all__ = [
    "Cohort",
    "Escaped",
    "InvalidLineError",
    "InvalidReadingError",
    "Output",
    "ParseError",
    "Reading",
    "Text",
]
