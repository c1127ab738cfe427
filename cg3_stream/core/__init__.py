"""Core parsing modules: IR, tokenizer, assembler, sentence reconstruction.

WHY: The core package holds the stable heart of the library, the IR
dataclasses and the logic that builds them from raw stream text. Every
formatter and the CLI consume what is built here.

HOW: ir.py defines the data structures, errors.py the typed parse
errors, tokenizer.py splits reading tags, assembler.py classifies lines
and folds them into blocks, sentences.py rebuilds plain text, and
output.py ties them together behind the Output entry point.

RULES:
- IR dataclasses are the contract, change with care
- Assembly is format-agnostic; no formatter logic here
- Everything here is pure: no I/O, no global state
"""

from cg3_stream.core.errors import (
    ErrorKind,
    InvalidLineError,
    InvalidReadingError,
    ParseError,
)
from cg3_stream.core.ir import (
    Block,
    Cohort,
    Escaped,
    Line,
    LineKind,
    Reading,
    ReadingNode,
    Text,
)
from cg3_stream.core.output import Output
from cg3_stream.core.tokenizer import tokenize_tags

__all__ = [
    "Block",
    "Cohort",
    "ErrorKind",
    "Escaped",
    "InvalidLineError",
    "InvalidReadingError",
    "Line",
    "LineKind",
    "Output",
    "ParseError",
    "Reading",
    "ReadingNode",
    "Text",
    "tokenize_tags",
]
