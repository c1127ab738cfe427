"""Entry point wrapping one buffer of CG stream output.

WHY: Parsing is lazy and may be repeated (render, then rebuild
sentences, then inspect cohorts). Holding the buffer in one object gives
every pass the same source and keeps the pipeline pieces out of the
caller's way.

HOW: Output stores the text and starts a fresh generator pipeline on each
call: classify_lines → assemble_blocks → (formatter | sentences).

RULES:
- The buffer is read-only; every method starts an independent pass
- iter() yields ParseError values; blocks() raises the first one
- str(output) renders every block and raises on the first error
"""

from __future__ import annotations

from typing import Iterator, Union

from cg3_stream.config import CLAUSE_BOUNDARY_TAG
from cg3_stream.core.assembler import assemble_blocks, classify_lines
from cg3_stream.core.errors import ParseError
from cg3_stream.core.ir import Block, Cohort, Line
from cg3_stream.core.sentences import reconstruct_sentences


class Output:
    """A text buffer produced by the disambiguator, ready to be parsed."""

    def __init__(self, buf: str) -> None:
        self._buf = buf

    @classmethod
    def from_bytes(cls, data: bytes) -> "Output":
        """Wrap UTF-8 encoded stream bytes; invalid UTF-8 raises UnicodeDecodeError."""
        return cls(data.decode("utf-8"))

    @property
    def text(self) -> str:
        return self._buf

    def lines(self) -> Iterator[Line]:
        return classify_lines(self._buf)

    def iter(self) -> Iterator[Union[Block, ParseError]]:
        """Lazily assemble blocks; malformed lines come through as errors."""
        return assemble_blocks(self.lines())

    def __iter__(self) -> Iterator[Union[Block, ParseError]]:
        return self.iter()

    def blocks(self) -> Iterator[Block]:
        """Like iter(), but raise the first ParseError instead of yielding it."""
        for block in self.iter():
            if isinstance(block, ParseError):
                raise block
            yield block

    def cohorts(self) -> Iterator[Cohort]:
        """Successfully parsed cohorts only; errors and text are skipped."""
        for block in self.iter():
            if isinstance(block, Cohort):
                yield block

    def sentences(
        self, boundary_tag: str = CLAUSE_BOUNDARY_TAG,
    ) -> Iterator[Union[str, ParseError]]:
        return reconstruct_sentences(self.iter(), boundary_tag=boundary_tag)

    def __str__(self) -> str:
        return "".join(str(block) for block in self.blocks())

    def __repr__(self) -> str:
        return "Output({} chars)".format(len(self._buf))
