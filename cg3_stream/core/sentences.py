"""Plain-text sentence reconstruction from assembled blocks.

WHY: Callers often want the analysed text back as readable sentences,
e.g. to show a suggestion in context. The stream keeps the original
spacing in ":" lines and marks clause ends with a boundary tag, which is
enough to rebuild sentences without a grammar-aware splitter.

HOW: Walk the blocks, appending each cohort's first base form (or its
word form when it has no readings) and each escaped line's text with
"\\n" expanded. After a cohort whose first reading carries the boundary
tag, and is not a comma, the trimmed accumulator is emitted.

RULES:
- Text blocks contribute nothing
- Commas never end a sentence, even when tagged CLB
- Parse errors are yielded as soon as they are pulled; text accumulated
  so far is kept for the current sentence
- The trailing accumulator is emitted at end of input whenever it holds
  any text, so a final ": " line yields an empty sentence
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Union

from cg3_stream.config import CLAUSE_BOUNDARY_TAG
from cg3_stream.core.errors import ParseError
from cg3_stream.core.ir import Block, Cohort, Escaped


def _ends_sentence(cohort: Cohort, boundary_tag: str) -> bool:
    reading = cohort.first_reading
    if reading is None:
        return False
    return reading.base_form != "," and reading.has_tag(boundary_tag)


def reconstruct_sentences(
    blocks: Iterable[Union[Block, ParseError]],
    boundary_tag: str = CLAUSE_BOUNDARY_TAG,
) -> Iterator[Union[str, ParseError]]:
    """Yield sentences rebuilt from a block sequence.

    Args:
        blocks: Output of assemble_blocks() (errors included).
        boundary_tag: Tag marking a clause boundary that ends a sentence.

    Yields:
        Trimmed sentence strings, or ParseError values from the input.
    """
    parts: List[str] = []

    for block in blocks:
        if isinstance(block, ParseError):
            yield block
            continue

        if isinstance(block, Cohort):
            reading = block.first_reading
            parts.append(reading.base_form if reading is not None else block.word_form)
            if _ends_sentence(block, boundary_tag):
                yield "".join(parts).strip()
                parts = []
        elif isinstance(block, Escaped):
            parts.append(block.unescaped)

    tail = "".join(parts)
    if tail:
        yield tail.strip()
