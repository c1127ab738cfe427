"""Line classification and block assembly for CG stream output.

WHY: The disambiguator's output mixes three line kinds whose meaning
depends on position: a word-form header opens a cohort, tab-indented
lines are readings of the open cohort, and everything else is free text
or ":"-escaped literal text. Formatters need these folded into cohorts
and pass-through blocks, in file order.

HOW: classify_lines() splits the buffer lazily and tags each line by its
first character. assemble_blocks() is a generator holding one open
cohort and a queue of finished text blocks. A new header flushes the open
cohort; queued text blocks are released once no cohort is open, so text
seen inside a cohort follows that cohort in the output.

RULES:
- '"' → word form, '\\t' → reading, anything else → text
- ':' text lines become Escaped (colon stripped), others Text
- Readings outside a cohort, without a tab depth, or whose first token
  is not a quoted base form yield InvalidReadingError
- Headers missing the "< or >" marker yield InvalidLineError
- Errors are yielded as values; the offending line is consumed and
  assembly continues with the next line
- At end of input the open cohort is emitted, then queued text
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterable, Iterator, Optional, Union

from cg3_stream.core.errors import InvalidLineError, InvalidReadingError, ParseError
from cg3_stream.core.ir import Block, Cohort, Escaped, Line, LineKind, Reading, Text
from cg3_stream.core.tokenizer import tokenize_tags

logger = logging.getLogger(__name__)

_WORD_FORM_OPEN = "\"<"
_WORD_FORM_CLOSE = ">\""


def _split_lines(buf: str) -> Iterator[str]:
    """Yield physical lines without terminators, one at a time.

    Splits on "\\n" only and drops a trailing "\\r", so a final newline
    does not produce an empty last line.
    """
    pos = 0
    end = len(buf)
    while pos < end:
        nl = buf.find("\n", pos)
        if nl == -1:
            nl = end
        line = buf[pos:nl]
        if line.endswith("\r"):
            line = line[:-1]
        yield line
        pos = nl + 1


def classify_line(text: str, number: int = 0) -> Line:
    """Classify one physical line by its leading character."""
    if text.startswith("\""):
        kind = LineKind.WORD_FORM
    elif text.startswith("\t"):
        kind = LineKind.READING
    else:
        kind = LineKind.TEXT
    return Line(kind=kind, text=text, number=number)


def classify_lines(buf: str) -> Iterator[Line]:
    """Lazily classify every physical line of ``buf`` in file order."""
    for number, text in enumerate(_split_lines(buf), start=1):
        yield classify_line(text, number)


def parse_word_form(line: Line) -> Cohort:
    """Open a cohort from a word-form header line.

    Raises:
        InvalidLineError: If the "< opener or >" closer is missing.
    """
    start = line.text.find(_WORD_FORM_OPEN)
    end = line.text.find(_WORD_FORM_CLOSE, start + len(_WORD_FORM_OPEN))
    if start == -1 or end == -1:
        raise InvalidLineError(line.text, line.number)
    return Cohort(word_form=line.text[start + len(_WORD_FORM_OPEN):end])


def parse_reading(line: Line) -> Reading:
    """Build a Reading from a tab-indented line.

    The depth is the number of leading tabs. The remainder is tokenized
    and its first token must be a quoted base form.

    Raises:
        InvalidReadingError: If the line has no tab depth, no tokens, or
            an unquoted first token.
    """
    remainder = line.text.lstrip("\t")
    depth = len(line.text) - len(remainder)
    if depth == 0:
        raise InvalidReadingError(line.text, line.number)

    tokens = tokenize_tags(remainder)
    if not tokens:
        raise InvalidReadingError(line.text, line.number)

    head = tokens[0]
    if len(head) < 2 or not (head.startswith("\"") and head.endswith("\"")):
        raise InvalidReadingError(line.text, line.number)

    return Reading(
        base_form=head[1:-1],
        tags=tokens[1:],
        depth=depth,
        raw_line=line.text,
    )


def _text_block(line: Line) -> Block:
    if line.text.startswith(":"):
        return Escaped(line.text[1:])
    return Text(line.text)


def assemble_blocks(lines: Iterable[Line]) -> Iterator[Union[Block, ParseError]]:
    """Fold classified lines into cohorts and pass-through blocks.

    WHY: Cohort boundaries are implicit: a cohort ends where the next
    header starts or the input runs out. Text lines inside a cohort must
    not split it, yet must keep their relative order with later cohorts.

    HOW: One open cohort plus a FIFO of finished text blocks. Text blocks
    are released only while no cohort is open. A header closes the open
    cohort first; the released queue then drains before the new cohort
    opens.

    Args:
        lines: Classified lines, usually from classify_lines().

    Yields:
        Cohort, Escaped or Text blocks in stream order, or a ParseError
        for each malformed line.
    """
    cohort: Optional[Cohort] = None
    pending: Deque[Block] = deque()

    for line in lines:
        if line.kind is LineKind.WORD_FORM:
            if cohort is not None:
                yield cohort
                cohort = None
            while pending:
                yield pending.popleft()
            try:
                cohort = parse_word_form(line)
            except InvalidLineError as exc:
                logger.debug("Skipping malformed header: %s", exc)
                yield exc

        elif line.kind is LineKind.READING:
            if cohort is None:
                error = InvalidReadingError(line.text, line.number)
                logger.debug("Reading outside a cohort: %s", error)
                yield error
                continue
            try:
                cohort.readings.append(parse_reading(line))
            except InvalidReadingError as exc:
                logger.debug("Skipping malformed reading: %s", exc)
                yield exc

        else:
            pending.append(_text_block(line))
            if cohort is None:
                while pending:
                    yield pending.popleft()

    if cohort is not None:
        yield cohort
    while pending:
        yield pending.popleft()
