"""Intermediate representation for parsed CG stream output.

WHY: The disambiguator prints a flat, line-oriented stream. Formatters,
the sentence reconstructor and any downstream tool need the same
structured view of it: cohorts with ordered readings, plus the free text
and escaped literal lines that sit between them.

HOW: Plain dataclasses, one per stream element:
  Line      — a classified physical line (word form, reading or text)
  Reading   — one analysis: base form, tags and tab depth
  Cohort    — a surface word form and its readings in file order
  Escaped   — a ":"-prefixed literal line (inter-word whitespace etc.)
  Text      — any other line, passed through verbatim
Each block's ``__str__`` renders it back to the exact stream dialect.

RULES:
- Reading.depth is the number of leading tabs; 1 = direct reading
- Cohort.readings keeps file order and is never restructured; nesting
  is rebuilt on demand by Cohort.reading_tree()
- Escaped.text holds the raw remainder; "\\n" is expanded only by
  Escaped.unescaped (and the sentence reconstructor)
- Rendering a block always ends with a newline
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Union


class LineKind(str, enum.Enum):
    """Line categories, decided by the first character of the line."""

    WORD_FORM = "word_form"
    READING = "reading"
    TEXT = "text"


@dataclass(frozen=True)
class Line:
    """One classified physical line (terminator stripped)."""

    kind: LineKind
    text: str
    number: int


@dataclass
class Reading:
    """One candidate analysis of a cohort, or a sub-analysis of another reading.

    WHY: Compound and derived words get nested analyses. The stream
    encodes the nesting with extra leading tabs instead of explicit
    links, so the depth is kept alongside each reading.

    RULES:
    - base_form: text between the quotes of the first token
    - tags: remaining tokens in order; quoted tags keep their quotes
    - depth: count of leading tabs, always >= 1
    - raw_line: the physical line as read, for lossless reproduction
    """

    base_form: str
    tags: List[str] = field(default_factory=list)
    depth: int = 1
    raw_line: str = field(default="", repr=False, compare=False)

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def __str__(self) -> str:
        return "{}\"{}\"{}".format(
            "\t" * self.depth,
            self.base_form,
            "".join(" " + tag for tag in self.tags),
        )


@dataclass(frozen=True)
class ReadingNode:
    """A reading with its position in the implicit depth tree.

    ``parent`` is the index (in Cohort.readings) of the nearest preceding
    reading with a smaller depth, or None for top-level readings.
    """

    reading: Reading
    index: int
    parent: Optional[int]


@dataclass
class Cohort:
    """A surface word form and its ordered readings.

    WHY: The cohort is the token unit of the stream. Every formatter and
    the sentence reconstructor work cohort by cohort.

    RULES:
    - word_form: text between the "< and >" markers of the header line
    - readings: file order, may be empty
    """

    word_form: str
    readings: List[Reading] = field(default_factory=list)

    @property
    def first_reading(self) -> Optional[Reading]:
        return self.readings[0] if self.readings else None

    def reading_tree(self) -> Iterator[ReadingNode]:
        """Yield every reading with the index of its parent reading.

        Walks the flat list once, keeping a stack of open ancestors. A
        reading closes all open ancestors at the same or greater depth.
        """
        stack: List[ReadingNode] = []
        for index, reading in enumerate(self.readings):
            while stack and stack[-1].reading.depth >= reading.depth:
                stack.pop()
            node = ReadingNode(
                reading=reading,
                index=index,
                parent=stack[-1].index if stack else None,
            )
            stack.append(node)
            yield node

    def subreadings(self, index: int) -> List[Reading]:
        """Direct sub-analyses of the reading at ``index``."""
        return [node.reading for node in self.reading_tree() if node.parent == index]

    def __str__(self) -> str:
        lines = ["\"<{}>\"\n".format(self.word_form)]
        lines.extend("{}\n".format(reading) for reading in self.readings)
        return "".join(lines)


@dataclass
class Escaped:
    """A ":"-prefixed literal line; ``text`` excludes the colon."""

    text: str

    @property
    def unescaped(self) -> str:
        return self.text.replace("\\n", "\n")

    def __str__(self) -> str:
        return ":{}\n".format(self.text)


@dataclass
class Text:
    """An unrecognised line, reproduced verbatim."""

    line: str

    def __str__(self) -> str:
        return "{}\n".format(self.line)


Block = Union[Cohort, Escaped, Text]
