"""Plain text formatter: one reconstructed sentence per line.

WHY: Reviewers want the analysed text back as readable sentences, not as
cohorts and tags.

HOW: Pulls sentences from Output.sentences() and joins them with
newlines. Sentences may themselves contain newlines when the stream
escaped them in ":" lines.

RULES:
- Sentence boundaries come from the clause boundary tag (default CLB)
- The first ParseError pulled is raised
- Empty sentences (a whitespace-only tail) are not written
- Trailing newline only when there is content
- Output suffix: "-sentences.txt"
"""

from __future__ import annotations

from typing import List

from cg3_stream.config import CLAUSE_BOUNDARY_TAG
from cg3_stream.core.errors import ParseError
from cg3_stream.core.output import Output
from cg3_stream.formatters.base import BaseFormatter, FormatterOutput


class SentencesFormatter(BaseFormatter):
    """Formatter producing reconstructed plain-text sentences."""

    def __init__(self, boundary_tag: str = CLAUSE_BOUNDARY_TAG) -> None:
        self.boundary_tag = boundary_tag

    @property
    def name(self) -> str:
        return "Plain Text Sentences"

    def format(self, output: Output) -> List[FormatterOutput]:
        sentences: List[str] = []
        for sentence in output.sentences(boundary_tag=self.boundary_tag):
            if isinstance(sentence, ParseError):
                raise sentence
            if sentence:
                sentences.append(sentence)

        content = "\n".join(sentences)
        if content:
            content += "\n"

        return [
            FormatterOutput(
                suffix="-sentences.txt",
                content=content,
                media_type="text/plain",
            )
        ]
