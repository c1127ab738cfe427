"""CG stream formatter: renders blocks back to the engine's own dialect.

WHY: Re-serializing the parsed blocks is both the default display form
and the proof that parsing lost nothing: rendering a parsed buffer must
give the buffer back, up to surrounding whitespace.

HOW: Concatenates ``str(block)`` for every block in stream order. Each
block renders itself (see core/ir.py).

RULES:
- Cohort → ``"<word_form>"`` then one line per reading,
  depth tabs + ``"base_form"`` + `` tag`` for each tag
- Escaped → ``:`` + text
- Text → the line verbatim
- Output suffix: "-stream.cg3"
"""

from __future__ import annotations

from typing import List

from cg3_stream.core.output import Output
from cg3_stream.formatters.base import BaseFormatter, FormatterOutput


class CGStreamFormatter(BaseFormatter):
    """Round-trip formatter producing the original stream dialect."""

    @property
    def name(self) -> str:
        return "CG stream"

    def format(self, output: Output) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix="-stream.cg3",
                content=str(output),
                media_type="text/plain",
            )
        ]
