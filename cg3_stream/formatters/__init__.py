"""Output formatter registry.

WHY: The CLI needs a single lookup to find the right formatter by name.
A central dict makes it trivial to add new formats: create the formatter
class, import it here, add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["json"]()``.

RULES:
- Keys are short snake_case identifiers (used in CLI flags)
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cg3_stream.formatters.cg_stream import CGStreamFormatter
from cg3_stream.formatters.json_blocks import JSONBlocksFormatter
from cg3_stream.formatters.plain_text import SentencesFormatter

if TYPE_CHECKING:
    from cg3_stream.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "cg": CGStreamFormatter,
    "sentences": SentencesFormatter,
    "json": JSONBlocksFormatter,
}
