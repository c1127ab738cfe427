"""Abstract base formatter and output container.

WHY: Every output format consumes the same parsed Output but produces
different content. This base class enforces a consistent interface so
the CLI can work with any formatter generically.

HOW: BaseFormatter is an ABC with two requirements, a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list; current formatters return one item
- ``suffix`` starts with a hyphen, e.g. ``"-sentences.txt"``
- Formatters raise the first ParseError found in the stream
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from cg3_stream.core.output import Output


@dataclass
class FormatterOutput:
    """One rendered output.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-blocks.json"`` → ``"novel-blocks.json"``.
        content: The rendered text.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all output formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'CG stream'."""

    @abstractmethod
    def format(self, output: Output) -> list[FormatterOutput]:
        """Render a parsed stream.

        Args:
            output: The buffer to parse and render.

        Returns:
            List of FormatterOutput objects.

        Raises:
            ParseError: If the stream contains a malformed line.
        """
