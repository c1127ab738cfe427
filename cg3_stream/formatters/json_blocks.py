"""JSON formatter with readings nested by depth.

WHY: Tools outside Python (web front ends, annotation viewers) want the
parsed stream as JSON, with sub-analyses shown under the reading they
belong to rather than as a flat list with tab counts.

HOW: Each block becomes a tagged object. Cohort readings are nested using
Cohort.reading_tree(): a reading is attached to its parent's
``subreadings`` list, or to the cohort when it has no parent. The result
is validated with jsonschema against blocks_schema.json before returning.

RULES:
- Block objects carry "type": "cohort" | "escaped" | "text"
- Escaped text is emitted raw (the "\\n" escape is not expanded)
- Every reading keeps its depth alongside the nesting
- Validate output against the schema before returning; raise on failure
- Output suffix: "-blocks.json"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

import jsonschema

from cg3_stream.core.ir import Block, Cohort, Escaped
from cg3_stream.core.output import Output
from cg3_stream.formatters.base import BaseFormatter, FormatterOutput

_SCHEMA_PATH = Path(__file__).resolve().parent / "blocks_schema.json"

_CACHED_SCHEMA: Dict[str, Any] | None = None


def _get_schema() -> Dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _cohort_to_dict(cohort: Cohort) -> Dict[str, Any]:
    top_level: List[Dict[str, Any]] = []
    by_index: Dict[int, Dict[str, Any]] = {}

    for node in cohort.reading_tree():
        entry: Dict[str, Any] = {
            "base_form": node.reading.base_form,
            "tags": list(node.reading.tags),
            "depth": node.reading.depth,
            "subreadings": [],
        }
        by_index[node.index] = entry
        if node.parent is None:
            top_level.append(entry)
        else:
            by_index[node.parent]["subreadings"].append(entry)

    return {"type": "cohort", "word_form": cohort.word_form, "readings": top_level}


def block_to_dict(block: Block) -> Dict[str, Any]:
    """Convert one block to its JSON-ready dict."""
    if isinstance(block, Cohort):
        return _cohort_to_dict(block)
    if isinstance(block, Escaped):
        return {"type": "escaped", "text": block.text}
    return {"type": "text", "line": block.line}


class JSONBlocksFormatter(BaseFormatter):
    """Formatter producing schema-validated JSON."""

    @property
    def name(self) -> str:
        return "JSON Blocks"

    def format(self, output: Output) -> List[FormatterOutput]:
        """Render every block as JSON.

        Raises:
            ParseError: If the stream contains a malformed line.
            jsonschema.ValidationError: If the generated JSON does not
                conform to blocks_schema.json.
        """
        document = {"blocks": [block_to_dict(block) for block in output.blocks()]}

        jsonschema.validate(instance=document, schema=_get_schema())

        return [
            FormatterOutput(
                suffix="-blocks.json",
                content=json.dumps(document, indent=2, ensure_ascii=False),
                media_type="application/json",
            )
        ]
