"""Quote-aware tokenizer for the tag portion of a reading line.

WHY: Tags are space-separated, but base forms and some tags are quoted
and may contain spaces ("New York") or even stray quote characters in
phonetic annotations ("ænn ærr koo "phon). A plain str.split() breaks
those apart.

HOW: A four-state scanner walks the characters once:
  NONE          between tokens
  TOKEN         inside an unquoted token
  IN_STRING     inside a quoted token
  END_OF_STRING a closing quote was seen; the token ends at the next
                whitespace, so quotes followed by more text stay inside
Tokens are emitted as slices of the input.

RULES:
- A quote in NONE opens a quoted token; a quote in IN_STRING moves to
  END_OF_STRING; quotes in any other state are ordinary characters
- Whitespace ends TOKEN and END_OF_STRING tokens; it is kept inside
  IN_STRING tokens
- A token still pending at end of input is emitted unless
  flush_trailing=False (strict compatibility with the engine's own
  reader, which drops it)
"""

from __future__ import annotations

import enum
from typing import List


class _State(enum.Enum):
    NONE = 0
    TOKEN = 1
    IN_STRING = 2
    END_OF_STRING = 3


def tokenize_tags(text: str, flush_trailing: bool = True) -> List[str]:
    """Split a reading's remainder into tokens, keeping quoted spans whole.

    Args:
        text: The reading line with its leading tabs removed. The first
            token is normally the quoted base form.
        flush_trailing: Emit the token still open at end of input.

    Returns:
        The tokens in order, quotes included on quoted tokens.
    """
    tokens: List[str] = []
    state = _State.NONE
    start = 0

    for i, char in enumerate(text):
        if char == "\"":
            if state is _State.NONE:
                state = _State.IN_STRING
                start = i
            elif state is _State.IN_STRING:
                state = _State.END_OF_STRING
            continue

        if not char.isspace():
            if state is _State.NONE:
                state = _State.TOKEN
                start = i
            continue

        if state is _State.TOKEN or state is _State.END_OF_STRING:
            tokens.append(text[start:i])
            state = _State.NONE

    if flush_trailing and state is not _State.NONE:
        tokens.append(text[start:])

    return tokens
