"""Configuration constants and .env loading.

WHY: Centralizes the values users may need to override (where the CG-3
binaries live, how long to wait for them, how chatty logging is) so they
are easy to find and change without touching parsing logic.

HOW: python-dotenv loads the .env file on import. Defaults are module
level constants overridable through environment variables.

RULES:
- CLAUSE_BOUNDARY_TAG is fixed; it is the only tag the library interprets
- Binary names are looked up on PATH unless an absolute path is given
- load_timeout() raises ValueError for a malformed CG3_TIMEOUT_S
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the working directory
load_dotenv()

# ---------------------------------------------------------------------------
# Stream dialect
# ---------------------------------------------------------------------------

CLAUSE_BOUNDARY_TAG = "CLB"
"""Tag marking a clause boundary; ends a reconstructed sentence."""

# ---------------------------------------------------------------------------
# Engine binaries
# ---------------------------------------------------------------------------

VISLCG3_BINARY = os.getenv("CG3_VISLCG3", "vislcg3")
MWESPLIT_BINARY = os.getenv("CG3_MWESPLIT", "cg-mwesplit")

DEFAULT_TIMEOUT_S = 60.0

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL = os.getenv("CG3_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def load_timeout() -> float:
    """Read the engine timeout in seconds from CG3_TIMEOUT_S.

    RULES:
    - Unset or empty → DEFAULT_TIMEOUT_S
    - Must parse as a positive number, otherwise ValueError
    """
    raw = os.getenv("CG3_TIMEOUT_S", "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_S
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(
            "CG3_TIMEOUT_S must be a number of seconds, got {!r}".format(raw)
        ) from None
    if timeout <= 0:
        raise ValueError("CG3_TIMEOUT_S must be positive, got {!r}".format(raw))
    return timeout
