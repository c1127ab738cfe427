"""Handles around the VISL CG-3 command-line tools.

WHY: The stream this library parses comes from the constraint grammar
engine. Callers want one object per grammar that they can feed raw
analyser input and get an Output back, without shelling out by hand.
The engine tools are found once per process, and each handle runs at
most one call at a time.

HOW: EngineHandle resolves its binary on construction through
_resolve_binary(), which finds the binary on PATH, runs it once with
``--version`` and caches the result under a module lock, so discovery
happens once per binary per process. run() holds the handle's own lock,
pipes the text through the binary with subprocess.run, and decodes the
UTF-8 result. Applicator runs ``vislcg3 --grammar``; MweSplit runs
``cg-mwesplit``.

RULES:
- Missing binaries, non-zero exits, timeouts and undecodable output all
  raise EngineError; nothing is retried
- The grammar file must exist when the Applicator is created
- A binary whose ``--version`` call fails is never cached
- Input and output are UTF-8
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

from cg3_stream.config import MWESPLIT_BINARY, VISLCG3_BINARY, load_timeout
from cg3_stream.core.output import Output

logger = logging.getLogger(__name__)

_RESOLVE_LOCK = threading.Lock()
_RESOLVED: Dict[str, str] = {}


class EngineError(RuntimeError):
    """Raised when a CG-3 tool cannot be run or fails.

    Attributes:
        returncode: Process exit status, or None if it never ran to the end.
        stderr: Whatever the tool wrote to stderr (may be empty).
    """

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


def _probe_version(path: str) -> str:
    """Run ``path --version`` and return the first line it prints."""
    try:
        proc = subprocess.run(
            [path, "--version"],
            capture_output=True,
            check=False,
            timeout=load_timeout(),
        )
    except (OSError, subprocess.TimeoutExpired) as exc:
        raise EngineError("{} --version failed: {}".format(path, exc)) from None

    stderr = proc.stderr.decode("utf-8", errors="replace")
    if proc.returncode != 0:
        raise EngineError(
            "{} --version exited with status {}".format(Path(path).name, proc.returncode),
            returncode=proc.returncode,
            stderr=stderr,
        )
    lines = proc.stdout.decode("utf-8", errors="replace").strip().splitlines()
    return lines[0] if lines else ""


def _resolve_binary(name: str) -> str:
    """Locate ``name`` on PATH and probe its version, once per process."""
    with _RESOLVE_LOCK:
        cached = _RESOLVED.get(name)
        if cached is not None:
            return cached
        path = shutil.which(name)
        if path is None:
            raise EngineError("{} not found on PATH".format(name))
        version = _probe_version(path)
        logger.info("Using %s at %s (%s)", name, path, version or "unknown version")
        _RESOLVED[name] = path
        return path


def _reset_resolved() -> None:
    """Forget cached binary lookups (tests swap PATH between cases)."""
    with _RESOLVE_LOCK:
        _RESOLVED.clear()


class EngineHandle:
    """Base for handles that pipe text through one CG-3 tool."""

    def __init__(self, binary: str, timeout_s: Optional[float] = None) -> None:
        self._binary = _resolve_binary(binary)
        self._timeout_s = timeout_s if timeout_s is not None else load_timeout()
        self._lock = threading.Lock()

    def _command(self) -> List[str]:
        return [self._binary]

    def run(self, text: str) -> str:
        """Run the tool on ``text`` and return its stdout."""
        cmd = self._command()
        logger.info("Running %s on %d chars", Path(cmd[0]).name, len(text))

        with self._lock:
            try:
                proc = subprocess.run(
                    cmd,
                    input=text.encode("utf-8"),
                    capture_output=True,
                    check=False,
                    timeout=self._timeout_s,
                )
            except FileNotFoundError:
                raise EngineError("{} disappeared from disk".format(cmd[0])) from None
            except subprocess.TimeoutExpired:
                raise EngineError(
                    "{} timed out after {:.0f}s".format(Path(cmd[0]).name, self._timeout_s)
                ) from None

        stderr = proc.stderr.decode("utf-8", errors="replace")
        if proc.returncode != 0:
            logger.warning("%s exited with %d: %s", cmd[0], proc.returncode, stderr.strip())
            raise EngineError(
                "{} exited with status {}".format(Path(cmd[0]).name, proc.returncode),
                returncode=proc.returncode,
                stderr=stderr,
            )

        try:
            return proc.stdout.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EngineError(
                "{} produced invalid UTF-8: {}".format(Path(cmd[0]).name, exc),
                returncode=proc.returncode,
                stderr=stderr,
            ) from None

    def analyse(self, text: str) -> Output:
        """Run the tool and wrap its stream for parsing."""
        return Output(self.run(text))


class Applicator(EngineHandle):
    """A loaded grammar, applied with ``vislcg3``."""

    def __init__(
        self,
        grammar_path: Union[str, Path],
        timeout_s: Optional[float] = None,
        binary: str = VISLCG3_BINARY,
    ) -> None:
        path = Path(grammar_path)
        if not path.is_file():
            raise FileNotFoundError("Grammar file not found: {}".format(path))
        self.grammar_path = path
        super().__init__(binary, timeout_s=timeout_s)

    def _command(self) -> List[str]:
        return [self._binary, "--grammar", str(self.grammar_path)]


class MweSplit(EngineHandle):
    """Splits multi-word-expression cohorts with ``cg-mwesplit``."""

    def __init__(
        self,
        timeout_s: Optional[float] = None,
        binary: str = MWESPLIT_BINARY,
    ) -> None:
        super().__init__(binary, timeout_s=timeout_s)
