"""Unit tests for the CG-3 engine handles.

WHY: The engine handles are the only place the library talks to other
processes. Failures there (missing binary, bad grammar, crash, timeout)
must become EngineError with enough detail to act on, never a hang or a
half-parsed stream.

HOW: shutil.which and subprocess.run are replaced with monkeypatch fakes
so no CG-3 installation is needed. Tests check:
  - Binary lookup and the --version probe happen once per process
  - Command lines for vislcg3 and cg-mwesplit
  - UTF-8 in and out, and Output wrapping
  - Each failure mode raises EngineError

RULES:
- The resolved-binary cache is cleared before every test
"""

import subprocess
from types import SimpleNamespace

import pytest

from cg3_stream import engine
from cg3_stream.core.output import Output
from cg3_stream.engine import Applicator, EngineError, MweSplit

_STREAM = "\"<a>\"\n\t\"a\" N\n"


@pytest.fixture(autouse=True)
def _fresh_cache():
    engine._reset_resolved()
    yield
    engine._reset_resolved()


@pytest.fixture
def which_calls(monkeypatch):
    calls = []

    def fake_which(name):
        calls.append(name)
        return "/usr/bin/{}".format(name)

    monkeypatch.setattr(engine.shutil, "which", fake_which)
    return calls


@pytest.fixture
def fake_run(monkeypatch):
    """Record subprocess.run calls and answer with a configurable result.

    ``--version`` calls are kept in ``probes`` and answered from the
    ``probe_*`` fields so that failure settings only hit real runs.
    """
    state = SimpleNamespace(
        calls=[],
        returncode=0,
        stdout=_STREAM.encode("utf-8"),
        stderr=b"",
        raises=None,
        probes=[],
        probe_returncode=0,
        probe_stdout=b"VISL CG-3 Disambiguator version 1.4.9.13898\n",
    )

    def run(cmd, **kwargs):
        if cmd[1:] == ["--version"]:
            state.probes.append((cmd, kwargs))
            return SimpleNamespace(returncode=state.probe_returncode, stdout=state.probe_stdout, stderr=b"")
        state.calls.append((cmd, kwargs))
        if state.raises is not None:
            raise state.raises
        return SimpleNamespace(returncode=state.returncode, stdout=state.stdout, stderr=state.stderr)

    monkeypatch.setattr(engine.subprocess, "run", run)
    return state


@pytest.fixture
def grammar(tmp_path):
    path = tmp_path / "grammar.cg3"
    path.write_text("DELIMITERS = \"<.>\" ;\n", encoding="utf-8")
    return path


class TestBinaryResolution:

    def test_lookup_is_cached(self, which_calls, fake_run, grammar):
        Applicator(grammar, timeout_s=5)
        Applicator(grammar, timeout_s=5)
        assert which_calls == ["vislcg3"]

    def test_each_binary_resolved_separately(self, which_calls, fake_run, grammar):
        Applicator(grammar, timeout_s=5)
        MweSplit(timeout_s=5)
        assert which_calls == ["vislcg3", "cg-mwesplit"]

    def test_missing_binary(self, monkeypatch, grammar):
        monkeypatch.setattr(engine.shutil, "which", lambda name: None)
        with pytest.raises(EngineError, match="not found on PATH"):
            Applicator(grammar, timeout_s=5)

    def test_version_probed_once_per_binary(self, which_calls, fake_run, grammar):
        Applicator(grammar, timeout_s=5)
        Applicator(grammar, timeout_s=5)
        MweSplit(timeout_s=5)
        assert [cmd for cmd, _ in fake_run.probes] == [
            ["/usr/bin/vislcg3", "--version"],
            ["/usr/bin/cg-mwesplit", "--version"],
        ]
        assert fake_run.calls == []

    def test_version_probe_uses_configured_timeout(self, which_calls, fake_run, grammar, monkeypatch):
        monkeypatch.setenv("CG3_TIMEOUT_S", "7")
        Applicator(grammar, timeout_s=5)
        assert fake_run.probes[0][1]["timeout"] == 7.0

    def test_failing_version_probe_raises_and_is_not_cached(self, which_calls, fake_run, grammar):
        fake_run.probe_returncode = 1
        with pytest.raises(EngineError, match="--version exited with status 1") as exc_info:
            Applicator(grammar, timeout_s=5)
        assert exc_info.value.returncode == 1

        fake_run.probe_returncode = 0
        Applicator(grammar, timeout_s=5)
        assert len(fake_run.probes) == 2
        assert which_calls == ["vislcg3", "vislcg3"]


class TestApplicator:

    def test_missing_grammar(self, which_calls, tmp_path):
        with pytest.raises(FileNotFoundError):
            Applicator(tmp_path / "missing.cg3", timeout_s=5)

    def test_command_and_input(self, which_calls, fake_run, grammar):
        result = Applicator(grammar, timeout_s=5).run("Mun boađán.")
        assert result == _STREAM
        cmd, kwargs = fake_run.calls[0]
        assert cmd == ["/usr/bin/vislcg3", "--grammar", str(grammar)]
        assert kwargs["input"] == "Mun boađán.".encode("utf-8")
        assert kwargs["timeout"] == 5

    def test_analyse_returns_output(self, which_calls, fake_run, grammar):
        output = Applicator(grammar, timeout_s=5).analyse("a")
        assert isinstance(output, Output)
        assert [c.word_form for c in output.cohorts()] == ["a"]

    def test_timeout_from_environment(self, which_calls, fake_run, grammar, monkeypatch):
        monkeypatch.setenv("CG3_TIMEOUT_S", "12.5")
        Applicator(grammar).run("a")
        assert fake_run.calls[0][1]["timeout"] == 12.5


class TestFailures:

    def test_non_zero_exit(self, which_calls, fake_run, grammar):
        fake_run.returncode = 2
        fake_run.stderr = b"Error: grammar did not compile"
        with pytest.raises(EngineError) as exc_info:
            Applicator(grammar, timeout_s=5).run("a")
        assert exc_info.value.returncode == 2
        assert "did not compile" in exc_info.value.stderr

    def test_timeout(self, which_calls, fake_run, grammar):
        fake_run.raises = subprocess.TimeoutExpired(cmd="vislcg3", timeout=5)
        with pytest.raises(EngineError, match="timed out"):
            Applicator(grammar, timeout_s=5).run("a")

    def test_binary_vanished(self, which_calls, fake_run):
        fake_run.raises = FileNotFoundError()
        with pytest.raises(EngineError):
            MweSplit(timeout_s=5).run("a")

    def test_invalid_utf8_output(self, which_calls, fake_run):
        fake_run.stdout = b"\xff\xfe"
        with pytest.raises(EngineError, match="invalid UTF-8"):
            MweSplit(timeout_s=5).run("a")


class TestMweSplit:

    def test_command(self, which_calls, fake_run):
        MweSplit(timeout_s=5).run(_STREAM)
        assert fake_run.calls[0][0] == ["/usr/bin/cg-mwesplit"]
