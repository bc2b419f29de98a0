"""
Unit tests for the process runner. subprocess.run is replaced throughout.
"""
import subprocess
import pytest
from dapsbox.RUNNERS.process_runner import ProcessRunner


@pytest.fixture
def fake_run(monkeypatch):
    calls = []

    def run(command, **kwargs):
        calls.append((command, kwargs))
        stdout = "noise\nworking-container\n" if kwargs.get("stdout") == subprocess.PIPE else None
        if kwargs.get("check") and command[0] == "false":
            raise subprocess.CalledProcessError(1, command)
        return subprocess.CompletedProcess(command, 3 if command[0] == "false" else 0, stdout=stdout)

    monkeypatch.setattr(subprocess, "run", run)
    return calls


def test_run_returns_exit_code_and_inherits_streams(fake_run):
    runner = ProcessRunner()
    assert runner.run(["true"]) == 0
    assert runner.run(["false"]) == 3
    command, kwargs = fake_run[0]
    assert command == ["true"]
    assert "stdout" not in kwargs
    assert kwargs["shell"] is False


def test_succeeds_discards_output(fake_run):
    runner = ProcessRunner()
    assert runner.succeeds(["true"]) is True
    assert runner.succeeds(["false"]) is False
    assert fake_run[0][1]["stdout"] is subprocess.DEVNULL


def test_capture_returns_lines(fake_run):
    assert ProcessRunner().capture(["buildah", "from", "x"]) == ["noise", "working-container"]


def test_capture_raises_on_failure(fake_run):
    with pytest.raises(subprocess.CalledProcessError):
        ProcessRunner().capture(["false"])


def test_trace_echoes_commands(fake_run, capsys):
    ProcessRunner(trace=True).run(["podman", "run", "a b"])
    assert capsys.readouterr().err == "+ podman run 'a b'\n"


def test_no_trace_by_default(fake_run, capsys):
    ProcessRunner().run(["podman", "run"])
    assert capsys.readouterr().err == ""
