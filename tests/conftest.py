"""
Shared fixtures. No test here starts a real process.
"""
import subprocess
import pytest
from dapsbox.RUNNERS.process_runner import ProcessRunner


class RecordingRunner(ProcessRunner):
    """
    ProcessRunner that records commands instead of running them.

    :param image_exists: Result of `podman image exists`.
    :param failures: Maps a command's first two words to the exit code it returns.
    """
    def __init__(self, image_exists=True, failures=None, working_container="dapsbox-working-container"):
        super().__init__(trace=False)
        self.image_exists = image_exists
        self.failures = failures or {}
        self.working_container = working_container
        self.commands = []

    def _result(self, command):
        return self.failures.get(tuple(command[:2]), 0)

    def run(self, command):
        self.commands.append(list(command))
        return self._result(command)

    def succeeds(self, command):
        self.commands.append(list(command))
        if list(command[1:3]) == ["image", "exists"]:
            return self.image_exists
        return self._result(command) == 0

    def capture(self, command):
        self.commands.append(list(command))
        code = self._result(command)
        if code:
            raise subprocess.CalledProcessError(code, list(command))
        return [self.working_container]


@pytest.fixture
def make_runner():
    return RecordingRunner


@pytest.fixture
def runner():
    return RecordingRunner()


@pytest.fixture
def which_all():
    """Lookup that finds every executable."""
    return lambda name: f"/usr/bin/{name}"


@pytest.fixture
def which_none():
    """Lookup that finds nothing."""
    return lambda name: None


@pytest.fixture
def clean_env(monkeypatch):
    """Removes every DAPS_* variable from the process environment."""
    for name in ("DAPS_CONTAINER", "DAPS_ENTRYPOINT", "DAPS_DEBUG", "DAPS_HELP"):
        monkeypatch.delenv(name, raising=False)
