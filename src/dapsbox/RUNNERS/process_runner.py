# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Synchronous execution of external commands with inherited standard streams.
"""
import shlex
import subprocess
import sys
from typing import List, Optional, Sequence


class ProcessRunner:
    """
    Runs one external command at a time and waits for it to finish.
    """
    def __init__(self, trace: bool = False, cwd: Optional[str] = None):
        """
        Initializes the process runner.

        Args:
            trace (bool): Echo every command to stderr before running it.
            cwd (Optional[str]): Directory to start commands in.
        """
        self.trace = trace
        self.cwd = cwd

    def _trace(self, command: Sequence[str]):
        if self.trace:
            print(f"+ {shlex.join(command)}", file=sys.stderr, flush=True)

    def run(self, command: Sequence[str]) -> int:
        """
        Runs a command attached to this process's stdin, stdout and stderr.

        Args:
            command (Sequence[str]): Command and arguments to execute.

        Returns:
            int: The command's exit code.
        """
        self._trace(command)
        # Avoid shell=True for security reasons (CWE-78)
        return subprocess.run(list(command), cwd=self.cwd, shell=False).returncode

    def succeeds(self, command: Sequence[str]) -> bool:
        """
        Runs a command with its output discarded and reports whether it exited 0.
        """
        self._trace(command)
        result = subprocess.run(
            list(command),
            cwd=self.cwd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            shell=False,
        )
        return result.returncode == 0

    def capture(self, command: Sequence[str]) -> List[str]:
        """
        Runs a command and returns its stdout split into lines. Stderr is
        inherited so the tool's own diagnostics stay visible.

        Raises:
            subprocess.CalledProcessError: If the command exits non-zero.
        """
        self._trace(command)
        result = subprocess.run(
            list(command),
            cwd=self.cwd,
            stdout=subprocess.PIPE,
            text=True,
            check=True,
            shell=False,
        )
        return result.stdout.splitlines()
