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
Errors raised by dapsbox. Each carries the exit code the CLI terminates with.
"""
from typing import List, Sequence

# What a shell reports for `exit -1`.
FATAL_EXIT_CODE = 255


class DapsboxError(Exception):
    """Base class for all wrapper errors."""

    exit_code = FATAL_EXIT_CODE


class ConfigurationError(DapsboxError):
    """A required configuration value is empty or malformed."""


class MissingDependencyError(DapsboxError):
    """One or more required executables are not on the search path."""

    def __init__(self, missing: Sequence[str]):
        self.missing: List[str] = list(missing)
        super().__init__(
            f"required executable(s) not found in PATH: {', '.join(self.missing)}"
        )


class CommandFailedError(DapsboxError):
    """An external command exited with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int):
        self.command = list(command)
        self.returncode = returncode
        self.exit_code = returncode
        super().__init__(f"{self.command[0]} exited with status {returncode}")
