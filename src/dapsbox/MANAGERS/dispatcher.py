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
Dispatch of a dapsbox invocation to one of its run modes.
"""
import shutil
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from ..BUILDERS.image_builder import ImageBuilder
from ..MODELS.settings import ENV_IMAGE, WrapperSettings
from ..REGISTRY.image_reference import ImageReference
from ..RUNNERS.container_runner import ContainerRunner
from ..RUNNERS.process_runner import ProcessRunner
from ..UTILS.executables import require_executables
from ..UTILS.usage import render_usage
from ..exceptions import ConfigurationError

FORMAT_TOKEN = "format"
WATCH_TOKEN = "watch"


class Mode(str, Enum):
    """What an invocation asks for."""

    HELP = "help"
    FORMAT = "format"
    WATCH = "watch"
    PASSTHROUGH = "passthrough"


def select_mode(args: Sequence[str], help_requested: bool = False) -> Tuple[Mode, List[str]]:
    """
    Picks the mode from the leading argument and strips the mode token.

    Args:
        args: Command line arguments, without the program name.
        help_requested: Whether help was forced from the environment.

    Returns:
        The mode and the arguments left for it.
    """
    args = list(args)
    if help_requested or not args:
        return Mode.HELP, []
    if args[0] == FORMAT_TOKEN:
        return Mode.FORMAT, args[1:]
    if args[0] == WATCH_TOKEN:
        return Mode.WATCH, args[1:]
    return Mode.PASSTHROUGH, args


def watch_build_args(args: Sequence[str], default: Sequence[str]) -> List[str]:
    """Build arguments for the watch loop: the given ones, else the default set."""
    return list(args) if args else list(default)


class Dispatcher:
    """
    Checks preconditions, makes sure the image exists and starts exactly one
    container for the selected mode.
    """

    def __init__(self,
                 settings: WrapperSettings,
                 runner: Optional[ProcessRunner] = None,
                 which: Callable[[str], Optional[str]] = shutil.which,
                 host_dir: Optional[str] = None):
        """
        Initializes the dispatcher.

        :param settings: Resolved wrapper settings.
        :param runner: Process runner, defaults to one tracing per settings.debug.
        :param which: Executable lookup used for the dependency check.
        :param host_dir: Directory to mount, defaults to the current directory.
        """
        self.settings = settings
        self.runner = runner or ProcessRunner(trace=settings.debug)
        self.which = which
        self.host_dir = host_dir

    def dispatch(self, args: Sequence[str]) -> int:
        """
        Runs the invocation described by args.

        :param args: Command line arguments, without the program name.
        :return: Exit code for the process.
        :raises DapsboxError: On a failed precondition or image build step.
        """
        mode, rest = select_mode(args, self.settings.help_requested)
        if mode is Mode.HELP:
            print(render_usage(self.settings), end="")
            return 0

        image = self.check_preconditions()
        ImageBuilder(self.settings, self.runner, image).ensure()

        containers = ContainerRunner(self.settings, self.runner, image, host_dir=self.host_dir)
        if mode is Mode.FORMAT:
            invocation = containers.format_invocation(rest)
        elif mode is Mode.WATCH:
            build_args = watch_build_args(rest, self.settings.default_watch_args)
            invocation = containers.watch_invocation(build_args)
        else:
            invocation = containers.build_invocation(rest)
        return containers.run(invocation)

    def check_preconditions(self) -> ImageReference:
        """
        Validates the image name, then looks for the builder and runtime.

        :return: The parsed image reference.
        :raises ConfigurationError: If the image name is empty or malformed.
        :raises MissingDependencyError: If a required executable is absent.
        """
        if not self.settings.image.strip():
            raise ConfigurationError(f"container image name is empty, set {ENV_IMAGE}")
        try:
            image = ImageReference.parse(self.settings.image)
        except ValueError as e:
            raise ConfigurationError(f"invalid {ENV_IMAGE} '{self.settings.image}': {e}") from e

        require_executables(self.settings.required_executables, self.which)
        return image
