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
Construction and execution of ephemeral DAPS containers.
"""
import os
import shlex
from typing import Optional, Sequence
from jinja2 import Environment

from ..MODELS.invocation import ContainerInvocation, VolumeMount
from ..MODELS.settings import WrapperSettings
from ..REGISTRY.image_reference import ImageReference
from .process_runner import ProcessRunner

WATCH_SHELL = "/bin/sh"

WATCH_TEMPLATE = (
    "while inotifywait -q -r -e close_write {{ watch_dir | quote }}; do "
    "{{ entrypoint | quote }}{% for arg in build_args %} {{ arg | quote }}{% endfor %}; "
    "done"
)

_TEMPLATES = Environment()
_TEMPLATES.filters["quote"] = shlex.quote


def render_watch_script(watch_dir: str, entrypoint: str, build_args: Sequence[str]) -> str:
    """
    Renders the shell loop that rebuilds on every file closed after writing.

    Every value is shell quoted, so arguments with spaces survive intact.
    """
    return _TEMPLATES.from_string(WATCH_TEMPLATE).render(watch_dir=watch_dir, entrypoint=entrypoint, build_args=list(build_args))


class ContainerRunner:
    """
    Runs DAPS tools in a fresh container with the host directory mounted at
    the configured document root, host networking and an attached terminal.
    """

    def __init__(self,
                 settings: WrapperSettings,
                 runner: ProcessRunner,
                 image: ImageReference,
                 host_dir: Optional[str] = None):
        """
        Initializes the container runner.

        Args:
            settings: Resolved wrapper settings.
            runner: Runner used to start the runtime.
            image: The image every container is created from.
            host_dir: Directory to bind-mount, defaults to the current directory.
        """
        self.settings = settings
        self.runner = runner
        self.image = image
        self.host_dir = host_dir or os.getcwd()

    def invocation(self, entrypoint: str, args: Sequence[str]) -> ContainerInvocation:
        """Describes a run of entrypoint with args in a new container."""
        return ContainerInvocation(
            image=self.image.name,
            entrypoint=entrypoint,
            args=list(args),
            mounts=[VolumeMount(source=self.host_dir, target=self.settings.container_workdir)],
            working_dir=self.settings.container_workdir,
        )

    def format_invocation(self, args: Sequence[str]) -> ContainerInvocation:
        return self.invocation(self.settings.format_entrypoint, args)

    def build_invocation(self, args: Sequence[str]) -> ContainerInvocation:
        return self.invocation(self.settings.entrypoint, args)

    def watch_invocation(self, build_args: Sequence[str]) -> ContainerInvocation:
        script = render_watch_script(self.settings.watch_dir, self.settings.entrypoint, build_args)
        return self.invocation(WATCH_SHELL, ["-c", script])

    def run(self, invocation: ContainerInvocation) -> int:
        """
        Starts the container and waits for it to exit.

        Returns:
            int: The runtime's exit code, which is the tool's exit code.
        """
        return self.runner.run(invocation.to_command(self.settings.runtime))
