"""
Builds the DAPS toolchain image with buildah when it is missing locally.
"""
import subprocess
import sys
from typing import List, Sequence
from ..MODELS.settings import WrapperSettings
from ..REGISTRY.image_reference import ImageReference
from ..RUNNERS.process_runner import ProcessRunner
from ..exceptions import CommandFailedError


class ImageBuilder:
    """
    Makes sure the configured image exists in the local image store,
    committing a new one from the pinned base image if it does not.
    """
    def __init__(self, settings: WrapperSettings, runner: ProcessRunner, image: ImageReference):
        """
        Initializes the ImageBuilder.

        :param settings: Resolved wrapper settings.
        :param runner: Runner used for every external command.
        :param image: The image to look up and, if needed, build.
        """
        self.settings = settings
        self.runner = runner
        self.image = image

    def exists(self) -> bool:
        """
        Asks the runtime whether the image is present. Never cached.
        """
        return self.runner.succeeds([self.settings.runtime, "image", "exists", self.image.name])

    def ensure(self):
        """
        Builds the image unless it already exists.
        """
        if not self.exists():
            self.build()

    def build(self):
        """
        Creates a working container from the base image, installs the
        packages into it, sets its working directory and commits it.

        A failed step leaves the working container in place.

        :raises CommandFailedError: If any step exits non-zero.
        """
        buildah = self.settings.builder
        print(f"Building image {self.image.name} from {self.settings.base_image}", file=sys.stderr)

        container = self._create_container()
        self._check([buildah, "run", container, "--", *self.install_command()])
        self._check([buildah, "config", "--workingdir", self.settings.container_workdir, container])
        self._check([buildah, "commit", container, self.image.name])

        print(f"Image {self.image.name} built.", file=sys.stderr)

    def install_command(self) -> List[str]:
        """The single package installation run inside the working container."""
        return ["zypper", "--non-interactive", "install", "--no-recommends", *self.settings.packages]

    def _create_container(self) -> str:
        command = [self.settings.builder, "from", self.settings.base_image]
        try:
            output = self.runner.capture(command)
        except subprocess.CalledProcessError as e:
            raise CommandFailedError(command, e.returncode) from e
        # buildah prints the working container name as its last line
        lines = [line.strip() for line in output if line.strip()]
        if not lines:
            raise CommandFailedError(command, 1)
        return lines[-1]

    def _check(self, command: Sequence[str]):
        returncode = self.runner.run(command)
        if returncode != 0:
            raise CommandFailedError(command, returncode)
