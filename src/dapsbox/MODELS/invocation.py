"""
Models describing a single ephemeral container run.
"""
from typing import List, Optional
from pydantic import BaseModel


class VolumeMount(BaseModel):
    """
    Defines a mapping between a host path and a container path.
    """
    source: str
    target: str

    def to_option(self) -> str:
        return f"{self.source}:{self.target}"


class ContainerInvocation(BaseModel):
    """
    One `run --rm` of an image: which binary to start, with which arguments,
    and how the container is wired to the host.
    """
    image: str
    entrypoint: str
    args: List[str] = []

    mounts: List[VolumeMount] = []
    working_dir: Optional[str] = None
    host_network: bool = True
    interactive: bool = True

    def to_command(self, runtime: str) -> List[str]:
        """
        Renders the invocation as an argv for the container runtime.

        :param runtime: The runtime executable, e.g. 'podman'.
        :return: The full command list.
        """
        command = [runtime, "run", "--rm"]
        if self.interactive:
            command += ["--interactive", "--tty"]
        if self.host_network:
            command += ["--network", "host"]
        for mount in self.mounts:
            command += ["--volume", mount.to_option()]
        if self.working_dir:
            command += ["--workdir", self.working_dir]
        command += ["--entrypoint", self.entrypoint, self.image]
        return command + list(self.args)
