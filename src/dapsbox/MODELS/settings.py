"""
Configuration values for a dapsbox run, resolved once from the environment.
"""
import os
from typing import List, Mapping, Optional
from pydantic import BaseModel, ConfigDict
from dotenv import dotenv_values

ENV_IMAGE = "DAPS_CONTAINER"
ENV_ENTRYPOINT = "DAPS_ENTRYPOINT"
ENV_DEBUG = "DAPS_DEBUG"
ENV_HELP = "DAPS_HELP"

ENV_FILE = ".dapsbox.env"

DEFAULT_IMAGE = "dapsbox:latest"
DEFAULT_ENTRYPOINT = "daps"


class WrapperSettings(BaseModel):
    """
    Everything the dispatcher needs to know. The first four fields come from
    the environment; the rest describe the fixed image recipe and run layout.
    """
    model_config = ConfigDict(frozen=True)

    image: str = DEFAULT_IMAGE
    entrypoint: str = DEFAULT_ENTRYPOINT
    debug: bool = False
    help_requested: bool = False

    # Image recipe
    base_image: str = "registry.opensuse.org/opensuse/leap:15.5"
    packages: List[str] = [
        "daps",
        "suse-xsl-stylesheets",
        "geekodoc",
        "inotify-tools",
    ]

    # Container layout
    format_entrypoint: str = "daps-xmlformat"
    container_workdir: str = "/docs"
    watch_dir: str = "xml"
    default_watch_args: List[str] = ["-d", "DC-ses-all", "html"]

    # Required host tools
    builder: str = "buildah"
    runtime: str = "podman"

    @property
    def required_executables(self) -> List[str]:
        return [self.builder, self.runtime]

    @classmethod
    def from_environment(cls,
                         environ: Optional[Mapping[str, str]] = None,
                         env_file: Optional[str] = ENV_FILE) -> "WrapperSettings":
        """
        Builds settings from process variables layered over an optional
        dotenv file. Process variables win over the file.

        A variable that is set but empty is kept as empty; defaults apply only
        to unset variables.

        :param environ: Variables to read, defaults to os.environ.
        :param env_file: Dotenv file to layer underneath, None to skip.
        :return: The resolved settings.
        """
        merged = {}
        if env_file and os.path.isfile(env_file):
            merged.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
        merged.update(os.environ if environ is None else environ)

        return cls(
            image=merged.get(ENV_IMAGE, DEFAULT_IMAGE),
            entrypoint=merged.get(ENV_ENTRYPOINT, DEFAULT_ENTRYPOINT),
            debug=bool(merged.get(ENV_DEBUG)),
            help_requested=bool(merged.get(ENV_HELP)),
        )
