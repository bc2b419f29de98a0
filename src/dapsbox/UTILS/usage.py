"""
Usage text shown for a bare invocation or when DAPS_HELP is set.
"""
from jinja2 import Template
from ..MODELS.settings import (
    WrapperSettings,
    ENV_IMAGE,
    ENV_ENTRYPOINT,
    ENV_DEBUG,
    ENV_HELP,
    ENV_FILE,
)

USAGE_TEMPLATE = """\
Usage: {{ prog }} format [ARGS...]
       {{ prog }} watch [DAPS ARGS...]
       {{ prog }} DAPS ARGS...

Run the DAPS documentation toolchain in a container. The current directory is
mounted at {{ s.container_workdir }}. The image {{ s.image }} is built from
{{ s.base_image }} the first time it is needed.

Commands:
  format    Run {{ s.format_entrypoint }} on the given files.
  watch     Rebuild whenever a file under {{ s.watch_dir }}/ is saved.
            Without arguments runs: {{ s.entrypoint }} {{ s.default_watch_args | join(' ') }}
  *         Anything else is passed to {{ s.entrypoint }} unchanged.

Examples:
  {{ prog }} -d DC-ses-all html
  {{ prog }} -d DC-ses-all pdf
  {{ prog }} format xml/book_admin.xml
  {{ prog }} watch -d DC-ses-admin

Environment:
  {{ env_image }}    image name:tag (default: {{ default_image }})
  {{ env_entrypoint }}   binary run for passthrough and watch (default: {{ default_entrypoint }})
  {{ env_debug }}        trace every command before running it
  {{ env_help }}         show this text and exit

Variables may also be set in {{ env_file }} in the current directory.
"""


def render_usage(settings: WrapperSettings, prog: str = "dapsbox") -> str:
    """
    Renders the usage text for the effective settings.

    :param settings: Settings whose values are shown as current values.
    :param prog: Program name shown in the synopsis.
    :return: The usage text, ending in a newline.
    """
    defaults = WrapperSettings()
    return Template(USAGE_TEMPLATE, keep_trailing_newline=True).render(
        prog=prog,
        s=settings,
        env_image=ENV_IMAGE,
        env_entrypoint=ENV_ENTRYPOINT,
        env_debug=ENV_DEBUG,
        env_help=ENV_HELP,
        env_file=ENV_FILE,
        default_image=defaults.image,
        default_entrypoint=defaults.entrypoint,
    )
