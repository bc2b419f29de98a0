"""
Command Line Interface for dapsbox.
"""
import sys
import click
from ..MANAGERS.dispatcher import Dispatcher
from ..MODELS.settings import WrapperSettings
from ..exceptions import CommandFailedError, DapsboxError

# Exit status of a process ended by SIGINT
INTERRUPTED_EXIT_CODE = 130


def exit_status(returncode: int) -> int:
    """Maps a child killed by signal N (returncode -N) to the shell's 128+N."""
    if returncode < 0:
        return 128 - returncode
    return returncode


@click.command(context_settings={
    "ignore_unknown_options": True,
    "allow_interspersed_args": False,
    "help_option_names": [],
})
@click.argument('args', nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(ctx, args):
    """
    dapsbox - run DAPS in a container.

    `format ARGS` runs daps-xmlformat, `watch [ARGS]` rebuilds on every save,
    anything else goes to daps unchanged.
    """
    settings = WrapperSettings.from_environment()
    dispatcher = Dispatcher(settings)
    try:
        code = dispatcher.dispatch(args)
    except CommandFailedError as e:
        # The failing tool has already reported why
        ctx.exit(exit_status(e.exit_code))
    except DapsboxError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(e.exit_code)
    except KeyboardInterrupt:
        click.echo("\nInterrupted.", err=True)
        ctx.exit(INTERRUPTED_EXIT_CODE)
    ctx.exit(exit_status(code))


def main():
    """
    Main entry point for the CLI.
    """
    cli(args=sys.argv[1:], prog_name="dapsbox")


if __name__ == '__main__':
    main()
