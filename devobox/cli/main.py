"""Main CLI entry point for Devobox."""

import logging

import click

from .commands.build import build
from .commands.clean import cleanup
from .commands.config import config
from .commands.down import down
from .commands.service import service
from .commands.shell import shell
from .commands.status import status
from .commands.system import nuke, reset
from .commands.up import up


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Show debug output')
def cli(verbose):
    """Devobox - Containerized dev environment with its dependent services"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(levelname)s: %(message)s',
    )


# Register commands
cli.add_command(up)
cli.add_command(down)
cli.add_command(status)
cli.add_command(service)
cli.add_command(build)
cli.add_command(cleanup)
cli.add_command(nuke)
cli.add_command(reset)
cli.add_command(shell)
cli.add_command(config)


if __name__ == '__main__':
    cli()
