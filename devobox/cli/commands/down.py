"""Down command for Devobox."""

import click

from devobox.cli.helpers import fail, load_context, report_failures
from ...services.exceptions import DevoboxError


@click.command()
def down():
    """Stop the workspace container and all services"""
    try:
        context = load_context()
    except DevoboxError as e:
        fail(e)
        return

    failed = context.orchestrator.stop_all(context.all_container_names())
    report_failures("stop", failed)
    click.echo("Everything stopped")
