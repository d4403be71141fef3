"""Up command for Devobox."""

import click

from devobox.cli.helpers import fail, load_context, report_failures
from ...services.exceptions import DevoboxError


@click.command()
def up():
    """Start all services and the workspace container"""
    try:
        context = load_context()
        failed = context.orchestrator.start_all(context.services)
        context.container_service.ensure_running(context.config.container_name)
    except DevoboxError as e:
        fail(e)
        return

    report_failures("start", failed)
    click.echo("Environment is up")
