"""Status command for Devobox."""

import click

from devobox.cli.helpers import fail, load_context, print_table
from ...models.container import ContainerState, HealthStatus
from ...services.exceptions import DevoboxError

STATE_LABELS = {
    ContainerState.RUNNING: "running",
    ContainerState.STOPPED: "stopped",
    ContainerState.NOT_CREATED: "not created",
}


@click.command()
def status():
    """Show state and health of every container"""
    try:
        context = load_context()
    except DevoboxError as e:
        fail(e)
        return

    report = context.orchestrator.status_report(context.all_container_names())
    rows = []
    for entry in report:
        state = STATE_LABELS.get(entry.state, "error")
        health = "" if entry.health == HealthStatus.UNKNOWN else entry.health.value
        rows.append([entry.name, state, health])
    print_table(["Name", "State", "Health"], rows)

    if any(entry.state == ContainerState.NOT_CREATED for entry in report):
        click.echo("Some containers are missing. Run 'devobox build'.")
