"""Destructive system commands for Devobox."""

import click
from rich.console import Console
from rich.prompt import Confirm, Prompt

from devobox.cli.helpers import fail, get_runtime
from ...core.constants import RESET_CONFIRMATION
from ...services.container_service import ContainerService
from ...services.exceptions import DevoboxError
from ...services.orchestrator import Orchestrator
from ...services.system_service import SystemService


def _orchestrator() -> Orchestrator:
    runtime = get_runtime()
    return Orchestrator(ContainerService(runtime), SystemService(runtime))


@click.command()
@click.option('--yes', '-y', is_flag=True, help='Skip confirmation prompt')
def nuke(yes):
    """Remove all images, containers, volumes and build cache"""
    console = Console()
    if not yes and not Confirm.ask("Remove ALL images, containers, volumes and build cache?"):
        console.print("[yellow]Cancelled[/yellow]")
        return

    try:
        _orchestrator().nuke_system()
    except DevoboxError as e:
        fail(e)
        return
    console.print("[green]Nuke complete[/green]")


@click.command()
@click.option('--yes', '-y', is_flag=True, help='Skip confirmation prompt')
def reset(yes):
    """Reset the container engine to factory state (MOST DESTRUCTIVE)"""
    console = Console()
    if not yes:
        console.print("[red]This deletes every container, image and volume, including persistent data.[/red]")
        answer = Prompt.ask(f"Type '{RESET_CONFIRMATION}' to confirm")
        if answer.strip() != RESET_CONFIRMATION:
            console.print("[yellow]Cancelled[/yellow]")
            return

    try:
        _orchestrator().reset_system()
    except DevoboxError as e:
        fail(e)
        return
    console.print("[green]System reset complete[/green]")
