"""Cleanup command for Devobox."""

import click

from devobox.cli.helpers import fail, get_runtime, report_failures
from ...services.container_service import ContainerService
from ...services.exceptions import DevoboxError
from ...services.orchestrator import CleanupOptions, Orchestrator
from ...services.system_service import SystemService


@click.command()
@click.option('--containers', '-c', is_flag=True, help='Remove stopped containers')
@click.option('--images', '-i', is_flag=True, help='Remove unused images')
@click.option('--volumes', is_flag=True, help='Remove orphaned volumes')
@click.option('--build-cache', '-b', is_flag=True, help='Clear the build cache')
@click.option('--all', 'everything', is_flag=True, help='Prune everything above')
def cleanup(containers, images, volumes, build_cache, everything):
    """Prune unused container engine resources"""
    if everything:
        options = CleanupOptions.all()
    else:
        options = CleanupOptions(
            containers=containers, images=images, volumes=volumes, build_cache=build_cache
        )

    if options == CleanupOptions.none():
        click.echo("Nothing selected. Use --all or pick resources (see --help).")
        return

    try:
        runtime = get_runtime()
    except DevoboxError as e:
        fail(e)
        return

    orchestrator = Orchestrator(ContainerService(runtime), SystemService(runtime))
    report_failures("prune", orchestrator.cleanup(options))
    click.echo("Cleanup complete")
