"""Build command for Devobox."""

import click

from devobox.cli.helpers import fail, load_context
from ...core.environment_builder import EnvironmentBuilder
from ...services.exceptions import DevoboxError


@click.command()
@click.option('--skip-cleanup', is_flag=True, help='Skip pruning stale containers, images and build cache')
def build(skip_cleanup):
    """Build the workspace image and recreate all containers"""
    try:
        context = load_context()
        builder = EnvironmentBuilder(
            context.orchestrator,
            context.config,
            config_dir=context.loader.config_dir,
            containerfile=context.loader.containerfile_path(context.config),
            tool_manifest=context.loader.tool_manifest_path(context.config),
        )
        created = builder.build(context.services, skip_cleanup=skip_cleanup)
    except DevoboxError as e:
        fail(e)
        return

    click.echo(f"Build complete. Created: {', '.join(created)}")
