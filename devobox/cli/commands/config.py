"""Config command for Devobox."""

import click
import yaml

from devobox.cli.helpers import fail
from ...core.config_loader import ConfigLoader
from ...services.exceptions import DevoboxError


@click.command()
def config():
    """Print the merged configuration"""
    loader = ConfigLoader()
    try:
        merged = loader.load()
    except DevoboxError as e:
        fail(e)
        return

    data = merged.model_dump(
        mode="json", by_alias=True, exclude={"services": {"__all__": {"name"}}}
    )
    click.echo(f"# global: {loader.global_file}")
    click.echo(f"# local:  {loader.local_file}")
    click.echo(yaml.safe_dump(data, sort_keys=False).rstrip())
