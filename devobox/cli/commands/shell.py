"""Shell command for Devobox."""

from pathlib import Path

import click

from devobox.cli.helpers import container_workdir, engine_name, fail, load_context, report_failures
from ...models.project import Project, ProjectConfig
from ...services.exceptions import ContainerRuntimeError, DevoboxError


@click.command()
@click.option('--with-services', is_flag=True, help='Start all services before entering')
def shell(with_services):
    """Open a shell session inside the workspace container"""
    try:
        context = load_context()

        # Sessions are attached through the engine CLI
        engine = engine_name()
        if not context.container_service.is_command_available(engine):
            raise ContainerRuntimeError(f"'{engine}' was not found on PATH; it is needed to open a shell")

        if with_services:
            report_failures("start", context.orchestrator.start_all(context.services))

        name = context.config.container_name
        context.container_service.ensure_running(name)

        project = Project.from_path(Path.cwd(), ProjectConfig(project=context.config.project))
        workdir = container_workdir(default=context.config.container.workdir)
        click.echo(f"Entering {name} (workdir {workdir})")
        context.container_service.exec_shell(name, workdir, project.session_name)
    except DevoboxError as e:
        fail(e)
