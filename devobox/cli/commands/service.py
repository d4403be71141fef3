"""Service commands for Devobox."""

import click

from devobox.cli.helpers import fail, load_context, report_failures
from ...services.exceptions import DevoboxError


@click.group()
def service():
    """Control individual services"""
    pass


@service.command()
@click.argument('name', required=False)
def start(name):
    """Start one service, or all services if NAME is omitted"""
    try:
        context = load_context()
        if name:
            context.orchestrator.start_service(context.services, name)
        else:
            report_failures("start", context.orchestrator.start_all(context.services))
    except DevoboxError as e:
        fail(e)


@service.command()
@click.argument('name', required=False)
def stop(name):
    """Stop one service, or all services if NAME is omitted"""
    try:
        context = load_context()
        if name:
            context.orchestrator.stop_service(context.services, name)
        else:
            names = [svc.name for svc in context.services]
            report_failures("stop", context.orchestrator.stop_all(names))
    except DevoboxError as e:
        fail(e)


@service.command()
@click.argument('name', required=False)
def restart(name):
    """Restart one service, or all services if NAME is omitted"""
    try:
        context = load_context()
        if name:
            context.orchestrator.restart_service(context.services, name)
        else:
            report_failures("restart", context.orchestrator.restart_all(context.services))
    except DevoboxError as e:
        fail(e)
