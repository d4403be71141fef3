"""Bulk lifecycle operations across many services.

Bulk operations are best-effort: a failure on one container is logged and the
remaining containers are still processed. The one exception is the health gate
in :meth:`Orchestrator.start_all`, which fails the whole call as soon as any
service runs out of healthcheck retries.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from ..core.constants import DEFAULT_HEALTHCHECK_INTERVAL, DEFAULT_HEALTHCHECK_RETRIES
from ..models.container import ContainerState, HealthStatus
from ..models.service import Service
from ..utils.duration import parse_duration
from .container_service import ContainerService
from .exceptions import ContainerRuntimeError, HealthCheckError, ServiceNotFoundError
from .system_service import SystemService

logger = logging.getLogger(__name__)


@dataclass
class CleanupOptions:
    """Which kinds of resources a cleanup prunes."""
    containers: bool = False
    images: bool = False
    volumes: bool = False
    build_cache: bool = False

    @classmethod
    def all(cls) -> "CleanupOptions":
        return cls(containers=True, images=True, volumes=True, build_cache=True)

    @classmethod
    def none(cls) -> "CleanupOptions":
        return cls()


@dataclass
class ServiceStatus:
    """Point-in-time view of one container."""
    name: str
    state: Optional[ContainerState]  # None when the runtime could not be queried
    health: HealthStatus


class Orchestrator:
    """Orchestrates workflows involving multiple containers and system operations."""

    def __init__(self, container_service: ContainerService, system_service: SystemService):
        self.container_service = container_service
        self.system_service = system_service

    def stop_all(self, names: Sequence[str]) -> List[str]:
        """Stop every named container, continuing past individual failures.

        Returns:
            Names of the containers that failed to stop
        """
        if not names:
            return []

        logger.info("Stopping all containers...")
        failed = []
        for name in names:
            try:
                self.container_service.stop(name)
            except ContainerRuntimeError as e:
                logger.warning(f"Failed to stop {name}: {e}")
                failed.append(name)

        logger.info("Containers stopped")
        return failed

    def start_all(self, services: Sequence[Service]) -> List[str]:
        """Start every service, then wait for the ones with a healthcheck.

        Containers are expected to exist already. Start failures are logged and
        skipped; the health gate then polls all services with a healthcheck
        concurrently.

        Returns:
            Names of the services that failed to start

        Raises:
            HealthCheckError: If a service exhausted its healthcheck retries
        """
        if not services:
            return []

        logger.info("Starting all services...")
        failed = []
        for service in services:
            try:
                self.container_service.start(service.name)
            except ContainerRuntimeError as e:
                logger.warning(f"Failed to start {service.name}: {e}")
                failed.append(service.name)

        logger.info("Checking healthchecks...")
        self._wait_for_health(services)
        logger.info("All services started and healthy (or without healthcheck)")
        return failed

    def restart_all(self, services: Sequence[Service]) -> List[str]:
        """Stop then start every service."""
        failed = self.stop_all([service.name for service in services])
        return failed + [name for name in self.start_all(services) if name not in failed]

    def find_service(self, services: Iterable[Service], name: str) -> Service:
        """Look up a service by name.

        Raises:
            ServiceNotFoundError: If no service has that name
        """
        for service in services:
            if service.name == name:
                return service
        raise ServiceNotFoundError(f"Service '{name}' is not configured")

    def start_service(self, services: Iterable[Service], name: str) -> None:
        service = self.find_service(services, name)
        self.container_service.start(service.name)
        self._wait_for_health([service])

    def stop_service(self, services: Iterable[Service], name: str) -> None:
        service = self.find_service(services, name)
        self.container_service.stop(service.name)

    def restart_service(self, services: Iterable[Service], name: str) -> None:
        service = self.find_service(services, name)
        self.container_service.stop(service.name)
        self.container_service.start(service.name)
        self._wait_for_health([service])

    def cleanup(self, options: CleanupOptions) -> List[str]:
        """Prune the resource kinds selected in ``options``.

        Each prune runs independently; failures are logged and do not stop the
        others.

        Returns:
            Resource kinds whose prune failed
        """
        logger.info("Cleaning up container engine resources...")
        steps = [
            (options.containers, "containers", "Removing stopped containers", self.system_service.prune_containers),
            (options.images, "images", "Removing unused images", self.system_service.prune_images),
            (options.volumes, "volumes", "Removing orphaned volumes", self.system_service.prune_volumes),
            (options.build_cache, "build_cache", "Clearing build cache", self.system_service.prune_build_cache),
        ]

        failed = []
        for enabled, kind, message, prune in steps:
            if not enabled:
                continue
            logger.info(f"{message}...")
            try:
                prune()
            except ContainerRuntimeError as e:
                logger.warning(f"{message} failed: {e}")
                failed.append(kind)

        logger.info("Cleanup complete")
        return failed

    def nuke_system(self) -> None:
        self.system_service.nuke_system()

    def reset_system(self) -> None:
        self.system_service.reset_system()

    def status_report(self, names: Sequence[str]) -> List[ServiceStatus]:
        """Query state and health for each named container."""
        report = []
        for name in names:
            try:
                state = self.container_service.status(name).state
                health = (
                    self.container_service.get_health_status(name)
                    if state == ContainerState.RUNNING
                    else HealthStatus.UNKNOWN
                )
            except ContainerRuntimeError as e:
                logger.warning(f"Could not query {name}: {e}")
                state, health = None, HealthStatus.UNKNOWN
            report.append(ServiceStatus(name=name, state=state, health=health))
        return report

    def _wait_for_health(self, services: Sequence[Service]) -> None:
        gated = []
        for service in services:
            if service.has_healthcheck:
                gated.append(service)
            else:
                logger.info(f"Service '{service.name}' has no healthcheck configured. Proceeding.")

        if not gated:
            return

        cancelled = threading.Event()
        with ThreadPoolExecutor(max_workers=len(gated), thread_name_prefix="healthcheck") as executor:
            futures = [
                executor.submit(self._wait_until_healthy, service, cancelled)
                for service in gated
            ]
            try:
                for future in as_completed(futures):
                    future.result()
            finally:
                # Stop the remaining pollers once the outcome is known
                cancelled.set()

    def _wait_until_healthy(self, service: Service, cancelled: threading.Event) -> None:
        name = service.name
        retries = service.healthcheck_retries
        if retries is None:
            retries = DEFAULT_HEALTHCHECK_RETRIES
        remaining = max(retries, 1)
        interval = _poll_interval(service)

        logger.info(f"Waiting for {name} to become healthy...")
        while not cancelled.is_set():
            try:
                status: Optional[HealthStatus] = self.container_service.get_health_status(name)
            except ContainerRuntimeError as e:
                logger.warning(f"Error checking health of {name}: {e}")
                status = None

            if status == HealthStatus.HEALTHY:
                logger.info(f"{name} is healthy")
                return
            if status == HealthStatus.NOT_APPLICABLE:
                logger.warning(f"{name} reports no healthcheck. Proceeding.")
                return
            # Unknown spends budget too so a missing container cannot stall the gate
            if status in (None, HealthStatus.UNHEALTHY, HealthStatus.UNKNOWN):
                remaining -= 1
                if remaining <= 0:
                    raise HealthCheckError(
                        name, f"Service '{name}' failed its healthcheck after {max(retries, 1)} attempts"
                    )
                logger.warning(f"{name} is not healthy yet ({remaining} retries left)")

            cancelled.wait(interval)


def _poll_interval(service: Service) -> int:
    value = service.healthcheck_interval or DEFAULT_HEALTHCHECK_INTERVAL
    try:
        return parse_duration(value)
    except ValueError:
        logger.warning(f"Invalid healthcheck interval '{value}' for {service.name}; using {DEFAULT_HEALTHCHECK_INTERVAL}")
        return parse_duration(DEFAULT_HEALTHCHECK_INTERVAL)
