"""In-memory container runtime.

Keeps container state in a dictionary and records every operation it receives,
which makes it suitable for dry runs and for exercising the lifecycle and
orchestration layers without a container engine. Health statuses can be
scripted per container and operations can be made to fail on demand.
"""

import threading
from collections import deque
from pathlib import Path
from typing import Deque, Dict, List, Optional, Set, Union

from ..models.container import Container, ContainerSpec, ContainerState, HealthStatus
from .exceptions import ContainerNotFoundError, ContainerRuntimeError
from .runtime import ContainerRuntime

HealthStep = Union[HealthStatus, Exception]


class InMemoryRuntime(ContainerRuntime):
    """Container runtime that only exists in memory."""

    def __init__(self, available_commands: Optional[Set[str]] = None):
        self._lock = threading.Lock()
        self._states: Dict[str, ContainerState] = {}
        self._specs: Dict[str, ContainerSpec] = {}
        self._health: Dict[str, Deque[HealthStep]] = {}
        self._fail_on: Set[str] = set()
        self._commands: List[str] = []
        self.available_commands = available_commands or set()

    # Scripting helpers

    def add_container(self, name: str, state: ContainerState = ContainerState.STOPPED) -> None:
        with self._lock:
            self._states[name] = state

    def set_health(self, name: str, *steps: HealthStep) -> None:
        """Script the health answers for a container.

        Each query consumes one step; the last step repeats forever. A step
        that is an exception is raised instead of returned.
        """
        with self._lock:
            self._health[name] = deque(steps)

    def fail_on(self, *operations: str) -> None:
        """Make operations fail, either all of a kind (``stop``) or one target (``stop:pg``)."""
        with self._lock:
            self._fail_on.update(operations)

    def get_state(self, name: str) -> Optional[ContainerState]:
        with self._lock:
            return self._states.get(name)

    def get_spec(self, name: str) -> Optional[ContainerSpec]:
        with self._lock:
            return self._specs.get(name)

    @property
    def commands(self) -> List[str]:
        with self._lock:
            return list(self._commands)

    def count(self, command: str) -> int:
        """Number of times a recorded command (e.g. ``health:pg``) was issued."""
        return self.commands.count(command)

    # ContainerRuntime

    def get_container(self, name: str) -> Container:
        with self._lock:
            self._record("get_container", name)
            return Container(name=name, state=self._states.get(name, ContainerState.NOT_CREATED))

    def get_container_health(self, name: str) -> HealthStatus:
        with self._lock:
            self._record("health", name)
            steps = self._health.get(name)
            if not steps:
                if name in self._states:
                    return HealthStatus.NOT_APPLICABLE
                return HealthStatus.UNKNOWN
            step = steps.popleft() if len(steps) > 1 else steps[0]
        if isinstance(step, Exception):
            raise step
        return step

    def start_container(self, name: str) -> None:
        with self._lock:
            self._record("start", name)
            self._require(name)
            self._states[name] = ContainerState.RUNNING

    def stop_container(self, name: str) -> None:
        with self._lock:
            self._record("stop", name)
            self._require(name)
            self._states[name] = ContainerState.STOPPED

    def create_container(self, spec: ContainerSpec) -> None:
        with self._lock:
            self._record("create", spec.name)
            if spec.name in self._states:
                raise ContainerRuntimeError(f"Container '{spec.name}' already exists")
            self._states[spec.name] = ContainerState.STOPPED
            self._specs[spec.name] = spec

    def remove_container(self, name: str) -> None:
        with self._lock:
            self._record("remove", name)
            self._require(name)
            del self._states[name]
            self._specs.pop(name, None)
            self._health.pop(name, None)

    def exec_shell(
        self,
        name: str,
        workdir: Optional[str] = None,
        session_name: Optional[str] = None,
    ) -> None:
        with self._lock:
            self._record("exec_shell", name)
            if self._states.get(name) != ContainerState.RUNNING:
                raise ContainerRuntimeError(f"Container '{name}' is not running")

    def is_command_available(self, cmd: str) -> bool:
        return cmd in self.available_commands

    def build_image(self, tag: str, containerfile: Path, context_dir: Path) -> None:
        with self._lock:
            self._record("build_image", tag)

    def prune_containers(self) -> None:
        with self._lock:
            self._record("prune", "containers")
            for name in [n for n, s in self._states.items() if s != ContainerState.RUNNING]:
                del self._states[name]
                self._specs.pop(name, None)

    def prune_images(self) -> None:
        with self._lock:
            self._record("prune", "images")

    def prune_volumes(self) -> None:
        with self._lock:
            self._record("prune", "volumes")

    def prune_build_cache(self) -> None:
        with self._lock:
            self._record("prune", "build_cache")

    def nuke_system(self) -> None:
        with self._lock:
            self._record("nuke")
            self._states = {n: s for n, s in self._states.items() if s == ContainerState.RUNNING}

    def reset_system(self) -> None:
        with self._lock:
            self._record("reset")
            self._states.clear()
            self._specs.clear()
            self._health.clear()

    def _record(self, operation: str, target: Optional[str] = None) -> None:
        command = f"{operation}:{target}" if target else operation
        self._commands.append(command)
        if operation in self._fail_on or command in self._fail_on:
            raise ContainerRuntimeError(f"Simulated failure on: {command}")

    def _require(self, name: str) -> None:
        if name not in self._states:
            raise ContainerNotFoundError(f"Container '{name}' not found")
