"""Service models."""

import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .container import ContainerSpec

SERVICE_NAME_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.-]*")


class ServiceKind(str, Enum):
    """Kind of workload a service runs."""
    GENERIC = "generic"
    DATABASE = "database"


class Service(BaseModel):
    """A declared service (database, cache, sidecar).

    The name is not declared inline: it comes from the key of the
    ``services`` map and is assigned with :meth:`with_name`.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    image: str = ""
    kind: ServiceKind = Field(ServiceKind.GENERIC, alias="type")
    ports: List[str] = Field(default_factory=list)
    env: List[str] = Field(default_factory=list)
    volumes: List[str] = Field(default_factory=list)
    healthcheck_command: Optional[str] = None
    healthcheck_interval: Optional[str] = None
    healthcheck_timeout: Optional[str] = None
    healthcheck_retries: Optional[int] = Field(None, ge=0)

    def with_name(self, name: str) -> "Service":
        """Return a copy of this service carrying the given name."""
        return self.model_copy(update={"name": name})

    def validation_errors(self) -> List[str]:
        """List what is wrong with this service, empty if valid."""
        errors = []
        if not self.name.strip():
            errors.append("missing 'name'")
        elif not SERVICE_NAME_PATTERN.fullmatch(self.name):
            errors.append(
                f"invalid name '{self.name}' (must start with a letter or digit "
                "and contain only letters, digits, '_', '.' or '-')"
            )
        if not self.image.strip():
            errors.append("missing 'image'")
        return errors

    @property
    def has_healthcheck(self) -> bool:
        return bool(self.healthcheck_command)

    def to_spec(self) -> ContainerSpec:
        """Build the container spec used to create this service."""
        return ContainerSpec(
            name=self.name,
            image=self.image,
            ports=list(self.ports),
            env=list(self.env),
            volumes=list(self.volumes),
            healthcheck_command=self.healthcheck_command,
            healthcheck_interval=self.healthcheck_interval,
            healthcheck_timeout=self.healthcheck_timeout,
            healthcheck_retries=self.healthcheck_retries,
        )
