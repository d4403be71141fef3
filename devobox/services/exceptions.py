"""Custom exceptions for Devobox."""


class DevoboxError(Exception):
    """Base exception for all Devobox errors."""

    pass


class ConfigValidationError(DevoboxError):
    """Exception raised for malformed configuration."""

    pass


class ServiceNotFoundError(DevoboxError):
    """Exception raised when a service is not part of the resolved set."""

    pass


class ContainerRuntimeError(DevoboxError):
    """Exception raised when a container runtime operation fails."""

    pass


class ContainerNotFoundError(ContainerRuntimeError):
    """Exception raised when a container does not exist."""

    pass


class HealthCheckError(DevoboxError):
    """Exception raised when a service never became healthy."""

    def __init__(self, service_name: str, message: str):
        super().__init__(message)
        self.service_name = service_name
