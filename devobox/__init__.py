"""Devobox - Layered dev environment with containerized services."""

__version__ = "0.1.0"
