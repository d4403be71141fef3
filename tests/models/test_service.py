"""Tests for service models."""

import pytest
from pydantic import ValidationError

from devobox.models.service import Service, ServiceKind


class TestService:
    """Test cases for Service."""

    def test_defaults(self):
        """Test optional fields default to empty."""
        service = Service(image="redis:7").with_name("redis")

        assert service.name == "redis"
        assert service.kind == ServiceKind.GENERIC
        assert service.ports == []
        assert service.env == []
        assert service.volumes == []
        assert service.healthcheck_command is None
        assert service.has_healthcheck is False

    def test_type_alias(self):
        """Test the YAML 'type' key sets the kind."""
        service = Service.model_validate({"image": "postgres:15", "type": "database"})
        assert service.kind == ServiceKind.DATABASE

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            Service.model_validate({"image": "postgres:15", "type": "queue"})

    def test_negative_retries_rejected(self):
        with pytest.raises(ValidationError):
            Service(image="app:latest", healthcheck_retries=-1)

    def test_immutable(self):
        """Test services cannot be modified once created."""
        service = Service(image="app:latest").with_name("api")
        with pytest.raises(ValidationError):
            service.image = "other:latest"

    def test_with_name_returns_copy(self):
        original = Service(image="app:latest")
        named = original.with_name("api")

        assert named.name == "api"
        assert original.name == ""

    @pytest.mark.parametrize("name", ["pg", "db1", "my_db", "cache.local", "api-v2", "9lives"])
    def test_valid_names(self, name):
        assert Service(image="app:latest").with_name(name).validation_errors() == []

    @pytest.mark.parametrize("name", ["-pg", "_db", ".hidden", "my db", "api/v2", "pg$", "pg\n", "pg\n\n"])
    def test_invalid_names(self, name):
        errors = Service(image="app:latest").with_name(name).validation_errors()
        assert len(errors) == 1
        assert "invalid name" in errors[0]

    def test_missing_name_and_image(self):
        errors = Service().validation_errors()
        assert "missing 'name'" in errors
        assert "missing 'image'" in errors

    def test_blank_image(self):
        errors = Service(image="   ").with_name("pg").validation_errors()
        assert errors == ["missing 'image'"]

    def test_to_spec(self):
        """Test conversion to a container spec."""
        service = Service(
            image="app:latest",
            ports=["8080:8080"],
            env=["ENV_VAR=value"],
            volumes=["/app:/usr/src/app"],
            healthcheck_command="exit 0",
            healthcheck_interval="1s",
            healthcheck_timeout="2s",
            healthcheck_retries=1,
        ).with_name("test_svc")

        spec = service.to_spec()

        assert spec.name == "test_svc"
        assert spec.image == "app:latest"
        assert spec.ports == ["8080:8080"]
        assert spec.env == ["ENV_VAR=value"]
        assert spec.volumes == ["/app:/usr/src/app"]
        assert spec.healthcheck_command == "exit 0"
        assert spec.healthcheck_interval == "1s"
        assert spec.healthcheck_timeout == "2s"
        assert spec.healthcheck_retries == 1
        assert spec.network is None
        assert spec.workdir is None
        assert spec.extra_options == {}
