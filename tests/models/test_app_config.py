"""Tests for layered application config."""

from devobox.models.config import AppConfig


def _config(data):
    return AppConfig.model_validate(data)


class TestAppConfigMerge:
    """Test cases for AppConfig.merge."""

    def test_local_scalars_override_global(self):
        global_config = _config({
            "build": {"image_name": "global-img"},
            "container": {"name": "global-box", "workdir": "/srv"},
        })
        local_config = _config({"build": {"image_name": "local-img"}})

        merged = global_config.merge(local_config)

        assert merged.build.image_name == "local-img"
        assert merged.container.name == "global-box"
        assert merged.container.workdir == "/srv"

    def test_unset_local_fields_keep_global(self):
        global_config = _config({"paths": {"containerfile": "Dockerfile.dev"}})

        merged = global_config.merge(AppConfig())

        assert merged.paths.containerfile == "Dockerfile.dev"
        assert merged.paths.tool_manifest is None

    def test_include_projects_union_keeps_order(self):
        global_config = _config({"dependencies": {"include_projects": ["/a", "/b"]}})
        local_config = _config({"dependencies": {"include_projects": ["/b", "/c", "/a"]}})

        merged = global_config.merge(local_config)

        assert merged.dependencies.include_projects == ["/a", "/b", "/c"]

    def test_services_local_wins_per_key(self):
        global_config = _config({"services": {
            "pg": {"image": "postgres:14"},
            "redis": {"image": "redis:7"},
        }})
        local_config = _config({"services": {
            "pg": {"image": "postgres:16"},
            "mq": {"image": "rabbitmq:3"},
        }})

        merged = global_config.merge(local_config)

        assert list(merged.services) == ["pg", "redis", "mq"]
        assert merged.services["pg"].image == "postgres:16"
        assert merged.services["redis"].image == "redis:7"

    def test_project_settings_overlay(self):
        global_config = _config({"project": {"shell": "bash", "env": ["A=1"]}})
        local_config = _config({"project": {"name": "api"}})

        merged = global_config.merge(local_config)

        assert merged.project.name == "api"
        assert merged.project.shell == "bash"
        assert merged.project.env == ["A=1"]


class TestAppConfigDefaults:
    """Test cases for AppConfig.with_defaults."""

    def test_empty_config_gets_defaults(self):
        config = AppConfig().with_defaults()

        assert config.paths.containerfile == "Containerfile"
        assert config.paths.tool_manifest == "mise.toml"
        assert config.build.image_name == "devobox-img"
        assert config.container.name == "devobox"
        assert config.container.workdir == "/home/dev"

    def test_explicit_values_survive(self):
        config = _config({
            "build": {"image_name": "custom"},
            "container": {"workdir": "/work"},
        }).with_defaults()

        assert config.image_name == "custom"
        assert config.container.workdir == "/work"
        assert config.container_name == "devobox"

    def test_merge_then_defaults(self):
        merged = AppConfig().merge(_config({"container": {"name": "box"}})).with_defaults()

        assert merged.container_name == "box"
        assert merged.image_name == "devobox-img"
