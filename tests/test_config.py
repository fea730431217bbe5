from pathlib import Path

import pytest

from fleetopt.client import DEFAULT_API_URL
from fleetopt.config import _deep_merge, load_config, load_settings, load_workload
from fleetopt.logging import LogConfig
from fleetopt.types import Component

pytestmark = [pytest.mark.unit]


class TestDeepMerge:
    def test_shallow_override(self):
        assert _deep_merge({"a": 1, "b": 2}, {"b": 3}) == {"a": 1, "b": 3}

    def test_nested_merge(self):
        base = {"api": {"url": "http://a", "timeout": 10}}
        override = {"api": {"url": "http://b"}}
        assert _deep_merge(base, override) == {"api": {"url": "http://b", "timeout": 10}}

    def test_empty_base(self):
        assert _deep_merge({}, {"a": 1}) == {"a": 1}

    def test_empty_override(self):
        assert _deep_merge({"a": 1}, {}) == {"a": 1}


class TestLoadConfig:
    def test_no_files_returns_empty_sections(self, tmp_path: Path):
        result = load_config(project_dir=tmp_path / "nope", global_path=tmp_path / "nope.toml")
        assert result == {"api": {}, "logging": {}}

    def test_project_overrides_global(self, tmp_path: Path):
        global_toml = tmp_path / "defaults.toml"
        global_toml.write_text('[api]\nurl = "http://global:5000"\ntimeout = 30\n')
        project_dir = tmp_path / "project"
        project_dir.mkdir()
        (project_dir / "fleetopt.toml").write_text('[api]\nurl = "http://project:5000"\n')
        result = load_config(project_dir=project_dir, global_path=global_toml)
        assert result["api"] == {"url": "http://project:5000", "timeout": 30}


class TestLoadSettings:
    def test_defaults(self, tmp_path: Path):
        settings = load_settings(project_dir=tmp_path, global_path=tmp_path / "x.toml", environ={})
        assert settings.api_url == DEFAULT_API_URL == "http://localhost:5000"
        assert settings.timeout is None
        assert settings.logging == LogConfig()

    def test_from_file(self, tmp_path: Path):
        (tmp_path / "fleetopt.toml").write_text(
            '[api]\nurl = "http://opt:8080"\ntimeout = 120\n\n[logging]\nlevel = "DEBUG"\n'
        )
        settings = load_settings(project_dir=tmp_path, global_path=tmp_path / "x.toml", environ={})
        assert settings.api_url == "http://opt:8080"
        assert settings.timeout == 120.0
        assert settings.logging.level == "DEBUG"

    def test_env_overrides_file(self, tmp_path: Path):
        (tmp_path / "fleetopt.toml").write_text('[api]\nurl = "http://opt:8080"\n')
        settings = load_settings(
            project_dir=tmp_path,
            global_path=tmp_path / "x.toml",
            environ={"FLEETOPT_API_URL": "http://env:9000"},
        )
        assert settings.api_url == "http://env:9000"

    def test_unknown_logging_option(self, tmp_path: Path):
        (tmp_path / "fleetopt.toml").write_text('[logging]\ncolour = true\n')
        with pytest.raises(ValueError, match="colour"):
            load_settings(project_dir=tmp_path, global_path=tmp_path / "x.toml", environ={})


class TestLoadWorkload:
    def test_full_workload(self, tmp_path: Path):
        path = tmp_path / "workload.toml"
        path.write_text(
            '[request]\n'
            'provider = "Hybrid"\n'
            'os = "windows"\n'
            'payment = "onDemand"\n'
            'region = ["us-east-1", "eastus"]\n'
            '\n'
            '[[apps]]\n'
            'app = "frontend"\n'
            'share = false\n'
            '\n'
            '[[apps.components]]\n'
            'name = "web"\n'
            'vCPUs = 2\n'
            'memory = 4\n'
            'behavior = "stop"\n'
            'frequency = 1\n'
            '\n'
            '[[apps]]\n'
            '\n'
            '[[apps.components]]\n'
            'name = "db"\n'
            'vCPUs = 4\n'
            'memory = 16\n'
            'network = 10\n'
        )
        workload = load_workload(path)
        assert workload.provider == "Hybrid"
        assert workload.os == "windows"
        assert workload.payment == "onDemand"
        assert workload.region == ("us-east-1", "eastus")

        first, second = workload.form.apps
        assert first.app == "frontend"
        assert first.share is False
        assert first.components == (
            Component(name="web", vcpus=2, memory=4, behavior="stop", frequency=1),
        )
        assert second.share is True
        assert second.components[0].network == 10

    def test_defaults_without_request_table(self, tmp_path: Path):
        path = tmp_path / "w.toml"
        path.write_text('[[apps]]\n[[apps.components]]\nname = "a"\nvCPUs = 1\nmemory = 1\n')
        workload = load_workload(path)
        assert (workload.provider, workload.os, workload.payment, workload.region) == (
            "AWS", "linux", "Spot", "all",
        )

    def test_no_apps_gives_blank_form(self, tmp_path: Path):
        path = tmp_path / "w.toml"
        path.write_text("")
        assert len(load_workload(path).form.apps) == 1

    def test_invalid_provider(self, tmp_path: Path):
        path = tmp_path / "w.toml"
        path.write_text('[request]\nprovider = "GCP"\n')
        with pytest.raises(ValueError, match="provider"):
            load_workload(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_workload(tmp_path / "missing.toml")
