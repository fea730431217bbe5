"""TOML-based settings and workload files.

Settings come from ~/.fleetopt/defaults.toml (global) and fleetopt.toml
(project), merged with the project file winning. ``FLEETOPT_API_URL``
overrides the service URL from either file.

Example fleetopt.toml:

    [api]
    url = "https://optimizer.internal:5000"

    [logging]
    level = "INFO"

Example workload file:

    [request]
    provider = "AWS"
    payment = "Spot"
    region = ["us-east-1", "us-west-2"]

    [[apps]]
    share = true

    [[apps.components]]
    name = "web"
    vCPUs = 2
    memory = 4
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, get_args

from fleetopt.client import DEFAULT_API_URL
from fleetopt.form import WorkloadForm
from fleetopt.logging import LogConfig
from fleetopt.types import (
    ALL_REGIONS,
    App,
    OperatingSystem,
    Payment,
    Provider,
    Region,
    as_region,
)

type RawConfig = dict[str, Any]

GLOBAL_CONFIG_PATH = Path.home() / ".fleetopt" / "defaults.toml"
PROJECT_CONFIG_NAME = "fleetopt.toml"
API_URL_ENV = "FLEETOPT_API_URL"


def _deep_merge(base: RawConfig, override: RawConfig) -> RawConfig:
    result = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_toml(path: Path) -> RawConfig:
    if not path.is_file():
        return {}
    with path.open("rb") as f:
        return tomllib.load(f)


def load_config(
    *,
    project_dir: Path | None = None,
    global_path: Path | None = None,
) -> RawConfig:
    global_cfg = _read_toml(global_path or GLOBAL_CONFIG_PATH)
    project_path = (project_dir or Path.cwd()) / PROJECT_CONFIG_NAME
    project_cfg = _read_toml(project_path)

    merged = _deep_merge(global_cfg, project_cfg)
    merged.setdefault("api", {})
    merged.setdefault("logging", {})
    return merged


@dataclass(frozen=True, slots=True)
class Settings:
    """Where the optimization service lives and how to log.

    Attributes:
        api_url: Base URL of the optimization service.
        timeout: Total request timeout in seconds. None waits indefinitely.
        logging: Logging configuration.
    """

    api_url: str = DEFAULT_API_URL
    timeout: float | None = None
    logging: LogConfig = field(default_factory=LogConfig)


def load_settings(
    *,
    project_dir: Path | None = None,
    global_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    config = load_config(project_dir=project_dir, global_path=global_path)
    env = os.environ if environ is None else environ

    api = config["api"]
    timeout = api.get("timeout")
    return Settings(
        api_url=env.get(API_URL_ENV) or api.get("url", DEFAULT_API_URL),
        timeout=float(timeout) if timeout is not None else None,
        logging=LogConfig.from_mapping(config["logging"]),
    )


# =============================================================================
# Workload files
# =============================================================================


@dataclass(frozen=True, slots=True)
class Workload:
    """A workload description loaded from disk, with its request defaults."""

    form: WorkloadForm
    provider: Provider = "AWS"
    os: OperatingSystem = "linux"
    payment: Payment = "Spot"
    region: Region = ALL_REGIONS


def _choice[T](raw: RawConfig, key: str, default: T, options: tuple[Any, ...]) -> T:
    value = raw.get(key, default)
    if value not in options:
        raise ValueError(
            f"Invalid {key} '{value}'. Valid: {', '.join(str(o) for o in options)}"
        )
    return value


def parse_workload(raw: RawConfig) -> Workload:
    request = raw.get("request", {})
    apps = tuple(App.from_wire(a) for a in raw.get("apps", ()))
    return Workload(
        form=WorkloadForm.from_apps(apps),
        provider=_choice(request, "provider", "AWS", get_args(Provider.__value__)),
        os=_choice(request, "os", "linux", get_args(OperatingSystem.__value__)),
        payment=_choice(request, "payment", "Spot", get_args(Payment.__value__)),
        region=as_region(request.get("region", ALL_REGIONS)),
    )


def load_workload(path: Path) -> Workload:
    """Read a workload TOML file.

    Raises:
        FileNotFoundError: The file does not exist.
        ValueError: A request option or component field is invalid.
    """
    with path.open("rb") as f:
        return parse_workload(tomllib.load(f))
