from __future__ import annotations

import os
import sys
from pathlib import Path

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older runtimes
    import tomli as tomllib  # type: ignore

from app_config_parser import parse_app_config
from app_config_schema import (
    DEFAULT_CONFIG_FILE,
    AlarmSettings,
    AppConfig,
    AppConfigurationError,
    NotificationSettings,
    TimerRuntimeSettings,
    UIServerSettings,
)

__all__ = [
    "DEFAULT_CONFIG_FILE",
    "AlarmSettings",
    "AppConfig",
    "AppConfigurationError",
    "NotificationSettings",
    "TimerRuntimeSettings",
    "UIServerSettings",
    "load_app_config",
    "resolve_config_path",
]


def resolve_config_path(config_path: str | None = None) -> Path:
    env_path = os.getenv("APP_CONFIG_FILE")
    raw = config_path or env_path or DEFAULT_CONFIG_FILE
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    if path.exists():
        return path

    # Packaged fallback: use the config.toml shipped next to a frozen executable.
    if config_path is None and env_path is None and getattr(sys, "frozen", False):
        executable_dir = Path(sys.executable).resolve().parent
        for candidate in (
            executable_dir / DEFAULT_CONFIG_FILE,
            Path(getattr(sys, "_MEIPASS", executable_dir)) / DEFAULT_CONFIG_FILE,
        ):
            if candidate.exists():
                return candidate.resolve()

    return path


def load_app_config(config_path: str | None = None) -> AppConfig:
    """Load `config.toml`; a missing file yields the built-in defaults."""
    path = resolve_config_path(config_path)
    if not path.exists():
        return parse_app_config({}, base_dir=path.parent, source_file="")
    if not path.is_file():
        raise AppConfigurationError(f"Config path is not a file: {path}")

    try:
        with open(path, "rb") as fh:
            raw = tomllib.load(fh)
    except Exception as error:
        raise AppConfigurationError(f"Failed to parse config TOML: {error}") from error

    return parse_app_config(raw, base_dir=path.parent, source_file=str(path))
