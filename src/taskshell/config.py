# src/taskshell/config.py

"""
Settings for taskshell.

Sources, lowest to highest precedence:
- built-in defaults (files in the home directory),
- a YAML config file (~/.taskshell.yml, or --config),
- TASKSHELL_* environment variables,
- command-line flags (applied by cli.py via `Settings.override`).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Final, Optional

import yaml


ENV_PREFIX: Final[str] = "TASKSHELL"
DEFAULT_CONFIG_PATH: Final[Path] = Path("~/.taskshell.yml")

_KEYS: Final[tuple[str, ...]] = ("tasks_file", "categories_file", "log_file", "color")


class ConfigError(Exception):
    """The config file exists but cannot be used."""


@dataclass(frozen=True, slots=True)
class Settings:
    tasks_file: Path = Path("~/tasks.json")
    categories_file: Path = Path("~/categories.txt")
    log_file: Optional[Path] = None
    color: bool = True

    def override(self, **changes: Any) -> "Settings":
        """Return a copy with every non-None change applied."""
        clean = {k: v for k, v in changes.items() if v is not None}
        if not clean:
            return self
        return _normalise(replace(self, **clean))


# ---------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------

def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env_bool(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"{path}: Cannot read file: {e}") from e

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: Invalid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: YAML root must be a mapping/dictionary")

    unknown = sorted(set(data) - set(_KEYS))
    if unknown:
        raise ConfigError(f"{path}: Unknown key(s): {', '.join(map(str, unknown))}")

    return data


def _from_mapping(data: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in ("tasks_file", "categories_file", "log_file"):
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"Config key '{key}' must be a non-empty string")
        out[key] = Path(value)

    if "color" in data and data["color"] is not None:
        if not isinstance(data["color"], bool):
            raise ConfigError("Config key 'color' must be true or false")
        out["color"] = data["color"]

    return out


def _from_env(environ: dict[str, str]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key in ("tasks_file", "categories_file", "log_file"):
        raw = environ.get(_k(key.upper()))
        if raw is not None and raw.strip():
            out[key] = Path(raw)

    raw = environ.get(_k("COLOR"))
    if raw is not None and raw.strip():
        out["color"] = _env_bool(raw)

    return out


def _normalise(settings: Settings) -> Settings:
    log_file = settings.log_file.expanduser() if settings.log_file is not None else None
    return replace(
        settings,
        tasks_file=Path(settings.tasks_file).expanduser(),
        categories_file=Path(settings.categories_file).expanduser(),
        log_file=log_file,
    )


def load_settings(
    config_path: Optional[str | Path] = None,
    *,
    environ: Optional[dict[str, str]] = None,
) -> Settings:
    """
    Build Settings from defaults, the YAML file, and the environment.

    An explicit `config_path` must exist; the default one is optional.
    """
    environ = dict(os.environ) if environ is None else environ

    values: dict[str, Any] = {}

    if config_path is not None:
        path = Path(config_path).expanduser()
        if not path.is_file():
            raise ConfigError(f"{path}: Config file not found")
        values.update(_from_mapping(_read_yaml(path)))
    else:
        path = DEFAULT_CONFIG_PATH.expanduser()
        if path.is_file():
            values.update(_from_mapping(_read_yaml(path)))

    values.update(_from_env(environ))

    return _normalise(Settings(**values))


def ensure_files(settings: Settings) -> None:
    """Create the task and category files (empty) if they are missing."""
    for p in (settings.tasks_file, settings.categories_file):
        p.parent.mkdir(parents=True, exist_ok=True)
        p.touch(exist_ok=True)
