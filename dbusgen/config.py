"""Configuration loading for dbusgen (.dbusgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import InvalidConfiguration
from .synthesis.constants import DEFAULT_PACKAGE_NAME

CONFIG_FILENAME = ".dbusgen.yml"


class ConfigError(InvalidConfiguration):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GeneratorConfig:
    """Represents the settings defined in .dbusgen.yml."""

    root: Path
    package_name: str = DEFAULT_PACKAGE_NAME
    format: bool = True
    prefixes: List[str] = field(default_factory=list)
    only: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)

    def override(
        self,
        *,
        package_name: Optional[str] = None,
        format: Optional[bool] = None,
        prefixes: Sequence[str] = (),
        only: Sequence[str] = (),
        exclude: Sequence[str] = (),
    ) -> "GeneratorConfig":
        """Return a copy where explicitly given command line values win."""
        return GeneratorConfig(
            root=self.root,
            package_name=package_name if package_name is not None else self.package_name,
            format=format if format is not None else self.format,
            prefixes=list(prefixes) or list(self.prefixes),
            only=list(only) or list(self.only),
            exclude=list(exclude) or list(self.exclude),
        )


def load_config(config_path: Path) -> GeneratorConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GeneratorConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = GeneratorConfig(root=root)
    package_name = _as_str(data.get("package"))
    if package_name is not None:
        config.package_name = package_name
    fmt = _as_bool(data.get("format"))
    if fmt is not None:
        config.format = fmt
    config.prefixes = _as_str_list(data.get("prefixes"))
    config.only = _as_str_list(data.get("only"))
    config.exclude = _as_str_list(data.get("except"))
    if config.only and config.exclude:
        raise ConfigError(f"{CONFIG_FILENAME}: 'only' and 'except' cannot be combined")
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "GeneratorConfig", "load_config"]
