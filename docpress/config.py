"""Configuration loading for docpress (.docpress.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".docpress.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class BuildConfig:
    """Build defaults; command-line flags take precedence."""

    language: Optional[str] = None
    locale: Optional[str] = None
    workers: Optional[int] = None
    max_failures: Optional[int] = None


@dataclass
class GeneratorConfig:
    """Generator enablement and template overrides."""

    enabled: Optional[List[str]] = None
    templates_dir: Optional[Path] = None


@dataclass
class OutputConfig:
    directory: Optional[Path] = None
    markers: bool = False


@dataclass
class DocPressConfig:
    """Represents the settings defined in .docpress.yml."""

    root: Path
    build: BuildConfig = field(default_factory=BuildConfig)
    generators: GeneratorConfig = field(default_factory=GeneratorConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(config_path: Path) -> DocPressConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return DocPressConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    build_data = _as_dict(data.get("build"))
    build = BuildConfig(
        language=_as_str(build_data.get("language")),
        locale=_as_str(build_data.get("locale")),
        workers=_as_positive_int(build_data.get("workers"), "build.workers"),
        max_failures=_as_positive_int(build_data.get("max_failures"), "build.max_failures"),
    )

    generator_data = _as_dict(data.get("generators"))
    generators = GeneratorConfig()
    if "enabled" in generator_data:
        generators.enabled = _as_str_list(generator_data.get("enabled"))
    templates_dir = _as_str(generator_data.get("templates_dir"))
    if templates_dir:
        generators.templates_dir = root / templates_dir

    output_data = _as_dict(data.get("output"))
    output = OutputConfig()
    directory = _as_str(output_data.get("directory"))
    if directory:
        output.directory = root / directory
    output.markers = _as_bool(output_data.get("markers")) or False

    return DocPressConfig(root=root, build=build, generators=generators, output=output)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.suffix not in {".yml", ".yaml"}:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_positive_int(value: Any, key: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be a positive integer")
    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError:
            raise ConfigError(f"{key} must be a positive integer") from None
    if not isinstance(value, int) or value < 1:
        raise ConfigError(f"{key} must be a positive integer")
    return value


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
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "BuildConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "DocPressConfig",
    "GeneratorConfig",
    "OutputConfig",
    "load_config",
]
