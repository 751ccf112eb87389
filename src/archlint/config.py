"""Configuration: optional ``.archlint.yml`` supplying defaults for CLI flags."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import yaml

from archlint.microtask.line_counter import DEFAULT_MAX_LINES

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".archlint.yml"

ADR_FORMATS: frozenset[str] = frozenset({"rich", "json", "junit"})
MICROTASK_FORMATS: frozenset[str] = frozenset({"rich", "json"})


class ConfigError(Exception):
    """Raised when the configuration file is unreadable or holds invalid values."""


@dataclass(frozen=True)
class AdrSettings:
    """Defaults for ``archlint adr``."""

    strict: bool = False
    format: str | None = None  # None: rich


@dataclass(frozen=True)
class MicrotaskSettings:
    """Defaults for ``archlint microtask``."""

    max_lines: int = DEFAULT_MAX_LINES
    recursive: bool = False
    format: str | None = None  # None: rich


@dataclass(frozen=True)
class ArchlintConfig:
    """Merged configuration for both tools."""

    adr: AdrSettings = field(default_factory=AdrSettings)
    microtask: MicrotaskSettings = field(default_factory=MicrotaskSettings)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        logger.warning("Ignoring '%s' in config: expected a mapping", name)
        return {}
    return section


def _bool(section: dict[str, Any], key: str, default: bool, where: str) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        msg = f"{where}.{key} must be true or false, got {value!r}"
        raise ConfigError(msg)
    return value


def _format(
    section: dict[str, Any], allowed: frozenset[str], where: str
) -> str | None:
    value = section.get("format")
    if value is None:
        return None
    if value not in allowed:
        msg = f"{where}.format must be one of {', '.join(sorted(allowed))}, got {value!r}"
        raise ConfigError(msg)
    return str(value)


def _max_lines(section: dict[str, Any]) -> int:
    value = section.get("max_lines", DEFAULT_MAX_LINES)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        msg = f"microtask.max_lines must be a positive integer, got {value!r}"
        raise ConfigError(msg)
    return value


def parse_config(data: object) -> ArchlintConfig:
    """Build an ArchlintConfig from already-loaded YAML data.

    Missing sections and keys fall back to defaults.

    Raises
    ------
    ConfigError
        When a value has the wrong type or is out of range.
    """
    if data is None:
        return ArchlintConfig()
    if not isinstance(data, dict):
        msg = "top level must be a mapping"
        raise ConfigError(msg)

    adr = _section(data, "adr")
    microtask = _section(data, "microtask")

    return ArchlintConfig(
        adr=AdrSettings(
            strict=_bool(adr, "strict", False, "adr"),
            format=_format(adr, ADR_FORMATS, "adr"),
        ),
        microtask=MicrotaskSettings(
            max_lines=_max_lines(microtask),
            recursive=_bool(microtask, "recursive", False, "microtask"),
            format=_format(microtask, MICROTASK_FORMATS, "microtask"),
        ),
    )


def load_config(path: Path) -> ArchlintConfig:
    """Load configuration from *path*, returning defaults when it does not exist.

    Raises
    ------
    ConfigError
        When the file cannot be read or parsed, or holds invalid values.
    """
    if not path.is_file():
        logger.debug("No config at %s, using defaults", path)
        return ArchlintConfig()

    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Cannot read {path}: {exc}"
        raise ConfigError(msg) from exc

    try:
        return parse_config(data)
    except ConfigError as exc:
        msg = f"Invalid configuration in {path}: {exc}"
        raise ConfigError(msg) from exc
