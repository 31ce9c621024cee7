"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import DRAFT_04_SCHEMA_URI, OutputSettings, RenderingSettings, RenderSettings


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(config_path: Path | str | None) -> RenderSettings:
    """Load and validate the render configuration; ``None`` yields defaults."""
    if config_path is None:
        return RenderSettings.defaults()

    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    unknown = sorted(str(key) for key in parsed if key not in ("output", "rendering"))
    if unknown:
        raise ConfigurationError(f"Unknown configuration sections: {', '.join(unknown)}")

    return RenderSettings(
        path=path,
        output=_parse_output_section(parsed.get("output")),
        rendering=_parse_rendering_section(parsed.get("rendering")),
    )


def _parse_output_section(value: Any) -> OutputSettings:
    section = _optional_mapping(value, "output")
    indent = _require_positive_int(section.get("indent", 2), "output.indent")
    schema_uri = _require_non_empty_string(
        section.get("schema_uri", DRAFT_04_SCHEMA_URI), "output.schema_uri"
    )
    return OutputSettings(indent=indent, schema_uri=schema_uri)


def _parse_rendering_section(value: Any) -> RenderingSettings:
    section = _optional_mapping(value, "rendering")
    return RenderingSettings(
        schemas=_require_bool(section.get("schemas", True), "rendering.schemas"),
        examples=_require_bool(section.get("examples", True), "rendering.examples"),
        keep_provided_schemas=_require_bool(
            section.get("keep_provided_schemas", True), "rendering.keep_provided_schemas"
        ),
        skip_cyclic_types=_require_bool(
            section.get("skip_cyclic_types", True), "rendering.skip_cyclic_types"
        ),
    )


def _optional_mapping(value: Any, label: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{label} section must be a mapping.")
    return value


def _require_positive_int(value: Any, label: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{label} must be a positive integer.")
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{label} must be a positive integer.") from exc
    if number <= 0:
        raise ConfigurationError(f"{label} must be a positive integer.")
    return number


def _require_non_empty_string(value: Any, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{label} must be a non-empty string.")
    return value.strip()


def _require_bool(value: Any, label: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{label} must be true or false.")
    return value
