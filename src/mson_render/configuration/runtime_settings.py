"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DRAFT_04_SCHEMA_URI = "http://json-schema.org/draft-04/schema#"


@dataclass(frozen=True)
class OutputSettings:
    """Serialization settings for rendered artifacts."""

    indent: int = 2
    schema_uri: str = DRAFT_04_SCHEMA_URI


@dataclass(frozen=True)
class RenderingSettings:
    """Switches controlling which artifacts are rendered per payload."""

    schemas: bool = True
    examples: bool = True
    keep_provided_schemas: bool = True
    skip_cyclic_types: bool = True


@dataclass(frozen=True)
class RenderSettings:
    """Top-level configuration aggregate."""

    path: Path | None
    output: OutputSettings
    rendering: RenderingSettings

    @classmethod
    def defaults(cls) -> RenderSettings:
        return cls(path=None, output=OutputSettings(), rendering=RenderingSettings())
