"""Payload rendering entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any


class PayloadDirection(str, Enum):
    """Whether a payload is sent to or returned by an action."""

    REQUEST = "request"
    RESPONSE = "response"


class ArtifactSource(str, Enum):
    """Origin of a payload's schema or example body."""

    GENERATED = "GENERATED"
    PROVIDED = "PROVIDED"
    ABSENT = "ABSENT"
    FAILED = "FAILED"


@dataclass(frozen=True)
class PayloadLocation:
    """One request or response found in an API description."""

    label: str
    direction: PayloadDirection
    data_structure: Mapping[str, Any] | None
    provided_schema: str | None
    provided_body: str | None


@dataclass(frozen=True)
class RenderedPayload:
    """Rendered artifacts for one payload."""

    label: str
    direction: PayloadDirection
    schema: str | None
    body: str | None
    schema_source: ArtifactSource
    body_source: ArtifactSource
    errors: tuple[str, ...] = ()

    @property
    def failed(self) -> bool:
        return bool(self.errors)


@dataclass(frozen=True)
class RenderRunRequest:
    """Input contract for one render run."""

    input_path: str
    output_path: str | None = None
    report_path: str | None = None


@dataclass(frozen=True)
class RenderRunOutcome:
    """Output contract for one completed render run."""

    run_start: datetime
    input_path: Path
    output_path: Path | None
    known_types: tuple[str, ...]
    cyclic_types: tuple[str, ...]
    payloads: tuple[RenderedPayload, ...]

    @property
    def failed_count(self) -> int:
        return sum(1 for payload in self.payloads if payload.failed)


@dataclass(frozen=True)
class NamedTypeArtifacts:
    """Schema and example rendered for a single named data structure."""

    name: str
    schema: dict[str, Any]
    example: Any
