"""Results writing entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class PayloadReportRow:
    """One payload line of the Payloads sheet."""

    label: str
    direction: str
    schema_status: str
    example_status: str
    errors: tuple[str, ...]


@dataclass(frozen=True)
class RenderReportMetadata:
    """Metadata rendered into the RunInfo sheet."""

    run_start: datetime
    input_path: Path
    output_path: Path | None
    known_types: int
    cyclic_types: tuple[str, ...]
