"""Render run use-case service."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from mson_render.configuration.runtime_settings import RenderSettings
from mson_render.element_model.element_models import Element, SymbolTable
from mson_render.element_model.refract_parsing import ElementFormatError, parse_element
from mson_render.example_rendering import render_example
from mson_render.results_writing import (
    PayloadReportRow,
    RenderReportMetadata,
    write_render_report,
)
from mson_render.schema_rendering import render_schema
from mson_render.type_inheritance import (
    build_symbol_table,
    find_reference_cycles,
    reachable_names,
)

from .payload_contracts import (
    ArtifactSource,
    NamedTypeArtifacts,
    PayloadLocation,
    RenderedPayload,
    RenderRunOutcome,
    RenderRunRequest,
)
from .payload_discovery import discover_payloads

_LOGGER = logging.getLogger(__name__)


class RenderRunError(Exception):
    """Raised when a render run cannot be completed."""


def execute_render_run(request: RenderRunRequest, settings: RenderSettings) -> RenderRunOutcome:
    """Render every payload of an API description and write the requested outputs."""
    run_start = datetime.now(UTC)
    input_path = Path(request.input_path)
    api_description = load_api_description(input_path)
    symbol_table = build_symbol_table(api_description)
    cyclic_types = find_reference_cycles(symbol_table)
    if cyclic_types:
        _LOGGER.warning("Self-referencing data structures: %s", ", ".join(sorted(cyclic_types)))

    payloads = tuple(
        render_payload(location, symbol_table, cyclic_types, settings)
        for location in discover_payloads(api_description)
    )
    outcome = RenderRunOutcome(
        run_start=run_start,
        input_path=input_path,
        output_path=Path(request.output_path) if request.output_path else None,
        known_types=tuple(symbol_table),
        cyclic_types=tuple(sorted(cyclic_types)),
        payloads=payloads,
    )
    _LOGGER.info(
        "Rendered %d payloads (%d with errors) from %s",
        len(payloads),
        outcome.failed_count,
        input_path,
    )

    if outcome.output_path is not None:
        _write_text(outcome.output_path, build_result_document(outcome, settings))
    if request.report_path:
        try:
            write_render_report(
                request.report_path, _report_rows(outcome), _report_metadata(outcome)
            )
        except OSError as exc:
            raise RenderRunError(f"Failed to write render report: {exc}") from exc
    return outcome


def render_payload(
    location: PayloadLocation,
    symbol_table: SymbolTable,
    cyclic_types: frozenset[str],
    settings: RenderSettings,
) -> RenderedPayload:
    """Render one payload; failures are recorded on the result instead of raised."""
    errors: list[str] = []
    element = _payload_element(location, symbol_table, cyclic_types, settings, errors)
    blocked = location.data_structure is not None and element is None
    indent = settings.output.indent

    schema, schema_source = _provided_text(location.provided_schema, indent)
    generate_schema = settings.rendering.schemas and not (
        schema is not None and settings.rendering.keep_provided_schemas
    )
    if element is not None and generate_schema:
        try:
            rendered_schema = {
                "$schema": settings.output.schema_uri,
                **render_schema(element, symbol_table),
            }
            schema, schema_source = _dumps(rendered_schema, indent), ArtifactSource.GENERATED
        except RecursionError:
            errors.append("Schema rendering exceeded the maximum recursion depth.")
            schema_source = ArtifactSource.FAILED

    body, body_source = _provided_text(location.provided_body, indent)
    if element is not None and settings.rendering.examples:
        try:
            example = render_example(element, symbol_table)
            if example is not None:
                body, body_source = _dumps(example, indent), ArtifactSource.GENERATED
        except RecursionError:
            errors.append("Example rendering exceeded the maximum recursion depth.")
            body_source = ArtifactSource.FAILED

    if blocked and settings.rendering.schemas and schema_source is ArtifactSource.ABSENT:
        schema_source = ArtifactSource.FAILED
    if blocked and settings.rendering.examples and body_source is ArtifactSource.ABSENT:
        body_source = ArtifactSource.FAILED

    for error in errors:
        _LOGGER.warning("%s: %s", location.label, error)
    return RenderedPayload(
        label=location.label,
        direction=location.direction,
        schema=schema,
        body=body,
        schema_source=schema_source,
        body_source=body_source,
        errors=tuple(errors),
    )


def render_named_type(
    input_path: Path | str, name: str, settings: RenderSettings
) -> NamedTypeArtifacts:
    """Render the schema and example of one named data structure."""
    symbol_table = build_symbol_table(load_api_description(Path(input_path)))
    element = symbol_table.get(name)
    if element is None:
        raise RenderRunError(f"Unknown data structure: {name}")
    if settings.rendering.skip_cyclic_types:
        reached = reachable_names(element, symbol_table) | {name}
        blocked = sorted(reached & find_reference_cycles(symbol_table))
        if blocked:
            raise RenderRunError(f"Data structure references itself: {', '.join(blocked)}")
    try:
        schema = render_schema(element, symbol_table)
        example = render_example(element, symbol_table)
    except RecursionError as exc:
        raise RenderRunError(f"Rendering {name} exceeded the maximum recursion depth.") from exc
    return NamedTypeArtifacts(
        name=name,
        schema={"$schema": settings.output.schema_uri, **schema},
        example=example,
    )


def list_named_types(input_path: Path | str) -> tuple[str, ...]:
    """Return the names of every data structure declared in an API description."""
    return tuple(build_symbol_table(load_api_description(Path(input_path))))


def load_api_description(path: Path) -> Mapping[str, Any]:
    """Read an API description AST from JSON, unwrapping a parse result envelope."""
    if not path.exists():
        raise RenderRunError(f"API description file not found: {path}")
    try:
        parsed = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise RenderRunError(f"Failed to read API description: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise RenderRunError(f"Invalid API description JSON: {exc}") from exc
    if isinstance(parsed, Mapping) and isinstance(parsed.get("ast"), Mapping):
        parsed = parsed["ast"]
    if not isinstance(parsed, Mapping):
        raise RenderRunError("API description root must be a JSON object.")
    return parsed


def build_result_document(outcome: RenderRunOutcome, settings: RenderSettings) -> str:
    """Serialize a render outcome into the JSON result document."""
    document = {
        "input": str(outcome.input_path),
        "generated_at": outcome.run_start.isoformat(),
        "known_types": list(outcome.known_types),
        "cyclic_types": list(outcome.cyclic_types),
        "payloads": [
            {
                "label": payload.label,
                "direction": payload.direction.value,
                "schema": payload.schema,
                "body": payload.body,
                "schema_source": payload.schema_source.value,
                "body_source": payload.body_source.value,
                "errors": list(payload.errors),
            }
            for payload in outcome.payloads
        ],
    }
    return _dumps(document, settings.output.indent) + "\n"


def _payload_element(
    location: PayloadLocation,
    symbol_table: SymbolTable,
    cyclic_types: frozenset[str],
    settings: RenderSettings,
    errors: list[str],
) -> Element | None:
    if location.data_structure is None:
        return None
    try:
        element = parse_element(location.data_structure)
    except ElementFormatError as exc:
        errors.append(f"Invalid data structure: {exc}")
        return None
    if settings.rendering.skip_cyclic_types:
        blocked = sorted(reachable_names(element, symbol_table) & cyclic_types)
        if blocked:
            errors.append(f"Data structure references itself: {', '.join(blocked)}")
            return None
    return element


def _provided_text(text: str | None, indent: int) -> tuple[str | None, ArtifactSource]:
    if text is None:
        return None, ArtifactSource.ABSENT
    try:
        return _dumps(json.loads(text), indent), ArtifactSource.PROVIDED
    except json.JSONDecodeError:
        return text, ArtifactSource.PROVIDED


def _dumps(value: Any, indent: int) -> str:
    return json.dumps(value, indent=indent, ensure_ascii=False)


def _write_text(path: Path, text: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise RenderRunError(f"Failed to write result document: {exc}") from exc


def _report_rows(outcome: RenderRunOutcome) -> tuple[PayloadReportRow, ...]:
    return tuple(
        PayloadReportRow(
            label=payload.label,
            direction=payload.direction.value,
            schema_status=payload.schema_source.value,
            example_status=payload.body_source.value,
            errors=payload.errors,
        )
        for payload in outcome.payloads
    )


def _report_metadata(outcome: RenderRunOutcome) -> RenderReportMetadata:
    return RenderReportMetadata(
        run_start=outcome.run_start,
        input_path=outcome.input_path,
        output_path=outcome.output_path,
        known_types=len(outcome.known_types),
        cyclic_types=outcome.cyclic_types,
    )
