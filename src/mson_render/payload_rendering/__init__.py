"""Payload rendering domain exports."""

from .payload_contracts import (
    ArtifactSource,
    NamedTypeArtifacts,
    PayloadDirection,
    PayloadLocation,
    RenderedPayload,
    RenderRunOutcome,
    RenderRunRequest,
)
from .payload_discovery import discover_payloads
from .render_run_use_case import (
    RenderRunError,
    build_result_document,
    execute_render_run,
    list_named_types,
    load_api_description,
    render_named_type,
    render_payload,
)

__all__ = [
    "ArtifactSource",
    "NamedTypeArtifacts",
    "PayloadDirection",
    "PayloadLocation",
    "RenderedPayload",
    "RenderRunError",
    "RenderRunOutcome",
    "RenderRunRequest",
    "build_result_document",
    "discover_payloads",
    "execute_render_run",
    "list_named_types",
    "load_api_description",
    "render_named_type",
    "render_payload",
]
