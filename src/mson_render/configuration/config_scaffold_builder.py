"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "render-config.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Render configuration for mson-render.
# Every key is optional; the values below are the defaults.

output:
  # Indentation used when serializing schemas, example bodies and the result document.
  indent: 2
  # URI attached as "$schema" to every generated schema.
  schema_uri: "http://json-schema.org/draft-04/schema#"

rendering:
  # Generate a JSON Schema for each request/response data structure.
  schemas: true
  # Generate an example body for each request/response data structure.
  examples: true
  # Keep schemas already present in the API description instead of regenerating them.
  keep_provided_schemas: true
  # Report payloads that reach a self-referencing type instead of rendering them.
  skip_cyclic_types: true
"""


def build_placeholder_configuration() -> str:
    """Build a YAML render configuration with defaults and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the render configuration scaffold to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
