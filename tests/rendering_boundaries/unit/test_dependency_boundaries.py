"""Boundary tests for the rendering core's internal dependencies."""

from __future__ import annotations

from pathlib import Path


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def test_rendering_core_does_not_import_pipeline_or_io_modules() -> None:
    package_dir = _project_root() / "src" / "mson_render"
    core_modules = (
        package_dir / "type_inheritance" / "inheritance_resolver.py",
        package_dir / "type_inheritance" / "mixin_expansion.py",
        package_dir / "schema_rendering" / "schema_renderer.py",
        package_dir / "schema_rendering" / "schema_equality.py",
        package_dir / "example_rendering" / "example_renderer.py",
    )
    forbidden_import_fragments = (
        "mson_render.payload_rendering",
        "mson_render.configuration",
        "mson_render.results_writing",
        "mson_render.cli",
        "import logging",
        "import json",
    )

    for module_path in core_modules:
        text = module_path.read_text(encoding="utf-8")
        for fragment in forbidden_import_fragments:
            assert fragment not in text, f"Forbidden core dependency in {module_path}: {fragment}"


def test_schema_and_example_renderers_do_not_import_each_other() -> None:
    package_dir = _project_root() / "src" / "mson_render"
    schema_text = (package_dir / "schema_rendering" / "schema_renderer.py").read_text(
        encoding="utf-8"
    )
    example_text = (package_dir / "example_rendering" / "example_renderer.py").read_text(
        encoding="utf-8"
    )

    assert "example_rendering" not in schema_text
    assert "schema_rendering" not in example_text
