"""Render run integration tests."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import pytest
from mson_render.configuration import load_configuration
from mson_render.configuration.runtime_settings import RenderSettings
from mson_render.payload_rendering import (
    ArtifactSource,
    RenderRunError,
    RenderRunRequest,
    execute_render_run,
    list_named_types,
    render_named_type,
)
from mson_render.results_writing import PAYLOADS_SHEET_NAME, RUN_INFO_SHEET_NAME
from openpyxl import load_workbook

_DRAFT_04 = "http://json-schema.org/draft-04/schema#"


def _sample_ast(tmp_path: Path) -> Path:
    source = Path(__file__).resolve().parents[3] / "samples" / "sample-api-ast.json"
    target = tmp_path / "api.json"
    shutil.copyfile(source, target)
    return target


def _payloads_by_label(outcome) -> dict:
    return {payload.label: payload for payload in outcome.payloads}


def test_renders_every_payload_of_the_sample_description(tmp_path: Path) -> None:
    outcome = execute_render_run(
        RenderRunRequest(input_path=str(_sample_ast(tmp_path))), RenderSettings.defaults()
    )
    payloads = _payloads_by_label(outcome)

    assert outcome.known_types == ("Note", "Shared Note", "Timestamps", "Tree")
    assert outcome.cyclic_types == ("Tree",)
    assert list(payloads) == [
        "Notes / Note / GET / response 1",
        "Notes / Note / POST / request 1",
        "Notes / Note / POST / response 1",
        "Notes / Tree / GET / response 1",
    ]

    shared = payloads["Notes / Note / GET / response 1"]
    assert shared.schema_source is ArtifactSource.GENERATED
    assert json.loads(shared.schema) == {
        "$schema": _DRAFT_04,
        "type": "object",
        "properties": {
            "id": {"type": "string"},
            "title": {"type": "string", "description": "Short title"},
            "tags": {"type": "array", "items": {"type": "string"}},
            "owner": {"type": ["string", "null"]},
        },
        "required": ["id"],
        "description": "A single note.",
    }
    assert json.loads(shared.body) == {
        "id": "n-1",
        "title": "Grocery list",
        "tags": ["home"],
        "owner": "alice",
    }
    assert shared.schema.startswith('{\n  "$schema"')


def test_mixins_and_option_sets_in_request_payload(tmp_path: Path) -> None:
    outcome = execute_render_run(
        RenderRunRequest(input_path=str(_sample_ast(tmp_path))), RenderSettings.defaults()
    )
    create = _payloads_by_label(outcome)["Notes / Note / POST / request 1"]

    schema = json.loads(create.schema)
    assert list(schema["properties"]) == ["created", "title", "text", "url"]
    assert schema["allOf"] == [{"not": {"required": ["text", "url"]}}]
    assert json.loads(create.body) == {
        "created": "2015-01-01T12:00:00Z",
        "title": "Hello, world!",
        "text": "Hello, world!",
    }


def test_provided_artifacts_are_kept_and_pretty_printed(tmp_path: Path) -> None:
    outcome = execute_render_run(
        RenderRunRequest(input_path=str(_sample_ast(tmp_path))), RenderSettings.defaults()
    )
    created = _payloads_by_label(outcome)["Notes / Note / POST / response 1"]

    assert created.schema == '{\n  "type": "object"\n}'
    assert created.body == '{\n  "ok": true\n}'
    assert created.schema_source is ArtifactSource.PROVIDED
    assert created.body_source is ArtifactSource.PROVIDED
    assert not created.failed


def test_cyclic_payload_is_reported_without_stopping_the_run(tmp_path: Path) -> None:
    outcome = execute_render_run(
        RenderRunRequest(input_path=str(_sample_ast(tmp_path))), RenderSettings.defaults()
    )
    tree = _payloads_by_label(outcome)["Notes / Tree / GET / response 1"]

    assert tree.errors == ("Data structure references itself: Tree",)
    assert tree.schema is None
    assert tree.schema_source is ArtifactSource.FAILED
    assert tree.body_source is ArtifactSource.FAILED
    assert outcome.failed_count == 1


def test_writes_result_document_and_report_workbook(tmp_path: Path) -> None:
    output_path = tmp_path / "out" / "rendered.json"
    report_path = tmp_path / "out" / "report.xlsx"

    outcome = execute_render_run(
        RenderRunRequest(
            input_path=str(_sample_ast(tmp_path)),
            output_path=str(output_path),
            report_path=str(report_path),
        ),
        RenderSettings.defaults(),
    )

    document = json.loads(output_path.read_text(encoding="utf-8"))
    assert document["known_types"] == ["Note", "Shared Note", "Timestamps", "Tree"]
    assert document["cyclic_types"] == ["Tree"]
    assert [item["schema_source"] for item in document["payloads"]] == [
        "GENERATED",
        "GENERATED",
        "PROVIDED",
        "FAILED",
    ]
    assert outcome.output_path == output_path

    workbook = load_workbook(report_path)
    assert workbook.sheetnames == [PAYLOADS_SHEET_NAME, RUN_INFO_SHEET_NAME]
    payload_rows = list(workbook[PAYLOADS_SHEET_NAME].iter_rows(values_only=True))
    assert payload_rows[0] == ("Payload", "Direction", "Schema", "Example", "Errors")
    assert payload_rows[4][0] == "Notes / Tree / GET / response 1"
    assert payload_rows[4][4] == "Data structure references itself: Tree"
    run_info = dict(workbook[RUN_INFO_SHEET_NAME].iter_rows(values_only=True))
    assert run_info["payloads"] == 4
    assert run_info["failed"] == 1


def test_configuration_switches_disable_artifacts(tmp_path: Path) -> None:
    config_path = tmp_path / "render-config.yaml"
    config_path.write_text(
        "output:\n  indent: 4\nrendering:\n  examples: false\n  keep_provided_schemas: false\n",
        encoding="utf-8",
    )
    settings = load_configuration(config_path)

    outcome = execute_render_run(RenderRunRequest(input_path=str(_sample_ast(tmp_path))), settings)
    payloads = _payloads_by_label(outcome)

    shared = payloads["Notes / Note / GET / response 1"]
    assert shared.body is None
    assert shared.body_source is ArtifactSource.ABSENT
    assert shared.schema.startswith('{\n    "$schema"')
    provided = payloads["Notes / Note / POST / response 1"]
    assert provided.schema_source is ArtifactSource.PROVIDED


def test_render_named_type_and_list_types(tmp_path: Path) -> None:
    ast_path = _sample_ast(tmp_path)

    artifacts = render_named_type(ast_path, "Shared Note", RenderSettings.defaults())

    assert list_named_types(ast_path) == ("Note", "Shared Note", "Timestamps", "Tree")
    assert artifacts.schema["$schema"] == _DRAFT_04
    assert artifacts.schema["required"] == ["id"]
    assert artifacts.example["id"] == "n-1"


@pytest.mark.parametrize(
    ("name", "message"),
    [("Missing", "Unknown data structure: Missing"), ("Tree", "references itself: Tree")],
)
def test_render_named_type_rejects_unknown_and_cyclic_types(
    tmp_path: Path, name: str, message: str
) -> None:
    with pytest.raises(RenderRunError, match=message):
        render_named_type(_sample_ast(tmp_path), name, RenderSettings.defaults())


def test_invalid_input_files_raise_render_run_error(tmp_path: Path) -> None:
    bad_json = tmp_path / "bad.json"
    bad_json.write_text("{not json", encoding="utf-8")
    not_object = tmp_path / "list.json"
    not_object.write_text("[]", encoding="utf-8")

    with pytest.raises(RenderRunError, match="not found"):
        execute_render_run(
            RenderRunRequest(input_path=str(tmp_path / "missing.json")), RenderSettings.defaults()
        )
    with pytest.raises(RenderRunError, match="Invalid API description JSON"):
        execute_render_run(RenderRunRequest(input_path=str(bad_json)), RenderSettings.defaults())
    with pytest.raises(RenderRunError, match="must be a JSON object"):
        execute_render_run(RenderRunRequest(input_path=str(not_object)), RenderSettings.defaults())


def _single_action_ast(*responses: dict) -> dict:
    action = {"method": "GET", "examples": [{"responses": list(responses)}]}
    return {"resourceGroups": [{"name": "G", "resources": [{"name": "R", "actions": [action]}]}]}


def test_malformed_payload_structure_is_isolated(tmp_path: Path) -> None:
    ast_path = tmp_path / "api.json"
    broken_structure = {"element": "dataStructure", "content": [{"content": 1}]}
    number_structure = {"element": "dataStructure", "content": [{"element": "number"}]}
    ast_path.write_text(
        json.dumps(
            _single_action_ast({"content": [broken_structure]}, {"content": [number_structure]})
        ),
        encoding="utf-8",
    )

    outcome = execute_render_run(
        RenderRunRequest(input_path=str(ast_path)), RenderSettings.defaults()
    )

    broken, number = outcome.payloads
    assert broken.label == "G / R / GET / response 1"
    assert broken.errors[0].startswith("Invalid data structure:")
    assert number.body == "1"
    assert json.loads(number.schema)["type"] == "number"


def test_malformed_declaration_does_not_stop_the_run(tmp_path: Path, caplog) -> None:
    good_type = {
        "element": "object",
        "meta": {"id": "Good"},
        "content": [
            {
                "element": "member",
                "content": {
                    "key": {"element": "string", "content": "name"},
                    "value": {"element": "string"},
                },
            }
        ],
    }
    bad_type = {"element": "array", "meta": {"id": "Bad"}, "content": ["x", "y"]}
    uses_bad = {
        "element": "object",
        "content": [
            {
                "element": "member",
                "content": {
                    "key": {"element": "string", "content": "bad"},
                    "value": {"element": "Bad"},
                },
            }
        ],
    }
    ast = _single_action_ast(
        {"content": [{"element": "dataStructure", "content": [{"element": "Good"}]}]},
        {"content": [{"element": "dataStructure", "content": [uses_bad]}]},
    )
    ast["content"] = [
        {
            "element": "category",
            "content": [
                {"element": "dataStructure", "content": [good_type]},
                {"element": "dataStructure", "content": [bad_type]},
            ],
        }
    ]
    ast_path = tmp_path / "api.json"
    ast_path.write_text(json.dumps(ast), encoding="utf-8")

    with caplog.at_level("WARNING", logger="mson_render"):
        outcome = execute_render_run(
            RenderRunRequest(input_path=str(ast_path)), RenderSettings.defaults()
        )

    good, bad_reference = outcome.payloads
    assert outcome.failed_count == 0
    assert json.loads(good.body) == {"name": "Hello, world!"}
    assert json.loads(good.schema)["properties"]["name"] == {"type": "string"}
    assert bad_reference.errors == ()
    assert json.loads(bad_reference.schema)["properties"]["bad"] == {}
    assert json.loads(bad_reference.body) == {}
    assert list_named_types(ast_path) == ("Good",)
    assert "Skipping malformed data structure Bad" in caplog.text
