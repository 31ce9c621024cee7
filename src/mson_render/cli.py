"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys

import click

from mson_render.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from mson_render.payload_rendering import (
    RenderRunError,
    RenderRunRequest,
    build_result_document,
    execute_render_run,
    list_named_types,
    render_named_type,
)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="mson-render")
@click.option(
    "--verbose", "-v", is_flag=True, default=False, help="Log rendering details to stderr."
)
def cli(verbose: bool) -> None:
    """Render JSON Schemas and example bodies from MSON data structures."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=_LOG_FORMAT, stream=sys.stderr)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML render configuration to write",
)
def generate_config(output_path: str) -> None:
    """Generate a render configuration file with the default settings."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="render")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the API description AST (JSON)",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional YAML/JSON render configuration file",
)
@click.option(
    "--output",
    "output_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to the JSON result document; printed to stdout when omitted",
)
@click.option(
    "--report",
    "report_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional path for a render report workbook (.xlsx)",
)
def render(
    input_path: str, config_path: str | None, output_path: str | None, report_path: str | None
) -> None:
    """Render schemas and example bodies for every request and response."""
    try:
        settings = load_configuration(config_path)
        outcome = execute_render_run(
            RenderRunRequest(
                input_path=input_path,
                output_path=output_path,
                report_path=report_path,
            ),
            settings,
        )
    except (ConfigurationError, RenderRunError) as exc:
        raise CliError(str(exc)) from exc
    if outcome.output_path is None:
        click.echo(build_result_document(outcome, settings), nl=False)
    else:
        click.echo(str(outcome.output_path.resolve()))
    if outcome.failed_count:
        click.echo(f"{outcome.failed_count} payload(s) could not be rendered.", err=True)


@cli.command(name="render-type")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the API description AST (JSON)",
)
@click.option("--name", "type_name", required=True, help="Name of the data structure to render")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional YAML/JSON render configuration file",
)
@click.option(
    "--only",
    type=click.Choice(["schema", "example"]),
    default=None,
    help="Print only one of the two artifacts",
)
def render_type(input_path: str, type_name: str, config_path: str | None, only: str | None) -> None:
    """Render the schema and example of one named data structure."""
    try:
        settings = load_configuration(config_path)
        artifacts = render_named_type(input_path, type_name, settings)
    except (ConfigurationError, RenderRunError) as exc:
        raise CliError(str(exc)) from exc
    indent = settings.output.indent
    if only == "schema":
        output = artifacts.schema
    elif only == "example":
        output = artifacts.example
    else:
        output = {"schema": artifacts.schema, "example": artifacts.example}
    click.echo(json.dumps(output, indent=indent, ensure_ascii=False))


@cli.command(name="list-types")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the API description AST (JSON)",
)
def list_types(input_path: str) -> None:
    """List the named data structures declared in an API description."""
    try:
        names = list_named_types(input_path)
    except RenderRunError as exc:
        raise CliError(str(exc)) from exc
    for name in names:
        click.echo(name)


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
