"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from struct_to_gql.configuration import (
    DEFAULT_CONFIG_FILENAME,
    ConfigurationError,
    load_configuration,
    write_placeholder_configuration,
)
from struct_to_gql.run_execution import (
    ConversionRequest,
    ConversionRunError,
    execute_conversion_run,
)
from struct_to_gql.schema_rendering import RenderOptions, RequiredTag, parse_required_tag
from struct_to_gql.tag_parsing import TagFormatError

_LOGGER = logging.getLogger(__name__)
_PACKAGE_LOGGER_NAME = "struct_to_gql"
_LOG_FORMAT = "%(levelname)s %(message)s"


class CliError(Exception):
    """Custom CLI error."""


class _ClickEchoHandler(logging.Handler):
    """Log handler that prints records through `click.echo` on stderr."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def _configure_logging(verbose: bool) -> None:
    package_logger = logging.getLogger(_PACKAGE_LOGGER_NAME)
    if not any(isinstance(handler, _ClickEchoHandler) for handler in package_logger.handlers):
        handler = _ClickEchoHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        package_logger.addHandler(handler)
    package_logger.setLevel(logging.INFO if verbose else logging.WARNING)


def _parse_required_tag_option(
    _ctx: click.Context, _param: click.Parameter, value: str | None
) -> RequiredTag | None:
    if value is None:
        return None
    try:
        return parse_required_tag(value)
    except TagFormatError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="struct-to-gql")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log progress to stderr.")
def cli(verbose: bool) -> None:
    """Convert Go structs into GraphQL types usable with gqlgen."""
    _configure_logging(verbose)


@cli.command(name="convert")
@click.option(
    "--src",
    "-s",
    "source_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the Go source file containing the structs to convert",
)
@click.option(
    "--use-tags",
    "-u",
    is_flag=True,
    default=False,
    help="Use tags as field names when available; the json tag unless --tags is given.",
)
@click.option(
    "--tags",
    "-t",
    "custom_tag",
    default=None,
    help="Tag to use as field name. Implies --use-tags.",
)
@click.option(
    "--ignore-value",
    "-i",
    default=None,
    help='Drop fields whose resolved name equals this value (default "-" with tags).',
)
@click.option(
    "--required-tags",
    "-r",
    "required_tag",
    callback=_parse_required_tag_option,
    help="Tag that marks a field required, as key=value, e.g. validate=required.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Optional YAML configuration file; command line flags override it.",
)
def convert(
    source_path: str,
    use_tags: bool,
    custom_tag: str | None,
    ignore_value: str | None,
    required_tag: RequiredTag | None,
    config_path: str | None,
) -> None:
    """Print GraphQL types for the structs declared in a Go source file."""
    try:
        configured = (
            load_configuration(config_path).render_options if config_path else RenderOptions()
        )
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc

    resolved_custom_tag = custom_tag if custom_tag is not None else configured.custom_tag
    options = RenderOptions(
        use_json_tags=configured.use_json_tags or use_tags or resolved_custom_tag is not None,
        custom_tag=resolved_custom_tag,
        ignore_value=ignore_value if ignore_value is not None else configured.ignore_value,
        required_tag=required_tag if required_tag is not None else configured.required_tag,
    )
    try:
        outcome = execute_conversion_run(
            ConversionRequest(source_path=source_path, render_options=options)
        )
    except ConversionRunError as exc:
        raise CliError(str(exc)) from exc
    click.echo(outcome.schema_text)


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML configuration template with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        _LOGGER.error("%s", exc)
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
