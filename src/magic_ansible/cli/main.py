"""
Main CLI entry point for magic-ansible.

Provides the command-line interface using Click.
"""

import json as _json
import pathlib as _pathlib
import typing as _typing

import click as _click
import pydantic as _pydantic
import rich.console as _rich_console
import rich.syntax as _rich_syntax
import yaml as _yaml

import magic_ansible
import magic_ansible.config as config
import magic_ansible.errors as errors
import magic_ansible.logging as logging
import magic_ansible.overrides as overrides
import magic_ansible.pipeline as pipeline
import magic_ansible.schema as schema

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

LOG_LEVELS = ["debug", "info", "warning", "error"]


def _load_settings() -> config.Settings:
    """Load settings from the environment and config file, failing cleanly."""
    try:
        return config.Settings()
    except (config.ConfigFileError, _pydantic.ValidationError) as e:
        raise _click.ClickException(f"Invalid configuration: {e}") from e


def _apply_path_options(
    settings: config.Settings,
    *,
    mmv1_dir: _pathlib.Path | None = None,
    overrides_dir: _pathlib.Path | None = None,
    template_dir: _pathlib.Path | None = None,
    output: _pathlib.Path | None = None,
) -> None:
    if mmv1_dir is not None:
        settings.paths.mmv1_dir = str(mmv1_dir)
    if overrides_dir is not None:
        settings.paths.overrides_dir = str(overrides_dir)
    if template_dir is not None:
        settings.paths.template_dir = str(template_dir)
    if output is not None:
        settings.paths.output_dir = str(output)


def _path_option(*names: str, help: str, **kwargs: _typing.Any) -> _typing.Callable[..., _typing.Any]:
    return _click.option(
        *names,
        type=_click.Path(file_okay=False, path_type=_pathlib.Path, **kwargs),
        default=None,
        help=help,
    )


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(magic_ansible.__version__, "-v", "--version", prog_name="magic-ansible")
def cli() -> None:
    """
    magic-ansible - Ansible module generator for Google Cloud.

    Reads magic-modules product and resource definitions, applies local
    override files and renders Ansible modules with their integration tests.

    \b
    Examples:
        magic-ansible generate --mmv1-dir ../magic-modules/mmv1 --output .
        magic-ansible generate --product filestore --resource Instance
        magic-ansible merge ../magic-modules/mmv1/products/filestore/Instance.yaml
        magic-ansible config
    """


@cli.command()
@_path_option("--mmv1-dir", help="magic-modules mmv1 directory (contains products/)", exists=True)
@_path_option("--overrides-dir", help="Override tree (<product>/<resource>.yaml)", exists=True)
@_path_option("--template-dir", help="Template directory (default: bundled templates)", exists=True)
@_path_option("-o", "--output", help="Collection root to write into")
@_click.option(
    "--product",
    "products",
    multiple=True,
    help="Only generate this product (repeatable)",
)
@_click.option(
    "--resource",
    "resources",
    multiple=True,
    help="Only generate this resource (repeatable)",
)
@_click.option("--overwrite", is_flag=True, default=None, help="Replace existing files")
@_click.option("--no-tests", is_flag=True, help="Skip integration test generation")
@_click.option(
    "--strict-overrides",
    is_flag=True,
    default=None,
    help="Fail a resource when its override file is malformed",
)
@_click.option(
    "--log-level",
    type=_click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Log level (default: from config, else info)",
)
def generate(
    mmv1_dir: _pathlib.Path | None,
    overrides_dir: _pathlib.Path | None,
    template_dir: _pathlib.Path | None,
    output: _pathlib.Path | None,
    products: tuple[str, ...],
    resources: tuple[str, ...],
    overwrite: bool | None,
    no_tests: bool,
    strict_overrides: bool | None,
    log_level: str | None,
) -> None:
    """Generate Ansible modules from magic-modules definitions.

    Exits with status 1 if any product or resource failed; the others are
    still generated.
    """
    settings = _load_settings()
    _apply_path_options(
        settings,
        mmv1_dir=mmv1_dir,
        overrides_dir=overrides_dir,
        template_dir=template_dir,
        output=output,
    )
    if products:
        settings.generation.products = list(products)
    if resources:
        settings.generation.resources = list(resources)
    if overwrite:
        settings.generation.overwrite = True
    if no_tests:
        settings.generation.tests = False
    if strict_overrides:
        settings.overrides.strict = True
    if log_level:
        settings.logging.level = log_level.lower()  # type: ignore[assignment]

    logging.configure_logging(settings.logging.level)

    try:
        summary = pipeline.run(settings)
    except errors.MagicAnsibleError as e:
        raise _click.ClickException(str(e)) from e

    _click.echo(
        f"Generated {len(summary.generated)} module(s) into {settings.output_dir}",
        err=True,
    )
    if not summary.ok:
        _click.echo(f"Failed: {', '.join(summary.failed)}", err=True)
        raise SystemExit(1)


@cli.command()
@_click.argument(
    "base",
    type=_click.Path(exists=True, dir_okay=False, path_type=_pathlib.Path),
)
@_path_option("--overrides-dir", help="Override tree (<product>/<resource>.yaml)", exists=True)
@_path_option("--template-dir", help="Template directory used for example paths", exists=True)
@_click.option(
    "--strict-overrides",
    is_flag=True,
    default=None,
    help="Fail when the override file is malformed",
)
def merge(
    base: _pathlib.Path,
    overrides_dir: _pathlib.Path | None,
    template_dir: _pathlib.Path | None,
    strict_overrides: bool | None,
) -> None:
    """Print one definition file with its overrides applied.

    BASE is a magic-modules file such as products/filestore/Instance.yaml.
    The matching override is <overrides-dir>/filestore/Instance.yaml.
    """
    settings = _load_settings()
    _apply_path_options(settings, overrides_dir=overrides_dir, template_dir=template_dir)
    if strict_overrides:
        settings.overrides.strict = True

    logging.configure_logging(settings.logging.level)

    try:
        document = schema.patch_definition(base, settings)
    except errors.MagicAnsibleError as e:
        _click.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None

    _click.echo(overrides.serialize(document), nl=False)


@cli.command(name="config")
@_click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@_click.option(
    "--color/--no-color",
    "use_color",
    default=None,
    help="Colorize YAML output (default: when stdout is a terminal)",
)
def config_cmd(as_json: bool, use_color: bool | None) -> None:
    """Show the effective configuration.

    Values come from MAGIC_ANSIBLE_* environment variables, the YAML
    config file and built-in defaults, in that order.
    """
    settings = _load_settings()

    for key in sorted(settings.collect_all_extra_fields()):
        _click.echo(f"Warning: unknown config key: {key}", err=True)

    data = settings.to_dict()
    if as_json:
        _click.echo(_json.dumps(data, indent=2))
        return

    yaml_text = _yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    _print_yaml(yaml_text, color=use_color)


def _print_yaml(yaml_text: str, *, color: bool | None) -> None:
    """Print YAML text, highlighted when color is on (auto-detected if None)."""
    console = _rich_console.Console(force_terminal=True if color else None)
    if color is False or (color is None and not console.is_terminal):
        _click.echo(yaml_text, nl=False)
        return

    console.print(
        _rich_syntax.Syntax(yaml_text, "yaml", theme="monokai", background_color="default")
    )


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="magic-ansible")


if __name__ == "__main__":
    main()
