"""CLI commands for fixture-factory."""

import importlib
import json
import sys
from pathlib import Path

import click
import psycopg

from fixture_factory.config import CONFIG_FILENAME, Settings
from fixture_factory.exceptions import FixtureFactoryError
from fixture_factory.factory import Factory


@click.group()
@click.version_option(package_name="fixture-factory")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help=f"Path to {CONFIG_FILENAME} (default: search upwards from cwd)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """fixture-factory - schema-driven test fixtures for table-backed models."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


def _load_settings(ctx: click.Context) -> Settings:
    config_path = ctx.obj.get("config_path")
    if config_path is not None:
        return Settings.from_toml(config_path)
    return Settings.find_and_load()


def _parse_assignments(assignments: tuple[str, ...]) -> dict[str, str]:
    overrides = {}
    for assignment in assignments:
        key, sep, value = assignment.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected key=value, got '{assignment}'", param_hint="--set")
        overrides[key] = value
    return overrides


@cli.command()
@click.option(
    "--path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path(CONFIG_FILENAME),
    show_default=True,
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def init(path: Path, force: bool) -> None:
    """Write a default configuration file."""
    if path.exists() and not force:
        click.echo(f"Error: {path} already exists (use --force to overwrite)", err=True)
        sys.exit(1)

    Settings().to_toml(path)
    click.echo(f"Wrote {path}")


@cli.command()
@click.argument("table")
@click.pass_context
def columns(ctx: click.Context, table: str) -> None:
    """Show a table's columns and which generator fills each one."""
    settings = _load_settings(ctx)

    with psycopg.connect(settings.database.url) as conn:
        factory = Factory.from_settings(settings, conn)
        try:
            cols = factory.schema_cache.columns_for(table)
        except FixtureFactoryError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    for col in cols:
        source = factory.resolver.source(col.name, col.data_type) or "missing"
        click.echo(f"{col.name:<30} {col.data_type:<12} {source}")


@cli.command()
@click.argument("model")
@click.option("--set", "assignments", multiple=True, help="Override as key=value (repeatable)")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_context
def attributes(
    ctx: click.Context, model: str, assignments: tuple[str, ...], output_json: bool
) -> None:
    """Print generated attributes for MODEL without saving anything."""
    settings = _load_settings(ctx)
    overrides = _parse_assignments(assignments)

    for module in settings.models.modules:
        importlib.import_module(module)

    with psycopg.connect(settings.database.url) as conn:
        factory = Factory.from_settings(settings, conn)
        try:
            data = factory.attributes_for(model, overrides)
        except FixtureFactoryError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    if output_json:
        click.echo(json.dumps(data, indent=2, default=str))
        return

    for key, value in data.items():
        click.echo(f"{key}: {value}")


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
