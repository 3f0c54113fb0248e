"""Tests for the command line interface."""

from pathlib import Path

from click.testing import CliRunner

from fixture_factory.cli.main import _parse_assignments, cli
from fixture_factory.config import Settings


def test_init_writes_config(tmp_path: Path):
    runner = CliRunner()
    path = tmp_path / "fixture-factory.toml"

    result = runner.invoke(cli, ["init", "--path", str(path)], obj={})

    assert result.exit_code == 0
    assert Settings.from_toml(path).database.schema_name == "public"


def test_init_refuses_overwrite(tmp_path: Path):
    runner = CliRunner()
    path = tmp_path / "fixture-factory.toml"
    path.write_text("")

    result = runner.invoke(cli, ["init", "--path", str(path)], obj={})

    assert result.exit_code == 1
    assert "already exists" in result.output


def test_parse_assignments():
    assert _parse_assignments(("title=Hello", "body=a=b")) == {"title": "Hello", "body": "a=b"}


def test_attributes_rejects_bad_assignment(tmp_path: Path):
    runner = CliRunner()
    config = tmp_path / "fixture-factory.toml"
    Settings().to_toml(config)

    result = runner.invoke(
        cli, ["--config", str(config), "attributes", "post", "--set", "title"], obj={}
    )

    assert result.exit_code == 2
    assert "key=value" in result.output
