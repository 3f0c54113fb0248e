"""Command line interface for fixture-factory."""

from fixture_factory.cli.main import cli

__all__ = ["cli"]
