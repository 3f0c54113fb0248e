"""Allow ``python -m fixture_factory``."""

from fixture_factory.cli.main import main

main()
