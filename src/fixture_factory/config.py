"""
Configuration management for fixture-factory.

Loads and validates configuration from fixture-factory.toml files and
FIXTURE_FACTORY_* environment variables using Pydantic.
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_FILENAME = "fixture-factory.toml"


class DatabaseConfig(BaseModel):
    """Database connection configuration."""

    url: str = Field(
        default="postgresql://localhost/fixture_factory_test",
        description="PostgreSQL connection URL",
    )
    schema_name: str = Field(default="public", description="Schema holding model tables")
    commit: bool = Field(
        default=True, description="Commit after each inserted fixture"
    )


class FakerConfig(BaseModel):
    """Faker data generation configuration."""

    locale: Optional[str] = Field(default=None, description="Faker locale (e.g. 'en_US')")
    seed: Optional[int] = Field(
        default=None, description="Seed for reproducible fixture values"
    )


class ModelsConfig(BaseModel):
    """Where model classes live."""

    modules: list[str] = Field(
        default_factory=list,
        description="Modules to import so their models are registered",
    )


class Settings(BaseSettings):
    """Main configuration for fixture-factory."""

    model_config = SettingsConfigDict(
        env_prefix="FIXTURE_FACTORY_",
        env_nested_delimiter="__",
    )

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    faker: FakerConfig = Field(default_factory=FakerConfig)
    models: ModelsConfig = Field(default_factory=ModelsConfig)

    @classmethod
    def from_toml(cls, path: Path | str) -> Settings:
        """
        Load configuration from TOML file.

        Args:
            path: Path to fixture-factory.toml file

        Returns:
            Settings instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config file is invalid
        """
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        return cls(**data)

    @classmethod
    def find_and_load(cls, start_dir: Optional[Path] = None) -> Settings:
        """
        Find and load configuration from fixture-factory.toml.

        Searches from start_dir up through parent directories. Falls back to
        defaults plus environment variables when no file is found.

        Args:
            start_dir: Directory to start search (defaults to current directory)

        Returns:
            Settings instance
        """
        if start_dir is None:
            start_dir = Path.cwd()

        current = Path(start_dir).resolve()

        # Walk up directory tree
        while True:
            config_path = current / CONFIG_FILENAME
            if config_path.exists():
                return cls.from_toml(config_path)

            parent = current.parent
            if parent == current:
                break
            current = parent

        return cls()

    def to_toml(self, path: Path | str) -> None:
        """
        Write configuration to TOML file.

        Args:
            path: Path to write fixture-factory.toml
        """
        lines = [
            "# fixture-factory configuration",
            "",
            "[database]",
            f"url = {_toml_str(self.database.url)}",
            f"schema_name = {_toml_str(self.database.schema_name)}",
            f"commit = {str(self.database.commit).lower()}",
            "",
            "[faker]",
        ]
        if self.faker.locale is not None:
            lines.append(f"locale = {_toml_str(self.faker.locale)}")
        if self.faker.seed is not None:
            lines.append(f"seed = {self.faker.seed}")
        modules = ", ".join(_toml_str(module) for module in self.models.modules)
        lines += ["", "[models]", f"modules = [{modules}]", ""]

        Path(path).write_text("\n".join(lines))


def _toml_str(value: str) -> str:
    # JSON string escapes are valid TOML basic-string escapes
    return json.dumps(value)
