"""
fixture-factory - Schema-Driven Test Fixtures

Builds placeholder instances of table-backed models by introspecting column
metadata, generating realistic values with Faker and creating related
fixtures for foreign key columns.
"""

from fixture_factory.backends import ActiveRecordGateway, PersistenceGateway, PostgresGateway
from fixture_factory.exceptions import (
    CircularRelationshipError,
    FixtureFactoryError,
    ModelNotFoundError,
    NoGeneratorFoundError,
    TableNotFoundError,
)
from fixture_factory.factory import (
    Factory,
    attributes_for,
    configure,
    create,
    get_factory,
    make,
)
from fixture_factory.generators.registry import (
    GeneratorRegistry,
    clear_generators,
    list_generators,
    register_field_generator,
    register_type_generator,
)
from fixture_factory.introspection import PostgresCatalog, SchemaCache, StaticCatalog
from fixture_factory.models import BuildContext, BuildMode, ColumnInfo
from fixture_factory.registry import ModelHandle, ModelRegistry, register_model

__version__ = "0.1.0"

__all__ = [
    "ActiveRecordGateway",
    "BuildContext",
    "BuildMode",
    "CircularRelationshipError",
    "ColumnInfo",
    "Factory",
    "FixtureFactoryError",
    "GeneratorRegistry",
    "ModelHandle",
    "ModelNotFoundError",
    "ModelRegistry",
    "NoGeneratorFoundError",
    "PersistenceGateway",
    "PostgresCatalog",
    "PostgresGateway",
    "SchemaCache",
    "StaticCatalog",
    "TableNotFoundError",
    "attributes_for",
    "clear_generators",
    "configure",
    "create",
    "get_factory",
    "list_generators",
    "make",
    "register_field_generator",
    "register_model",
    "register_type_generator",
]
