"""Pytest configuration and shared fixtures."""

from collections import Counter
from itertools import count

import psycopg
import pytest
from psycopg import Connection

import blog_models
from fixture_factory import Factory, GeneratorRegistry, ModelRegistry, StaticCatalog

TABLES = {
    "authors": {"id": "integer", "name": "character varying", "email": "character varying"},
    "posts": {
        "id": "integer",
        "title": "character varying",
        "body": "text",
        "author_id": "integer",
        "external_id": "character varying",
        "published_at": "timestamp with time zone",
    },
    "blog_posts": {"id": "integer", "title": "character varying", "author_id": "integer"},
    "comments": {"id": "integer", "body": "text", "blog_post_id": "integer"},
    "notes": {"id": "integer", "body": "text", "AUTHOR_ID": "integer"},
    "categories": {"id": "integer", "name": "character varying", "category_id": "integer"},
    "teams": {"id": "integer", "name": "character varying", "user_id": "integer"},
    "users": {"id": "integer", "email": "character varying", "team_id": "integer"},
    "widgets": {"id": "integer", "shape": "geometry"},
    "tags": {"tag_key": "integer", "label": "character varying"},
}


class CountingCatalog(StaticCatalog):
    """Static catalog that records every lookup."""

    def __init__(self, tables):
        super().__init__(tables)
        self.calls: Counter[str] = Counter()

    def get_columns(self, table_name):
        self.calls[table_name] += 1
        return super().get_columns(table_name)


class RecordingGateway:
    """Persist into memory, assigning sequential primary keys."""

    def __init__(self):
        self.saved = []
        self._ids = count(1)

    def save(self, handle, instance):
        handle.assign(instance, handle.primary_key, next(self._ids))
        self.saved.append((handle.model.__name__, instance))

    def saved_models(self):
        return [name for name, _ in self.saved]


@pytest.fixture
def catalog() -> CountingCatalog:
    return CountingCatalog(TABLES)


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def registry() -> ModelRegistry:
    """Registry with every test model registered under its bare name."""
    registry = ModelRegistry()
    for model in (
        blog_models.Author,
        blog_models.Post,
        blog_models.BlogPost,
        blog_models.Comment,
        blog_models.Note,
        blog_models.Category,
        blog_models.Team,
        blog_models.User,
        blog_models.Widget,
        blog_models.Tag,
    ):
        registry.register(model)
    return registry


@pytest.fixture
def generators() -> GeneratorRegistry:
    return GeneratorRegistry.with_defaults(seed=1234)


@pytest.fixture
def factory(catalog, gateway, registry, generators) -> Factory:
    return Factory(catalog, gateway=gateway, registry=registry, generators=generators)


@pytest.fixture
def db_conn() -> Connection:
    """
    Provide a test database connection.

    Skips when the test database is unreachable. Override the URL with
    FIXTURE_FACTORY_DATABASE__URL.
    """
    from fixture_factory.config import Settings

    url = Settings().database.url
    try:
        conn = psycopg.connect(url, autocommit=False, connect_timeout=3)
    except psycopg.OperationalError:
        pytest.skip(f"Test database not available: {url}")

    yield conn

    # Rollback any changes
    conn.rollback()
    conn.close()


@pytest.fixture
def test_schema(db_conn: Connection) -> str:
    """
    Create a test schema with authors and posts tables.

    Returns the schema name.
    """
    schema_name = "test_fixture_factory"

    with db_conn.cursor() as cur:
        cur.execute(f"DROP SCHEMA IF EXISTS {schema_name} CASCADE")
        cur.execute(f"CREATE SCHEMA {schema_name}")

        cur.execute(f"""
            CREATE TABLE {schema_name}.authors (
                id INTEGER GENERATED ALWAYS AS IDENTITY PRIMARY KEY,
                name TEXT NOT NULL,
                email VARCHAR(255) NOT NULL
            )
        """)

        cur.execute(f"""
            CREATE TABLE {schema_name}.posts (
                id INTEGER GENERATED ALWAYS AS IDENTITY PRIMARY KEY,
                title VARCHAR(255) NOT NULL,
                body TEXT,
                author_id INTEGER NOT NULL REFERENCES {schema_name}.authors(id),
                external_id VARCHAR(64),
                published_at TIMESTAMPTZ
            )
        """)

        db_conn.commit()

    yield schema_name

    # Cleanup
    db_conn.rollback()
    with db_conn.cursor() as cur:
        cur.execute(f"DROP SCHEMA IF EXISTS {schema_name} CASCADE")
        db_conn.commit()
