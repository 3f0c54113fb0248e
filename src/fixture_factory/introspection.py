"""Schema introspection with caching."""

import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Protocol

from psycopg import Connection

from fixture_factory.exceptions import TableNotFoundError
from fixture_factory.models import ColumnInfo

logger = logging.getLogger(__name__)

# PostgreSQL type name -> normalized type name
PG_TYPE_MAP = {
    "character varying": "string",
    "varchar": "string",
    "character": "string",
    "char": "string",
    "citext": "string",
    "text": "text",
    "integer": "integer",
    "bigint": "bigint",
    "smallint": "smallint",
    "numeric": "decimal",
    "decimal": "decimal",
    "real": "float",
    "double precision": "float",
    "boolean": "boolean",
    "date": "date",
    "time without time zone": "time",
    "time with time zone": "time",
    "timestamp without time zone": "datetime",
    "timestamp with time zone": "datetime",
    "timestamptz": "datetime",
    "uuid": "guid",
    "json": "json",
    "jsonb": "json",
    "bytea": "binary",
}


def normalize_type(native_type: str) -> str:
    """Map a database type name onto the normalized type vocabulary."""
    native_type = native_type.lower()
    return PG_TYPE_MAP.get(native_type, native_type)


class SchemaCatalog(Protocol):
    """Anything that can list the columns of a table."""

    def get_columns(self, table_name: str) -> list[ColumnInfo]: ...


class PostgresCatalog:
    """Read column metadata from PostgreSQL's information_schema."""

    def __init__(self, conn: Connection, schema: str = "public"):
        self.conn = conn
        self.schema = schema

    def get_columns(self, table_name: str) -> list[ColumnInfo]:
        """
        Get all columns for a table in ordinal order.

        Raises:
            TableNotFoundError: If table doesn't exist in schema
        """
        with self.conn.cursor() as cur:
            cur.execute(
                """
                SELECT EXISTS(
                    SELECT 1 FROM information_schema.tables
                    WHERE table_schema = %s AND table_name = %s
                )
                """,
                (self.schema, table_name),
            )
            exists = cur.fetchone()[0]
            if not exists:
                raise TableNotFoundError(table_name, self.schema)

            cur.execute(
                """
                SELECT column_name, data_type
                FROM information_schema.columns
                WHERE table_schema = %s
                  AND table_name = %s
                ORDER BY ordinal_position
                """,
                (self.schema, table_name),
            )
            rows = cur.fetchall()

        return [ColumnInfo(name=row[0], data_type=normalize_type(row[1])) for row in rows]


class StaticCatalog:
    """
    In-memory catalog for tables that are not backed by a live database.

    Example:
        >>> catalog = StaticCatalog({
        ...     "posts": {"id": "integer", "title": "string", "author_id": "integer"},
        ... })
    """

    def __init__(
        self,
        tables: Mapping[str, Mapping[str, str] | Iterable[ColumnInfo]] | None = None,
        schema: str = "static",
    ):
        self.schema = schema
        self._tables: dict[str, list[ColumnInfo]] = {}
        for table_name, columns in (tables or {}).items():
            self.add_table(table_name, columns)

    def add_table(
        self, table_name: str, columns: Mapping[str, str] | Iterable[ColumnInfo]
    ) -> None:
        """Add or replace a table; a mapping is read as column name -> type."""
        if isinstance(columns, Mapping):
            columns = [
                ColumnInfo(name=name, data_type=normalize_type(data_type))
                for name, data_type in columns.items()
            ]
        self._tables[table_name] = list(columns)

    def get_columns(self, table_name: str) -> list[ColumnInfo]:
        if table_name not in self._tables:
            raise TableNotFoundError(table_name, self.schema)
        return list(self._tables[table_name])


class SchemaCache:
    """
    Memoize column metadata per table.

    The schema is assumed stable for the lifetime of the cache; use clear()
    or a new cache when fresh metadata is needed.
    """

    def __init__(self, catalog: SchemaCatalog):
        self.catalog = catalog
        self._columns: dict[str, list[ColumnInfo]] = {}
        self.lookups: Counter[str] = Counter()

    def columns_for(self, table_name: str) -> list[ColumnInfo]:
        """Get columns for a table (cached)."""
        if table_name in self._columns:
            return self._columns[table_name]

        logger.debug(f"Fetching columns for table '{table_name}'")
        self.lookups[table_name] += 1
        columns = self.catalog.get_columns(table_name)
        self._columns[table_name] = columns
        return columns

    def clear(self) -> None:
        """Clear cached column metadata."""
        self._columns.clear()
