"""Direct INSERT gateway - writes fixtures with psycopg."""

import logging
from typing import Any

from psycopg import Connection, sql
from psycopg.types.json import Json

from fixture_factory.introspection import SchemaCache
from fixture_factory.registry import ModelHandle

logger = logging.getLogger(__name__)


class PostgresGateway:
    """
    Persist fixtures with a single ``INSERT ... RETURNING`` per instance.

    The primary key returned by the database is assigned back onto the
    instance so related fixtures can reference it.
    """

    def __init__(
        self,
        conn: Connection,
        schema: str = "public",
        cache: SchemaCache | None = None,
        commit: bool = True,
    ):
        """
        Initialize gateway.

        Args:
            conn: PostgreSQL connection
            schema: Schema name for qualified table names
            cache: When given, only attributes that are table columns are inserted
            commit: Commit after each insert (disable inside rolled-back test transactions)
        """
        self.conn = conn
        self.schema = schema
        self.cache = cache
        self.commit = commit

    def save(self, handle: ModelHandle, instance: Any) -> None:
        table = handle.table_name
        pk = handle.primary_key
        row = self._row(handle, instance)

        query = sql.SQL("INSERT INTO {table} ({columns}) VALUES ({values}) RETURNING {pk}").format(
            table=sql.Identifier(self.schema, table),
            columns=sql.SQL(", ").join(sql.Identifier(name) for name in row),
            values=sql.SQL(", ").join(sql.Placeholder() for _ in row),
            pk=sql.Identifier(pk),
        )
        if not row:
            query = sql.SQL("INSERT INTO {table} DEFAULT VALUES RETURNING {pk}").format(
                table=sql.Identifier(self.schema, table),
                pk=sql.Identifier(pk),
            )

        with self.conn.cursor() as cur:
            cur.execute(query, list(row.values()))
            result = cur.fetchone()

        if self.commit:
            self.conn.commit()

        handle.assign(instance, pk, result[0])
        logger.info(f"Inserted {self.schema}.{table} ({pk}={result[0]!r})")

    def _row(self, handle: ModelHandle, instance: Any) -> dict[str, Any]:
        row = handle.attributes(instance)

        # Let the database generate the primary key unless one was given
        if row.get(handle.primary_key) is None:
            row.pop(handle.primary_key, None)

        if self.cache is not None:
            columns = {col.name for col in self.cache.columns_for(handle.table_name)}
            row = {name: value for name, value in row.items() if name in columns}

        # dict/list values go to json columns
        return {
            name: Json(value) if isinstance(value, (dict, list)) else value
            for name, value in row.items()
        }
