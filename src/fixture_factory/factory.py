"""Factory API for building model fixtures from table metadata."""

import logging
from functools import partial
from typing import TYPE_CHECKING, Any

from psycopg import Connection

from fixture_factory.backends import ActiveRecordGateway, PersistenceGateway, PostgresGateway
from fixture_factory.exceptions import (
    CircularRelationshipError,
    FixtureFactoryError,
    ModelNotFoundError,
)
from fixture_factory.generators.registry import GeneratorRegistry, ValueResolver
from fixture_factory.generators.registry import get_registry as get_generator_registry
from fixture_factory.introspection import PostgresCatalog, SchemaCache, SchemaCatalog
from fixture_factory.models import BuildContext, BuildMode, ColumnInfo
from fixture_factory.registry import ModelHandle, ModelRegistry, studly
from fixture_factory.registry import get_registry as get_model_registry
from fixture_factory.relationships import RelationshipDetector

if TYPE_CHECKING:
    from fixture_factory.config import Settings

logger = logging.getLogger(__name__)

# Assumed to be generated by storage; never stubbed
AUTO_ID_COLUMN = "id"


class Factory:
    """
    Build fixtures for models backed by a relational table.

    Usage:
        >>> factory = Factory(PostgresCatalog(conn), PostgresGateway(conn))
        >>> post = factory.make("post", title="Hello")       # in memory
        >>> post = factory.create("blog.models.Post")        # persisted, author created
        >>> data = factory.attributes_for("post")            # plain dict
        >>> post = factory.post(title="Hello")               # same as make("post", ...)

    Column values are chosen per column, in schema order:
        1. An override for the column name
        2. In create mode, a related fixture's primary key for ``<model>_id``
           columns that reference a loadable model
        3. A stub value from the special-field or data-type generators
    """

    def __init__(
        self,
        catalog: SchemaCatalog | SchemaCache,
        gateway: PersistenceGateway | None = None,
        registry: ModelRegistry | None = None,
        generators: GeneratorRegistry | None = None,
    ):
        """
        Initialize Factory.

        Args:
            catalog: Schema catalog (or an existing cache to share)
            gateway: Persistence used by create() (default: instance.save())
            registry: Model registry (default: global registry)
            generators: Generator registry (default: global Faker registry)
        """
        self.schema_cache = catalog if isinstance(catalog, SchemaCache) else SchemaCache(catalog)
        self.gateway = gateway or ActiveRecordGateway()
        self.registry = registry or get_model_registry()
        self.resolver = ValueResolver(generators or get_generator_registry())
        self.detector = RelationshipDetector(self.registry)

    @classmethod
    def from_settings(
        cls,
        settings: "Settings",
        conn: Connection,
        registry: ModelRegistry | None = None,
        generators: GeneratorRegistry | None = None,
    ) -> "Factory":
        """Factory wired to PostgreSQL using loaded settings."""
        schema = settings.database.schema_name
        cache = SchemaCache(PostgresCatalog(conn, schema))
        gateway = PostgresGateway(conn, schema, cache=cache, commit=settings.database.commit)
        if generators is None:
            generators = GeneratorRegistry.with_defaults(
                locale=settings.faker.locale, seed=settings.faker.seed
            )
        return cls(cache, gateway=gateway, registry=registry, generators=generators)

    def create(self, identifier: str, overrides: dict[str, Any] | None = None, **attrs: Any) -> Any:
        """Build a fixture, persist it (and any related fixtures) and return it."""
        return self.build(identifier, _merge(overrides, attrs), BuildMode.CREATE)

    def make(self, identifier: str, overrides: dict[str, Any] | None = None, **attrs: Any) -> Any:
        """
        Build a fixture in memory without persisting it.

        Overrides are handy for testing validations:
            factory.make("post", title=None)
        """
        return self.build(identifier, _merge(overrides, attrs), BuildMode.MAKE)

    def attributes_for(
        self, identifier: str, overrides: dict[str, Any] | None = None, **attrs: Any
    ) -> dict[str, Any]:
        """Build a fixture in memory and return its attributes as a dict."""
        context = BuildContext.for_request(identifier, BuildMode.MAKE)
        handle, instance = self._build(identifier, _merge(overrides, attrs), context)
        return handle.attributes(instance)

    def build(
        self,
        identifier: str,
        overrides: dict[str, Any] | None = None,
        mode: BuildMode = BuildMode.MAKE,
        context: BuildContext | None = None,
    ) -> Any:
        """
        Build a fixture.

        Args:
            identifier: Model name, bare ("post") or dotted ("blog.models.Post")
            overrides: Attribute values that win over generated ones
            mode: MAKE or CREATE (ignored when context is given)
            context: Context of an enclosing build

        Returns:
            Model instance

        Raises:
            ModelNotFoundError: If the identifier doesn't resolve to a model
            NoGeneratorFoundError: If a column has no generator and no override
            CircularRelationshipError: If related fixtures reference each other
        """
        if context is None:
            context = BuildContext.for_request(identifier, mode)
        _, instance = self._build(identifier, dict(overrides or {}), context)
        return instance

    def resolve_model(self, identifier: str) -> ModelHandle:
        """
        Resolve an identifier after normalizing it to StudlyCase.

        Raises:
            ModelNotFoundError: Listing the identifier as given and as normalized
        """
        name = studly(identifier)
        if not self.registry.exists(name):
            raise ModelNotFoundError(identifier, candidates=list(dict.fromkeys([identifier, name])))
        return self.registry.resolve(name)

    def _build(
        self, identifier: str, overrides: dict[str, Any], context: BuildContext
    ) -> tuple[ModelHandle, Any]:
        handle = self.resolve_model(identifier)

        if context.is_saving:
            model_name = _qualified_name(handle.model)
            if model_name in context.chain:
                raise CircularRelationshipError((*context.chain, model_name))
            context = context.enter(model_name)

        logger.debug(f"Building {handle.name} ({context.mode.value}) from '{handle.table_name}'")

        instance = handle.new_instance()
        columns = self.schema_cache.columns_for(handle.table_name)
        processed = self._set_columns(handle, instance, columns, overrides, context)

        # Columns the schema didn't report (virtual attributes, unmigrated table)
        for name, value in overrides.items():
            if name not in processed:
                handle.assign(instance, name, value)

        if context.is_saving:
            self.gateway.save(handle, instance)

        return handle, instance

    def _set_columns(
        self,
        handle: ModelHandle,
        instance: Any,
        columns: list[ColumnInfo],
        overrides: dict[str, Any],
        context: BuildContext,
    ) -> set[str]:
        """Fill each column with an override, related key or stub; return names set."""
        processed: set[str] = set()

        for col in columns:
            # Overrides win, even over relationship inference
            if col.name in overrides:
                handle.assign(instance, col.name, overrides[col.name])
                processed.add(col.name)
                continue

            # Only saved fixtures have a related row to point at
            related = None
            if context.is_saving:
                related = self.detector.detect(col.name, context.root_namespace)
            if related is not None:
                handle.assign(instance, col.name, self._create_relationship(related, context))
                processed.add(col.name)
                continue

            if col.name == AUTO_ID_COLUMN:
                continue

            handle.assign(instance, col.name, self.resolver.resolve(col.name, col.data_type))
            processed.add(col.name)

        return processed

    def _create_relationship(self, related: ModelHandle, context: BuildContext) -> Any:
        """Create and persist a related fixture; return its primary key."""
        _, instance = self._build(related.name, {}, context)
        return related.primary_key_value(instance)

    def __getattr__(self, name: str):
        """Shorthand: factory.post(title="x") is factory.make("post", title="x")."""
        if name.startswith("_"):
            raise AttributeError(f"No attribute '{name}'")
        return partial(self.make, name)


def _merge(overrides: dict[str, Any] | None, attrs: dict[str, Any]) -> dict[str, Any]:
    merged = dict(overrides or {})
    merged.update(attrs)
    return merged


def _qualified_name(model: type) -> str:
    return f"{model.__module__}.{model.__qualname__}"


# Default factory used by the module-level helpers
_default_factory: Factory | None = None


def configure(
    catalog: SchemaCatalog | SchemaCache,
    gateway: PersistenceGateway | None = None,
    registry: ModelRegistry | None = None,
    generators: GeneratorRegistry | None = None,
) -> Factory:
    """
    Configure the default factory used by create(), make() and attributes_for().

    Example:
        >>> configure(PostgresCatalog(conn), PostgresGateway(conn))
        >>> post = create("post")
    """
    global _default_factory
    _default_factory = Factory(catalog, gateway=gateway, registry=registry, generators=generators)
    return _default_factory


def get_factory() -> Factory:
    """
    Return the default factory.

    Raises:
        FixtureFactoryError: If configure() has not been called
    """
    if _default_factory is None:
        raise FixtureFactoryError(
            "No default factory configured.\n\n"
            "Suggestions:\n"
            "1. Call fixture_factory.configure(catalog, gateway) in conftest.py\n"
            "2. Or build one explicitly: Factory(PostgresCatalog(conn), PostgresGateway(conn))"
        )
    return _default_factory


def create(identifier: str, overrides: dict[str, Any] | None = None, **attrs: Any) -> Any:
    """Create and persist a fixture with the default factory."""
    return get_factory().create(identifier, overrides, **attrs)


def make(identifier: str, overrides: dict[str, Any] | None = None, **attrs: Any) -> Any:
    """Build an in-memory fixture with the default factory."""
    return get_factory().make(identifier, overrides, **attrs)


def attributes_for(
    identifier: str, overrides: dict[str, Any] | None = None, **attrs: Any
) -> dict[str, Any]:
    """Return fixture attributes as a dict using the default factory."""
    return get_factory().attributes_for(identifier, overrides, **attrs)
