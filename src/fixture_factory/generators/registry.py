"""Generator registry and column value resolution."""

import logging
from collections.abc import Callable
from typing import Any

from fixture_factory.exceptions import NoGeneratorFoundError
from fixture_factory.generators.faker_generator import FakerGenerator

logger = logging.getLogger(__name__)

Generator = Callable[[], Any]


class GeneratorRegistry:
    """
    Two strategy tables of zero-argument generators.

    Field generators are keyed by exact column name, type generators by
    normalized data type. Field generators are consulted first.
    """

    def __init__(
        self,
        fields: dict[str, Generator] | None = None,
        types: dict[str, Generator] | None = None,
    ):
        self._fields: dict[str, Generator] = dict(fields or {})
        self._types: dict[str, Generator] = dict(types or {})

    @classmethod
    def with_defaults(cls, locale: str | None = None, seed: int | None = None) -> "GeneratorRegistry":
        """Registry populated with the Faker-backed defaults."""
        faker_gen = FakerGenerator(locale=locale, seed=seed)
        return cls(fields=faker_gen.field_generators(), types=faker_gen.type_generators())

    def register_field(self, name: str, generator: Generator) -> None:
        """
        Register a generator for an exact column name.

        Raises:
            ValueError: If generator is not callable
        """
        self._check_callable(name, generator)
        self._fields[name] = generator

    def register_type(self, data_type: str, generator: Generator) -> None:
        """
        Register a generator for a normalized data type.

        Raises:
            ValueError: If generator is not callable
        """
        self._check_callable(data_type, generator)
        self._types[data_type] = generator

    def get_field(self, name: str) -> Generator | None:
        return self._fields.get(name)

    def get_type(self, data_type: str) -> Generator | None:
        return self._types.get(data_type)

    def list_generators(self) -> dict[str, list[str]]:
        return {"fields": list(self._fields.keys()), "types": list(self._types.keys())}

    def clear(self) -> None:
        self._fields.clear()
        self._types.clear()

    def merge(self, other: "GeneratorRegistry") -> None:
        """Copy every generator of another registry into this one."""
        self._fields.update(other._fields)
        self._types.update(other._types)

    @staticmethod
    def _check_callable(name: str, generator: Any) -> None:
        if not callable(generator):
            raise ValueError(
                f"Generator for '{name}' must be callable with no arguments, "
                f"got {type(generator).__name__}."
            )


class ValueResolver:
    """Resolve a stub value for a column: special field first, then data type."""

    def __init__(self, registry: GeneratorRegistry):
        self.registry = registry

    def source(self, column_name: str, data_type: str) -> str | None:
        """Which table would serve the column: "field", "type" or None."""
        if self.registry.get_field(column_name) is not None:
            return "field"
        if self.registry.get_type(data_type) is not None:
            return "type"
        return None

    def resolve(self, column_name: str, data_type: str) -> Any:
        """
        Generate a value for a column.

        Raises:
            NoGeneratorFoundError: If neither table has a matching generator
        """
        generator = self.registry.get_field(column_name)
        if generator is None:
            generator = self.registry.get_type(data_type)
        if generator is None:
            raise NoGeneratorFoundError(column_name, data_type)

        return generator()


# Global registry instance
_registry = GeneratorRegistry.with_defaults()


def get_registry() -> GeneratorRegistry:
    """Return the default generator registry."""
    return _registry


def register_field_generator(name: str, generator: Generator) -> None:
    """
    Register a special-field generator (user-facing API).

    Example:
        >>> register_field_generator("sku", lambda: f"SKU-{fake.random_int():06d}")
    """
    _registry.register_field(name, generator)


def register_type_generator(data_type: str, generator: Generator) -> None:
    """
    Register a data-type generator (user-facing API).

    Example:
        >>> register_type_generator("inet", lambda: fake.ipv4())
    """
    _registry.register_type(data_type, generator)


def list_generators() -> dict[str, list[str]]:
    """List registered field and type generators."""
    return _registry.list_generators()


def clear_generators() -> None:
    """Drop custom generators and restore the Faker defaults (for testing)."""
    _registry.clear()
    _registry.merge(GeneratorRegistry.with_defaults())
