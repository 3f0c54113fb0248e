"""Data generators for column values."""

from fixture_factory.generators.faker_generator import SPECIAL_FIELDS, FakerGenerator
from fixture_factory.generators.registry import GeneratorRegistry, ValueResolver

__all__ = ["FakerGenerator", "GeneratorRegistry", "SPECIAL_FIELDS", "ValueResolver"]
