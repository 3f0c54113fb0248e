"""Model registry: resolves model identifiers to classes and table metadata."""

import importlib
import logging
import re
from dataclasses import dataclass
from typing import Any

from fixture_factory.exceptions import ModelNotFoundError

logger = logging.getLogger(__name__)

_WORD_SEPARATORS = re.compile(r"[-_\s]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def studly(identifier: str) -> str:
    """
    Normalize the class segment of an identifier to StudlyCase.

    Namespace segments are left as given, since module paths are lowercase.

    Examples:
        >>> studly("blog_post")
        'BlogPost'
        >>> studly("blog.models.post")
        'blog.models.Post'
    """
    namespace, _, name = identifier.rpartition(".")
    name = "".join(word[:1].upper() + word[1:] for word in _WORD_SEPARATORS.split(name))
    return f"{namespace}.{name}" if namespace else name


def snake_case(name: str) -> str:
    """BlogPost -> blog_post."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def pluralize(word: str) -> str:
    """English plural for table names (post -> posts, category -> categories)."""
    if word.endswith("y") and word[-2:-1] not in ("a", "e", "i", "o", "u"):
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


@dataclass(frozen=True)
class ModelHandle:
    """
    Adapter between the factory and a model class.

    Models may declare:
        __tablename__: Backing table (default: pluralized snake_case class name)
        __primary_key__: Primary key attribute (default: "id")
        to_dict(): Plain mapping of the instance's attributes

    Plain classes, dataclasses with defaults and SQLAlchemy declarative models
    all fit this interface.
    """

    model: type
    name: str

    @property
    def table_name(self) -> str:
        tablename = getattr(self.model, "__tablename__", None)
        if tablename:
            return tablename
        return pluralize(snake_case(self.model.__name__))

    @property
    def primary_key(self) -> str:
        return getattr(self.model, "__primary_key__", "id")

    def new_instance(self) -> Any:
        return self.model()

    def assign(self, instance: Any, name: str, value: Any) -> None:
        setattr(instance, name, value)

    def primary_key_value(self, instance: Any) -> Any:
        return getattr(instance, self.primary_key, None)

    def attributes(self, instance: Any) -> dict[str, Any]:
        """Flatten an instance into a plain attribute mapping."""
        to_dict = getattr(instance, "to_dict", None)
        if callable(to_dict):
            return dict(to_dict())
        return {
            key: value for key, value in vars(instance).items() if not key.startswith("_")
        }


class ModelRegistry:
    """
    Registry of model classes available to factories.

    Classes are registered under their bare class name and their fully
    qualified ``module.ClassName`` path and looked up case-insensitively.
    Dotted identifiers that are not registered are imported on demand.
    """

    def __init__(self):
        self._models: dict[str, type] = {}

    def register(self, model: type, name: str | None = None) -> type:
        """
        Register a model class.

        Args:
            model: Model class
            name: Name to register under (default: the class name)

        Returns:
            The model class, so this can be used as a decorator
        """
        self._models[name or model.__name__] = model
        self._models.setdefault(f"{model.__module__}.{model.__name__}", model)
        return model

    def resolve(self, identifier: str) -> ModelHandle:
        """
        Resolve a canonical class name to a handle.

        Raises:
            ModelNotFoundError: If no class is registered or importable
        """
        model = self._lookup(identifier)
        if model is None:
            raise ModelNotFoundError(identifier)
        return ModelHandle(model=model, name=identifier)

    def exists(self, identifier: str) -> bool:
        """Check whether an identifier resolves to a loadable model."""
        return self._lookup(identifier) is not None

    def list_models(self) -> list[str]:
        return list(self._models.keys())

    def clear(self) -> None:
        """Clear all registered models (for testing)."""
        self._models.clear()

    def _lookup(self, identifier: str) -> type | None:
        if identifier in self._models:
            return self._models[identifier]

        # Class names are case-insensitive: POST, post and Post are one model
        folded = identifier.lower()
        for name, model in self._models.items():
            if name.lower() == folded:
                return model

        if "." not in identifier:
            return None
        return self._import(identifier)

    def _import(self, identifier: str) -> type | None:
        module_path, _, class_name = identifier.rpartition(".")
        try:
            module = importlib.import_module(module_path)
        except ModuleNotFoundError as e:
            # Only a missing target module means "not loadable"; broken
            # imports inside an existing module propagate.
            if e.name and (module_path == e.name or module_path.startswith(e.name + ".")):
                return None
            raise

        model = getattr(module, class_name, None)
        if model is None:
            model = next(
                (
                    value
                    for name, value in vars(module).items()
                    if name.lower() == class_name.lower() and isinstance(value, type)
                ),
                None,
            )
        if not isinstance(model, type):
            return None

        logger.debug(f"Imported model '{identifier}'")
        return model


# Global registry instance
_registry = ModelRegistry()


def register_model(model: type, name: str | None = None) -> type:
    """
    Register a model with the default registry (user-facing API).

    Example:
        >>> @register_model
        ... class Post:
        ...     __tablename__ = "posts"
    """
    return _registry.register(model, name)


def get_registry() -> ModelRegistry:
    """Return the default model registry."""
    return _registry
