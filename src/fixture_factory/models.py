"""Data models and type definitions."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class ColumnInfo:
    """
    Column metadata from schema introspection.

    Attributes:
        name: Column name
        data_type: Normalized type name ("string", "integer", "datetime", ...)
    """

    name: str
    data_type: str


class BuildMode(Enum):
    """Whether a fixture is only built in memory or also persisted."""

    MAKE = "make"
    CREATE = "create"


@dataclass(frozen=True)
class BuildContext:
    """
    Per-request state passed through every recursive build.

    Attributes:
        mode: MAKE or CREATE; relationships are only resolved when CREATE
        root_namespace: Namespace of the top-level identifier, used to resolve
            bare related class names
        chain: Canonical names of models currently being created
    """

    mode: BuildMode = BuildMode.MAKE
    root_namespace: str = ""
    chain: tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_saving(self) -> bool:
        return self.mode is BuildMode.CREATE

    @classmethod
    def for_request(cls, identifier: str, mode: BuildMode) -> "BuildContext":
        """Context for a top-level request; the namespace only matters when saving."""
        namespace = namespace_of(identifier) if mode is BuildMode.CREATE else ""
        return cls(mode=mode, root_namespace=namespace)

    def enter(self, model_name: str) -> "BuildContext":
        """Return a copy with model_name appended to the creation chain."""
        return BuildContext(
            mode=self.mode,
            root_namespace=self.root_namespace,
            chain=(*self.chain, model_name),
        )


def namespace_of(identifier: str) -> str:
    """
    Namespace portion of a dotted identifier.

    Examples:
        >>> namespace_of("blog.models.Post")
        'blog.models'
        >>> namespace_of("Post")
        ''
    """
    namespace, _, _ = identifier.rpartition(".")
    return namespace
