"""Persistence gateway interface."""

from typing import Any, Protocol

from fixture_factory.registry import ModelHandle


class PersistenceGateway(Protocol):
    """
    Save a fully populated instance.

    Implementations must leave the instance's primary key set after saving,
    since related fixtures read it. Errors propagate to the caller unchanged.
    """

    def save(self, handle: ModelHandle, instance: Any) -> None: ...
