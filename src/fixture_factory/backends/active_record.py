"""Gateway for models that persist themselves."""

import logging
from typing import Any

from fixture_factory.registry import ModelHandle

logger = logging.getLogger(__name__)


class ActiveRecordGateway:
    """Persist by calling the instance's own ``save()`` method."""

    def save(self, handle: ModelHandle, instance: Any) -> None:
        save = getattr(instance, "save", None)
        if not callable(save):
            raise TypeError(
                f"Model '{handle.name}' has no save() method. "
                f"Pass a persistence gateway to the Factory, e.g. PostgresGateway(conn)."
            )
        save()
        logger.info(
            f"Saved {handle.name} ({handle.primary_key}={handle.primary_key_value(instance)!r})"
        )
