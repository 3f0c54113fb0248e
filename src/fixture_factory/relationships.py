"""Foreign key detection by column naming convention."""

import logging
import re

from fixture_factory.registry import ModelHandle, ModelRegistry, studly

logger = logging.getLogger(__name__)

# author_id, author-id, Author_ID, blog_post_id (whole prefix is the model name)
FOREIGN_KEY_PATTERN = re.compile(r"^([A-Za-z][A-Za-z_]*)[-_]id$", re.IGNORECASE)


class RelationshipDetector:
    """
    Decide whether a column references another model.

    A column is a foreign key only if its name is ``<prefix>_id`` (or
    ``<prefix>-id``) AND the StudlyCased prefix (``blog_post_id`` gives
    ``BlogPost``), bare or under ``<root_namespace>``, is a loadable model.
    Columns that merely look like foreign keys (``external_id`` with no
    ``External`` model) are left to the value resolver.
    """

    def __init__(self, registry: ModelRegistry):
        self.registry = registry

    def detect(self, column_name: str, root_namespace: str = "") -> ModelHandle | None:
        """
        Find the model a column refers to.

        Args:
            column_name: Column name
            root_namespace: Namespace used to resolve the bare related name

        Returns:
            Handle of the related model, or None if the column is a scalar
        """
        match = FOREIGN_KEY_PATTERN.match(column_name)
        if match is None:
            return None

        for candidate in self.candidates(match.group(1), root_namespace):
            if self.registry.exists(candidate):
                logger.debug(f"Column '{column_name}' references model '{candidate}'")
                return self.registry.resolve(candidate)

        logger.debug(
            f"Column '{column_name}' looks like a foreign key but no model "
            f"'{studly(match.group(1))}' is loadable; treating as scalar"
        )
        return None

    @staticmethod
    def candidates(word: str, root_namespace: str = "") -> list[str]:
        """Class names tried for a captured prefix, bare name first."""
        name = studly(word)
        if root_namespace:
            return [name, f"{root_namespace}.{name}"]
        return [name]
