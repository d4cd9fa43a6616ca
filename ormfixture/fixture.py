"""Model-backed fixture loader."""

from __future__ import annotations

import logging
from typing import Any

from ormfixture.base import ActiveFixture
from ormfixture.repository import DeletionFailure

logger = logging.getLogger(__name__)

__all__ = ["DeletionFailure", "ModelFixture"]


class ModelFixture(ActiveFixture):
    """
    Fixture that inserts its rows through the ORM and deletes every row on unload.

    Example:
        class UserFixture(ModelFixture):
            model_class = User
            data_file = "users.json"

        fixture = UserFixture(session)
        fixture.load()
        admin_id = fixture["admin"]["id"]
        fixture.unload()

    Cleanup is total: unload removes all rows of the model, not only the
    ones this fixture inserted. Models declaring SoftDeleteMixin are force
    deleted so no hidden rows remain.
    """

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.deletion_failures: list[DeletionFailure] = []

    def load(self) -> None:
        """
        Insert every fixture row and record it by alias.

        Raises:
            InvalidConfigError: If model_class is not configured
            SQLAlchemyError: If a row fails to persist; earlier rows stay inserted
        """
        repository = self.repository
        self.data = {}
        self._models = {}

        for alias, row in self.get_data():
            model = repository.create(row)
            self.data[alias] = {**row, **repository.primary_key(model)}

        logger.info(f"Loaded {len(self.data)} rows into {repository.table_name}")

    def unload(self) -> None:
        """
        Delete all rows of the model and clear the loaded data.

        Deletion failures are logged and kept on ``deletion_failures``;
        they never raise.

        Raises:
            InvalidConfigError: If model_class is not configured
        """
        self.delete_models()
        super().unload()

    def delete_models(self) -> list[DeletionFailure]:
        """
        Remove all existing rows of the model.

        Returns:
            One DeletionFailure per row that could not be deleted
        """
        repository = self.repository
        permanent = repository.soft_deletes
        records = repository.all(with_trashed=True)

        failures = []
        for record in records:
            failure = repository.try_delete(record, permanent=permanent)
            if failure is not None:
                failures.append(failure)

        for failure in failures:
            logger.warning(
                f"Error during deleting models. Table: {failure.table}. Error: {failure.message}"
            )

        logger.debug(
            f"Deleted {len(records) - len(failures)} of {len(records)} rows from {repository.table_name}"
        )
        self.deletion_failures = failures
        return failures
