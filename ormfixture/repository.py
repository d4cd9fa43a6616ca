"""ORM boundary used by model fixtures."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError

from ormfixture.capabilities import supports_soft_delete
from ormfixture.exceptions import InvalidConfigError

if TYPE_CHECKING:
    from sqlalchemy.orm import Mapper, Session

logger = logging.getLogger(__name__)


@dataclass
class DeletionFailure:
    """A row that could not be deleted during cleanup."""

    table: str
    identity: tuple[Any, ...]
    error: SQLAlchemyError

    @property
    def message(self) -> str:
        """Return the underlying error message."""
        return str(self.error)


class ModelRepository:
    """Create, fetch and delete rows of one mapped class through a session."""

    def __init__(self, session: Session, model_class: type):
        """
        Initialize the repository.

        Args:
            session: Session owned by the caller; never committed or closed here
            model_class: SQLAlchemy mapped class

        Raises:
            InvalidConfigError: If model_class is not a mapped class
        """
        mapper = inspect(model_class, raiseerr=False) if isinstance(model_class, type) else None
        if mapper is None:
            raise InvalidConfigError(
                f"{model_class!r} is not a SQLAlchemy mapped class"
            )
        self.session = session
        self.model_class = model_class
        self.mapper: Mapper = mapper
        self.soft_deletes = supports_soft_delete(model_class)

    @property
    def table_name(self) -> str:
        """Name of the table the model is stored in."""
        return self.mapper.local_table.name

    def create(self, row: dict[str, Any]) -> Any:
        """
        Instantiate the model from a fixture row and persist it.

        The insert runs in its own savepoint; a failing row is rolled back
        alone and rows created earlier stay in the session's transaction.
        """
        instance = self.model_class(**row)
        with self.session.begin_nested():
            self.session.add(instance)
            self.session.flush()
        logger.debug(f"Inserted {self.table_name} row {self.primary_key(instance)}")
        return instance

    def primary_key(self, instance: Any) -> dict[str, Any]:
        """Return the primary key attribute names and values of an instance."""
        return {
            self.mapper.get_property_by_column(column).key: value
            for column, value in zip(
                self.mapper.primary_key,
                self.mapper.primary_key_from_instance(instance),
            )
        }

    def get(self, identity: Any) -> Any | None:
        """Get an instance by primary key."""
        return self.session.get(self.model_class, identity)

    def all(self, with_trashed: bool = False) -> list[Any]:
        """
        Fetch every row of the model.

        Soft-deleted rows are excluded unless with_trashed is set.
        """
        query = select(self.model_class)
        if self.soft_deletes and not with_trashed:
            query = query.where(self.model_class.deleted_at.is_(None))
        return list(self.session.scalars(query).all())

    def delete(self, instance: Any) -> None:
        """Delete an instance; soft-delete models are only marked."""
        if self.soft_deletes:
            instance.soft_delete()
        else:
            self.session.delete(instance)
        self.session.flush()

    def force_delete(self, instance: Any) -> None:
        """Physically remove an instance, bypassing soft-delete marking."""
        self.session.delete(instance)
        self.session.flush()

    def try_delete(self, instance: Any, permanent: bool = False) -> DeletionFailure | None:
        """
        Delete an instance inside a savepoint.

        Returns:
            None on success, or a DeletionFailure describing the storage error.
            The savepoint is rolled back on failure so the session stays usable.
        """
        identity = self.mapper.primary_key_from_instance(instance)
        try:
            with self.session.begin_nested():
                if permanent:
                    self.force_delete(instance)
                else:
                    self.delete(instance)
        except SQLAlchemyError as e:
            return DeletionFailure(table=self.table_name, identity=tuple(identity), error=e)
        return None
