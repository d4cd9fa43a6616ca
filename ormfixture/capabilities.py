"""Soft-delete capability declared by models."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column


class SoftDeleteMixin:
    """
    Mixin for models whose rows are hidden rather than removed on delete.

    Inheriting from this mixin is how a model declares the capability;
    fixtures check it with :func:`supports_soft_delete` and bypass the
    marking with a permanent delete during cleanup.

    Attributes:
        deleted_at: When the row was soft deleted (null while live)
    """

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    @property
    def trashed(self) -> bool:
        """Check if the row is soft deleted."""
        return self.deleted_at is not None

    def soft_delete(self) -> None:
        """Mark the row as deleted."""
        self.deleted_at = datetime.now(UTC)

    def restore(self) -> None:
        """Clear the deleted marker."""
        self.deleted_at = None


def supports_soft_delete(model_class: type) -> bool:
    """Return True if the model class declares the soft-delete capability."""
    return isinstance(model_class, type) and issubclass(model_class, SoftDeleteMixin)
