"""SQLAlchemy-backed test fixtures with alias-keyed data and total cleanup."""

from ormfixture.base import ActiveFixture, Fixture
from ormfixture.capabilities import SoftDeleteMixin, supports_soft_delete
from ormfixture.exceptions import FixtureError, InvalidConfigError
from ormfixture.fixture import DeletionFailure, ModelFixture
from ormfixture.manager import FixtureManager
from ormfixture.repository import ModelRepository

__version__ = "0.1.0"

__all__ = [
    "ActiveFixture",
    "DeletionFailure",
    "Fixture",
    "FixtureError",
    "FixtureManager",
    "InvalidConfigError",
    "ModelFixture",
    "ModelRepository",
    "SoftDeleteMixin",
    "supports_soft_delete",
]
