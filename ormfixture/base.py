"""Fixture lifecycle base classes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Iterator, Sequence

from ormfixture.config import get_settings
from ormfixture.data import iter_rows, load_data_file, resolve_data_file
from ormfixture.exceptions import InvalidConfigError
from ormfixture.repository import ModelRepository

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.orm import Session


class Fixture:
    """
    Base fixture with a load/unload lifecycle.

    Subclasses list the fixture classes they need in ``depends``; a
    FixtureManager loads those first and unloads them last.
    """

    depends: ClassVar[Sequence[type[Fixture]]] = ()

    def __init__(self, session: Session):
        self.session = session

    def before_load(self) -> None:
        """Called before any fixture managed together with this one is loaded."""

    def load(self) -> None:
        """Load the fixture."""

    def after_load(self) -> None:
        """Called after every fixture managed together with this one is loaded."""

    def before_unload(self) -> None:
        """Called before the fixture is unloaded."""

    def unload(self) -> None:
        """Unload the fixture."""

    def after_unload(self) -> None:
        """Called after the fixture is unloaded."""


class ActiveFixture(Fixture):
    """
    Fixture backed by a mapped model class.

    ``model_class`` must be set, either on the subclass or at construction.
    Rows come from ``data_file`` (JSON, resolved against the configured
    fixtures directory) or from an overridden :meth:`get_data`.

    After loading, the loaded rows are available through ``data`` and by
    alias: ``fixture["admin"]["id"]``.
    """

    model_class: type | None = None
    data_file: str | Path | None = None

    def __init__(
        self,
        session: Session,
        model_class: type | None = None,
        data_file: str | Path | None = None,
    ):
        super().__init__(session)
        if model_class is not None:
            self.model_class = model_class
        if data_file is not None:
            self.data_file = data_file
        self.data: dict[Any, dict[str, Any]] = {}
        self._models: dict[Any, Any] = {}
        self._repository: ModelRepository | None = None

    @property
    def repository(self) -> ModelRepository:
        """
        Repository for the configured model class.

        Raises:
            InvalidConfigError: If model_class is unset or not a mapped class
        """
        if self.model_class is None:
            raise InvalidConfigError(
                f'"model_class" must be set for {type(self).__name__}.'
            )
        if self._repository is None or self._repository.model_class is not self.model_class:
            self._repository = ModelRepository(self.session, self.model_class)
        return self._repository

    def get_data(self) -> Iterator[tuple[Any, dict[str, Any]]]:
        """
        Produce the (alias, row) pairs to load.

        Override this to build fixture rows in code. The default reads
        ``data_file``; with no data file there are no rows.
        """
        if self.data_file is None:
            return iter(())
        path = resolve_data_file(self.data_file, get_settings().fixtures_dir)
        return iter_rows(load_data_file(path))

    def get_model(self, alias: Any) -> Any | None:
        """
        Return the persisted model for a loaded alias.

        Returns:
            The model instance, or None if the alias was not loaded

        Raises:
            InvalidConfigError: If the loaded row lacks a primary key value
        """
        if alias not in self.data:
            return None
        if alias in self._models:
            return self._models[alias]

        row = self.data[alias]
        mapper = self.repository.mapper
        keys = [mapper.get_property_by_column(column).key for column in mapper.primary_key]
        missing = [key for key in keys if row.get(key) is None]
        if missing:
            raise InvalidConfigError(
                f"Fixture row {alias!r} has no value for primary key {', '.join(missing)}"
            )

        identity = row[keys[0]] if len(keys) == 1 else tuple(row[key] for key in keys)
        model = self.repository.get(identity)
        self._models[alias] = model
        return model

    def unload(self) -> None:
        """Clear the loaded data."""
        super().unload()
        self.data = {}
        self._models = {}

    def __getitem__(self, alias: Any) -> dict[str, Any]:
        return self.data[alias]

    def __contains__(self, alias: object) -> bool:
        return alias in self.data

    def __iter__(self) -> Iterator[Any]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)
