"""Loading and unloading groups of fixtures in dependency order."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping

from ormfixture.base import Fixture
from ormfixture.exceptions import InvalidConfigError

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class FixtureManager:
    """
    Manage a named set of fixtures and their dependencies.

    Fixtures may be given as classes (instantiated with the session) or as
    ready instances. Dependencies declared through ``depends`` are
    instantiated once per manager and loaded before the fixtures needing them.

    Example:
        with FixtureManager(session, {"users": UserFixture}) as fixtures:
            user_id = fixtures["users"]["admin"]["id"]
    """

    def __init__(self, session: Session, fixtures: Mapping[str, type[Fixture] | Fixture]):
        self.session = session
        self._declared = dict(fixtures)
        self._fixtures: dict[str, Fixture] | None = None
        self._ordered: list[Fixture] = []

    @property
    def fixtures(self) -> dict[str, Fixture]:
        """Named fixtures, resolved on first access."""
        if self._fixtures is None:
            self._resolve()
        return self._fixtures

    @property
    def ordered(self) -> list[Fixture]:
        """All fixtures including dependencies, dependencies first."""
        if self._fixtures is None:
            self._resolve()
        return list(self._ordered)

    def _resolve(self) -> None:
        """
        Instantiate fixtures and order them so dependencies come first.

        Raises:
            InvalidConfigError: If a dependency is circular or not a Fixture,
                or two given instances share a class
        """
        given: dict[type[Fixture], Fixture] = {}
        for declared in self._declared.values():
            if isinstance(declared, Fixture):
                cls = type(declared)
                if given.get(cls, declared) is not declared:
                    raise InvalidConfigError(
                        f"More than one {cls.__name__} instance given to the manager."
                    )
                given[cls] = declared

        instances: dict[type[Fixture], Fixture] = {}
        ordered: list[Fixture] = []
        visiting: set[type[Fixture]] = set()

        def visit(cls: type[Fixture]) -> Fixture:
            if cls in instances:
                return instances[cls]
            if cls in visiting:
                raise InvalidConfigError(
                    f"A circular dependency is detected for fixture {cls.__name__}."
                )
            visiting.add(cls)
            for dependency in cls.depends:
                visit(self._fixture_class(dependency))
            visiting.discard(cls)

            fixture = given[cls] if cls in given else cls(self.session)
            instances[cls] = fixture
            ordered.append(fixture)
            return fixture

        named = {}
        for name, declared in self._declared.items():
            cls = type(declared) if isinstance(declared, Fixture) else self._fixture_class(declared)
            named[name] = visit(cls)

        self._fixtures = named
        self._ordered = ordered

    @staticmethod
    def _fixture_class(declared: Any) -> type[Fixture]:
        if not (isinstance(declared, type) and issubclass(declared, Fixture)):
            raise InvalidConfigError(f"{declared!r} is not a Fixture class")
        return declared

    def load(self) -> None:
        """Load all fixtures, dependencies first."""
        ordered = self.ordered
        for fixture in ordered:
            fixture.before_load()
        for fixture in ordered:
            logger.debug(f"Loading fixture {type(fixture).__name__}")
            fixture.load()
        for fixture in reversed(ordered):
            fixture.after_load()

    def unload(self) -> None:
        """Unload all fixtures, dependents first."""
        for fixture in reversed(self.ordered):
            fixture.before_unload()
            logger.debug(f"Unloading fixture {type(fixture).__name__}")
            fixture.unload()
            fixture.after_unload()

    def get(self, name: str) -> Fixture | None:
        """Return a fixture by name, or None if it isn't managed here."""
        return self.fixtures.get(name)

    def __getitem__(self, name: str) -> Fixture:
        return self.fixtures[name]

    def __contains__(self, name: object) -> bool:
        return name in self.fixtures

    def __enter__(self) -> FixtureManager:
        self.load()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unload()
