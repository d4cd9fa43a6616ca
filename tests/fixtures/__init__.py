"""Fixture classes and data files for tests."""

from tests.fixtures.model_fixtures import (
    DATA_DIR,
    NoteFixture,
    PostFixture,
    UserFixture,
    WidgetFixture,
)

__all__ = [
    "DATA_DIR",
    "NoteFixture",
    "PostFixture",
    "UserFixture",
    "WidgetFixture",
]
