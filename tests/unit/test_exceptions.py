"""Unit tests for fixture exceptions."""

from __future__ import annotations

import pytest

from ormfixture import FixtureError, InvalidConfigError


class TestInvalidConfigError:
    def test_name_and_message(self):
        error = InvalidConfigError('"model_class" must be set.')

        assert error.name == "Invalid Configuration"
        assert str(error) == '"model_class" must be set.'

    def test_is_fixture_error(self):
        with pytest.raises(FixtureError):
            raise InvalidConfigError("bad")
