"""Unit tests for FixtureManager ordering and lifecycle hooks."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from ormfixture import Fixture, FixtureManager, InvalidConfigError


def make_recording_fixtures():
    events = []

    class Recording(Fixture):
        def before_load(self):
            events.append(("before_load", type(self).__name__))

        def load(self):
            events.append(("load", type(self).__name__))

        def after_load(self):
            events.append(("after_load", type(self).__name__))

        def before_unload(self):
            events.append(("before_unload", type(self).__name__))

        def unload(self):
            events.append(("unload", type(self).__name__))

        def after_unload(self):
            events.append(("after_unload", type(self).__name__))

    class Accounts(Recording):
        pass

    class Orders(Recording):
        depends = (Accounts,)

    class Invoices(Recording):
        depends = (Orders, Accounts)

    return events, Accounts, Orders, Invoices


class TestResolution:
    """Tests for dependency resolution."""

    def test_dependencies_ordered_first_and_shared(self):
        events, Accounts, Orders, Invoices = make_recording_fixtures()
        manager = FixtureManager(MagicMock(), {"invoices": Invoices, "orders": Orders})

        ordered = manager.ordered

        assert [type(f) for f in ordered] == [Accounts, Orders, Invoices]
        assert manager["orders"] is ordered[1]
        assert "accounts" not in manager

    def test_instances_are_used_as_given(self):
        events, Accounts, Orders, Invoices = make_recording_fixtures()
        accounts = Accounts(MagicMock())
        manager = FixtureManager(MagicMock(), {"accounts": accounts})

        assert manager["accounts"] is accounts

    def test_given_instance_used_for_dependency_declared_earlier(self):
        """
        Given a class whose dependency is also passed as a ready instance,
        When the manager resolves fixtures,
        Then the given instance is named, ordered and loaded, never a rebuilt copy.
        """
        events, Accounts, Orders, Invoices = make_recording_fixtures()
        accounts = Accounts(MagicMock())
        manager = FixtureManager(MagicMock(), {"orders": Orders, "accounts": accounts})

        ordered = manager.ordered

        assert manager["accounts"] is accounts
        assert ordered[0] is accounts
        assert [type(f) for f in ordered] == [Accounts, Orders]

        manager.load()
        assert events.count(("load", "Accounts")) == 1

    def test_two_instances_of_one_class_rejected(self):
        events, Accounts, Orders, Invoices = make_recording_fixtures()
        manager = FixtureManager(
            MagicMock(),
            {"first": Accounts(MagicMock()), "second": Accounts(MagicMock())},
        )

        with pytest.raises(InvalidConfigError, match="More than one Accounts instance"):
            manager.load()

    def test_fixture_gets_manager_session(self):
        events, Accounts, Orders, Invoices = make_recording_fixtures()
        session = MagicMock()
        manager = FixtureManager(session, {"orders": Orders})

        assert all(f.session is session for f in manager.ordered)

    def test_circular_dependency(self):
        class First(Fixture):
            pass

        class Second(Fixture):
            depends = (First,)

        First.depends = (Second,)
        manager = FixtureManager(MagicMock(), {"first": First})

        with pytest.raises(InvalidConfigError, match="circular dependency"):
            manager.load()

    def test_non_fixture_rejected(self):
        manager = FixtureManager(MagicMock(), {"bad": object})

        with pytest.raises(InvalidConfigError, match="is not a Fixture class"):
            manager.load()


class TestLifecycle:
    """Tests for hook ordering during load and unload."""

    def test_load_order(self):
        events, Accounts, Orders, Invoices = make_recording_fixtures()
        manager = FixtureManager(MagicMock(), {"orders": Orders})

        manager.load()

        assert events == [
            ("before_load", "Accounts"),
            ("before_load", "Orders"),
            ("load", "Accounts"),
            ("load", "Orders"),
            ("after_load", "Orders"),
            ("after_load", "Accounts"),
        ]

    def test_unload_order(self):
        events, Accounts, Orders, Invoices = make_recording_fixtures()
        manager = FixtureManager(MagicMock(), {"orders": Orders})

        manager.unload()

        assert events == [
            ("before_unload", "Orders"),
            ("unload", "Orders"),
            ("after_unload", "Orders"),
            ("before_unload", "Accounts"),
            ("unload", "Accounts"),
            ("after_unload", "Accounts"),
        ]

    def test_context_manager_unloads_on_error(self):
        events, Accounts, Orders, Invoices = make_recording_fixtures()

        with pytest.raises(RuntimeError):
            with FixtureManager(MagicMock(), {"accounts": Accounts}):
                raise RuntimeError("test failed")

        assert ("unload", "Accounts") in events
