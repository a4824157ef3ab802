"""
Tests for the focus navigation state machine.
"""

import itertools
import random

from tuxmate.focus import IDLE, Direction, FocusNavigator
from tuxmate.models import FocusState, FocusType


def cat(name):
    return FocusState(name, FocusType.CATEGORY)


def app(app_id):
    return FocusState(app_id, FocusType.APP)


class TestEntry:
    def test_starts_idle(self, catalog):
        nav = FocusNavigator(catalog)
        assert nav.state == IDLE
        assert nav.state.idle

    def test_down_then_activate_enters_first_app(self, catalog):
        nav = FocusNavigator(catalog)
        assert nav.navigate(Direction.DOWN) == cat("editors")
        assert nav.activate() is None
        assert nav.is_expanded("editors")
        assert nav.state == app("vim")

    def test_any_direction_leaves_idle_on_first_category(self, catalog):
        for d in Direction:
            nav = FocusNavigator(catalog)
            assert nav.navigate(d) == cat("editors")


class TestLinear:
    def test_down_walks_headers_when_collapsed(self, catalog):
        nav = FocusNavigator(catalog)
        nav.navigate(Direction.DOWN)
        assert nav.navigate(Direction.DOWN) == cat("tools")
        assert nav.navigate(Direction.DOWN) == cat("empty")

    def test_down_walks_into_expanded_category(self, catalog):
        nav = FocusNavigator(catalog, expanded=True)
        nav.navigate(Direction.DOWN)
        seen = [nav.navigate(Direction.DOWN) for _ in range(3)]
        assert seen == [app("vim"), app("sublime"), cat("tools")]

    def test_clamps_at_ends(self, catalog):
        nav = FocusNavigator(catalog)
        nav.navigate(Direction.DOWN)
        assert nav.navigate(Direction.UP) == cat("editors")
        for _ in range(10):
            nav.navigate(Direction.DOWN)
        assert nav.state == cat("empty")

    def test_wrap_is_opt_in(self, catalog):
        nav = FocusNavigator(catalog, wrap=True)
        nav.navigate(Direction.DOWN)
        assert nav.navigate(Direction.UP) == cat("empty")
        assert nav.navigate(Direction.DOWN) == cat("editors")


class TestCategoryJumps:
    def test_right_from_app_goes_to_next_header(self, catalog):
        nav = FocusNavigator(catalog, expanded=True)
        nav.focus_app("sublime")
        assert nav.navigate(Direction.RIGHT) == cat("tools")

    def test_left_from_app_goes_to_previous_header(self, catalog):
        nav = FocusNavigator(catalog, expanded=True)
        nav.focus_app("git")
        assert nav.navigate(Direction.LEFT) == cat("editors")

    def test_left_clamps_on_first(self, catalog):
        nav = FocusNavigator(catalog)
        nav.focus_category("editors")
        assert nav.navigate(Direction.LEFT) == cat("editors")


class TestExpansion:
    def test_collapse_moves_focus_to_header(self, catalog):
        nav = FocusNavigator(catalog)
        nav.focus_app("git")
        assert nav.is_expanded("tools")
        nav.set_expanded("tools", False)
        assert nav.state == cat("tools")

    def test_collapse_other_category_keeps_focus(self, catalog):
        nav = FocusNavigator(catalog, expanded=True)
        nav.focus_app("git")
        nav.set_expanded("editors", False)
        assert nav.state == app("git")

    def test_activate_on_expanded_category_collapses(self, catalog):
        nav = FocusNavigator(catalog, expanded=True)
        nav.focus_category("editors")
        nav.activate()
        assert not nav.is_expanded("editors")
        assert nav.state == cat("editors")

    def test_activate_on_empty_category_keeps_header(self, catalog):
        nav = FocusNavigator(catalog)
        nav.focus_category("empty")
        nav.activate()
        assert nav.is_expanded("empty")
        assert nav.state == cat("empty")

    def test_activate_on_app_returns_its_id(self, catalog):
        nav = FocusNavigator(catalog)
        nav.focus_app("vim")
        assert nav.activate() == "vim"
        assert nav.state == app("vim")


class TestFilter:
    def test_hidden_focused_app_falls_back_to_header(self, catalog):
        nav = FocusNavigator(catalog)
        nav.focus_app("sublime")
        nav.set_filter({"vim"})
        assert nav.state == cat("editors")
        assert nav.visible_apps("editors") == ["vim"]

    def test_hidden_apps_cannot_take_focus(self, catalog):
        nav = FocusNavigator(catalog)
        nav.set_filter({"vim"})
        nav.focus_app("git")
        assert nav.state == IDLE

    def test_clearing_filter_shows_all(self, catalog):
        nav = FocusNavigator(catalog)
        nav.set_filter(set())
        nav.set_filter(None)
        assert nav.visible_apps("tools") == ["git", "flatpak", "slack"]


class TestInvariant:
    def test_random_walk_never_focuses_hidden_app(self, catalog):
        rng = random.Random(7)
        nav = FocusNavigator(catalog)
        names = [c.name for c in catalog.categories]
        moves = list(Direction)
        for _ in range(500):
            r = rng.random()
            if r < 0.6:
                nav.navigate(rng.choice(moves))
            elif r < 0.8:
                nav.activate()
            elif r < 0.9:
                nav.set_expanded(rng.choice(names), rng.random() < 0.5)
            else:
                nav.set_filter(rng.choice([None, {"vim", "git"}, set()]))
            assert nav.invariant_holds(), nav.state

    def test_items_hold_every_reachable_state(self, catalog):
        nav = FocusNavigator(catalog, expanded=True)
        items = nav.items()
        nav.navigate(Direction.DOWN)
        reached = [(nav.state.focused_type, nav.state.focused_id)]
        for _ in itertools.repeat(None, len(items) - 1):
            nav.navigate(Direction.DOWN)
            reached.append((nav.state.focused_type, nav.state.focused_id))
        assert reached == items
