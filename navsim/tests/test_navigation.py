import numpy as np
import pytest

from navsim.navigation import NavigationState, Navigator
from navsim.providers import QueryMode, StraightLineProvider


def test_fresh_navigator_is_idle():
    nav = Navigator()
    assert nav.state is NavigationState.IDLE
    assert len(nav) == 0
    assert nav.head is None


def test_set_waypoint_replaces_queue(route_provider):
    nav = Navigator()
    provider = route_provider([[1, 0, 0], [2, 0, 0], [2, 1, 0]])
    assert nav.set_waypoint(provider, np.zeros(3), np.array([2.0, 1.0, 0.0]))
    assert nav.state is NavigationState.FOLLOWING
    assert nav.waypoints == ((1.0, 0.0, 0.0), (2.0, 0.0, 0.0), (2.0, 1.0, 0.0))

    nav.set_waypoint(route_provider([[5, 5, 5]]), np.zeros(3), np.array([5.0, 5.0, 5.0]))
    assert nav.waypoints == ((5.0, 5.0, 5.0),)
    assert [e.kind for e in nav.drain_events()] == ["path_set", "path_set"]


def test_failed_plan_leaves_no_stale_queue(route_provider, unreachable_provider):
    nav = Navigator()
    nav.set_waypoint(route_provider([[1, 0, 0]]), np.zeros(3), np.array([1.0, 0.0, 0.0]))
    nav.drain_events()

    assert nav.set_waypoint(unreachable_provider, np.zeros(3), np.array([9.0, 9.0, 0.0])) is False
    assert nav.state is NavigationState.IDLE
    assert len(nav) == 0
    events = nav.drain_events()
    assert [e.kind for e in events] == ["path_unavailable"]
    assert events[0].waypoint == (9.0, 9.0, 0.0)


def test_bad_arguments_never_leave_planning(route_provider):
    nav = Navigator()
    nav.set_waypoint(route_provider([[1, 0, 0]]), np.zeros(3), np.array([1.0, 0.0, 0.0]))

    with pytest.raises(ValueError):
        nav.set_waypoint(StraightLineProvider(), np.zeros(3), np.array([2.0, 0.0, 0.0]), "bogus")
    with pytest.raises(ValueError):
        nav.set_waypoint(StraightLineProvider(), np.zeros(3), np.array([1.0, 2.0, 3.0, 4.0]))
    # rejected before planning, so the running plan survives
    assert nav.state is NavigationState.FOLLOWING
    assert nav.waypoints == ((1.0, 0.0, 0.0),)


def test_malformed_route_leaves_navigator_idle(route_provider):
    nav = Navigator()
    nav.set_waypoint(route_provider([[1, 0, 0]]), np.zeros(3), np.array([1.0, 0.0, 0.0]))

    with pytest.raises(ValueError):
        nav.set_waypoint(route_provider([[1, 0, 0, 0]]), np.zeros(3), np.array([1.0, 0.0, 0.0]))
    assert nav.state is NavigationState.IDLE
    assert len(nav) == 0


def test_empty_plan_counts_as_unavailable(route_provider):
    nav = Navigator()
    assert nav.set_waypoint(route_provider([]), np.zeros(3), np.ones(3)) is False
    assert nav.state is NavigationState.IDLE


def test_pop_until_arrived(route_provider):
    nav = Navigator()
    nav.set_waypoint(route_provider([[1, 0, 0], [2, 0, 0]]), np.zeros(3), np.array([2.0, 0.0, 0.0]))
    nav.drain_events()

    assert nav.pop().tolist() == [1.0, 0.0, 0.0]
    assert nav.state is NavigationState.FOLLOWING
    nav.pop()
    assert nav.state is NavigationState.IDLE
    kinds = [e.kind for e in nav.drain_events()]
    assert kinds == ["waypoint_reached", "waypoint_reached", "arrived"]

    with pytest.raises(IndexError):
        nav.pop()


def test_clear_waypoint(route_provider):
    nav = Navigator()
    nav.set_waypoint(route_provider([[1, 0, 0]]), np.zeros(3), np.array([1.0, 0.0, 0.0]))
    nav.clear_waypoint()
    assert nav.state is NavigationState.IDLE
    assert len(nav) == 0
    # clearing an idle navigator is a no-op
    nav.clear_waypoint()
    assert [e.kind for e in nav.drain_events()] == ["path_set", "cleared"]


def test_straight_line_provider_modes():
    provider = StraightLineProvider(segments=4)
    start, goal = np.zeros(3), np.array([4.0, 0.0, 0.0])

    direct = provider.find_path(start, goal, QueryMode.ACCURACY)
    assert [p.tolist() for p in direct] == [[4.0, 0.0, 0.0]]

    midpoints = provider.find_path(start, goal, QueryMode.MIDPOINTS)
    assert [p[0] for p in midpoints] == pytest.approx([1.0, 2.0, 3.0, 4.0])


def test_straight_line_provider_bounds():
    provider = StraightLineProvider(bounds=([0, 0, 0], [10, 10, 0]))
    nav = Navigator()
    assert nav.set_waypoint(provider, np.zeros(3), np.array([20.0, 0.0, 0.0])) is False
    assert nav.set_waypoint(provider, np.zeros(3), np.array([5.0, 5.0, 0.0])) is True
    with pytest.raises(ValueError):
        StraightLineProvider(segments=0)
