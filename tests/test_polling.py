from __future__ import annotations

from src.data.errors import FormatError, TransportError
from src.data.polling import FetchTicket, GridSession
from tests.conftest import FakeFetcher

GRID_A = [["Name"], ["Valve"]]
GRID_B = [["Name"], ["Valve"], ["Pump"]]


def _session(results, clock, interval=30.0):
    fetcher = FakeFetcher(results)
    return GridSession(fetcher, interval=interval, clock=clock), fetcher


def test_initial_load_success(clock):
    session, fetcher = _session([GRID_A], clock)
    session.mount("NPP11", "stock")
    assert session.grid == GRID_A
    assert session.error is None
    assert session.last_updated is not None
    assert fetcher.calls == [("NPP11", "stock")]


def test_initial_load_failure_surfaces_error(clock):
    session, _ = _session([TransportError("HTTP error! status: 500", status_code=500)], clock)
    session.mount("NPP11", "stock")
    assert session.grid is None
    assert session.error == "HTTP error! status: 500"


def test_background_failure_keeps_previous_grid(clock):
    session, _ = _session([GRID_A, FormatError("Invalid data format received.")], clock)
    session.mount("NPP11", "stock")
    clock.advance(30)
    assert session.refresh_if_due()
    assert session.grid == GRID_A
    assert session.error is None


def test_background_success_replaces_grid(clock):
    session, _ = _session([GRID_A, GRID_B], clock)
    session.mount("NPP11", "stock")
    session.refresh()
    assert session.grid == GRID_B


def test_refresh_waits_for_interval(clock):
    session, fetcher = _session([GRID_A, GRID_B], clock)
    session.mount("NPP11", "stock")
    clock.advance(20)
    assert not session.refresh_if_due()
    clock.advance(10)
    assert session.refresh_if_due()
    assert len(fetcher.calls) == 2
    # the interval restarts from the last attempt
    assert not session.refresh_if_due()


def test_timer_ticks_with_uneven_delays_all_refresh(clock):
    session, fetcher = _session([GRID_A] * 7, clock)
    session.mount("NPP11", "stock")
    ran = []
    for k, delay in enumerate([0.20, 0.10, 0.25, 0.05, 0.30, 0.15], start=1):
        clock.now = 0.5 + 30 * k + delay
        ran.append(session.refresh_if_due())
    assert all(ran)
    assert len(fetcher.calls) == 7


def test_widget_reruns_between_ticks_do_not_refetch(clock):
    session, fetcher = _session([GRID_A, GRID_B], clock)
    session.mount("NPP11", "stock")
    for _ in range(5):
        clock.advance(3)
        assert not session.refresh_if_due()
    assert len(fetcher.calls) == 1


def test_no_polling_after_unmount(clock):
    session, fetcher = _session([GRID_A, GRID_B], clock)
    session.mount("NPP11", "stock")
    session.unmount()
    clock.advance(60)
    assert not session.refresh_if_due()
    session.refresh()
    assert len(fetcher.calls) == 1


def test_response_after_unmount_is_discarded(clock):
    session, fetcher = _session([GRID_A, GRID_B], clock)
    session.mount("NPP11", "stock")
    # the view goes away while the background request is in flight
    fetcher.hooks[2] = session.unmount
    session.refresh()
    assert session.grid == GRID_A


def test_response_for_superseded_key_is_discarded(clock):
    grid_c = [["Name"], ["Late"]]
    session, fetcher = _session([GRID_A, GRID_B, grid_c], clock)
    session.mount("NPP11", "stock")
    # user switches to another sheet while the refresh is still pending
    fetcher.hooks[2] = lambda: session.mount("E/WTP", "equipment")
    session.refresh()
    assert session.key == ("E/WTP", "equipment")
    assert session.grid == GRID_B


def test_switching_key_invalidates_old_tickets(clock):
    session, _ = _session([GRID_A, GRID_B], clock)
    session.mount("NPP11", "stock")
    old = FetchTicket(("NPP11", "stock"), 1)
    assert session.is_live(old)
    session.mount("E/WTP", "equipment")
    assert not session.is_live(old)
    assert session.key == ("E/WTP", "equipment")
    assert session.grid == GRID_B


def test_failure_after_unmount_sets_no_error(clock):
    session, fetcher = _session([TransportError("timeout")], clock)
    fetcher.hooks[1] = session.unmount
    session.mount("NPP11", "stock")
    assert session.error is None


def test_ensure_mounted_only_remounts_on_key_change(clock):
    session, fetcher = _session([GRID_A, GRID_B], clock)
    assert session.ensure_mounted("NPP11", "stock")
    assert not session.ensure_mounted("NPP11", "stock")
    assert session.ensure_mounted("NPP11", "equipment")
    assert fetcher.calls == [("NPP11", "stock"), ("NPP11", "equipment")]


def test_refresh_before_mount_does_nothing(clock):
    session, fetcher = _session([GRID_A], clock)
    session.refresh()
    assert not session.refresh_if_due()
    assert fetcher.calls == []
    assert session.grid is None
