"""Tests for the poll loops, the connection-error surface and refresh wiring."""

import asyncio

import pytest

from contactdash.application import (
    CONNECTION_ERROR,
    ConnectionFailed,
    ContactsFetched,
    Dashboard,
    LoopState,
    PollLoop,
    Rejected,
)
from contactdash.application.mount_points import (
    ADD_CONTACT_FORM,
    CONTACTS_BODY,
    DASHBOARD_PARENT,
    SERVER_TIME,
    STATUS,
    SUBMIT_BUTTON,
)
from contactdash.infrastructure import build_dashboard_page, mount_contacts_table
from fakes import FakeContactApi, FakeSleep, contact


def _dashboard(api: FakeContactApi, **kwargs):
    page = build_dashboard_page()
    sleep = FakeSleep()
    dashboard = Dashboard(api, page, sleep=sleep, **kwargs)
    return dashboard, page, sleep


def _row_texts(page) -> list[list[str]]:
    body = page.get_element_by_id(CONTACTS_BODY)
    return [[c.text_content for c in row.children][:3] for row in body.children]


# --- PollLoop ---


def test_poll_loop_ticks_immediately_then_every_interval() -> None:
    sleep = FakeSleep()
    ticks = []

    async def tick():
        ticks.append(len(sleep.delays))

    loop = PollLoop("t", tick, 2.0, sleep=sleep)
    asyncio.run(loop.run(max_ticks=3))

    assert ticks == [0, 1, 2]
    assert sleep.delays == [2.0, 2.0]
    assert loop.ticks == 3
    assert loop.state is LoopState.IDLE


def test_poll_loop_survives_failing_tick() -> None:
    sleep = FakeSleep()
    calls = []

    async def tick():
        calls.append(1)
        raise RuntimeError("boom")

    loop = PollLoop("t", tick, 1.0, sleep=sleep)
    asyncio.run(loop.run(max_ticks=2))

    assert len(calls) == 2
    assert sleep.delays == [1.0]


def test_poll_loop_awaits_tick_before_scheduling_next() -> None:
    sleep = FakeSleep()
    seen = []

    async def tick():
        seen.append(loop.state)
        await asyncio.sleep(0)
        seen.append(len(sleep.delays))

    loop = PollLoop("t", tick, 2.0, sleep=sleep)
    asyncio.run(loop.run(max_ticks=2))

    assert seen == [LoopState.AWAITING_RESPONSE, 0, LoopState.AWAITING_RESPONSE, 1]


def test_poll_loop_rejects_non_positive_interval() -> None:
    async def tick():
        return None

    with pytest.raises(ValueError):
        PollLoop("t", tick, 0)


# --- Contacts refresh / error surface ---


def test_refresh_renders_server_list() -> None:
    api = FakeContactApi([contact(1, "A", "B", "a@b.com")])
    dashboard, page, _ = _dashboard(api)

    assert asyncio.run(dashboard.refresh_contacts()) is True
    assert _row_texts(page) == [["A", "B", "a@b.com"]]


@pytest.mark.parametrize(
    "failure",
    [
        ConnectionFailed(reason="All connection attempts failed"),
        ConnectionFailed(reason="Malformed contacts response", status=200),
        Rejected(status=500, error="Error getting contacts"),
    ],
)
def test_failed_list_fetch_replaces_dashboard_with_error(failure) -> None:
    api = FakeContactApi([contact(1, "A", "B", "a@b.com")])
    dashboard, page, _ = _dashboard(api)
    asyncio.run(dashboard.refresh_contacts())
    api.list_results.append(failure)

    assert asyncio.run(dashboard.refresh_contacts()) is False

    parent = page.get_element_by_id(DASHBOARD_PARENT)
    assert parent.children == []
    assert parent.text == CONNECTION_ERROR
    assert page.get_element_by_id(CONTACTS_BODY) is None


def test_contact_loop_keeps_polling_after_network_error() -> None:
    api = FakeContactApi([contact(1, "A", "B", "a@b.com")])
    api.list_results.append(ConnectionFailed(reason="unreachable"))
    dashboard, page, sleep = _dashboard(api)

    asyncio.run(dashboard.contact_loop.run(max_ticks=2))

    assert api.count("list") == 2
    assert sleep.delays == [2.0]
    # Without a layout capability the table stays gone after the error.
    assert page.get_element_by_id(DASHBOARD_PARENT).text == CONNECTION_ERROR


def test_contacts_table_restored_after_recovery() -> None:
    api = FakeContactApi([contact(1, "A", "B", "a@b.com")])
    api.list_results.append(ConnectionFailed(reason="unreachable"))
    dashboard, page, _ = _dashboard(api, mount_contacts_table=mount_contacts_table)

    asyncio.run(dashboard.contact_loop.run(max_ticks=2))

    assert page.get_element_by_id(DASHBOARD_PARENT).text == ""
    assert _row_texts(page) == [["A", "B", "a@b.com"]]


def test_null_list_clears_rows() -> None:
    api = FakeContactApi([contact(1, "A", "B", "a@b.com")])
    dashboard, page, _ = _dashboard(api)
    asyncio.run(dashboard.refresh_contacts())
    api.list_results.append(ContactsFetched(contacts=None))

    assert asyncio.run(dashboard.refresh_contacts()) is True
    assert _row_texts(page) == []


def test_missing_targets_are_a_no_op() -> None:
    api = FakeContactApi([contact(1, "A", "B", "a@b.com")])
    dashboard, page, _ = _dashboard(api)
    page.root.clear()

    assert asyncio.run(dashboard.refresh_contacts()) is False
    assert asyncio.run(dashboard.refresh_server_time()) is False
    api.list_results.append(ConnectionFailed(reason="unreachable"))
    assert asyncio.run(dashboard.refresh_contacts()) is False


# --- Server time ---


def test_time_loop_renders_time_and_recovers() -> None:
    api = FakeContactApi()
    api.time_results.append(ConnectionFailed(reason="unreachable"))
    dashboard, page, sleep = _dashboard(api)
    st = page.get_element_by_id(SERVER_TIME)

    asyncio.run(dashboard.time_loop.tick_once())
    assert st.text == CONNECTION_ERROR
    # Only the time region is touched by the time loop.
    assert page.get_element_by_id(CONTACTS_BODY) is not None

    asyncio.run(dashboard.time_loop.run(max_ticks=3))
    assert st.text == "2024-01-01T00:00:00Z"
    assert sleep.delays == [1.0]


# --- Mutations through the page ---


def test_delete_click_refreshes_and_row_disappears() -> None:
    api = FakeContactApi([contact(1, "A", "B", "a@b.com"), contact(2, "C", "D", "c@d.com")])
    dashboard, page, _ = _dashboard(api)
    asyncio.run(dashboard.refresh_contacts())

    first_row = page.get_element_by_id(CONTACTS_BODY).children[0]
    asyncio.run(first_row.children[3].children[0].click())

    assert ("delete", 1) in api.calls
    assert api.count("list") == 2
    assert _row_texts(page) == [["C", "D", "c@d.com"]]


def test_submit_button_adds_and_refreshes() -> None:
    api = FakeContactApi()
    dashboard, page, _ = _dashboard(api)
    assert dashboard.prep_form() is True
    form = page.get_element_by_id(ADD_CONTACT_FORM)
    form.set_value("firstName", "A")
    form.set_value("lastName", "B")
    form.set_value("email", "a@b.com")

    asyncio.run(page.get_element_by_id(SUBMIT_BUTTON).click())

    assert api.count("add") == 1
    assert api.count("list") == 1
    assert _row_texts(page) == [["A", "B", "a@b.com"]]
    assert page.get_element_by_id(STATUS).text == "Contact added successfully"
    assert form.get_value("firstName") == ""


def test_run_drives_both_loops_independently() -> None:
    api = FakeContactApi([contact(1, "A", "B", "a@b.com")])
    dashboard, page, sleep = _dashboard(api)

    asyncio.run(dashboard.run(max_ticks=2))

    assert api.count("list") == 2
    assert api.count("time") == 2
    assert sorted(sleep.delays) == [1.0, 2.0]
    assert page.get_element_by_id(SERVER_TIME).text == "2024-01-01T00:00:00Z"
