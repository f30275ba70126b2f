"""Terminal view of the dashboard page using rich."""

import asyncio
from collections.abc import Sequence

from rich.console import Console, Group
from rich.live import Live
from rich.table import Table
from rich.text import Text

from contactdash.application.dashboard import Dashboard
from contactdash.application.error_surface import CONNECTION_ERROR
from contactdash.application.mount_points import (
    CONTACTS_BODY,
    DASHBOARD_PARENT,
    SERVER_TIME,
    STATUS,
)
from contactdash.domain import Contact
from contactdash.infrastructure.dom import TABLE_HEADINGS, Page

console = Console()


def _status_line(page: Page) -> Text:
    status = page.get_element_by_id(STATUS)
    if status is None or not status.text:
        return Text("")
    style = "red" if status.class_name == "error" else "green"
    return Text(status.text, style=style)


def build_view(page: Page) -> Group:
    """Project the current page state: clock, contacts (or error), status."""
    st = page.get_element_by_id(SERVER_TIME)
    clock = Text("Server time: ", style="bold")
    reading = st.text if st is not None and st.text else "-"
    clock.append(reading, style="red" if reading == CONNECTION_ERROR else None)

    body = page.get_element_by_id(CONTACTS_BODY)
    if body is None:
        parent = page.get_element_by_id(DASHBOARD_PARENT)
        msg = parent.text_content if parent is not None else "Dashboard unavailable"
        return Group(clock, Text(msg, style="bold red"), _status_line(page))

    table = Table(title="Contacts", expand=True)
    for heading in TABLE_HEADINGS[:3]:
        table.add_column(heading)
    table.add_column("", justify="right")
    for row in body.children:
        cells = [cell.text_content for cell in row.children]
        table.add_row(*cells[:3], f"[dim]{cells[3]}[/dim]" if len(cells) > 3 else "")
    if not body.children:
        table.caption = "No contacts"
    return Group(clock, table, _status_line(page))


def contacts_table(contacts: Sequence[Contact] | None) -> Table:
    """Plain listing with ids, for one-shot commands."""
    table = Table(title="Contacts", expand=True)
    table.add_column("ID", style="bold")
    for heading in TABLE_HEADINGS[:3]:
        table.add_column(heading)
    for contact in contacts or []:
        table.add_row(str(contact.id), contact.first_name, contact.last_name, contact.email)
    return table


async def run_live(
    dashboard: Dashboard,
    page: Page,
    *,
    max_ticks: int | None = None,
    refresh_per_second: float = 4,
) -> None:
    """Run both poll loops while redrawing the page until they stop or are cancelled."""
    loops = asyncio.ensure_future(dashboard.run(max_ticks))
    with Live(build_view(page), refresh_per_second=refresh_per_second, console=console) as live:
        try:
            while not loops.done():
                live.update(build_view(page))
                await asyncio.sleep(1 / refresh_per_second)
            live.update(build_view(page))
            await loops
        finally:
            if not loops.done():
                loops.cancel()
