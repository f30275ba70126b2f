"""Dashboard page controller: refresh entry points, poll loops and form wiring."""

import asyncio
import logging
from collections.abc import Callable

from contactdash.application.dto import ContactsFetched, ServerTimeFetched
from contactdash.application.error_surface import show_connection_error
from contactdash.application.mount_points import (
    CONTACTS_BODY,
    DASHBOARD_PARENT,
    SERVER_TIME,
    SUBMIT_BUTTON,
)
from contactdash.application.mutation_gateway import MutationGateway
from contactdash.application.poller import (
    CONTACT_POLL_INTERVAL,
    TIME_POLL_INTERVAL,
    PollLoop,
    Sleep,
)
from contactdash.application.ports import ContactApi, Document, Element
from contactdash.application.renderer import render_contacts

logger = logging.getLogger(__name__)

# Rebuilds the contacts table inside the dashboard region; returns the new body.
MountContactsTable = Callable[[Document, Element], Element | None]


class Dashboard:
    """Both poll loops and the mutation gateway funnel into refresh_contacts."""

    def __init__(
        self,
        api: ContactApi,
        document: Document,
        *,
        contact_interval: float = CONTACT_POLL_INTERVAL,
        time_interval: float = TIME_POLL_INTERVAL,
        sleep: Sleep = asyncio.sleep,
        mount_contacts_table: MountContactsTable | None = None,
    ) -> None:
        self._api = api
        self._document = document
        self._mount_contacts_table = mount_contacts_table
        self.gateway = MutationGateway(api, document, self.refresh_contacts)
        self.contact_loop = PollLoop(
            "contacts", self.refresh_contacts, contact_interval, sleep=sleep
        )
        self.time_loop = PollLoop(
            "server-time", self.refresh_server_time, time_interval, sleep=sleep
        )

    async def refresh_contacts(self) -> bool:
        """Fetch the list and re-render it, or show the connection error."""
        result = await self._api.list_contacts()
        # Look elements up after the await: the page may have changed meanwhile.
        parent = self._document.get_element_by_id(DASHBOARD_PARENT)
        if not isinstance(result, ContactsFetched):
            logger.warning("Could not get data from server: %s", result)
            show_connection_error(parent)
            return False

        body = self._document.get_element_by_id(CONTACTS_BODY)
        if body is None and parent is not None and self._mount_contacts_table:
            logger.info("Server reachable again, restoring contacts table")
            body = self._mount_contacts_table(self._document, parent)
        if body is None:
            logger.warning("No #%s element, contacts not rendered", CONTACTS_BODY)
            return False
        render_contacts(self._document, body, result.contacts, self.gateway.delete_contact)
        return True

    async def refresh_server_time(self) -> bool:
        result = await self._api.server_time()
        st = self._document.get_element_by_id(SERVER_TIME)
        if not isinstance(result, ServerTimeFetched):
            logger.warning("Could not get server time: %s", result)
            show_connection_error(st)
            return False
        if st is None:
            logger.warning("No #%s element, time not rendered", SERVER_TIME)
            return False
        st.text = result.server_time.time
        return True

    def prep_form(self) -> bool:
        """Bind the submit button to the gateway. False if the button is missing."""
        button = self._document.get_element_by_id(SUBMIT_BUTTON)
        if button is None:
            logger.warning("No #%s element, add form disabled", SUBMIT_BUTTON)
            return False
        button.on_click = self.gateway.submit_form
        return True

    def start_contact_poll_loop(self, max_ticks: int | None = None) -> asyncio.Task:
        return self.contact_loop.start(max_ticks)

    def start_time_poll_loop(self, max_ticks: int | None = None) -> asyncio.Task:
        return self.time_loop.start(max_ticks)

    async def run(self, max_ticks: int | None = None) -> None:
        """Wire the form and run both loops until cancelled (or max_ticks each)."""
        self.prep_form()
        await asyncio.gather(
            self.start_contact_poll_loop(max_ticks),
            self.start_time_poll_loop(max_ticks),
        )
