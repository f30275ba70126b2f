"""Add/delete requests followed by a full refresh once the server confirms."""

import logging
from collections.abc import Awaitable, Callable, Mapping

from contactdash.application.dto import Accepted, ApiFailure, Rejected
from contactdash.application.mount_points import ADD_CONTACT_FORM, STATUS
from contactdash.application.ports import ContactApi, Document

logger = logging.getLogger(__name__)

ADD_SUCCESS = "Contact added successfully"
ERROR_CLASS = "error"

Refresh = Callable[[], Awaitable[object]]


class MutationGateway:
    """Submits mutations and re-syncs the view through the injected refresh.

    Nothing is changed locally before the server answers: a confirmed
    mutation triggers a refetch, a failed one leaves the rows as they are.
    """

    def __init__(self, api: ContactApi, document: Document, refresh: Refresh) -> None:
        self._api = api
        self._document = document
        self._refresh = refresh

    async def add_contact(
        self, form_data: Mapping[str, str]
    ) -> Accepted | ApiFailure:
        """POST the form. On 200 reset the form, report success and refresh once."""
        result = await self._api.add_contact(form_data)
        status = self._document.get_element_by_id(STATUS)
        if isinstance(result, Accepted):
            form = self._document.get_element_by_id(ADD_CONTACT_FORM)
            if form is not None:
                form.reset()
            if status is not None:
                status.text = ADD_SUCCESS
                status.class_name = ""
            await self._refresh()
            return result

        message = result.error if isinstance(result, Rejected) else result.reason
        logger.warning("Add contact failed: %s", message)
        if status is not None:
            status.class_name = ERROR_CLASS
            status.text = f"Error: {message}"
        return result

    async def submit_form(self) -> Accepted | ApiFailure | None:
        """Collect the add-contact form and submit it. None if the form is gone."""
        form = self._document.get_element_by_id(ADD_CONTACT_FORM)
        if form is None:
            logger.warning("Submit ignored: no #%s element", ADD_CONTACT_FORM)
            return None
        return await self.add_contact(form.form_data())

    async def delete_contact(
        self, contact_id: int | str
    ) -> Accepted | ApiFailure:
        """DELETE the contact; refresh only when the server confirms."""
        result = await self._api.delete_contact(contact_id)
        if isinstance(result, Accepted):
            await self._refresh()
        else:
            logger.warning("Delete of contact %s failed: %s", contact_id, result)
        return result
