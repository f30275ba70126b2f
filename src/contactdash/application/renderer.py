"""Full-replace projection of a contact list onto a table body.

Every call clears the container and rebuilds one row per contact, so two
refreshes landing close together can only cause a flicker, never residue.
"""

from collections.abc import Awaitable, Callable, Sequence

from contactdash.application.ports import Document, Element
from contactdash.domain import Contact

DELETE_BUTTON_CLASS = "delete-button"
DELETE_LABEL = "Delete"

DeleteHandler = Callable[[int | str], Awaitable[object]]


def _table_cell(document: Document, row: Element, body: str) -> Element:
    cell = document.create_element("td")
    cell.text = body
    row.append_child(cell)
    return cell


def _delete_cell(
    document: Document, row: Element, contact_id: int | str, on_delete: DeleteHandler
) -> Element:
    cell = document.create_element("td")
    button = document.create_element("button")
    button.class_name = DELETE_BUTTON_CLASS
    button.text = DELETE_LABEL

    async def _click() -> object:
        return await on_delete(contact_id)

    button.on_click = _click
    cell.append_child(button)
    row.append_child(cell)
    return cell


def render_contact_row(
    document: Document, row: Element, contact: Contact, on_delete: DeleteHandler
) -> None:
    _table_cell(document, row, contact.first_name)
    _table_cell(document, row, contact.last_name)
    _table_cell(document, row, contact.email)
    _delete_cell(document, row, contact.id, on_delete)


def render_contacts(
    document: Document,
    container: Element,
    contacts: Sequence[Contact] | None,
    on_delete: DeleteHandler,
) -> None:
    """Replace the container's rows with one row per contact, in list order.

    None clears the container and renders nothing.
    """
    container.clear()
    if contacts is None:
        return
    for contact in contacts:
        row = document.create_element("tr")
        render_contact_row(document, row, contact, on_delete)
        container.append_child(row)
