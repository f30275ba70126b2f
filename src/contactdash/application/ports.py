"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Awaitable, Callable, Mapping
from typing import Protocol

from contactdash.application.dto import (
    Accepted,
    ConnectionFailed,
    ContactData,
    ContactFetched,
    ContactsFetched,
    Rejected,
    ServerTimeFetched,
)
from contactdash.domain import Contact

ClickHandler = Callable[[], Awaitable[object]]


class ContactRepository(Protocol):
    """Stores the server's contact list."""

    def add(self, data: ContactData) -> Contact:
        """Store a new contact and assign its id. An identical contact is returned as is."""
        ...

    def find_duplicate(self, data: ContactData) -> Contact | None:
        """Return the contact with the same first name, last name and email, or None."""
        ...

    def get_by_id(self, contact_id: int) -> Contact | None:
        ...

    def list_all(self) -> list[Contact]:
        """Return all contacts sorted by first name, last name, email."""
        ...

    def update(self, contact_id: int, data: ContactData) -> bool:
        """Replace the fields of a contact. Returns False if not found."""
        ...

    def delete(self, contact_id: int) -> bool:
        """Remove a contact. Returns False if not found."""
        ...


class ContactApi(Protocol):
    """Client view of the remote contact service. Never raises on transport errors."""

    async def list_contacts(self) -> ContactsFetched | Rejected | ConnectionFailed:
        ...

    async def get_contact(
        self, contact_id: int | str
    ) -> ContactFetched | Rejected | ConnectionFailed:
        ...

    async def add_contact(
        self, form_data: Mapping[str, str]
    ) -> Accepted | Rejected | ConnectionFailed:
        ...

    async def update_contact(
        self, contact_id: int | str, form_data: Mapping[str, str]
    ) -> Accepted | Rejected | ConnectionFailed:
        ...

    async def delete_contact(
        self, contact_id: int | str
    ) -> Accepted | Rejected | ConnectionFailed:
        ...

    async def server_time(self) -> ServerTimeFetched | Rejected | ConnectionFailed:
        ...


class Element(Protocol):
    """A node of the document the dashboard renders into."""

    tag: str
    id: str | None
    text: str
    class_name: str
    on_click: ClickHandler | None

    @property
    def children(self) -> list["Element"]:
        ...

    def append_child(self, child: "Element") -> None:
        ...

    def clear(self) -> None:
        """Remove every child and any text."""
        ...


class FormElement(Element, Protocol):
    def form_data(self) -> dict[str, str]:
        """Current value of every named field."""
        ...

    def reset(self) -> None:
        """Restore every field to its default value."""
        ...


class Document(Protocol):
    """DOM construction capability: lookup by id and element creation."""

    def get_element_by_id(self, element_id: str) -> Element | None:
        ...

    def create_element(self, tag: str) -> Element:
        ...
