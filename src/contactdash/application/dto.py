"""Result objects returned by the contact service and the contact API port."""

from dataclasses import dataclass

from contactdash.domain import Contact, ServerTime

# --- Contact service (server side) ---


@dataclass(frozen=True)
class ContactData:
    """Raw form input for add/update. Fields may be blank until validated."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None


@dataclass(frozen=True)
class Invalid:
    reason: str


@dataclass(frozen=True)
class Duplicate:
    contact_id: int


@dataclass(frozen=True)
class NotFound:
    contact_id: int


# --- Contact API (client side) ---


@dataclass(frozen=True)
class ContactsFetched:
    """A successful list poll. contacts is None when the server sent null."""

    contacts: list[Contact] | None


@dataclass(frozen=True)
class ContactFetched:
    contact: Contact


@dataclass(frozen=True)
class ServerTimeFetched:
    server_time: ServerTime


@dataclass(frozen=True)
class Accepted:
    """A mutation the server confirmed with 200."""

    status: int = 200


@dataclass(frozen=True)
class Rejected:
    """Non-200 response carrying a structured {error} body."""

    status: int
    error: str


@dataclass(frozen=True)
class ConnectionFailed:
    """Transport failure, unexpected status or unreadable body."""

    reason: str
    status: int | None = None


ApiFailure = Rejected | ConnectionFailed
