"""Domain entities: Contact and ServerTime."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Contact:
    """
    A server-owned contact record.
    The client never builds one locally except from a list or details response,
    and shows the three fields exactly as the server sent them.
    """

    id: int | str
    first_name: str
    last_name: str
    email: str

    def __post_init__(self):
        if self.id is None or self.id == "":
            raise ValueError("Contact id is required.")

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "Contact":
        """Build a Contact from the wire shape {id, firstName, lastName, email}."""
        if not isinstance(data, dict):
            raise ValueError("Contact payload must be an object.")
        return cls(
            id=data.get("id"),
            first_name=_display(data.get("firstName")),
            last_name=_display(data.get("lastName")),
            email=_display(data.get("email")),
        )


def _display(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class ServerTime:
    """Server clock readout. No identity; replaced wholesale on every tick."""

    time: str
