"""In-memory implementation of ContactRepository (no DB)."""

import bisect
import threading

from contactdash.application.dto import ContactData
from contactdash.domain import Contact


def _key(data: ContactData | Contact) -> tuple[str, str, str]:
    return (data.first_name or "", data.last_name or "", data.email or "")


class InMemoryContactRepository:
    """Stores contacts in memory, kept sorted by first name, last name, email.
    Ids start at 1 and are never reused. Safe to share between request threads.
    """

    def __init__(self) -> None:
        self._contacts: list[Contact] = []
        self._current_id = 0
        self._lock = threading.Lock()

    def _index_by_id(self, contact_id: int) -> int:
        for idx, contact in enumerate(self._contacts):
            if contact.id == contact_id:
                return idx
        return -1

    def _find_by_content(self, data: ContactData) -> Contact | None:
        key = _key(data)
        idx = bisect.bisect_left(self._contacts, key, key=_key)
        if idx < len(self._contacts) and _key(self._contacts[idx]) == key:
            return self._contacts[idx]
        return None

    def add(self, data: ContactData) -> Contact:
        with self._lock:
            existing = self._find_by_content(data)
            if existing is not None:
                return existing
            contact = Contact(
                id=self._current_id + 1,
                first_name=data.first_name,
                last_name=data.last_name,
                email=data.email,
            )
            self._current_id += 1
            bisect.insort(self._contacts, contact, key=_key)
            return contact

    def find_duplicate(self, data: ContactData) -> Contact | None:
        with self._lock:
            return self._find_by_content(data)

    def get_by_id(self, contact_id: int) -> Contact | None:
        with self._lock:
            idx = self._index_by_id(contact_id)
            return self._contacts[idx] if idx >= 0 else None

    def list_all(self) -> list[Contact]:
        with self._lock:
            return list(self._contacts)

    def update(self, contact_id: int, data: ContactData) -> bool:
        with self._lock:
            idx = self._index_by_id(contact_id)
            if idx < 0:
                return False
            updated = Contact(
                id=contact_id,
                first_name=data.first_name,
                last_name=data.last_name,
                email=data.email,
            )
            del self._contacts[idx]
            bisect.insort(self._contacts, updated, key=_key)
            return True

    def delete(self, contact_id: int) -> bool:
        with self._lock:
            idx = self._index_by_id(contact_id)
            if idx < 0:
                return False
            del self._contacts[idx]
            return True
