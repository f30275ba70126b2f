"""Contact add, list, details, update and delete behind the reference server."""

from contactdash.application.dto import ContactData, Duplicate, Invalid, NotFound
from contactdash.application.ports import ContactRepository
from contactdash.domain import Contact

MISSING_FIELDS = "Missing required fields"
# Longest value accepted for any contact field.
FIELD_MAX_LENGTH = 500


def _clean(data: ContactData) -> ContactData | Invalid:
    first_name = (data.first_name or "").strip()
    last_name = (data.last_name or "").strip()
    email = (data.email or "").strip()
    # Minimal validation; the email is not checked for shape.
    if not first_name or not last_name or not email:
        return Invalid(reason=MISSING_FIELDS)
    for value in (first_name, last_name, email):
        if len(value) > FIELD_MAX_LENGTH:
            return Invalid(reason=f"Fields must be at most {FIELD_MAX_LENGTH} chars")
    return ContactData(first_name=first_name, last_name=last_name, email=email)


class ContactService:
    """Use cases over a ContactRepository. Ids are assigned by the repository."""

    def __init__(self, repository: ContactRepository) -> None:
        self._repo = repository

    def add_contact(self, data: ContactData) -> Contact | Duplicate | Invalid:
        """Validate and store a contact. An identical contact is reported as Duplicate."""
        cleaned = _clean(data)
        if isinstance(cleaned, Invalid):
            return cleaned
        existing = self._repo.find_duplicate(cleaned)
        if existing is not None:
            return Duplicate(contact_id=existing.id)
        return self._repo.add(cleaned)

    def list_contacts(self) -> list[Contact]:
        return self._repo.list_all()

    def get_contact(self, contact_id: int) -> Contact | NotFound:
        contact = self._repo.get_by_id(contact_id)
        if contact is None:
            return NotFound(contact_id=contact_id)
        return contact

    def update_contact(
        self, contact_id: int, data: ContactData
    ) -> Contact | NotFound | Invalid:
        """Replace every field of a contact. The list is re-sorted afterwards."""
        cleaned = _clean(data)
        if isinstance(cleaned, Invalid):
            return cleaned
        if not self._repo.update(contact_id, cleaned):
            return NotFound(contact_id=contact_id)
        return self.get_contact(contact_id)

    def delete_contact(self, contact_id: int) -> None | NotFound:
        if not self._repo.delete(contact_id):
            return NotFound(contact_id=contact_id)
        return None
