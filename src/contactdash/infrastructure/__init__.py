"""Infrastructure layer: concrete implementations of application ports."""

from contactdash.infrastructure.dom import (
    FormNode,
    Node,
    Page,
    build_dashboard_page,
    mount_contacts_table,
)
from contactdash.infrastructure.http_api import HttpContactApi
from contactdash.infrastructure.memory_repository import InMemoryContactRepository

__all__ = [
    "FormNode",
    "HttpContactApi",
    "InMemoryContactRepository",
    "Node",
    "Page",
    "build_dashboard_page",
    "mount_contacts_table",
]
