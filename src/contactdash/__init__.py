"""
Contact dashboard core: clean-architecture layout.

- domain: entities (Contact, ServerTime). No outer dependencies.
- application: contact service, dashboard sync loop (poller, renderer,
  mutation gateway, error surface), ports, DTOs.
- infrastructure: adapters (InMemoryContactRepository, HttpContactApi,
  in-memory document tree, rich console view).
"""

from contactdash.application import (
    Accepted,
    ConnectionFailed,
    ContactApi,
    ContactRepository,
    ContactService,
    Dashboard,
    MutationGateway,
    PollLoop,
    Rejected,
    render_contacts,
)
from contactdash.domain import Contact, ServerTime
from contactdash.infrastructure import (
    HttpContactApi,
    InMemoryContactRepository,
    Page,
    build_dashboard_page,
)

__all__ = [
    "Accepted",
    "ConnectionFailed",
    "Contact",
    "ContactApi",
    "ContactRepository",
    "ContactService",
    "Dashboard",
    "HttpContactApi",
    "InMemoryContactRepository",
    "MutationGateway",
    "Page",
    "PollLoop",
    "Rejected",
    "ServerTime",
    "build_dashboard_page",
    "render_contacts",
]
