"""Application layer: use cases, sync loop, ports, and DTOs. Depends only on domain."""

from contactdash.application.contact_service import ContactService
from contactdash.application.dashboard import Dashboard
from contactdash.application.dto import (
    Accepted,
    ApiFailure,
    ConnectionFailed,
    ContactData,
    ContactFetched,
    ContactsFetched,
    Duplicate,
    Invalid,
    NotFound,
    Rejected,
    ServerTimeFetched,
)
from contactdash.application.error_surface import CONNECTION_ERROR, show_connection_error
from contactdash.application.mutation_gateway import MutationGateway
from contactdash.application.poller import LoopState, PollLoop
from contactdash.application.ports import (
    ContactApi,
    ContactRepository,
    Document,
    Element,
    FormElement,
)
from contactdash.application.renderer import render_contacts

__all__ = [
    "Accepted",
    "ApiFailure",
    "CONNECTION_ERROR",
    "ConnectionFailed",
    "ContactApi",
    "ContactData",
    "ContactFetched",
    "ContactRepository",
    "ContactService",
    "ContactsFetched",
    "Dashboard",
    "Document",
    "Duplicate",
    "Element",
    "FormElement",
    "Invalid",
    "LoopState",
    "MutationGateway",
    "NotFound",
    "PollLoop",
    "Rejected",
    "ServerTimeFetched",
    "render_contacts",
    "show_connection_error",
]
