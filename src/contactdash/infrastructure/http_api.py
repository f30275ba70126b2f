"""ContactApi over HTTP with httpx. Every failure comes back as a result object."""

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx

from contactdash.application.dto import (
    Accepted,
    ConnectionFailed,
    ContactFetched,
    ContactsFetched,
    Rejected,
    ServerTimeFetched,
)
from contactdash.domain import Contact, ServerTime

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def _contact_path(contact_id: int | str) -> str:
    return f"/api/contact/{quote(str(contact_id), safe='')}"


def _failure(response: httpx.Response) -> Rejected | ConnectionFailed:
    """Non-200: use the {error} body when there is one, else the reason phrase."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return Rejected(status=response.status_code, error=body["error"])
    return ConnectionFailed(
        reason=response.reason_phrase or f"HTTP {response.status_code}",
        status=response.status_code,
    )


def _malformed(response: httpx.Response, what: str) -> ConnectionFailed:
    logger.warning("Malformed %s response from %s", what, response.request.url)
    return ConnectionFailed(reason=f"Malformed {what} response", status=response.status_code)


class HttpContactApi:
    """Talks to /api/* on base_url. Pass client= to reuse or mock a transport."""

    def __init__(
        self,
        base_url: str = "",
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpContactApi":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(
        self, method: str, path: str, **kwargs: Any
    ) -> httpx.Response | ConnectionFailed:
        try:
            return await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.warning("%s %s failed: %r", method, path, e)
            return ConnectionFailed(reason=str(e) or type(e).__name__)

    async def _mutate(
        self, method: str, path: str, **kwargs: Any
    ) -> Accepted | Rejected | ConnectionFailed:
        response = await self._request(method, path, **kwargs)
        if isinstance(response, ConnectionFailed):
            return response
        if response.status_code != 200:
            return _failure(response)
        return Accepted(status=response.status_code)

    async def list_contacts(self) -> ContactsFetched | Rejected | ConnectionFailed:
        response = await self._request("GET", "/api/contacts")
        if isinstance(response, ConnectionFailed):
            return response
        if response.status_code != 200:
            return _failure(response)
        try:
            payload = response.json()
            if payload is None:
                return ContactsFetched(contacts=None)
            if not isinstance(payload, list):
                return _malformed(response, "contacts")
            return ContactsFetched(contacts=[Contact.from_json(item) for item in payload])
        except ValueError:
            return _malformed(response, "contacts")

    async def get_contact(
        self, contact_id: int | str
    ) -> ContactFetched | Rejected | ConnectionFailed:
        response = await self._request("GET", _contact_path(contact_id))
        if isinstance(response, ConnectionFailed):
            return response
        if response.status_code != 200:
            return _failure(response)
        try:
            return ContactFetched(contact=Contact.from_json(response.json()))
        except ValueError:
            return _malformed(response, "contact")

    async def add_contact(
        self, form_data: Mapping[str, str]
    ) -> Accepted | Rejected | ConnectionFailed:
        return await self._mutate("POST", "/api/add-contact", data=dict(form_data))

    async def update_contact(
        self, contact_id: int | str, form_data: Mapping[str, str]
    ) -> Accepted | Rejected | ConnectionFailed:
        return await self._mutate("PUT", _contact_path(contact_id), data=dict(form_data))

    async def delete_contact(
        self, contact_id: int | str
    ) -> Accepted | Rejected | ConnectionFailed:
        return await self._mutate("DELETE", _contact_path(contact_id))

    async def server_time(self) -> ServerTimeFetched | Rejected | ConnectionFailed:
        response = await self._request("GET", "/api/server-time")
        if isinstance(response, ConnectionFailed):
            return response
        if response.status_code != 200:
            return _failure(response)
        try:
            payload = response.json()
        except ValueError:
            return _malformed(response, "server time")
        if not isinstance(payload, dict) or not isinstance(payload.get("time"), str):
            return _malformed(response, "server time")
        return ServerTimeFetched(server_time=ServerTime(time=payload["time"]))
