"""Tests for HttpContactApi against scripted httpx transports."""

import asyncio
import json

import httpx

from contactdash.application import (
    Accepted,
    ConnectionFailed,
    ContactFetched,
    ContactsFetched,
    Rejected,
    ServerTimeFetched,
)
from contactdash.infrastructure import HttpContactApi
from fakes import contact


def _call(handler, method: str, *args):
    async def go():
        async with httpx.AsyncClient(
            transport=httpx.MockTransport(handler), base_url="http://contacts.test"
        ) as client:
            api = HttpContactApi(client=client)
            return await getattr(api, method)(*args)

    return asyncio.run(go())


def test_list_contacts_parses_wire_shape() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "GET"
        assert request.url.path == "/api/contacts"
        return httpx.Response(
            200, json=[{"id": 1, "firstName": "A", "lastName": "B", "email": "a@b.com"}]
        )

    result = _call(handler, "list_contacts")
    assert result == ContactsFetched(contacts=[contact(1, "A", "B", "a@b.com")])


def test_list_contacts_keeps_field_values_as_sent() -> None:
    long_email = "x" * 2000 + "@example.com"
    payload = [
        {"id": 1, "firstName": "A", "lastName": "", "email": "a@b.com"},
        {"id": 2, "firstName": " A ", "lastName": "B\t", "email": long_email},
        {"id": 3, "firstName": "C"},
    ]

    result = _call(lambda r: httpx.Response(200, json=payload), "list_contacts")
    assert result == ContactsFetched(
        contacts=[
            contact(1, "A", "", "a@b.com"),
            contact(2, " A ", "B\t", long_email),
            contact(3, "C", "", ""),
        ]
    )


def test_list_contacts_null_payload() -> None:
    result = _call(lambda r: httpx.Response(200, content=b"null"), "list_contacts")
    assert result == ContactsFetched(contacts=None)


def test_list_contacts_malformed_body_is_connection_failure() -> None:
    result = _call(lambda r: httpx.Response(200, text="<html>oops</html>"), "list_contacts")
    assert isinstance(result, ConnectionFailed)
    assert result.status == 200

    result = _call(lambda r: httpx.Response(200, json=[{"firstName": "A"}]), "list_contacts")
    assert isinstance(result, ConnectionFailed)

    result = _call(lambda r: httpx.Response(200, json=["not an object"]), "list_contacts")
    assert isinstance(result, ConnectionFailed)

    result = _call(lambda r: httpx.Response(200, json={"id": 1}), "list_contacts")
    assert isinstance(result, ConnectionFailed)


def test_transport_error_is_connection_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("All connection attempts failed", request=request)

    result = _call(handler, "list_contacts")
    assert result == ConnectionFailed(reason="All connection attempts failed")

    result = _call(handler, "add_contact", {"firstName": "A"})
    assert isinstance(result, ConnectionFailed)


def test_add_contact_sends_form_encoded_body() -> None:
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["content_type"] = request.headers["content-type"]
        seen["body"] = request.content.decode()
        return httpx.Response(200)

    form = {"firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com"}
    assert _call(handler, "add_contact", form) == Accepted()
    assert seen["method"] == "POST"
    assert seen["path"] == "/api/add-contact"
    assert seen["content_type"] == "application/x-www-form-urlencoded"
    assert "firstName=Ada" in seen["body"]
    assert "email=ada%40example.com" in seen["body"]


def test_add_contact_rejected_with_error_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "email required"})

    assert _call(handler, "add_contact", {}) == Rejected(status=400, error="email required")


def test_add_contact_non_json_error_uses_reason_phrase() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="<h1>ERROR</h1>")

    result = _call(handler, "add_contact", {})
    assert result == ConnectionFailed(reason="Internal Server Error", status=500)


def test_delete_contact_path_and_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.method == "DELETE"
        assert request.url.path == "/api/contact/7"
        return httpx.Response(200)

    assert _call(handler, "delete_contact", 7) == Accepted()

    result = _call(lambda r: httpx.Response(400, json={"error": "Invalid ID"}), "delete_contact", 0)
    assert result == Rejected(status=400, error="Invalid ID")


def test_get_and_update_contact() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "PUT":
            assert request.url.path == "/api/contact/3"
            return httpx.Response(200)
        return httpx.Response(
            200, json={"id": 3, "firstName": "C", "lastName": "D", "email": "c@d.com"}
        )

    assert _call(handler, "get_contact", 3) == ContactFetched(contact=contact(3, "C", "D", "c@d.com"))
    assert _call(handler, "update_contact", 3, {"firstName": "C"}) == Accepted()

    result = _call(
        lambda r: httpx.Response(404, json={"error": "Contact not found"}), "get_contact", 9
    )
    assert result == Rejected(status=404, error="Contact not found")


def test_server_time() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/server-time"
        return httpx.Response(200, content=json.dumps({"time": "2024-05-01T12:00:00Z"}))

    result = _call(handler, "server_time")
    assert isinstance(result, ServerTimeFetched)
    assert result.server_time.time == "2024-05-01T12:00:00Z"

    result = _call(lambda r: httpx.Response(200, json={"time": 5}), "server_time")
    assert isinstance(result, ConnectionFailed)
