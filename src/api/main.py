"""
FastAPI reference contact server: the HTTP contract the dashboard polls.
Run with uvicorn: uvicorn api.main:app --reload  (or python -m api)
"""

import logging
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from contactdash.application import (
    ContactData,
    ContactService,
    Duplicate,
    Invalid,
    NotFound,
)
from contactdash.config import load_dotenv_files
from contactdash.infrastructure import InMemoryContactRepository

load_dotenv_files()

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

# Request bodies for add/update are capped at 4KB.
MAX_FORM_BYTES = 4096


class ContactItem(BaseModel):
    id: int
    firstName: str
    lastName: str
    email: str


class ServerTimeBody(BaseModel):
    time: str


def _error(msg: str, status: int) -> JSONResponse:
    return JSONResponse(content={"error": msg}, status_code=status)


def _parse_id(id_string: str) -> int | JSONResponse:
    """Return a positive contact id, or the 400 response explaining why not."""
    id_string = (id_string or "").strip()
    if not id_string:
        return _error("Missing ID", 400)
    try:
        contact_id = int(id_string)
    except ValueError as e:
        return _error(f"Error parsing ID: {e}", 400)
    if contact_id <= 0:
        return _error("Invalid ID", 400)
    return contact_id


async def _read_form(request: Request) -> ContactData | JSONResponse:
    """Parse an urlencoded or multipart body of at most MAX_FORM_BYTES."""
    try:
        declared = int(request.headers.get("content-length") or 0)
    except ValueError:
        declared = 0
    body = b"" if declared > MAX_FORM_BYTES else await request.body()
    if declared > MAX_FORM_BYTES or len(body) > MAX_FORM_BYTES:
        logger.warning("Error: could not parse input form: body too large")
        return _error("Error parsing form: request body too large", 400)
    try:
        form = await request.form()
    except Exception as e:
        logger.warning("Error: could not parse input form: %s", e)
        return _error(f"Error parsing form: {e}", 400)

    def field(name: str) -> str | None:
        value = form.get(name)
        return value if isinstance(value, str) else None

    return ContactData(
        first_name=field("firstName"),
        last_name=field("lastName"),
        email=field("email"),
    )


def get_service(request: Request) -> ContactService:
    return request.app.state.service


def create_app(service: ContactService | None = None) -> FastAPI:
    """Build the app around a service (a fresh in-memory one by default)."""
    app = FastAPI(title="Contact API")
    app.state.service = service or ContactService(InMemoryContactRepository())

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.get("/api/server-time")
    def server_time():
        now = datetime.now().astimezone()
        return ServerTimeBody(time=now.isoformat(timespec="seconds"))

    @app.get("/api/contacts")
    def list_contacts(request: Request):
        return [ContactItem(**c.to_json()) for c in get_service(request).list_contacts()]

    @app.post("/api/add-contact")
    async def add_contact(request: Request):
        data = await _read_form(request)
        if isinstance(data, JSONResponse):
            return data
        result = get_service(request).add_contact(data)
        if isinstance(result, Invalid):
            return _error(result.reason, 400)
        if isinstance(result, Duplicate):
            logger.info("Contact already exists with id %s", result.contact_id)
        return Response(status_code=200)

    @app.get("/api/contact/{contact_id}")
    def get_contact(contact_id: str, request: Request):
        parsed = _parse_id(contact_id)
        if isinstance(parsed, JSONResponse):
            return parsed
        result = get_service(request).get_contact(parsed)
        if isinstance(result, NotFound):
            return _error("Contact not found", 404)
        return ContactItem(**result.to_json())

    @app.put("/api/contact/{contact_id}")
    async def update_contact(contact_id: str, request: Request):
        data = await _read_form(request)
        if isinstance(data, JSONResponse):
            return data
        parsed = _parse_id(contact_id)
        if isinstance(parsed, JSONResponse):
            return parsed
        result = get_service(request).update_contact(parsed, data)
        if isinstance(result, Invalid):
            return _error(result.reason, 400)
        if isinstance(result, NotFound):
            logger.info("Update ignored, no contact %s", parsed)
        return Response(status_code=200)

    @app.delete("/api/contact/{contact_id}")
    def delete_contact(contact_id: str, request: Request):
        parsed = _parse_id(contact_id)
        if isinstance(parsed, JSONResponse):
            return parsed
        if isinstance(get_service(request).delete_contact(parsed), NotFound):
            logger.info("Delete ignored, no contact %s", parsed)
        return Response(status_code=200)

    return app


app = create_app()
