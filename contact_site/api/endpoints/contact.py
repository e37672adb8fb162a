"""
Contact form endpoints.

POST /api/contact stores a submission, GET /api/messages lists them.
Both answer with ``{"ok": ...}`` JSON and never let an error escape.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from typing import Any, Dict
import json
import logging

from contact_site.core.config import Settings, get_settings
from contact_site.core.errors import PayloadTooLargeError, SiteError, ValidationError
from contact_site.db.store import MessageStore, get_store
from contact_site.models.contact import ContactMessage, Rejected, validate_submission

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Thanks for reaching out!"
SUBMIT_FAILED = "Something went wrong. Please try again."
LIST_FAILED = "Unable to load messages."
INVALID_JSON = "Invalid JSON payload."


def send_json(status_code: int, data: Dict[str, Any], headers: Dict[str, str] = None) -> JSONResponse:
    """JSON response that is never cached by the browser"""
    response_headers = {"Cache-Control": "no-store"}
    if headers:
        response_headers.update(headers)
    return JSONResponse(
        status_code=status_code,
        content=data,
        headers=response_headers,
        media_type="application/json; charset=utf-8",
    )


async def collect_request_body(request: Request, limit: int) -> bytes:
    """
    Read the request body, giving up as soon as it grows past ``limit`` bytes.

    Raises:
        PayloadTooLargeError: declared or received body is larger than ``limit``
    """
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLargeError()

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > limit:
            raise PayloadTooLargeError()
    return bytes(body)


def parse_json_body(body: bytes) -> Any:
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise ValidationError(INVALID_JSON)


@router.post("/contact")
async def submit_contact(
    request: Request,
    store: MessageStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    Accept a contact form submission and append it to the message store.

    Returns:
        200 {"ok": true, "message": ...} once stored,
        400 when a field is missing or the body is not JSON,
        413 when the body is too large (connection is closed),
        500 when the store cannot be written
    """
    try:
        body = await collect_request_body(request, settings.max_body_bytes)
        result = validate_submission(parse_json_body(body))
        if isinstance(result, Rejected):
            logger.warning(f"Rejected contact submission, missing: {', '.join(result.missing_fields)}")
            raise ValidationError(result.error)

        message = ContactMessage.from_submission(result.submission)
        record = await run_in_threadpool(store.append, message)
        logger.info(f"📬 New contact message: {record}")
        return send_json(200, {"ok": True, "message": SUCCESS_MESSAGE})

    except PayloadTooLargeError as e:
        logger.warning(f"Contact submission over {settings.max_body_bytes} bytes, closing connection")
        return send_json(e.status_code, {"ok": False, "error": e.message}, headers={"Connection": "close"})
    except SiteError as e:
        return send_json(e.status_code, {"ok": False, "error": e.message})
    except Exception:
        logger.exception("Failed to process contact submission")
        return send_json(500, {"ok": False, "error": SUBMIT_FAILED})


@router.get("/messages")
async def list_messages(store: MessageStore = Depends(get_store)):
    """
    List every stored contact message in submission order.

    Returns:
        200 {"ok": true, "data": [...]} or 500 {"ok": false, "error": ...}
    """
    try:
        records = await run_in_threadpool(store.list)
        return send_json(200, {"ok": True, "data": records})
    except Exception:
        logger.exception("Failed to read messages")
        return send_json(500, {"ok": False, "error": LIST_FAILED})
