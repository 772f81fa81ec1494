"""
Registration router: the target of the public form's POST.
"""
import logging
from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse

from webinar.config import Settings
from webinar.dependencies.store import get_registration_service, get_settings
from webinar.services.registration_service import INSERT_ERRORS, RegistrationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Registration"])

FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"


def _media_type(request: Request) -> str:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";", 1)[0].strip().lower()


async def parse_registration_body(request: Request) -> dict[str, Any]:
    """
    Decode the request body into a registration record.

    URL-encoded forms and JSON objects are accepted. A form field sent
    more than once keeps all of its values as a list. Any other content
    type yields an empty record.

    Raises:
        HTTPException 400: If a JSON body is malformed or not an object.
    """
    media_type = _media_type(request)

    if media_type == "application/json" or media_type.endswith("+json"):
        raw = await request.body()
        if not raw.strip():
            return {}
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Request body is not valid JSON",
            )
        if not isinstance(body, dict):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Request body must be a JSON object",
            )
        return body

    if media_type == FORM_MEDIA_TYPE:
        form = await request.form()
        record: dict[str, Any] = {}
        for key, value in form.multi_items():
            if key not in record:
                record[key] = value
            elif isinstance(record[key], list):
                record[key].append(value)
            else:
                record[key] = [record[key], value]
        return record

    return {}


@router.post(
    "/registration",
    status_code=status.HTTP_302_FOUND,
    summary="Register for the webinar",
)
async def register(
    background_tasks: BackgroundTasks,
    record: dict[str, Any] = Depends(parse_registration_body),
    settings: Settings = Depends(get_settings),
    registration_service: RegistrationService = Depends(get_registration_service),
):
    """
    Store the submitted form fields and redirect to the success page.

    By default the redirect is sent without waiting for the insert, so
    the visitor lands on the success page even if the write fails; the
    failure is only logged. With ``AWAIT_INSERT=true`` the insert is
    awaited and a failure is reported as a plain-text 500.
    """
    if not settings.await_insert:
        background_tasks.add_task(registration_service.register_and_log, record)
        return RedirectResponse(settings.success_page, status_code=status.HTTP_302_FOUND)

    try:
        await registration_service.register(record)
    except INSERT_ERRORS as e:
        logger.error(f"insert failed! {e}")
        return PlainTextResponse(str(e), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    logger.info("Registration successfully processed!")
    return RedirectResponse(settings.success_page, status_code=status.HTTP_302_FOUND)
