from __future__ import annotations

import logging
import re

from fastapi import APIRouter, Depends, HTTPException, status
from starlette.concurrency import run_in_threadpool

from src.app.schemas.contact import ContactRequest, ContactResponse
from src.services.errors import MailDeliveryError, MailNotConfiguredError
from src.services.mailer import ContactMessage, SmtpMailer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contact", tags=["contact"])

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")


def get_mailer() -> SmtpMailer:
    return SmtpMailer()


@router.post("", response_model=ContactResponse)
async def send_contact(
    payload: ContactRequest,
    mailer: SmtpMailer = Depends(get_mailer),
) -> ContactResponse:
    if payload.missing_fields():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="All fields are required")
    if not _EMAIL_RE.match(payload.email.strip()):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid email address")

    contact = ContactMessage(
        name=payload.name.strip(),
        email=payload.email.strip(),
        subject=payload.subject.strip(),
        message=payload.message,
    )
    try:
        await run_in_threadpool(mailer.send_contact, contact)
    except MailNotConfiguredError as exc:
        logger.error("Contact form unavailable: %s", exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Contact form is not available")
    except MailDeliveryError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to send email")
    return ContactResponse()
