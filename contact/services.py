from __future__ import annotations

import logging
import re

from .models import ContactMessage

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

NAME_MIN, NAME_MAX = 2, 100
EMAIL_MAX = 254
MESSAGE_MIN, MESSAGE_MAX = 10, 2000


def validate_contact(data: dict) -> dict[str, str]:
    """Field name -> error message; empty when the submission is valid."""
    errors: dict[str, str] = {}

    name = (data.get("name") or "").strip()
    if not name:
        errors["name"] = "Name is required"
    elif len(name) < NAME_MIN:
        errors["name"] = f"Name must be at least {NAME_MIN} characters long"
    elif len(name) > NAME_MAX:
        errors["name"] = f"Name must be less than {NAME_MAX} characters"

    email = (data.get("email") or "").strip()
    if not email:
        errors["email"] = "Email is required"
    elif not _EMAIL_RE.match(email):
        errors["email"] = "Please enter a valid email address"
    elif len(email) > EMAIL_MAX:
        errors["email"] = "Email address is too long"

    if not (data.get("project_type") or "").strip():
        errors["project_type"] = "Project type is required"

    message = (data.get("message") or "").strip()
    if not message:
        errors["message"] = "Message is required"
    elif len(message) < MESSAGE_MIN:
        errors["message"] = f"Message must be at least {MESSAGE_MIN} characters long"
    elif len(message) > MESSAGE_MAX:
        errors["message"] = f"Message must be less than {MESSAGE_MAX} characters"

    if not data.get("privacy_accepted"):
        errors["privacy_accepted"] = "You must accept the privacy policy to continue"

    return errors


def create_contact_message(data: dict) -> ContactMessage:
    msg = ContactMessage.objects.create(
        name=(data.get("name") or "").strip(),
        email=(data.get("email") or "").strip().lower(),
        project_type=(data.get("project_type") or "").strip()[:100],
        message=(data.get("message") or "").strip(),
        privacy_accepted=True,
        marketing_consent=bool(data.get("marketing_consent")),
    )
    logger.info("Contact message received", extra={"contact_message_id": msg.id})
    return msg
