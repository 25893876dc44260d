from __future__ import annotations

from ninja import Router
from ninja.errors import HttpError
from ninja.pagination import PageNumberPagination, paginate

from accounts.auth import require_admin

from .models import ContactMessage
from .schemas import (
    ContactCreatedOut,
    ContactErrorOut,
    ContactIn,
    ContactMessageOut,
    ContactMessageUpdateIn,
    UnreadCountOut,
)
from .services import create_contact_message, validate_contact

router = Router(tags=["contact"])
admin_router = Router(tags=["admin-contact"])


class MessagePagination(PageNumberPagination):
    page_size = 25
    max_page_size = 100


def _message_out(m: ContactMessage) -> dict:
    return {
        "id": m.id,
        "name": m.name,
        "email": m.email,
        "project_type": m.project_type,
        "message": m.message,
        "privacy_accepted": m.privacy_accepted,
        "marketing_consent": m.marketing_consent,
        "read": m.read,
        "replied": m.replied,
        "created_at": m.created_at,
    }


def _get_message(message_id: int) -> ContactMessage:
    m = ContactMessage.objects.filter(id=int(message_id)).first()
    if m is None:
        raise HttpError(404, "Message not found")
    return m


@router.post("", response={201: ContactCreatedOut, 400: ContactErrorOut})
def submit(request, payload: ContactIn):
    data = payload.model_dump()
    errors = validate_contact(data)
    if errors:
        return 400, {"detail": "Validation failed", "errors": errors}
    msg = create_contact_message(data)
    return 201, {"success": True, "id": msg.id}


@admin_router.get("/messages", response=list[ContactMessageOut], by_alias=True)
@paginate(MessagePagination)
def admin_messages(request, read: bool | None = None, replied: bool | None = None):
    require_admin(request)
    qs = ContactMessage.objects.order_by("-created_at", "-id")
    if read is not None:
        qs = qs.filter(read=read)
    if replied is not None:
        qs = qs.filter(replied=replied)
    return [_message_out(m) for m in qs]


@admin_router.get("/messages/unread-count", response=UnreadCountOut)
def admin_unread_count(request):
    require_admin(request)
    return {"unread": ContactMessage.objects.filter(read=False).count()}


@admin_router.get("/messages/{message_id}", response=ContactMessageOut, by_alias=True)
def admin_message_detail(request, message_id: int):
    require_admin(request)
    return _message_out(_get_message(message_id))


@admin_router.patch("/messages/{message_id}", response=ContactMessageOut, by_alias=True)
def admin_message_update(request, message_id: int, payload: ContactMessageUpdateIn):
    require_admin(request)
    m = _get_message(message_id)
    fields = []
    if payload.read is not None:
        m.read = payload.read
        fields.append("read")
    if payload.replied is not None:
        m.replied = payload.replied
        fields.append("replied")
        # Replying implies it has been read.
        if payload.replied and not m.read:
            m.read = True
            fields.append("read")
    if fields:
        m.save(update_fields=[*fields, "updated_at"])
    return _message_out(m)


@admin_router.delete("/messages/{message_id}", response={204: None})
def admin_message_delete(request, message_id: int):
    require_admin(request)
    deleted, _ = ContactMessage.objects.filter(id=int(message_id)).delete()
    if not deleted:
        raise HttpError(404, "Message not found")
    return 204, None
