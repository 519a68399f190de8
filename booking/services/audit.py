"""Append-only audit trail for security relevant actions."""
from typing import Optional, Any, Dict
from django.contrib.auth import get_user_model
from booking.models import AuditEvent

User = get_user_model()


def client_ip(request) -> Optional[str]:
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR', '')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


def log_action(*, user: Optional[User], action: str, object_type: Optional[str]=None, object_id: Optional[int]=None,
               detail: Optional[Dict[str, Any]]=None, request=None) -> AuditEvent:
    """Record ``action``; anonymous callers are stored without a user and ``request`` adds the client IP."""
    detail = dict(detail or {})
    if request is not None:
        detail.setdefault('ip', client_ip(request))
    return AuditEvent.objects.create(
        user=user if isinstance(user, User) and user.pk else None,
        action=action,
        object_type=object_type, object_id=object_id,
        detail=detail,
    )
