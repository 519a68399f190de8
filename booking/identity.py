"""
Role-tagged identity attached to every request.

The session only stores the authenticated user id (Django sessions).  The
identity adds the role and, for hospital administrators, the hospital
they own, resolved through :attr:`Hospital.admin`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .models import Hospital, User


@dataclass(frozen=True)
class Identity:
    user_id: Optional[int] = None
    username: str = ''
    role: str = ''
    hospital_id: Optional[int] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_site_admin(self) -> bool:
        return self.is_authenticated and self.role == User.ROLE_ADMIN

    @property
    def is_hospital_admin(self) -> bool:
        return self.is_authenticated and self.role == User.ROLE_HOSPITAL_ADMIN


ANONYMOUS = Identity()


def hospital_id_for_admin(user_id: int) -> Optional[int]:
    """Return the id of the hospital administered by ``user_id``, if any."""
    return Hospital.objects.filter(admin_id=user_id).values_list('id', flat=True).first()


def resolve_identity(user) -> Identity:
    if not (user and getattr(user, 'is_authenticated', False)):
        return ANONYMOUS
    hospital_id = None
    if user.role == User.ROLE_HOSPITAL_ADMIN:
        hospital_id = hospital_id_for_admin(user.id)
    return Identity(user_id=user.id, username=user.username, role=user.role, hospital_id=hospital_id)
