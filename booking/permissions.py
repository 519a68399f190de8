"""
Custom permission classes for role based access control on API routes.

They read ``request.identity`` which is attached by
:class:`booking.middleware.IdentityMiddleware`.
"""
from rest_framework.permissions import BasePermission

from .identity import resolve_identity


def _identity(request):
    identity = getattr(request, 'identity', None)
    if identity is None:
        identity = resolve_identity(getattr(request, 'user', None))
    return identity


class IsSiteAdmin(BasePermission):
    """Allow access only to site administrators."""
    message = 'Access denied. Admins only.'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        return _identity(request).is_site_admin


class IsHospitalAdmin(BasePermission):
    """Hospital administrators that own a hospital."""
    message = 'Access denied. Hospital administrators only.'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        identity = _identity(request)
        return identity.is_hospital_admin and identity.hospital_id is not None
