"""
Access guards for page routes.

Unauthenticated visitors are redirected to the login page; authenticated
users with the wrong role get a 403 page.
"""
from functools import wraps

from django.conf import settings
from django.shortcuts import redirect, render


def _forbidden(request, message):
    return render(request, 'booking/error.html', {'message': message, 'status_code': 403}, status=403)


def login_required(view):
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        if not request.identity.is_authenticated:
            return redirect(settings.LOGIN_URL)
        return view(request, *args, **kwargs)
    return wrapper


def site_admin_required(view):
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        identity = request.identity
        if not identity.is_authenticated:
            return redirect(settings.LOGIN_URL)
        if not identity.is_site_admin:
            return _forbidden(request, 'Access denied. Admins only.')
        return view(request, *args, **kwargs)
    return wrapper


def hospital_admin_required(view):
    """Require a hospital administrator that owns a hospital."""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        identity = request.identity
        if not identity.is_authenticated:
            return redirect(settings.LOGIN_URL)
        if not identity.is_hospital_admin:
            return _forbidden(request, 'Access denied. Hospital administrators only.')
        if identity.hospital_id is None:
            return _forbidden(request, 'No hospital is linked to this administrator account.')
        return view(request, *args, **kwargs)
    return wrapper
