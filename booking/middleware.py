import logging

from django.conf import settings
from django.db import DatabaseError
from django.shortcuts import redirect, render
from django.utils.functional import SimpleLazyObject
from rest_framework.exceptions import APIException, NotAuthenticated

from .exceptions import error_message
from .identity import resolve_identity

logger = logging.getLogger(__name__)


class IdentityMiddleware:
    """Attach ``request.identity`` (user id, role, owned hospital) lazily."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.identity = SimpleLazyObject(lambda: resolve_identity(getattr(request, 'user', None)))
        return self.get_response(request)


class ServiceErrorMiddleware:
    """Render service exceptions raised by page views.

    DRF views handle their own exceptions before this runs, so only plain
    Django views end up here.  ``NotAuthenticated`` sends the browser to
    the login page; other API exceptions render ``error.html`` with the
    exception's status.  Database errors are logged and shown as a
    generic 500 page.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if isinstance(exception, NotAuthenticated):
            return redirect(settings.LOGIN_URL)
        if isinstance(exception, APIException):
            return render(
                request,
                'booking/error.html',
                {'message': error_message(exception), 'status_code': exception.status_code},
                status=exception.status_code,
            )
        if isinstance(exception, DatabaseError):
            logger.exception('database error on %s %s', request.method, request.path)
            return render(
                request,
                'booking/error.html',
                {'message': 'Something went wrong. Please try again later.', 'status_code': 500},
                status=500,
            )
        return None
