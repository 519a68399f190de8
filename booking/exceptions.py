"""
Service-level exceptions and the JSON error envelope for API routes.

Services raise Django REST framework exceptions (``NotFound``,
``PermissionDenied``, ``ValidationError``) or one of the subclasses
below.  API views render them through :func:`api_exception_handler`;
page views go through :class:`booking.middleware.ServiceErrorMiddleware`.
"""
import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'The request conflicts with the current state.'
    default_code = 'conflict'


class OutOfStock(Conflict):
    default_detail = 'This vaccine is out of stock at the selected hospital.'
    default_code = 'out_of_stock'


class PaymentFailed(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'The payment provider could not process the request.'
    default_code = 'payment_error'


class PaymentIncomplete(PaymentFailed):
    status_code = status.HTTP_402_PAYMENT_REQUIRED
    default_detail = 'Payment has not been completed.'
    default_code = 'payment_incomplete'


class PaymentAlreadyUsed(Conflict):
    default_detail = 'This payment was already used for an appointment that has since been canceled.'
    default_code = 'payment_used'


class BookingFailed(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = 'Error processing appointment.'
    default_code = 'booking_failed'


def error_message(exc: APIException) -> str:
    detail = exc.detail
    if isinstance(detail, dict):
        parts = []
        for field, msgs in detail.items():
            msgs = msgs if isinstance(msgs, list) else [msgs]
            parts.append(f"{field}: {' '.join(str(m) for m in msgs)}")
        return '; '.join(parts)
    if isinstance(detail, list):
        return ' '.join(str(m) for m in detail)
    return str(detail)


def error_code(exc: APIException) -> str:
    codes = exc.get_codes()
    if isinstance(codes, str):
        return codes
    return getattr(exc, 'default_code', 'error')


def api_exception_handler(exc, context):
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, DjangoPermissionDenied):
        exc = exceptions.PermissionDenied()
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception('unhandled error in %s', context.get('view'))
        return Response({'success': False, 'code': 'server_error', 'error': 'Server error'}, status=500)
    return Response(
        {'success': False, 'code': error_code(exc), 'error': error_message(exc)},
        status=resp.status_code,
        headers={h: resp[h] for h in ('WWW-Authenticate', 'Retry-After') if resp.has_header(h)},
    )
