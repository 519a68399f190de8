"""
Client for the hosted checkout of the payment provider (Stripe).

Only the two calls the booking flow needs are implemented: creating a
checkout session and reading it back when the provider redirects the
patient to the success URL.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

import requests
from django.conf import settings

from booking.exceptions import PaymentFailed

logger = logging.getLogger(__name__)

# Stripe substitutes the real id into the success URL.
SESSION_ID_PLACEHOLDER = '{CHECKOUT_SESSION_ID}'


@dataclass
class CheckoutSession:
    id: str
    url: Optional[str] = None
    payment_status: str = 'unpaid'
    client_reference_id: Optional[str] = None
    metadata: dict = field(default_factory=dict)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == 'paid'


def to_minor_units(amount) -> int:
    return int((Decimal(str(amount)) * 100).quantize(Decimal('1')))


def _request(method: str, path: str, data: Optional[dict] = None) -> dict:
    if not settings.STRIPE_SECRET_KEY:
        raise PaymentFailed('Payment provider is not configured.')
    url = f"{settings.PAYMENT_API_BASE}/{path}"
    try:
        r = requests.request(
            method, url, data=data, auth=(settings.STRIPE_SECRET_KEY, ''), timeout=settings.PAYMENT_TIMEOUT
        )
    except requests.RequestException as e:
        logger.exception('payment provider unreachable: %s %s', method, path)
        raise PaymentFailed() from e
    payload = r.json() if r.content else {}
    if r.status_code >= 400:
        err = payload.get('error', {}) if isinstance(payload, dict) else {}
        logger.error('payment provider error %s on %s %s: %s', r.status_code, method, path, err.get('message'))
        raise PaymentFailed()
    return payload


def _session_from(payload: dict) -> CheckoutSession:
    return CheckoutSession(
        id=payload['id'],
        url=payload.get('url'),
        payment_status=payload.get('payment_status') or 'unpaid',
        client_reference_id=payload.get('client_reference_id'),
        metadata=payload.get('metadata') or {},
    )


def create_checkout_session(*, amount, product_name: str, description: str, success_url: str,
                            cancel_url: str, client_reference_id: str, metadata: Optional[dict] = None) -> CheckoutSession:
    data = {
        'mode': 'payment',
        'payment_method_types[0]': 'card',
        'line_items[0][price_data][currency]': settings.PAYMENT_CURRENCY,
        'line_items[0][price_data][product_data][name]': product_name,
        'line_items[0][price_data][product_data][description]': description,
        'line_items[0][price_data][unit_amount]': to_minor_units(amount),
        'line_items[0][quantity]': 1,
        'success_url': success_url,
        'cancel_url': cancel_url,
        'client_reference_id': client_reference_id,
    }
    for key, value in (metadata or {}).items():
        data[f'metadata[{key}]'] = value
    return _session_from(_request('POST', 'checkout/sessions', data))


def retrieve_checkout_session(session_id: str) -> CheckoutSession:
    return _session_from(_request('GET', f'checkout/sessions/{session_id}'))
