"""
Checkout and the payment provider's return URLs.
"""
from django.http import HttpResponseRedirect
from django.shortcuts import redirect
from django.views.decorators.http import require_GET, require_POST

from booking.guards import login_required
from booking.serializers.booking import CheckoutSerializer, SuccessQuerySerializer
from booking.services import booking as booking_service


@require_POST
@login_required
def create_checkout_session(request):
    s = CheckoutSerializer(data=request.POST)
    s.is_valid(raise_exception=True)
    session = booking_service.start_checkout(request.user, **s.validated_data)
    resp = HttpResponseRedirect(session.url)
    resp.status_code = 303
    return resp


@require_GET
@login_required
def payment_success(request):
    q = SuccessQuerySerializer(data=request.GET)
    q.is_valid(raise_exception=True)
    appt, _ = booking_service.confirm_booking(request.user, **q.validated_data)
    return redirect(f'/review?appointment_id={appt.id}')


@require_GET
def payment_failure(request):
    return redirect('/vaccines?payment_failed=true')
