"""
Checkout and appointment creation.

A booking is paid before it exists: :func:`start_checkout` resolves the
price and opens a hosted checkout session, :func:`confirm_booking` runs
when the provider redirects back and creates the appointment.  The
checkout session id is recorded in a :class:`PaymentSession` row that
outlives the appointment, so a replayed success callback returns the
appointment created the first time, or is refused once that appointment
has been canceled.
"""
import datetime
import logging
from urllib.parse import urlencode

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from booking.exceptions import BookingFailed, OutOfStock, PaymentAlreadyUsed, PaymentIncomplete
from booking.models import Appointment, Doctor, PaymentSession, VaccineInventory
from booking.services import payments
from booking.services.audit import log_action
from booking.services.notifications import notify

logger = logging.getLogger(__name__)


def priced_inventory(vaccine_id: int, hospital_id: int) -> VaccineInventory:
    """Inventory row that a checkout is priced from; it must be in stock."""
    row = (VaccineInventory.objects.select_related('vaccine')
           .filter(vaccine_id=vaccine_id, hospital_id=hospital_id).first())
    if row is None:
        raise NotFound('Vaccine price not found for this hospital.')
    if row.stock_quantity <= 0:
        raise OutOfStock()
    return row


def _check_doctor(doctor_id: int, hospital_id: int) -> None:
    if not Doctor.objects.filter(id=doctor_id, hospital_id=hospital_id).exists():
        raise NotFound('Doctor not found at this hospital.')


def success_url(*, appointment_date, appointment_time, doctor_id, hospital_id, vaccine_id) -> str:
    query = urlencode({
        'appointment_date': appointment_date.isoformat(),
        'appointment_time': appointment_time.strftime('%H:%M'),
        'doctor_id': doctor_id,
        'hospital_id': hospital_id,
        'vaccine_id': vaccine_id,
    })
    return f"{settings.BASE_URL}/success?{query}&session_id={payments.SESSION_ID_PLACEHOLDER}"


def cancel_url() -> str:
    return f"{settings.BASE_URL}/vaccines?payment_failed=true"


def start_checkout(user, *, vaccine_id: int, hospital_id: int, doctor_id: int,
                   appointment_date: datetime.date, appointment_time: datetime.time) -> payments.CheckoutSession:
    """Open a hosted checkout session for one appointment and return it."""
    if appointment_date < timezone.localdate():
        raise ValidationError({'appointment_date': 'Appointment date cannot be in the past.'})
    row = priced_inventory(vaccine_id, hospital_id)
    _check_doctor(doctor_id, hospital_id)
    session = payments.create_checkout_session(
        amount=row.price,
        product_name=f"Vaccine Appointment: {row.vaccine.name}",
        description=f"Appointment at Hospital ID: {hospital_id} with Doctor ID: {doctor_id}",
        success_url=success_url(
            appointment_date=appointment_date, appointment_time=appointment_time,
            doctor_id=doctor_id, hospital_id=hospital_id, vaccine_id=vaccine_id,
        ),
        cancel_url=cancel_url(),
        client_reference_id=str(user.id),
        metadata={'vaccine_id': vaccine_id, 'hospital_id': hospital_id, 'doctor_id': doctor_id},
    )
    logger.info('checkout session %s opened for user %s', session.id, user.id)
    return session


def _existing_for_session(user, session_id: str):
    """Appointment already booked with ``session_id``, or None if the session is unused.

    A consumed session whose appointment was canceled raises ``PaymentAlreadyUsed``.
    """
    used = PaymentSession.objects.select_related('appointment').filter(session_id=session_id).first()
    if used is None:
        return None
    if used.user_id != user.id:
        raise PermissionDenied('This payment belongs to another account.')
    if used.appointment is None:
        raise PaymentAlreadyUsed()
    return used.appointment


def confirm_booking(user, *, session_id: str, vaccine_id: int, hospital_id: int, doctor_id: int,
                    appointment_date: datetime.date, appointment_time: datetime.time) -> tuple[Appointment, bool]:
    """Create the appointment paid for by ``session_id``.

    Returns ``(appointment, created)``.  Replaying the same session id
    returns the existing appointment with ``created=False``; replaying it
    after that appointment was canceled is a 409.
    """
    existing = _existing_for_session(user, session_id)
    if existing is not None:
        return existing, False

    session = payments.retrieve_checkout_session(session_id)
    if not session.is_paid:
        raise PaymentIncomplete()
    if session.client_reference_id != str(user.id):
        raise PermissionDenied('This payment belongs to another account.')
    _check_doctor(doctor_id, hospital_id)

    when = timezone.make_aware(datetime.datetime.combine(appointment_date, appointment_time))
    try:
        with transaction.atomic():
            row = (VaccineInventory.objects.select_for_update()
                   .filter(vaccine_id=vaccine_id, hospital_id=hospital_id).first())
            if row is None:
                raise NotFound('Vaccine is not stocked at this hospital.')
            if row.stock_quantity <= 0:
                raise OutOfStock()
            row.stock_quantity -= 1
            row.save(update_fields=['stock_quantity', 'last_updated'])
            appt = Appointment.objects.create(
                user=user, doctor_id=doctor_id, vaccine_id=vaccine_id, hospital_id=hospital_id,
                appointment_date=when, status=Appointment.STATUS_CONFIRMED, payment_session_id=session_id,
            )
            PaymentSession.objects.create(session_id=session_id, user=user, appointment=appt)
            notify(user.id, f"Your appointment for {row.vaccine.name} on {when:%Y-%m-%d %H:%M} is confirmed.")
            log_action(user=user, action='appointment_booked', object_type='Appointment', object_id=appt.id,
                       detail={'session_id': session_id, 'vaccine_id': vaccine_id, 'hospital_id': hospital_id})
    except IntegrityError:
        # A concurrent replay of the same callback committed first.
        appt = _existing_for_session(user, session_id)
        if appt is None:
            logger.exception('booking failed for session %s', session_id)
            raise BookingFailed()
        return appt, False
    except DatabaseError as e:
        logger.exception('booking failed for session %s', session_id)
        raise BookingFailed() from e
    logger.info('appointment %s booked for user %s', appt.id, user.id)
    return appt, True
