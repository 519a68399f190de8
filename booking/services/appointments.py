import datetime
import logging

from django.db import transaction
from django.db.models import F
from django.utils import timezone
from rest_framework.exceptions import NotFound, ValidationError

from booking.models import Appointment, VaccineInventory
from booking.services.audit import log_action
from booking.services.notifications import notify

logger = logging.getLogger(__name__)


def list_for_user(user_id: int) -> list[Appointment]:
    return list(
        Appointment.objects.select_related('vaccine', 'hospital', 'doctor')
        .filter(user_id=user_id)
        .order_by('appointment_date', 'id')
    )


def get_owned(user_id: int, appointment_id: int) -> Appointment:
    appt = (Appointment.objects.select_related('vaccine', 'hospital', 'doctor')
            .filter(id=appointment_id, user_id=user_id).first())
    if appt is None:
        raise NotFound('Appointment not found or you do not have permission to access it.')
    return appt


def cancel(user, appointment_id: int) -> None:
    """Delete the caller's appointment and put its dose back in stock."""
    with transaction.atomic():
        appt = (Appointment.objects.select_for_update()
                .select_related('vaccine')
                .filter(id=appointment_id, user_id=user.id).first())
        if appt is None:
            raise NotFound('Appointment not found or you do not have permission to cancel it.')
        vaccine_name = appt.vaccine.name
        vaccine_id, hospital_id = appt.vaccine_id, appt.hospital_id
        appt.delete()
        VaccineInventory.objects.filter(vaccine_id=vaccine_id, hospital_id=hospital_id).update(
            stock_quantity=F('stock_quantity') + 1, last_updated=timezone.now()
        )
        notify(user.id, f"Your appointment for {vaccine_name} has been canceled.")
        log_action(user=user, action='appointment_canceled', object_type='Appointment', object_id=appointment_id,
                   detail={'vaccine_id': vaccine_id, 'hospital_id': hospital_id})
    logger.info('appointment %s canceled by user %s', appointment_id, user.id)


def reschedule(user, appointment_id: int, new_date: datetime.date) -> Appointment:
    """Move an appointment to ``new_date`` keeping its time of day.

    Only the date is compared: today is allowed, yesterday is not.
    """
    if new_date < timezone.localdate():
        raise ValidationError({'new_appointment_date': 'Cannot reschedule to a past date.'})
    appt = get_owned(user.id, appointment_id)
    current = timezone.localtime(appt.appointment_date)
    appt.appointment_date = timezone.make_aware(datetime.datetime.combine(new_date, current.time()))
    appt.save(update_fields=['appointment_date', 'updated_at'])
    log_action(user=user, action='appointment_rescheduled', object_type='Appointment', object_id=appt.id,
               detail={'new_date': new_date.isoformat()})
    return appt
