import logging

from rest_framework.exceptions import NotFound, ValidationError

from booking.models import Hospital, User, Vaccine
from booking.services.audit import log_action

logger = logging.getLogger(__name__)


def overview() -> dict:
    return {
        'users': list(User.objects.order_by('id')),
        'hospitals': list(Hospital.objects.select_related('admin').order_by('id')),
        'vaccines': list(Vaccine.objects.order_by('id')),
    }


def delete_user(actor, user_id: int) -> None:
    if user_id == actor.id:
        raise ValidationError({'id': 'You cannot delete your own account.'})
    deleted, _ = User.objects.filter(id=user_id).delete()
    if not deleted:
        raise NotFound('User not found.')
    log_action(user=actor, action='user_deleted', object_type='User', object_id=user_id)
    logger.info('user %s deleted by admin %s', user_id, actor.id)


def delete_hospital(actor, hospital_id: int) -> None:
    deleted, _ = Hospital.objects.filter(id=hospital_id).delete()
    if not deleted:
        raise NotFound('Hospital not found.')
    log_action(user=actor, action='hospital_deleted', object_type='Hospital', object_id=hospital_id)


def delete_vaccine(actor, vaccine_id: int) -> None:
    deleted, _ = Vaccine.objects.filter(id=vaccine_id).delete()
    if not deleted:
        raise NotFound('Vaccine not found.')
    log_action(user=actor, action='vaccine_deleted', object_type='Vaccine', object_id=vaccine_id)
