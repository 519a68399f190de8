"""
Registration and credential checks for the session login pages.
"""
import logging
from typing import Optional

from django.contrib.auth import authenticate
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from booking.exceptions import Conflict
from booking.models import Hospital, User
from booking.services.audit import client_ip, log_action

logger = logging.getLogger(__name__)

REGISTRABLE_ROLES = (User.ROLE_USER, User.ROLE_HOSPITAL_ADMIN)


def landing_url(role: str) -> str:
    if role == User.ROLE_HOSPITAL_ADMIN:
        return '/admin-dashboard'
    if role == User.ROLE_ADMIN:
        return '/admin/dashboard'
    return '/vaccines'


def unclaimed_hospitals() -> list[Hospital]:
    return list(Hospital.objects.filter(admin__isnull=True).order_by('name', 'id'))


def check_credentials(request, username: str, password: str) -> Optional[User]:
    user = authenticate(request, username=username, password=password)
    if user is None:
        log_action(user=None, action='login', object_type='user', detail={'result': 'fail', 'username': username},
                   request=request)
        logger.info('failed login for %s from %s', username, client_ip(request))
        return None
    log_action(user=user, action='login', object_type='user', object_id=user.id, detail={'result': 'ok'}, request=request)
    return user


def register(*, username: str, email: str, password: str, role: str, hospital_id: Optional[int] = None) -> User:
    """Create an account.

    Raises ``Conflict`` for a taken email or username and ``ValidationError``
    for a weak password or an unusable hospital.  A hospital administrator
    becomes the admin of the chosen hospital in the same transaction.
    """
    if role not in REGISTRABLE_ROLES:
        raise ValidationError({'role': 'Invalid role.'})
    if User.objects.filter(email__iexact=email).exists():
        raise Conflict('An account with this email already exists.')
    if User.objects.filter(username=username).exists():
        raise Conflict('This username is already taken.')
    candidate = User(username=username, email=email, role=role)
    try:
        validate_password(password, user=candidate)
    except DjangoValidationError as e:
        raise ValidationError({'password': list(e.messages)})

    try:
        with transaction.atomic():
            hospital = None
            if role == User.ROLE_HOSPITAL_ADMIN:
                if hospital_id is None:
                    raise ValidationError({'hospital_id': 'Select the hospital you administer.'})
                hospital = Hospital.objects.select_for_update().filter(id=hospital_id).first()
                if hospital is None:
                    raise ValidationError({'hospital_id': 'Hospital not found.'})
                if hospital.admin_id is not None:
                    raise ValidationError({'hospital_id': 'This hospital already has an administrator.'})
            user = User.objects.create_user(username=username, email=email, password=password, role=role,
                                            hospital=hospital)
            if hospital is not None:
                hospital.admin = user
                hospital.save(update_fields=['admin'])
    except IntegrityError as e:
        raise Conflict('An account with this email already exists.') from e
    log_action(user=user, action='register', object_type='user', object_id=user.id, detail={'role': role})
    logger.info('registered user %s as %s', user.id, role)
    return user
