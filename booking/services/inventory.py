"""
Inventory of the hospital owned by the calling administrator.

Every mutation takes the caller's ``hospital_id`` from the request
identity and re-checks that the target row belongs to it.
"""
import datetime
import logging
from decimal import Decimal
from typing import Optional

from django.db import IntegrityError, transaction
from django.db.models import Count, Sum
from django.utils import timezone
from rest_framework.exceptions import NotFound, PermissionDenied

from booking.exceptions import Conflict
from booking.models import Appointment, Doctor, Review, Vaccine, VaccineInventory
from booking.services.audit import log_action

logger = logging.getLogger(__name__)


def list_inventory(hospital_id: int) -> list[VaccineInventory]:
    return list(
        VaccineInventory.objects.select_related('vaccine')
        .filter(hospital_id=hospital_id)
        .order_by('vaccine__name', 'id')
    )


def dashboard_counts(hospital_id: int) -> dict:
    stock = VaccineInventory.objects.filter(hospital_id=hospital_id).aggregate(
        rows=Count('id'), doses=Sum('stock_quantity')
    )
    return {
        'inventory_rows': stock['rows'] or 0,
        'doses_in_stock': stock['doses'] or 0,
        'expired_rows': VaccineInventory.objects.filter(
            hospital_id=hospital_id, expiry_date__lt=timezone.localdate()
        ).count(),
        'doctors': Doctor.objects.filter(hospital_id=hospital_id).count(),
        'upcoming_appointments': Appointment.objects.filter(
            hospital_id=hospital_id, appointment_date__gte=timezone.now()
        ).count(),
        'reviews': Review.objects.filter(hospital_id=hospital_id).count(),
    }


def add_inventory(user, hospital_id: int, *, vaccine_name: str, vaccine_type: str = '', stock_quantity: int,
                  expiry_date: Optional[datetime.date] = None, price: Decimal = Decimal('0'), notes: str = '',
                  image: str = '') -> VaccineInventory:
    """Add a vaccine to the hospital's inventory, creating the vaccine by name if needed."""
    vaccine, created = Vaccine.objects.get_or_create(name=vaccine_name, defaults={'vaccine_type': vaccine_type})
    if created:
        logger.info('vaccine %s created from inventory add', vaccine.id)
    try:
        with transaction.atomic():
            row = VaccineInventory.objects.create(
                hospital_id=hospital_id, vaccine=vaccine, stock_quantity=stock_quantity,
                expiry_date=expiry_date, price=price, notes=notes, image=image,
            )
    except IntegrityError as e:
        raise Conflict('This vaccine is already in your inventory.') from e
    log_action(user=user, action='inventory_added', object_type='VaccineInventory', object_id=row.id,
               detail={'vaccine_id': vaccine.id, 'stock_quantity': stock_quantity})
    return row


def owned_inventory_or_raise(hospital_id: int, inventory_id: int, *, lock: bool = False) -> VaccineInventory:
    qs = VaccineInventory.objects.all()
    if lock:
        qs = qs.select_for_update()
    row = qs.filter(id=inventory_id).first()
    if row is None:
        raise NotFound('Inventory item not found.')
    if row.hospital_id != hospital_id:
        raise PermissionDenied('You do not have permission to modify this inventory item.')
    return row


def update_stock(user, hospital_id: int, inventory_id: int, quantity: int) -> VaccineInventory:
    with transaction.atomic():
        row = owned_inventory_or_raise(hospital_id, inventory_id, lock=True)
        row.stock_quantity = quantity
        row.save(update_fields=['stock_quantity', 'last_updated'])
    log_action(user=user, action='inventory_updated', object_type='VaccineInventory', object_id=row.id,
               detail={'stock_quantity': quantity})
    return row


def remove_inventory(user, hospital_id: int, inventory_id: int) -> None:
    with transaction.atomic():
        row = owned_inventory_or_raise(hospital_id, inventory_id, lock=True)
        row.delete()
    log_action(user=user, action='inventory_removed', object_type='VaccineInventory', object_id=inventory_id)


def expired_inventory(hospital_id: int, *, today: Optional[datetime.date] = None) -> list[VaccineInventory]:
    today = today or timezone.localdate()
    return list(
        VaccineInventory.objects.select_related('vaccine')
        .filter(hospital_id=hospital_id, expiry_date__lt=today)
        .order_by('expiry_date', 'id')
    )


def reviews_for_hospital(hospital_id: int) -> list[Review]:
    return list(
        Review.objects.select_related('user', 'doctor')
        .filter(hospital_id=hospital_id)
        .order_by('-created_at', '-id')
    )
