from typing import Optional

from rest_framework.exceptions import NotFound

from booking.models import Doctor, Hospital, Vaccine, VaccineInventory


def search_vaccines(*, search: Optional[str] = None, category: Optional[str] = None) -> list[Vaccine]:
    qs = Vaccine.objects.all()
    if search:
        qs = qs.filter(name__icontains=search)
    if category:
        qs = qs.filter(category=category)
    return list(qs.order_by('name', 'id'))


def vaccine_categories() -> list[str]:
    return list(
        Vaccine.objects.exclude(category='').order_by('category').values_list('category', flat=True).distinct()
    )


def hospitals_offering(vaccine_id: int, *, city: Optional[str] = None) -> list[Hospital]:
    qs = Hospital.objects.filter(inventory__vaccine_id=vaccine_id)
    if city:
        qs = qs.filter(location__icontains=city)
    return list(qs.distinct().order_by('name', 'id'))


def doctors_at(hospital_id: int) -> list[Doctor]:
    return list(Doctor.objects.filter(hospital_id=hospital_id).order_by('name', 'id'))


def hospital_offerings(hospital_id: int, doctor_id: int) -> tuple[Doctor, list[VaccineInventory]]:
    """Doctor and priced inventory shown on the booking page.

    Raises ``NotFound`` when the doctor does not work at the hospital or
    the hospital stocks nothing.
    """
    doctor = Doctor.objects.select_related('hospital').filter(id=doctor_id, hospital_id=hospital_id).first()
    if doctor is None:
        raise NotFound('Doctor not found at this hospital.')
    rows = list(
        VaccineInventory.objects.select_related('vaccine')
        .filter(hospital_id=hospital_id)
        .order_by('vaccine__name', 'id')
    )
    if not rows:
        raise NotFound('No vaccines are available at this hospital.')
    return doctor, rows


def vaccine_information() -> list[Vaccine]:
    """Vaccines that have an information record, with the record joined."""
    return list(
        Vaccine.objects.select_related('information')
        .filter(information__isnull=False)
        .order_by('name', 'id')
    )
