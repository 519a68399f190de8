from rest_framework.exceptions import NotFound, PermissionDenied

from booking.models import InsuranceDetail


def list_for_user(user_id: int) -> list[InsuranceDetail]:
    return list(InsuranceDetail.objects.filter(user_id=user_id).order_by('expiry_date', 'id'))


def owned_or_raise(user_id: int, insurance_id: int) -> InsuranceDetail:
    obj = InsuranceDetail.objects.filter(id=insurance_id).first()
    if obj is None:
        raise NotFound('Insurance record not found.')
    if obj.user_id != user_id:
        raise PermissionDenied('You do not have permission to modify this insurance record.')
    return obj


def add(user, **fields) -> InsuranceDetail:
    return InsuranceDetail.objects.create(user=user, **fields)


def update(user, insurance_id: int, **fields) -> InsuranceDetail:
    obj = owned_or_raise(user.id, insurance_id)
    for name, value in fields.items():
        setattr(obj, name, value)
    obj.save()
    return obj


def delete(user, insurance_id: int) -> None:
    owned_or_raise(user.id, insurance_id).delete()
