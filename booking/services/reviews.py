import bleach
from rest_framework.exceptions import NotFound

from booking.models import Doctor, Review


def submit_review(user, *, hospital_id: int, doctor_id: int, rating: int, review_text: str = '') -> Review:
    if not Doctor.objects.filter(id=doctor_id, hospital_id=hospital_id).exists():
        raise NotFound('Doctor not found at this hospital.')
    return Review.objects.create(
        user=user, hospital_id=hospital_id, doctor_id=doctor_id, rating=rating,
        review_text=bleach.clean((review_text or '').strip(), strip=True),
    )
