"""
Patient self-service pages: reviews, insurance records and profile.
"""
from django.contrib import messages
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from booking.guards import login_required
from booking.serializers.account import InsuranceSerializer, ProfileSerializer, ReviewSerializer
from booking.serializers.booking import AppointmentQuerySerializer
from booking.services import appointments, insurance, reviews


@require_GET
@login_required
def review_page(request):
    q = AppointmentQuerySerializer(data=request.GET)
    q.is_valid(raise_exception=True)
    appt = appointments.get_owned(request.identity.user_id, q.validated_data['appointment_id'])
    return render(request, 'booking/review.html', {'appointment': appt})


@require_POST
@login_required
def submit_review(request):
    s = ReviewSerializer(data=request.POST)
    s.is_valid(raise_exception=True)
    reviews.submit_review(request.user, **s.validated_data)
    messages.success(request, 'Thank you for your review.')
    return redirect('/vaccines')


@require_GET
@login_required
def insurance_list(request):
    return render(request, 'booking/insurance.html', {
        'insurance': insurance.list_for_user(request.identity.user_id),
    })


@require_POST
@login_required
def insurance_add(request):
    s = InsuranceSerializer(data=request.POST)
    s.is_valid(raise_exception=True)
    insurance.add(request.user, **s.validated_data)
    return redirect('/insurance')


@require_http_methods(['GET', 'POST'])
@login_required
def insurance_edit(request, insurance_id: int):
    if request.method == 'GET':
        obj = insurance.owned_or_raise(request.identity.user_id, insurance_id)
        return render(request, 'booking/edit_insurance.html', {'item': obj})
    s = InsuranceSerializer(data=request.POST)
    s.is_valid(raise_exception=True)
    insurance.update(request.user, insurance_id, **s.validated_data)
    return redirect('/insurance')


@require_POST
@login_required
def insurance_delete(request, insurance_id: int):
    insurance.delete(request.user, insurance_id)
    return redirect('/insurance')


@require_http_methods(['GET', 'POST'])
@login_required
def profile(request):
    if request.method == 'POST':
        return update_profile(request)
    return render(request, 'booking/profile.html', {'profile': request.user})


@require_POST
@login_required
def update_profile(request):
    s = ProfileSerializer(data=request.POST)
    s.is_valid(raise_exception=True)
    user = request.user
    for name, value in s.validated_data.items():
        setattr(user, name, value)
    user.save(update_fields=[*s.validated_data.keys(), 'updated_at'])
    messages.success(request, 'Profile updated successfully.')
    return redirect('/profile')
