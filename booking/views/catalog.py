from django.shortcuts import render
from django.views.decorators.http import require_GET

from booking.guards import login_required
from booking.serializers.booking import CityFilterSerializer, VaccineFilterSerializer
from booking.services import catalog


@require_GET
@login_required
def vaccines(request):
    q = VaccineFilterSerializer(data=request.GET)
    q.is_valid(raise_exception=True)
    search = q.validated_data.get('search') or ''
    category = q.validated_data.get('category') or ''
    return render(request, 'booking/vaccines.html', {
        'vaccines': catalog.search_vaccines(search=search, category=category),
        'categories': catalog.vaccine_categories(),
        'search': search,
        'category': category,
        'payment_failed': q.validated_data['payment_failed'],
    })


@require_GET
@login_required
def vaccine_hospitals(request, vaccine_id: int):
    q = CityFilterSerializer(data=request.GET)
    q.is_valid(raise_exception=True)
    city = q.validated_data.get('city') or ''
    return render(request, 'booking/hospitals.html', {
        'hospitals': catalog.hospitals_offering(vaccine_id, city=city),
        'vaccine_id': vaccine_id,
        'city': city,
    })


@require_GET
@login_required
def hospital_doctors(request, hospital_id: int):
    return render(request, 'booking/doctors.html', {
        'doctors': catalog.doctors_at(hospital_id),
        'hospital_id': hospital_id,
    })


@require_GET
@login_required
def hospital_inventory(request, hospital_id: int, doctor_id: int):
    doctor, rows = catalog.hospital_offerings(hospital_id, doctor_id)
    return render(request, 'booking/inventory.html', {
        'doctor': doctor,
        'hospital': doctor.hospital,
        'inventory': rows,
    })


@require_GET
@login_required
def vaccine_info(request):
    return render(request, 'booking/vaccine_info.html', {'vaccines': catalog.vaccine_information()})
