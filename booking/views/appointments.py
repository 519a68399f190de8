from django.shortcuts import redirect, render
from django.utils import timezone
from django.views.decorators.http import require_GET, require_POST

from booking.guards import login_required
from booking.serializers.booking import RescheduleSerializer
from booking.services import appointments


@require_GET
@login_required
def my_appointments(request):
    return render(request, 'booking/my_appointments.html', {
        'appointments': appointments.list_for_user(request.identity.user_id),
        'today': timezone.localdate(),
    })


@require_POST
@login_required
def cancel_appointment(request, appointment_id: int):
    appointments.cancel(request.user, appointment_id)
    return redirect('/my-appointments')


@require_POST
@login_required
def reschedule_appointment(request):
    s = RescheduleSerializer(data=request.POST)
    s.is_valid(raise_exception=True)
    appointments.reschedule(request.user, s.validated_data['appointment_id'], s.validated_data['new_appointment_date'])
    return redirect('/my-appointments')
