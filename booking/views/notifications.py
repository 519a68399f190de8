from django.shortcuts import render
from django.views.decorators.http import require_GET

from booking.guards import login_required
from booking.services.notifications import list_and_mark_delivered


@require_GET
@login_required
def notifications(request):
    return render(request, 'booking/notifications.html', {
        'notifications': list_and_mark_delivered(request.identity.user_id),
    })
