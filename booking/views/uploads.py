from django.http import HttpResponse
from django.views.decorators.http import require_POST
from rest_framework.exceptions import ValidationError

from booking.guards import login_required
from booking.services.uploads import store_upload


@require_POST
@login_required
def upload(request):
    f = request.FILES.get('file')
    if f is None:
        raise ValidationError({'file': 'No file uploaded.'})
    name = store_upload(f)
    return HttpResponse(f'File uploaded successfully: {name}', content_type='text/plain')
