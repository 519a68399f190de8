from django.shortcuts import render
from django.views.decorators.http import require_GET
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from booking.guards import site_admin_required
from booking.permissions import IsSiteAdmin
from booking.services import site_admin


@require_GET
@site_admin_required
def dashboard(request):
    return render(request, 'booking/site_admin_dashboard.html', site_admin.overview())


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsSiteAdmin])
def delete_user(request, user_id: int):
    site_admin.delete_user(request.user, user_id)
    return Response({'success': True})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsSiteAdmin])
def delete_hospital(request, hospital_id: int):
    site_admin.delete_hospital(request.user, hospital_id)
    return Response({'success': True})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsSiteAdmin])
def delete_vaccine(request, vaccine_id: int):
    site_admin.delete_vaccine(request.user, vaccine_id)
    return Response({'success': True})
