"""
Hospital administrator pages and the inventory JSON endpoints.

Pages are plain Django views behind :func:`hospital_admin_required`;
``update`` and ``remove`` are DRF views that answer with the JSON
envelope.
"""
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_POST
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from booking.guards import hospital_admin_required
from booking.models import Hospital
from booking.permissions import IsHospitalAdmin
from booking.serializers.inventory import InventoryAddSerializer, InventoryRemoveSerializer, InventoryUpdateSerializer
from booking.services import inventory
from booking.services.uploads import store_upload


@require_GET
@hospital_admin_required
def admin_dashboard(request):
    hospital_id = request.identity.hospital_id
    return render(request, 'booking/admin_dashboard.html', {
        'hospital': Hospital.objects.get(id=hospital_id),
        'counts': inventory.dashboard_counts(hospital_id),
    })


@require_GET
@hospital_admin_required
def inventory_page(request):
    return render(request, 'booking/inventory_admin.html', {
        'inventory': inventory.list_inventory(request.identity.hospital_id),
    })


@require_POST
@hospital_admin_required
def inventory_add(request):
    s = InventoryAddSerializer(data=request.POST)
    s.is_valid(raise_exception=True)
    image = ''
    if request.FILES.get('vaccine_image'):
        image = store_upload(request.FILES['vaccine_image'])
    inventory.add_inventory(request.user, request.identity.hospital_id, image=image, **s.validated_data)
    return redirect('/admin/inventory')


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsHospitalAdmin])
def inventory_update(request):
    s = InventoryUpdateSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    row = inventory.update_stock(request.user, request.identity.hospital_id,
                                 s.validated_data['inventory_id'], s.validated_data['quantity'])
    return Response({'success': True, 'inventory_id': row.id, 'stock_quantity': row.stock_quantity})


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsHospitalAdmin])
def inventory_remove(request):
    s = InventoryRemoveSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    inventory.remove_inventory(request.user, request.identity.hospital_id, s.validated_data['inventory_id'])
    return Response({'success': True})


@require_GET
@hospital_admin_required
def expired_vaccines(request):
    return render(request, 'booking/expired_vaccines.html', {
        'inventory': inventory.expired_inventory(request.identity.hospital_id),
    })


@require_GET
@hospital_admin_required
def hospital_reviews(request):
    return render(request, 'booking/reviews_admin.html', {
        'reviews': inventory.reviews_for_hospital(request.identity.hospital_id),
    })
