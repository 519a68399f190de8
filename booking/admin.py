"""
Django admin registrations for the booking models.

The Django admin is mounted at ``/django-admin/`` so that ``/admin/...``
stays free for the hospital and site administration pages.
"""

from django.contrib import admin

from .models import (
    User,
    Hospital,
    Vaccine,
    VaccineInformation,
    VaccineInventory,
    Doctor,
    Appointment,
    PaymentSession,
    Notification,
    Review,
    InsuranceDetail,
    AuditEvent,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'email', 'role', 'hospital', 'is_staff', 'is_superuser')
    list_filter = ('role',)
    search_fields = ('username', 'email')


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'location', 'admin')
    search_fields = ('name', 'location')


class VaccineInformationInline(admin.StackedInline):
    model = VaccineInformation
    extra = 0


@admin.register(Vaccine)
class VaccineAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'vaccine_type', 'category')
    list_filter = ('category',)
    search_fields = ('name',)
    inlines = [VaccineInformationInline]


@admin.register(VaccineInventory)
class VaccineInventoryAdmin(admin.ModelAdmin):
    list_display = ('hospital', 'vaccine', 'stock_quantity', 'price', 'expiry_date', 'last_updated')
    list_filter = ('hospital',)
    search_fields = ('vaccine__name', 'hospital__name')


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('name', 'specialization', 'hospital')
    list_filter = ('hospital',)
    search_fields = ('name',)


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'vaccine', 'hospital', 'doctor', 'appointment_date', 'status')
    list_filter = ('status', 'hospital')
    search_fields = ('user__username', 'payment_session_id')


@admin.register(PaymentSession)
class PaymentSessionAdmin(admin.ModelAdmin):
    list_display = ('session_id', 'user', 'appointment', 'created_at')
    search_fields = ('session_id', 'user__username')


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('user', 'status', 'sent_at')
    list_filter = ('status',)


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('hospital', 'doctor', 'user', 'rating', 'created_at')
    list_filter = ('rating', 'hospital')


@admin.register(InsuranceDetail)
class InsuranceDetailAdmin(admin.ModelAdmin):
    list_display = ('user', 'insurance_provider', 'policy_number', 'coverage_amount', 'expiry_date')
    search_fields = ('insurance_provider', 'policy_number', 'user__username')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('action', 'user', 'object_type', 'object_id', 'created_at')
    list_filter = ('action', 'object_type')
    readonly_fields = ('user', 'action', 'object_type', 'object_id', 'detail', 'created_at')
