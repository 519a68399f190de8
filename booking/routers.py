"""
URL mappings for the booking site.

Trailing slashes are deliberately omitted; ``APPEND_SLASH`` is off.
Numeric ids use the ``int`` converter so a non-numeric id is a 404.
"""
from django.urls import include, path

from .views import (
    account, appointments, auth, booking, catalog, health, inventory, notifications, site_admin, uploads,
)

urlpatterns = [
    path('', auth.index, name='index'),
    path('login', auth.login_page, name='login'),
    path('register', auth.register_page, name='register'),
    path('logout', auth.logout_page, name='logout'),

    # Catalog
    path('vaccines', catalog.vaccines, name='vaccines'),
    path('vaccines/<int:vaccine_id>/hospitals', catalog.vaccine_hospitals, name='vaccine-hospitals'),
    path('hospitals/<int:hospital_id>/doctors', catalog.hospital_doctors, name='hospital-doctors'),
    path('hospitals/<int:hospital_id>/doctors/<int:doctor_id>', catalog.hospital_inventory, name='hospital-inventory'),
    path('vaccine-info', catalog.vaccine_info, name='vaccine-info'),

    # Booking and payment
    path('create-checkout-session', booking.create_checkout_session, name='create-checkout-session'),
    path('success', booking.payment_success, name='payment-success'),
    path('payment-failure', booking.payment_failure, name='payment-failure'),

    # Appointments
    path('my-appointments', appointments.my_appointments, name='my-appointments'),
    path('cancel-appointment/<int:appointment_id>', appointments.cancel_appointment, name='cancel-appointment'),
    path('reschedule-appointment', appointments.reschedule_appointment, name='reschedule-appointment'),
    path('notifications', notifications.notifications, name='notifications'),

    # Reviews, insurance, profile
    path('review', account.review_page, name='review'),
    path('submit-review', account.submit_review, name='submit-review'),
    path('insurance', account.insurance_list, name='insurance'),
    path('add-insurance', account.insurance_add, name='add-insurance'),
    path('insurance/edit/<int:insurance_id>', account.insurance_edit, name='edit-insurance'),
    path('insurance/delete/<int:insurance_id>', account.insurance_delete, name='delete-insurance'),
    path('profile', account.profile, name='profile'),
    path('update-profile', account.update_profile, name='update-profile'),

    # Hospital administration
    path('admin-dashboard', inventory.admin_dashboard, name='admin-dashboard'),
    path('admin/inventory', inventory.inventory_page, name='inventory'),
    path('admin/inventory/add', inventory.inventory_add, name='inventory-add'),
    path('admin/inventory/update', inventory.inventory_update, name='inventory-update'),
    path('admin/inventory/remove', inventory.inventory_remove, name='inventory-remove'),
    path('admin/inventory/expired', inventory.expired_vaccines, name='inventory-expired'),
    path('admin/reviews', inventory.hospital_reviews, name='hospital-reviews'),

    # Site administration
    path('admin/dashboard', site_admin.dashboard, name='site-admin-dashboard'),
    path('admin/users/delete/<int:user_id>', site_admin.delete_user, name='delete-user'),
    path('admin/hospitals/delete/<int:hospital_id>', site_admin.delete_hospital, name='delete-hospital'),
    path('admin/vaccines/delete/<int:vaccine_id>', site_admin.delete_vaccine, name='delete-vaccine'),

    # Operations
    path('upload', uploads.upload, name='upload'),
    path('healthz', health.healthz, name='healthz'),
    path('', include('django_prometheus.urls')),
]
