"""
Database models for the vaccine appointment service.

Patients (role ``user``) browse vaccines, find hospitals and doctors,
pay for and book appointments, review their visit and keep insurance
records.  Hospital administrators own exactly one :class:`Hospital` and
manage its :class:`VaccineInventory`; site administrators manage users,
hospitals and vaccines.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class User(AbstractUser):
    """Account with a role and optional hospital binding.

    ``hospital`` is only set for hospital administrators and records the
    hospital picked at registration.  The authoritative ownership link is
    :attr:`Hospital.admin`.  The role is fixed once the account exists.
    """
    ROLE_USER = 'user'
    ROLE_HOSPITAL_ADMIN = 'hospital_admin'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_USER, 'Patient'),
        (ROLE_HOSPITAL_ADMIN, 'Hospital administrator'),
        (ROLE_ADMIN, 'Site administrator'),
    ]
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER, db_index=True)
    hospital = models.ForeignKey(
        'Hospital', null=True, blank=True, on_delete=models.SET_NULL, related_name='staff'
    )
    phone = models.CharField(max_length=20, blank=True)
    address = models.CharField(max_length=255, blank=True)
    emergency_contact = models.CharField(max_length=100, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Hospital(models.Model):
    name = models.CharField(max_length=255)
    location = models.CharField(max_length=255, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    image_url = models.CharField(max_length=512, blank=True)
    # One administrator per hospital; the admin's inventory scope is derived from here.
    admin = models.OneToOneField(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='managed_hospital'
    )

    def __str__(self) -> str:
        return self.name


class Vaccine(models.Model):
    name = models.CharField(max_length=255, unique=True)
    vaccine_type = models.CharField(max_length=100, blank=True)
    category = models.CharField(max_length=100, blank=True, db_index=True)
    image_url = models.CharField(max_length=512, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.name


class VaccineInformation(models.Model):
    """Awareness material shown on the vaccine information page."""
    vaccine = models.OneToOneField(Vaccine, on_delete=models.CASCADE, related_name='information')
    how_it_works = models.TextField(blank=True)
    side_effects = models.TextField(blank=True)
    precautions = models.TextField(blank=True)
    effectiveness = models.TextField(blank=True)

    def __str__(self) -> str:
        return f"Information for {self.vaccine}"


class VaccineInventory(models.Model):
    """Priced, stocked association between one hospital and one vaccine."""
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='inventory')
    vaccine = models.ForeignKey(Vaccine, on_delete=models.CASCADE, related_name='inventory')
    stock_quantity = models.PositiveIntegerField(default=0)
    expiry_date = models.DateField(null=True, blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    notes = models.TextField(blank=True)
    image = models.CharField(max_length=255, blank=True)
    last_updated = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['hospital', 'vaccine'], name='unique_inventory_per_hospital'),
        ]
        indexes = [
            models.Index(fields=['hospital', 'expiry_date'], name='inventory_hospital_expiry_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.vaccine} @ {self.hospital} ({self.stock_quantity})"


class Doctor(models.Model):
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='doctors')
    name = models.CharField(max_length=255)
    specialization = models.CharField(max_length=255, blank=True)
    image_url = models.CharField(max_length=512, blank=True)

    def __str__(self) -> str:
        return self.name


class Appointment(models.Model):
    STATUS_CONFIRMED = 'confirmed'
    STATUS_CANCELED = 'canceled'
    STATUS_COMPLETED = 'completed'
    STATUS_CHOICES = (
        (STATUS_CONFIRMED, 'confirmed'),
        (STATUS_CANCELED, 'canceled'),
        (STATUS_COMPLETED, 'completed'),
    )

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='appointments')
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='appointments')
    vaccine = models.ForeignKey(Vaccine, on_delete=models.CASCADE, related_name='appointments')
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='appointments')
    appointment_date = models.DateTimeField()
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_CONFIRMED)
    # Checkout session id from the payment provider; replaying a success callback finds this row.
    payment_session_id = models.CharField(max_length=255, unique=True, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['user', 'appointment_date'], name='appointment_user_date_idx'),
        ]

    def __str__(self) -> str:
        return f"appointment {self.id} u={self.user_id} v={self.vaccine_id} @ {self.appointment_date:%F %H:%M}"


class PaymentSession(models.Model):
    """Checkout session that has been turned into an appointment.

    The row outlives the appointment: canceling deletes the appointment
    and leaves ``appointment`` empty, so the same payment cannot book
    again.
    """
    session_id = models.CharField(max_length=255, unique=True)
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='payment_sessions')
    appointment = models.OneToOneField(
        Appointment, null=True, blank=True, on_delete=models.SET_NULL, related_name='payment'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"payment {self.session_id} u={self.user_id} appt={self.appointment_id}"


class Notification(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_DELIVERED = 'delivered'
    STATUS_SENT = 'sent'
    STATUS_CHOICES = (
        (STATUS_PENDING, 'pending'),
        (STATUS_DELIVERED, 'delivered'),
        (STATUS_SENT, 'sent'),
    )

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='notifications')
    message = models.TextField()
    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    sent_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['user', 'sent_at'], name='notification_user_sent_idx')]

    def __str__(self) -> str:
        return f"notification {self.id} -> {self.user_id} ({self.status})"


class Review(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='reviews')
    hospital = models.ForeignKey(Hospital, on_delete=models.CASCADE, related_name='reviews')
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='reviews')
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    review_text = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['hospital', 'created_at'], name='review_hospital_created_idx')]

    def __str__(self) -> str:
        return f"review {self.id} h={self.hospital_id} ({self.rating})"


class InsuranceDetail(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='insurance_details')
    insurance_provider = models.CharField(max_length=255)
    policy_number = models.CharField(max_length=100)
    coverage_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    expiry_date = models.DateField(null=True, blank=True)

    def __str__(self) -> str:
        return f"{self.insurance_provider} #{self.policy_number}"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
        ]
