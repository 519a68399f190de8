# booking/management/commands/ensure_test_users.py
from django.core.management.base import BaseCommand
from django.contrib.auth.hashers import make_password
from django.db import transaction

from booking.models import Hospital, User

TEST_PASSWORD = "VaxBook-Test-2024"

TEST_SET = [
    ("siteadmin", "admin"),
    ("hospitaladmin", "hospital_admin"),
    ("patient1", "user"),
]


class Command(BaseCommand):
    help = f"Ensure one test user per role exists with password={TEST_PASSWORD} (idempotent)."

    @transaction.atomic
    def handle(self, *args, **opts):
        for username, role in TEST_SET:
            u, created = User.objects.get_or_create(
                username=username,
                defaults={
                    "email": f"{username}@example.com",
                    "role": role,
                    "password": make_password(TEST_PASSWORD),
                    "is_active": True,
                },
            )
            if not created:
                u.password = make_password(TEST_PASSWORD)
                u.role = role
                u.is_active = True
                u.save(update_fields=["password", "role", "is_active"])
            if role == User.ROLE_HOSPITAL_ADMIN:
                self._bind_hospital(u)
            self.stdout.write(self.style.SUCCESS(f"ok: {username} ({role})"))
        self.stdout.write(self.style.SUCCESS("All test users ensured."))

    def _bind_hospital(self, user):
        hospital = Hospital.objects.filter(admin=user).first()
        if hospital is None:
            hospital = Hospital.objects.filter(admin__isnull=True).order_by("id").first()
        if hospital is None:
            hospital = Hospital.objects.create(name="Test General Hospital", location="Pune")
        hospital.admin = user
        hospital.save(update_fields=["admin"])
        if user.hospital_id != hospital.id:
            user.hospital = hospital
            user.save(update_fields=["hospital"])
