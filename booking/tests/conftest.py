import datetime
from decimal import Decimal

import pytest
from django.core.cache import cache
from django.test import Client
from django.utils import timezone

from booking.models import Doctor, Hospital, User, Vaccine, VaccineInventory

PASSWORD = 'S3cure-Passw0rd!'


@pytest.fixture(autouse=True)
def _fast_hasher_and_clean_cache(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']
    settings.STRIPE_SECRET_KEY = 'sk_test_dummy'
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def hospital(db):
    return Hospital.objects.create(name='City General Hospital', location='Mumbai, Maharashtra')


@pytest.fixture
def other_hospital(db):
    return Hospital.objects.create(name='Lakeview Medical Centre', location='Bengaluru, Karnataka')


@pytest.fixture
def doctor(hospital):
    return Doctor.objects.create(hospital=hospital, name='Dr. Asha Kulkarni', specialization='Paediatrics')


@pytest.fixture
def vaccine(db):
    return Vaccine.objects.create(name='Covishield', vaccine_type='Viral vector', category='COVID-19')


@pytest.fixture
def stock(hospital, vaccine):
    return VaccineInventory.objects.create(
        hospital=hospital, vaccine=vaccine, stock_quantity=5, price=Decimal('780.00'),
        expiry_date=timezone.localdate() + datetime.timedelta(days=90),
    )


@pytest.fixture
def patient(db):
    return User.objects.create_user(username='patient1', email='patient1@example.com', password=PASSWORD)


@pytest.fixture
def other_patient(db):
    return User.objects.create_user(username='patient2', email='patient2@example.com', password=PASSWORD)


def make_hospital_admin(username, hospital):
    user = User.objects.create_user(
        username=username, email=f'{username}@example.com', password=PASSWORD,
        role=User.ROLE_HOSPITAL_ADMIN, hospital=hospital,
    )
    hospital.admin = user
    hospital.save(update_fields=['admin'])
    return user


@pytest.fixture
def hospital_admin(hospital):
    return make_hospital_admin('hadmin1', hospital)


@pytest.fixture
def site_admin(db):
    return User.objects.create_user(
        username='siteadmin', email='siteadmin@example.com', password=PASSWORD, role=User.ROLE_ADMIN,
    )


def logged_in(user):
    c = Client()
    c.force_login(user)
    return c


@pytest.fixture
def patient_client(patient):
    return logged_in(patient)


@pytest.fixture
def hospital_admin_client(hospital_admin):
    return logged_in(hospital_admin)


@pytest.fixture
def site_admin_client(site_admin):
    return logged_in(site_admin)
