import datetime
from urllib.parse import parse_qs, urlsplit

import pytest
from django.test import Client
from django.utils import timezone

from booking.models import Appointment, Notification, PaymentSession, VaccineInventory
from booking.services import payments

pytestmark = pytest.mark.django_db

CHECKOUT_URL = 'https://checkout.stripe.com/c/pay/cs_test_1'


def future_date(days=3):
    return timezone.localdate() + datetime.timedelta(days=days)


@pytest.fixture
def captured(monkeypatch):
    calls = {}

    def fake_create(**kwargs):
        calls.update(kwargs)
        return payments.CheckoutSession(id='cs_test_1', url=CHECKOUT_URL)

    monkeypatch.setattr(payments, 'create_checkout_session', fake_create)
    return calls


@pytest.fixture
def paid(monkeypatch, patient):
    def fake_retrieve(session_id):
        return payments.CheckoutSession(id=session_id, payment_status='paid', client_reference_id=str(patient.id))

    monkeypatch.setattr(payments, 'retrieve_checkout_session', fake_retrieve)


def checkout_form(stock, doctor, **overrides):
    form = {
        'vaccine_id': stock.vaccine_id,
        'hospital_id': stock.hospital_id,
        'doctor_id': doctor.id,
        'appointment_date': future_date().isoformat(),
        'appointment_time': '10:30',
    }
    form.update(overrides)
    return form


def success_query(stock, doctor, session_id='cs_test_1', **overrides):
    q = checkout_form(stock, doctor, **overrides)
    q['session_id'] = session_id
    return q


def test_checkout_redirects_to_hosted_page(patient_client, patient, stock, doctor, captured):
    r = patient_client.post('/create-checkout-session', checkout_form(stock, doctor))
    assert r.status_code == 303
    assert r['Location'] == CHECKOUT_URL
    assert captured['amount'] == stock.price
    assert captured['product_name'] == 'Vaccine Appointment: Covishield'
    assert captured['client_reference_id'] == str(patient.id)
    assert captured['cancel_url'].endswith('/vaccines?payment_failed=true')

    success = captured['success_url']
    assert success.endswith('&session_id={CHECKOUT_SESSION_ID}')
    params = parse_qs(urlsplit(success).query)
    assert urlsplit(success).path == '/success'
    assert params['appointment_date'] == [future_date().isoformat()]
    assert params['appointment_time'] == ['10:30']
    assert params['doctor_id'] == [str(doctor.id)]
    assert params['hospital_id'] == [str(stock.hospital_id)]
    assert params['vaccine_id'] == [str(stock.vaccine_id)]


def test_checkout_requires_login(stock, doctor, captured):
    r = Client().post('/create-checkout-session', checkout_form(stock, doctor))
    assert r.status_code == 302
    assert r['Location'] == '/login'
    assert captured == {}


def test_checkout_rejects_past_date(patient_client, stock, doctor, captured):
    yesterday = (timezone.localdate() - datetime.timedelta(days=1)).isoformat()
    r = patient_client.post('/create-checkout-session', checkout_form(stock, doctor, appointment_date=yesterday))
    assert r.status_code == 400
    assert captured == {}


def test_checkout_without_inventory_is_not_found(patient_client, stock, doctor, captured):
    r = patient_client.post('/create-checkout-session', checkout_form(stock, doctor, vaccine_id=9999))
    assert r.status_code == 404
    assert captured == {}


def test_checkout_out_of_stock_is_conflict(patient_client, stock, doctor, captured):
    VaccineInventory.objects.filter(id=stock.id).update(stock_quantity=0)
    r = patient_client.post('/create-checkout-session', checkout_form(stock, doctor))
    assert r.status_code == 409
    assert captured == {}


def test_checkout_provider_failure_is_bad_gateway(patient_client, stock, doctor, monkeypatch):
    def boom(**kwargs):
        raise payments.PaymentFailed()

    monkeypatch.setattr(payments, 'create_checkout_session', boom)
    r = patient_client.post('/create-checkout-session', checkout_form(stock, doctor))
    assert r.status_code == 502


def test_success_creates_exactly_one_confirmed_appointment(patient_client, patient, stock, doctor, paid):
    r = patient_client.get('/success', success_query(stock, doctor))
    appt = Appointment.objects.get()
    assert r.status_code == 302
    assert r['Location'] == f'/review?appointment_id={appt.id}'
    assert appt.user_id == patient.id
    assert appt.status == Appointment.STATUS_CONFIRMED
    assert appt.payment_session_id == 'cs_test_1'
    local = timezone.localtime(appt.appointment_date)
    assert local.date() == future_date()
    assert local.time() == datetime.time(10, 30)

    stock.refresh_from_db()
    assert stock.stock_quantity == 4
    n = Notification.objects.get(user=patient)
    assert n.status == Notification.STATUS_PENDING


def test_success_replay_is_idempotent(patient_client, stock, doctor, paid):
    first = patient_client.get('/success', success_query(stock, doctor))
    second = patient_client.get('/success', success_query(stock, doctor))
    assert Appointment.objects.count() == 1
    assert first['Location'] == second['Location']
    stock.refresh_from_db()
    assert stock.stock_quantity == 4


def test_success_replay_after_cancel_does_not_rebook(patient_client, stock, doctor, paid):
    patient_client.get('/success', success_query(stock, doctor))
    appt = Appointment.objects.get()
    patient_client.post(f'/cancel-appointment/{appt.id}')

    r = patient_client.get('/success', success_query(stock, doctor))
    assert r.status_code == 409
    assert Appointment.objects.count() == 0
    stock.refresh_from_db()
    assert stock.stock_quantity == 5
    used = PaymentSession.objects.get(session_id='cs_test_1')
    assert used.appointment_id is None


def test_success_requires_login(stock, doctor, paid):
    r = Client().get('/success', success_query(stock, doctor))
    assert r.status_code == 302
    assert r['Location'] == '/login'
    assert Appointment.objects.count() == 0


def test_success_rejects_unpaid_session(patient_client, patient, stock, doctor, monkeypatch):
    monkeypatch.setattr(payments, 'retrieve_checkout_session', lambda sid: payments.CheckoutSession(
        id=sid, payment_status='unpaid', client_reference_id=str(patient.id)))
    r = patient_client.get('/success', success_query(stock, doctor))
    assert r.status_code == 402
    assert Appointment.objects.count() == 0


def test_success_rejects_session_of_another_user(stock, doctor, other_patient, paid):
    c = Client()
    c.force_login(other_patient)
    r = c.get('/success', success_query(stock, doctor))
    assert r.status_code == 403
    assert Appointment.objects.count() == 0


def test_replay_by_another_user_is_forbidden(patient_client, stock, doctor, other_patient, paid):
    patient_client.get('/success', success_query(stock, doctor))
    c = Client()
    c.force_login(other_patient)
    r = c.get('/success', success_query(stock, doctor))
    assert r.status_code == 403
    assert Appointment.objects.count() == 1


def test_success_when_stock_ran_out_creates_nothing(patient_client, stock, doctor, paid):
    VaccineInventory.objects.filter(id=stock.id).update(stock_quantity=0)
    r = patient_client.get('/success', success_query(stock, doctor))
    assert r.status_code == 409
    assert Appointment.objects.count() == 0
    assert Notification.objects.count() == 0


def test_success_with_missing_params_is_bad_request(patient_client, paid):
    r = patient_client.get('/success', {'session_id': 'cs_test_1'})
    assert r.status_code == 400


def test_payment_failure_returns_to_catalog(patient_client):
    r = patient_client.get('/payment-failure')
    assert r.status_code == 302
    assert r['Location'] == '/vaccines?payment_failed=true'
