import pytest

from booking.models import Doctor, Hospital, Vaccine, VaccineInformation, VaccineInventory

pytestmark = pytest.mark.django_db


@pytest.fixture
def catalog(db):
    Vaccine.objects.create(name='Covishield', category='COVID-19')
    Vaccine.objects.create(name='Covaxin', category='COVID-19')
    Vaccine.objects.create(name='Influenza Quadrivalent', category='Influenza')
    Vaccine.objects.create(name='COVID Nasal', category='Trial')


def names(response):
    return sorted(v.name for v in response.context['vaccines'])


def test_search_is_case_insensitive_substring(patient_client, catalog):
    r = patient_client.get('/vaccines', {'search': 'cov'})
    assert names(r) == ['COVID Nasal', 'Covaxin', 'Covishield']


def test_category_filter_is_exact(patient_client, catalog):
    r = patient_client.get('/vaccines', {'category': 'COVID'})
    assert names(r) == []
    r = patient_client.get('/vaccines', {'category': 'COVID-19'})
    assert names(r) == ['Covaxin', 'Covishield']


def test_search_and_category_combine(patient_client, catalog):
    r = patient_client.get('/vaccines', {'search': 'COV', 'category': 'Trial'})
    assert names(r) == ['COVID Nasal']


def test_no_filters_lists_everything(patient_client, catalog):
    r = patient_client.get('/vaccines')
    assert len(r.context['vaccines']) == 4
    assert r.context['payment_failed'] is False


def test_payment_failed_banner(patient_client, catalog):
    r = patient_client.get('/vaccines', {'payment_failed': 'true'})
    assert r.context['payment_failed'] is True
    assert b'Payment failed' in r.content


def test_hospitals_for_vaccine_with_city_filter(patient_client, stock, vaccine, other_hospital):
    VaccineInventory.objects.create(hospital=other_hospital, vaccine=vaccine, stock_quantity=1, price=100)
    Hospital.objects.create(name='No Stock Clinic', location='Mumbai')
    r = patient_client.get(f'/vaccines/{vaccine.id}/hospitals')
    assert {h.name for h in r.context['hospitals']} == {'City General Hospital', 'Lakeview Medical Centre'}
    r = patient_client.get(f'/vaccines/{vaccine.id}/hospitals', {'city': 'mumbai'})
    assert [h.name for h in r.context['hospitals']] == ['City General Hospital']


def test_hospitals_for_unknown_vaccine_is_empty(patient_client):
    r = patient_client.get('/vaccines/9999/hospitals')
    assert r.status_code == 200
    assert r.context['hospitals'] == []


def test_doctors_at_hospital(patient_client, doctor, other_hospital):
    Doctor.objects.create(hospital=other_hospital, name='Dr. Elsewhere')
    r = patient_client.get(f'/hospitals/{doctor.hospital_id}/doctors')
    assert [d.name for d in r.context['doctors']] == ['Dr. Asha Kulkarni']


def test_inventory_page_shows_priced_stock(patient_client, doctor, stock):
    r = patient_client.get(f'/hospitals/{doctor.hospital_id}/doctors/{doctor.id}')
    assert r.status_code == 200
    rows = r.context['inventory']
    assert [(row.vaccine.name, row.price) for row in rows] == [('Covishield', stock.price)]
    assert b'/create-checkout-session' in r.content


def test_inventory_page_rejects_doctor_from_other_hospital(patient_client, stock, other_hospital):
    stranger = Doctor.objects.create(hospital=other_hospital, name='Dr. Stranger')
    r = patient_client.get(f'/hospitals/{stock.hospital_id}/doctors/{stranger.id}')
    assert r.status_code == 404


def test_inventory_page_404_when_hospital_has_no_stock(patient_client, doctor):
    r = patient_client.get(f'/hospitals/{doctor.hospital_id}/doctors/{doctor.id}')
    assert r.status_code == 404


def test_vaccine_info_joins_information(patient_client, vaccine):
    Vaccine.objects.create(name='Without Info')
    VaccineInformation.objects.create(vaccine=vaccine, how_it_works='Adenovirus vector.')
    r = patient_client.get('/vaccine-info')
    assert [v.name for v in r.context['vaccines']] == ['Covishield']
    assert b'Adenovirus vector.' in r.content
