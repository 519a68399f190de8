import pytest
from django.test import Client

from booking.models import AuditEvent, Hospital, User
from booking.tests.conftest import PASSWORD

pytestmark = pytest.mark.django_db


def test_root_redirects_to_login():
    r = Client().get('/')
    assert r.status_code == 302
    assert r['Location'] == '/login'


@pytest.mark.parametrize('role,landing', [
    (User.ROLE_USER, '/vaccines'),
    (User.ROLE_HOSPITAL_ADMIN, '/admin-dashboard'),
    (User.ROLE_ADMIN, '/admin/dashboard'),
])
def test_login_redirects_by_role(role, landing):
    User.objects.create_user(username='someone', email='someone@example.com', password=PASSWORD, role=role)
    r = Client().post('/login', {'username': 'someone', 'password': PASSWORD})
    assert r.status_code == 302
    assert r['Location'] == landing


def test_login_failure_rerenders_with_warning(patient):
    c = Client()
    r = c.post('/login', {'username': 'patient1', 'password': 'wrong-password'})
    assert r.status_code == 200
    assert r.context['warning'] == 'Invalid username or password.'
    assert '_auth_user_id' not in c.session


def test_login_unknown_user_gets_same_warning():
    r = Client().post('/login', {'username': 'nobody', 'password': 'whatever'})
    assert r.context['warning'] == 'Invalid username or password.'


def test_login_attempts_are_rate_limited(patient):
    c = Client()
    for _ in range(10):
        r = c.post('/login', {'username': 'patient1', 'password': 'wrong-password'})
        assert r.status_code == 200
    r = c.post('/login', {'username': 'patient1', 'password': PASSWORD})
    assert r.status_code == 429
    assert r.context['warning'] == 'Too many login attempts. Please try again later.'
    assert 'Retry-After' in r
    assert '_auth_user_id' not in c.session
    assert AuditEvent.objects.filter(action='login').count() == 10


def test_register_patient_then_login():
    c = Client()
    r = c.post('/register', {
        'username': 'newpatient', 'email': 'New@Example.com', 'password': PASSWORD, 'role': 'user',
    })
    assert r.status_code == 302
    assert r['Location'] == '/login'
    u = User.objects.get(username='newpatient')
    assert u.role == User.ROLE_USER
    assert u.email == 'new@example.com'
    assert u.check_password(PASSWORD)
    assert u.password != PASSWORD


def test_register_duplicate_email_rerenders_and_creates_nothing(patient):
    before = User.objects.count()
    r = Client().post('/register', {
        'username': 'another', 'email': 'patient1@example.com', 'password': PASSWORD, 'role': 'user',
    })
    assert r.status_code == 200
    assert 'already exists' in r.context['warning']
    assert User.objects.count() == before
    assert not User.objects.filter(username='another').exists()


def test_register_rejects_invalid_role():
    r = Client().post('/register', {
        'username': 'sneaky', 'email': 'sneaky@example.com', 'password': PASSWORD, 'role': 'admin',
    })
    assert r.status_code == 400
    assert not User.objects.filter(username='sneaky').exists()


def test_register_rejects_weak_password():
    r = Client().post('/register', {
        'username': 'weak', 'email': 'weak@example.com', 'password': '123', 'role': 'user',
    })
    assert r.status_code == 400
    assert 'password' in r.context['warning']
    assert not User.objects.filter(username='weak').exists()


def test_register_hospital_admin_claims_hospital(hospital):
    r = Client().post('/register', {
        'username': 'hadmin', 'email': 'hadmin@example.com', 'password': PASSWORD,
        'role': 'hospital_admin', 'hospital_id': hospital.id,
    })
    assert r.status_code == 302
    user = User.objects.get(username='hadmin')
    hospital.refresh_from_db()
    assert hospital.admin_id == user.id
    assert user.hospital_id == hospital.id


def test_register_hospital_admin_cannot_claim_taken_hospital(hospital, hospital_admin):
    r = Client().post('/register', {
        'username': 'hadmin2', 'email': 'hadmin2@example.com', 'password': PASSWORD,
        'role': 'hospital_admin', 'hospital_id': hospital.id,
    })
    assert r.status_code == 400
    assert not User.objects.filter(username='hadmin2').exists()
    assert Hospital.objects.get(id=hospital.id).admin_id == hospital_admin.id


def test_register_page_lists_only_unclaimed_hospitals(hospital, other_hospital, hospital_admin):
    r = Client().get('/register')
    assert [h.id for h in r.context['hospitals']] == [other_hospital.id]


def test_logout_flushes_session(patient_client):
    r = patient_client.get('/logout')
    assert r['Location'] == '/login'
    r = patient_client.get('/my-appointments')
    assert r.status_code == 302
    assert r['Location'] == '/login'


@pytest.mark.parametrize('path', [
    '/vaccines', '/my-appointments', '/notifications', '/insurance', '/profile',
    '/admin-dashboard', '/admin/inventory', '/admin/dashboard',
])
def test_pages_redirect_anonymous_to_login(path):
    r = Client().get(path)
    assert r.status_code == 302
    assert r['Location'] == '/login'


@pytest.mark.parametrize('path', ['/admin-dashboard', '/admin/inventory', '/admin/inventory/expired', '/admin/reviews'])
def test_patient_cannot_open_hospital_admin_pages(patient_client, path):
    r = patient_client.get(path)
    assert r.status_code == 403


def test_hospital_admin_cannot_open_site_admin_console(hospital_admin_client):
    assert hospital_admin_client.get('/admin/dashboard').status_code == 403


def test_hospital_admin_without_hospital_is_forbidden():
    user = User.objects.create_user(
        username='orphan', email='orphan@example.com', password=PASSWORD, role=User.ROLE_HOSPITAL_ADMIN,
    )
    c = Client()
    c.force_login(user)
    r = c.get('/admin/inventory')
    assert r.status_code == 403
    assert 'No hospital' in r.context['message']


def test_non_numeric_id_is_not_found(patient_client):
    assert patient_client.get('/hospitals/abc/doctors').status_code == 404


def test_login_attempts_are_audited(patient):
    Client().post('/login', {'username': 'patient1', 'password': 'nope'}, REMOTE_ADDR='10.0.0.5')
    Client().post('/login', {'username': 'patient1', 'password': PASSWORD})
    failed, ok = AuditEvent.objects.filter(action='login').order_by('id')
    assert failed.user is None
    assert failed.detail == {'result': 'fail', 'username': 'patient1', 'ip': '10.0.0.5'}
    assert ok.user_id == patient.id
    assert ok.detail['result'] == 'ok'
