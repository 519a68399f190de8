import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import Client

pytestmark = pytest.mark.django_db


def test_upload_stores_generated_name(patient_client, settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    f = SimpleUploadedFile('report.pdf', b'%PDF-1.4 demo', content_type='application/pdf')
    r = patient_client.post('/upload', {'file': f})
    assert r.status_code == 200
    assert r['Content-Type'].startswith('text/plain')
    text = r.content.decode()
    assert text.startswith('File uploaded successfully: ')
    name = text.split(': ', 1)[1]
    assert name.endswith('.pdf')
    assert 'report' not in name
    assert (tmp_path / name).read_bytes() == b'%PDF-1.4 demo'


def test_upload_without_file_is_bad_request(patient_client):
    assert patient_client.post('/upload', {}).status_code == 400


def test_upload_rejects_unsupported_type(patient_client, settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    f = SimpleUploadedFile('tool.exe', b'MZ', content_type='application/x-msdownload')
    assert patient_client.post('/upload', {'file': f}).status_code == 400
    assert list(tmp_path.iterdir()) == []


def test_upload_rejects_oversized_file(patient_client, settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    settings.UPLOAD_MAX_MB = 0
    f = SimpleUploadedFile('big.png', b'x' * 1024, content_type='image/png')
    assert patient_client.post('/upload', {'file': f}).status_code == 400


def test_upload_requires_login():
    r = Client().post('/upload', {})
    assert r.status_code == 302
    assert r['Location'] == '/login'


def test_healthz():
    r = Client().get('/healthz')
    assert r.status_code == 200
    assert r.json() == {'ok': True, 'db': True}
