import pytest

from booking.models import Notification
from booking.services.notifications import notify

pytestmark = pytest.mark.django_db


def test_notifications_newest_first_then_marked_delivered(patient_client, patient, other_patient):
    first = notify(patient.id, 'Your appointment is confirmed.')
    second = notify(patient.id, 'Your appointment has been canceled.')
    foreign = notify(other_patient.id, 'Not yours.')

    r = patient_client.get('/notifications')
    shown = r.context['notifications']
    assert [n.id for n in shown] == [second.id, first.id]
    assert {n.status for n in shown} == {Notification.STATUS_PENDING}

    assert set(Notification.objects.filter(user=patient).values_list('status', flat=True)) == {
        Notification.STATUS_DELIVERED
    }
    foreign.refresh_from_db()
    assert foreign.status == Notification.STATUS_PENDING

    r = patient_client.get('/notifications')
    assert [n.status for n in r.context['notifications']] == [Notification.STATUS_DELIVERED] * 2


def test_sent_notifications_are_left_alone(patient_client, patient):
    n = Notification.objects.create(user=patient, message='Reminder', status=Notification.STATUS_SENT)
    patient_client.get('/notifications')
    n.refresh_from_db()
    assert n.status == Notification.STATUS_SENT


def test_empty_notifications(patient_client):
    r = patient_client.get('/notifications')
    assert r.status_code == 200
    assert r.context['notifications'] == []
