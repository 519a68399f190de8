import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator
from django.contrib.auth.models import AnonymousUser

from booking.realtime.consumers import NotificationsConsumer
from booking.services.notifications import group_name


@pytest.mark.django_db
def test_anonymous_socket_is_closed():
    async def run():
        communicator = WebsocketCommunicator(NotificationsConsumer.as_asgi(), '/ws/notifications/')
        communicator.scope['user'] = AnonymousUser()
        connected, code = await communicator.connect()
        await communicator.disconnect()
        return connected, code

    connected, code = async_to_sync(run)()
    assert connected is False
    assert code == 4003


def test_socket_receives_group_messages(patient):
    event = {
        'type': 'notification.message', 'notificationId': 1,
        'message': 'Your appointment is confirmed.', 'status': 'pending', 'sentAt': '2030-01-01T10:00:00+05:30',
    }

    async def run():
        communicator = WebsocketCommunicator(NotificationsConsumer.as_asgi(), '/ws/notifications/')
        communicator.scope['user'] = patient
        connected, _ = await communicator.connect()
        assert connected
        await get_channel_layer().group_send(group_name(patient.id), event)
        received = await communicator.receive_json_from()
        await communicator.disconnect()
        return received

    assert async_to_sync(run)() == event
