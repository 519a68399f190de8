from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction

from booking.models import Notification


def group_name(user_id: int) -> str:
    return f"notifications.{user_id}"


def push(notification: Notification) -> None:
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    async_to_sync(channel_layer.group_send)(group_name(notification.user_id), {
        "type": "notification.message",
        "notificationId": notification.id,
        "message": notification.message,
        "status": notification.status,
        "sentAt": notification.sent_at.isoformat(),
    })


def notify(user_id: int, message: str, status: str = Notification.STATUS_PENDING) -> Notification:
    """Store a notification and push it to open sockets once the transaction commits."""
    notification = Notification.objects.create(user_id=user_id, message=message, status=status)
    transaction.on_commit(lambda: push(notification))
    return notification


def list_and_mark_delivered(user_id: int) -> list[Notification]:
    """Return the user's notifications newest first, then mark pending ones delivered.

    The returned rows keep the status they had before this call.
    """
    notifications = list(Notification.objects.filter(user_id=user_id).order_by('-sent_at', '-id'))
    Notification.objects.filter(user_id=user_id, status=Notification.STATUS_PENDING).update(
        status=Notification.STATUS_DELIVERED
    )
    return notifications
