import json
from channels.generic.websocket import AsyncWebsocketConsumer

from booking.services.notifications import group_name


class NotificationsConsumer(AsyncWebsocketConsumer):
    """Pushes the signed-in user's new notifications as they are committed."""

    async def connect(self):
        user = self.scope.get("user")
        if user is None or not user.is_authenticated:
            await self.close(code=4003)
            return
        self.group = group_name(user.id)
        await self.channel_layer.group_add(self.group, self.channel_name)
        await self.accept()

    async def disconnect(self, close_code):
        group = getattr(self, "group", None)
        if group:
            await self.channel_layer.group_discard(group, self.channel_name)

    async def notification_message(self, event):
        # event: {"type": "notification.message", "notificationId": int, "message": str, "status": str, "sentAt": "..."}
        await self.send(json.dumps(event))
