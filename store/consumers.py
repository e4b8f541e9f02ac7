# store/consumers.py
from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.urls import re_path
from django_channels_jwt_auth_middleware.auth import JWTAuthMiddlewareStack

from .services.backoffice import BROADCAST_GROUP


class NotificationConsumer(AsyncJsonWebsocketConsumer):
    """
    Per-user push channel. Joins the global broadcast group plus the
    caller's own ``user_<id>`` group, where activity records land.
    """

    async def connect(self):
        user = self.scope.get("user")
        if not user or user.is_anonymous:
            await self.close()
            return
        self.group = f"user_{user.id}"
        await self.channel_layer.group_add(BROADCAST_GROUP, self.channel_name)
        await self.channel_layer.group_add(self.group, self.channel_name)
        await self.accept()

        balance = await self.current_balance(user.id)
        await self.send_json({"type": "hello", "userId": user.id, "balance": balance})

    async def disconnect(self, code):
        group = getattr(self, "group", None)
        if group is None:
            return
        await self.channel_layer.group_discard(BROADCAST_GROUP, self.channel_name)
        await self.channel_layer.group_discard(group, self.channel_name)

    # backoffice.broadcast sends to this handler name
    async def broadcast_message(self, event):
        await self.send_json({"type": "broadcast", "data": event["broadcast"]})

    # signals.push_activity sends to this handler name
    async def activity_created(self, event):
        await self.send_json({"type": "activity", "data": event["activity"]})

    @database_sync_to_async
    def current_balance(self, user_id):
        from .models import UserAccount
        acc = UserAccount.objects.filter(user_id=user_id).only("balance").first()
        return str(acc.balance) if acc else "0.00"


websocket_urlpatterns = [
    re_path(r"^ws/notifications/$", JWTAuthMiddlewareStack(NotificationConsumer.as_asgi())),
]
