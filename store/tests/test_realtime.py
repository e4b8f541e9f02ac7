"""
ws/notifications/: activity pushes, broadcasts and auth.
"""
from channels.db import database_sync_to_async
from channels.layers import get_channel_layer
from channels.routing import URLRouter
from channels.testing import WebsocketCommunicator
from django.core.cache import cache
from django.test import TransactionTestCase
from rest_framework_simplejwt.tokens import RefreshToken

from store.consumers import websocket_urlpatterns
from store.services.backoffice import broadcast
from store.services.orders import place_order

from .utils import make_number, make_user

application = URLRouter(websocket_urlpatterns)


class NotificationConsumerTests(TransactionTestCase):
    def setUp(self):
        cache.clear()
        self.user = make_user("listener", balance="1000")
        self.admin = make_user("boss", is_staff=True)
        self.number = make_number(price="500.00")

    async def connect(self, user=None):
        path = "/ws/notifications/"
        if user is not None:
            refresh = await database_sync_to_async(RefreshToken.for_user)(user)
            path += f"?token={refresh.access_token}"
        communicator = WebsocketCommunicator(application, path)
        connected, _ = await communicator.connect()
        return communicator, connected

    async def test_anonymous_connection_is_closed(self):
        communicator, connected = await self.connect()
        self.assertFalse(connected)
        await communicator.disconnect()

    async def test_hello_frame_carries_balance(self):
        await get_channel_layer().flush()
        communicator, connected = await self.connect(self.user)

        self.assertTrue(connected)
        hello = await communicator.receive_json_from()
        self.assertEqual(hello, {"type": "hello", "userId": self.user.id, "balance": "1000.00"})
        await communicator.disconnect()

    async def test_committed_activity_is_pushed_to_owner(self):
        await get_channel_layer().flush()
        communicator, _ = await self.connect(self.user)
        await communicator.receive_json_from()

        await database_sync_to_async(place_order)(self.user, self.number.id)

        frame = await communicator.receive_json_from(timeout=2)
        self.assertEqual(frame["type"], "activity")
        self.assertEqual(frame["data"]["action"], "Purchased WhatsApp number")
        self.assertEqual(frame["data"]["status"], "Completed")
        await communicator.disconnect()

    async def test_broadcast_reaches_every_connection(self):
        await get_channel_layer().flush()
        first, _ = await self.connect(self.user)
        second, _ = await self.connect(self.admin)
        await first.receive_json_from()
        await second.receive_json_from()

        await database_sync_to_async(broadcast)(self.admin, "Maintenance", "Back soon")

        for communicator in (first, second):
            frame = await communicator.receive_json_from(timeout=2)
            # the admin's own connection also gets the activity for the broadcast
            while frame["type"] != "broadcast":
                frame = await communicator.receive_json_from(timeout=2)
            self.assertEqual(frame["data"]["title"], "Maintenance")
            self.assertEqual(frame["data"]["message"], "Back soon")
            await communicator.disconnect()

    async def test_other_users_activity_is_not_delivered(self):
        await get_channel_layer().flush()
        communicator, _ = await self.connect(self.admin)
        await communicator.receive_json_from()

        await database_sync_to_async(place_order)(self.user, self.number.id)

        self.assertTrue(await communicator.receive_nothing(timeout=0.5))
        await communicator.disconnect()
