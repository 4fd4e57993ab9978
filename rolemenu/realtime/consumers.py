import json
from channels.generic.websocket import AsyncWebsocketConsumer

from rolemenu.services.broadcast import UPDATES_GROUP


class UpdatesConsumer(AsyncWebsocketConsumer):
    GROUP = UPDATES_GROUP

    async def connect(self):
        await self.channel_layer.group_add(self.GROUP, self.channel_name)
        await self.accept()
        await self.send(json.dumps({"type": "welcome", "message": "connected"}))

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(self.GROUP, self.channel_name)

    async def menu_refresh(self, event):
        # event: {"type": "menu.refresh", "version": int, "ts": "...", "roleIds": [...]}
        await self.send(json.dumps(event))
