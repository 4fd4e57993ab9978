"""Push refresh events to connected WebSocket clients."""
from __future__ import annotations

import logging
from typing import Iterable

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.utils import timezone

logger = logging.getLogger(__name__)

UPDATES_GROUP = "updates"


def broadcast_menu_refresh(role_ids: Iterable[int]) -> bool:
    """Tell clients of the given roles to refetch their menu access.

    Returns False when no channel layer is configured.
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return False
    now = timezone.now()
    event = {
        "type": "menu.refresh",
        "version": int(now.timestamp()),
        "ts": now.isoformat(),
        "roleIds": list(role_ids),
    }
    async_to_sync(channel_layer.group_send)(UPDATES_GROUP, event)
    logger.info("menu refresh broadcast for roles %s", event["roleIds"])
    return True
