"""
Queue service points visible to the current user.

Queue grants behave differently from the menu grants: a role without any
queue rows sees every service point.
"""
from __future__ import annotations

from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..filters import filter_queue_service_points
from ..navigation import QUEUE_SERVICE_POINTS
from ..services.menu_access import get_user_menu_access


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def queue_service_points(request):
    access = get_user_menu_access(request.user)
    allowed = set(filter_queue_service_points([sp.value for sp in QUEUE_SERVICE_POINTS], access))
    return Response([sp.to_dict() for sp in QUEUE_SERVICE_POINTS if sp.value in allowed])
