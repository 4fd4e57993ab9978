"""
Role menu configuration and current-user menu access.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle

from ..models import Role
from ..permissions import IsSystemAdmin
from ..services.menu_access import get_role_menu_config, get_user_menu_access, set_role_menu_config


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsSystemAdmin])
@throttle_classes([ScopedRateThrottle])
def role_menu_config(request, pk: int):
    """Read (GET) or replace (POST) the menu configuration of a role.

    The POST body accepts any of ``categories``, ``menuItems``, ``tabs``
    and ``queues``; a section that is sent replaces the stored one, a
    section that is omitted is kept.
    """
    role = Role.objects.filter(pk=pk).first()
    if not role:
        return Response({'detail': 'Role not found'}, status=status.HTTP_404_NOT_FOUND)
    if request.method == 'GET':
        return Response(get_role_menu_config(role))
    counts = set_role_menu_config(role, request.data, user=request.user)
    return Response({
        'ok': True,
        'message': 'Menu configuration updated successfully',
        'updated': counts,
    })

# api_view wraps the function in an APIView subclass; the scope lives there
role_menu_config.cls.throttle_scope = 'menu_config'


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_menu_access(request):
    """Allowed categories, menu paths, tabs and queues of the current user."""
    access = get_user_menu_access(request.user)
    role = request.user.role
    payload = access.to_payload()
    payload['roleId'] = role.id if role else None
    return Response(payload)
