"""
Role management endpoints.

Roles are created, renamed, (de)activated and deleted here.  A role that
is still assigned to users cannot be deleted; deactivating it instead
hides every menu from its users.
"""
from __future__ import annotations

from django.db import transaction
from django.db.models import Count
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..models import Role
from ..permissions import IsSystemAdmin
from ..serializers.roles import RoleWriteSerializer, role_to_dict
from ..services.audit import log_action
from ..services.menu_access import invalidate_role_cache


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated, IsSystemAdmin])
def roles(request):
    """List roles (GET) or create one (POST)."""
    if request.method == 'GET':
        qs = Role.objects.annotate(user_count=Count('users')).order_by('name')
        return Response([role_to_dict(r, user_count=r.user_count) for r in qs])

    s = RoleWriteSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    name = vd.get('roleName')
    if not name:
        return Response({'detail': 'Role name is required'}, status=status.HTTP_400_BAD_REQUEST)
    if Role.objects.filter(name=name).exists():
        return Response({'detail': 'Role with that name already exists'}, status=status.HTTP_400_BAD_REQUEST)
    role = Role.objects.create(
        name=name,
        description=vd.get('description', ''),
        is_active=vd.get('isActive', True),
    )
    log_action(user=request.user, action='role_create', object_type='role', object_id=role.id,
               detail={'name': name})
    return Response(role_to_dict(role, user_count=0), status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'DELETE'])
@permission_classes([IsAuthenticated, IsSystemAdmin])
def role_detail(request, pk: int):
    role = Role.objects.filter(pk=pk).first()
    if not role:
        return Response({'detail': 'Role not found'}, status=status.HTTP_404_NOT_FOUND)

    if request.method == 'GET':
        return Response(role_to_dict(role, user_count=role.users.count()))

    if request.method == 'DELETE':
        in_use = role.users.filter(is_active=True).count()
        if in_use:
            return Response(
                {'detail': 'Cannot delete role that is assigned to users. Please reassign users first.'},
                status=status.HTTP_400_BAD_REQUEST,
            )
        role_id = role.id
        role.delete()
        invalidate_role_cache(role_id)
        log_action(user=request.user, action='role_delete', object_type='role', object_id=role_id)
        return Response({'success': True})

    s = RoleWriteSerializer(data=request.data, partial=True)
    s.is_valid(raise_exception=True)
    vd = s.validated_data
    update_fields = []
    if 'roleName' in vd:
        if Role.objects.filter(name=vd['roleName']).exclude(pk=role.pk).exists():
            return Response({'detail': 'Role with that name already exists'}, status=status.HTTP_400_BAD_REQUEST)
        role.name = vd['roleName']
        update_fields.append('name')
    if 'description' in vd:
        role.description = vd['description']
        update_fields.append('description')
    if 'isActive' in vd:
        role.is_active = vd['isActive']
        update_fields.append('is_active')
    if update_fields:
        with transaction.atomic():
            role.save(update_fields=update_fields + ['updated_at'])
        invalidate_role_cache(role.id)
        log_action(user=request.user, action='role_update', object_type='role', object_id=role.id,
                   detail={'fields': update_fields})
    return Response(role_to_dict(role, user_count=role.users.count()))
