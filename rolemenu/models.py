"""
Database models for role based menu access.

A role owns four kinds of grants that mirror the configuration screen of
the front-end: navigation categories, menu items (leaf paths inside a
category), page tabs and queue service points.  Every grant row carries an
``is_allowed`` flag so the configuration screen can persist explicit
denials; only allowed rows take part in filtering.

Category ids, menu paths and page paths are plain strings that reference
the static registry in :mod:`rolemenu.navigation`.  They are not foreign
keys on purpose: the registry lives in code, not in the database.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.db import models


class Role(models.Model):
    """A named role assigned to staff users."""
    name = models.CharField(max_length=100, unique=True)
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class User(AbstractUser):
    """Custom user model bound to at most one :class:`Role`.

    A user without a role sees nothing in the navigation.  Deleting a role
    through the API is refused while users still reference it; the
    ``SET_NULL`` behaviour only applies to deletions made elsewhere
    (admin site, shell).
    """
    role = models.ForeignKey(
        Role, null=True, blank=True, on_delete=models.SET_NULL, related_name='users'
    )

    def __str__(self) -> str:
        return f"{self.username} ({self.role.name if self.role else '-'})"


class RoleMenuCategory(models.Model):
    role = models.ForeignKey(Role, on_delete=models.CASCADE, related_name='menu_categories')
    category_id = models.CharField(max_length=64)
    is_allowed = models.BooleanField(default=True)

    class Meta:
        unique_together = [('role', 'category_id')]

    def __str__(self) -> str:
        return f"{self.role_id}:{self.category_id}={self.is_allowed}"


class RoleMenuItem(models.Model):
    role = models.ForeignKey(Role, on_delete=models.CASCADE, related_name='menu_items')
    category_id = models.CharField(max_length=64)
    path = models.CharField(max_length=255)
    is_allowed = models.BooleanField(default=True)

    class Meta:
        unique_together = [('role', 'category_id', 'path')]
        indexes = [models.Index(fields=['role', 'category_id'], name='rolemenu_item_role_cat_idx')]

    def __str__(self) -> str:
        return f"{self.role_id}:{self.category_id}{self.path}={self.is_allowed}"


class RolePageTab(models.Model):
    role = models.ForeignKey(Role, on_delete=models.CASCADE, related_name='page_tabs')
    # pattern form, e.g. "/patients/*"
    page_path = models.CharField(max_length=255)
    tab_id = models.CharField(max_length=64)
    is_allowed = models.BooleanField(default=True)

    class Meta:
        unique_together = [('role', 'page_path', 'tab_id')]
        indexes = [models.Index(fields=['role', 'page_path'], name='rolemenu_tab_role_page_idx')]

    def __str__(self) -> str:
        return f"{self.role_id}:{self.page_path}#{self.tab_id}={self.is_allowed}"


class RoleQueueAccess(models.Model):
    role = models.ForeignKey(Role, on_delete=models.CASCADE, related_name='queue_access')
    service_point = models.CharField(max_length=64)
    is_allowed = models.BooleanField(default=True)

    class Meta:
        unique_together = [('role', 'service_point')]

    def __str__(self) -> str:
        return f"{self.role_id}:{self.service_point}={self.is_allowed}"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='rolemenu_audit_action_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='rolemenu_audit_object_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.action}:{self.object_type}#{self.object_id}"
