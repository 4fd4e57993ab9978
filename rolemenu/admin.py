"""
Django admin registrations for roles, users and menu grants.

Grants are shown inline on the role page so an operator can inspect what
a role sees without going through the API.
"""

from django.contrib import admin

from .models import (
    AuditEvent,
    Role,
    RoleMenuCategory,
    RoleMenuItem,
    RolePageTab,
    RoleQueueAccess,
    User,
)


class RoleMenuCategoryInline(admin.TabularInline):
    model = RoleMenuCategory
    extra = 0


class RoleMenuItemInline(admin.TabularInline):
    model = RoleMenuItem
    extra = 0


class RolePageTabInline(admin.TabularInline):
    model = RolePageTab
    extra = 0


class RoleQueueAccessInline(admin.TabularInline):
    model = RoleQueueAccess
    extra = 0


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'is_active', 'updated_at')
    list_filter = ('is_active',)
    search_fields = ('name', 'description')
    inlines = (RoleMenuCategoryInline, RoleMenuItemInline, RolePageTabInline, RoleQueueAccessInline)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'role', 'is_active', 'is_staff', 'is_superuser')
    list_filter = ('role', 'is_active')
    search_fields = ('username', 'first_name', 'last_name')


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('id', 'action', 'object_type', 'object_id', 'user', 'created_at')
    list_filter = ('action', 'object_type')
    search_fields = ('object_id', 'user__username')
