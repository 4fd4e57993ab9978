"""
Reading and writing role menu grants.

Resolved grants of a role are cached because every page load of the
front-end asks for them; the cache entry is dropped whenever the role's
configuration is written.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from django.conf import settings
from django.core.cache import cache
from django.db import transaction

from rolemenu.exceptions import MenuConfigError
from rolemenu.filters import MenuItemGrant, RoleMenuAccess, TabGrant, normalize_page_path
from rolemenu.models import Role, RoleMenuCategory, RoleMenuItem, RolePageTab, RoleQueueAccess
from rolemenu.navigation import NAVIGATION_CATEGORIES, service_point_values
from rolemenu.services.audit import log_action
from rolemenu.services.broadcast import broadcast_menu_refresh

logger = logging.getLogger(__name__)

SECTIONS = ('categories', 'menuItems', 'tabs', 'queues')


def role_cache_key(role_id: int) -> str:
    return f'menu-access:role:{role_id}'


def invalidate_role_cache(role_id: int) -> None:
    cache.delete(role_cache_key(role_id))


def _load_role_menu_access(role: Role) -> RoleMenuAccess:
    return RoleMenuAccess(
        categories=tuple(
            role.menu_categories.filter(is_allowed=True).values_list('category_id', flat=True)
        ),
        menu_items=tuple(
            MenuItemGrant(c, p)
            for c, p in role.menu_items.filter(is_allowed=True).values_list('category_id', 'path')
        ),
        tabs=tuple(
            TabGrant(p, t)
            for p, t in role.page_tabs.filter(is_allowed=True).values_list('page_path', 'tab_id')
        ),
        queues=tuple(
            role.queue_access.filter(is_allowed=True).values_list('service_point', flat=True)
        ),
    )


def get_role_menu_access(role: Role) -> RoleMenuAccess:
    """Return the allowed grants of ``role``, from cache when possible."""
    key = role_cache_key(role.id)
    payload = cache.get(key)
    if payload is not None:
        return RoleMenuAccess.from_payload(payload)
    access = _load_role_menu_access(role)
    cache.set(key, access.to_payload(), settings.MENU_ACCESS_CACHE_TTL)
    return access


def get_user_menu_access(user) -> Optional[RoleMenuAccess]:
    """Return the grants for ``user``.

    ``None`` for anonymous users.  A user without an active role gets an
    empty access object, which hides every category and tab.
    """
    if not (user and getattr(user, 'is_authenticated', False)):
        return None
    role = getattr(user, 'role', None)
    if role is None or not role.is_active:
        return RoleMenuAccess()
    return get_role_menu_access(role)


def get_role_menu_config(role: Role) -> dict:
    """Full configuration of ``role`` including denied rows."""
    return {
        'categories': [
            {'categoryId': c, 'isAllowed': a}
            for c, a in role.menu_categories.order_by('id').values_list('category_id', 'is_allowed')
        ],
        'menuItems': [
            {'categoryId': c, 'menuItemPath': p, 'isAllowed': a}
            for c, p, a in role.menu_items.order_by('id').values_list('category_id', 'path', 'is_allowed')
        ],
        'tabs': [
            {'pagePath': p, 'tabId': t, 'isAllowed': a}
            for p, t, a in role.page_tabs.order_by('id').values_list('page_path', 'tab_id', 'is_allowed')
        ],
        'queues': [
            {'servicePoint': s, 'isAllowed': a}
            for s, a in role.queue_access.order_by('id').values_list('service_point', 'is_allowed')
        ],
    }


def _allowed(row: dict) -> bool:
    return row.get('isAllowed') is not False


def _require(row: Any, *keys: str, section: str) -> list[str]:
    if not isinstance(row, dict):
        raise MenuConfigError({section: 'each entry must be an object'})
    values = []
    for k in keys:
        v = row.get(k)
        if not isinstance(v, str) or not v.strip():
            raise MenuConfigError({section: f'missing {k}'})
        values.append(v.strip())
    return values


def _dedupe(rows: list) -> list:
    # last entry wins for repeated keys
    return list({r[0]: r for r in rows}.values())


def _category_rows(role: Role, rows: list) -> list[RoleMenuCategory]:
    known = {c.id for c in NAVIGATION_CATEGORIES}
    parsed = []
    for row in rows:
        (category_id,) = _require(row, 'categoryId', section='categories')
        if category_id not in known:
            raise MenuConfigError({'categories': f'unknown category {category_id}'})
        parsed.append(((category_id,), _allowed(row)))
    return [RoleMenuCategory(role=role, category_id=k[0], is_allowed=a) for k, a in _dedupe(parsed)]


def _menu_item_rows(role: Role, rows: list) -> list[RoleMenuItem]:
    known = {c.id for c in NAVIGATION_CATEGORIES}
    parsed = []
    for row in rows:
        category_id, path = _require(row, 'categoryId', 'menuItemPath', section='menuItems')
        if category_id not in known:
            raise MenuConfigError({'menuItems': f'unknown category {category_id}'})
        parsed.append(((category_id, path), _allowed(row)))
    return [
        RoleMenuItem(role=role, category_id=k[0], path=k[1], is_allowed=a)
        for k, a in _dedupe(parsed)
    ]


def _tab_rows(role: Role, rows: list) -> list[RolePageTab]:
    parsed = []
    for row in rows:
        page_path, tab_id = _require(row, 'pagePath', 'tabId', section='tabs')
        parsed.append(((normalize_page_path(page_path), tab_id), _allowed(row)))
    return [
        RolePageTab(role=role, page_path=k[0], tab_id=k[1], is_allowed=a)
        for k, a in _dedupe(parsed)
    ]


def _queue_rows(role: Role, rows: list) -> list[RoleQueueAccess]:
    known = set(service_point_values())
    parsed = []
    for row in rows:
        (service_point,) = _require(row, 'servicePoint', section='queues')
        if service_point not in known:
            raise MenuConfigError({'queues': f'unknown service point {service_point}'})
        parsed.append(((service_point,), _allowed(row)))
    return [
        RoleQueueAccess(role=role, service_point=k[0], is_allowed=a)
        for k, a in _dedupe(parsed)
    ]


def set_role_menu_config(role: Role, payload: dict, user=None) -> dict:
    """Replace the grant sections present in ``payload``.

    Each of ``categories``, ``menuItems``, ``tabs`` and ``queues`` that is a
    list replaces every stored row of that section for the role; sections
    missing from the payload are left untouched.  All sections are written
    in one transaction.
    """
    if not isinstance(payload, dict):
        raise MenuConfigError('payload must be an object')
    for section in SECTIONS:
        if section in payload and payload[section] is not None and not isinstance(payload[section], list):
            raise MenuConfigError({section: 'must be a list'})

    builders = {
        'categories': (RoleMenuCategory, _category_rows),
        'menuItems': (RoleMenuItem, _menu_item_rows),
        'tabs': (RolePageTab, _tab_rows),
        'queues': (RoleQueueAccess, _queue_rows),
    }
    # validate everything before touching the database
    pending = {
        section: (model, build(role, payload[section]))
        for section, (model, build) in builders.items()
        if isinstance(payload.get(section), list)
    }

    with transaction.atomic():
        for model, objs in pending.values():
            model.objects.filter(role=role).delete()
            model.objects.bulk_create(objs)

    invalidate_role_cache(role.id)
    counts = {section: len(objs) for section, (_, objs) in pending.items()}
    logger.info('menu config of role %s updated: %s', role.id, counts)
    log_action(user=user, action='role_menu_config', object_type='role', object_id=role.id, detail=counts)
    transaction.on_commit(lambda: broadcast_menu_refresh([role.id]))
    return counts
