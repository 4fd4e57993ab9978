"""
Role based menu, tab and queue filtering.

These helpers derive the visible subset of the static navigation registry
for a role's grants.  They are pure functions: no database, no cache and
no exceptions.  Missing access data degrades to an empty result or
``False``.

Two different defaults apply:

* categories, menu items and tabs fail closed: ``None`` access hides
  everything, and a category must be granted explicitly;
* queue service points fail open: a role without any queue grant sees
  every service point.  Only ``None`` access hides them.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

if TYPE_CHECKING:
    from .navigation import NavigationCategory, NavigationItem, TabItem

_DYNAMIC_SEGMENT = re.compile(r'\[.*?\]')


@dataclass(frozen=True)
class MenuItemGrant:
    category_id: str
    path: str


@dataclass(frozen=True)
class TabGrant:
    page_path: str
    tab_id: str


@dataclass(frozen=True)
class RoleMenuAccess:
    """Allowed categories, menu paths, page tabs and queue service points."""
    categories: tuple[str, ...] = field(default_factory=tuple)
    menu_items: tuple[MenuItemGrant, ...] = field(default_factory=tuple)
    tabs: tuple[TabGrant, ...] = field(default_factory=tuple)
    queues: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, data: Optional[dict]) -> 'RoleMenuAccess':
        """Build access from the wire shape used by the front-end."""
        data = data or {}
        return cls(
            categories=tuple(data.get('categories') or ()),
            menu_items=tuple(
                MenuItemGrant(m['categoryId'], m['path']) for m in (data.get('menuItems') or ())
            ),
            tabs=tuple(TabGrant(t['pagePath'], t['tabId']) for t in (data.get('tabs') or ())),
            queues=tuple(data.get('queues') or ()),
        )

    def to_payload(self) -> dict:
        return {
            'categories': list(self.categories),
            'menuItems': [{'categoryId': m.category_id, 'path': m.path} for m in self.menu_items],
            'tabs': [{'pagePath': t.page_path, 'tabId': t.tab_id} for t in self.tabs],
            'queues': list(self.queues),
        }


def filter_navigation_categories(
    categories: Sequence['NavigationCategory'],
    role_access: Optional[RoleMenuAccess],
) -> list['NavigationCategory']:
    """Return the categories granted to the role, in registry order."""
    if not role_access or not role_access.categories:
        return []
    return [c for c in categories if c.id in role_access.categories]


def filter_sidebar_items(
    items: Sequence['NavigationItem'],
    category_id: str,
    role_access: Optional[RoleMenuAccess],
) -> list['NavigationItem']:
    """Return the items of ``category_id`` visible to the role.

    A granted category without any per-item grant exposes all its items.
    """
    if not role_access:
        return []
    if category_id not in role_access.categories:
        return []
    allowed_paths = [m.path for m in role_access.menu_items if m.category_id == category_id]
    if not allowed_paths:
        return list(items)
    return [item for item in items if item.href in allowed_paths]


def _page_tab_ids(page_path: str, role_access: RoleMenuAccess) -> list[str]:
    return [t.tab_id for t in role_access.tabs if t.page_path == page_path]


def is_tab_allowed(page_path: str, tab_id: str, role_access: Optional[RoleMenuAccess]) -> bool:
    if not role_access:
        return False
    allowed = _page_tab_ids(page_path, role_access)
    # no restriction recorded for this page
    if not allowed:
        return True
    return tab_id in allowed


def filter_tabs(
    tabs: Sequence['TabItem'],
    page_path: str,
    role_access: Optional[RoleMenuAccess],
) -> list['TabItem']:
    if not role_access:
        return []
    allowed = _page_tab_ids(page_path, role_access)
    if not allowed:
        return list(tabs)
    return [tab for tab in tabs if tab.value in allowed]


def normalize_page_path(path: str) -> str:
    """Turn dynamic route segments into wildcards: ``/patients/[id]`` -> ``/patients/*``."""
    return _DYNAMIC_SEGMENT.sub('*', path)


def match_page_path(page_path: str, pattern: str) -> bool:
    """Match ``page_path`` against ``pattern``.

    Tried in order: exact equality, ``*`` wildcard (matches any run of
    characters, slashes included), then a prefix match bounded by a slash
    so that ``/patients`` covers ``/patients/123`` but not ``/patients-old``.
    """
    if pattern == page_path:
        return True
    if '*' in pattern:
        regex = '.*'.join(re.escape(part) for part in pattern.split('*'))
        return re.fullmatch(regex, page_path) is not None
    return page_path.startswith(pattern + '/')


def is_queue_allowed(service_point: str, role_access: Optional[RoleMenuAccess]) -> bool:
    if not role_access:
        return False
    if not role_access.queues:
        return True
    return service_point in role_access.queues


def filter_queue_service_points(
    service_points: Iterable[str],
    role_access: Optional[RoleMenuAccess],
) -> list[str]:
    if not role_access:
        return []
    if not role_access.queues:
        return list(service_points)
    return [sp for sp in service_points if sp in role_access.queues]


def build_menu(
    categories: Sequence['NavigationCategory'],
    role_access: Optional[RoleMenuAccess],
) -> list[dict]:
    """Serialize the allowed categories with their allowed sidebar items."""
    return [
        c.to_dict(items=filter_sidebar_items(c.items, c.id, role_access))
        for c in filter_navigation_categories(categories, role_access)
    ]
