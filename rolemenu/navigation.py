"""
Static navigation registry.

The navigation tree, the tab catalogue of tabbed pages and the list of
queue service points are defined here once, at import time, and are never
mutated.  Role grants stored in the database reference these ids and
hrefs by value.  Icons are the front-end icon component names.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from .filters import match_page_path, normalize_page_path


@dataclass(frozen=True)
class NavigationItem:
    title: str
    href: str
    icon: str
    description: Optional[str] = None

    def to_dict(self) -> dict:
        data = {'title': self.title, 'href': self.href, 'icon': self.icon}
        if self.description:
            data['description'] = self.description
        return data


@dataclass(frozen=True)
class NavigationCategory:
    id: str
    title: str
    icon: str
    description: str
    items: tuple[NavigationItem, ...] = field(default_factory=tuple)

    def to_dict(self, items=None) -> dict:
        """Serialize the category, optionally with a filtered item list."""
        return {
            'id': self.id,
            'title': self.title,
            'icon': self.icon,
            'description': self.description,
            'items': [i.to_dict() for i in (self.items if items is None else items)],
        }


@dataclass(frozen=True)
class TabItem:
    value: str
    label: str

    def to_dict(self) -> dict:
        return {'value': self.value, 'label': self.label}


@dataclass(frozen=True)
class ServicePoint:
    value: str
    label: str

    def to_dict(self) -> dict:
        return {'value': self.value, 'label': self.label}


def _items(*rows: tuple[str, str, str]) -> tuple[NavigationItem, ...]:
    return tuple(NavigationItem(title=t, href=h, icon=i) for t, h, i in rows)


NAVIGATION_CATEGORIES: tuple[NavigationCategory, ...] = (
    NavigationCategory(
        id='overview',
        title='Dashboard',
        icon='Home',
        description='Main dashboard and overview sections',
        items=_items(
            ('Dashboard', '/', 'Home'),
            ('Departments', '/departments', 'Building2'),
            ('Analytics', '/analytics', 'BarChart3'),
            ('Regional Dashboard', '/regional-dashboard', 'MapPin'),
        ),
    ),
    NavigationCategory(
        id='patient-care',
        title='Patient Care',
        icon='Users',
        description='Patient management and care services',
        items=_items(
            ('Patient Registration', '/patients', 'Users'),
            ('Triaging', '/triaging', 'Activity'),
            ('Appointments', '/appointments', 'Calendar'),
            ('Queue Management', '/queue', 'ListOrdered'),
            ('Medical Records', '/medical-records', 'FileText'),
        ),
    ),
    NavigationCategory(
        id='clinical-services',
        title='Clinical Services',
        icon='Stethoscope',
        description='Clinical departments and services',
        items=_items(
            ('Doctors Module', '/doctors', 'Stethoscope'),
            ('Pharmacy', '/pharmacy', 'Pill'),
            ('Laboratory', '/laboratory', 'FlaskConical'),
            ('Radiology', '/radiology', 'ImageIcon'),
            ('Inpatient', '/inpatient', 'BedDouble'),
            ('Maternity', '/maternity', 'Baby'),
            ('ICU', '/icu', 'HeartPulse'),
        ),
    ),
    NavigationCategory(
        id='financial',
        title='Financial Management',
        icon='DollarSign',
        description='Financial operations and billing',
        items=_items(
            ('General Ledger', '/finance/ledger', 'Clipboard'),
            ('Accounts Payable', '/finance/payable', 'Receipt'),
            ('Accounts Receivable', '/finance/receivable', 'CreditCard'),
            ('Budgeting', '/finance/budgeting', 'DollarSign'),
            ('Cash Management', '/finance/cash', 'DollarSign'),
            ('Fixed Assets', '/finance/assets', 'Building2'),
            ('Hospital Charges', '/finance/charges', 'DollarSign'),
            ('Revenue Share', '/finance/revenue-share', 'DollarSign'),
            ('Billing & Invoicing', '/billing', 'Receipt'),
            ('Insurance Management', '/insurance', 'FileText'),
        ),
    ),
    NavigationCategory(
        id='procurement',
        title='Procurement & Inventory',
        icon='ShoppingCart',
        description='Procurement and inventory management',
        items=_items(
            ('Vendor Management', '/procurement/vendors', 'Users'),
            ('Purchase Orders', '/procurement/orders', 'ShoppingCart'),
            ('Inventory Overview', '/inventory', 'Grid'),
            ('Add Inventory Item', '/inventory/new', 'PlusCircle'),
            ('Stock Adjustment', '/inventory/adjust', 'Layers'),
            ('Inventory Analytics', '/inventory/analytics', 'BarChart3'),
            ('Drug Notifications', '/procurement/notifications', 'Bell'),
        ),
    ),
    NavigationCategory(
        id='administrative',
        title='Administrative',
        icon='UserCog',
        description='HR and administrative functions',
        items=_items(
            ('Employee Management', '/hr/employees', 'UserCog'),
            ('System Administration', '/administration', 'Shield'),
            ('Clinical Configuration', '/configuration', 'ClipboardList'),
            ('Settings', '/settings', 'Settings'),
        ),
    ),
)

DEFAULT_CATEGORY_ID = NAVIGATION_CATEGORIES[0].id


def _tabs(*rows: tuple[str, str]) -> tuple[TabItem, ...]:
    return tuple(TabItem(value=v, label=l) for v, l in rows)


# Keys use the dynamic-route form of the front-end ("[id]").
PAGE_TABS: Mapping[str, tuple[TabItem, ...]] = MappingProxyType({
    '/patients/[id]': _tabs(
        ('overview', 'Overview'),
        ('vitals', 'Vitals'),
        ('lab-results', 'Lab Results'),
        ('medications', 'Medications'),
        ('procedures', 'Procedures'),
        ('orders', 'Orders'),
        ('appointments', 'Appointments'),
        ('billing', 'Billing'),
        ('admissions', 'Admissions'),
        ('documents', 'Documents'),
        ('allergies', 'Allergies'),
        ('insurance', 'Insurance'),
        ('family-history', 'Family History'),
        ('queue-status', 'Queue Status'),
    ),
    '/procurement/vendors/[id]': _tabs(
        ('overview', 'Overview'),
        ('products', 'Products'),
        ('orders', 'Orders'),
        ('contracts', 'Contracts'),
        ('documents', 'Documents'),
        ('ratings', 'Ratings'),
        ('issues', 'Issues'),
        ('performance', 'Performance'),
    ),
    '/inpatient': _tabs(
        ('overview', 'Overview'),
        ('reviews', 'Reviews'),
        ('nursing', 'Nursing'),
        ('vitals', 'Vitals'),
        ('procedures', 'Procedures'),
        ('labs', 'Labs'),
        ('orders', 'Orders'),
        ('medications', 'Medications'),
    ),
})

QUEUE_SERVICE_POINTS: tuple[ServicePoint, ...] = (
    ServicePoint('triage', 'Triage'),
    ServicePoint('registration', 'Registration'),
    ServicePoint('consultation', 'Consultation'),
    ServicePoint('laboratory', 'Laboratory'),
    ServicePoint('radiology', 'Radiology'),
    ServicePoint('pharmacy', 'Pharmacy'),
    ServicePoint('billing', 'Billing'),
    ServicePoint('cashier', 'Cashier'),
)


def get_category_by_id(category_id: str) -> NavigationCategory | None:
    for category in NAVIGATION_CATEGORIES:
        if category.id == category_id:
            return category
    return None


def category_contains_path(category: NavigationCategory, pathname: str) -> bool:
    """Return True if any item of ``category`` covers ``pathname``."""

    return any(match_page_path(pathname, item.href) for item in category.items)


def get_category_by_path(pathname: str) -> NavigationCategory:
    """Return the first category owning ``pathname``.

    Unknown paths fall back to the first category (the dashboard).
    """
    for category in NAVIGATION_CATEGORIES:
        if category_contains_path(category, pathname):
            return category
    return NAVIGATION_CATEGORIES[0]


def all_menu_paths() -> set[tuple[str, str]]:
    return {(c.id, i.href) for c in NAVIGATION_CATEGORIES for i in c.items}


def service_point_values() -> list[str]:
    return [sp.value for sp in QUEUE_SERVICE_POINTS]


def get_page_tabs(page_path: str) -> tuple[str, tuple[TabItem, ...]] | None:
    """Resolve a concrete or pattern page path to its registered tab set.

    Returns ``(pattern, tabs)`` where ``pattern`` is the normalized form
    ("/patients/*") that tab grants are stored under, or ``None`` when the
    page has no tabs.
    """

    wanted = normalize_page_path(page_path)
    for key, tabs in PAGE_TABS.items():
        pattern = normalize_page_path(key)
        if match_page_path(wanted, pattern):
            return pattern, tabs
    return None
