"""
Tests for the pure menu, tab and queue filters and the path helpers.

No database is needed: the filters work on the static registry and a
``RoleMenuAccess`` built in memory.
"""
import pytest

from rolemenu.filters import (
    MenuItemGrant,
    RoleMenuAccess,
    TabGrant,
    build_menu,
    filter_navigation_categories,
    filter_queue_service_points,
    filter_sidebar_items,
    filter_tabs,
    is_queue_allowed,
    is_tab_allowed,
    match_page_path,
    normalize_page_path,
)
from rolemenu.navigation import (
    NAVIGATION_CATEGORIES,
    PAGE_TABS,
    get_category_by_id,
    get_category_by_path,
    get_page_tabs,
    service_point_values,
)

PATIENT_TABS = PAGE_TABS['/patients/[id]']


def _ids(categories):
    return [c.id for c in categories]


# ---------------------------------------------------------------------
# categories
# ---------------------------------------------------------------------
def test_categories_hidden_without_access():
    assert filter_navigation_categories(NAVIGATION_CATEGORIES, None) == []


def test_categories_hidden_when_nothing_granted():
    assert filter_navigation_categories(NAVIGATION_CATEGORIES, RoleMenuAccess()) == []


def test_categories_keep_registry_order():
    access = RoleMenuAccess(categories=('financial', 'overview'))
    assert _ids(filter_navigation_categories(NAVIGATION_CATEGORIES, access)) == ['overview', 'financial']


def test_unknown_granted_category_is_ignored():
    access = RoleMenuAccess(categories=('overview', 'does-not-exist'))
    assert _ids(filter_navigation_categories(NAVIGATION_CATEGORIES, access)) == ['overview']


# ---------------------------------------------------------------------
# sidebar items
# ---------------------------------------------------------------------
def test_sidebar_items_default_to_whole_category():
    cat = get_category_by_id('patient-care')
    access = RoleMenuAccess(categories=('patient-care',))
    assert filter_sidebar_items(cat.items, cat.id, access) == list(cat.items)


def test_sidebar_items_hidden_when_category_not_granted():
    cat = get_category_by_id('patient-care')
    access = RoleMenuAccess(
        categories=('overview',),
        menu_items=(MenuItemGrant('patient-care', '/patients'),),
    )
    assert filter_sidebar_items(cat.items, cat.id, access) == []
    assert filter_sidebar_items(cat.items, cat.id, None) == []


def test_sidebar_items_restricted_to_granted_paths():
    cat = get_category_by_id('financial')
    access = RoleMenuAccess(
        categories=('financial', 'overview'),
        menu_items=(
            MenuItemGrant('financial', '/billing'),
            MenuItemGrant('financial', '/finance/cash'),
            # grants of another category do not restrict this one
            MenuItemGrant('overview', '/'),
        ),
    )
    hrefs = [i.href for i in filter_sidebar_items(cat.items, cat.id, access)]
    assert hrefs == ['/finance/cash', '/billing']


# ---------------------------------------------------------------------
# tabs
# ---------------------------------------------------------------------
def test_tabs_hidden_without_access():
    assert filter_tabs(PATIENT_TABS, '/patients/*', None) == []
    assert is_tab_allowed('/patients/*', 'overview', None) is False


def test_tabs_unrestricted_page_shows_all():
    access = RoleMenuAccess(tabs=(TabGrant('/inpatient', 'overview'),))
    assert filter_tabs(PATIENT_TABS, '/patients/*', access) == list(PATIENT_TABS)
    assert is_tab_allowed('/patients/*', 'anything', access) is True


def test_tabs_restricted_page_uses_allow_list():
    access = RoleMenuAccess(tabs=(
        TabGrant('/patients/*', 'vitals'),
        TabGrant('/patients/*', 'overview'),
    ))
    assert [t.value for t in filter_tabs(PATIENT_TABS, '/patients/*', access)] == ['overview', 'vitals']
    assert is_tab_allowed('/patients/*', 'billing', access) is False
    assert is_tab_allowed('/patients/*', 'vitals', access) is True


# ---------------------------------------------------------------------
# queues
# ---------------------------------------------------------------------
def test_queues_open_when_no_queue_grant():
    # queues fail open, unlike categories and tabs
    access = RoleMenuAccess()
    assert filter_navigation_categories(NAVIGATION_CATEGORIES, access) == []
    assert filter_queue_service_points(service_point_values(), access) == service_point_values()
    assert all(is_queue_allowed(sp, access) for sp in service_point_values())


def test_queues_hidden_without_access():
    assert filter_queue_service_points(service_point_values(), None) == []
    assert is_queue_allowed('triage', None) is False


def test_queues_restricted_to_grants():
    access = RoleMenuAccess(queues=('pharmacy', 'triage'))
    assert filter_queue_service_points(service_point_values(), access) == ['triage', 'pharmacy']
    assert is_queue_allowed('billing', access) is False


# ---------------------------------------------------------------------
# paths
# ---------------------------------------------------------------------
@pytest.mark.parametrize('path,expected', [
    ('/patients/[id]', '/patients/*'),
    ('/procurement/vendors/[id]/orders/[orderId]', '/procurement/vendors/*/orders/*'),
    ('/inpatient', '/inpatient'),
])
def test_normalize_page_path(path, expected):
    assert normalize_page_path(path) == expected


@pytest.mark.parametrize('page_path,pattern,expected', [
    ('/patients', '/patients', True),
    ('/patients/42', '/patients/*', True),
    ('/patients/42/notes', '/patients/*', True),
    ('/patients/42', '/patients', True),
    ('/patients-old', '/patients', False),
    ('/patients', '/patients/123', False),
    ('/patients/42\n', '/patients/*', False),
    ('/doctors', '/patients/*', False),
    ('/patients', '/', False),
    ('/', '/', True),
])
def test_match_page_path(page_path, pattern, expected):
    assert match_page_path(page_path, pattern) is expected


@pytest.mark.parametrize('pathname,category', [
    ('/', 'overview'),
    ('/departments', 'overview'),
    ('/patients/42', 'patient-care'),
    ('/laboratory', 'clinical-services'),
    ('/finance/ledger', 'financial'),
    ('/billing', 'financial'),
    ('/procurement/vendors/7', 'procurement'),
    ('/inventory/new', 'procurement'),
    ('/settings', 'administrative'),
    ('/no-such-page', 'overview'),
])
def test_get_category_by_path(pathname, category):
    assert get_category_by_path(pathname).id == category


def test_get_page_tabs_resolves_concrete_and_pattern_paths():
    assert get_page_tabs('/patients/42') == ('/patients/*', PATIENT_TABS)
    assert get_page_tabs('/patients/[id]') == ('/patients/*', PATIENT_TABS)
    assert get_page_tabs('/inpatient')[0] == '/inpatient'
    assert get_page_tabs('/departments') is None


def test_page_tabs_registry_is_read_only():
    with pytest.raises(TypeError):
        PAGE_TABS['/reports'] = ()


# ---------------------------------------------------------------------
# payload and menu assembly
# ---------------------------------------------------------------------
def test_access_payload_round_trip():
    access = RoleMenuAccess(
        categories=('overview',),
        menu_items=(MenuItemGrant('overview', '/analytics'),),
        tabs=(TabGrant('/patients/*', 'vitals'),),
        queues=('triage',),
    )
    assert RoleMenuAccess.from_payload(access.to_payload()) == access
    assert RoleMenuAccess.from_payload(None) == RoleMenuAccess()


def test_build_menu_keeps_granted_category_with_filtered_items():
    access = RoleMenuAccess(
        categories=('overview', 'procurement'),
        menu_items=(MenuItemGrant('procurement', '/inventory'),),
    )
    menu = build_menu(NAVIGATION_CATEGORIES, access)
    assert [c['id'] for c in menu] == ['overview', 'procurement']
    assert len(menu[0]['items']) == len(get_category_by_id('overview').items)
    assert [i['href'] for i in menu[1]['items']] == ['/inventory']


def test_build_menu_keeps_category_whose_items_are_all_filtered_out():
    access = RoleMenuAccess(
        categories=('overview',),
        menu_items=(MenuItemGrant('overview', '/gone'),),
    )
    menu = build_menu(NAVIGATION_CATEGORIES, access)
    assert [c['id'] for c in menu] == ['overview']
    assert menu[0]['items'] == []
