"""
Navigation endpoints for the signed-in user.

The front-end asks for its filtered menu once per page load, reports
manual category picks and router path changes, and asks which tabs of a
tabbed page it may render.
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from ..filters import build_menu, filter_navigation_categories, filter_tabs
from ..navigation import NAVIGATION_CATEGORIES, PAGE_TABS, QUEUE_SERVICE_POINTS, get_category_by_id, get_page_tabs
from ..permissions import IsSystemAdmin
from ..serializers.navigation import ActiveCategorySerializer, PathnameSerializer, TabsQuerySerializer
from ..services.menu_access import get_user_menu_access
from ..services.navigation import load_tracker, locked_tracker


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def navigation_menu(request):
    """Filtered categories with their visible items and the active category."""
    access = get_user_menu_access(request.user)
    tracker = load_tracker(request.user)
    return Response({
        'activeCategory': tracker.active_category,
        'phase': tracker.phase,
        'categories': build_menu(NAVIGATION_CATEGORIES, access),
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def navigation_select_category(request):
    """Manual category pick from the top navigation."""
    s = ActiveCategorySerializer(data=request.data)
    s.is_valid(raise_exception=True)
    category_id = s.validated_data['categoryId']
    category = get_category_by_id(category_id)
    if category is None:
        return Response({'detail': f'unknown category {category_id}'}, status=status.HTTP_400_BAD_REQUEST)
    access = get_user_menu_access(request.user)
    if category not in filter_navigation_categories(NAVIGATION_CATEGORIES, access):
        return Response({'detail': 'category not permitted'}, status=status.HTTP_403_FORBIDDEN)
    with locked_tracker(request.user) as tracker:
        tracker.select_category(category.id)
    return Response({'activeCategory': tracker.active_category, 'phase': tracker.phase})


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def navigation_pathname(request):
    """Router path change reported by the client."""
    s = PathnameSerializer(data=request.data)
    s.is_valid(raise_exception=True)
    with locked_tracker(request.user) as tracker:
        tracker.observe_pathname(s.validated_data['pathname'])
    return Response({'activeCategory': tracker.active_category, 'phase': tracker.phase})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def navigation_tabs(request):
    """Tabs of ``pagePath`` visible to the current user.

    ``pagePath`` may be concrete (``/patients/42``) or a route pattern
    (``/patients/[id]``).  Pages without registered tabs yield an empty
    list.
    """
    s = TabsQuerySerializer(data=request.query_params)
    s.is_valid(raise_exception=True)
    resolved = get_page_tabs(s.validated_data['pagePath'])
    if resolved is None:
        return Response({'pagePath': s.validated_data['pagePath'], 'tabs': []})
    pattern, tabs = resolved
    access = get_user_menu_access(request.user)
    return Response({
        'pagePath': pattern,
        'tabs': [t.to_dict() for t in filter_tabs(tabs, pattern, access)],
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsSystemAdmin])
def navigation_registry(request):
    """Unfiltered registry for the role configuration screen."""
    return Response({
        'categories': [c.to_dict() for c in NAVIGATION_CATEGORIES],
        'pageTabs': {path: [t.to_dict() for t in tabs] for path, tabs in PAGE_TABS.items()},
        'queueServicePoints': [sp.to_dict() for sp in QUEUE_SERVICE_POINTS],
    })
