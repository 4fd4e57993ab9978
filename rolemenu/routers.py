"""
URL mappings for the menu access API.

Trailing slashes are omitted to match the paths the front-end calls.
"""
from django.urls import path, include

from .views import health
from .views import navigation
from .auth_views import login_view, jwt_refresh_view, jwt_logout_view
from .views.roles import roles, role_detail
from .views.menu_config import role_menu_config, my_menu_access
from .views.queues import queue_service_points


urlpatterns = [
    path('metrics', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/refresh', jwt_refresh_view),
    path('api/auth/logout', jwt_logout_view),

    path('api/roles', roles),
    path('api/roles/<int:pk>', role_detail),
    path('api/roles/<int:pk>/menu-config', role_menu_config),
    path('api/users/me/menu-access', my_menu_access),

    path('api/navigation', navigation.navigation_menu),
    path('api/navigation/active-category', navigation.navigation_select_category),
    path('api/navigation/pathname', navigation.navigation_pathname),
    path('api/navigation/tabs', navigation.navigation_tabs),
    path('api/navigation/registry', navigation.navigation_registry),

    path('api/queue/service-points', queue_service_points),
]
