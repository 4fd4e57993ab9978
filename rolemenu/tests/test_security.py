import pytest
from django.urls import reverse
from rest_framework.test import APIClient
from rolemenu.models import Role, User

pytestmark = pytest.mark.django_db


def login(client, username, password):
    r = client.post(reverse('login_view'), {'username': username, 'password': password}, format='json')
    assert r.status_code == 200
    client.credentials(HTTP_AUTHORIZATION=f"Token {r.data['token']}")
    return r


def test_no_role_bypass_in_login():
    client = APIClient()
    nurse = Role.objects.create(name='nurse')
    Role.objects.create(name='administrator')
    u = User.objects.create_user(username='u1', password='P@ssw0rd1', role=nurse)
    r = client.post(reverse('login_view'),
                    {'username': 'u1', 'password': 'P@ssw0rd1', 'role': 'administrator'}, format='json')
    assert r.status_code == 200
    assert r.data['user']['role'] == 'nurse'
    u.refresh_from_db()
    assert u.role == nurse
    client.credentials(HTTP_AUTHORIZATION=f"Token {r.data['token']}")
    assert client.get('/api/roles').status_code == 403


def test_login_returns_jwt_and_legacy_token():
    client = APIClient()
    User.objects.create_user(username='u_jwt', password='P@ssw0rd1')
    r = client.post(reverse('login_view'), {'username': 'u_jwt', 'password': 'P@ssw0rd1'}, format='json')
    assert r.status_code == 200
    assert 'jwt_access' in r.data and r.data['jwt_access']
    assert 'jwt_refresh' in r.data and r.data['jwt_refresh']
    assert 'token' in r.data and r.data['token']
    assert r.data['user']['roleId'] is None


def test_login_with_bad_password_is_rejected_and_audited():
    from rolemenu.models import AuditEvent
    client = APIClient()
    User.objects.create_user(username='u2', password='P@ssw0rd1')
    r = client.post(reverse('login_view'), {'username': 'u2', 'password': 'wrong'}, format='json')
    assert r.status_code == 400
    assert r.data['ok'] is False
    assert AuditEvent.objects.filter(action='login', detail__result='fail').count() == 1


def test_jwt_access_token_authenticates():
    client = APIClient()
    User.objects.create_user(username='u3', password='P@ssw0rd1')
    r = client.post(reverse('login_view'), {'username': 'u3', 'password': 'P@ssw0rd1'}, format='json')
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {r.data['jwt_access']}")
    assert client.get('/api/users/me/menu-access').status_code == 200


def test_logout_blacklists_refresh_and_drops_token():
    client = APIClient()
    User.objects.create_user(username='u4', password='P@ssw0rd1')
    r = login(client, 'u4', 'P@ssw0rd1')
    resp = client.post('/api/auth/logout', {}, format='json')
    assert resp.status_code == 200
    assert resp.data['blacklisted'] == 1
    # the legacy token is gone
    assert client.get('/api/navigation').status_code == 401
    # the refresh token can no longer be used
    anon = APIClient()
    resp = anon.post('/api/auth/refresh', {'refresh': r.data['jwt_refresh']}, format='json')
    assert resp.status_code == 401


def test_refresh_returns_jwt_access():
    client = APIClient()
    User.objects.create_user(username='u5', password='P@ssw0rd1')
    r = client.post(reverse('login_view'), {'username': 'u5', 'password': 'P@ssw0rd1'}, format='json')
    resp = APIClient().post('/api/auth/refresh', {'refresh': r.data['jwt_refresh']}, format='json')
    assert resp.status_code == 200
    assert resp.data['jwt_access']


@pytest.mark.parametrize('method,url', [
    ('get', '/api/roles'),
    ('get', '/api/users/me/menu-access'),
    ('get', '/api/navigation'),
    ('post', '/api/navigation/pathname'),
    ('get', '/api/navigation/tabs?pagePath=/inpatient'),
    ('get', '/api/queue/service-points'),
])
def test_endpoints_require_authentication(method, url):
    resp = getattr(APIClient(), method)(url)
    assert resp.status_code == 401
    assert resp.data['ok'] is False
    assert resp.data['error']['code'] == 'not_authenticated'


def test_menu_config_requires_admin():
    client = APIClient()
    nurse = Role.objects.create(name='nurse')
    User.objects.create_user(username='n1', password='P@ssw0rd1', role=nurse)
    login(client, 'n1', 'P@ssw0rd1')
    assert client.get(f'/api/roles/{nurse.id}/menu-config').status_code == 403
    resp = client.post(f'/api/roles/{nurse.id}/menu-config',
                       {'categories': [{'categoryId': 'administrative'}]}, format='json')
    assert resp.status_code == 403
    assert not nurse.menu_categories.exists()


def test_inactive_admin_role_is_not_admin():
    client = APIClient()
    admin_role = Role.objects.create(name='administrator', is_active=False)
    User.objects.create_user(username='a1', password='P@ssw0rd1', role=admin_role)
    login(client, 'a1', 'P@ssw0rd1')
    assert client.get('/api/roles').status_code == 403


def test_menu_config_for_missing_role_is_404():
    client = APIClient()
    admin_role = Role.objects.create(name='administrator')
    User.objects.create_user(username='a2', password='P@ssw0rd1', role=admin_role)
    login(client, 'a2', 'P@ssw0rd1')
    assert client.get('/api/roles/424242/menu-config').status_code == 404
    assert client.post('/api/roles/424242/menu-config', {'categories': []}, format='json').status_code == 404


def test_role_with_active_users_cannot_be_deleted():
    client = APIClient()
    admin_role = Role.objects.create(name='administrator')
    doctor = Role.objects.create(name='doctor')
    User.objects.create_user(username='a3', password='P@ssw0rd1', role=admin_role)
    User.objects.create_user(username='d1', password='P@ssw0rd1', role=doctor)
    login(client, 'a3', 'P@ssw0rd1')
    resp = client.delete(f'/api/roles/{doctor.id}')
    assert resp.status_code == 400
    assert Role.objects.filter(pk=doctor.pk).exists()

    User.objects.filter(username='d1').update(is_active=False)
    resp = client.delete(f'/api/roles/{doctor.id}')
    assert resp.status_code == 200
    assert User.objects.get(username='d1').role is None


def test_role_names_are_sanitized():
    client = APIClient()
    admin_role = Role.objects.create(name='administrator')
    User.objects.create_user(username='a4', password='P@ssw0rd1', role=admin_role)
    login(client, 'a4', 'P@ssw0rd1')
    resp = client.post('/api/roles', {'roleName': '<script>x</script>Lab', 'description': '<img src=x onerror=alert(1)>ok'}, format='json')
    assert resp.status_code == 201
    assert '<script>' not in resp.data['roleName']
    assert '<img' not in resp.data['description']


def test_login_resets_navigation_state():
    client = APIClient()
    User.objects.create_user(username='u6', password='P@ssw0rd1')
    login(client, 'u6', 'P@ssw0rd1')
    client.post('/api/navigation/pathname', {'pathname': '/billing'}, format='json')
    assert client.get('/api/navigation').data['activeCategory'] == 'financial'
    login(APIClient(), 'u6', 'P@ssw0rd1')
    assert client.get('/api/navigation').data['activeCategory'] == 'overview'


def test_healthz():
    resp = APIClient().get('/healthz')
    assert resp.status_code == 200
    assert resp.json()['ok'] is True
