"""
Tests for the users module.
Covers: profile auto-creation, role permissions, profile endpoints.
"""
import pytest
from rest_framework import status
from users.models import User, Profile
from users.permissions import IsAdmin, IsAdminOrReadOnly


# ============== Model Tests ==============

@pytest.mark.django_db
class TestProfileModel:
    """Profile creation and helpers"""

    def test_profile_created_with_user(self):
        user = User.objects.create_user(username='nuevo', email='nuevo@test.com', password='testpass123')

        assert Profile.objects.filter(user=user).count() == 1
        assert user.profile.role == Profile.Role.CUSTOMER
        assert user.is_admin is False

    def test_superuser_gets_admin_profile(self):
        user = User.objects.create_superuser(username='root', email='root@test.com', password='testpass123')

        assert user.profile.role == Profile.Role.ADMIN
        assert user.is_admin is True

    def test_full_name(self, customer_profile):
        customer_profile.first_name = 'Ana'
        customer_profile.last_name = 'Gómez'

        assert customer_profile.full_name == 'Ana Gómez'

    def test_user_ids_are_uuids(self, customer_user):
        assert len(str(customer_user.id)) == 36


# ============== Permission Tests ==============

class DummyRequest:
    def __init__(self, user, method='GET'):
        self.user = user
        self.method = method


@pytest.mark.django_db
class TestPermissions:

    def test_is_admin(self, admin_user, customer_user):
        assert IsAdmin().has_permission(DummyRequest(admin_user), None) is True
        assert IsAdmin().has_permission(DummyRequest(customer_user), None) is False

    def test_is_admin_or_read_only(self, customer_user):
        permission = IsAdminOrReadOnly()

        assert permission.has_permission(DummyRequest(customer_user, 'GET'), None) is True
        assert permission.has_permission(DummyRequest(customer_user, 'PATCH'), None) is False


# ============== API Tests ==============

@pytest.mark.django_db
class TestProfileMeAPI:

    def test_get_own_profile(self, customer_client, customer_user):
        response = customer_client.get('/api/profiles/me/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['email'] == customer_user.email
        assert response.data['role'] == Profile.Role.CUSTOMER

    def test_response_is_enveloped(self, customer_client):
        response = customer_client.get('/api/profiles/me/')
        body = response.json()

        assert body['success'] is True
        assert body['data']['role'] == 'CUSTOMER'

    def test_update_own_profile(self, customer_client, customer_profile):
        response = customer_client.patch('/api/profiles/me/', {'phone': '3000000000', 'department': 'Antioquia'})

        assert response.status_code == status.HTTP_200_OK
        customer_profile.refresh_from_db()
        assert customer_profile.phone == '3000000000'
        assert customer_profile.department == 'Antioquia'

    def test_role_is_not_self_editable(self, customer_client, customer_profile):
        customer_client.patch('/api/profiles/me/', {'role': 'ADMIN'})

        customer_profile.refresh_from_db()
        assert customer_profile.role == Profile.Role.CUSTOMER

    def test_anonymous_is_rejected(self, api_client):
        response = api_client.get('/api/profiles/me/')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()['success'] is False


@pytest.mark.django_db
class TestProfileAdminAPI:

    def test_admin_lists_profiles(self, admin_client, customer_user, other_customer_user):
        response = admin_client.get('/api/profiles/')

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 3

    def test_filter_by_role(self, admin_client, customer_user):
        response = admin_client.get('/api/profiles/', {'role': 'customer'})

        assert response.status_code == status.HTTP_200_OK
        assert {p['role'] for p in response.data} == {'CUSTOMER'}

    def test_orders_count(self, admin_client, order, customer_profile):
        response = admin_client.get('/api/profiles/')

        row = next(p for p in response.data if p['id'] == str(customer_profile.id))
        assert row['orders_count'] == 1

    def test_detail_includes_orders(self, admin_client, order, customer_profile):
        response = admin_client.get(f'/api/profiles/{customer_profile.id}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['orders'][0]['order_number'] == order.order_number

    def test_customer_cannot_list_profiles(self, customer_client):
        response = customer_client.get('/api/profiles/')

        assert response.status_code == status.HTTP_403_FORBIDDEN
