"""
Tests for the address book.
The default-address invariant: a profile with addresses has exactly one default.
"""
import pytest
from rest_framework import status
from rest_framework.exceptions import NotFound, PermissionDenied

from addresses import services
from addresses.models import Address


def make_address_data(department, municipality, **overrides):
    data = {
        'title': 'Casa',
        'first_name': 'Ana',
        'last_name': 'Gómez',
        'phone': '3001234567',
        'department': department,
        'municipality': municipality,
        'address': 'Calle 10 # 43-12',
    }
    data.update(overrides)
    return data


def defaults_of(profile):
    return list(Address.objects.filter(profile=profile, is_default=True))


# ============== Service Tests ==============

@pytest.mark.django_db
class TestAddressServices:

    def test_first_address_becomes_default(self, customer_profile, department, municipality):
        address = services.create_address(
            customer_profile, make_address_data(department, municipality, is_default=False)
        )

        assert address.is_default is True
        assert address.department == department
        assert address.municipality == municipality

    def test_second_address_is_not_default_unless_requested(self, customer_profile, department, municipality):
        first = services.create_address(customer_profile, make_address_data(department, municipality))
        second = services.create_address(customer_profile, make_address_data(department, municipality, title='Oficina'))

        assert second.is_default is False
        assert defaults_of(customer_profile) == [first]

    def test_new_default_clears_previous(self, customer_profile, department, municipality):
        services.create_address(customer_profile, make_address_data(department, municipality))
        second = services.create_address(
            customer_profile, make_address_data(department, municipality, title='Oficina', is_default=True)
        )

        assert defaults_of(customer_profile) == [second]

    def test_update_promotes_and_clears_siblings(self, customer_profile, department, municipality):
        first = services.create_address(customer_profile, make_address_data(department, municipality))
        second = services.create_address(customer_profile, make_address_data(department, municipality, title='Oficina'))

        services.update_address(second.id, customer_profile, {'is_default': True})

        first.refresh_from_db()
        assert first.is_default is False
        assert defaults_of(customer_profile) == [Address.objects.get(pk=second.id)]

    def test_demoting_current_default_is_ignored(self, customer_profile, department, municipality):
        first = services.create_address(customer_profile, make_address_data(department, municipality))

        updated = services.update_address(first.id, customer_profile, {'is_default': False, 'title': 'Apto'})

        assert updated.is_default is True
        assert updated.title == 'Apto'

    def test_delete_default_promotes_sibling(self, customer_profile, department, municipality):
        first = services.create_address(customer_profile, make_address_data(department, municipality))
        second = services.create_address(customer_profile, make_address_data(department, municipality, title='Oficina'))

        services.delete_address(first.id, customer_profile)

        second.refresh_from_db()
        assert second.is_default is True
        assert Address.objects.filter(profile=customer_profile).count() == 1

    def test_delete_promotes_newest_remaining(self, customer_profile, department, municipality):
        first = services.create_address(customer_profile, make_address_data(department, municipality))
        services.create_address(customer_profile, make_address_data(department, municipality, title='B'))
        newest = services.create_address(customer_profile, make_address_data(department, municipality, title='C'))

        services.delete_address(first.id, customer_profile)

        assert defaults_of(customer_profile) == [Address.objects.get(pk=newest.id)]

    def test_delete_last_address_leaves_empty_book(self, customer_profile, department, municipality):
        only = services.create_address(customer_profile, make_address_data(department, municipality))

        services.delete_address(only.id, customer_profile)

        assert not Address.objects.filter(profile=customer_profile).exists()

    def test_list_puts_default_first(self, customer_profile, department, municipality):
        services.create_address(customer_profile, make_address_data(department, municipality, title='A'))
        services.create_address(customer_profile, make_address_data(department, municipality, title='B'))
        services.create_address(customer_profile, make_address_data(department, municipality, title='C'))

        titles = [a.title for a in services.list_addresses(customer_profile)]
        assert titles == ['A', 'C', 'B']

    def test_invariant_holds_through_mixed_operations(self, customer_profile, department, municipality):
        a = services.create_address(customer_profile, make_address_data(department, municipality, title='A'))
        b = services.create_address(customer_profile, make_address_data(department, municipality, title='B', is_default=True))
        c = services.create_address(customer_profile, make_address_data(department, municipality, title='C'))
        services.update_address(c.id, customer_profile, {'is_default': True})
        services.delete_address(c.id, customer_profile)
        services.delete_address(a.id, customer_profile)

        assert len(defaults_of(customer_profile)) == 1
        assert defaults_of(customer_profile)[0].id == b.id

    def test_missing_address(self, customer_profile):
        with pytest.raises(NotFound):
            services.get_address('00000000-0000-0000-0000-000000000000', customer_profile)

    def test_foreign_address_is_forbidden(self, default_address, other_profile):
        with pytest.raises(PermissionDenied):
            services.get_address(default_address.id, other_profile)
        with pytest.raises(PermissionDenied):
            services.delete_address(default_address.id, other_profile)

        assert Address.objects.filter(pk=default_address.id).exists()


# ============== API Tests ==============

@pytest.mark.django_db
class TestAddressAPI:

    def test_create_first_address(self, customer_client, address_data):
        response = customer_client.post('/api/addresses/', address_data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['is_default'] is True
        assert response.data['department']['name'] == 'Antioquia'
        assert response.data['municipality']['name'] == 'Medellín'
        assert response.data['full_name'] == 'Ana Gómez'

    def test_municipality_must_belong_to_department(self, customer_client, address_data, other_municipality):
        address_data['municipality_id'] = str(other_municipality.id)

        response = customer_client.post('/api/addresses/', address_data)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'municipality_id' in response.data['details']

    def test_list_only_own_addresses(self, customer_client, other_customer_client, address_data):
        customer_client.post('/api/addresses/', address_data)
        other_customer_client.post('/api/addresses/', {**address_data, 'title': 'Otra'})

        response = customer_client.get('/api/addresses/')

        assert response.status_code == status.HTTP_200_OK
        assert [a['title'] for a in response.data] == ['Casa']

    def test_patch_sets_default(self, customer_client, default_address, address_data):
        created = customer_client.post('/api/addresses/', {**address_data, 'title': 'Oficina'})

        response = customer_client.patch(f"/api/addresses/{created.data['id']}/", {'is_default': True})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_default'] is True
        default_address.refresh_from_db()
        assert default_address.is_default is False

    def test_other_profile_gets_403(self, other_customer_client, default_address):
        response = other_customer_client.patch(f'/api/addresses/{default_address.id}/', {'title': 'Mía'})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()['error']['message'] == 'You do not have access to this address'

    def test_missing_address_gets_404(self, customer_client):
        response = customer_client.get('/api/addresses/00000000-0000-0000-0000-000000000000/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_answers_204(self, customer_client, default_address):
        response = customer_client.delete(f'/api/addresses/{default_address.id}/')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Address.objects.filter(pk=default_address.id).exists()

    def test_anonymous_is_rejected(self, api_client, address_data):
        response = api_client.post('/api/addresses/', address_data)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
