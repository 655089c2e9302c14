import pytest
from rest_framework import status
from locations.models import Department, Municipality


@pytest.mark.django_db
class TestLocationsAPI:
    """Public reference data endpoints"""

    def test_departments_ordered_by_name(self, api_client):
        Department.objects.create(code='76', name='Valle del Cauca')
        Department.objects.create(code='05', name='Antioquia')

        response = api_client.get('/api/locations/departments/')

        assert response.status_code == status.HTTP_200_OK
        assert [d['name'] for d in response.data] == ['Antioquia', 'Valle del Cauca']

    def test_municipalities_of_department(self, api_client, department, municipality, other_municipality):
        Municipality.objects.create(code='05088', name='Bello', department=department)

        response = api_client.get(f'/api/locations/municipalities/{department.id}/')

        assert response.status_code == status.HTTP_200_OK
        assert [m['name'] for m in response.data] == ['Bello', 'Medellín']

    def test_unknown_department_has_no_municipalities(self, api_client, municipality):
        response = api_client.get('/api/locations/municipalities/00000000-0000-0000-0000-000000000000/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []
