"""
Tests for B2B quote intake.
"""
import pytest
from datetime import datetime, timezone as dt_timezone
from unittest import mock
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework import status
from rest_framework.exceptions import NotFound

from b2b import services
from b2b.models import B2BQuote
from main.storage import ObjectStorage


def quote_data(**overrides):
    data = {
        'business_name': 'Café Central',
        'quantity': 60,
        'department': 'Antioquia',
        'municipality': 'Medellín',
        'neighborhood': 'Laureles',
        'address': 'Circular 1 # 70-01',
        'contact_phone': '3005550000',
        'qr_type': 'INSTAGRAM',
        'qr_data': '@cafecentral',
    }
    data.update(overrides)
    return data


class TestPackageRules:

    @pytest.mark.parametrize('quantity,expected', [
        (1, B2BQuote.Package.STARTER),
        (49, B2BQuote.Package.STARTER),
        (50, B2BQuote.Package.PRO),
        (200, B2BQuote.Package.PRO),
        (201, B2BQuote.Package.EVENTO),
    ])
    def test_calculate_package(self, quantity, expected):
        assert services.calculate_package(quantity) == expected

    def test_request_below_minimum_keeps_computed_tier(self):
        assert services.resolve_package(30, B2BQuote.Package.PRO) == B2BQuote.Package.STARTER

    def test_request_meeting_minimum_wins(self):
        assert services.resolve_package(200, B2BQuote.Package.EVENTO) == B2BQuote.Package.EVENTO
        assert services.resolve_package(100, B2BQuote.Package.STARTER) == B2BQuote.Package.STARTER

    def test_starter_minimum(self):
        assert services.resolve_package(11, B2BQuote.Package.STARTER) == B2BQuote.Package.STARTER
        assert services.resolve_package(60, None) == B2BQuote.Package.PRO

    def test_logo_key(self):
        now = datetime(2024, 1, 1, tzinfo=dt_timezone.utc)

        assert services.logo_key('mi  logo final.png', now=now) == 'b2b-quotes/1704067200000-mi-logo-final.png'


@pytest.mark.django_db
class TestQuoteServices:

    def test_create_quote_returns_whatsapp_payload(self):
        quote, whatsapp = services.create_quote(quote_data(package=B2BQuote.Package.PRO))

        assert quote.package == B2BQuote.Package.PRO
        assert quote.status == B2BQuote.Status.PENDING
        assert quote.logo_url is None
        assert whatsapp['phone'] == '573000000000'
        assert str(quote.id) in whatsapp['message']
        assert 'Café Central' in whatsapp['message']

    def test_approve_quote(self, quote):
        approved = services.approve_quote(quote.id)

        assert approved.status == B2BQuote.Status.DESIGN_APPROVED

    def test_approve_missing_quote(self):
        with pytest.raises(NotFound):
            services.approve_quote('00000000-0000-0000-0000-000000000000')


@pytest.mark.django_db
class TestQuoteAPI:

    def test_public_json_quote(self, api_client):
        response = api_client.post('/api/b2b/quote/', quote_data(quantity=30, package='PRO'), format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['quote']['package'] == 'STARTER'
        assert response.data['whatsapp_payload']['message'].startswith('Hola, soy Café Central')

    def test_multipart_quote_with_logo(self, api_client, settings, tmp_path):
        settings.MEDIA_ROOT = tmp_path
        logo = SimpleUploadedFile('mi logo.png', b'\x89PNG fake', content_type='image/png')

        response = api_client.post('/api/b2b/quote/', {**quote_data(), 'logo': logo}, format='multipart')

        assert response.status_code == status.HTTP_201_CREATED
        logo_url = response.data['quote']['logo_url']
        assert 'logo-corporativo/b2b-quotes/' in logo_url
        assert logo_url.endswith('-mi-logo.png')

    def test_upload_failure_is_502_and_stores_nothing(self, api_client, settings, tmp_path):
        settings.MEDIA_ROOT = tmp_path
        logo = SimpleUploadedFile('logo.png', b'\x89PNG fake', content_type='image/png')

        with mock.patch('django.core.files.storage.FileSystemStorage.save', side_effect=OSError('bucket gone')):
            response = api_client.post('/api/b2b/quote/', {**quote_data(), 'logo': logo}, format='multipart')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()['error']['message'] == 'Error uploading file to object storage'
        assert not B2BQuote.objects.exists()

    def test_invalid_quantity(self, api_client):
        response = api_client.post('/api/b2b/quote/', quote_data(quantity=0), format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_admin_lists_and_approves(self, admin_client, quote):
        listing = admin_client.get('/api/b2b/quotes/')
        approved = admin_client.patch(f'/api/b2b/quotes/{quote.id}/approve/')

        assert [q['id'] for q in listing.data] == [str(quote.id)]
        assert approved.data['status'] == 'DESIGN_APPROVED'

    def test_customer_cannot_approve(self, customer_client, quote):
        response = customer_client.patch(f'/api/b2b/quotes/{quote.id}/approve/')

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestObjectStorage:

    def test_handle_opens_and_closes(self, settings, tmp_path):
        settings.MEDIA_ROOT = tmp_path
        storage = ObjectStorage()

        with storage:
            assert storage.is_open
            url = storage.upload('logo-corporativo', 'b2b-quotes/1-logo.png', b'data', 'image/png')

        assert not storage.is_open
        assert url.endswith('logo-corporativo/b2b-quotes/1-logo.png')

    def test_upload_requires_open_handle(self):
        with pytest.raises(RuntimeError):
            ObjectStorage().upload('logo-corporativo', 'b2b-quotes/1-logo.png', b'data')
