"""
Tests for the audit trail: middleware capture, snapshots, task and listing.
"""
import importlib.util
import pytest
from pathlib import Path
from unittest import mock
from django.conf import settings as django_settings
from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError
from rest_framework import status

from audit.middleware import entity_from_path, entity_id_from
from audit.models import AuditLog
from audit.snapshots import capture_snapshot
from audit.tasks import record_audit_log


class TestHelpers:

    def test_entity_from_path(self):
        assert entity_from_path('/api/products/123/') == 'products'
        assert entity_from_path('/api/b2b/quotes/1/approve/') == 'b2b'
        assert entity_from_path('/admin/login/') is None
        assert entity_from_path('/api/') is None

    def test_entity_id_prefers_body(self):
        assert entity_id_from({'id': 'abc'}, {'pk': 'route'}) == 'abc'
        assert entity_id_from({'id': 42}, {}) == '42'
        assert entity_id_from({'id': 1.5}, {'pk': 'route'}) == '1.5'

    def test_entity_id_falls_back_to_route(self):
        assert entity_id_from({'id': {'nested': 1}}, {'pk': 'route'}) == 'route'
        assert entity_id_from({'id': True}, {'pk': 'route'}) == 'route'
        assert entity_id_from(None, {'id': 'by-id'}) == 'by-id'
        assert entity_id_from(None, {}) is None


@pytest.mark.django_db
class TestSnapshots:

    def test_product_snapshot(self, product):
        snapshot = capture_snapshot('products', str(product.id))

        assert snapshot['name'] == 'Playa'
        assert snapshot['id'] == str(product.id)

    def test_unknown_entity(self, product):
        assert capture_snapshot('addresses', str(product.id)) is None

    def test_lookup_failure_yields_none(self):
        assert capture_snapshot('products', 'not-a-uuid') is None


@pytest.mark.django_db
class TestRecordTask:

    def test_empty_payload_stored_as_json_null(self):
        record_audit_log('POST', 'products', payload={})

        log = AuditLog.objects.get()
        assert log.payload is None
        assert AuditLog.objects.filter(payload__isnull=True).count() == 0

    def test_persist_failure_is_swallowed(self):
        with mock.patch.object(AuditLog.objects, 'create', side_effect=DatabaseError('disk full')):
            assert record_audit_log('POST', 'products') is None

        assert not AuditLog.objects.exists()


@pytest.mark.django_db
class TestAuditMiddleware:

    def test_patch_records_previous_state(self, admin_client, admin_user, product):
        response = admin_client.patch(f'/api/products/{product.id}/', {'name': 'Playa Nueva'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        log = AuditLog.objects.get(action='PATCH')
        assert log.entity == 'products'
        assert log.entity_id == str(product.id)
        assert log.payload == {'name': 'Playa Nueva'}
        assert log.previous_data['name'] == 'Playa'
        assert log.user_id == admin_user.id

    def test_post_without_route_id(self, api_client, order_payload):
        api_client.post('/api/orders/', order_payload, format='json')

        log = AuditLog.objects.get(entity='orders')
        assert log.action == 'POST'
        assert log.entity_id is None
        assert log.previous_data is None
        assert log.user_id is None

    def test_failed_request_not_recorded(self, admin_client, product):
        admin_client.patch(f'/api/products/{product.id}/', {'min_price': 999999}, format='json')

        assert not AuditLog.objects.exists()

    def test_reads_not_recorded(self, api_client, product):
        api_client.get('/api/products/list/')

        assert not AuditLog.objects.exists()

    def test_dispatch_failure_does_not_break_response(self, admin_client, product):
        with mock.patch('audit.middleware.record_audit_log.delay', side_effect=RuntimeError('broker down')):
            response = admin_client.patch(f'/api/products/{product.id}/', {'name': 'Otra'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert not AuditLog.objects.exists()


SETTINGS_PATH = Path(django_settings.BASE_DIR) / 'main' / 'settings.py'
CELERY_ENV = ('CELERY_BROKER_URL', 'REDIS_URL', 'CELERY_TASK_ALWAYS_EAGER', 'DJANGO_DEBUG', 'DJANGO_SECRET_KEY')


def load_settings(monkeypatch, **env):
    """Execute a fresh copy of the settings module under the given environment"""
    for name in CELERY_ENV:
        monkeypatch.delenv(name, raising=False)
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    monkeypatch.setattr('dotenv.load_dotenv', lambda *args, **kwargs: None)
    module_spec = importlib.util.spec_from_file_location('fresh_settings', SETTINGS_PATH)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


class TestCeleryDefaults:

    def test_no_broker_runs_tasks_inline(self, monkeypatch):
        loaded = load_settings(monkeypatch)

        assert loaded.CELERY_TASK_ALWAYS_EAGER is True
        assert loaded.CELERY_BROKER_URL == 'memory://'

    def test_configured_broker_queues_tasks(self, monkeypatch):
        loaded = load_settings(monkeypatch, REDIS_URL='redis://cache:6379/0')

        assert loaded.CELERY_TASK_ALWAYS_EAGER is False
        assert loaded.CELERY_BROKER_URL == 'redis://cache:6379/0'

    def test_production_requires_broker(self, monkeypatch):
        with pytest.raises(ImproperlyConfigured):
            load_settings(monkeypatch, DJANGO_DEBUG='false', DJANGO_SECRET_KEY='prod-secret')


@pytest.mark.django_db
class TestAuditWithDefaultSettings:

    def test_patch_is_persisted(self, monkeypatch, settings, admin_client, product):
        """Audit rows are written when no broker is configured"""
        from main.celery import app as celery_app
        loaded = load_settings(monkeypatch)
        settings.CELERY_TASK_ALWAYS_EAGER = loaded.CELERY_TASK_ALWAYS_EAGER
        settings.CELERY_BROKER_URL = loaded.CELERY_BROKER_URL
        monkeypatch.setattr(celery_app.conf, 'task_always_eager', loaded.CELERY_TASK_ALWAYS_EAGER)

        response = admin_client.patch(f'/api/products/{product.id}/', {'name': 'Playa Nueva'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert AuditLog.objects.filter(action='PATCH', entity='products').count() == 1


@pytest.mark.django_db
class TestAuditAPI:

    def make_logs(self, admin_user):
        for i in range(3):
            AuditLog.objects.create(action='POST', entity='products', entity_id=str(i), user=admin_user)
        AuditLog.objects.create(action='DELETE', entity='orders', entity_id='9')

    def test_list_with_window(self, admin_client, admin_user):
        self.make_logs(admin_user)

        response = admin_client.get('/api/audit/', {'skip': 1, 'take': 2})
        body = response.json()

        assert response.status_code == status.HTTP_200_OK
        assert len(body['data']) == 2
        assert body['metadata'] == {'total': 4, 'skip': 1, 'take': 2}

    def test_filters(self, admin_client, admin_user):
        self.make_logs(admin_user)

        by_entity = admin_client.get('/api/audit/', {'entity': 'orders'})
        by_user = admin_client.get('/api/audit/', {'user_id': str(admin_user.id)})

        assert [log['entity_id'] for log in by_entity.data] == ['9']
        assert len(by_user.data) == 3
        assert by_user.data[0]['user_email'] == admin_user.email

    def test_invalid_window(self, admin_client):
        response = admin_client.get('/api/audit/', {'take': 'many'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_detail(self, admin_client, admin_user):
        log = AuditLog.objects.create(action='PATCH', entity='profiles', user=admin_user)

        response = admin_client.get(f'/api/audit/{log.id}/')

        assert response.data['entity'] == 'profiles'

    def test_customer_forbidden(self, customer_client):
        response = customer_client.get('/api/audit/')

        assert response.status_code == status.HTTP_403_FORBIDDEN
