"""
Tests for the admin dashboard endpoints.
"""
import pytest
from datetime import datetime, time, timedelta
from django.utils import timezone
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from catalog.models import Collection, Product, Variant
from orders.models import Order, OrderItem
from users.models import Profile

User = get_user_model()


def make_order(number, product, status, created_at=None, quantity=1, color='Azul'):
    variant = product.variants.get(color=color)
    order = Order.objects.create(
        order_number=number,
        customer_first_name='Luis',
        customer_last_name='Pérez',
        customer_email='luis@test.com',
        customer_phone='3109876543',
        department='Antioquia',
        city='Medellín',
        shipping_address={'city': 'Medellín', 'address': 'Calle 1', 'phone': '3109876543'},
        total_amount=85000 * quantity,
        status=status
    )
    OrderItem.objects.create(order=order, product=product, variant=variant, sku=variant.sku, quantity=quantity, unit_price=85000)
    if created_at is not None:
        Order.objects.filter(pk=order.pk).update(created_at=created_at)
    return order


def local_today_at(hour, minute=0):
    return timezone.make_aware(datetime.combine(timezone.localdate(), time(hour, minute)))


@pytest.mark.django_db
class TestDashboardStats:

    def test_stats(self, admin_client, product, quote):
        make_order(1, product, Order.Status.PAID)
        make_order(2, product, Order.Status.PAID, created_at=timezone.now() - timedelta(days=2))

        response = admin_client.get('/api/dashboard/stats/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['daily_orders'] == 1
        assert response.data['low_stock_count'] == 1
        assert response.data['low_stock_variants'][0]['sku'] == 'TB-VERANO2024-PLAYA-ROJO'
        assert response.data['pending_quotes'] == 1

    def test_customer_forbidden(self, customer_client):
        response = customer_client.get('/api/dashboard/stats/')

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestProductionBatch:

    def test_excludes_unpaid_and_cancelled(self, admin_client, product):
        make_order(1, product, Order.Status.PAID, quantity=2)
        make_order(2, product, Order.Status.IN_PRODUCTION, quantity=3)
        make_order(3, product, Order.Status.PENDING_PAYMENT, quantity=5)
        make_order(4, product, Order.Status.CANCELLED, quantity=7)
        make_order(5, product, Order.Status.PAID, quantity=1, color='Rojo')

        response = admin_client.get('/api/dashboard/production-batch/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_units'] == 6
        assert response.data['items'][0] == {
            'sku': 'TB-VERANO2024-PLAYA-AZUL', 'product': 'Playa', 'quantity': 5, 'orders': 2
        }

    def test_cutoff_keeps_todays_morning_orders(self, admin_client, product):
        make_order(1, product, Order.Status.PAID, created_at=local_today_at(9), quantity=2)
        make_order(2, product, Order.Status.PAID, created_at=local_today_at(15), quantity=4)
        make_order(3, product, Order.Status.PAID, created_at=local_today_at(9) - timedelta(days=1), quantity=8)

        response = admin_client.get('/api/dashboard/production-batch/', {'cutoff': 'true'})

        assert response.data['cutoff'] is True
        assert response.data['total_units'] == 2


class ProductionBatchAPITest(APITestCase):
    """Production batch grouping across several orders"""

    def setUp(self):
        self.user = User.objects.create_user(
            username='owner',
            password='ownerpass123',
            email='owner@test.com'
        )
        profile = self.user.profile
        profile.role = Profile.Role.ADMIN
        profile.save()
        collection = Collection.objects.create(name='Mercado', slug='mercado')
        self.product = Product.objects.create(
            name='Bolsa', slug='bolsa', base_price=60000, min_price=50000, collection=collection
        )
        Variant.objects.create(product=self.product, sku='TB-MERCADO-BOLSA-AZUL', color='Azul', stock=40)
        Variant.objects.create(product=self.product, sku='TB-MERCADO-BOLSA-ROJO', color='Rojo', stock=40)
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)

    def test_groups_by_sku(self):
        """Units are summed per SKU and ordered by quantity"""
        make_order(1, self.product, Order.Status.PAID, quantity=1, color='Rojo')
        make_order(2, self.product, Order.Status.PAID, quantity=4, color='Azul')
        make_order(3, self.product, Order.Status.SHIPPED, quantity=2, color='Rojo')

        response = self.client.get('/api/dashboard/production-batch/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            [(row['sku'], row['quantity'], row['orders']) for row in response.data['items']],
            [('TB-MERCADO-BOLSA-AZUL', 4, 1), ('TB-MERCADO-BOLSA-ROJO', 3, 2)]
        )
        self.assertEqual(response.data['total_units'], 7)

    def test_empty_batch(self):
        """No confirmed orders means nothing to produce"""
        make_order(1, self.product, Order.Status.PENDING_PAYMENT, quantity=3)

        response = self.client.get('/api/dashboard/production-batch/')

        self.assertEqual(response.data['items'], [])
        self.assertEqual(response.data['total_units'], 0)
