"""
Tests for the orders module.
Covers: checkout validation, totals, numbering, default-address fallback,
status lifecycle and visibility rules.
"""
import pytest
from django.db import IntegrityError
from rest_framework import status
from rest_framework.exceptions import ValidationError

from orders import services
from orders.models import Order, OrderItem


def checkout_data(product, **overrides):
    variant = product.variants.get(color='Azul')
    data = {
        'customer_first_name': 'Luis',
        'customer_last_name': 'Pérez',
        'customer_email': 'luis@test.com',
        'customer_phone': '3109876543',
        'department': 'Antioquia',
        'city': 'Medellín',
        'shipping_address': {'city': 'Medellín', 'address': 'Carrera 43A # 1-50', 'phone': '3109876543'},
        'items': [{'product_id': product.id, 'variant_id': variant.id, 'quantity': 2, 'price': 85000}],
    }
    data.update(overrides)
    return data


# ============== Service Tests ==============

@pytest.mark.django_db
class TestCreateOrder:

    def test_guest_order(self, product):
        order = services.create_order(checkout_data(product))

        assert order.profile is None
        assert order.status == Order.Status.PENDING_PAYMENT
        assert order.total_amount == 170000
        assert order.items.get().sku == 'TB-VERANO2024-PLAYA-AZUL'

    def test_order_numbers_are_sequential(self, product):
        first = services.create_order(checkout_data(product))
        second = services.create_order(checkout_data(product))

        assert second.order_number == first.order_number + 1

    def test_variant_sku_wins(self, product):
        data = checkout_data(product)
        data['items'][0]['sku'] = 'SOMETHING-ELSE'

        order = services.create_order(data)

        assert order.items.get().sku == 'TB-VERANO2024-PLAYA-AZUL'

    def test_sku_resolves_variant(self, product):
        data = checkout_data(product, items=[
            {'product_id': product.id, 'sku': 'TB-VERANO2024-PLAYA-ROJO', 'quantity': 1, 'price': 80000},
        ])

        item = services.create_order(data).items.get()

        assert item.variant == product.variants.get(color='Rojo')

    def test_price_below_minimum_rejected(self, product):
        data = checkout_data(product)
        data['items'][0]['price'] = 1000

        with pytest.raises(ValidationError):
            services.create_order(data)
        assert not Order.objects.exists()

    def test_inactive_product_rejected(self, product):
        product.is_active = False
        product.save()

        with pytest.raises(ValidationError):
            services.create_order(checkout_data(product))

    def test_foreign_variant_rejected(self, product, collection):
        from catalog.models import Product, Variant
        other = Product.objects.create(name='Otro', slug='otro', base_price=1, min_price=1, collection=collection)
        foreign = Variant.objects.create(product=other, sku='TB-VERANO2024-OTRO-AZUL', color='Azul')
        data = checkout_data(product)
        data['items'][0]['variant_id'] = foreign.id

        with pytest.raises(ValidationError):
            services.create_order(data)

    def test_default_address_fills_shipping(self, product, customer_profile, default_address):
        data = {'items': checkout_data(product)['items']}

        order = services.create_order(data, profile=customer_profile)

        assert order.profile == customer_profile
        assert order.shipping_address == {'city': 'Medellín', 'address': 'Calle 10 # 43-12', 'phone': '3001234567'}
        assert order.department == 'Antioquia'
        assert order.customer_email == 'customer@test.com'

    def test_no_shipping_and_no_default_address(self, product, customer_profile):
        with pytest.raises(ValidationError):
            services.create_order({'items': checkout_data(product)['items']}, profile=customer_profile)

    def test_number_collision_is_retried(self, product, monkeypatch):
        services.create_order(checkout_data(product))
        numbers = iter([1, 2])
        monkeypatch.setattr(services, 'next_order_number', lambda: next(numbers))

        order = services.create_order(checkout_data(product))

        assert order.order_number == 2

    def test_gives_up_after_repeated_collisions(self, product, monkeypatch):
        services.create_order(checkout_data(product))
        monkeypatch.setattr(services, 'next_order_number', lambda: 1)

        with pytest.raises(IntegrityError):
            services.create_order(checkout_data(product))


@pytest.mark.django_db
class TestUpdateOrder:

    @pytest.mark.parametrize('current,new', [
        (Order.Status.PENDING_PAYMENT, Order.Status.PAID),
        (Order.Status.PAID, Order.Status.IN_PRODUCTION),
        (Order.Status.IN_PRODUCTION, Order.Status.SHIPPED),
        (Order.Status.SHIPPED, Order.Status.DELIVERED),
        (Order.Status.PAID, Order.Status.CANCELLED),
    ])
    def test_allowed_transitions(self, order, current, new):
        order.status = current
        order.save()

        assert services.update_order(order, {'status': new}).status == new

    @pytest.mark.parametrize('current,new', [
        (Order.Status.DELIVERED, Order.Status.PAID),
        (Order.Status.CANCELLED, Order.Status.PAID),
        (Order.Status.SHIPPED, Order.Status.CANCELLED),
        (Order.Status.PENDING_PAYMENT, Order.Status.SHIPPED),
    ])
    def test_rejected_transitions(self, order, current, new):
        order.status = current
        order.save()

        with pytest.raises(ValidationError):
            services.update_order(order, {'status': new})

    def test_same_status_updates_tracking(self, order):
        updated = services.update_order(order, {'status': order.status, 'tracking_number': 'GUIA-1', 'carrier': 'Servientrega'})

        assert updated.tracking_number == 'GUIA-1'
        assert updated.carrier == 'Servientrega'


# ============== API Tests ==============

@pytest.mark.django_db
class TestOrderAPI:

    def test_guest_checkout(self, api_client, order_payload):
        response = api_client.post('/api/orders/', order_payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['total_amount'] == 170000
        assert response.data['profile_id'] is None

    def test_authenticated_checkout_links_profile(self, customer_client, order_payload, customer_profile):
        response = customer_client.post('/api/orders/', order_payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['profile_id'] == str(customer_profile.id)

    def test_empty_items_rejected(self, api_client, order_payload):
        order_payload['items'] = []

        response = api_client.post('/api/orders/', order_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_customer_sees_own_orders(self, customer_client, other_customer_client, order):
        own = customer_client.get('/api/orders/')
        other = other_customer_client.get('/api/orders/')

        assert [o['id'] for o in own.data] == [str(order.id)]
        assert other.data == []

    def test_admin_filters_by_status(self, admin_client, order, product):
        services.create_order(checkout_data(product))

        response = admin_client.get('/api/orders/', {'status': 'PAID'})

        assert [o['id'] for o in response.data] == [str(order.id)]

    def test_customer_reads_own_order(self, customer_client, order):
        response = customer_client.get(f'/api/orders/{order.id}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['customer_name'] == 'Ana Gómez'
        assert response.data['items'][0]['line_total'] == 170000

    def test_other_customer_cannot_read_order(self, other_customer_client, order):
        response = other_customer_client.get(f'/api/orders/{order.id}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_admin_updates_status(self, admin_client, order):
        response = admin_client.patch(f'/api/orders/{order.id}/', {'status': 'IN_PRODUCTION'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        order.refresh_from_db()
        assert order.status == Order.Status.IN_PRODUCTION

    def test_customer_cannot_update_status(self, customer_client, order):
        response = customer_client.patch(f'/api/orders/{order.id}/', {'status': 'DELIVERED'}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_anonymous_cannot_list(self, api_client):
        response = api_client.get('/api/orders/')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
