"""
Checkout and order administration.

Orders are numbered sequentially; a concurrent checkout that takes the same
number is retried with the next one.
"""
import logging

from django.db import IntegrityError, transaction
from django.db.models import Max
from rest_framework.exceptions import ValidationError

from addresses.services import get_default_address
from catalog.models import Product, Variant
from .models import Order, OrderItem

logger = logging.getLogger(__name__)

ORDER_NUMBER_ATTEMPTS = 3

CUSTOMER_FIELDS = ('customer_first_name', 'customer_last_name', 'customer_email', 'customer_phone', 'department', 'city')

ALLOWED_TRANSITIONS = {
    Order.Status.PENDING_PAYMENT: {Order.Status.PAID, Order.Status.CANCELLED},
    Order.Status.PAID: {Order.Status.IN_PRODUCTION, Order.Status.CANCELLED},
    Order.Status.IN_PRODUCTION: {Order.Status.SHIPPED, Order.Status.CANCELLED},
    Order.Status.SHIPPED: {Order.Status.DELIVERED},
    Order.Status.DELIVERED: set(),
    Order.Status.CANCELLED: set(),
}


def next_order_number():
    last = Order.objects.aggregate(max_number=Max('order_number'))['max_number']
    return (last or 0) + 1


def _resolve_item(item):
    product = Product.objects.filter(pk=item['product_id']).first()
    if product is None or not product.is_active:
        raise ValidationError({'items': [f"Product {item['product_id']} is not available"]})

    sku = (item.get('sku') or '').strip()
    variant = None
    if item.get('variant_id'):
        variant = Variant.objects.filter(pk=item['variant_id'], product=product).first()
        if variant is None:
            raise ValidationError({'items': [f"Variant {item['variant_id']} does not belong to {product.name}"]})
        sku = variant.sku
    elif sku:
        variant = product.variants.filter(sku=sku).first()

    if item['price'] < product.min_price:
        raise ValidationError({
            'items': [f"Price {item['price']} for {product.name} is below the minimum price ({product.min_price})"]
        })

    return OrderItem(product=product, variant=variant, sku=sku, quantity=item['quantity'], unit_price=item['price'])


def _fill_from_default_address(data, profile):
    address = get_default_address(profile) if profile is not None else None
    if address is None:
        raise ValidationError({'shipping_address': ['A shipping address is required']})

    data['shipping_address'] = {
        'city': address.municipality.name,
        'address': address.address,
        'phone': address.phone,
    }
    data.setdefault('customer_first_name', address.first_name)
    data.setdefault('customer_last_name', address.last_name)
    data.setdefault('customer_phone', address.phone)
    data.setdefault('department', address.department.name)
    data.setdefault('city', address.municipality.name)
    if profile.user.email:
        data.setdefault('customer_email', profile.user.email)


def create_order(data, profile=None):
    """
    Place an order. Items are validated against the catalog and the total is
    computed server side. Returns the order with its items.
    """
    data = dict(data)
    items_data = data.pop('items')

    if not data.get('shipping_address'):
        _fill_from_default_address(data, profile)

    missing = [field for field in CUSTOMER_FIELDS if not data.get(field)]
    if missing:
        raise ValidationError({field: ['This field is required.'] for field in missing})

    for attempt in range(1, ORDER_NUMBER_ATTEMPTS + 1):
        try:
            with transaction.atomic():
                items = [_resolve_item(item) for item in items_data]
                order = Order.objects.create(
                    order_number=next_order_number(),
                    profile=profile,
                    total_amount=sum(item.unit_price * item.quantity for item in items),
                    **{field: data[field] for field in CUSTOMER_FIELDS},
                    shipping_address=dict(data['shipping_address']),
                )
                for item in items:
                    item.order = order
                OrderItem.objects.bulk_create(items)
            break
        except IntegrityError:
            if attempt == ORDER_NUMBER_ATTEMPTS:
                raise
            logger.warning(f"Order number collision, retrying ({attempt}/{ORDER_NUMBER_ATTEMPTS})")

    logger.info(f"Order {order.order_number} created for {'profile ' + str(profile.id) if profile else 'guest'}")
    return Order.objects.prefetch_related('items__product').get(pk=order.pk)


def update_order(order, data):
    """Change status, tracking number or carrier following the order lifecycle."""
    new_status = data.get('status')
    if new_status and new_status != order.status:
        if new_status not in ALLOWED_TRANSITIONS[order.status]:
            raise ValidationError({'status': [f'Cannot change status from {order.status} to {new_status}']})
        logger.info(f"Order {order.order_number}: {order.status} -> {new_status}")
        order.status = new_status

    for field in ('tracking_number', 'carrier'):
        if field in data:
            setattr(order, field, data[field])

    order.save()
    return order
