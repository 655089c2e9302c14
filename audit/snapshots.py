"""
Before-images of audited entities.

Only the entities listed in SNAPSHOT_HANDLERS are captured; any other
entity yields no previous data.
"""
import json
import logging

from django.core.serializers.json import DjangoJSONEncoder

logger = logging.getLogger(__name__)


def _to_json(data):
    return json.loads(json.dumps(data, cls=DjangoJSONEncoder))


def product_snapshot(entity_id):
    from catalog.models import Product
    from catalog.serializers import ProductSerializer
    product = Product.objects.select_related('collection').prefetch_related('images', 'variants').filter(pk=entity_id).first()
    return ProductSerializer(product).data if product else None


def order_snapshot(entity_id):
    from orders.models import Order
    from orders.serializers import OrderSerializer
    order = Order.objects.prefetch_related('items__product').filter(pk=entity_id).first()
    return OrderSerializer(order).data if order else None


def profile_snapshot(entity_id):
    from users.models import Profile
    from users.serializers import ProfileSerializer
    profile = Profile.objects.select_related('user').filter(pk=entity_id).first()
    return ProfileSerializer(profile).data if profile else None


def quote_snapshot(entity_id):
    from b2b.models import B2BQuote
    from b2b.serializers import B2BQuoteSerializer
    quote = B2BQuote.objects.filter(pk=entity_id).first()
    return B2BQuoteSerializer(quote).data if quote else None


SNAPSHOT_HANDLERS = {
    'products': product_snapshot,
    'orders': order_snapshot,
    'profiles': profile_snapshot,
    'b2b': quote_snapshot,
}


def capture_snapshot(entity, entity_id):
    """Return the JSON-safe current state of the entity, or None."""
    handler = SNAPSHOT_HANDLERS.get(entity)
    if handler is None:
        return None

    try:
        data = handler(entity_id)
    except Exception as e:
        logger.error(f"Failed to fetch previous data for audit ({entity} {entity_id}): {e}")
        return None

    return _to_json(data) if data is not None else None
