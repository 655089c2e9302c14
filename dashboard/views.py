# Dashboard views for the admin panel
from datetime import datetime, time

from django.db.models import Count, Sum
from django.utils import timezone
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from b2b.models import B2BQuote
from catalog.models import Variant
from orders.models import Order, OrderItem
from users.permissions import IsAdmin

PRODUCTION_CUTOFF = time(12, 0)


def _today_bounds():
    today = timezone.localdate()
    start = timezone.make_aware(datetime.combine(today, time.min))
    return today, start


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def dashboard_stats(request):
    """
    Headline numbers: orders placed today, variants running low and quotes
    still waiting for design approval.
    """
    today, start_of_day = _today_bounds()

    todays_orders = Order.objects.filter(created_at__gte=start_of_day).aggregate(
        count=Count('id'),
        total=Sum('total_amount')
    )

    low_stock = (
        Variant.objects
        .filter(stock__lt=Variant.LOW_STOCK_THRESHOLD, product__is_active=True)
        .select_related('product')
        .order_by('stock')
    )

    pending_quotes = B2BQuote.objects.filter(status=B2BQuote.Status.PENDING).count()

    return Response({
        'date': today.isoformat(),
        'daily_orders': todays_orders['count'] or 0,
        'daily_revenue': todays_orders['total'] or 0,
        'low_stock_count': low_stock.count(),
        'low_stock_variants': [
            {'id': str(v.id), 'sku': v.sku, 'product': v.product.name, 'stock': v.stock}
            for v in low_stock[:10]
        ],
        'pending_quotes': pending_quotes,
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdmin])
def production_batch(request):
    """
    Units to produce per SKU for confirmed orders. With ``cutoff=true`` only
    orders placed today before noon are counted.
    """
    items = OrderItem.objects.exclude(
        order__status__in=[Order.Status.PENDING_PAYMENT, Order.Status.CANCELLED]
    )

    cutoff = request.query_params.get('cutoff', '').lower() == 'true'
    if cutoff:
        today, start_of_day = _today_bounds()
        noon = timezone.make_aware(datetime.combine(today, PRODUCTION_CUTOFF))
        items = items.filter(order__created_at__gte=start_of_day, order__created_at__lt=noon)

    batch = list(
        items.values('sku', 'product__name')
        .annotate(quantity=Sum('quantity'), orders=Count('order', distinct=True))
        .order_by('-quantity', 'sku')
    )

    return Response({
        'cutoff': cutoff,
        'total_units': sum(row['quantity'] for row in batch),
        'items': [
            {'sku': row['sku'], 'product': row['product__name'], 'quantity': row['quantity'], 'orders': row['orders']}
            for row in batch
        ],
    })
