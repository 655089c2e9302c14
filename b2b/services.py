"""
B2B quote intake.

Tiers by quantity: below 50 STARTER, 50 to 200 PRO, above 200 EVENTO. A
requested tier is honoured only when the quantity meets its minimum.
"""
import logging
import re

from django.conf import settings
from django.utils import timezone
from rest_framework.exceptions import NotFound

from .models import B2BQuote

logger = logging.getLogger(__name__)

PACKAGE_MINIMUMS = {
    B2BQuote.Package.STARTER: 12,
    B2BQuote.Package.PRO: 50,
    B2BQuote.Package.EVENTO: 200,
}

LOGO_KEY_PREFIX = 'b2b-quotes'


def calculate_package(quantity):
    if quantity < 50:
        return B2BQuote.Package.STARTER
    if quantity <= 200:
        return B2BQuote.Package.PRO
    return B2BQuote.Package.EVENTO


def resolve_package(quantity, requested=None):
    if requested and quantity >= PACKAGE_MINIMUMS[requested]:
        return B2BQuote.Package(requested)
    return calculate_package(quantity)


def logo_key(filename, now=None):
    now = now or timezone.now()
    epoch_ms = int(now.timestamp() * 1000)
    safe_name = re.sub(r'\s+', '-', filename)
    return f"{LOGO_KEY_PREFIX}/{epoch_ms}-{safe_name}"


def whatsapp_payload(quote):
    return {
        'phone': settings.B2B_WHATSAPP_PHONE,
        'message': f'Hola, soy {quote.business_name}. Quote ID: {quote.id}',
    }


def create_quote(data, logo=None, storage=None):
    """
    Register a quote. When a logo is given it is uploaded first; an upload
    failure raises UpstreamServiceError and nothing is stored.

    Returns (quote, whatsapp_payload).
    """
    data = dict(data)
    requested = data.pop('package', None)
    data.pop('logo', None)
    data['package'] = resolve_package(data['quantity'], requested)

    logo_url = None
    if logo is not None:
        logo_url = storage.upload(
            settings.B2B_LOGO_BUCKET,
            logo_key(logo.name),
            logo.read(),
            content_type=getattr(logo, 'content_type', None),
        )

    quote = B2BQuote.objects.create(logo_url=logo_url, **data)
    logger.info(f"B2B quote {quote.id} created for {quote.business_name} ({quote.package})")
    return quote, whatsapp_payload(quote)


def list_quotes():
    return B2BQuote.objects.order_by('-created_at')


def approve_quote(quote_id):
    updated = B2BQuote.objects.filter(pk=quote_id).update(status=B2BQuote.Status.DESIGN_APPROVED)
    if not updated:
        raise NotFound(f'Quote with ID {quote_id} not found')
    return B2BQuote.objects.get(pk=quote_id)
