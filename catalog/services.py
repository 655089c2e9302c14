"""
Catalog write and read operations.

SKU format: TB-{COLLECTION}-{DESIGN}-{COLOR}, each segment upper-cased with
all whitespace removed. The unfiltered product list is cached under
``settings.PRODUCT_LIST_CACHE_KEY`` and dropped after every catalog write.
"""
import logging
import re

from django.conf import settings
from django.core.cache import cache
from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone
from django.utils.text import slugify
from rest_framework.exceptions import NotFound, ValidationError

from .models import Collection, Product, ProductImage, Variant
from .serializers import ProductSerializer

logger = logging.getLogger(__name__)

SKU_PREFIX = 'TB'
PRODUCT_FIELDS = (
    'name', 'slug', 'description', 'base_price', 'min_price', 'cost_price',
    'compare_price', 'status', 'is_active',
)
UNIQUE_VIOLATION_MESSAGE = 'Unique constraint failed: SKU, slug or ID already exists'


def collection_slug(name):
    return re.sub(r'[^\w-]+', '', name.lower().replace(' ', '-'), flags=re.ASCII)


def resolve_collection(collection_id=None, collection_name=None):
    """
    Find the collection by id, or by name/slug creating it when absent.
    """
    if collection_id:
        collection = Collection.objects.filter(pk=collection_id).first()
        if collection is None:
            raise NotFound(f'Collection with ID {collection_id} not found')
        return collection

    if collection_name:
        slug = collection_slug(collection_name)
        collection = Collection.objects.filter(Q(name=collection_name) | Q(slug=slug)).first()
        if collection is None:
            collection = Collection.objects.create(name=collection_name, slug=slug)
            logger.info(f"Collection '{collection_name}' created with slug {slug}")
        return collection

    raise ValidationError({'collection': ['Either collection_id or collection_name is required']})


def _sku_segment(value):
    return re.sub(r'\s+', '', value).upper()


def expected_sku(collection_name, design, color):
    return '-'.join([SKU_PREFIX, _sku_segment(collection_name), _sku_segment(design), _sku_segment(color)])


def validate_variant_skus(collection, design, variants):
    for variant in variants:
        expected = expected_sku(collection.name, design, variant['color'])
        if variant['sku'] != expected:
            raise ValidationError({
                'variants': [f"Invalid SKU format: {variant['sku']}. Expected: {expected}"]
            })


def validate_prices(base_price, min_price):
    if base_price is not None and min_price is not None and base_price < min_price:
        raise ValidationError({
            'base_price': [f'Base price ({base_price}) cannot be lower than minimum price ({min_price})']
        })


def invalidate_product_cache():
    cache.delete(settings.PRODUCT_LIST_CACHE_KEY)


def _with_relations(queryset):
    return queryset.select_related('collection').prefetch_related('images', 'variants')


def _replace_images(product, images):
    product.images.all().delete()
    ProductImage.objects.bulk_create([
        ProductImage(
            product=product,
            url=image['url'],
            alt=image.get('alt', ''),
            position=image.get('position', 0),
        )
        for image in images
    ])


def create_product(data):
    """
    Create a product with its variants and images in one transaction.

    Raises ValidationError for price, SKU or uniqueness problems and NotFound
    for an unknown collection id.
    """
    data = dict(data)
    variants = data.pop('variants', [])
    images = data.pop('images', None) or []
    collection_id = data.pop('collection_id', None)
    collection_name = data.pop('collection_name', None)

    validate_prices(data.get('base_price'), data.get('min_price'))

    if not data.get('slug'):
        data['slug'] = slugify(data['name'])

    try:
        with transaction.atomic():
            collection = resolve_collection(collection_id, collection_name)
            validate_variant_skus(collection, data['name'], variants)

            product = Product.objects.create(collection=collection, **data)
            Variant.objects.bulk_create([
                Variant(
                    product=product,
                    sku=variant['sku'],
                    color=variant['color'],
                    image_url=variant.get('image_url'),
                    stock=variant.get('stock', 0),
                )
                for variant in variants
            ])
            _replace_images(product, images)
    except IntegrityError as e:
        logger.warning(f"Product create rejected: {e}")
        raise ValidationError({'non_field_errors': [UNIQUE_VIOLATION_MESSAGE]})

    invalidate_product_cache()
    logger.info(f"Product {product.id} created with {len(variants)} variants")
    return get_product(product.id)


def reconcile_variants(product, variants):
    """
    Make the product's variant set match ``variants`` by trimmed SKU:
    missing SKUs are deleted, known SKUs updated in place, new SKUs inserted.
    Must run inside a transaction.
    """
    current = {variant.sku.strip(): variant for variant in product.variants.all()}
    incoming = {variant['sku'].strip() for variant in variants}

    stale = [variant.id for sku, variant in current.items() if sku not in incoming]
    if stale:
        logger.info(f"Deleting {len(stale)} variants of product {product.id}")
        Variant.objects.filter(id__in=stale).delete()

    for variant in variants:
        sku = variant['sku'].strip()
        if sku in current:
            Variant.objects.filter(sku=current[sku].sku).update(
                color=variant['color'],
                image_url=variant.get('image_url'),
                stock=variant.get('stock', 0),
                updated_at=timezone.now(),
            )
        else:
            Variant.objects.create(
                product=product,
                sku=sku,
                color=variant['color'],
                image_url=variant.get('image_url'),
                stock=variant.get('stock', 0),
            )


def update_product(product_id, data):
    """
    Patch a product. A given image list replaces all images; a given variant
    list is reconciled by SKU. Everything is written in one transaction.
    """
    data = dict(data)
    variants = data.pop('variants', None)
    images = data.pop('images', None)
    collection_id = data.pop('collection_id', None)
    collection_name = data.pop('collection_name', None)

    product = Product.objects.filter(pk=product_id).first()
    if product is None:
        raise NotFound(f'Product with ID {product_id} not found')

    validate_prices(
        data.get('base_price', product.base_price),
        data.get('min_price', product.min_price),
    )

    if 'slug' in data and not data['slug']:
        data.pop('slug')

    try:
        with transaction.atomic():
            if collection_name or collection_id:
                product.collection = resolve_collection(collection_id, collection_name)

            if variants is not None:
                reconcile_variants(product, variants)

            for field in PRODUCT_FIELDS:
                if field in data:
                    setattr(product, field, data[field])
            product.save()

            if images is not None:
                _replace_images(product, images)
    except IntegrityError as e:
        logger.warning(f"Product {product_id} update rejected: {e}")
        raise ValidationError({'non_field_errors': [UNIQUE_VIOLATION_MESSAGE]})

    invalidate_product_cache()
    return get_product(product.id)


def remove_product(product_id):
    """
    Soft delete products that appear on orders, hard delete the rest.

    Returns True when the row was soft deleted.
    """
    product = Product.objects.filter(pk=product_id).first()
    if product is None:
        raise NotFound(f'Product with ID {product_id} not found')

    with transaction.atomic():
        if product.order_items.exists():
            product.is_active = False
            product.status = Product.Status.BACKORDER
            product.save(update_fields=['is_active', 'status', 'updated_at'])
            soft = True
        else:
            product.delete()
            soft = False

    invalidate_product_cache()
    logger.info(f"Product {product_id} {'archived' if soft else 'deleted'}")
    return soft


def list_products(collection_id=None):
    """
    Serialized active products, newest first. The unfiltered list is served
    from cache when present.
    """
    if not collection_id:
        cached = cache.get(settings.PRODUCT_LIST_CACHE_KEY)
        if cached is not None:
            return cached

    queryset = _with_relations(Product.objects.filter(is_active=True))
    if collection_id:
        queryset = queryset.filter(collection_id=collection_id)

    products = list(ProductSerializer(queryset.order_by('-created_at'), many=True).data)

    if not collection_id:
        cache.set(settings.PRODUCT_LIST_CACHE_KEY, products, settings.PRODUCT_LIST_CACHE_TIMEOUT)

    return products


def get_product(product_id):
    product = _with_relations(Product.objects.filter(pk=product_id)).first()
    if product is None:
        raise NotFound(f'Product with ID {product_id} not found')
    return product


def get_product_by_slug(slug):
    product = _with_relations(Product.objects.filter(slug=slug)).first()
    if product is None:
        raise NotFound(f'Product with slug {slug} not found')
    return product
