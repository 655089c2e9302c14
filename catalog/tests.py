"""
Tests for the catalog module.
Covers: SKU rules, price rules, collection resolution, variant
reconciliation, soft/hard removal and the cached product list.
"""
import pytest
from datetime import timedelta
from django.conf import settings
from django.core.cache import cache
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import NotFound, ValidationError

from catalog import services
from catalog.models import Collection, Product, Variant


def variant_input(sku, color, stock=0):
    return {'sku': sku, 'color': color, 'stock': stock}


def skus_of(product):
    return set(Variant.objects.filter(product=product).values_list('sku', flat=True))


# ============== Helper Tests ==============

class TestSkuRules:

    def test_expected_sku(self):
        assert services.expected_sku('Verano 2024', 'Playa', 'Azul') == 'TB-VERANO2024-PLAYA-AZUL'

    def test_expected_sku_strips_all_whitespace(self):
        assert services.expected_sku(' Clásicos  Urbanos ', 'Gran Tote', 'verde\toliva') == 'TB-CLÁSICOSURBANOS-GRANTOTE-VERDEOLIVA'

    def test_collection_slug(self):
        assert services.collection_slug('Verano 2024') == 'verano-2024'
        assert services.collection_slug('Edición ¡Especial!') == 'edicin-especial'


@pytest.mark.django_db
class TestResolveCollection:

    def test_by_id(self, collection):
        assert services.resolve_collection(collection_id=collection.id) == collection

    def test_unknown_id(self):
        with pytest.raises(NotFound):
            services.resolve_collection(collection_id='00000000-0000-0000-0000-000000000000')

    def test_by_name_finds_existing(self, collection):
        assert services.resolve_collection(collection_name='Verano 2024') == collection

    def test_by_name_creates_missing(self):
        created = services.resolve_collection(collection_name='Invierno 2025')

        assert created.slug == 'invierno-2025'
        assert Collection.objects.count() == 1

    def test_requires_id_or_name(self):
        with pytest.raises(ValidationError):
            services.resolve_collection()


# ============== Create Tests ==============

@pytest.mark.django_db
class TestCreateProduct:

    def payload(self, collection, **overrides):
        data = {
            'name': 'Playa',
            'base_price': 85000,
            'min_price': 70000,
            'collection_id': collection.id,
            'variants': [variant_input('TB-VERANO2024-PLAYA-AZUL', 'Azul', 10)],
        }
        data.update(overrides)
        return data

    def test_create_with_variants_and_images(self, collection):
        product = services.create_product(self.payload(
            collection,
            images=[{'url': 'https://cdn.test/a.jpg', 'alt': 'A', 'position': 1}],
        ))

        assert product.slug == 'playa'
        assert product.collection == collection
        assert skus_of(product) == {'TB-VERANO2024-PLAYA-AZUL'}
        assert product.images.count() == 1
        assert product.base_price >= product.min_price

    def test_base_price_below_min_price_names_both(self, collection):
        with pytest.raises(ValidationError) as exc:
            services.create_product(self.payload(collection, base_price=100, min_price=150))

        message = str(exc.value.detail['base_price'][0])
        assert '100' in message
        assert '150' in message
        assert not Product.objects.exists()

    def test_wrong_sku_states_expected(self, collection):
        with pytest.raises(ValidationError) as exc:
            services.create_product(self.payload(collection, variants=[variant_input('TB-VER-PLAYA-AZUL', 'Azul')]))

        assert 'TB-VERANO2024-PLAYA-AZUL' in str(exc.value.detail['variants'][0])
        assert not Product.objects.exists()

    def test_one_bad_sku_fails_whole_create(self, collection):
        variants = [
            variant_input('TB-VERANO2024-PLAYA-AZUL', 'Azul'),
            variant_input('TB-VERANO2024-PLAYA-VERDE', 'Rojo'),
        ]
        with pytest.raises(ValidationError):
            services.create_product(self.payload(collection, variants=variants))

        assert not Variant.objects.exists()

    def test_collection_by_name_is_created(self):
        product = services.create_product({
            'name': 'Playa',
            'base_price': 85000,
            'min_price': 70000,
            'collection_name': 'Verano 2024',
            'variants': [variant_input('TB-VERANO2024-PLAYA-AZUL', 'Azul')],
        })

        assert product.collection.slug == 'verano-2024'

    def test_rejected_create_leaves_no_new_collection(self):
        with pytest.raises(ValidationError):
            services.create_product({
                'name': 'Playa',
                'base_price': 85000,
                'min_price': 70000,
                'collection_name': 'Verano 2024',
                'variants': [variant_input('TB-VER-PLAYA-AZUL', 'Azul')],
            })

        assert not Collection.objects.exists()
        assert not Product.objects.exists()

    def test_duplicate_sku_is_a_validation_error(self, product, collection):
        with pytest.raises(ValidationError):
            services.create_product(self.payload(collection, slug='playa-2'))

    def test_create_drops_cached_list(self, collection):
        cache.set(settings.PRODUCT_LIST_CACHE_KEY, ['stale'])

        services.create_product(self.payload(collection))

        assert cache.get(settings.PRODUCT_LIST_CACHE_KEY) is None


# ============== Update Tests ==============

@pytest.mark.django_db
class TestUpdateProduct:

    def test_reconcile_add_remove_update(self, collection):
        product = services.create_product({
            'name': 'Playa',
            'base_price': 85000,
            'min_price': 70000,
            'collection_id': collection.id,
            'variants': [
                variant_input('TB-VERANO2024-PLAYA-A', 'A', 1),
                variant_input('TB-VERANO2024-PLAYA-B', 'B', 1),
                variant_input('TB-VERANO2024-PLAYA-C', 'C', 1),
            ],
        })

        services.update_product(product.id, {'variants': [
            variant_input('TB-VERANO2024-PLAYA-A', 'A', 7),
            variant_input('TB-VERANO2024-PLAYA-C', 'C', 1),
            variant_input('TB-VERANO2024-PLAYA-D', 'D', 3),
        ]})

        assert skus_of(product) == {'TB-VERANO2024-PLAYA-A', 'TB-VERANO2024-PLAYA-C', 'TB-VERANO2024-PLAYA-D'}
        assert Variant.objects.get(sku='TB-VERANO2024-PLAYA-A').stock == 7

    def test_reconcile_unchanged_list_is_idempotent(self, product):
        current = [
            variant_input(v.sku, v.color, v.stock) for v in product.variants.all()
        ]
        ids_before = set(product.variants.values_list('id', flat=True))

        services.update_product(product.id, {'variants': current})
        services.update_product(product.id, {'variants': current})

        assert set(product.variants.values_list('id', flat=True)) == ids_before

    def test_reconcile_trims_skus(self, product):
        services.update_product(product.id, {'variants': [
            variant_input('  TB-VERANO2024-PLAYA-AZUL ', 'Azul', 3),
        ]})

        assert skus_of(product) == {'TB-VERANO2024-PLAYA-AZUL'}
        assert Variant.objects.get(sku='TB-VERANO2024-PLAYA-AZUL').stock == 3

    def test_reconcile_touches_updated_at(self, product):
        stale = timezone.now() - timedelta(days=3)
        Variant.objects.filter(product=product).update(updated_at=stale)

        services.update_product(product.id, {'variants': [
            variant_input('TB-VERANO2024-PLAYA-AZUL', 'Azul', 12),
        ]})

        assert Variant.objects.get(sku='TB-VERANO2024-PLAYA-AZUL').updated_at > stale

    def test_images_are_replaced(self, product):
        services.update_product(product.id, {'images': [
            {'url': 'https://cdn.test/new-1.jpg', 'alt': 'new', 'position': 0},
            {'url': 'https://cdn.test/new-2.jpg', 'alt': 'new', 'position': 1},
        ]})

        assert list(product.images.values_list('url', flat=True)) == [
            'https://cdn.test/new-1.jpg', 'https://cdn.test/new-2.jpg'
        ]

    def test_effective_price_checked(self, product):
        with pytest.raises(ValidationError):
            services.update_product(product.id, {'min_price': 90000})

        product.refresh_from_db()
        assert product.min_price == 70000

    def test_collection_reresolved_by_name(self, product):
        updated = services.update_product(product.id, {'collection_name': 'Clasicos'})

        assert updated.collection.slug == 'clasicos'

    def test_rejected_update_leaves_no_new_collection(self, product, collection):
        Product.objects.create(name='Otra', slug='otra', base_price=50000, min_price=40000, collection=collection)

        with pytest.raises(ValidationError):
            services.update_product(product.id, {'collection_name': 'Clasicos', 'slug': 'otra'})

        assert list(Collection.objects.values_list('name', flat=True)) == ['Verano 2024']
        product.refresh_from_db()
        assert product.collection == collection

    def test_scalar_fields_without_variants_keep_variants(self, product):
        updated = services.update_product(product.id, {'name': 'Playa Grande', 'status': Product.Status.PRESALE})

        assert updated.name == 'Playa Grande'
        assert updated.status == Product.Status.PRESALE
        assert len(skus_of(product)) == 2

    def test_unknown_product(self):
        with pytest.raises(NotFound):
            services.update_product('00000000-0000-0000-0000-000000000000', {'name': 'x'})


# ============== Removal Tests ==============

@pytest.mark.django_db
class TestRemoveProduct:

    def test_soft_delete_with_order_history(self, order, product):
        soft = services.remove_product(product.id)

        assert soft is True
        product.refresh_from_db()
        assert product.is_active is False
        assert product.status == Product.Status.BACKORDER
        assert services.get_product(product.id) is not None

    def test_hard_delete_without_history(self, product):
        soft = services.remove_product(product.id)

        assert soft is False
        assert not Product.objects.filter(pk=product.id).exists()
        assert not Variant.objects.exists()

    def test_removal_drops_cached_list(self, product):
        services.list_products()
        assert cache.get(settings.PRODUCT_LIST_CACHE_KEY) is not None

        services.remove_product(product.id)

        assert cache.get(settings.PRODUCT_LIST_CACHE_KEY) is None


# ============== Read Tests ==============

@pytest.mark.django_db
class TestListProducts:

    def test_lists_active_products_only(self, product, collection):
        Product.objects.create(name='Vieja', slug='vieja', base_price=1, min_price=1, collection=collection, is_active=False)

        products = services.list_products()

        assert [p['slug'] for p in products] == ['playa']

    def test_unfiltered_list_is_cached(self, product):
        services.list_products()
        Product.objects.filter(pk=product.id).update(name='Changed behind the cache')

        assert services.list_products()[0]['name'] == 'Playa'

    def test_collection_filter_bypasses_cache(self, product, collection):
        other = Collection.objects.create(name='Otra', slug='otra')

        assert services.list_products(collection.id)[0]['slug'] == 'playa'
        assert services.list_products(other.id) == []
        assert cache.get(settings.PRODUCT_LIST_CACHE_KEY) is None


# ============== API Tests ==============

@pytest.mark.django_db
class TestProductAPI:

    def test_admin_creates_product(self, admin_client, product_payload):
        response = admin_client.post('/api/products/', product_payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert len(response.data['variants']) == 2
        assert response.data['collection']['name'] == 'Verano 2024'

    def test_create_rejects_bad_price(self, admin_client, product_payload):
        product_payload['base_price'] = 100
        product_payload['min_price'] = 150

        response = admin_client.post('/api/products/', product_payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['error']['message'] == 'Base price (100) cannot be lower than minimum price (150)'

    def test_customer_cannot_create(self, customer_client, product_payload):
        response = customer_client.post('/api/products/', product_payload, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_public_list_and_detail(self, api_client, product):
        listing = api_client.get('/api/products/list/')
        detail = api_client.get(f'/api/products/{product.id}/')
        by_slug = api_client.get('/api/products/slug/playa/')

        assert listing.status_code == status.HTTP_200_OK
        assert listing.data[0]['id'] == str(product.id)
        assert detail.data['name'] == 'Playa'
        assert by_slug.data['id'] == str(product.id)

    def test_stock_summary_in_payload(self, api_client, product):
        response = api_client.get(f'/api/products/{product.id}/')

        assert response.data['total_stock'] == 30
        low = {v['sku']: v['is_low_stock'] for v in response.data['variants']}
        assert low == {'TB-VERANO2024-PLAYA-AZUL': False, 'TB-VERANO2024-PLAYA-ROJO': True}

    def test_unknown_slug(self, api_client):
        response = api_client.get('/api/products/slug/nope/')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_admin_patches_variants(self, admin_client, product):
        response = admin_client.patch(f'/api/products/{product.id}/', {
            'variants': [{'sku': 'TB-VERANO2024-PLAYA-AZUL', 'color': 'Azul', 'stock': 99}]
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert [v['sku'] for v in response.data['variants']] == ['TB-VERANO2024-PLAYA-AZUL']
        assert response.data['variants'][0]['stock'] == 99

    def test_anonymous_cannot_patch(self, api_client, product):
        response = api_client.patch(f'/api/products/{product.id}/', {'name': 'x'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_delete_answers_204(self, admin_client, product):
        response = admin_client.delete(f'/api/products/{product.id}/')

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b''

    def test_collections_list(self, api_client, collection):
        Collection.objects.create(name='Oculta', slug='oculta', is_active=False)

        response = api_client.get('/api/collections/')

        assert [c['name'] for c in response.data] == ['Verano 2024']
