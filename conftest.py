"""
Pytest fixtures for the Tote Bag Co. API tests.
Provides common test data and utilities for all test modules.
"""
import pytest
from datetime import timedelta
from django.contrib.auth import get_user_model
from django.core.cache import cache
from django.utils import timezone
from rest_framework.test import APIClient
from oauth2_provider.models import Application, AccessToken
from oauthlib.common import generate_token

User = get_user_model()


# ============== Global Test Setup ==============

@pytest.fixture(autouse=True)
def eager_celery_and_clean_cache(settings):
    """Run Celery tasks inline and start every test with an empty cache"""
    from main.celery import app as celery_app
    celery_app.conf.task_always_eager = True
    settings.CELERY_TASK_ALWAYS_EAGER = True
    cache.clear()
    yield
    cache.clear()


# ============== OAuth2 Application Fixture ==============

@pytest.fixture
def oauth_application(db):
    """Create OAuth2 application for testing"""
    return Application.objects.create(
        name='totebag-web',
        client_type=Application.CLIENT_PUBLIC,
        authorization_grant_type=Application.GRANT_PASSWORD,
    )


# ============== User Fixtures ==============

def create_user_with_role(username, role, **extra):
    """Create a user; the post_save signal creates its profile"""
    user = User.objects.create_user(
        username=username,
        email=f'{username}@test.com',
        password='testpass123',
        **extra
    )
    profile = user.profile
    profile.role = role
    profile.first_name = username.capitalize()
    profile.last_name = 'Tester'
    profile.save()
    return user


@pytest.fixture
def admin_user(db):
    """Create a user with an ADMIN profile"""
    from users.models import Profile
    return create_user_with_role('admin', Profile.Role.ADMIN)


@pytest.fixture
def customer_user(db):
    """Create a user with a CUSTOMER profile"""
    from users.models import Profile
    return create_user_with_role('customer', Profile.Role.CUSTOMER)


@pytest.fixture
def other_customer_user(db):
    """Create a second customer for ownership tests"""
    from users.models import Profile
    return create_user_with_role('othercustomer', Profile.Role.CUSTOMER)


@pytest.fixture
def customer_profile(customer_user):
    return customer_user.profile


@pytest.fixture
def other_profile(other_customer_user):
    return other_customer_user.profile


# ============== Token Fixtures ==============

def create_access_token(user, application, scope='read write'):
    """Helper function to create access token"""
    expires = timezone.now() + timedelta(hours=1)
    return AccessToken.objects.create(
        user=user,
        application=application,
        token=generate_token(),
        expires=expires,
        scope=scope
    )


@pytest.fixture
def admin_token(admin_user, oauth_application):
    return create_access_token(admin_user, oauth_application)


@pytest.fixture
def customer_token(customer_user, oauth_application):
    return create_access_token(customer_user, oauth_application)


@pytest.fixture
def other_customer_token(other_customer_user, oauth_application):
    return create_access_token(other_customer_user, oauth_application)


# ============== API Client Fixtures ==============

def bearer_client(token):
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {token.token}')
    return client


@pytest.fixture
def api_client():
    """Anonymous API test client"""
    return APIClient()


@pytest.fixture
def admin_client(admin_token):
    """API client authenticated as admin"""
    return bearer_client(admin_token)


@pytest.fixture
def customer_client(customer_token):
    """API client authenticated as customer"""
    return bearer_client(customer_token)


@pytest.fixture
def other_customer_client(other_customer_token):
    """API client authenticated as a second customer"""
    return bearer_client(other_customer_token)


# ============== Location Fixtures ==============

@pytest.fixture
def department(db):
    from locations.models import Department
    return Department.objects.create(code='05', name='Antioquia')


@pytest.fixture
def municipality(db, department):
    from locations.models import Municipality
    return Municipality.objects.create(code='05001', name='Medellín', department=department)


@pytest.fixture
def other_department(db):
    from locations.models import Department
    return Department.objects.create(code='11', name='Bogotá D.C.')


@pytest.fixture
def other_municipality(db, other_department):
    from locations.models import Municipality
    return Municipality.objects.create(code='11001', name='Bogotá', department=other_department)


@pytest.fixture
def address_data(department, municipality):
    """Valid address payload for the API"""
    return {
        'title': 'Casa',
        'first_name': 'Ana',
        'last_name': 'Gómez',
        'phone': '3001234567',
        'department_id': str(department.id),
        'municipality_id': str(municipality.id),
        'address': 'Calle 10 # 43-12',
        'neighborhood': 'El Poblado',
    }


@pytest.fixture
def default_address(db, customer_profile, department, municipality):
    """A default address in the customer's book"""
    from addresses.models import Address
    return Address.objects.create(
        profile=customer_profile,
        title='Casa',
        first_name='Ana',
        last_name='Gómez',
        phone='3001234567',
        department=department,
        municipality=municipality,
        address='Calle 10 # 43-12',
        is_default=True
    )


# ============== Catalog Fixtures ==============

@pytest.fixture
def collection(db):
    from catalog.models import Collection
    return Collection.objects.create(name='Verano 2024', slug='verano-2024')


@pytest.fixture
def product(db, collection):
    """Product with two colour variants and one image"""
    from catalog.models import Product, ProductImage, Variant
    product = Product.objects.create(
        name='Playa',
        slug='playa',
        description='Tote de lona para la playa',
        base_price=85000,
        min_price=70000,
        cost_price=30000,
        collection=collection
    )
    Variant.objects.create(product=product, sku='TB-VERANO2024-PLAYA-AZUL', color='Azul', stock=25)
    Variant.objects.create(product=product, sku='TB-VERANO2024-PLAYA-ROJO', color='Rojo', stock=5)
    ProductImage.objects.create(product=product, url='https://cdn.test/playa-1.jpg', alt='Playa', position=0)
    return product


@pytest.fixture
def product_payload(collection):
    """Valid create payload for the product API"""
    return {
        'name': 'Playa',
        'description': 'Tote de lona para la playa',
        'base_price': 85000,
        'min_price': 70000,
        'collection_id': str(collection.id),
        'images': [{'url': 'https://cdn.test/playa-1.jpg', 'alt': 'Playa', 'position': 0}],
        'variants': [
            {'sku': 'TB-VERANO2024-PLAYA-AZUL', 'color': 'Azul', 'stock': 10},
            {'sku': 'TB-VERANO2024-PLAYA-ROJO', 'color': 'Rojo', 'stock': 4},
        ],
    }


# ============== Order Fixtures ==============

@pytest.fixture
def order(db, customer_profile, product):
    """A paid order for two units of the blue variant"""
    from orders.models import Order, OrderItem
    variant = product.variants.get(color='Azul')
    order = Order.objects.create(
        order_number=1,
        profile=customer_profile,
        customer_first_name='Ana',
        customer_last_name='Gómez',
        customer_email='customer@test.com',
        customer_phone='3001234567',
        department='Antioquia',
        city='Medellín',
        shipping_address={'city': 'Medellín', 'address': 'Calle 10 # 43-12', 'phone': '3001234567'},
        total_amount=170000,
        status=Order.Status.PAID
    )
    OrderItem.objects.create(order=order, product=product, variant=variant, sku=variant.sku, quantity=2, unit_price=85000)
    return order


@pytest.fixture
def order_payload(product):
    """Guest checkout payload"""
    variant = product.variants.get(color='Azul')
    return {
        'customer_first_name': 'Luis',
        'customer_last_name': 'Pérez',
        'customer_email': 'luis@test.com',
        'customer_phone': '3109876543',
        'department': 'Antioquia',
        'city': 'Medellín',
        'shipping_address': {'city': 'Medellín', 'address': 'Carrera 43A # 1-50', 'phone': '3109876543'},
        'items': [
            {'product_id': str(product.id), 'variant_id': str(variant.id), 'quantity': 2, 'price': 85000},
        ],
    }


# ============== B2B Fixtures ==============

@pytest.fixture
def quote(db):
    from b2b.models import B2BQuote
    return B2BQuote.objects.create(
        business_name='Café Central',
        quantity=60,
        department='Antioquia',
        municipality='Medellín',
        neighborhood='Laureles',
        address='Circular 1 # 70-01',
        contact_phone='3005550000',
        qr_type=B2BQuote.QrType.INSTAGRAM,
        qr_data='@cafecentral',
        package=B2BQuote.Package.PRO
    )
