import uuid

from django.db import models


class Collection(models.Model):
    """Product collections (Verano 2024, Clasicos, etc.)"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=150)
    slug = models.SlugField(max_length=160, unique=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'collections'
        ordering = ['name']

    def __str__(self):
        return self.name


class Product(models.Model):
    """Catalog product. Prices are whole COP amounts."""

    class Status(models.TextChoices):
        AVAILABLE = 'AVAILABLE', 'Available'
        BACKORDER = 'BACKORDER', 'Backorder'
        PRESALE = 'PRESALE', 'Presale'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    slug = models.SlugField(max_length=255, unique=True)
    description = models.TextField(blank=True, default='')
    base_price = models.PositiveIntegerField(help_text='Listed selling price')
    min_price = models.PositiveIntegerField(help_text='Lowest price the product may be sold at')
    cost_price = models.PositiveIntegerField(blank=True, null=True)
    compare_price = models.PositiveIntegerField(blank=True, null=True, help_text='Crossed-out "before" price')
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.AVAILABLE)
    is_active = models.BooleanField(default=True)
    collection = models.ForeignKey(Collection, on_delete=models.PROTECT, related_name='products')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['collection']),
            models.Index(fields=['is_active', 'created_at']),
        ]

    def __str__(self):
        return self.name

    @property
    def total_stock(self):
        return sum(variant.stock for variant in self.variants.all())


class ProductImage(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='images')
    url = models.CharField(max_length=500)
    alt = models.CharField(max_length=255, blank=True, default='')
    position = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'product_images'
        ordering = ['position']

    def __str__(self):
        return f"{self.product.name} #{self.position}"


class Variant(models.Model):
    """
    Colour variant of a product.
    SKU format: TB-{COLLECTION}-{DESIGN}-{COLOR}
    """

    LOW_STOCK_THRESHOLD = 10

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    sku = models.CharField(max_length=150, unique=True, help_text='Stock Keeping Unit')
    color = models.CharField(max_length=50)
    image_url = models.CharField(max_length=500, blank=True, null=True)
    stock = models.PositiveIntegerField(default=0)
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='variants')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'variants'
        ordering = ['created_at']
        indexes = [
            models.Index(fields=['product']),
        ]

    def __str__(self):
        return self.sku

    @property
    def is_low_stock(self):
        return self.stock < self.LOW_STOCK_THRESHOLD
