import uuid

from django.core.validators import MinValueValidator
from django.db import models


class Order(models.Model):
    """Customer order placed at checkout. Amounts are whole COP."""

    class Status(models.TextChoices):
        PENDING_PAYMENT = 'PENDING_PAYMENT', 'Pending payment'
        PAID = 'PAID', 'Paid'
        IN_PRODUCTION = 'IN_PRODUCTION', 'In production'
        SHIPPED = 'SHIPPED', 'Shipped'
        DELIVERED = 'DELIVERED', 'Delivered'
        CANCELLED = 'CANCELLED', 'Cancelled'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order_number = models.PositiveIntegerField(unique=True)
    profile = models.ForeignKey(
        'users.Profile',
        on_delete=models.SET_NULL,
        related_name='orders',
        null=True,
        blank=True,
        help_text='Empty for guest checkouts'
    )
    customer_first_name = models.CharField(max_length=150)
    customer_last_name = models.CharField(max_length=150)
    customer_email = models.EmailField()
    customer_phone = models.CharField(max_length=30)
    department = models.CharField(max_length=100)
    city = models.CharField(max_length=100)
    shipping_address = models.JSONField(help_text='{"city", "address", "phone"}')
    total_amount = models.PositiveIntegerField(default=0)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING_PAYMENT)
    tracking_number = models.CharField(max_length=100, blank=True, null=True)
    carrier = models.CharField(max_length=100, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status']),
            models.Index(fields=['created_at']),
        ]

    def __str__(self):
        return f"Order-{self.order_number} - {self.total_amount}"

    @property
    def customer_name(self):
        return f"{self.customer_first_name} {self.customer_last_name}".strip()


class OrderItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name='items')
    product = models.ForeignKey('catalog.Product', on_delete=models.PROTECT, related_name='order_items')
    variant = models.ForeignKey(
        'catalog.Variant',
        on_delete=models.SET_NULL,
        related_name='order_items',
        null=True,
        blank=True
    )
    sku = models.CharField(max_length=150)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    unit_price = models.PositiveIntegerField()

    class Meta:
        db_table = 'order_items'

    def __str__(self):
        return f"{self.product.name} x{self.quantity}"

    @property
    def line_total(self):
        return self.unit_price * self.quantity
