import uuid

from django.core.validators import MinValueValidator
from django.db import models


class B2BQuote(models.Model):
    """Corporate bulk-order quote request"""

    class QrType(models.TextChoices):
        WHATSAPP = 'WHATSAPP', 'WhatsApp'
        WEB = 'WEB', 'Web'
        INSTAGRAM = 'INSTAGRAM', 'Instagram'

    class Package(models.TextChoices):
        STARTER = 'STARTER', 'Starter'
        PRO = 'PRO', 'Pro'
        EVENTO = 'EVENTO', 'Evento'

    class Status(models.TextChoices):
        PENDING = 'PENDING', 'Pending'
        DESIGN_APPROVED = 'DESIGN_APPROVED', 'Design approved'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    business_name = models.CharField(max_length=255)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    department = models.CharField(max_length=100)
    municipality = models.CharField(max_length=100)
    neighborhood = models.CharField(max_length=150)
    address = models.CharField(max_length=255)
    contact_phone = models.CharField(max_length=30)
    qr_type = models.CharField(max_length=20, choices=QrType.choices)
    qr_data = models.CharField(max_length=500, help_text='Phone, URL or handle encoded in the QR')
    package = models.CharField(max_length=20, choices=Package.choices)
    logo_url = models.CharField(max_length=500, blank=True, null=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'b2b_quotes'
        ordering = ['-created_at']
        verbose_name = 'B2B quote'
        indexes = [
            models.Index(fields=['status']),
        ]

    def __str__(self):
        return f"{self.business_name} - {self.quantity} ({self.get_package_display()})"
