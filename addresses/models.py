import uuid

from django.db import models


class Address(models.Model):
    """
    Shipping address in a profile's address book.

    A profile with at least one address always has exactly one default.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    profile = models.ForeignKey('users.Profile', on_delete=models.CASCADE, related_name='addresses')
    title = models.CharField(max_length=100, help_text='Label such as "Home" or "Office"')
    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150)
    phone = models.CharField(max_length=30)
    department = models.ForeignKey('locations.Department', on_delete=models.PROTECT, related_name='addresses')
    municipality = models.ForeignKey('locations.Municipality', on_delete=models.PROTECT, related_name='addresses')
    address = models.CharField(max_length=255)
    neighborhood = models.CharField(max_length=150, blank=True, null=True)
    additional_info = models.CharField(max_length=255, blank=True, null=True)
    is_default = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'addresses'
        ordering = ['-is_default', '-created_at']
        verbose_name_plural = 'Addresses'
        indexes = [
            models.Index(fields=['profile', 'is_default']),
        ]

    def __str__(self):
        return f"{self.title} - {self.address}"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()
