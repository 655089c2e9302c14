import uuid

from django.conf import settings
from django.db import models


class AuditLog(models.Model):
    """
    Append-only record of a successful mutating API request.
    ``previous_data`` holds the entity as it was before the request.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    action = models.CharField(max_length=10, help_text='HTTP method')
    entity = models.CharField(max_length=50)
    entity_id = models.CharField(max_length=100, blank=True, null=True)
    payload = models.JSONField(blank=True, null=True)
    previous_data = models.JSONField(blank=True, null=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name='audit_logs',
        null=True,
        blank=True
    )
    ip = models.GenericIPAddressField(blank=True, null=True)
    user_agent = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'audit_logs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['entity', 'entity_id']),
            models.Index(fields=['created_at']),
        ]

    def __str__(self):
        return f"{self.action} {self.entity} {self.entity_id or ''}".strip()
