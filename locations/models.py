import uuid

from django.db import models


class Department(models.Model):
    """Colombian department, keyed by its DANE code"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=10, unique=True)
    name = models.CharField(max_length=100)

    class Meta:
        db_table = 'departments'
        ordering = ['name']

    def __str__(self):
        return self.name


class Municipality(models.Model):
    """Municipality belonging to a department"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(max_length=10, unique=True)
    name = models.CharField(max_length=100)
    department = models.ForeignKey(Department, on_delete=models.CASCADE, related_name='municipalities')

    class Meta:
        db_table = 'municipalities'
        ordering = ['name']
        verbose_name_plural = 'Municipalities'
        indexes = [
            models.Index(fields=['department']),
        ]

    def __str__(self):
        return f"{self.name} ({self.department.name})"
