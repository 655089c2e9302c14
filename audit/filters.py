import django_filters

from .models import AuditLog


class AuditLogFilter(django_filters.FilterSet):
    entity = django_filters.CharFilter(field_name='entity')
    action = django_filters.CharFilter(field_name='action', lookup_expr='iexact')
    user_id = django_filters.UUIDFilter(field_name='user_id')

    class Meta:
        model = AuditLog
        fields = ['entity', 'action', 'user_id']
