from rest_framework import generics
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from users.permissions import IsAdmin
from .filters import AuditLogFilter
from .models import AuditLog
from .serializers import AuditLogSerializer

DEFAULT_TAKE = 50


def _window_param(request, name, default):
    raw = request.query_params.get(name, None)
    if raw in (None, ''):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError({name: ['A non-negative integer is required.']})
    if value < 0:
        raise ValidationError({name: ['A non-negative integer is required.']})
    return value


class AuditLogListView(generics.ListAPIView):
    """Audit records, newest first, windowed by skip/take (admin only)"""
    queryset = AuditLog.objects.select_related('user__profile')
    serializer_class = AuditLogSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    filterset_class = AuditLogFilter

    def list(self, request, *args, **kwargs):
        skip = _window_param(request, 'skip', 0)
        take = _window_param(request, 'take', DEFAULT_TAKE)

        queryset = self.filter_queryset(self.get_queryset()).order_by('-created_at')
        total = queryset.count()
        serializer = self.get_serializer(queryset[skip:skip + take], many=True)

        response = Response(serializer.data)
        response.metadata = {'total': total, 'skip': skip, 'take': take}
        return response


class AuditLogDetailView(generics.RetrieveAPIView):
    queryset = AuditLog.objects.select_related('user__profile')
    serializer_class = AuditLogSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
