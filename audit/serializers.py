from rest_framework import serializers
from .models import AuditLog


class AuditLogSerializer(serializers.ModelSerializer):
    user_email = serializers.EmailField(source='user.email', read_only=True, default=None)
    user_name = serializers.SerializerMethodField()

    class Meta:
        model = AuditLog
        fields = [
            'id', 'action', 'entity', 'entity_id', 'payload', 'previous_data',
            'user', 'user_email', 'user_name', 'ip', 'user_agent', 'created_at'
        ]
        read_only_fields = fields

    def get_user_name(self, obj):
        profile = getattr(obj.user, 'profile', None) if obj.user_id else None
        return profile.full_name if profile else None
