from rest_framework import serializers
from .models import Profile


class ProfileSerializer(serializers.ModelSerializer):
    """Serializer for Profile model"""
    user_id = serializers.UUIDField(source='user.id', read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)

    class Meta:
        model = Profile
        fields = [
            'id', 'user_id', 'email', 'role', 'first_name', 'last_name',
            'phone', 'document_number', 'department', 'municipality',
            'address', 'metadata', 'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'role', 'created_at', 'updated_at']


class ProfileListSerializer(ProfileSerializer):
    """Admin listing with account status and order count"""
    is_active = serializers.BooleanField(source='user.is_active', read_only=True)
    orders_count = serializers.IntegerField(read_only=True)

    class Meta(ProfileSerializer.Meta):
        fields = ProfileSerializer.Meta.fields + ['is_active', 'orders_count']


class ProfileDetailSerializer(ProfileSerializer):
    """Admin detail view including the profile's orders, newest first"""
    orders = serializers.SerializerMethodField()

    class Meta(ProfileSerializer.Meta):
        fields = ProfileSerializer.Meta.fields + ['orders']

    def get_orders(self, obj):
        from orders.serializers import OrderSerializer
        return OrderSerializer(obj.orders.order_by('-created_at'), many=True).data
