from rest_framework import serializers
from .models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)
    line_total = serializers.IntegerField(read_only=True)

    class Meta:
        model = OrderItem
        fields = ['id', 'product', 'product_name', 'variant', 'sku', 'quantity', 'unit_price', 'line_total']
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    profile_id = serializers.UUIDField(read_only=True)
    customer_name = serializers.CharField(read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'order_number', 'profile_id', 'customer_name', 'customer_first_name', 'customer_last_name',
            'customer_email', 'customer_phone', 'department', 'city', 'shipping_address',
            'total_amount', 'status', 'tracking_number', 'carrier', 'items',
            'created_at', 'updated_at'
        ]
        read_only_fields = fields


class ShippingAddressSerializer(serializers.Serializer):
    city = serializers.CharField(max_length=100)
    address = serializers.CharField(max_length=255)
    phone = serializers.CharField(max_length=30)


class OrderItemCreateSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    variant_id = serializers.UUIDField(required=False, allow_null=True)
    sku = serializers.CharField(max_length=150, required=False, allow_blank=True)
    quantity = serializers.IntegerField(min_value=1)
    price = serializers.IntegerField(min_value=0)

    def validate(self, attrs):
        if not attrs.get('variant_id') and not attrs.get('sku'):
            raise serializers.ValidationError({'sku': 'Either sku or variant_id is required'})
        return attrs


class OrderCreateSerializer(serializers.Serializer):
    """
    Checkout input. Authenticated callers may omit the customer and
    shipping fields; they are filled from the profile's default address.
    """
    customer_first_name = serializers.CharField(max_length=150, required=False)
    customer_last_name = serializers.CharField(max_length=150, required=False)
    customer_email = serializers.EmailField(required=False)
    customer_phone = serializers.CharField(max_length=30, required=False)
    department = serializers.CharField(max_length=100, required=False)
    city = serializers.CharField(max_length=100, required=False)
    shipping_address = ShippingAddressSerializer(required=False, allow_null=True)
    items = OrderItemCreateSerializer(many=True)

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError('At least one item is required')
        return value


class OrderUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Order.Status.choices, required=False)
    tracking_number = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)
    carrier = serializers.CharField(max_length=100, required=False, allow_null=True, allow_blank=True)
