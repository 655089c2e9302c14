from rest_framework import serializers
from .models import Collection, Product, ProductImage, Variant


class CollectionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Collection
        fields = ['id', 'name', 'slug', 'is_active', 'created_at']
        read_only_fields = ['id', 'slug', 'created_at']


class ProductImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductImage
        fields = ['id', 'url', 'alt', 'position']
        read_only_fields = ['id']


class VariantSerializer(serializers.ModelSerializer):
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Variant
        fields = ['id', 'sku', 'color', 'image_url', 'stock', 'is_low_stock', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class ProductSerializer(serializers.ModelSerializer):
    collection = CollectionSerializer(read_only=True)
    images = ProductImageSerializer(many=True, read_only=True)
    variants = VariantSerializer(many=True, read_only=True)
    total_stock = serializers.IntegerField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'slug', 'description', 'base_price', 'min_price',
            'cost_price', 'compare_price', 'status', 'is_active', 'collection',
            'images', 'variants', 'total_stock', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class ImageInputSerializer(serializers.Serializer):
    url = serializers.CharField(max_length=500)
    alt = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')
    position = serializers.IntegerField(min_value=0, required=False, default=0)


class VariantInputSerializer(serializers.Serializer):
    sku = serializers.CharField(max_length=150)
    color = serializers.CharField(max_length=50)
    image_url = serializers.CharField(max_length=500, required=False, allow_null=True, allow_blank=True)
    stock = serializers.IntegerField(min_value=0, required=False, default=0)


class ProductWriteSerializer(serializers.ModelSerializer):
    """
    Input for product create and patch. The collection is given either by id or by
    name; an unknown name creates the collection.
    """
    slug = serializers.SlugField(max_length=255, required=False, allow_blank=True)
    collection_id = serializers.UUIDField(required=False, allow_null=True)
    collection_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    images = ImageInputSerializer(many=True, required=False)
    variants = VariantInputSerializer(many=True)

    class Meta:
        model = Product
        fields = [
            'name', 'slug', 'description', 'base_price', 'min_price', 'cost_price',
            'compare_price', 'status', 'is_active', 'collection_id', 'collection_name',
            'images', 'variants'
        ]
