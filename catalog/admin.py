from django.contrib import admin
from .models import Collection, Product, ProductImage, Variant


@admin.register(Collection)
class CollectionAdmin(admin.ModelAdmin):
    list_display = ['name', 'slug', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name', 'slug']


class VariantInline(admin.TabularInline):
    model = Variant
    extra = 1


class ProductImageInline(admin.TabularInline):
    model = ProductImage
    extra = 1


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'collection', 'base_price', 'min_price', 'status', 'is_active', 'created_at']
    list_filter = ['collection', 'status', 'is_active']
    search_fields = ['name', 'slug', 'variants__sku']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [VariantInline, ProductImageInline]


@admin.register(Variant)
class VariantAdmin(admin.ModelAdmin):
    list_display = ['sku', 'product', 'color', 'stock']
    search_fields = ['sku', 'product__name']
