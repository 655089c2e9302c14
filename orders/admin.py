from django.contrib import admin
from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ['product', 'variant', 'sku', 'quantity', 'unit_price']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['order_number', 'customer_email', 'total_amount', 'status', 'carrier', 'created_at']
    list_filter = ['status', 'department', 'created_at']
    search_fields = ['order_number', 'customer_email', 'customer_first_name', 'customer_last_name', 'tracking_number']
    readonly_fields = ['order_number', 'total_amount', 'created_at', 'updated_at']
    inlines = [OrderItemInline]
