from django.contrib import admin
from .models import B2BQuote


@admin.register(B2BQuote)
class B2BQuoteAdmin(admin.ModelAdmin):
    list_display = ['business_name', 'quantity', 'package', 'qr_type', 'status', 'created_at']
    list_filter = ['package', 'status', 'qr_type']
    search_fields = ['business_name', 'contact_phone']
    readonly_fields = ['created_at']
