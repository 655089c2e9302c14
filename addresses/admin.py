from django.contrib import admin
from .models import Address


@admin.register(Address)
class AddressAdmin(admin.ModelAdmin):
    list_display = ['title', 'profile', 'department', 'municipality', 'is_default', 'created_at']
    list_filter = ['is_default', 'department']
    search_fields = ['title', 'address', 'first_name', 'last_name', 'profile__user__email']
    readonly_fields = ['created_at', 'updated_at']
