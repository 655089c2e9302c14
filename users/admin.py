from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import Profile, User


class ProfileInline(admin.StackedInline):
    model = Profile
    can_delete = False
    readonly_fields = ['created_at', 'updated_at']


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ['username', 'email', 'first_name', 'last_name', 'is_active', 'is_staff']
    list_filter = ['is_active', 'is_staff', 'is_superuser', 'profile__role']
    search_fields = ['username', 'email', 'first_name', 'last_name']
    inlines = [ProfileInline]


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'role', 'first_name', 'last_name', 'phone', 'department', 'municipality', 'created_at']
    list_filter = ['role', 'department']
    search_fields = ['user__username', 'user__email', 'first_name', 'last_name', 'phone', 'document_number']
    readonly_fields = ['created_at', 'updated_at']
