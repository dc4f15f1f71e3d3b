from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('email', 'name', 'role', 'department', 'is_active', 'last_login')
    list_filter = ('role', 'department', 'is_active')
    search_fields = ('email', 'name', 'username')
    ordering = ('email',)
    readonly_fields = ('created_at', 'updated_at', 'last_login')

    fieldsets = BaseUserAdmin.fieldsets + (
        ('Logistics', {
            'fields': ('name', 'role', 'department', 'phone', 'notification_preferences')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
