from django.contrib import admin

from .models import TruckRequest


@admin.register(TruckRequest)
class TruckRequestAdmin(admin.ModelAdmin):
    list_display = ('id', 'load_id', 'requester', 'priority', 'status', 'assigned_truck', 'assigned_driver', 'requested_time')
    list_filter = ('status', 'priority')
    search_fields = ('load_id', 'load_description', 'requester__email')
    raw_id_fields = ('requester', 'assigned_truck', 'assigned_driver', 'assigned_by')
    readonly_fields = ('created_at', 'updated_at')
    date_hierarchy = 'requested_time'

    fieldsets = (
        ('Load', {
            'fields': ('requester', 'load_id', 'load_description', 'estimated_weight', 'priority', 'notes')
        }),
        ('Route', {
            'fields': ('pickup_location', 'delivery_location', 'requested_time', 'required_time')
        }),
        ('Assignment', {
            'fields': ('status', 'assigned_truck', 'assigned_driver', 'assigned_at', 'assigned_by')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
