from django.contrib import admin

from .models import DriverProfile, Truck


@admin.register(Truck)
class TruckAdmin(admin.ModelAdmin):
    list_display = (
        'truck_number', 'plate_number', 'truck_type', 'capacity', 'status',
        'assigned_driver_id', 'current_request_id', 'is_active'
    )
    list_filter = ('status', 'truck_type', 'fuel_type', 'is_active')
    search_fields = ('truck_number', 'plate_number')
    readonly_fields = ('created_at', 'updated_at', 'last_location_update', 'assigned_driver_id', 'current_request_id')

    fieldsets = (
        ('Basic Information', {
            'fields': ('truck_number', 'plate_number', 'truck_type', 'capacity', 'status', 'is_active')
        }),
        ('Assignment', {
            'fields': ('assigned_driver_id', 'current_request_id')
        }),
        ('Specifications', {
            'fields': ('length', 'width', 'height', 'fuel_type')
        }),
        ('Maintenance', {
            'fields': ('last_service', 'next_service', 'mileage')
        }),
        ('Current Location', {
            'fields': ('current_latitude', 'current_longitude', 'current_address', 'last_location_update')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(DriverProfile)
class DriverProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'license_number', 'license_type', 'status', 'current_truck_id', 'average_rating')
    list_filter = ('status', 'license_type', 'is_active')
    search_fields = ('user__email', 'user__name', 'license_number')
    raw_id_fields = ('user',)
    readonly_fields = ('created_at', 'updated_at', 'current_truck_id')
