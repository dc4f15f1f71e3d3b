from django.contrib import admin

from .models import LoadingBay, YardMovement


@admin.register(LoadingBay)
class LoadingBayAdmin(admin.ModelAdmin):
    list_display = ('bay_number', 'bay_name', 'location', 'status', 'current_truck', 'occupied_at', 'is_active')
    list_filter = ('status', 'is_active')
    search_fields = ('bay_number', 'bay_name', 'location')
    raw_id_fields = ('current_truck', 'current_driver', 'current_request', 'assigned_by')
    readonly_fields = ('created_at', 'updated_at')


@admin.register(YardMovement)
class YardMovementAdmin(admin.ModelAdmin):
    list_display = ('truck_request', 'truck', 'movement_type', 'to_location', 'switcher', 'actual_time')
    list_filter = ('movement_type',)
    search_fields = ('truck__truck_number', 'to_location', 'notes')
    raw_id_fields = ('truck_request', 'truck', 'driver', 'loading_bay', 'switcher')
    date_hierarchy = 'actual_time'

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
