from django_filters import rest_framework as filters

from fleet.models import DriverProfile, Truck


class TruckFilter(filters.FilterSet):
    status = filters.ChoiceFilter(choices=Truck.STATUS_CHOICES)
    type = filters.ChoiceFilter(field_name='truck_type', choices=Truck.TYPE_CHOICES)
    available = filters.BooleanFilter(method='filter_available')

    class Meta:
        model = Truck
        fields = ['status', 'type', 'available']

    def filter_available(self, queryset, name, value):
        if value:
            return queryset.filter(status='available', is_active=True)
        return queryset


class DriverFilter(filters.FilterSet):
    status = filters.ChoiceFilter(choices=DriverProfile.STATUS_CHOICES)
    available = filters.BooleanFilter(method='filter_available')

    class Meta:
        model = DriverProfile
        fields = ['status', 'available']

    def filter_available(self, queryset, name, value):
        if value:
            return queryset.filter(status='available', is_active=True)
        return queryset
