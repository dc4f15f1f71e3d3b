from django_filters import rest_framework as filters

from truck_requests.models import TruckRequest


class TruckRequestFilter(filters.FilterSet):
    status = filters.ChoiceFilter(choices=TruckRequest.STATUS_CHOICES)
    priority = filters.ChoiceFilter(choices=TruckRequest.PRIORITY_CHOICES)

    class Meta:
        model = TruckRequest
        fields = ['status', 'priority']
