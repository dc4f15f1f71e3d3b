from django_filters import rest_framework as filters

from yard.models import LoadingBay, YardMovement


class LoadingBayFilter(filters.FilterSet):
    status = filters.ChoiceFilter(choices=LoadingBay.STATUS_CHOICES)
    isActive = filters.BooleanFilter(field_name='is_active')

    class Meta:
        model = LoadingBay
        fields = ['status', 'isActive']


class YardMovementFilter(filters.FilterSet):
    truckId = filters.NumberFilter(field_name='truck_id')
    movementType = filters.ChoiceFilter(field_name='movement_type', choices=YardMovement.MOVEMENT_TYPE_CHOICES)
    date = filters.DateFilter(field_name='actual_time', lookup_expr='date')

    class Meta:
        model = YardMovement
        fields = ['truckId', 'movementType', 'date']
