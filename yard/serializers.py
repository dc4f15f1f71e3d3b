from rest_framework import serializers

from accounts.serializers import UserSummarySerializer
from truck_requests.models import TruckRequest
from yard.models import LoadingBay, YardMovement


class CurrentTruckSerializer(serializers.Serializer):
    """The bay's occupant as the ``currentTruck`` sub-document."""
    truckId = serializers.IntegerField(source='current_truck_id')
    truckNumber = serializers.CharField(source='current_truck.truck_number')
    driverId = serializers.IntegerField(source='current_driver_id')
    driverName = serializers.CharField(source='current_driver.user.display_name')
    truckRequestId = serializers.IntegerField(source='current_request_id')
    assignedAt = serializers.DateTimeField(source='occupied_at')
    estimatedDeparture = serializers.DateTimeField(source='estimated_departure')


class LoadingBaySerializer(serializers.ModelSerializer):
    bayNumber = serializers.CharField(source='bay_number', read_only=True)
    bayName = serializers.CharField(source='bay_name', read_only=True)
    currentTruck = serializers.SerializerMethodField()
    assignedBy = UserSummarySerializer(source='assigned_by', read_only=True)
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = LoadingBay
        fields = [
            'id',
            'bayNumber',
            'bayName',
            'location',
            'capacity',
            'status',
            'currentTruck',
            'assignedBy',
            'isActive',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = fields

    def get_currentTruck(self, obj):
        if not obj.is_occupied:
            return None
        return CurrentTruckSerializer(obj).data


class YardMovementSerializer(serializers.ModelSerializer):
    truckRequestId = serializers.IntegerField(source='truck_request_id', read_only=True)
    loadId = serializers.CharField(source='truck_request.load_id', read_only=True)
    truckId = serializers.IntegerField(source='truck_id', read_only=True)
    driverId = serializers.IntegerField(source='driver_id', read_only=True)
    movementType = serializers.CharField(source='movement_type', read_only=True)
    fromLocation = serializers.CharField(source='from_location', read_only=True)
    toLocation = serializers.CharField(source='to_location', read_only=True)
    loadingBayId = serializers.IntegerField(source='loading_bay_id', read_only=True)
    switcher = UserSummarySerializer(read_only=True)
    estimatedTime = serializers.DateTimeField(source='estimated_time', read_only=True)
    actualTime = serializers.DateTimeField(source='actual_time', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = YardMovement
        fields = [
            'id',
            'truckRequestId',
            'loadId',
            'truckId',
            'driverId',
            'movementType',
            'fromLocation',
            'toLocation',
            'loadingBayId',
            'switcher',
            'notes',
            'estimatedTime',
            'actualTime',
            'createdAt',
        ]
        read_only_fields = fields


class LoadingBayCreateSerializer(serializers.Serializer):
    bayNumber = serializers.CharField(source='bay_number', max_length=20)
    bayName = serializers.CharField(source='bay_name', max_length=100)
    location = serializers.CharField(max_length=255)
    capacity = serializers.IntegerField(min_value=1, required=False)
    # A bay can only become occupied through an assignment.
    status = serializers.ChoiceField(choices=['available', 'maintenance', 'reserved'], required=False)


class BayAssignSerializer(serializers.Serializer):
    truckRequestId = serializers.IntegerField(source='truck_request_id')
    truckId = serializers.IntegerField(source='truck_id')
    driverId = serializers.IntegerField(source='driver_id')
    estimatedDeparture = serializers.DateTimeField(source='estimated_departure', required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class MovementCreateSerializer(serializers.Serializer):
    truckRequestId = serializers.IntegerField(source='truck_request_id')
    truckId = serializers.IntegerField(source='truck_id')
    driverId = serializers.IntegerField(source='driver_id')
    movementType = serializers.ChoiceField(source='movement_type', choices=YardMovement.MOVEMENT_TYPE_CHOICES)
    fromLocation = serializers.CharField(source='from_location', required=False, allow_blank=True)
    toLocation = serializers.CharField(source='to_location', max_length=255)
    loadingBayId = serializers.IntegerField(source='loading_bay_id', required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    estimatedTime = serializers.DateTimeField(source='estimated_time', required=False, allow_null=True)


class QueueUpdateSerializer(serializers.Serializer):
    truckRequestId = serializers.IntegerField(source='truck_request_id')
    newPriority = serializers.ChoiceField(source='new_priority', choices=TruckRequest.PRIORITY_CHOICES, required=False)
    position = serializers.IntegerField(min_value=1, required=False)
