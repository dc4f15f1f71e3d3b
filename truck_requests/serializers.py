from rest_framework import serializers

from accounts.serializers import UserSummarySerializer
from truck_requests.models import TruckRequest


class AssignedTruckSerializer(serializers.Serializer):
    """The assignment group as the ``assignedTruck`` sub-document."""
    truckId = serializers.IntegerField(source='assigned_truck_id')
    driverId = serializers.IntegerField(source='assigned_driver_id')
    assignedAt = serializers.DateTimeField(source='assigned_at')
    assignedBy = serializers.IntegerField(source='assigned_by_id')
    truckNumber = serializers.CharField(source='assigned_truck.truck_number')
    driverName = serializers.CharField(source='assigned_driver.user.display_name')


class TruckRequestSerializer(serializers.ModelSerializer):
    requester = UserSummarySerializer(read_only=True)
    loadId = serializers.CharField(source='load_id', read_only=True)
    loadDescription = serializers.CharField(source='load_description', read_only=True)
    estimatedWeight = serializers.IntegerField(source='estimated_weight', read_only=True)
    pickupLocation = serializers.CharField(source='pickup_location', read_only=True)
    deliveryLocation = serializers.CharField(source='delivery_location', read_only=True)
    requestedTime = serializers.DateTimeField(source='requested_time', read_only=True)
    requiredTime = serializers.DateTimeField(source='required_time', read_only=True)
    assignedTruck = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = TruckRequest
        fields = [
            'id',
            'requester',
            'loadId',
            'loadDescription',
            'estimatedWeight',
            'priority',
            'pickupLocation',
            'deliveryLocation',
            'requestedTime',
            'requiredTime',
            'status',
            'assignedTruck',
            'notes',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = fields

    def get_assignedTruck(self, obj):
        if not obj.has_assignment:
            return None
        return AssignedTruckSerializer(obj).data


class TruckRequestCreateSerializer(serializers.Serializer):
    loadId = serializers.CharField(source='load_id', max_length=64)
    loadDescription = serializers.CharField(source='load_description')
    estimatedWeight = serializers.IntegerField(source='estimated_weight', min_value=0, required=False, allow_null=True)
    priority = serializers.ChoiceField(choices=TruckRequest.PRIORITY_CHOICES, required=False)
    pickupLocation = serializers.CharField(source='pickup_location', max_length=255)
    deliveryLocation = serializers.CharField(source='delivery_location', max_length=255)
    requiredTime = serializers.DateTimeField(source='required_time', required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_blank=True)


class AssignTruckSerializer(serializers.Serializer):
    truckId = serializers.IntegerField(source='truck_id')
    driverId = serializers.IntegerField(source='driver_id')


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TruckRequest.STATUS_CHOICES)
    notes = serializers.CharField(required=False, allow_blank=True)
