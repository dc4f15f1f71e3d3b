from rest_framework import serializers

from fleet.models import Truck


class LocationSerializer(serializers.Serializer):
    lat = serializers.FloatField(allow_null=True)
    lng = serializers.FloatField(allow_null=True)
    address = serializers.CharField(allow_blank=True)


class TruckSpecificationsSerializer(serializers.Serializer):
    length = serializers.DecimalField(max_digits=6, decimal_places=2, required=False, allow_null=True)
    width = serializers.DecimalField(max_digits=6, decimal_places=2, required=False, allow_null=True)
    height = serializers.DecimalField(max_digits=6, decimal_places=2, required=False, allow_null=True)
    fuelType = serializers.ChoiceField(source='fuel_type', choices=Truck.FUEL_TYPE_CHOICES, required=False)


class TruckMaintenanceSerializer(serializers.Serializer):
    lastService = serializers.DateField(source='last_service', required=False, allow_null=True)
    nextService = serializers.DateField(source='next_service', required=False, allow_null=True)
    mileage = serializers.IntegerField(min_value=0, required=False)


class TruckSerializer(serializers.ModelSerializer):
    truckNumber = serializers.CharField(source='truck_number', read_only=True)
    plateNumber = serializers.CharField(source='plate_number', read_only=True)
    type = serializers.CharField(source='truck_type', read_only=True)
    currentLocation = LocationSerializer(source='current_location', read_only=True, allow_null=True)
    assignedDriverId = serializers.IntegerField(source='assigned_driver_id', read_only=True)
    currentRequestId = serializers.IntegerField(source='current_request_id', read_only=True)
    specifications = TruckSpecificationsSerializer(source='*', read_only=True)
    maintenance = TruckMaintenanceSerializer(source='*', read_only=True)
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    isAvailable = serializers.BooleanField(source='is_available', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Truck
        fields = [
            'id',
            'truckNumber',
            'plateNumber',
            'capacity',
            'type',
            'status',
            'currentLocation',
            'assignedDriverId',
            'currentRequestId',
            'specifications',
            'maintenance',
            'isActive',
            'isAvailable',
            'createdAt',
            'updatedAt',
        ]
        read_only_fields = fields


class TruckCreateSerializer(serializers.Serializer):
    truckNumber = serializers.CharField(source='truck_number', max_length=20)
    plateNumber = serializers.CharField(source='plate_number', max_length=20)
    capacity = serializers.IntegerField(min_value=1)
    type = serializers.ChoiceField(source='truck_type', choices=Truck.TYPE_CHOICES)
    specifications = TruckSpecificationsSerializer(source='*', required=False)
    maintenance = TruckMaintenanceSerializer(source='*', required=False)


class StatusChangeSerializer(serializers.Serializer):
    status = serializers.CharField()
