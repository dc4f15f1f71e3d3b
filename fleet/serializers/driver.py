from rest_framework import serializers

from accounts.serializers import UserSummarySerializer
from fleet.models import DriverProfile
from fleet.serializers.truck import LocationSerializer


class EmergencyContactSerializer(serializers.Serializer):
    name = serializers.CharField(allow_blank=True, required=False, default='')
    phone = serializers.CharField(allow_blank=True, required=False, default='')
    relation = serializers.CharField(allow_blank=True, required=False, default='')


class AddressSerializer(serializers.Serializer):
    street = serializers.CharField(allow_blank=True, required=False, default='')
    city = serializers.CharField(allow_blank=True, required=False, default='')
    state = serializers.CharField(allow_blank=True, required=False, default='')
    pincode = serializers.CharField(allow_blank=True, required=False, default='')


class DriverProfileSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    licenseNumber = serializers.CharField(source='license_number', read_only=True)
    licenseExpiry = serializers.DateField(source='license_expiry', read_only=True)
    licenseType = serializers.CharField(source='license_type', read_only=True)
    emergencyContact = serializers.JSONField(source='emergency_contact', read_only=True)
    experienceYears = serializers.IntegerField(source='experience_years', read_only=True)
    previousCompanies = serializers.JSONField(source='previous_companies', read_only=True)
    currentTruckId = serializers.IntegerField(source='current_truck_id', read_only=True)
    currentLocation = LocationSerializer(source='current_location', read_only=True, allow_null=True)
    averageRating = serializers.DecimalField(source='average_rating', max_digits=3, decimal_places=2, read_only=True)
    totalRatings = serializers.IntegerField(source='total_ratings', read_only=True)
    joinDate = serializers.DateField(source='join_date', read_only=True)
    isActive = serializers.BooleanField(source='is_active', read_only=True)
    isAvailable = serializers.BooleanField(source='is_available', read_only=True)

    class Meta:
        model = DriverProfile
        fields = [
            'id',
            'user',
            'licenseNumber',
            'licenseExpiry',
            'licenseType',
            'phone',
            'emergencyContact',
            'address',
            'experienceYears',
            'previousCompanies',
            'currentTruckId',
            'status',
            'currentLocation',
            'averageRating',
            'totalRatings',
            'joinDate',
            'isActive',
            'isAvailable',
        ]
        read_only_fields = fields


class DriverCreateSerializer(serializers.Serializer):
    userId = serializers.IntegerField(source='user_id')
    licenseNumber = serializers.CharField(source='license_number', max_length=32)
    licenseExpiry = serializers.DateField(source='license_expiry')
    licenseType = serializers.ChoiceField(source='license_type', choices=DriverProfile.LICENSE_TYPE_CHOICES)
    phone = serializers.CharField(max_length=32)
    emergencyContact = EmergencyContactSerializer(source='emergency_contact', required=False)
    address = AddressSerializer(required=False)
    experienceYears = serializers.IntegerField(source='experience_years', min_value=0, required=False)
    previousCompanies = serializers.ListField(
        source='previous_companies', child=serializers.CharField(), required=False
    )
