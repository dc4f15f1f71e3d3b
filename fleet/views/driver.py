import logging

from django.db.models import Count, Q
from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg.utils import swagger_auto_schema
from rest_framework import viewsets
from rest_framework.decorators import action

from accounts.permissions import OperationMixin
from fleet.filters import DriverFilter
from fleet.models import DriverProfile
from fleet.serializers import DriverCreateSerializer, DriverProfileSerializer, StatusChangeSerializer
from fleet.services.registration import register_driver
from fleet.services.status_services import change_driver_status
from logistics_core.pagination import paginate
from logistics_core.responses import created, envelope

logger = logging.getLogger(__name__)


class DriverViewSet(OperationMixin, viewsets.GenericViewSet):
    """
    API endpoint for driver profiles.
    """
    queryset = DriverProfile.objects.select_related('user')
    serializer_class = DriverProfileSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = DriverFilter
    operations = {
        'list': 'driver.list',
        'create': 'driver.create',
        'change_status': 'driver.change_status',
    }

    @swagger_auto_schema(responses={200: DriverProfileSerializer(many=True)}, tags=['Fleet'])
    def list(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        drivers, pagination = paginate(queryset, request)

        stats = DriverProfile.objects.aggregate(
            total=Count('id'),
            available=Count('id', filter=Q(status='available')),
            assigned=Count('id', filter=Q(status='assigned')),
            onTrip=Count('id', filter=Q(status='on_trip')),
        )
        return envelope(
            {'drivers': DriverProfileSerializer(drivers, many=True).data, 'pagination': pagination, 'stats': stats},
            'Drivers retrieved successfully',
        )

    @swagger_auto_schema(request_body=DriverCreateSerializer, responses={201: DriverProfileSerializer}, tags=['Fleet'])
    def create(self, request):
        serializer = DriverCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        driver = register_driver(request.user, serializer.validated_data)
        return created(DriverProfileSerializer(driver).data, 'Driver profile created successfully')

    @swagger_auto_schema(request_body=StatusChangeSerializer, responses={200: DriverProfileSerializer}, tags=['Fleet'])
    @action(detail=True, methods=['post'])
    def change_status(self, request, pk=None):
        serializer = StatusChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        driver = change_driver_status(request.user, pk, serializer.validated_data['status'])
        return envelope(DriverProfileSerializer(driver).data, 'Driver status updated successfully')
