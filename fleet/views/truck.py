import logging

from django.db.models import Count, Q
from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg.utils import swagger_auto_schema
from rest_framework import viewsets
from rest_framework.decorators import action

from accounts.permissions import OperationMixin
from fleet.filters import TruckFilter
from fleet.models import Truck
from fleet.serializers import StatusChangeSerializer, TruckCreateSerializer, TruckSerializer
from fleet.services.registration import register_truck
from fleet.services.status_services import change_truck_status
from logistics_core.pagination import paginate
from logistics_core.responses import created, envelope

logger = logging.getLogger(__name__)


class TruckViewSet(OperationMixin, viewsets.GenericViewSet):
    """
    API endpoint for the truck fleet.
    """
    queryset = Truck.objects.all()
    serializer_class = TruckSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = TruckFilter
    operations = {
        'list': 'truck.list',
        'create': 'truck.create',
        'change_status': 'truck.change_status',
    }

    def get_queryset(self):
        return super().get_queryset().order_by('truck_number')

    @swagger_auto_schema(responses={200: TruckSerializer(many=True)}, tags=['Fleet'])
    def list(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        trucks, pagination = paginate(queryset, request)

        stats = Truck.objects.aggregate(
            total=Count('id'),
            available=Count('id', filter=Q(status='available')),
            assigned=Count('id', filter=Q(status='assigned')),
            maintenance=Count('id', filter=Q(status='maintenance')),
        )
        return envelope(
            {'trucks': TruckSerializer(trucks, many=True).data, 'pagination': pagination, 'stats': stats},
            'Trucks retrieved successfully',
        )

    @swagger_auto_schema(request_body=TruckCreateSerializer, responses={201: TruckSerializer}, tags=['Fleet'])
    def create(self, request):
        serializer = TruckCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        truck = register_truck(request.user, serializer.validated_data)
        return created(TruckSerializer(truck).data, 'Truck created successfully')

    @swagger_auto_schema(request_body=StatusChangeSerializer, responses={200: TruckSerializer}, tags=['Fleet'])
    @action(detail=True, methods=['post'])
    def change_status(self, request, pk=None):
        serializer = StatusChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        truck = change_truck_status(request.user, pk, serializer.validated_data['status'])
        return envelope(TruckSerializer(truck).data, 'Truck status updated successfully')
