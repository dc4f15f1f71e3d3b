import logging

from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg.utils import swagger_auto_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.views import APIView

from accounts.permissions import OperationMixin
from accounts.roles import SWITCHER
from logistics_core.pagination import breakdown, paginate
from logistics_core.responses import created, envelope
from truck_requests.serializers import TruckRequestSerializer
from yard.filters import LoadingBayFilter, YardMovementFilter
from yard.models import LoadingBay, YardMovement
from yard.serializers import (
    BayAssignSerializer,
    LoadingBayCreateSerializer,
    LoadingBaySerializer,
    MovementCreateSerializer,
    QueueUpdateSerializer,
    YardMovementSerializer,
)
from yard.services import coordination

logger = logging.getLogger(__name__)


class LoadingBayViewSet(OperationMixin, viewsets.GenericViewSet):
    """
    API endpoint for loading bays.
    """
    queryset = LoadingBay.objects.select_related('current_truck', 'current_driver__user', 'assigned_by')
    serializer_class = LoadingBaySerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = LoadingBayFilter
    operations = {
        'list': 'yard.bay.list',
        'create': 'yard.bay.create',
        'assign': 'yard.bay.assign',
    }

    @swagger_auto_schema(responses={200: LoadingBaySerializer(many=True)}, tags=['Yard'])
    def list(self, request):
        bays = self.filter_queryset(self.get_queryset())
        return envelope(
            {
                'bays': LoadingBaySerializer(bays, many=True).data,
                'statusBreakdown': breakdown(LoadingBay.objects.filter(is_active=True), 'status'),
            },
            'Loading bays retrieved successfully',
        )

    @swagger_auto_schema(request_body=LoadingBayCreateSerializer, responses={201: LoadingBaySerializer}, tags=['Yard'])
    def create(self, request):
        serializer = LoadingBayCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        bay = coordination.create_bay(request.user, serializer.validated_data)
        return created(LoadingBaySerializer(bay).data, 'Loading bay created successfully')

    @swagger_auto_schema(request_body=BayAssignSerializer, tags=['Yard'])
    @action(detail=True, methods=['put'])
    def assign(self, request, pk=None):
        serializer = BayAssignSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        bay, movement = coordination.assign_truck_to_bay(request.user, pk, **serializer.validated_data)
        return envelope(
            {'bay': LoadingBaySerializer(bay).data, 'movement': YardMovementSerializer(movement).data},
            'Truck assigned to loading bay successfully',
        )


class YardMovementView(OperationMixin, APIView):
    """
    The yard movement log. Switchers only see the movements they recorded.
    """
    operations = {
        'get': 'yard.movement.list',
        'post': 'yard.movement.create',
    }

    @swagger_auto_schema(responses={200: YardMovementSerializer(many=True)}, tags=['Yard'])
    def get(self, request, format=None):
        visible = YardMovement.objects.select_related('truck_request', 'switcher')
        if request.user.role == SWITCHER:
            visible = visible.filter(switcher=request.user)
        queryset = YardMovementFilter(request.query_params, queryset=visible).qs
        movements, pagination = paginate(queryset, request)
        return envelope(
            {
                'movements': YardMovementSerializer(movements, many=True).data,
                'pagination': pagination,
                'movementTypeBreakdown': breakdown(visible, 'movement_type'),
            },
            'Yard movements retrieved successfully',
        )

    @swagger_auto_schema(request_body=MovementCreateSerializer, responses={201: YardMovementSerializer}, tags=['Yard'])
    def post(self, request, format=None):
        serializer = MovementCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        movement = coordination.record_movement(request.user, **serializer.validated_data)
        return created(YardMovementSerializer(movement).data, 'Yard movement recorded successfully')


class YardQueueView(OperationMixin, APIView):
    operations = {
        'get': 'yard.queue.view',
        'put': 'yard.queue.update',
    }

    @swagger_auto_schema(tags=['Yard'])
    def get(self, request, format=None):
        snapshot = coordination.queue_snapshot()
        return envelope(
            {
                'queuedTrucks': TruckRequestSerializer(snapshot['queued'], many=True).data,
                'inLoadingTrucks': TruckRequestSerializer(snapshot['in_loading'], many=True).data,
                'occupiedBays': LoadingBaySerializer(snapshot['occupied_bays'], many=True).data,
                'availableBays': LoadingBaySerializer(snapshot['available_bays'], many=True).data,
                'recentMovements': YardMovementSerializer(snapshot['recent_movements'], many=True).data,
                'queueStats': snapshot['stats'],
            },
            'Yard queue retrieved successfully',
        )

    @swagger_auto_schema(request_body=QueueUpdateSerializer, tags=['Yard'])
    def put(self, request, format=None):
        serializer = QueueUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        truck_request, movement = coordination.update_queue_priority(request.user, **serializer.validated_data)
        return envelope(
            {
                'truckRequest': TruckRequestSerializer(truck_request).data,
                'movement': YardMovementSerializer(movement).data,
            },
            'Queue priority updated successfully',
        )
