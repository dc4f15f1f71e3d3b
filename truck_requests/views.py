import logging

from django_filters.rest_framework import DjangoFilterBackend
from drf_yasg.utils import swagger_auto_schema
from rest_framework import viewsets
from rest_framework.decorators import action

from accounts.permissions import OperationMixin
from accounts.roles import LOADER
from logistics_core.pagination import breakdown, paginate
from logistics_core.responses import created, envelope
from truck_requests.filters import TruckRequestFilter
from truck_requests.models import TruckRequest
from truck_requests.serializers import (
    AssignTruckSerializer,
    StatusUpdateSerializer,
    TruckRequestCreateSerializer,
    TruckRequestSerializer,
)
from truck_requests.services import lifecycle

logger = logging.getLogger(__name__)


class TruckRequestViewSet(OperationMixin, viewsets.GenericViewSet):
    """
    API endpoint for truck requests and their lifecycle transitions.
    """
    queryset = TruckRequest.objects.select_related(
        'requester', 'assigned_truck', 'assigned_driver__user', 'assigned_by'
    )
    serializer_class = TruckRequestSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = TruckRequestFilter
    operations = {
        'list': 'truck_request.list',
        'create': 'truck_request.create',
        'retrieve': 'truck_request.retrieve',
        'assign': 'truck_request.assign',
        'update_status': 'truck_request.update_status',
    }

    def get_queryset(self):
        queryset = super().get_queryset()
        if getattr(self.request.user, 'role', None) == LOADER:
            queryset = queryset.filter(requester=self.request.user)
        return queryset

    @swagger_auto_schema(responses={200: TruckRequestSerializer(many=True)}, tags=['Truck Requests'])
    def list(self, request):
        visible = self.get_queryset()
        queryset = self.filter_queryset(visible)
        truck_requests, pagination = paginate(queryset, request)
        return envelope(
            {
                'truckRequests': TruckRequestSerializer(truck_requests, many=True).data,
                'pagination': pagination,
                'statusBreakdown': breakdown(visible, 'status'),
            },
            'Truck requests retrieved successfully',
        )

    @swagger_auto_schema(request_body=TruckRequestCreateSerializer, responses={201: TruckRequestSerializer}, tags=['Truck Requests'])
    def create(self, request):
        serializer = TruckRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        truck_request = lifecycle.create_truck_request(request.user, serializer.validated_data)
        return created(TruckRequestSerializer(truck_request).data, 'Truck request created successfully')

    @swagger_auto_schema(responses={200: TruckRequestSerializer}, tags=['Truck Requests'])
    def retrieve(self, request, pk=None):
        truck_request = lifecycle.get_truck_request(pk, actor=request.user)
        return envelope(TruckRequestSerializer(truck_request).data, 'Truck request retrieved successfully')

    @swagger_auto_schema(request_body=AssignTruckSerializer, responses={200: TruckRequestSerializer}, tags=['Truck Requests'])
    @action(detail=True, methods=['put'])
    def assign(self, request, pk=None):
        serializer = AssignTruckSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        truck_request = lifecycle.assign_truck(request.user, pk, **serializer.validated_data)
        truck_request = lifecycle.get_truck_request(truck_request.pk)
        return envelope(TruckRequestSerializer(truck_request).data, 'Truck assigned successfully')

    @swagger_auto_schema(request_body=StatusUpdateSerializer, tags=['Truck Requests'])
    @action(detail=True, methods=['put'], url_path='status')
    def update_status(self, request, pk=None):
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        truck_request, old_status = lifecycle.update_status(
            request.user, pk, serializer.validated_data['status'], serializer.validated_data.get('notes')
        )
        return envelope(
            {'truckRequest': TruckRequestSerializer(truck_request).data, 'oldStatus': old_status},
            'Truck request status updated successfully',
        )
