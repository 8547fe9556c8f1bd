"""
FLEET App Views - Vehicles, maintenance records and fleet dashboard
"""

import logging
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import HasModulePermission
from .models import (
    Vehicle, VehicleSlot, VehicleRepair, VehicleActivityLog, VehicleInspection,
    VehicleRentalAgreement,
)
from .serializers import (
    VehicleSerializer, VehicleSlotSerializer, VehicleRepairSerializer,
    VehicleActivityLogSerializer, VehicleInspectionSerializer, VehicleRentalAgreementSerializer,
)
from .services import FleetService

logger = logging.getLogger(__name__)


class FleetModuleMixin:
    permission_classes = [HasModulePermission]
    module_name = 'Fleet'


class VehicleViewSet(FleetModuleMixin, viewsets.ModelViewSet):
    """
    Vehicles.

    retrieve returns the vehicle with its repairs, activity logs,
    inspections, rental agreements and summary stats.
    """

    queryset = Vehicle.objects.all()
    serializer_class = VehicleSerializer
    search_fields = ['vin', 'vehicle_name', 'unit_number', 'license_plate', 'make', 'vehicle_model']
    filterset_fields = ['status', 'ownership', 'location']
    ordering_fields = ['created_at', 'unit_number', 'vin']

    def retrieve(self, request, *args, **kwargs):
        vehicle = self.get_object()
        detail = FleetService.get_vehicle_detail(vehicle)
        return Response({
            'vehicle': VehicleSerializer(vehicle).data,
            'repairs': VehicleRepairSerializer(detail['repairs'], many=True).data,
            'activity_logs': VehicleActivityLogSerializer(detail['activity_logs'], many=True).data,
            'inspections': VehicleInspectionSerializer(detail['inspections'], many=True).data,
            'rental_agreements': VehicleRentalAgreementSerializer(detail['rental_agreements'], many=True).data,
            'stats': detail['stats'],
        })


class VehicleSlotViewSet(FleetModuleMixin, viewsets.ModelViewSet):
    queryset = VehicleSlot.objects.all()
    serializer_class = VehicleSlotSerializer
    search_fields = ['slot_number', 'location']


class VehicleRepairViewSet(FleetModuleMixin, viewsets.ModelViewSet):
    """
    Repairs.

    list: ?q= (vin, description, status, unit number), ?skip=, ?limit=
    -> {"results", "total", "has_more"}
    """

    queryset = VehicleRepair.objects.all()
    serializer_class = VehicleRepairSerializer

    def list(self, request, *args, **kwargs):
        params = request.query_params
        page = FleetService.search_repairs(
            q=params.get('q', ''),
            skip=params.get('skip', 0),
            limit=params.get('limit', 50),
        )
        return Response({
            'results': self.get_serializer(page['results'], many=True).data,
            'total': page['total'],
            'has_more': page['has_more'],
        })

    def perform_update(self, serializer):
        repair = FleetService.apply_repair_update(serializer.save())
        repair.save(update_fields=['last_edit_on', 'repair_duration'])


class VehicleActivityLogViewSet(FleetModuleMixin, viewsets.ModelViewSet):
    queryset = VehicleActivityLog.objects.all()
    serializer_class = VehicleActivityLogSerializer
    search_fields = ['vin', 'unit_number', 'service_type']
    filterset_fields = ['vehicle', 'service_type']


class VehicleInspectionViewSet(FleetModuleMixin, viewsets.ModelViewSet):
    queryset = VehicleInspection.objects.all()
    serializer_class = VehicleInspectionSerializer
    search_fields = ['vin', 'unit_number', 'inspector_name']
    filterset_fields = ['vehicle', 'inspection_type', 'overall_result']

    @action(detail=True, methods=['get'])
    def compare(self, request, pk=None):
        """Current inspection, the previous one for the same vehicle, and what changed."""
        inspection = self.get_object()
        comparison = FleetService.compare_inspection(inspection)
        previous = comparison['previous']
        return Response({
            'current': VehicleInspectionSerializer(inspection).data,
            'previous': VehicleInspectionSerializer(previous).data if previous else None,
            'changes': comparison['changes'],
        })


class VehicleRentalAgreementViewSet(FleetModuleMixin, viewsets.ModelViewSet):
    queryset = VehicleRentalAgreement.objects.all()
    serializer_class = VehicleRentalAgreementSerializer
    search_fields = ['vin', 'unit_number', 'agreement_number', 'invoice_number']
    filterset_fields = ['vehicle']


class FleetDashboardView(FleetModuleMixin, APIView):
    """Fleet KPIs, breakdowns and recent records."""

    def get(self, request):
        dashboard = FleetService.get_dashboard()
        return Response({
            'kpis': dashboard['kpis'],
            'status_breakdown': dashboard['status_breakdown'],
            'ownership_breakdown': dashboard['ownership_breakdown'],
            'repair_status_breakdown': dashboard['repair_status_breakdown'],
            'open_repairs': VehicleRepairSerializer(dashboard['open_repairs'], many=True).data,
            'recent_activity': VehicleActivityLogSerializer(dashboard['recent_activity'], many=True).data,
            'recent_inspections': VehicleInspectionSerializer(dashboard['recent_inspections'], many=True).data,
            'rental_agreements': VehicleRentalAgreementSerializer(dashboard['rental_agreements'], many=True).data,
            'upcoming_registrations': VehicleActivityLogSerializer(
                dashboard['upcoming_registrations'], many=True
            ).data,
        })
