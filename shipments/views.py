"""
SHIPMENTS App Views - Purchase orders, tracker and container refresh
"""

import logging
from rest_framework import viewsets, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_api_key.permissions import HasAPIKey

from core.permissions import HasModulePermission, IsAdminUser
from .models import PurchaseOrder
from .serializers import PurchaseOrderSerializer
from .services import TrackingError, refresh_container_tracking, refresh_all, tracker_rows

logger = logging.getLogger(__name__)


class ShipmentsModuleMixin:
    permission_classes = [HasModulePermission]
    module_name = 'Shipments'


class PurchaseOrderViewSet(ShipmentsModuleMixin, viewsets.ModelViewSet):
    queryset = PurchaseOrder.objects.prefetch_related(
        'customer_pos__shipping_lines__tracking_records'
    )
    serializer_class = PurchaseOrderSerializer
    search_fields = ['vbpo_no', 'customer_pos__po_no', 'customer_pos__shipping_lines__container_no']
    filterset_fields = ['order_type']


class TrackerView(ShipmentsModuleMixin, APIView):
    """GET: one flat row per shipping line."""

    def get(self, request):
        rows = tracker_rows()
        return Response({'count': len(rows), 'results': rows})


class ContainerRefreshView(ShipmentsModuleMixin, APIView):
    """GET ?container= : refresh one container from SeaRates."""

    def get(self, request):
        container = request.query_params.get('container', '')
        try:
            data = refresh_container_tracking(container)
        except TrackingError as e:
            return Response({'error': str(e)}, status=status.HTTP_502_BAD_GATEWAY)
        return Response(data)


class RefreshAllView(APIView):
    """POST: refresh every in-transit container (API key or admin)."""

    permission_classes = [HasAPIKey | IsAdminUser]

    def post(self, request):
        summary = refresh_all()
        return Response(summary)
