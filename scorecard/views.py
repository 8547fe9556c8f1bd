"""
SCORECARD App Views - Weekly imports, performance dashboard and remarks
"""

import logging
from rest_framework import status
from rest_framework.parsers import JSONParser, MultiPartParser, FormParser
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import HasModulePermission
from core.utils import read_csv_rows
from .importers import ImportFormatError, ScorecardImporter
from .models import ScoreCardRemarks
from .serializers import (
    ScorecardImportSerializer, ScoreCardRemarksSerializer, RemarksUpsertSerializer
)
from .services import PerformanceService, RemarksService
from .weeks import is_valid_week

logger = logging.getLogger(__name__)


class EmployeePerformanceView(APIView):
    """
    GET                -> {"weeks": [...]} newest first
    GET ?week=2026-W07 -> merged per-driver rows and DSP metrics
    """

    permission_classes = [HasModulePermission]
    module_name = 'Scorecard'

    def get(self, request):
        week = request.query_params.get('week')
        if not week:
            return Response({'weeks': PerformanceService.available_weeks()})

        if not is_valid_week(week):
            return Response(
                {'error': 'week must look like 2026-W07'},
                status=status.HTTP_400_BAD_REQUEST
            )
        return Response(PerformanceService.build(week))


class ScorecardImportView(APIView):
    """Import one weekly export (JSON rows or CSV upload)."""

    permission_classes = [HasModulePermission]
    module_name = 'Scorecard'
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def post(self, request):
        serializer = ScorecardImportSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        payload = serializer.validated_data

        uploaded = payload.get('file')
        rows = read_csv_rows(uploaded) if uploaded else payload['data']

        try:
            result = ScorecardImporter(payload['type']).run(
                rows,
                week=payload.get('week') or None,
                filename=getattr(uploaded, 'name', None),
            )
        except ImportFormatError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({'success': True, **result})


class ScoreCardRemarksView(APIView):
    """
    GET ?week=&transporter_id= -> remarks for a week (or one driver)
    PUT                        -> upsert by (transporter_id, week)
    """

    permission_classes = [HasModulePermission]
    module_name = 'Scorecard'

    def get(self, request):
        week = request.query_params.get('week')
        if not week or not is_valid_week(week):
            return Response(
                {'error': 'week parameter is required (2026-W07)'},
                status=status.HTTP_400_BAD_REQUEST
            )

        queryset = ScoreCardRemarks.objects.filter(week=week).prefetch_related('history')
        transporter_id = request.query_params.get('transporter_id')
        if transporter_id:
            remarks = queryset.filter(transporter_id=transporter_id).first()
            return Response({
                'remarks': ScoreCardRemarksSerializer(remarks).data if remarks else None
            })

        return Response({'remarks': ScoreCardRemarksSerializer(queryset, many=True).data})

    def put(self, request):
        serializer = RemarksUpsertSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)

        remarks = RemarksService.upsert(
            data.pop('transporter_id'), data.pop('week'), data, user=request.user
        )
        return Response(ScoreCardRemarksSerializer(remarks).data)
