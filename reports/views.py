"""
REPORTS App - Views for PDF Report Downloads
"""

import logging
from django.http import HttpResponse
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import HasModulePermission
from scorecard.weeks import is_valid_week
from .services import ReportGenerator, ReportNotFound

logger = logging.getLogger(__name__)


class DriverScorecardReportView(APIView):
    """GET: the driver's weekly scorecard as a PDF download."""

    permission_classes = [HasModulePermission]
    module_name = 'Scorecard'

    def get(self, request, week, transporter_id):
        if not is_valid_week(week):
            return Response({'error': 'Invalid week format (expected YYYY-Www)'}, status=status.HTTP_400_BAD_REQUEST)

        try:
            pdf_buffer = ReportGenerator.generate_driver_scorecard(week, transporter_id)
        except ReportNotFound as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
        except ImportError as e:
            logger.error(f"[REPORTS] PDF generation failed: {e}")
            return Response(
                {'error': 'WeasyPrint is not installed. Contact the administrator.'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        response = HttpResponse(pdf_buffer.read(), content_type='application/pdf')
        response['Content-Disposition'] = f'attachment; filename="scorecard_{transporter_id}_{week}.pdf"'
        return response
