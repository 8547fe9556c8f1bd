"""
HR App Views - Employees, schedules, employee import and confirmation links
"""

import logging
from django.urls import reverse
from rest_framework import viewsets, status, mixins
from rest_framework.decorators import action
from rest_framework.parsers import JSONParser, MultiPartParser, FormParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import HasModulePermission
from core.utils import read_csv_rows
from messaging.models import MessageLog
from scorecard.weeks import is_valid_week
from .models import Employee, EmployeeSchedule, ScheduleConfirmation
from .serializers import (
    EmployeeSerializer, EmployeeListSerializer, EmployeeScheduleSerializer,
    EmployeeImportSerializer, GenerateWeekSerializer, ConfirmationLinkSerializer,
    ScheduleConfirmationSerializer, ConfirmationAnswerSerializer,
)
from .services import ConfirmationService, EmployeeImporter, ScheduleService

logger = logging.getLogger(__name__)


class EmployeeViewSet(viewsets.ModelViewSet):
    """
    Employee records.

    - create: 409 when the email is already used
    - update: always partial
    - import_rows: CSV / JSON upsert keyed by email
    """

    queryset = Employee.objects.all()
    permission_classes = [HasModulePermission]
    module_name = 'HR'
    module_actions = {'import_rows': 'create'}
    search_fields = ['first_name', 'last_name', 'email', 'transporter_id', 'phone_number', 'badge_number']
    filterset_fields = ['status', 'type', 'gender']
    ordering_fields = ['first_name', 'last_name', 'hired_date', 'created_at']
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def get_serializer_class(self):
        if self.action == 'list':
            return EmployeeListSerializer
        return EmployeeSerializer

    def create(self, request, *args, **kwargs):
        email = (request.data.get('email') or '').strip()
        if email and Employee.objects.filter(email__iexact=email).exists():
            return Response(
                {'error': 'An employee with this email already exists.'},
                status=status.HTTP_409_CONFLICT
            )
        return super().create(request, *args, **kwargs)

    def update(self, request, *args, **kwargs):
        kwargs['partial'] = True
        email = (request.data.get('email') or '').strip()
        if email and Employee.objects.filter(email__iexact=email).exclude(pk=kwargs.get('pk')).exists():
            return Response(
                {'error': 'An employee with this email already exists.'},
                status=status.HTTP_409_CONFLICT
            )
        return super().update(request, *args, **kwargs)

    @action(detail=False, methods=['post'], url_path='import')
    def import_rows(self, request):
        """Upsert employees from CSV rows (keyed by email)."""
        serializer = EmployeeImportSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        uploaded = serializer.validated_data.get('file')
        rows = read_csv_rows(uploaded) if uploaded else serializer.validated_data['data']

        result = EmployeeImporter().run(rows)
        return Response({'success': True, **result})


class EmployeeScheduleViewSet(mixins.RetrieveModelMixin,
                              mixins.UpdateModelMixin,
                              viewsets.GenericViewSet):
    """
    Weekly schedule grid.

    GET ?year_week=2026-W09   -> rows grouped by transporter
    GET ?weeks_list=true      -> available weeks, newest first
    """

    queryset = EmployeeSchedule.objects.select_related('employee').prefetch_related('message_statuses')
    serializer_class = EmployeeScheduleSerializer
    permission_classes = [HasModulePermission]
    module_name = 'Schedules'
    module_actions = {'generate': 'create', 'confirmation_link': 'edit'}

    def list(self, request):
        if request.query_params.get('weeks_list') == 'true':
            return Response({'weeks': ScheduleService.available_weeks()})

        year_week = request.query_params.get('year_week')
        if not year_week:
            return Response(
                {'error': 'year_week parameter is required'},
                status=status.HTTP_400_BAD_REQUEST
            )
        if not is_valid_week(year_week):
            return Response(
                {'error': 'year_week must look like 2026-W09'},
                status=status.HTTP_400_BAD_REQUEST
            )
        return Response(ScheduleService.week_grid(year_week))

    def update(self, request, *args, **kwargs):
        kwargs['partial'] = True
        return super().update(request, *args, **kwargs)

    @action(detail=False, methods=['post'])
    def generate(self, request):
        """Create default "Off" rows for all active employees for a week."""
        serializer = GenerateWeekSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = ScheduleService.generate_week(serializer.validated_data.get('year_week') or None)
        except ValueError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

        return Response({'success': True, **result})

    @action(detail=True, methods=['post'], url_path='confirmation-link')
    def confirmation_link(self, request, pk=None):
        """Issue a public confirm / change-request link for this schedule row."""
        schedule = self.get_object()
        serializer = ConfirmationLinkSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        log_id = serializer.validated_data.get('message_log')
        message_log = MessageLog.objects.filter(pk=log_id).first() if log_id else None
        confirmation = ConfirmationService.create_link(
            schedule, serializer.validated_data['message_type'], message_log
        )
        data = ScheduleConfirmationSerializer(confirmation).data
        data['url'] = request.build_absolute_uri(
            reverse('schedule-confirmation-public', kwargs={'token': confirmation.token})
        )
        return Response(data, status=status.HTTP_201_CREATED)


class PublicConfirmationView(APIView):
    """
    Public page behind an SMS link (no login, the token is the credential).

    GET: schedule details for the link. 404 unknown token, 410 expired.
    POST {"action": "confirm" | "change_request", "remarks": "..."}
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def get_confirmation(self, token):
        confirmation = (
            ScheduleConfirmation.objects
            .select_related('schedule__employee', 'message_log')
            .filter(token=token)
            .first()
        )
        if confirmation is None:
            return None, Response({'error': 'Invalid or expired link'}, status=status.HTTP_404_NOT_FOUND)
        if confirmation.is_expired:
            return None, Response({'error': 'This confirmation link has expired'}, status=status.HTTP_410_GONE)
        return confirmation, None

    def get(self, request, token):
        confirmation, error = self.get_confirmation(token)
        if error:
            return error
        return Response(ConfirmationService.describe(confirmation))

    def post(self, request, token):
        confirmation, error = self.get_confirmation(token)
        if error:
            return error

        serializer = ConfirmationAnswerSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({'error': 'Invalid action'}, status=status.HTTP_400_BAD_REQUEST)

        new_status = ConfirmationService.respond(
            confirmation, serializer.validated_data['action'], serializer.validated_data['remarks']
        )
        return Response({'success': True, 'status': new_status})
