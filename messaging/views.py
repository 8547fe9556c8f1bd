"""
MESSAGING App Views - Templates, recipients, SMS sending and OpenPhone webhook
"""

import logging
from django.utils import timezone
from django.utils.dateparse import parse_date
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from core.permissions import HasModulePermission
from .models import MessagingTemplate, MessageLog, TemplateType
from .serializers import (
    MessagingTemplateSerializer, TemplateContentSerializer, MessageLogSerializer, SendMessageSerializer,
)
from .services import (
    MessagingService, OpenPhoneNotConfigured, OpenPhoneService, RecipientService, WebhookService,
)
from .tasks import send_bulk_messages

logger = logging.getLogger(__name__)


class MessagingModuleMixin:
    permission_classes = [HasModulePermission]
    module_name = 'Messaging'


class TemplateListView(MessagingModuleMixin, APIView):
    """GET: every saved template."""

    def get(self, request):
        templates = MessagingTemplate.objects.select_related('created_by', 'updated_by')
        return Response(MessagingTemplateSerializer(templates, many=True).data)


class TemplateDetailView(MessagingModuleMixin, APIView):
    """PUT templates/<type>/: create or replace the template of that type."""

    def put(self, request, template_type):
        if template_type not in TemplateType.values:
            return Response(
                {'error': f"Unknown template type '{template_type}'"},
                status=status.HTTP_400_BAD_REQUEST
            )

        serializer = TemplateContentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        template, created = MessagingTemplate.objects.get_or_create(
            type=template_type,
            defaults={
                'content': serializer.validated_data['content'],
                'created_by': request.user,
                'updated_by': request.user,
            }
        )
        if not created:
            template.content = serializer.validated_data['content']
            template.updated_by = request.user
            template.save(update_fields=['content', 'updated_by', 'updated_at'])

        logger.info(f"[MESSAGING] Template '{template_type}' saved by {request.user.email}")
        return Response(
            MessagingTemplateSerializer(template).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK
        )


class PhoneNumbersView(MessagingModuleMixin, APIView):
    """GET: OpenPhone numbers available as senders."""

    def get(self, request):
        try:
            status_code, body = OpenPhoneService.list_phone_numbers()
        except OpenPhoneNotConfigured as e:
            return Response({'error': str(e)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(body, status=status_code)


class RecipientsView(MessagingModuleMixin, APIView):
    """GET ?tab=&date=: employees eligible for the messaging tab."""

    def get(self, request):
        tab = request.query_params.get('tab') or None
        if tab and tab not in TemplateType.values:
            return Response({'error': f"Unknown tab '{tab}'"}, status=status.HTTP_400_BAD_REQUEST)

        raw_date = request.query_params.get('date')
        day = parse_date(raw_date) if raw_date else timezone.localdate()
        if day is None:
            return Response({'error': 'date must be YYYY-MM-DD'}, status=status.HTTP_400_BAD_REQUEST)

        recipients = RecipientService.for_tab(tab, day)
        return Response({'tab': tab, 'date': day.isoformat(), 'count': len(recipients), 'employees': recipients})


class SendMessageView(MessagingModuleMixin, APIView):
    """
    POST: send a personalized SMS to each recipient.

    With "async": true the batch is queued and 202 is returned.
    """

    def post(self, request):
        serializer = SendMessageSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        if not OpenPhoneService.is_configured():
            return Response(
                {'error': 'OpenPhone API key not configured'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        recipients = [
            {
                'phone': r['phone'],
                'name': r.get('name', ''),
                'schedule_id': str(r['schedule_id']) if r.get('schedule_id') else None,
            }
            for r in data['recipients']
        ]

        if data.get('run_async'):
            task = send_bulk_messages.delay(
                recipients, data['message'], data['message_type'],
                from_number=data.get('from_number') or None,
                sender_email=request.user.email,
                day=data['date'].isoformat() if data.get('date') else None,
            )
            return Response(
                {'queued': True, 'task_id': task.id, 'total': len(recipients)},
                status=status.HTTP_202_ACCEPTED
            )

        result = MessagingService.send_batch(
            recipients, data['message'], data['message_type'],
            from_number=data.get('from_number') or None,
            sender_email=request.user.email,
            day=data.get('date'),
        )
        return Response(result)


class MessageLogViewSet(MessagingModuleMixin, viewsets.ReadOnlyModelViewSet):
    queryset = MessageLog.objects.all()
    serializer_class = MessageLogSerializer
    search_fields = ['to_number', 'recipient_name', 'content']
    filterset_fields = ['status', 'message_type', 'to_number']
    ordering_fields = ['sent_at']


class OpenPhoneWebhookView(APIView):
    """
    POST: OpenPhone events (message.delivered, message.received).

    Always answers 200 so OpenPhone does not retry on our errors.
    """

    authentication_classes = []
    permission_classes = [AllowAny]

    def get(self, request):
        return Response({
            'ok': True,
            'endpoint': 'SYMX OpenPhone webhook',
            'events': ['message.delivered', 'message.received'],
            'timestamp': timezone.now().isoformat(),
        })

    def post(self, request):
        try:
            body = request.data if isinstance(request.data, dict) else {}
            return Response(WebhookService.handle(body))
        except Exception as e:
            logger.exception(f"[WEBHOOK] Error processing OpenPhone event: {e}")
            return Response({'ok': False, 'error': str(e)}, status=status.HTTP_200_OK)
