"""
MESSAGING App - SMS templates and message logs

Outbound SMS go through OpenPhone; every attempt is logged in MessageLog
and later updated by the OpenPhone webhook (delivered / reply received).
"""

import uuid
from django.conf import settings
from django.db import models
from django.utils import timezone


class TemplateType(models.TextChoices):
    FUTURE_SHIFT = 'future-shift', 'Future shift notification'
    SHIFT = 'shift', 'Shift notification'
    OFF_TOMORROW = 'off-tomorrow', 'Off today, scheduled tomorrow'
    WEEK_SCHEDULE = 'week-schedule', 'Week schedule'
    ROUTE_ITINERARY = 'route-itinerary', 'Route itinerary'


class MessagingTemplate(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    type = models.CharField(max_length=30, choices=TemplateType.choices, unique=True, verbose_name="Type")
    content = models.TextField(verbose_name="Content")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_templates'
    )
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='updated_templates'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Messaging template"
        verbose_name_plural = "Messaging templates"
        ordering = ['type']

    def __str__(self):
        return self.get_type_display()


class MessageLogStatus(models.TextChoices):
    SENT = 'sent', 'Sent'
    DELIVERED = 'delivered', 'Delivered'
    FAILED = 'failed', 'Failed'
    RECEIVED_REPLY = 'received_reply', 'Reply received'


class MessageLog(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    openphone_message_id = models.CharField(max_length=100, blank=True, db_index=True)

    from_number = models.CharField(max_length=50, blank=True)
    from_display = models.CharField(max_length=50, blank=True)
    to_number = models.CharField(max_length=30, db_index=True)
    recipient_name = models.CharField(max_length=150, blank=True)

    message_type = models.CharField(max_length=30, db_index=True)
    content = models.TextField()
    status = models.CharField(
        max_length=20, choices=MessageLogStatus.choices, default=MessageLogStatus.SENT, db_index=True
    )

    sent_at = models.DateTimeField(default=timezone.now, db_index=True)
    error_message = models.TextField(blank=True)
    request_payload = models.JSONField(null=True, blank=True)
    response_payload = models.JSONField(null=True, blank=True)

    delivered_at = models.DateTimeField(null=True, blank=True)
    delivery_webhook_payload = models.JSONField(null=True, blank=True)

    reply_content = models.TextField(blank=True)
    reply_at = models.DateTimeField(null=True, blank=True)
    reply_webhook_payload = models.JSONField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Message log"
        verbose_name_plural = "Message logs"
        ordering = ['-sent_at']
        indexes = [
            models.Index(fields=['to_number', 'message_type', '-sent_at'], name='msglog_to_type_sent_idx'),
        ]

    def __str__(self):
        return f"{self.message_type} → {self.to_number} ({self.status})"
