"""
Django Admin configuration for MESSAGING app.
"""

from django.contrib import admin

from .models import MessagingTemplate, MessageLog


@admin.register(MessagingTemplate)
class MessagingTemplateAdmin(admin.ModelAdmin):
    list_display = ('type', 'updated_by', 'updated_at')
    readonly_fields = ('created_by', 'updated_by', 'created_at', 'updated_at')


@admin.register(MessageLog)
class MessageLogAdmin(admin.ModelAdmin):
    list_display = ('to_number', 'recipient_name', 'message_type', 'status', 'sent_at', 'delivered_at')
    list_filter = ('status', 'message_type')
    search_fields = ('to_number', 'recipient_name', 'openphone_message_id')
    date_hierarchy = 'sent_at'
    readonly_fields = (
        'request_payload', 'response_payload', 'delivery_webhook_payload', 'reply_webhook_payload',
    )
