"""
MESSAGING App Serializers
"""

from rest_framework import serializers

from .models import MessagingTemplate, MessageLog, TemplateType


class MessagingTemplateSerializer(serializers.ModelSerializer):
    created_by = serializers.SlugRelatedField(slug_field='email', read_only=True)
    updated_by = serializers.SlugRelatedField(slug_field='email', read_only=True)

    class Meta:
        model = MessagingTemplate
        fields = ['id', 'type', 'content', 'created_by', 'updated_by', 'created_at', 'updated_at']
        read_only_fields = ['id', 'type', 'created_at', 'updated_at']


class TemplateContentSerializer(serializers.Serializer):
    content = serializers.CharField(allow_blank=False, trim_whitespace=False)


class MessageLogSerializer(serializers.ModelSerializer):
    class Meta:
        model = MessageLog
        exclude = ['request_payload', 'response_payload', 'delivery_webhook_payload', 'reply_webhook_payload']


class RecipientSerializer(serializers.Serializer):
    phone = serializers.CharField(max_length=30)
    name = serializers.CharField(max_length=150, required=False, allow_blank=True, default='')
    schedule_id = serializers.UUIDField(required=False, allow_null=True)


class SendMessageSerializer(serializers.Serializer):
    """Payload of POST messaging/send/."""

    recipients = RecipientSerializer(many=True, allow_empty=False)
    message = serializers.CharField(trim_whitespace=True)
    message_type = serializers.ChoiceField(choices=TemplateType.choices)
    # Exposed as `from` and `async`, both Python keywords
    from_number = serializers.CharField(source='from_number', max_length=50, required=False, allow_blank=True)
    run_async = serializers.BooleanField(source='run_async', required=False, default=False)
    # Day the recipients tab was loaded for; scopes shifts of recipients sent without schedule_id
    date = serializers.DateField(required=False)

    def get_fields(self):
        fields = super().get_fields()
        fields['from'] = fields.pop('from_number')
        fields['async'] = fields.pop('run_async')
        return fields
