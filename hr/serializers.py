"""
HR App Serializers
"""

from rest_framework import serializers

from messaging.models import TemplateType
from scorecard.weeks import is_valid_week
from .models import Employee, EmployeeSchedule, ScheduleMessageStatus, ScheduleConfirmation


class EmployeeSerializer(serializers.ModelSerializer):
    """Full employee record; email uniqueness is checked by the view (409)."""

    full_name = serializers.ReadOnlyField()

    class Meta:
        model = Employee
        fields = '__all__'
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            'email': {'validators': []},
        }

    def validate_email(self, value):
        return value.lower()


class EmployeeListSerializer(serializers.ModelSerializer):
    """Compact serializer for the employee table."""

    full_name = serializers.ReadOnlyField()

    class Meta:
        model = Employee
        fields = [
            'id', 'first_name', 'last_name', 'full_name', 'email', 'phone_number',
            'transporter_id', 'badge_number', 'type', 'status', 'hired_date',
            'profile_image',
        ]


class ScheduleMessageStatusSerializer(serializers.ModelSerializer):
    class Meta:
        model = ScheduleMessageStatus
        fields = ['id', 'channel', 'status', 'created_by', 'message_log', 'created_at']


class EmployeeScheduleSerializer(serializers.ModelSerializer):
    message_statuses = ScheduleMessageStatusSerializer(many=True, read_only=True)

    class Meta:
        model = EmployeeSchedule
        fields = [
            'id', 'employee', 'transporter_id', 'week_day', 'year_week', 'date',
            'status', 'type', 'sub_type', 'training_day', 'start_time',
            'day_before_confirmation', 'day_of_confirmation', 'week_confirmation',
            'van', 'note', 'message_statuses',
        ]
        read_only_fields = ['id', 'employee', 'transporter_id', 'week_day', 'year_week', 'date']


class EmployeeImportSerializer(serializers.Serializer):
    """Either a list of row dicts or an uploaded CSV file."""

    data = serializers.ListField(child=serializers.DictField(), required=False)
    file = serializers.FileField(required=False)

    def validate(self, attrs):
        if not attrs.get('data') and not attrs.get('file'):
            raise serializers.ValidationError("Provide 'data' rows or a CSV 'file'.")
        return attrs


class GenerateWeekSerializer(serializers.Serializer):
    year_week = serializers.CharField(required=False, allow_blank=True)

    def validate_year_week(self, value):
        if value and not is_valid_week(value):
            raise serializers.ValidationError("year_week must be an existing ISO week, e.g. 2026-W09.")
        return value


class ConfirmationLinkSerializer(serializers.Serializer):
    message_type = serializers.ChoiceField(choices=TemplateType.choices, default=TemplateType.SHIFT)
    message_log = serializers.UUIDField(required=False, allow_null=True)


class ScheduleConfirmationSerializer(serializers.ModelSerializer):
    class Meta:
        model = ScheduleConfirmation
        fields = [
            'id', 'token', 'schedule', 'message_type', 'message_log', 'status',
            'confirmed_at', 'change_requested_at', 'change_remarks', 'expires_at', 'created_at',
        ]


class ConfirmationAnswerSerializer(serializers.Serializer):
    action = serializers.ChoiceField(choices=['confirm', 'change_request'])
    remarks = serializers.CharField(required=False, allow_blank=True, default='')
