"""
SCORECARD App Serializers
"""

from rest_framework import serializers

from .importers import EXPORT_TYPES
from .models import ScoreCardRemarks, ScoreCardRemarksHistory
from .weeks import is_valid_week


def validate_week_value(value):
    if value and not is_valid_week(value):
        raise serializers.ValidationError("Week must look like 2026-W07.")
    return value


class ScorecardImportSerializer(serializers.Serializer):
    """Either `data` (JSON rows) or `file` (CSV upload) must be provided."""

    type = serializers.ChoiceField(choices=sorted(EXPORT_TYPES))
    week = serializers.CharField(required=False, allow_blank=True)
    data = serializers.ListField(child=serializers.DictField(), required=False)
    file = serializers.FileField(required=False)

    def validate_week(self, value):
        return validate_week_value(value)

    def validate(self, attrs):
        if not attrs.get('data') and not attrs.get('file'):
            raise serializers.ValidationError("Provide `data` rows or a CSV `file`.")
        return attrs


class ScoreCardRemarksHistorySerializer(serializers.ModelSerializer):
    class Meta:
        model = ScoreCardRemarksHistory
        fields = ['action', 'changed_fields', 'changed_by', 'changed_at']


class ScoreCardRemarksSerializer(serializers.ModelSerializer):
    history = ScoreCardRemarksHistorySerializer(many=True, read_only=True)

    class Meta:
        model = ScoreCardRemarks
        fields = [
            'id', 'transporter_id', 'week',
            'driver_remarks', 'manager_remarks',
            'driver_signature', 'driver_signature_at',
            'manager_signature', 'manager_signature_at',
            'manager_name', 'manager', 'history',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class RemarksUpsertSerializer(serializers.Serializer):
    transporter_id = serializers.CharField(max_length=50)
    week = serializers.CharField(max_length=8)
    driver_remarks = serializers.CharField(required=False, allow_blank=True)
    manager_remarks = serializers.CharField(required=False, allow_blank=True)
    driver_signature = serializers.CharField(required=False, allow_blank=True)
    manager_signature = serializers.CharField(required=False, allow_blank=True)
    manager_name = serializers.CharField(required=False, allow_blank=True, max_length=150)

    def validate_week(self, value):
        if not is_valid_week(value):
            raise serializers.ValidationError("Week must look like 2026-W07.")
        return value
