"""
Django Admin configuration for SCORECARD app.
"""

from django.contrib import admin

from .models import (
    AvailableWeek, DeliveryExcellence, PhotoOnDelivery, CustomerDeliveryFeedback,
    DVICInspection, SafetyEvent, CDFNegative, QualityDSBDNR, DeliveryCompletion,
    ReturnToStation, ScoreCardRemarks, ScoreCardRemarksHistory,
)


class WeeklyRecordAdmin(admin.ModelAdmin):
    list_filter = ('week',)
    search_fields = ('transporter_id',)
    raw_id_fields = ('employee',)
    readonly_fields = ('created_at', 'updated_at')


@admin.register(DeliveryExcellence)
class DeliveryExcellenceAdmin(WeeklyRecordAdmin):
    list_display = ('week', 'transporter_id', 'delivery_associate', 'overall_standing', 'overall_score', 'dcr', 'pod')
    list_filter = ('week', 'overall_standing')
    search_fields = ('transporter_id', 'delivery_associate')


@admin.register(PhotoOnDelivery)
class PhotoOnDeliveryAdmin(WeeklyRecordAdmin):
    list_display = ('week', 'transporter_id', 'first_name', 'last_name', 'opportunities', 'success', 'rejects')


@admin.register(CustomerDeliveryFeedback)
class CustomerDeliveryFeedbackAdmin(WeeklyRecordAdmin):
    list_display = ('week', 'transporter_id', 'delivery_associate', 'cdf_dpmo', 'negative_feedback_count')


@admin.register(DVICInspection)
class DVICInspectionAdmin(WeeklyRecordAdmin):
    list_display = ('week', 'start_date', 'transporter_id', 'transporter_name', 'vin', 'inspection_status', 'duration')
    search_fields = ('transporter_id', 'transporter_name', 'vin')


@admin.register(SafetyEvent)
class SafetyEventAdmin(WeeklyRecordAdmin):
    list_display = ('week', 'transporter_id', 'delivery_associate', 'metric_type', 'metric_subtype', 'program_impact')
    list_filter = ('week', 'metric_type', 'program_impact')
    search_fields = ('transporter_id', 'delivery_associate', 'event_id')


@admin.register(CDFNegative)
class CDFNegativeAdmin(WeeklyRecordAdmin):
    list_display = ('week', 'delivery_associate', 'delivery_associate_name', 'tracking_id', 'delivery_date')
    search_fields = ('delivery_associate', 'delivery_associate_name', 'tracking_id')


@admin.register(QualityDSBDNR)
class QualityDSBDNRAdmin(WeeklyRecordAdmin):
    list_display = ('week', 'transporter_id', 'delivery_associate', 'dsb_count', 'dsb_dpmo')


@admin.register(DeliveryCompletion)
class DeliveryCompletionAdmin(WeeklyRecordAdmin):
    list_display = ('week', 'transporter_id', 'delivery_associate', 'dcr', 'packages_delivered', 'packages_returned_to_station')


@admin.register(ReturnToStation)
class ReturnToStationAdmin(WeeklyRecordAdmin):
    list_display = ('week', 'transporter_id', 'delivery_associate', 'tracking_id', 'rts_code')
    search_fields = ('transporter_id', 'tracking_id')


@admin.register(AvailableWeek)
class AvailableWeekAdmin(admin.ModelAdmin):
    list_display = ('week', 'created_at')


class ScoreCardRemarksHistoryInline(admin.TabularInline):
    model = ScoreCardRemarksHistory
    extra = 0
    readonly_fields = ('action', 'changed_fields', 'changed_by', 'changed_at')


@admin.register(ScoreCardRemarks)
class ScoreCardRemarksAdmin(admin.ModelAdmin):
    list_display = ('week', 'transporter_id', 'manager_name', 'driver_signature_at', 'manager_signature_at')
    list_filter = ('week',)
    search_fields = ('transporter_id', 'manager_name')
    raw_id_fields = ('manager',)
    inlines = [ScoreCardRemarksHistoryInline]
