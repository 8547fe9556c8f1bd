"""
SCORECARD App - Weekly performance collections

Each model stores one weekly spreadsheet export (delivery excellence,
photo-on-delivery, DVIC, safety events, customer feedback, DSB/DNR, DCR,
RTS). Rows are keyed by week plus a natural key and upserted on import.
"""

import uuid
from django.conf import settings
from django.db import models


class WeeklyRecord(models.Model):
    """Common fields for a weekly scorecard row."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    week = models.CharField(max_length=8, db_index=True, verbose_name="Week (YYYY-Www)")
    transporter_id = models.CharField(max_length=50, blank=True, db_index=True, verbose_name="Transporter ID")
    employee = models.ForeignKey(
        'hr.Employee',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['-week', 'transporter_id']


class DeliveryExcellence(WeeklyRecord):
    """Weekly driver scorecard (overall standing plus every weighted metric)."""

    delivery_associate = models.CharField(max_length=150, blank=True)
    overall_standing = models.CharField(max_length=30, blank=True)
    overall_score = models.FloatField(null=True, blank=True)

    fico_metric = models.FloatField(null=True, blank=True)
    fico_tier = models.CharField(max_length=30, blank=True)
    fico_score = models.FloatField(null=True, blank=True)
    speeding_event_rate = models.FloatField(null=True, blank=True)
    speeding_event_rate_tier = models.CharField(max_length=30, blank=True)
    speeding_event_rate_score = models.FloatField(null=True, blank=True)
    seatbelt_off_rate = models.FloatField(null=True, blank=True)
    seatbelt_off_rate_tier = models.CharField(max_length=30, blank=True)
    seatbelt_off_rate_score = models.FloatField(null=True, blank=True)
    distractions_rate = models.FloatField(null=True, blank=True)
    distractions_rate_tier = models.CharField(max_length=30, blank=True)
    distractions_rate_score = models.FloatField(null=True, blank=True)
    sign_signal_violations_rate = models.FloatField(null=True, blank=True)
    sign_signal_violations_rate_tier = models.CharField(max_length=30, blank=True)
    sign_signal_violations_rate_score = models.FloatField(null=True, blank=True)
    following_distance_rate = models.FloatField(null=True, blank=True)
    following_distance_rate_tier = models.CharField(max_length=30, blank=True)
    following_distance_rate_score = models.FloatField(null=True, blank=True)

    cdf_dpmo = models.FloatField(null=True, blank=True)
    cdf_dpmo_tier = models.CharField(max_length=30, blank=True)
    cdf_dpmo_score = models.FloatField(null=True, blank=True)
    ced = models.FloatField(null=True, blank=True)
    ced_tier = models.CharField(max_length=30, blank=True)
    ced_score = models.FloatField(null=True, blank=True)
    dcr = models.CharField(max_length=20, blank=True, help_text='Percentage string, e.g. "99.60%"')
    dcr_tier = models.CharField(max_length=30, blank=True)
    dcr_score = models.FloatField(null=True, blank=True)
    dsb = models.FloatField(null=True, blank=True)
    dsb_dpmo_tier = models.CharField(max_length=30, blank=True)
    dsb_dpmo_score = models.FloatField(null=True, blank=True)
    pod = models.CharField(max_length=20, blank=True, help_text='Percentage string, e.g. "98.20%"')
    pod_tier = models.CharField(max_length=30, blank=True)
    pod_score = models.FloatField(null=True, blank=True)
    psb = models.FloatField(null=True, blank=True)
    psb_tier = models.CharField(max_length=30, blank=True)
    psb_score = models.FloatField(null=True, blank=True)
    packages_delivered = models.FloatField(null=True, blank=True)

    fico_metric_weight_applied = models.FloatField(null=True, blank=True)
    speeding_event_rate_weight_applied = models.FloatField(null=True, blank=True)
    seatbelt_off_rate_weight_applied = models.FloatField(null=True, blank=True)
    distractions_rate_weight_applied = models.FloatField(null=True, blank=True)
    sign_signal_violations_rate_weight_applied = models.FloatField(null=True, blank=True)
    following_distance_rate_weight_applied = models.FloatField(null=True, blank=True)
    cdf_dpmo_weight_applied = models.FloatField(null=True, blank=True)
    ced_weight_applied = models.FloatField(null=True, blank=True)
    dcr_weight_applied = models.FloatField(null=True, blank=True)
    dsb_dpmo_weight_applied = models.FloatField(null=True, blank=True)
    pod_weight_applied = models.FloatField(null=True, blank=True)
    psb_weight_applied = models.FloatField(null=True, blank=True)

    class Meta(WeeklyRecord.Meta):
        verbose_name = "Delivery excellence"
        verbose_name_plural = "Delivery excellence"
        constraints = [
            models.UniqueConstraint(fields=['week', 'transporter_id'], name='unique_excellence_week_driver'),
        ]


class PhotoOnDelivery(WeeklyRecord):
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    opportunities = models.IntegerField(default=0)
    success = models.IntegerField(default=0)
    bypass = models.IntegerField(default=0)
    rejects = models.IntegerField(default=0)
    blurry_photo = models.IntegerField(default=0)
    human_in_the_picture = models.IntegerField(default=0)
    no_package_detected = models.IntegerField(default=0)
    package_in_car = models.IntegerField(default=0)
    package_in_hand = models.IntegerField(default=0)
    package_not_clearly_visible = models.IntegerField(default=0)
    package_too_close = models.IntegerField(default=0)
    photo_too_dark = models.IntegerField(default=0)
    other = models.IntegerField(default=0)

    class Meta(WeeklyRecord.Meta):
        verbose_name = "Photo-on-delivery"
        verbose_name_plural = "Photo-on-delivery"
        constraints = [
            models.UniqueConstraint(fields=['week', 'transporter_id'], name='unique_pod_week_driver'),
        ]


class CustomerDeliveryFeedback(WeeklyRecord):
    delivery_associate = models.CharField(max_length=150, blank=True)
    cdf_dpmo = models.FloatField(null=True, blank=True)
    cdf_dpmo_tier = models.CharField(max_length=30, blank=True)
    cdf_dpmo_score = models.FloatField(null=True, blank=True)
    negative_feedback_count = models.IntegerField(default=0)

    class Meta(WeeklyRecord.Meta):
        verbose_name = "Customer delivery feedback"
        verbose_name_plural = "Customer delivery feedback"
        constraints = [
            models.UniqueConstraint(fields=['week', 'transporter_id'], name='unique_cdf_week_driver'),
        ]


class DVICInspection(WeeklyRecord):
    """Daily vehicle inspection check; the week comes from start_date."""

    start_date = models.CharField(max_length=20, blank=True, db_index=True, help_text='YYYY-MM-DD')
    dsp = models.CharField(max_length=50, blank=True)
    station = models.CharField(max_length=50, blank=True)
    transporter_name = models.CharField(max_length=150, blank=True)
    vin = models.CharField(max_length=50, blank=True)
    fleet_type = models.CharField(max_length=50, blank=True)
    inspection_type = models.CharField(max_length=50, blank=True)
    inspection_status = models.CharField(max_length=50, blank=True)
    start_time = models.CharField(max_length=50, blank=True)
    end_time = models.CharField(max_length=50, blank=True)
    duration = models.CharField(max_length=30, blank=True)

    class Meta(WeeklyRecord.Meta):
        verbose_name = "DVIC inspection"
        verbose_name_plural = "DVIC inspections"
        constraints = [
            models.UniqueConstraint(
                fields=['week', 'transporter_id', 'vin', 'start_time'],
                name='unique_dvic_inspection'
            ),
        ]


class SafetyEvent(WeeklyRecord):
    """Safety dashboard (DFO2) event."""

    date = models.CharField(max_length=20, blank=True)
    delivery_associate = models.CharField(max_length=150, blank=True)
    event_id = models.CharField(max_length=100)
    date_time = models.CharField(max_length=50, blank=True)
    vin = models.CharField(max_length=50, blank=True)
    program_impact = models.CharField(max_length=100, blank=True)
    metric_type = models.CharField(max_length=100, blank=True)
    metric_subtype = models.CharField(max_length=100, blank=True)
    source = models.CharField(max_length=100, blank=True)
    video_link = models.URLField(max_length=500, blank=True)
    review_details = models.TextField(blank=True)
    dsp = models.CharField(max_length=50, blank=True)
    station = models.CharField(max_length=50, blank=True)

    class Meta(WeeklyRecord.Meta):
        verbose_name = "Safety event"
        verbose_name_plural = "Safety events"
        constraints = [
            models.UniqueConstraint(fields=['week', 'transporter_id', 'event_id'], name='unique_safety_event'),
        ]


class CDFNegative(WeeklyRecord):
    """Negative customer delivery feedback; flags are "1"/"0" strings."""

    delivery_group_id = models.CharField(max_length=100, blank=True)
    delivery_associate = models.CharField(max_length=150)
    delivery_associate_name = models.CharField(max_length=150, blank=True)
    da_mishandled_package = models.CharField(max_length=20, blank=True)
    da_was_unprofessional = models.CharField(max_length=20, blank=True)
    da_did_not_follow_instructions = models.CharField(max_length=20, blank=True)
    delivered_to_wrong_address = models.CharField(max_length=20, blank=True)
    never_received_delivery = models.CharField(max_length=20, blank=True)
    received_wrong_item = models.CharField(max_length=20, blank=True)
    feedback_details = models.TextField(blank=True)
    tracking_id = models.CharField(max_length=100)
    delivery_date = models.CharField(max_length=20, blank=True)

    FLAG_FIELDS = (
        'da_mishandled_package', 'da_was_unprofessional', 'da_did_not_follow_instructions',
        'delivered_to_wrong_address', 'never_received_delivery', 'received_wrong_item',
    )

    class Meta(WeeklyRecord.Meta):
        verbose_name = "CDF negative"
        verbose_name_plural = "CDF negatives"
        constraints = [
            models.UniqueConstraint(
                fields=['week', 'delivery_associate', 'tracking_id'],
                name='unique_cdf_negative'
            ),
        ]


class QualityDSBDNR(WeeklyRecord):
    delivery_associate = models.CharField(max_length=150, blank=True)
    dsb_count = models.IntegerField(default=0)
    dsb_dpmo = models.FloatField(default=0)
    attended_delivery_count = models.IntegerField(default=0)
    unattended_delivery_count = models.IntegerField(default=0)
    simultaneous_deliveries = models.IntegerField(default=0)
    delivered_over_50m = models.IntegerField(default=0)
    incorrect_scan_usage_attended = models.IntegerField(default=0)
    incorrect_scan_usage_unattended = models.IntegerField(default=0)
    no_pod_on_delivery = models.IntegerField(default=0)
    scanned_not_delivered_not_returned = models.IntegerField(default=0)

    class Meta(WeeklyRecord.Meta):
        verbose_name = "Quality DSB/DNR"
        verbose_name_plural = "Quality DSB/DNR"
        constraints = [
            models.UniqueConstraint(fields=['week', 'transporter_id'], name='unique_dsb_week_driver'),
        ]


class DeliveryCompletion(WeeklyRecord):
    """Delivery completion rate (DCR) with return-to-station reasons."""

    delivery_associate = models.CharField(max_length=150, blank=True)
    dcr = models.FloatField(null=True, blank=True)
    packages_delivered = models.IntegerField(default=0)
    packages_dispatched = models.IntegerField(default=0)
    packages_returned_to_station = models.IntegerField(default=0)
    packages_returned_da_controllable = models.IntegerField(default=0)
    rts_all_exempted = models.IntegerField(default=0)
    rts_business_closed = models.IntegerField(default=0)
    rts_customer_unavailable = models.IntegerField(default=0)
    rts_no_secure_location = models.IntegerField(default=0)
    rts_other = models.IntegerField(default=0)
    rts_out_of_drive_time = models.IntegerField(default=0)
    rts_unable_to_access = models.IntegerField(default=0)
    rts_unable_to_locate = models.IntegerField(default=0)
    rts_unsafe_due_to_dog = models.IntegerField(default=0)
    rts_bad_weather = models.IntegerField(default=0)
    rts_locker_issue = models.IntegerField(default=0)
    rts_missing_or_incorrect_access_code = models.IntegerField(default=0)
    rts_otp_not_available = models.IntegerField(default=0)

    class Meta(WeeklyRecord.Meta):
        verbose_name = "DCR"
        verbose_name_plural = "DCR"
        constraints = [
            models.UniqueConstraint(fields=['week', 'transporter_id'], name='unique_dcr_week_driver'),
        ]


class ReturnToStation(WeeklyRecord):
    delivery_associate = models.CharField(max_length=150, blank=True)
    tracking_id = models.CharField(max_length=100)
    impact_dcr = models.CharField(max_length=20, blank=True)
    rts_code = models.CharField(max_length=100, blank=True)
    customer_contact_details = models.TextField(blank=True)
    planned_delivery_date = models.CharField(max_length=20, blank=True)
    exemption_reason = models.CharField(max_length=255, blank=True)
    service_area = models.CharField(max_length=100, blank=True)

    class Meta(WeeklyRecord.Meta):
        verbose_name = "RTS"
        verbose_name_plural = "RTS"
        constraints = [
            models.UniqueConstraint(fields=['week', 'transporter_id', 'tracking_id'], name='unique_rts_package'),
        ]


class AvailableWeek(models.Model):
    """Registry of weeks that have data (drives the week selectors)."""

    week = models.CharField(max_length=8, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Available week"
        verbose_name_plural = "Available weeks"
        ordering = ['-week']

    def __str__(self):
        return self.week


class ScoreCardRemarks(models.Model):
    """Driver/manager remarks and signatures on a weekly scorecard."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    transporter_id = models.CharField(max_length=50, db_index=True)
    week = models.CharField(max_length=8, db_index=True)
    driver_remarks = models.TextField(blank=True)
    manager_remarks = models.TextField(blank=True)
    driver_signature = models.TextField(blank=True)
    driver_signature_at = models.DateTimeField(null=True, blank=True)
    manager_signature = models.TextField(blank=True)
    manager_signature_at = models.DateTimeField(null=True, blank=True)
    manager_name = models.CharField(max_length=150, blank=True)
    manager = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='scorecard_remarks'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Scorecard remarks"
        verbose_name_plural = "Scorecard remarks"
        ordering = ['-week', 'transporter_id']
        constraints = [
            models.UniqueConstraint(fields=['transporter_id', 'week'], name='unique_remarks_week_driver'),
        ]

    def __str__(self):
        return f"{self.transporter_id} {self.week}"


class ScoreCardRemarksHistory(models.Model):
    class Action(models.TextChoices):
        CREATED = 'created', 'Created'
        UPDATED = 'updated', 'Updated'

    remarks = models.ForeignKey(ScoreCardRemarks, on_delete=models.CASCADE, related_name='history')
    action = models.CharField(max_length=10, choices=Action.choices)
    changed_fields = models.JSONField(default=list)
    changed_by = models.CharField(max_length=255, blank=True)
    changed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['changed_at', 'id']

    def __str__(self):
        return f"{self.remarks_id} {self.action}"
