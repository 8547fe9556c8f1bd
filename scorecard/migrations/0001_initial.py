import django.db.models.deletion
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('hr', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AvailableWeek',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('week', models.CharField(max_length=8, unique=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Available week',
                'verbose_name_plural': 'Available weeks',
                'ordering': ['-week'],
            },
        ),
        migrations.CreateModel(
            name='DeliveryExcellence',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('week', models.CharField(db_index=True, max_length=8, verbose_name='Week (YYYY-Www)')),
                ('transporter_id', models.CharField(blank=True, db_index=True, max_length=50, verbose_name='Transporter ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('delivery_associate', models.CharField(blank=True, max_length=150)),
                ('overall_standing', models.CharField(blank=True, max_length=30)),
                ('overall_score', models.FloatField(blank=True, null=True)),
                ('fico_metric', models.FloatField(blank=True, null=True)),
                ('fico_tier', models.CharField(blank=True, max_length=30)),
                ('fico_score', models.FloatField(blank=True, null=True)),
                ('speeding_event_rate', models.FloatField(blank=True, null=True)),
                ('speeding_event_rate_tier', models.CharField(blank=True, max_length=30)),
                ('speeding_event_rate_score', models.FloatField(blank=True, null=True)),
                ('seatbelt_off_rate', models.FloatField(blank=True, null=True)),
                ('seatbelt_off_rate_tier', models.CharField(blank=True, max_length=30)),
                ('seatbelt_off_rate_score', models.FloatField(blank=True, null=True)),
                ('distractions_rate', models.FloatField(blank=True, null=True)),
                ('distractions_rate_tier', models.CharField(blank=True, max_length=30)),
                ('distractions_rate_score', models.FloatField(blank=True, null=True)),
                ('sign_signal_violations_rate', models.FloatField(blank=True, null=True)),
                ('sign_signal_violations_rate_tier', models.CharField(blank=True, max_length=30)),
                ('sign_signal_violations_rate_score', models.FloatField(blank=True, null=True)),
                ('following_distance_rate', models.FloatField(blank=True, null=True)),
                ('following_distance_rate_tier', models.CharField(blank=True, max_length=30)),
                ('following_distance_rate_score', models.FloatField(blank=True, null=True)),
                ('cdf_dpmo', models.FloatField(blank=True, null=True)),
                ('cdf_dpmo_tier', models.CharField(blank=True, max_length=30)),
                ('cdf_dpmo_score', models.FloatField(blank=True, null=True)),
                ('ced', models.FloatField(blank=True, null=True)),
                ('ced_tier', models.CharField(blank=True, max_length=30)),
                ('ced_score', models.FloatField(blank=True, null=True)),
                ('dcr', models.CharField(blank=True, help_text='Percentage string, e.g. "99.60%"', max_length=20)),
                ('dcr_tier', models.CharField(blank=True, max_length=30)),
                ('dcr_score', models.FloatField(blank=True, null=True)),
                ('dsb', models.FloatField(blank=True, null=True)),
                ('dsb_dpmo_tier', models.CharField(blank=True, max_length=30)),
                ('dsb_dpmo_score', models.FloatField(blank=True, null=True)),
                ('pod', models.CharField(blank=True, help_text='Percentage string, e.g. "98.20%"', max_length=20)),
                ('pod_tier', models.CharField(blank=True, max_length=30)),
                ('pod_score', models.FloatField(blank=True, null=True)),
                ('psb', models.FloatField(blank=True, null=True)),
                ('psb_tier', models.CharField(blank=True, max_length=30)),
                ('psb_score', models.FloatField(blank=True, null=True)),
                ('packages_delivered', models.FloatField(blank=True, null=True)),
                ('fico_metric_weight_applied', models.FloatField(blank=True, null=True)),
                ('speeding_event_rate_weight_applied', models.FloatField(blank=True, null=True)),
                ('seatbelt_off_rate_weight_applied', models.FloatField(blank=True, null=True)),
                ('distractions_rate_weight_applied', models.FloatField(blank=True, null=True)),
                ('sign_signal_violations_rate_weight_applied', models.FloatField(blank=True, null=True)),
                ('following_distance_rate_weight_applied', models.FloatField(blank=True, null=True)),
                ('cdf_dpmo_weight_applied', models.FloatField(blank=True, null=True)),
                ('ced_weight_applied', models.FloatField(blank=True, null=True)),
                ('dcr_weight_applied', models.FloatField(blank=True, null=True)),
                ('dsb_dpmo_weight_applied', models.FloatField(blank=True, null=True)),
                ('pod_weight_applied', models.FloatField(blank=True, null=True)),
                ('psb_weight_applied', models.FloatField(blank=True, null=True)),
                ('employee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='hr.employee')),
            ],
            options={
                'verbose_name': 'Delivery excellence',
                'verbose_name_plural': 'Delivery excellence',
                'ordering': ['-week', 'transporter_id'],
                'abstract': False,
                'constraints': [models.UniqueConstraint(fields=('week', 'transporter_id'), name='unique_excellence_week_driver')],
            },
        ),
        migrations.CreateModel(
            name='PhotoOnDelivery',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('week', models.CharField(db_index=True, max_length=8, verbose_name='Week (YYYY-Www)')),
                ('transporter_id', models.CharField(blank=True, db_index=True, max_length=50, verbose_name='Transporter ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('first_name', models.CharField(blank=True, max_length=100)),
                ('last_name', models.CharField(blank=True, max_length=100)),
                ('opportunities', models.IntegerField(default=0)),
                ('success', models.IntegerField(default=0)),
                ('bypass', models.IntegerField(default=0)),
                ('rejects', models.IntegerField(default=0)),
                ('blurry_photo', models.IntegerField(default=0)),
                ('human_in_the_picture', models.IntegerField(default=0)),
                ('no_package_detected', models.IntegerField(default=0)),
                ('package_in_car', models.IntegerField(default=0)),
                ('package_in_hand', models.IntegerField(default=0)),
                ('package_not_clearly_visible', models.IntegerField(default=0)),
                ('package_too_close', models.IntegerField(default=0)),
                ('photo_too_dark', models.IntegerField(default=0)),
                ('other', models.IntegerField(default=0)),
                ('employee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='hr.employee')),
            ],
            options={
                'verbose_name': 'Photo-on-delivery',
                'verbose_name_plural': 'Photo-on-delivery',
                'ordering': ['-week', 'transporter_id'],
                'abstract': False,
                'constraints': [models.UniqueConstraint(fields=('week', 'transporter_id'), name='unique_pod_week_driver')],
            },
        ),
        migrations.CreateModel(
            name='CustomerDeliveryFeedback',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('week', models.CharField(db_index=True, max_length=8, verbose_name='Week (YYYY-Www)')),
                ('transporter_id', models.CharField(blank=True, db_index=True, max_length=50, verbose_name='Transporter ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('delivery_associate', models.CharField(blank=True, max_length=150)),
                ('cdf_dpmo', models.FloatField(blank=True, null=True)),
                ('cdf_dpmo_tier', models.CharField(blank=True, max_length=30)),
                ('cdf_dpmo_score', models.FloatField(blank=True, null=True)),
                ('negative_feedback_count', models.IntegerField(default=0)),
                ('employee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='hr.employee')),
            ],
            options={
                'verbose_name': 'Customer delivery feedback',
                'verbose_name_plural': 'Customer delivery feedback',
                'ordering': ['-week', 'transporter_id'],
                'abstract': False,
                'constraints': [models.UniqueConstraint(fields=('week', 'transporter_id'), name='unique_cdf_week_driver')],
            },
        ),
        migrations.CreateModel(
            name='DVICInspection',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('week', models.CharField(db_index=True, max_length=8, verbose_name='Week (YYYY-Www)')),
                ('transporter_id', models.CharField(blank=True, db_index=True, max_length=50, verbose_name='Transporter ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('start_date', models.CharField(blank=True, db_index=True, help_text='YYYY-MM-DD', max_length=20)),
                ('dsp', models.CharField(blank=True, max_length=50)),
                ('station', models.CharField(blank=True, max_length=50)),
                ('transporter_name', models.CharField(blank=True, max_length=150)),
                ('vin', models.CharField(blank=True, max_length=50)),
                ('fleet_type', models.CharField(blank=True, max_length=50)),
                ('inspection_type', models.CharField(blank=True, max_length=50)),
                ('inspection_status', models.CharField(blank=True, max_length=50)),
                ('start_time', models.CharField(blank=True, max_length=50)),
                ('end_time', models.CharField(blank=True, max_length=50)),
                ('duration', models.CharField(blank=True, max_length=30)),
                ('employee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='hr.employee')),
            ],
            options={
                'verbose_name': 'DVIC inspection',
                'verbose_name_plural': 'DVIC inspections',
                'ordering': ['-week', 'transporter_id'],
                'abstract': False,
                'constraints': [models.UniqueConstraint(fields=('week', 'transporter_id', 'vin', 'start_time'), name='unique_dvic_inspection')],
            },
        ),
        migrations.CreateModel(
            name='SafetyEvent',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('week', models.CharField(db_index=True, max_length=8, verbose_name='Week (YYYY-Www)')),
                ('transporter_id', models.CharField(blank=True, db_index=True, max_length=50, verbose_name='Transporter ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('date', models.CharField(blank=True, max_length=20)),
                ('delivery_associate', models.CharField(blank=True, max_length=150)),
                ('event_id', models.CharField(max_length=100)),
                ('date_time', models.CharField(blank=True, max_length=50)),
                ('vin', models.CharField(blank=True, max_length=50)),
                ('program_impact', models.CharField(blank=True, max_length=100)),
                ('metric_type', models.CharField(blank=True, max_length=100)),
                ('metric_subtype', models.CharField(blank=True, max_length=100)),
                ('source', models.CharField(blank=True, max_length=100)),
                ('video_link', models.URLField(blank=True, max_length=500)),
                ('review_details', models.TextField(blank=True)),
                ('dsp', models.CharField(blank=True, max_length=50)),
                ('station', models.CharField(blank=True, max_length=50)),
                ('employee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='hr.employee')),
            ],
            options={
                'verbose_name': 'Safety event',
                'verbose_name_plural': 'Safety events',
                'ordering': ['-week', 'transporter_id'],
                'abstract': False,
                'constraints': [models.UniqueConstraint(fields=('week', 'transporter_id', 'event_id'), name='unique_safety_event')],
            },
        ),
        migrations.CreateModel(
            name='CDFNegative',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('week', models.CharField(db_index=True, max_length=8, verbose_name='Week (YYYY-Www)')),
                ('transporter_id', models.CharField(blank=True, db_index=True, max_length=50, verbose_name='Transporter ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('delivery_group_id', models.CharField(blank=True, max_length=100)),
                ('delivery_associate', models.CharField(max_length=150)),
                ('delivery_associate_name', models.CharField(blank=True, max_length=150)),
                ('da_mishandled_package', models.CharField(blank=True, max_length=20)),
                ('da_was_unprofessional', models.CharField(blank=True, max_length=20)),
                ('da_did_not_follow_instructions', models.CharField(blank=True, max_length=20)),
                ('delivered_to_wrong_address', models.CharField(blank=True, max_length=20)),
                ('never_received_delivery', models.CharField(blank=True, max_length=20)),
                ('received_wrong_item', models.CharField(blank=True, max_length=20)),
                ('feedback_details', models.TextField(blank=True)),
                ('tracking_id', models.CharField(max_length=100)),
                ('delivery_date', models.CharField(blank=True, max_length=20)),
                ('employee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='hr.employee')),
            ],
            options={
                'verbose_name': 'CDF negative',
                'verbose_name_plural': 'CDF negatives',
                'ordering': ['-week', 'transporter_id'],
                'abstract': False,
                'constraints': [models.UniqueConstraint(fields=('week', 'delivery_associate', 'tracking_id'), name='unique_cdf_negative')],
            },
        ),
        migrations.CreateModel(
            name='QualityDSBDNR',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('week', models.CharField(db_index=True, max_length=8, verbose_name='Week (YYYY-Www)')),
                ('transporter_id', models.CharField(blank=True, db_index=True, max_length=50, verbose_name='Transporter ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('delivery_associate', models.CharField(blank=True, max_length=150)),
                ('dsb_count', models.IntegerField(default=0)),
                ('dsb_dpmo', models.FloatField(default=0)),
                ('attended_delivery_count', models.IntegerField(default=0)),
                ('unattended_delivery_count', models.IntegerField(default=0)),
                ('simultaneous_deliveries', models.IntegerField(default=0)),
                ('delivered_over_50m', models.IntegerField(default=0)),
                ('incorrect_scan_usage_attended', models.IntegerField(default=0)),
                ('incorrect_scan_usage_unattended', models.IntegerField(default=0)),
                ('no_pod_on_delivery', models.IntegerField(default=0)),
                ('scanned_not_delivered_not_returned', models.IntegerField(default=0)),
                ('employee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='hr.employee')),
            ],
            options={
                'verbose_name': 'Quality DSB/DNR',
                'verbose_name_plural': 'Quality DSB/DNR',
                'ordering': ['-week', 'transporter_id'],
                'abstract': False,
                'constraints': [models.UniqueConstraint(fields=('week', 'transporter_id'), name='unique_dsb_week_driver')],
            },
        ),
        migrations.CreateModel(
            name='DeliveryCompletion',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('week', models.CharField(db_index=True, max_length=8, verbose_name='Week (YYYY-Www)')),
                ('transporter_id', models.CharField(blank=True, db_index=True, max_length=50, verbose_name='Transporter ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('delivery_associate', models.CharField(blank=True, max_length=150)),
                ('dcr', models.FloatField(blank=True, null=True)),
                ('packages_delivered', models.IntegerField(default=0)),
                ('packages_dispatched', models.IntegerField(default=0)),
                ('packages_returned_to_station', models.IntegerField(default=0)),
                ('packages_returned_da_controllable', models.IntegerField(default=0)),
                ('rts_all_exempted', models.IntegerField(default=0)),
                ('rts_business_closed', models.IntegerField(default=0)),
                ('rts_customer_unavailable', models.IntegerField(default=0)),
                ('rts_no_secure_location', models.IntegerField(default=0)),
                ('rts_other', models.IntegerField(default=0)),
                ('rts_out_of_drive_time', models.IntegerField(default=0)),
                ('rts_unable_to_access', models.IntegerField(default=0)),
                ('rts_unable_to_locate', models.IntegerField(default=0)),
                ('rts_unsafe_due_to_dog', models.IntegerField(default=0)),
                ('rts_bad_weather', models.IntegerField(default=0)),
                ('rts_locker_issue', models.IntegerField(default=0)),
                ('rts_missing_or_incorrect_access_code', models.IntegerField(default=0)),
                ('rts_otp_not_available', models.IntegerField(default=0)),
                ('employee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='hr.employee')),
            ],
            options={
                'verbose_name': 'DCR',
                'verbose_name_plural': 'DCR',
                'ordering': ['-week', 'transporter_id'],
                'abstract': False,
                'constraints': [models.UniqueConstraint(fields=('week', 'transporter_id'), name='unique_dcr_week_driver')],
            },
        ),
        migrations.CreateModel(
            name='ReturnToStation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('week', models.CharField(db_index=True, max_length=8, verbose_name='Week (YYYY-Www)')),
                ('transporter_id', models.CharField(blank=True, db_index=True, max_length=50, verbose_name='Transporter ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('delivery_associate', models.CharField(blank=True, max_length=150)),
                ('tracking_id', models.CharField(max_length=100)),
                ('impact_dcr', models.CharField(blank=True, max_length=20)),
                ('rts_code', models.CharField(blank=True, max_length=100)),
                ('customer_contact_details', models.TextField(blank=True)),
                ('planned_delivery_date', models.CharField(blank=True, max_length=20)),
                ('exemption_reason', models.CharField(blank=True, max_length=255)),
                ('service_area', models.CharField(blank=True, max_length=100)),
                ('employee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='hr.employee')),
            ],
            options={
                'verbose_name': 'RTS',
                'verbose_name_plural': 'RTS',
                'ordering': ['-week', 'transporter_id'],
                'abstract': False,
                'constraints': [models.UniqueConstraint(fields=('week', 'transporter_id', 'tracking_id'), name='unique_rts_package')],
            },
        ),
        migrations.CreateModel(
            name='ScoreCardRemarks',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('transporter_id', models.CharField(db_index=True, max_length=50)),
                ('week', models.CharField(db_index=True, max_length=8)),
                ('driver_remarks', models.TextField(blank=True)),
                ('manager_remarks', models.TextField(blank=True)),
                ('driver_signature', models.TextField(blank=True)),
                ('driver_signature_at', models.DateTimeField(blank=True, null=True)),
                ('manager_signature', models.TextField(blank=True)),
                ('manager_signature_at', models.DateTimeField(blank=True, null=True)),
                ('manager_name', models.CharField(blank=True, max_length=150)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('manager', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='scorecard_remarks', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Scorecard remarks',
                'verbose_name_plural': 'Scorecard remarks',
                'ordering': ['-week', 'transporter_id'],
                'constraints': [models.UniqueConstraint(fields=('transporter_id', 'week'), name='unique_remarks_week_driver')],
            },
        ),
        migrations.CreateModel(
            name='ScoreCardRemarksHistory',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(choices=[('created', 'Created'), ('updated', 'Updated')], max_length=10)),
                ('changed_fields', models.JSONField(default=list)),
                ('changed_by', models.CharField(blank=True, max_length=255)),
                ('changed_at', models.DateTimeField(auto_now_add=True)),
                ('remarks', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='history', to='scorecard.scorecardremarks')),
            ],
            options={
                'ordering': ['changed_at', 'id'],
            },
        ),
    ]
