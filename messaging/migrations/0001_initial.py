import django.db.models.deletion
import django.utils.timezone
import uuid
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='MessageLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('openphone_message_id', models.CharField(blank=True, db_index=True, max_length=100)),
                ('from_number', models.CharField(blank=True, max_length=50)),
                ('from_display', models.CharField(blank=True, max_length=50)),
                ('to_number', models.CharField(db_index=True, max_length=30)),
                ('recipient_name', models.CharField(blank=True, max_length=150)),
                ('message_type', models.CharField(db_index=True, max_length=30)),
                ('content', models.TextField()),
                ('status', models.CharField(choices=[('sent', 'Sent'), ('delivered', 'Delivered'), ('failed', 'Failed'), ('received_reply', 'Reply received')], db_index=True, default='sent', max_length=20)),
                ('sent_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('error_message', models.TextField(blank=True)),
                ('request_payload', models.JSONField(blank=True, null=True)),
                ('response_payload', models.JSONField(blank=True, null=True)),
                ('delivered_at', models.DateTimeField(blank=True, null=True)),
                ('delivery_webhook_payload', models.JSONField(blank=True, null=True)),
                ('reply_content', models.TextField(blank=True)),
                ('reply_at', models.DateTimeField(blank=True, null=True)),
                ('reply_webhook_payload', models.JSONField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Message log',
                'verbose_name_plural': 'Message logs',
                'ordering': ['-sent_at'],
                'indexes': [models.Index(fields=['to_number', 'message_type', '-sent_at'], name='msglog_to_type_sent_idx')],
            },
        ),
        migrations.CreateModel(
            name='MessagingTemplate',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('future-shift', 'Future shift notification'), ('shift', 'Shift notification'), ('off-tomorrow', 'Off today, scheduled tomorrow'), ('week-schedule', 'Week schedule'), ('route-itinerary', 'Route itinerary')], max_length=30, unique=True, verbose_name='Type')),
                ('content', models.TextField(verbose_name='Content')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_templates', to=settings.AUTH_USER_MODEL)),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='updated_templates', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Messaging template',
                'verbose_name_plural': 'Messaging templates',
                'ordering': ['type'],
            },
        ),
    ]
