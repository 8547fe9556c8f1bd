import django.db.models.deletion
import hr.models
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('hr', '0001_initial'),
        ('messaging', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ScheduleConfirmation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('token', models.CharField(default=hr.models.generate_confirmation_token, editable=False, max_length=64, unique=True)),
                ('message_type', models.CharField(max_length=30, verbose_name='Message type')),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('confirmed', 'Confirmed'), ('change_requested', 'Change requested')], default='pending', max_length=20)),
                ('confirmed_at', models.DateTimeField(blank=True, null=True)),
                ('change_requested_at', models.DateTimeField(blank=True, null=True)),
                ('change_remarks', models.TextField(blank=True)),
                ('expires_at', models.DateTimeField(db_index=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('message_log', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='confirmations', to='messaging.messagelog')),
                ('schedule', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='confirmations', to='hr.employeeschedule')),
            ],
            options={
                'verbose_name': 'Schedule confirmation',
                'verbose_name_plural': 'Schedule confirmations',
                'ordering': ['-created_at'],
            },
        ),
    ]
