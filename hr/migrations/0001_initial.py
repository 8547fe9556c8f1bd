import django.db.models.deletion
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('messaging', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Employee',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('first_name', models.CharField(max_length=100, verbose_name='First name')),
                ('last_name', models.CharField(blank=True, max_length=100, verbose_name='Last name')),
                ('ee_code', models.CharField(blank=True, max_length=50, verbose_name='EE code')),
                ('transporter_id', models.CharField(blank=True, db_index=True, max_length=50, verbose_name='Transporter ID')),
                ('badge_number', models.CharField(blank=True, max_length=50, verbose_name='Badge number')),
                ('gender', models.CharField(blank=True, max_length=20, verbose_name='Gender')),
                ('type', models.CharField(blank=True, max_length=50, verbose_name='Employee type')),
                ('email', models.EmailField(max_length=254, unique=True, verbose_name='Email')),
                ('phone_number', models.CharField(blank=True, max_length=30, verbose_name='Phone number')),
                ('street_address', models.CharField(blank=True, max_length=255, verbose_name='Street address')),
                ('city', models.CharField(blank=True, max_length=100, verbose_name='City')),
                ('state', models.CharField(blank=True, max_length=50, verbose_name='State')),
                ('zip_code', models.CharField(blank=True, max_length=20, verbose_name='ZIP code')),
                ('hired_date', models.DateField(blank=True, null=True, verbose_name='Hired date')),
                ('dob', models.DateField(blank=True, null=True, verbose_name='Date of birth')),
                ('hourly_status', models.CharField(blank=True, max_length=50, verbose_name='Hourly status')),
                ('rate', models.FloatField(blank=True, null=True, verbose_name='Hourly rate')),
                ('gas_card_pin', models.CharField(blank=True, max_length=20, verbose_name='Gas card PIN')),
                ('dl_expiration', models.DateField(blank=True, null=True, verbose_name='Driver license expiration')),
                ('motor_vehicle_report_date', models.DateField(blank=True, null=True, verbose_name='MVR date')),
                ('profile_image', models.URLField(blank=True, max_length=500, verbose_name='Profile image')),
                ('status', models.CharField(db_index=True, default='Active', max_length=20, verbose_name='Status')),
                ('sunday', models.CharField(default='OFF', max_length=20)),
                ('monday', models.CharField(default='OFF', max_length=20)),
                ('tuesday', models.CharField(default='OFF', max_length=20)),
                ('wednesday', models.CharField(default='OFF', max_length=20)),
                ('thursday', models.CharField(default='OFF', max_length=20)),
                ('friday', models.CharField(default='OFF', max_length=20)),
                ('saturday', models.CharField(default='OFF', max_length=20)),
                ('default_van_1', models.CharField(blank=True, max_length=50, verbose_name='Default van 1')),
                ('default_van_2', models.CharField(blank=True, max_length=50, verbose_name='Default van 2')),
                ('default_van_3', models.CharField(blank=True, max_length=50, verbose_name='Default van 3')),
                ('schedule_notes', models.TextField(blank=True, verbose_name='Schedule notes')),
                ('termination_date', models.DateField(blank=True, null=True, verbose_name='Termination date')),
                ('termination_reason', models.CharField(blank=True, max_length=255, verbose_name='Termination reason')),
                ('resignation_date', models.DateField(blank=True, null=True, verbose_name='Resignation date')),
                ('resignation_type', models.CharField(blank=True, max_length=100, verbose_name='Resignation type')),
                ('eligibility', models.BooleanField(default=False, verbose_name='Eligible for rehire')),
                ('last_date_worked', models.DateField(blank=True, null=True, verbose_name='Last date worked')),
                ('final_check_issued', models.BooleanField(default=False, verbose_name='Final check issued')),
                ('final_check', models.CharField(blank=True, max_length=100, verbose_name='Final check')),
                ('paycom_offboarded', models.BooleanField(default=False, verbose_name='Offboarded in Paycom')),
                ('amazon_offboarded', models.BooleanField(default=False, verbose_name='Offboarded in Amazon')),
                ('offer_letter_file', models.URLField(blank=True, max_length=500)),
                ('handbook_file', models.URLField(blank=True, max_length=500)),
                ('drivers_license_file', models.URLField(blank=True, max_length=500)),
                ('i9_file', models.URLField(blank=True, max_length=500)),
                ('drug_test_file', models.URLField(blank=True, max_length=500)),
                ('final_check_file', models.URLField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Employee',
                'verbose_name_plural': 'Employees',
                'ordering': ['first_name', 'last_name'],
            },
        ),
        migrations.CreateModel(
            name='EmployeeSchedule',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('transporter_id', models.CharField(db_index=True, max_length=50, verbose_name='Transporter ID')),
                ('week_day', models.CharField(max_length=10, verbose_name='Day of week')),
                ('year_week', models.CharField(db_index=True, max_length=8, verbose_name='Week (YYYY-Www)')),
                ('date', models.DateField(verbose_name='Date')),
                ('status', models.CharField(blank=True, max_length=50)),
                ('type', models.CharField(blank=True, max_length=50, verbose_name='Shift type')),
                ('sub_type', models.CharField(blank=True, max_length=50)),
                ('training_day', models.CharField(blank=True, max_length=50)),
                ('start_time', models.CharField(blank=True, max_length=20, verbose_name='Start time')),
                ('day_before_confirmation', models.CharField(blank=True, max_length=50)),
                ('day_of_confirmation', models.CharField(blank=True, max_length=50)),
                ('week_confirmation', models.CharField(blank=True, max_length=50)),
                ('van', models.CharField(blank=True, max_length=50)),
                ('note', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('employee', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='schedules', to='hr.employee')),
            ],
            options={
                'verbose_name': 'Schedule entry',
                'verbose_name_plural': 'Schedule entries',
                'ordering': ['date', 'transporter_id'],
            },
        ),
        migrations.AddConstraint(
            model_name='employeeschedule',
            constraint=models.UniqueConstraint(fields=('transporter_id', 'date'), name='unique_schedule_per_day'),
        ),
        migrations.CreateModel(
            name='ScheduleMessageStatus',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('channel', models.CharField(choices=[('future_shift', 'Future shift'), ('shift_notification', 'Shift notification'), ('off_today_schedule_tom', 'Off today, scheduled tomorrow'), ('week_schedule', 'Week schedule'), ('route_itinerary', 'Route itinerary')], max_length=30)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('sent', 'Sent'), ('delivered', 'Delivered'), ('received', 'Received')], max_length=20)),
                ('created_by', models.CharField(default='system', max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('message_log', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='schedule_statuses', to='messaging.messagelog')),
                ('schedule', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='message_statuses', to='hr.employeeschedule')),
            ],
            options={
                'verbose_name': 'Schedule message status',
                'verbose_name_plural': 'Schedule message statuses',
                'ordering': ['created_at'],
            },
        ),
    ]
