import django.db.models.deletion
import django.utils.timezone
import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Vehicle',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('vin', models.CharField(max_length=50, unique=True, verbose_name='VIN')),
                ('vehicle_name', models.CharField(blank=True, max_length=100)),
                ('unit_number', models.CharField(blank=True, db_index=True, max_length=50)),
                ('vehicle_slot_number', models.CharField(blank=True, db_index=True, max_length=50)),
                ('year', models.CharField(blank=True, max_length=10)),
                ('license_plate', models.CharField(blank=True, db_index=True, max_length=30)),
                ('make', models.CharField(blank=True, max_length=50)),
                ('vehicle_model', models.CharField(blank=True, max_length=50)),
                ('status', models.CharField(choices=[('Active', 'Active'), ('Inactive', 'Inactive'), ('Maintenance', 'Maintenance'), ('Grounded', 'Grounded'), ('Decommissioned', 'Decommissioned')], db_index=True, default='Active', max_length=20)),
                ('ownership', models.CharField(choices=[('Owned', 'Owned'), ('Leased', 'Leased'), ('Rented', 'Rented')], default='Owned', max_length=10)),
                ('dashcam', models.CharField(blank=True, max_length=50)),
                ('vehicle_provider', models.CharField(blank=True, max_length=100)),
                ('state', models.CharField(blank=True, max_length=50)),
                ('location', models.CharField(blank=True, max_length=100)),
                ('info', models.TextField(blank=True)),
                ('image', models.URLField(blank=True, max_length=500)),
                ('location_from', models.CharField(blank=True, max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Vehicle',
                'verbose_name_plural': 'Vehicles',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='VehicleSlot',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('slot_number', models.CharField(max_length=50, unique=True)),
                ('location', models.CharField(blank=True, max_length=100)),
                ('notes', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['slot_number'],
            },
        ),
        migrations.CreateModel(
            name='VehicleRepair',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('vin', models.CharField(blank=True, db_index=True, max_length=50, verbose_name='VIN')),
                ('unit_number', models.CharField(blank=True, max_length=50)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('description', models.TextField(blank=True)),
                ('current_status', models.CharField(choices=[('Not Started', 'Not Started'), ('In Progress', 'In Progress'), ('Waiting for Parts', 'Waiting for Parts'), ('Sent to Repair Shop', 'Sent to Repair Shop'), ('Completed', 'Completed')], db_index=True, default='Not Started', max_length=30)),
                ('estimated_date', models.DateField(blank=True, null=True)),
                ('image', models.URLField(blank=True, max_length=500)),
                ('creation_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('last_edit_on', models.DateTimeField(default=django.utils.timezone.now)),
                ('repair_duration', models.PositiveIntegerField(blank=True, help_text='Days from creation to completion', null=True)),
                ('vehicle', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='fleet.vehicle')),
            ],
            options={
                'verbose_name': 'Vehicle repair',
                'verbose_name_plural': 'Vehicle repairs',
                'ordering': ['-creation_date'],
            },
        ),
        migrations.CreateModel(
            name='VehicleActivityLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('vin', models.CharField(blank=True, db_index=True, max_length=50, verbose_name='VIN')),
                ('unit_number', models.CharField(blank=True, max_length=50)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('service_type', models.CharField(blank=True, max_length=100)),
                ('start_date', models.DateField(blank=True, null=True)),
                ('end_date', models.DateField(blank=True, null=True)),
                ('mileage', models.PositiveIntegerField(default=0)),
                ('registration_expiration', models.DateField(blank=True, db_index=True, null=True)),
                ('notes', models.TextField(blank=True)),
                ('vehicle', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='fleet.vehicle')),
            ],
            options={
                'verbose_name': 'Vehicle activity log',
                'verbose_name_plural': 'Vehicle activity logs',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='VehicleInspection',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('vin', models.CharField(blank=True, db_index=True, max_length=50, verbose_name='VIN')),
                ('unit_number', models.CharField(blank=True, max_length=50)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('inspection_type', models.CharField(choices=[('Pre-Trip', 'Pre-Trip'), ('Post-Trip', 'Post-Trip'), ('Monthly', 'Monthly'), ('Annual', 'Annual'), ('DOT', 'DOT'), ('Safety', 'Safety')], db_index=True, default='Pre-Trip', max_length=20)),
                ('inspection_date', models.DateTimeField(default=django.utils.timezone.now)),
                ('inspector_name', models.CharField(blank=True, max_length=150)),
                ('overall_result', models.CharField(choices=[('Pass', 'Pass'), ('Fail', 'Fail'), ('Needs Attention', 'Needs Attention')], default='Pass', max_length=20)),
                ('mileage', models.PositiveIntegerField(default=0)),
                ('exterior_condition', models.CharField(choices=[('Good', 'Good'), ('Fair', 'Fair'), ('Poor', 'Poor'), ('N/A', 'N/A')], default='Good', max_length=10)),
                ('interior_condition', models.CharField(choices=[('Good', 'Good'), ('Fair', 'Fair'), ('Poor', 'Poor'), ('N/A', 'N/A')], default='Good', max_length=10)),
                ('tires_condition', models.CharField(choices=[('Good', 'Good'), ('Fair', 'Fair'), ('Poor', 'Poor'), ('N/A', 'N/A')], default='Good', max_length=10)),
                ('brakes_condition', models.CharField(choices=[('Good', 'Good'), ('Fair', 'Fair'), ('Poor', 'Poor'), ('N/A', 'N/A')], default='Good', max_length=10)),
                ('lights_condition', models.CharField(choices=[('Good', 'Good'), ('Fair', 'Fair'), ('Poor', 'Poor'), ('N/A', 'N/A')], default='Good', max_length=10)),
                ('fluids_condition', models.CharField(choices=[('Good', 'Good'), ('Fair', 'Fair'), ('Poor', 'Poor'), ('N/A', 'N/A')], default='Good', max_length=10)),
                ('defects_found', models.TextField(blank=True)),
                ('action_required', models.TextField(blank=True)),
                ('images', models.JSONField(blank=True, default=list)),
                ('notes', models.TextField(blank=True)),
                ('vehicle', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='fleet.vehicle')),
            ],
            options={
                'verbose_name': 'Vehicle inspection',
                'verbose_name_plural': 'Vehicle inspections',
                'ordering': ['-inspection_date'],
            },
        ),
        migrations.CreateModel(
            name='VehicleRentalAgreement',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('vin', models.CharField(blank=True, db_index=True, max_length=50, verbose_name='VIN')),
                ('unit_number', models.CharField(blank=True, max_length=50)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('invoice_number', models.CharField(blank=True, max_length=100)),
                ('agreement_number', models.CharField(blank=True, db_index=True, max_length=100)),
                ('registration_start_date', models.DateField(blank=True, null=True)),
                ('registration_end_date', models.DateField(blank=True, db_index=True, null=True)),
                ('due_date', models.DateField(blank=True, null=True)),
                ('amount', models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ('file_urls', models.JSONField(blank=True, default=list)),
                ('vehicle', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='fleet.vehicle')),
            ],
            options={
                'verbose_name': 'Vehicle rental agreement',
                'verbose_name_plural': 'Vehicle rental agreements',
                'ordering': ['-created_at'],
            },
        ),
    ]
