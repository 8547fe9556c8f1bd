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
            name='PurchaseOrder',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('vbpo_no', models.CharField(max_length=50, unique=True, verbose_name='VBPO number')),
                ('order_type', models.CharField(blank=True, max_length=50, verbose_name='Order type')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Purchase order',
                'verbose_name_plural': 'Purchase orders',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='CustomerPO',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('po_no', models.CharField(blank=True, max_length=50)),
                ('customer', models.CharField(blank=True, max_length=150)),
                ('customer_location', models.CharField(blank=True, max_length=255)),
                ('customer_po_no', models.CharField(blank=True, max_length=50)),
                ('qty_ordered', models.FloatField(blank=True, null=True)),
                ('warehouse', models.CharField(blank=True, max_length=100)),
                ('purchase_order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='customer_pos', to='shipments.purchaseorder')),
            ],
            options={
                'verbose_name': 'Customer PO',
                'verbose_name_plural': 'Customer POs',
                'ordering': ['po_no'],
            },
        ),
        migrations.CreateModel(
            name='ShippingLine',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('spo_no', models.CharField(blank=True, max_length=50)),
                ('svbid', models.CharField(blank=True, max_length=50)),
                ('supplier_location', models.CharField(blank=True, help_text='SupplierLocation vb_id', max_length=50)),
                ('product', models.CharField(blank=True, help_text='Product vb_id', max_length=50)),
                ('bol_number', models.CharField(blank=True, max_length=50)),
                ('carrier', models.CharField(blank=True, max_length=100)),
                ('vessel_trip', models.CharField(blank=True, max_length=100)),
                ('port_of_entry', models.CharField(blank=True, max_length=100)),
                ('eta', models.DateField(blank=True, null=True)),
                ('updated_eta', models.DateField(blank=True, null=True)),
                ('estimated_duties', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('quick_note', models.TextField(blank=True)),
                ('item_no', models.CharField(blank=True, max_length=50)),
                ('description', models.TextField(blank=True)),
                ('lot_serial', models.CharField(blank=True, max_length=100)),
                ('qty', models.FloatField(blank=True, null=True)),
                ('type', models.CharField(blank=True, max_length=50)),
                ('inventory_date', models.DateField(blank=True, null=True)),
                ('carrier_booking_ref', models.CharField(blank=True, max_length=100)),
                ('is_manufacturer_security_isf', models.BooleanField(default=False)),
                ('is_isf_filing', models.BooleanField(default=False)),
                ('update_shipment_tracking', models.BooleanField(default=False)),
                ('status', models.CharField(blank=True, db_index=True, max_length=50)),
                ('is_customs_status', models.BooleanField(default=False)),
                ('all_documents_provided', models.BooleanField(default=False)),
                ('container_no', models.CharField(blank=True, db_index=True, max_length=30)),
                ('customer_po', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shipping_lines', to='shipments.customerpo')),
            ],
            options={
                'verbose_name': 'Shipping line',
                'verbose_name_plural': 'Shipping lines',
                'ordering': ['spo_no', 'item_no'],
            },
        ),
        migrations.CreateModel(
            name='TrackingRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('data', models.JSONField(default=dict)),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('shipping_line', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tracking_records', to='shipments.shippingline')),
            ],
            options={
                'verbose_name': 'Tracking record',
                'verbose_name_plural': 'Tracking records',
                'ordering': ['timestamp', 'id'],
            },
        ),
    ]
