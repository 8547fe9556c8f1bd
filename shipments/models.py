"""
SHIPMENTS App - Purchase orders and container tracking

PurchaseOrder → CustomerPO → ShippingLine → TrackingRecord.
A shipping line carries the container number refreshed against SeaRates.
"""

import uuid
from django.db import models
from django.utils import timezone


class PurchaseOrder(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    vbpo_no = models.CharField(max_length=50, unique=True, verbose_name="VBPO number")
    order_type = models.CharField(max_length=50, blank=True, verbose_name="Order type")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Purchase order"
        verbose_name_plural = "Purchase orders"
        ordering = ['-created_at']

    def __str__(self):
        return self.vbpo_no


class CustomerPO(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    purchase_order = models.ForeignKey(
        PurchaseOrder, on_delete=models.CASCADE, related_name='customer_pos'
    )
    po_no = models.CharField(max_length=50, blank=True)
    customer = models.CharField(max_length=150, blank=True)
    customer_location = models.CharField(max_length=255, blank=True)
    customer_po_no = models.CharField(max_length=50, blank=True)
    qty_ordered = models.FloatField(null=True, blank=True)
    warehouse = models.CharField(max_length=100, blank=True)

    class Meta:
        verbose_name = "Customer PO"
        verbose_name_plural = "Customer POs"
        ordering = ['po_no']

    def __str__(self):
        return f"{self.purchase_order.vbpo_no} / {self.po_no}"


class ShippingLine(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    customer_po = models.ForeignKey(CustomerPO, on_delete=models.CASCADE, related_name='shipping_lines')

    spo_no = models.CharField(max_length=50, blank=True)
    svbid = models.CharField(max_length=50, blank=True)
    supplier_location = models.CharField(max_length=50, blank=True, help_text="SupplierLocation vb_id")
    product = models.CharField(max_length=50, blank=True, help_text="Product vb_id")
    bol_number = models.CharField(max_length=50, blank=True)
    carrier = models.CharField(max_length=100, blank=True)
    vessel_trip = models.CharField(max_length=100, blank=True)
    port_of_entry = models.CharField(max_length=100, blank=True)

    eta = models.DateField(null=True, blank=True)
    updated_eta = models.DateField(null=True, blank=True)
    estimated_duties = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    quick_note = models.TextField(blank=True)

    item_no = models.CharField(max_length=50, blank=True)
    description = models.TextField(blank=True)
    lot_serial = models.CharField(max_length=100, blank=True)
    qty = models.FloatField(null=True, blank=True)
    type = models.CharField(max_length=50, blank=True)
    inventory_date = models.DateField(null=True, blank=True)

    carrier_booking_ref = models.CharField(max_length=100, blank=True)
    is_manufacturer_security_isf = models.BooleanField(default=False)
    is_isf_filing = models.BooleanField(default=False)
    update_shipment_tracking = models.BooleanField(default=False)
    status = models.CharField(max_length=50, blank=True, db_index=True)
    is_customs_status = models.BooleanField(default=False)
    all_documents_provided = models.BooleanField(default=False)
    container_no = models.CharField(max_length=30, blank=True, db_index=True)

    class Meta:
        verbose_name = "Shipping line"
        verbose_name_plural = "Shipping lines"
        ordering = ['spo_no', 'item_no']

    def __str__(self):
        return f"{self.spo_no or self.item_no} ({self.container_no or 'no container'})"

    @property
    def latest_tracking(self):
        return self.tracking_records.order_by('-timestamp', '-id').first()


class TrackingRecord(models.Model):
    """Snapshot of the flattened SeaRates payload for one shipping line."""

    shipping_line = models.ForeignKey(ShippingLine, on_delete=models.CASCADE, related_name='tracking_records')
    data = models.JSONField(default=dict)
    timestamp = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        verbose_name = "Tracking record"
        verbose_name_plural = "Tracking records"
        ordering = ['timestamp', 'id']

    def __str__(self):
        return f"{self.shipping_line.container_no} @ {self.timestamp:%Y-%m-%d %H:%M}"
