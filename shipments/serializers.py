"""
SHIPMENTS App Serializers
"""

from rest_framework import serializers

from .models import PurchaseOrder, CustomerPO, ShippingLine, TrackingRecord


class TrackingRecordSerializer(serializers.ModelSerializer):
    class Meta:
        model = TrackingRecord
        fields = ['id', 'data', 'timestamp']


class ShippingLineSerializer(serializers.ModelSerializer):
    tracking_records = TrackingRecordSerializer(many=True, read_only=True)

    class Meta:
        model = ShippingLine
        exclude = ['customer_po']


class CustomerPOSerializer(serializers.ModelSerializer):
    shipping_lines = ShippingLineSerializer(many=True, read_only=True)

    class Meta:
        model = CustomerPO
        exclude = ['purchase_order']


class PurchaseOrderSerializer(serializers.ModelSerializer):
    """Purchase order; customer POs and their shipping lines are read-only."""

    customer_pos = CustomerPOSerializer(many=True, read_only=True)

    class Meta:
        model = PurchaseOrder
        fields = ['id', 'vbpo_no', 'order_type', 'customer_pos', 'created_at', 'updated_at']
        read_only_fields = ['id', 'created_at', 'updated_at']


class ContainerRefreshSerializer(serializers.Serializer):
    container = serializers.CharField(max_length=30)
