"""
FLEET App Serializers
"""

from rest_framework import serializers

from .models import (
    Vehicle, VehicleSlot, VehicleRepair, VehicleActivityLog, VehicleInspection,
    VehicleRentalAgreement,
)


class VehicleSerializer(serializers.ModelSerializer):
    class Meta:
        model = Vehicle
        fields = '__all__'
        read_only_fields = ['id', 'created_at', 'updated_at']


class VehicleSlotSerializer(serializers.ModelSerializer):
    class Meta:
        model = VehicleSlot
        fields = '__all__'
        read_only_fields = ['id', 'created_at', 'updated_at']


class VehicleRecordSerializer(serializers.ModelSerializer):
    """
    Base for per-vehicle records.

    Links the vehicle by vin when only the vin is given, and copies vin and
    unit number from the vehicle when only the FK is given.
    """

    def validate(self, attrs):
        vehicle = attrs.get('vehicle')
        vin = attrs.get('vin')

        if vehicle is None and vin and not (self.instance and self.instance.vehicle_id):
            attrs['vehicle'] = Vehicle.objects.filter(vin=vin).first()
        elif vehicle is not None:
            if not vin and not (self.instance and self.instance.vin):
                attrs['vin'] = vehicle.vin
            if not attrs.get('unit_number') and not (self.instance and self.instance.unit_number):
                attrs['unit_number'] = vehicle.unit_number
        return attrs


class VehicleRepairSerializer(VehicleRecordSerializer):
    class Meta:
        model = VehicleRepair
        fields = '__all__'
        read_only_fields = ['id', 'last_edit_on', 'created_at', 'updated_at']


class VehicleActivityLogSerializer(VehicleRecordSerializer):
    class Meta:
        model = VehicleActivityLog
        fields = '__all__'
        read_only_fields = ['id', 'created_at', 'updated_at']


class VehicleInspectionSerializer(VehicleRecordSerializer):
    class Meta:
        model = VehicleInspection
        fields = '__all__'
        read_only_fields = ['id', 'created_at', 'updated_at']


class VehicleRentalAgreementSerializer(VehicleRecordSerializer):
    class Meta:
        model = VehicleRentalAgreement
        fields = '__all__'
        read_only_fields = ['id', 'created_at', 'updated_at']
