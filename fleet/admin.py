"""
Django Admin configuration for FLEET app.
"""

import csv
from django.contrib import admin
from django.http import HttpResponse

from .models import (
    Vehicle, VehicleSlot, VehicleRepair, VehicleActivityLog, VehicleInspection,
    VehicleRentalAgreement,
)


@admin.register(Vehicle)
class VehicleAdmin(admin.ModelAdmin):
    list_display = ('unit_number', 'vin', 'vehicle_name', 'make', 'vehicle_model', 'status', 'ownership', 'location')
    list_filter = ('status', 'ownership', 'location')
    search_fields = ('vin', 'unit_number', 'vehicle_name', 'license_plate')
    actions = ['export_vehicles_csv', 'mark_grounded']

    @admin.action(description="📥 Export selected vehicles to CSV")
    def export_vehicles_csv(self, request, queryset):
        response = HttpResponse(content_type='text/csv')
        response['Content-Disposition'] = 'attachment; filename="vehicles.csv"'

        writer = csv.writer(response)
        writer.writerow(['unitNumber', 'vin', 'licensePlate', 'make', 'model', 'year', 'status', 'ownership'])
        for vehicle in queryset:
            writer.writerow([
                vehicle.unit_number, vehicle.vin, vehicle.license_plate, vehicle.make,
                vehicle.vehicle_model, vehicle.year, vehicle.status, vehicle.ownership,
            ])
        return response

    @admin.action(description="⛔ Mark selected vehicles as grounded")
    def mark_grounded(self, request, queryset):
        updated = queryset.update(status='Grounded')
        self.message_user(request, f"{updated} vehicle(s) grounded.")


@admin.register(VehicleSlot)
class VehicleSlotAdmin(admin.ModelAdmin):
    list_display = ('slot_number', 'location')
    search_fields = ('slot_number', 'location')


@admin.register(VehicleRepair)
class VehicleRepairAdmin(admin.ModelAdmin):
    list_display = ('vin', 'unit_number', 'current_status', 'estimated_date', 'creation_date', 'repair_duration')
    list_filter = ('current_status',)
    search_fields = ('vin', 'unit_number', 'description')
    raw_id_fields = ('vehicle',)


@admin.register(VehicleActivityLog)
class VehicleActivityLogAdmin(admin.ModelAdmin):
    list_display = ('vin', 'service_type', 'start_date', 'end_date', 'mileage', 'registration_expiration')
    list_filter = ('service_type',)
    search_fields = ('vin', 'unit_number', 'service_type')
    raw_id_fields = ('vehicle',)


@admin.register(VehicleInspection)
class VehicleInspectionAdmin(admin.ModelAdmin):
    list_display = ('vin', 'inspection_type', 'inspection_date', 'inspector_name', 'overall_result')
    list_filter = ('inspection_type', 'overall_result')
    search_fields = ('vin', 'unit_number', 'inspector_name')
    raw_id_fields = ('vehicle',)


@admin.register(VehicleRentalAgreement)
class VehicleRentalAgreementAdmin(admin.ModelAdmin):
    list_display = ('agreement_number', 'invoice_number', 'vin', 'registration_end_date', 'due_date', 'amount')
    search_fields = ('agreement_number', 'invoice_number', 'vin')
    raw_id_fields = ('vehicle',)
