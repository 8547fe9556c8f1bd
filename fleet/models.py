"""
FLEET App - Vehicles and their maintenance records

Repairs, activity logs, inspections and rental agreements reference a
vehicle by FK when known; imported records may only carry the vin or unit
number, so lookups match on any of the three.
"""

import uuid
from django.db import models
from django.utils import timezone


class VehicleStatus(models.TextChoices):
    ACTIVE = 'Active', 'Active'
    INACTIVE = 'Inactive', 'Inactive'
    MAINTENANCE = 'Maintenance', 'Maintenance'
    GROUNDED = 'Grounded', 'Grounded'
    DECOMMISSIONED = 'Decommissioned', 'Decommissioned'


class Ownership(models.TextChoices):
    OWNED = 'Owned', 'Owned'
    LEASED = 'Leased', 'Leased'
    RENTED = 'Rented', 'Rented'


class RepairStatus(models.TextChoices):
    NOT_STARTED = 'Not Started', 'Not Started'
    IN_PROGRESS = 'In Progress', 'In Progress'
    WAITING_FOR_PARTS = 'Waiting for Parts', 'Waiting for Parts'
    SENT_TO_SHOP = 'Sent to Repair Shop', 'Sent to Repair Shop'
    COMPLETED = 'Completed', 'Completed'


class InspectionType(models.TextChoices):
    PRE_TRIP = 'Pre-Trip', 'Pre-Trip'
    POST_TRIP = 'Post-Trip', 'Post-Trip'
    MONTHLY = 'Monthly', 'Monthly'
    ANNUAL = 'Annual', 'Annual'
    DOT = 'DOT', 'DOT'
    SAFETY = 'Safety', 'Safety'


class InspectionResult(models.TextChoices):
    PASS = 'Pass', 'Pass'
    FAIL = 'Fail', 'Fail'
    NEEDS_ATTENTION = 'Needs Attention', 'Needs Attention'


class Condition(models.TextChoices):
    GOOD = 'Good', 'Good'
    FAIR = 'Fair', 'Fair'
    POOR = 'Poor', 'Poor'
    NOT_APPLICABLE = 'N/A', 'N/A'


class Vehicle(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    vin = models.CharField(max_length=50, unique=True, verbose_name="VIN")
    vehicle_name = models.CharField(max_length=100, blank=True)
    unit_number = models.CharField(max_length=50, blank=True, db_index=True)
    vehicle_slot_number = models.CharField(max_length=50, blank=True, db_index=True)
    year = models.CharField(max_length=10, blank=True)
    license_plate = models.CharField(max_length=30, blank=True, db_index=True)
    make = models.CharField(max_length=50, blank=True)
    vehicle_model = models.CharField(max_length=50, blank=True)
    status = models.CharField(
        max_length=20, choices=VehicleStatus.choices, default=VehicleStatus.ACTIVE, db_index=True
    )
    ownership = models.CharField(max_length=10, choices=Ownership.choices, default=Ownership.OWNED)
    dashcam = models.CharField(max_length=50, blank=True)
    vehicle_provider = models.CharField(max_length=100, blank=True)
    state = models.CharField(max_length=50, blank=True)
    location = models.CharField(max_length=100, blank=True)
    info = models.TextField(blank=True)
    image = models.URLField(max_length=500, blank=True)
    location_from = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Vehicle"
        verbose_name_plural = "Vehicles"
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.unit_number or self.vehicle_name or 'Vehicle'} ({self.vin})"


class VehicleSlot(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    slot_number = models.CharField(max_length=50, unique=True)
    location = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['slot_number']

    def __str__(self):
        return self.slot_number


class VehicleRecord(models.Model):
    """Fields shared by every per-vehicle record."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    vehicle = models.ForeignKey(Vehicle, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    vin = models.CharField(max_length=50, blank=True, db_index=True, verbose_name="VIN")
    unit_number = models.CharField(max_length=50, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class VehicleRepair(VehicleRecord):
    description = models.TextField(blank=True)
    current_status = models.CharField(
        max_length=30, choices=RepairStatus.choices, default=RepairStatus.NOT_STARTED, db_index=True
    )
    estimated_date = models.DateField(null=True, blank=True)
    image = models.URLField(max_length=500, blank=True)
    creation_date = models.DateTimeField(default=timezone.now)
    last_edit_on = models.DateTimeField(default=timezone.now)
    repair_duration = models.PositiveIntegerField(null=True, blank=True, help_text="Days from creation to completion")

    class Meta:
        verbose_name = "Vehicle repair"
        verbose_name_plural = "Vehicle repairs"
        ordering = ['-creation_date']

    def __str__(self):
        return f"{self.vin or self.unit_number}: {self.current_status}"


class VehicleActivityLog(VehicleRecord):
    service_type = models.CharField(max_length=100, blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    mileage = models.PositiveIntegerField(default=0)
    registration_expiration = models.DateField(null=True, blank=True, db_index=True)
    notes = models.TextField(blank=True)

    class Meta:
        verbose_name = "Vehicle activity log"
        verbose_name_plural = "Vehicle activity logs"
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.vin} {self.service_type}"


class VehicleInspection(VehicleRecord):
    CONDITION_FIELDS = (
        'exterior_condition', 'interior_condition', 'tires_condition',
        'brakes_condition', 'lights_condition', 'fluids_condition',
    )

    inspection_type = models.CharField(
        max_length=20, choices=InspectionType.choices, default=InspectionType.PRE_TRIP, db_index=True
    )
    inspection_date = models.DateTimeField(default=timezone.now)
    inspector_name = models.CharField(max_length=150, blank=True)
    overall_result = models.CharField(max_length=20, choices=InspectionResult.choices, default=InspectionResult.PASS)
    mileage = models.PositiveIntegerField(default=0)
    exterior_condition = models.CharField(max_length=10, choices=Condition.choices, default=Condition.GOOD)
    interior_condition = models.CharField(max_length=10, choices=Condition.choices, default=Condition.GOOD)
    tires_condition = models.CharField(max_length=10, choices=Condition.choices, default=Condition.GOOD)
    brakes_condition = models.CharField(max_length=10, choices=Condition.choices, default=Condition.GOOD)
    lights_condition = models.CharField(max_length=10, choices=Condition.choices, default=Condition.GOOD)
    fluids_condition = models.CharField(max_length=10, choices=Condition.choices, default=Condition.GOOD)
    defects_found = models.TextField(blank=True)
    action_required = models.TextField(blank=True)
    images = models.JSONField(default=list, blank=True)
    notes = models.TextField(blank=True)

    class Meta:
        verbose_name = "Vehicle inspection"
        verbose_name_plural = "Vehicle inspections"
        ordering = ['-inspection_date']

    def __str__(self):
        return f"{self.vin} {self.inspection_type} {self.overall_result}"


class VehicleRentalAgreement(VehicleRecord):
    invoice_number = models.CharField(max_length=100, blank=True)
    agreement_number = models.CharField(max_length=100, blank=True, db_index=True)
    registration_start_date = models.DateField(null=True, blank=True)
    registration_end_date = models.DateField(null=True, blank=True, db_index=True)
    due_date = models.DateField(null=True, blank=True)
    amount = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    file_urls = models.JSONField(default=list, blank=True)

    class Meta:
        verbose_name = "Vehicle rental agreement"
        verbose_name_plural = "Vehicle rental agreements"
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.agreement_number or self.invoice_number} ({self.vin})"
