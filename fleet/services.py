"""
FLEET App - Services for Fleet Management

Dashboard KPIs, vehicle detail aggregation, repair search and inspection
comparison.
"""

import logging
from datetime import timedelta
from decimal import Decimal
from typing import Any, Dict, Optional

from django.conf import settings
from django.db.models import Count, Q, Sum
from django.utils import timezone

from .models import (
    Vehicle, VehicleStatus, Ownership, RepairStatus, InspectionResult,
    VehicleRepair, VehicleActivityLog, VehicleInspection, VehicleRentalAgreement,
)

logger = logging.getLogger(__name__)


STATUS_COLORS = (
    (VehicleStatus.ACTIVE, '#10b981'),
    (VehicleStatus.MAINTENANCE, '#f59e0b'),
    (VehicleStatus.GROUNDED, '#ef4444'),
    (VehicleStatus.INACTIVE, '#6b7280'),
)

OWNERSHIP_COLORS = (
    (Ownership.OWNED, '#3b82f6'),
    (Ownership.LEASED, '#8b5cf6'),
    (Ownership.RENTED, '#ec4899'),
)

OPEN_REPAIR_STATUSES = (
    RepairStatus.NOT_STARTED,
    RepairStatus.IN_PROGRESS,
    RepairStatus.WAITING_FOR_PARTS,
    RepairStatus.SENT_TO_SHOP,
)

DEFAULT_REPAIR_LIMIT = 50
MAX_REPAIR_LIMIT = 1000


def _count_by(queryset, field: str) -> Dict[str, int]:
    rows = queryset.values(field).annotate(count=Count('id')).order_by()
    return {row[field]: row['count'] for row in rows}


def vehicle_match(vehicle: Vehicle) -> Q:
    """Records linked by FK, or carrying the vehicle's vin or unit number."""
    match = Q(vehicle=vehicle)
    if vehicle.vin:
        match |= Q(vin=vehicle.vin)
    if vehicle.unit_number:
        match |= Q(unit_number=vehicle.unit_number)
    return match


class FleetService:
    """
    Service for fleet dashboard and per-vehicle aggregation.
    """

    @staticmethod
    def get_dashboard() -> Dict[str, Any]:
        """
        Fleet dashboard summary.

        Returns:
            Dict with kpis, breakdowns and the recent record lists
            (model instances; the view serializes them).
        """
        status_counts = _count_by(Vehicle.objects.all(), 'status')
        ownership_counts = _count_by(Vehicle.objects.all(), 'ownership')

        open_repairs = VehicleRepair.objects.exclude(current_status=RepairStatus.COMPLETED)
        repair_counts = _count_by(open_repairs, 'current_status')

        today = timezone.localdate()
        horizon = today + timedelta(days=getattr(settings, 'FLEET_REGISTRATION_WARNING_DAYS', 30))

        return {
            'kpis': {
                'total_vehicles': sum(status_counts.values()),
                'active_vehicles': status_counts.get(VehicleStatus.ACTIVE, 0),
                'maintenance_vehicles': status_counts.get(VehicleStatus.MAINTENANCE, 0),
                'grounded_vehicles': status_counts.get(VehicleStatus.GROUNDED, 0),
                'inactive_vehicles': status_counts.get(VehicleStatus.INACTIVE, 0),
                'open_repairs': open_repairs.count(),
                'total_inspections': VehicleInspection.objects.count(),
            },
            'status_breakdown': [
                {'name': status.label, 'value': status_counts.get(status, 0), 'color': color}
                for status, color in STATUS_COLORS
            ],
            'ownership_breakdown': [
                {'name': ownership.label, 'value': ownership_counts.get(ownership, 0), 'color': color}
                for ownership, color in OWNERSHIP_COLORS
            ],
            'repair_status_breakdown': [
                {'name': status.label, 'value': repair_counts.get(status, 0)}
                for status in OPEN_REPAIR_STATUSES
            ],
            'open_repairs': open_repairs.order_by('-creation_date'),
            'recent_activity': VehicleActivityLog.objects.order_by('-created_at')[:20],
            'recent_inspections': VehicleInspection.objects.order_by('-inspection_date')[:20],
            'rental_agreements': VehicleRentalAgreement.objects.order_by('-created_at'),
            'upcoming_registrations': VehicleActivityLog.objects.filter(
                registration_expiration__gte=today,
                registration_expiration__lte=horizon,
            ).order_by('registration_expiration'),
        }

    @staticmethod
    def get_vehicle_detail(vehicle: Vehicle) -> Dict[str, Any]:
        """Related records for one vehicle plus summary stats."""
        match = vehicle_match(vehicle)

        repairs = VehicleRepair.objects.filter(match).order_by('-creation_date')
        activity_logs = VehicleActivityLog.objects.filter(match).order_by('-created_at')
        inspections = VehicleInspection.objects.filter(match).order_by('-inspection_date')
        rentals = VehicleRentalAgreement.objects.filter(match).order_by('-created_at')

        completed = repairs.filter(current_status=RepairStatus.COMPLETED).count()
        total_rental_amount = rentals.aggregate(total=Sum('amount'))['total'] or Decimal('0')

        return {
            'repairs': repairs,
            'activity_logs': activity_logs,
            'inspections': inspections,
            'rental_agreements': rentals,
            'stats': {
                'open_repairs': repairs.count() - completed,
                'completed_repairs': completed,
                'total_inspections': inspections.count(),
                'passed_inspections': inspections.filter(overall_result=InspectionResult.PASS).count(),
                'failed_inspections': inspections.filter(overall_result=InspectionResult.FAIL).count(),
                'total_activity_logs': activity_logs.count(),
                'total_rentals': rentals.count(),
                'total_rental_amount': total_rental_amount,
            },
        }

    @staticmethod
    def parse_paging(skip, limit) -> tuple:
        """skip >= 0; limit clamped to 1..1000; garbage falls back to defaults."""
        try:
            skip = max(0, int(skip))
        except (TypeError, ValueError):
            skip = 0
        try:
            limit = min(max(1, int(limit)), MAX_REPAIR_LIMIT)
        except (TypeError, ValueError):
            limit = DEFAULT_REPAIR_LIMIT
        return skip, limit

    @classmethod
    def search_repairs(cls, q: str = '', skip=0, limit=DEFAULT_REPAIR_LIMIT) -> Dict[str, Any]:
        skip, limit = cls.parse_paging(skip, limit)

        queryset = VehicleRepair.objects.order_by('-creation_date')
        q = (q or '').strip()
        if q:
            queryset = queryset.filter(
                Q(vin__icontains=q)
                | Q(description__icontains=q)
                | Q(current_status__icontains=q)
                | Q(unit_number__icontains=q)
            )

        total = queryset.count()
        results = list(queryset[skip:skip + limit])
        return {
            'results': results,
            'total': total,
            'has_more': skip + len(results) < total,
        }

    @staticmethod
    def apply_repair_update(repair: VehicleRepair) -> VehicleRepair:
        """Stamp last_edit_on and fill the duration once the repair is completed."""
        now = timezone.now()
        repair.last_edit_on = now
        if repair.current_status == RepairStatus.COMPLETED and repair.repair_duration is None:
            repair.repair_duration = max(0, (now - repair.creation_date).days)
            logger.info(f"[FLEET] Repair {str(repair.id)[:8]} completed after {repair.repair_duration} days")
        return repair

    @staticmethod
    def compare_inspection(inspection: VehicleInspection) -> Dict[str, Any]:
        """Previous inspection of the same vehicle and the condition fields that changed."""
        previous: Optional[VehicleInspection] = None
        if inspection.vehicle_id or inspection.vin or inspection.unit_number:
            match = Q(vehicle_id=inspection.vehicle_id) if inspection.vehicle_id else Q(pk__in=[])
            if inspection.vin:
                match |= Q(vin=inspection.vin)
            if inspection.unit_number:
                match |= Q(unit_number=inspection.unit_number)
            previous = (
                VehicleInspection.objects.filter(match, inspection_date__lt=inspection.inspection_date)
                .exclude(pk=inspection.pk)
                .order_by('-inspection_date')
                .first()
            )

        changes = []
        if previous is not None:
            for field in VehicleInspection.CONDITION_FIELDS:
                before, after = getattr(previous, field), getattr(inspection, field)
                if before != after:
                    changes.append({'field': field, 'previous': before, 'current': after})

        return {'previous': previous, 'changes': changes}
