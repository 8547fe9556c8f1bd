"""
SCORECARD App - Weekly CSV import pipeline

Each import type maps spreadsheet columns onto one weekly model and
upserts rows by the model's natural key, in batches.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

from django.conf import settings
from django.db import models, transaction

from hr.models import Employee
from .models import (
    AvailableWeek, DeliveryExcellence, PhotoOnDelivery, CustomerDeliveryFeedback,
    DVICInspection, SafetyEvent, CDFNegative, QualityDSBDNR, DeliveryCompletion,
    ReturnToStation,
)
from .weeks import is_valid_week, date_to_week, detect_week_from_rows, extract_week_from_filename, parse_date

logger = logging.getLogger(__name__)


class ImportFormatError(ValueError):
    """Raised for an unknown import type or an unusable week."""


def normalize_header(value: str) -> str:
    return re.sub(r'[^a-z0-9]', '', str(value or '').lower())


class ExportType:
    """How one export type maps onto its model."""

    SKIPPED_FIELDS = {'id', 'week', 'employee', 'created_at', 'updated_at'}

    def __init__(self, model, key_fields: Sequence[str], aliases: Optional[Dict[str, str]] = None,
                 week_date_field: Optional[str] = None):
        self.model = model
        self.key_fields = tuple(key_fields)
        self.week_date_field = week_date_field
        self.columns = {
            normalize_header(field.name): field
            for field in model._meta.concrete_fields
            if field.name not in self.SKIPPED_FIELDS
        }
        for alias, field_name in (aliases or {}).items():
            self.columns[normalize_header(alias)] = model._meta.get_field(field_name)

    def resolve(self, header: str) -> Optional[models.Field]:
        return self.columns.get(normalize_header(header))


EXPORT_TYPES: Dict[str, ExportType] = {
    'delivery-excellence': ExportType(
        DeliveryExcellence, ['transporter_id'],
        aliases={'Transporter': 'transporter_id', 'Name': 'delivery_associate', 'DSB DPMO': 'dsb'},
    ),
    'import-pod': ExportType(
        PhotoOnDelivery, ['transporter_id'],
        aliases={'Human in Picture': 'human_in_the_picture'},
    ),
    'customer-delivery-feedback': ExportType(
        CustomerDeliveryFeedback, ['transporter_id'],
        aliases={'Negative Feedback': 'negative_feedback_count'},
    ),
    'dvic-vehicle-inspection': ExportType(
        DVICInspection, ['transporter_id', 'vin', 'start_time'],
        aliases={'Inspection Duration': 'duration'},
        week_date_field='start_date',
    ),
    'safety-dashboard-dfo2': ExportType(
        SafetyEvent, ['transporter_id', 'event_id'],
        aliases={'Event Date': 'date', 'Metric Sub Type': 'metric_subtype'},
    ),
    'quality-dsb-dnr': ExportType(
        QualityDSBDNR, ['transporter_id'],
        aliases={
            'DSB': 'dsb_count',
            'Delivered > 50m': 'delivered_over_50m',
            'Delivered 50m': 'delivered_over_50m',
            'SNDNR': 'scanned_not_delivered_not_returned',
        },
    ),
    'quality-dcr': ExportType(
        DeliveryCompletion, ['transporter_id'],
        aliases={'Packages Returned to Station DA Controllable': 'packages_returned_da_controllable'},
    ),
    'cdf-negative': ExportType(
        CDFNegative, ['delivery_associate', 'tracking_id'],
    ),
    'rts': ExportType(
        ReturnToStation, ['transporter_id', 'tracking_id'],
    ),
}


def coerce_value(field: models.Field, value: Any):
    """Coerce a CSV cell for a model field; None means "leave unset"."""
    if value is None:
        return None
    text = str(value).strip()

    if isinstance(field, (models.FloatField, models.IntegerField)):
        if not text or text in ('-', 'N/A', 'n/a'):
            return None
        try:
            number = float(text.replace('%', '').replace(',', ''))
        except ValueError:
            return None
        return int(number) if isinstance(field, models.IntegerField) else number

    if isinstance(field, models.BooleanField):
        return text.lower() in ('true', 'yes', '1')

    return text


class ScorecardImporter:
    """
    Upsert one export into its weekly collection.

    Usage:
        ScorecardImporter('import-pod').run(rows, week='2026-W07')
    """

    def __init__(self, import_type: str):
        export_type = EXPORT_TYPES.get(import_type)
        if export_type is None:
            raise ImportFormatError(f"Unknown import type: {import_type}")
        self.import_type = import_type
        self.export_type = export_type
        self.batch_size = getattr(settings, 'SCORECARD_IMPORT_BATCH_SIZE', 50)

    @staticmethod
    def resolve_week(rows: List[Dict[str, Any]], week: Optional[str] = None,
                     filename: Optional[str] = None) -> str:
        """Supplied week first, then the file name, then the first date column."""
        if week:
            if not is_valid_week(week):
                raise ImportFormatError(f"Invalid week format: {week} (expected YYYY-Www)")
            return week

        detected = extract_week_from_filename(filename or '') or detect_week_from_rows(rows)
        if not detected:
            raise ImportFormatError("Could not detect the week; pass it explicitly.")
        return detected

    def build_values(self, row: Dict[str, Any]) -> Dict[str, Any]:
        values = {}
        for header, raw in row.items():
            field = self.export_type.resolve(header)
            if field is None:
                continue
            value = coerce_value(field, raw)
            if value is None:
                continue
            values[field.name] = value
        return values

    def _row_week(self, values: Dict[str, Any], week: str) -> str:
        if not self.export_type.week_date_field:
            return week
        start = parse_date(values.get(self.export_type.week_date_field))
        if start is None:
            return week
        values[self.export_type.week_date_field] = start.isoformat()
        return date_to_week(start)

    def run(self, rows: Iterable[Dict[str, Any]], week: Optional[str] = None,
            filename: Optional[str] = None) -> Dict[str, Any]:
        rows = list(rows)
        week = self.resolve_week(rows, week, filename)

        employees = dict(
            Employee.objects.exclude(transporter_id='').values_list('transporter_id', 'id')
        )

        inserted = updated = skipped = 0
        weeks_seen = {week}

        for start in range(0, len(rows), self.batch_size):
            batch = rows[start:start + self.batch_size]
            with transaction.atomic():
                for row in batch:
                    values = self.build_values(row)
                    row_week = self._row_week(values, week)

                    key = {field: values.pop(field, '') for field in self.export_type.key_fields}
                    if not all(key.values()):
                        skipped += 1
                        continue
                    key['week'] = row_week
                    weeks_seen.add(row_week)

                    transporter_id = key.get('transporter_id') or values.get('transporter_id')
                    if transporter_id and transporter_id in employees:
                        values['employee_id'] = employees[transporter_id]

                    _, created = self.export_type.model.objects.update_or_create(defaults=values, **key)
                    if created:
                        inserted += 1
                    else:
                        updated += 1

        for seen in weeks_seen:
            AvailableWeek.objects.get_or_create(week=seen)

        logger.info(
            f"[SCORECARD IMPORT] {self.import_type} {week}: "
            f"{inserted} inserted, {updated} updated, {skipped} skipped"
        )
        return {
            'type': self.import_type,
            'week': week,
            'inserted': inserted,
            'updated': updated,
            'skipped': skipped,
            'total': len(rows),
        }
