"""
HR App - Services for employee imports and weekly schedules

Provides:
- EmployeeImporter: upsert employees from spreadsheet rows (keyed by email)
- ScheduleService: weekly schedule grid and default week generation
- ConfirmationService: public confirm / change-request links
"""

import logging
import re
from datetime import timedelta
from typing import Any, Dict, Iterable, List, Optional

from django.conf import settings
from django.db import models, transaction
from django.utils import timezone

from messaging.models import MessageLogStatus, TemplateType
from messaging.services import record_schedule_status
from scorecard.models import AvailableWeek
from scorecard.weeks import DAY_NAMES, next_week, parse_date, week_dates
from .models import (
    ConfirmationStatus, Employee, EmployeeSchedule, EmployeeStatus, MessageStatus, ScheduleConfirmation,
)

logger = logging.getLogger(__name__)

TRUE_VALUES = {'true', 'yes', '1'}


def normalize_header(value: str) -> str:
    """'First Name', 'firstName' and 'first_name' all become 'firstname'."""
    return re.sub(r'[^a-z0-9]', '', str(value or '').lower())


# ===========================================
# EMPLOYEE IMPORT
# ===========================================

class EmployeeImporter:
    """
    Upsert employees from CSV rows.

    Each value is coerced according to the target model field:
    booleans accept true/yes/1, dates are normalized (invalid ones
    ignored), numbers are parsed as floats (empty ones skipped) and
    everything else is stored as a string.
    """

    ALIASES = {
        'address': 'street_address',
        'zip': 'zip_code',
        'phone': 'phone_number',
        'dateofbirth': 'dob',
        'hiredate': 'hired_date',
        'defaultvan': 'default_van_1',
    }

    IGNORED_FIELDS = {'id', 'created_at', 'updated_at'}

    def __init__(self):
        self.fields = {
            normalize_header(field.name): field
            for field in Employee._meta.concrete_fields
            if field.name not in self.IGNORED_FIELDS
        }
        for alias, field_name in self.ALIASES.items():
            self.fields.setdefault(normalize_header(alias), Employee._meta.get_field(field_name))

    def resolve_field(self, header: str) -> Optional[models.Field]:
        return self.fields.get(normalize_header(header))

    @staticmethod
    def coerce(field: models.Field, value: Any):
        """Return the coerced value, or None when the value must be skipped."""
        if isinstance(field, models.BooleanField):
            return str(value if value is not None else '').strip().lower() in TRUE_VALUES

        if isinstance(field, models.DateField):
            return parse_date(value)

        if isinstance(field, (models.FloatField, models.IntegerField, models.DecimalField)):
            text = str(value if value is not None else '').strip()
            if not text:
                return None
            try:
                number = float(text.replace(',', ''))
            except ValueError:
                return None
            return int(number) if isinstance(field, models.IntegerField) else number

        if value is None:
            return None
        return str(value).strip()

    def build_values(self, row: Dict[str, Any]) -> Dict[str, Any]:
        values = {}
        for header, raw in row.items():
            field = self.resolve_field(header)
            if field is None:
                continue
            value = self.coerce(field, raw)
            if value is None:
                continue
            values[field.name] = value
        return values

    @transaction.atomic
    def run(self, rows: Iterable[Dict[str, Any]]) -> Dict[str, int]:
        count = 0
        matched = 0
        skipped = 0

        for row in rows:
            values = self.build_values(row)
            email = (values.pop('email', '') or '').lower()
            if not email:
                skipped += 1
                continue

            employee = Employee.objects.filter(email__iexact=email).first()
            if employee is None:
                Employee.objects.create(email=email, **values)
            else:
                matched += 1
                for field_name, value in values.items():
                    setattr(employee, field_name, value)
                employee.save()
            count += 1

        logger.info(f"[HR IMPORT] {count} employees written ({matched} matched, {skipped} skipped)")
        return {'count': count, 'matched': matched, 'skipped': skipped}


# ===========================================
# SCHEDULES
# ===========================================

class ScheduleService:
    """Weekly schedule grid and generation of default weeks."""

    @staticmethod
    def available_weeks() -> List[str]:
        weeks = EmployeeSchedule.objects.values_list('year_week', flat=True).distinct()
        return sorted(set(weeks), reverse=True)

    @staticmethod
    def week_grid(year_week: str) -> Dict[str, Any]:
        """Group a week's schedule rows by transporter, keyed by day index (0 = Sunday)."""
        schedules = list(EmployeeSchedule.objects.filter(year_week=year_week).order_by('date'))
        transporter_ids = {s.transporter_id for s in schedules}
        employees = {
            e.transporter_id: e
            for e in Employee.objects.filter(transporter_id__in=transporter_ids)
        }

        grouped: Dict[str, Dict[str, Any]] = {}
        for schedule in schedules:
            entry = grouped.get(schedule.transporter_id)
            if entry is None:
                employee = employees.get(schedule.transporter_id)
                entry = grouped[schedule.transporter_id] = {
                    'transporter_id': schedule.transporter_id,
                    'employee': {
                        'id': str(employee.id),
                        'first_name': employee.first_name,
                        'last_name': employee.last_name,
                        'name': employee.full_name.upper(),
                        'type': employee.type,
                        'status': employee.status,
                        'schedule_notes': employee.schedule_notes,
                    } if employee else None,
                    'days': {},
                }
            day_index = (schedule.date.weekday() + 1) % 7
            entry['days'][day_index] = {
                'id': str(schedule.id),
                'date': schedule.date.isoformat(),
                'week_day': schedule.week_day,
                'status': schedule.status,
                'type': schedule.type,
                'sub_type': schedule.sub_type,
                'training_day': schedule.training_day,
                'start_time': schedule.start_time,
                'day_before_confirmation': schedule.day_before_confirmation,
                'day_of_confirmation': schedule.day_of_confirmation,
                'week_confirmation': schedule.week_confirmation,
                'van': schedule.van,
                'note': schedule.note,
            }

        dates = [d.isoformat() for d in week_dates(year_week)] if schedules else []
        return {
            'year_week': year_week,
            'dates': dates,
            'employees': list(grouped.values()),
            'total_employees': len(grouped),
        }

    @staticmethod
    @transaction.atomic
    def generate_week(year_week: Optional[str] = None) -> Dict[str, Any]:
        """
        Create default "Off" rows for every active employee with a
        transporter id. Existing rows are left untouched.

        Raises:
            ValueError: no week could be determined or no active employees
        """
        if not year_week:
            latest = AvailableWeek.objects.order_by('-week').first()
            if latest is None:
                raise ValueError("No existing weeks found")
            year_week = next_week(latest.week)

        dates = week_dates(year_week)

        employees = list(
            Employee.objects.filter(status=EmployeeStatus.ACTIVE).exclude(transporter_id='')
        )
        if not employees:
            raise ValueError("No active employees found")

        created = 0
        for employee in employees:
            for day_index, day in enumerate(dates):
                _, was_created = EmployeeSchedule.objects.get_or_create(
                    transporter_id=employee.transporter_id,
                    date=day,
                    defaults={
                        'employee': employee,
                        'week_day': DAY_NAMES[day_index],
                        'year_week': year_week,
                        'status': 'Off',
                        'type': 'Off',
                    }
                )
                created += int(was_created)

        AvailableWeek.objects.get_or_create(week=year_week)
        logger.info(f"[SCHEDULES] Generated {year_week}: {created} rows for {len(employees)} employees")

        return {
            'year_week': year_week,
            'created': created,
            'employees': len(employees),
            'days': 7,
            'already_exists': created == 0,
        }


# ===========================================
# CONFIRMATION LINKS
# ===========================================

class ConfirmationService:
    """Driver-facing confirm / change-request links for schedule rows."""

    CONFIRM = 'confirm'
    CHANGE_REQUEST = 'change_request'

    # Message type -> schedule column holding the driver's answer
    FIELD_BY_MESSAGE_TYPE = {
        TemplateType.FUTURE_SHIFT: 'day_before_confirmation',
        TemplateType.OFF_TOMORROW: 'day_before_confirmation',
        TemplateType.SHIFT: 'day_of_confirmation',
        TemplateType.ROUTE_ITINERARY: 'day_of_confirmation',
        TemplateType.WEEK_SCHEDULE: 'week_confirmation',
    }

    @staticmethod
    def create_link(schedule: EmployeeSchedule, message_type: str, message_log=None,
                    ttl_hours: Optional[int] = None) -> ScheduleConfirmation:
        hours = ttl_hours if ttl_hours is not None else settings.SCHEDULE_CONFIRMATION_TTL_HOURS
        confirmation = ScheduleConfirmation.objects.create(
            schedule=schedule,
            message_type=message_type,
            message_log=message_log,
            expires_at=timezone.now() + timedelta(hours=hours),
        )
        logger.info(f"[CONFIRM] Link for {schedule.transporter_id} {schedule.date} ({message_type})")
        return confirmation

    @staticmethod
    def describe(confirmation: ScheduleConfirmation) -> Dict[str, Any]:
        """What the public confirmation page shows."""
        schedule = confirmation.schedule
        employee = schedule.employee
        return {
            'token': confirmation.token,
            'employee_name': employee.full_name if employee else '',
            'status': confirmation.status,
            'year_week': schedule.year_week,
            'message_type': confirmation.message_type,
            'schedule_date': schedule.date.isoformat(),
            'confirmed_at': confirmation.confirmed_at,
            'change_requested_at': confirmation.change_requested_at,
            'change_remarks': confirmation.change_remarks,
            'expires_at': confirmation.expires_at,
            'schedule': {
                'date': schedule.date.isoformat(),
                'week_day': schedule.week_day,
                'type': schedule.type,
                'start_time': schedule.start_time,
                'van': schedule.van,
            },
        }

    @classmethod
    @transaction.atomic
    def respond(cls, confirmation: ScheduleConfirmation, action: str, remarks: str = '') -> str:
        """
        Apply the driver's answer to the link, its schedule row and the SMS log.

        Raises:
            ValueError: unknown action
        """
        now = timezone.now()
        if action == cls.CONFIRM:
            confirmation.status = ConfirmationStatus.CONFIRMED
            confirmation.confirmed_at = now
            answer = 'Confirmed'
            reply = '✅ Confirmed via link'
        elif action == cls.CHANGE_REQUEST:
            confirmation.status = ConfirmationStatus.CHANGE_REQUESTED
            confirmation.change_requested_at = now
            confirmation.change_remarks = remarks or ''
            answer = 'Change Requested'
            reply = f"🔄 Change Requested: {remarks or 'No remarks'}"
        else:
            raise ValueError(f"Invalid action '{action}'")
        confirmation.save()

        schedule = confirmation.schedule
        field = cls.FIELD_BY_MESSAGE_TYPE.get(confirmation.message_type, 'day_of_confirmation')
        setattr(schedule, field, answer)
        schedule.save(update_fields=[field, 'updated_at'])

        log = confirmation.message_log
        if log is not None:
            log.status = MessageLogStatus.RECEIVED_REPLY
            log.reply_content = reply
            log.reply_at = now
            log.save(update_fields=['status', 'reply_content', 'reply_at', 'updated_at'])
        record_schedule_status([schedule.id], confirmation.message_type, MessageStatus.RECEIVED, log)

        logger.info(f"[CONFIRM] {schedule.transporter_id} {schedule.date}: {answer}")
        return confirmation.status
