"""
MESSAGING App - OpenPhone client, recipients and message personalization

Flow:
1. The panel lists recipients for a tab (employees + the week's shifts)
2. The template is personalized per recipient ({name}, {startTime}...)
3. Each SMS goes out through OpenPhone and is logged in MessageLog
4. OpenPhone calls the webhook when a message is delivered or answered
"""

import logging
import re
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

import requests
from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from hr.models import (
    Employee, EmployeeSchedule, EmployeeStatus, ScheduleChannel, ScheduleMessageStatus, MessageStatus,
)
from scorecard.weeks import DAY_NAMES, date_to_week, week_range
from .models import MessageLog, MessageLogStatus, TemplateType

logger = logging.getLogger(__name__)


NON_WORKING_TYPES = {'off', 'close', 'request off', ''}

# Message type → schedule channel tracked on ScheduleMessageStatus
CHANNEL_BY_MESSAGE_TYPE = {
    TemplateType.FUTURE_SHIFT: ScheduleChannel.FUTURE_SHIFT,
    TemplateType.SHIFT: ScheduleChannel.SHIFT_NOTIFICATION,
    TemplateType.OFF_TOMORROW: ScheduleChannel.OFF_TODAY_SCHEDULE_TOM,
    TemplateType.WEEK_SCHEDULE: ScheduleChannel.WEEK_SCHEDULE,
    TemplateType.ROUTE_ITINERARY: ScheduleChannel.ROUTE_ITINERARY,
}

TIME_RE = re.compile(r'(\d{1,2}):(\d{2})\s*(AM|PM)?', re.IGNORECASE)


class OpenPhoneNotConfigured(Exception):
    """OPENPHONE_API_KEY is missing."""


# ===========================================
# OPENPHONE CLIENT
# ===========================================

class OpenPhoneService:
    """
    OpenPhone SMS API client.

    API: https://api.openphone.com/v1
    Auth header: Authorization: <API key> (no Bearer prefix)
    """

    @classmethod
    def _get_config(cls):
        return {
            'base_url': getattr(settings, 'OPENPHONE_API_URL', 'https://api.openphone.com/v1').rstrip('/'),
            'api_key': getattr(settings, 'OPENPHONE_API_KEY', ''),
            'default_from': getattr(settings, 'OPENPHONE_DEFAULT_FROM', ''),
            'timeout': getattr(settings, 'OPENPHONE_TIMEOUT', 15),
        }

    @classmethod
    def is_configured(cls) -> bool:
        return bool(cls._get_config()['api_key'])

    @classmethod
    def _headers(cls, api_key: str) -> dict:
        return {'Authorization': api_key, 'Content-Type': 'application/json'}

    @classmethod
    def send_message(cls, to: str, content: str, from_number: Optional[str] = None) -> dict:
        """
        Send one SMS.

        Returns:
            {'success': True, 'data': {...}, 'request': {...}} or
            {'success': False, 'error': str, 'request': {...}, 'response': {...}}
        """
        config = cls._get_config()
        if not config['api_key']:
            raise OpenPhoneNotConfigured("OpenPhone API key not configured")

        payload = {'content': content, 'to': [to]}
        sender = from_number or config['default_from']
        if sender:
            payload['from'] = sender

        try:
            response = requests.post(
                f"{config['base_url']}/messages",
                json=payload,
                headers=cls._headers(config['api_key']),
                timeout=config['timeout'],
            )
        except requests.RequestException as e:
            logger.error(f"[OPENPHONE] Network error sending to {to[:6]}...: {e}")
            return {'success': False, 'error': str(e) or 'Network error', 'request': payload, 'response': None}

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok:
            error = body.get('message') or body.get('error') or f"HTTP {response.status_code}"
            logger.error(f"[OPENPHONE] Send failed to {to[:6]}...: {error}")
            return {'success': False, 'error': error, 'request': payload, 'response': body}

        logger.info(f"[OPENPHONE] Message sent to {to[:6]}...")
        return {'success': True, 'data': body.get('data') or {}, 'request': payload, 'response': body}

    @classmethod
    def list_phone_numbers(cls) -> tuple:
        """
        Proxy GET /phone-numbers.

        Returns (status_code, body).
        """
        config = cls._get_config()
        if not config['api_key']:
            raise OpenPhoneNotConfigured("OpenPhone API key not configured")

        try:
            response = requests.get(
                f"{config['base_url']}/phone-numbers",
                headers=cls._headers(config['api_key']),
                timeout=config['timeout'],
            )
        except requests.RequestException as e:
            logger.error(f"[OPENPHONE] Phone numbers request failed: {e}")
            return 502, {'error': str(e)}

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok:
            error = body.get('message') or f"Failed to fetch phone numbers: HTTP {response.status_code}"
            return response.status_code, {'error': error}
        return 200, body


# ===========================================
# PERSONALIZATION
# ===========================================

def is_working(schedule) -> bool:
    return (schedule.type or '').strip().lower() not in NON_WORKING_TYPES


def add_minutes(time_text: str, minutes: int) -> str:
    """Shift "10:35", "10:35 AM" or "1:00 PM" by `minutes`, keeping the format."""
    if not time_text:
        return ''
    match = TIME_RE.search(time_text.strip())
    if not match:
        return time_text

    hours, mins = int(match.group(1)), int(match.group(2))
    meridiem = (match.group(3) or '').upper()
    if meridiem == 'PM' and hours != 12:
        hours += 12
    if meridiem == 'AM' and hours == 12:
        hours = 0

    total = (hours * 60 + mins + minutes) % (24 * 60)
    hours, mins = divmod(total, 60)

    if meridiem:
        display_hour = hours % 12 or 12
        return f"{display_hour}:{mins:02d} {'PM' if hours >= 12 else 'AM'}"
    return f"{hours}:{mins:02d}"


def day_name(value: date) -> str:
    return DAY_NAMES[(value.weekday() + 1) % 7]


def personalize(template: str, name: str, shift=None) -> str:
    """Fill {name}, {startTime}, {standupTime}, {date} and {dayOfWeek}, case-insensitively."""
    start_time = getattr(shift, 'start_time', '') or ''
    shift_date = getattr(shift, 'date', None)
    values = {
        'name': name or '',
        'starttime': start_time,
        'standuptime': add_minutes(start_time, 5) if start_time else '',
        'date': shift_date.strftime('%m/%d/%Y') if shift_date else '',
        'dayofweek': day_name(shift_date) if shift_date else getattr(shift, 'week_day', '') or '',
    }
    pattern = re.compile(r'\{(name|startTime|standupTime|date|dayOfWeek)\}', re.IGNORECASE)
    return pattern.sub(lambda m: values[m.group(1).lower()], template or '')


def normalize_phone(phone: str) -> str:
    phone = (phone or '').strip()
    if phone.startswith('+'):
        return phone
    return '+1' + re.sub(r'\D', '', phone)


# ===========================================
# RECIPIENTS
# ===========================================

class RecipientService:
    """Active employees with a phone number, merged with their shifts."""

    @staticmethod
    def scope_dates(tab: str, day: date) -> Optional[set]:
        """Dates whose shifts personalize the message; None means the whole week."""
        if tab in (TemplateType.SHIFT, TemplateType.ROUTE_ITINERARY):
            return {day}
        if tab == TemplateType.OFF_TOMORROW:
            return {day + timedelta(days=1)}
        return None

    @staticmethod
    def include(tab: str, schedules: List, day: date) -> bool:
        by_date = {s.date: s for s in schedules}
        if tab == TemplateType.FUTURE_SHIFT:
            return any(is_working(s) for s in schedules)
        if tab in (TemplateType.SHIFT, TemplateType.ROUTE_ITINERARY):
            today = by_date.get(day)
            return bool(today and is_working(today))
        if tab == TemplateType.OFF_TOMORROW:
            today = by_date.get(day)
            tomorrow = by_date.get(day + timedelta(days=1))
            return (today is None or not is_working(today)) and bool(tomorrow and is_working(tomorrow))
        return True

    @classmethod
    def first_shift(cls, tab: str, schedules: List, day: date):
        scope = cls.scope_dates(tab, day)
        week = date_to_week(day)
        for schedule in schedules:
            in_scope = schedule.date in scope if scope is not None else schedule.year_week == week
            if in_scope and is_working(schedule):
                return schedule
        return None

    @classmethod
    def for_tab(cls, tab: Optional[str] = None, day: Optional[date] = None) -> List[Dict[str, Any]]:
        day = day or timezone.localdate()
        sunday, saturday = week_range(date_to_week(day))
        last_day = max(saturday, day + timedelta(days=1))

        employees = (
            Employee.objects
            .filter(status=EmployeeStatus.ACTIVE)
            .exclude(phone_number='')
            .order_by('first_name', 'last_name')
        )
        schedules_by_transporter: Dict[str, List] = {}
        rows = EmployeeSchedule.objects.filter(date__range=(sunday, last_day)).order_by('date')
        for schedule in rows:
            schedules_by_transporter.setdefault(schedule.transporter_id, []).append(schedule)

        recipients = []
        for employee in employees:
            schedules = schedules_by_transporter.get(employee.transporter_id, []) if employee.transporter_id else []
            if tab and not cls.include(tab, schedules, day):
                continue
            shift = cls.first_shift(tab, schedules, day)
            recipients.append({
                'id': str(employee.id),
                'transporter_id': employee.transporter_id,
                'name': employee.full_name.upper(),
                'phone': normalize_phone(employee.phone_number),
                'type': employee.type,
                'shift': {
                    'schedule_id': str(shift.id),
                    'date': shift.date.isoformat(),
                    'week_day': shift.week_day,
                    'type': shift.type,
                    'start_time': shift.start_time,
                } if shift else None,
                'schedules': [
                    {
                        'id': str(s.id),
                        'date': s.date.isoformat(),
                        'week_day': s.week_day,
                        'type': s.type,
                        'start_time': s.start_time,
                        'van': s.van,
                    }
                    for s in schedules if s.year_week == date_to_week(day)
                ],
            })
        return recipients


# ===========================================
# SENDING
# ===========================================

def record_schedule_status(schedule_ids, message_type: str, status: str, message_log=None, created_by='system'):
    channel = CHANNEL_BY_MESSAGE_TYPE.get(message_type)
    if not channel:
        return 0
    schedules = EmployeeSchedule.objects.filter(id__in=[s for s in schedule_ids if s])
    created = 0
    for schedule in schedules:
        ScheduleMessageStatus.objects.create(
            schedule=schedule,
            channel=channel,
            status=status,
            created_by=created_by,
            message_log=message_log,
        )
        created += 1
    return created


class MessagingService:

    @staticmethod
    def fallback_shifts(recipients: List[Dict[str, Any]], message_type: str, day: date) -> Dict[str, Any]:
        """First working shift in the tab's scope, keyed by normalized phone."""
        phones = {normalize_phone(r['phone']) for r in recipients}
        employees = {}
        for employee in Employee.objects.filter(status=EmployeeStatus.ACTIVE).exclude(transporter_id=''):
            phone = normalize_phone(employee.phone_number) if employee.phone_number else ''
            if phone in phones:
                employees.setdefault(phone, employee)
        if not employees:
            return {}

        sunday, saturday = week_range(date_to_week(day))
        rows = EmployeeSchedule.objects.filter(
            transporter_id__in=[e.transporter_id for e in employees.values()],
            date__range=(sunday, max(saturday, day + timedelta(days=1))),
        ).order_by('date')
        by_transporter: Dict[str, List] = {}
        for schedule in rows:
            by_transporter.setdefault(schedule.transporter_id, []).append(schedule)

        shifts = {}
        for phone, employee in employees.items():
            shift = RecipientService.first_shift(message_type, by_transporter.get(employee.transporter_id, []), day)
            if shift is not None:
                shifts[phone] = shift
        return shifts

    @classmethod
    def send_batch(cls, recipients: List[Dict[str, Any]], message: str, message_type: str,
                   from_number: Optional[str] = None, sender_email: str = 'system',
                   day: Optional[date] = None) -> Dict[str, Any]:
        """
        Personalize and send `message` to each recipient.

        A recipient without a known `schedule_id` is personalized from their
        first working shift in scope. Each attempt is logged; a failed
        recipient never stops the batch.
        """
        schedule_map = {
            str(s.id): s
            for s in EmployeeSchedule.objects.filter(
                id__in=[r['schedule_id'] for r in recipients if r.get('schedule_id')]
            )
        }
        unmatched = [r for r in recipients if str(r.get('schedule_id') or '') not in schedule_map]
        fallback = cls.fallback_shifts(unmatched, message_type, day or timezone.localdate()) if unmatched else {}

        results = []
        for recipient in recipients:
            phone = normalize_phone(recipient['phone'])
            name = recipient.get('name') or ''
            shift = schedule_map.get(str(recipient['schedule_id'])) if recipient.get('schedule_id') else None
            if shift is None:
                shift = fallback.get(phone)
            content = personalize(message, name, shift)

            outcome = OpenPhoneService.send_message(phone, content, from_number)
            data = outcome.get('data') or {}
            log = MessageLog.objects.create(
                openphone_message_id=data.get('id') or '',
                from_number=data.get('from') or from_number or '',
                from_display=data.get('from') or from_number or '',
                to_number=phone,
                recipient_name=name,
                message_type=message_type,
                content=content,
                status=MessageLogStatus.SENT if outcome['success'] else MessageLogStatus.FAILED,
                error_message=outcome.get('error') or '',
                request_payload=outcome.get('request'),
                response_payload=outcome.get('response'),
            )

            if outcome['success'] and shift is not None:
                record_schedule_status([shift.id], message_type, MessageStatus.SENT, log, sender_email)

            results.append({
                'to': phone,
                'name': name,
                'success': outcome['success'],
                'error': outcome.get('error'),
            })

        sent = sum(1 for r in results if r['success'])
        summary = {'sent': sent, 'failed': len(results) - sent, 'total': len(results)}
        logger.info(f"[MESSAGING] {message_type}: {summary['sent']}/{summary['total']} sent")
        return {'results': results, 'summary': summary}


# ===========================================
# WEBHOOK
# ===========================================

def _first(value):
    if isinstance(value, list):
        return value[0] if value else ''
    return value or ''


def _timestamp(value):
    parsed = parse_datetime(value) if isinstance(value, str) else None
    return parsed or timezone.now()


class WebhookService:
    """OpenPhone webhook events: message.delivered and message.received."""

    @classmethod
    def handle(cls, body: Dict[str, Any]) -> Dict[str, Any]:
        event_type = body.get('type') or ''
        data = (body.get('data') or {})
        data = data.get('object') or data

        if event_type == 'message.delivered':
            cls.delivered(body, data)
            return {'ok': True, 'event': event_type}
        if event_type == 'message.received':
            cls.received(body, data)
            return {'ok': True, 'event': event_type}

        logger.info(f"[WEBHOOK] Unhandled event type: {event_type}")
        return {'ok': True, 'event': event_type, 'handled': False}

    @staticmethod
    def _linked_schedules(log):
        return list(log.schedule_statuses.order_by().values_list('schedule_id', flat=True).distinct())

    @classmethod
    def delivered(cls, body, data):
        message_id = data.get('id') or ''
        if not message_id:
            return None
        delivered_at = _timestamp(data.get('deliveredAt'))

        log = MessageLog.objects.filter(openphone_message_id=message_id).first()
        if log is None:
            logger.warning(f"[WEBHOOK] No log for delivered message {message_id}, creating stub")
            return MessageLog.objects.create(
                openphone_message_id=message_id,
                from_number=_first(data.get('from')),
                from_display=_first(data.get('from')),
                to_number=_first(data.get('to')),
                message_type='unknown',
                content=data.get('content') or '',
                status=MessageLogStatus.DELIVERED,
                delivered_at=delivered_at,
                delivery_webhook_payload=body,
            )

        log.status = MessageLogStatus.DELIVERED
        log.delivered_at = delivered_at
        log.delivery_webhook_payload = body
        log.save(update_fields=['status', 'delivered_at', 'delivery_webhook_payload', 'updated_at'])
        record_schedule_status(cls._linked_schedules(log), log.message_type, MessageStatus.DELIVERED, log)
        logger.info(f"[WEBHOOK] Message {message_id} delivered")
        return log

    @classmethod
    def received(cls, body, data):
        sender = _first(data.get('from'))
        if not sender:
            return None
        content = data.get('content') or data.get('text') or ''
        received_at = _timestamp(data.get('createdAt'))

        log = (
            MessageLog.objects
            .filter(to_number=sender, status__in=[MessageLogStatus.SENT, MessageLogStatus.DELIVERED])
            .order_by('-sent_at')
            .first()
        )
        if log is None:
            line = _first(data.get('to')) or data.get('phoneNumberId') or ''
            logger.info(f"[WEBHOOK] Inbound message from {sender[:6]}... with no prior log")
            return MessageLog.objects.create(
                openphone_message_id=data.get('id') or '',
                from_number=line,
                from_display=line,
                to_number=sender,
                message_type='inbound',
                content=content,
                status=MessageLogStatus.RECEIVED_REPLY,
                reply_at=received_at,
                reply_content=content,
                reply_webhook_payload=body,
            )

        log.status = MessageLogStatus.RECEIVED_REPLY
        log.reply_at = received_at
        log.reply_content = content
        log.reply_webhook_payload = body
        log.save(update_fields=['status', 'reply_at', 'reply_content', 'reply_webhook_payload', 'updated_at'])
        record_schedule_status(cls._linked_schedules(log), log.message_type, MessageStatus.RECEIVED, log)
        logger.info(f"[WEBHOOK] Reply recorded on log {log.id}")
        return log
