"""
SYMX Messaging Tests
=====================

Tests for:
1. Personalization placeholders and stand-up time
2. Recipient filtering per messaging tab
3. Sending through OpenPhone (logs, schedule statuses, async)
4. OpenPhone webhook (delivered, reply, stub logs)
5. Template upsert
6. Message log listing (filters, newest first)
"""

from datetime import date, timedelta
from unittest.mock import patch, MagicMock

import requests
from django.test import TestCase, override_settings
from django.utils import timezone
from rest_framework.test import APIClient

from core.models import AppUser
from hr.models import Employee, EmployeeSchedule, ScheduleMessageStatus
from messaging.models import MessageLog, MessagingTemplate
from messaging.services import (
    add_minutes, personalize, normalize_phone, MessagingService, RecipientService, WebhookService,
)

TUESDAY = date(2026, 2, 10)


def openphone_response(ok=True, status_code=202, body=None):
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.json.return_value = body if body is not None else {'data': {'id': 'AC123', 'from': '+15550000000'}}
    return response


class MessagingDataMixin:

    def make_employee(self, first_name, transporter_id, phone='(555) 123-4567', **kwargs):
        return Employee.objects.create(
            first_name=first_name,
            last_name='Driver',
            email=f'{first_name.lower()}@symx.test',
            transporter_id=transporter_id,
            phone_number=phone,
            **kwargs
        )

    def make_shift(self, transporter_id, day, shift_type='Route', start_time='10:35 AM'):
        return EmployeeSchedule.objects.create(
            transporter_id=transporter_id,
            week_day=day.strftime('%A'),
            year_week='2026-W07',
            date=day,
            type=shift_type,
            start_time=start_time,
        )


class TestPersonalization(TestCase):

    def test_add_minutes_keeps_format(self):
        self.assertEqual(add_minutes('10:35 AM', 5), '10:40 AM')
        self.assertEqual(add_minutes('11:58 AM', 5), '12:03 PM')
        self.assertEqual(add_minutes('12:00 AM', 5), '12:05 AM')
        self.assertEqual(add_minutes('23:58', 5), '0:03')
        self.assertEqual(add_minutes('soon', 5), 'soon')

    def test_placeholders_case_insensitive(self):
        shift = EmployeeSchedule(date=TUESDAY, week_day='Tuesday', start_time='9:00 AM')
        text = personalize(
            'Hi {NAME}, {dayOfWeek} {date} @ {startTime}, stand-up {STANDUPTIME}', 'JANE DOE', shift
        )
        self.assertEqual(text, 'Hi JANE DOE, Tuesday 02/10/2026 @ 9:00 AM, stand-up 9:05 AM')

    def test_missing_shift_blanks_placeholders(self):
        self.assertEqual(personalize('{name} {startTime}|{date}', 'JANE'), 'JANE |')

    def test_normalize_phone(self):
        self.assertEqual(normalize_phone('(555) 123-4567'), '+15551234567')
        self.assertEqual(normalize_phone('+447700900123'), '+447700900123')


class TestRecipients(MessagingDataMixin, TestCase):

    def setUp(self):
        self.working_today = self.make_employee('Ana', 'T1')
        self.make_shift('T1', TUESDAY)

        self.off_today = self.make_employee('Ben', 'T2')
        self.make_shift('T2', TUESDAY, shift_type='OFF')
        self.make_shift('T2', date(2026, 2, 11), start_time='7:00 AM')

        self.idle = self.make_employee('Cal', 'T3')
        self.make_shift('T3', TUESDAY, shift_type='Request Off')

        self.make_employee('Dee', 'T4', phone='')

    def names(self, tab):
        return [r['name'] for r in RecipientService.for_tab(tab, TUESDAY)]

    def test_shift_tab(self):
        self.assertEqual(self.names('shift'), ['ANA DRIVER'])

    def test_off_tomorrow_tab(self):
        recipients = RecipientService.for_tab('off-tomorrow', TUESDAY)
        self.assertEqual([r['name'] for r in recipients], ['BEN DRIVER'])
        self.assertEqual(recipients[0]['shift']['start_time'], '7:00 AM')

    def test_future_shift_tab(self):
        self.assertEqual(self.names('future-shift'), ['ANA DRIVER', 'BEN DRIVER'])

    def test_week_schedule_includes_everyone_with_phone(self):
        self.assertEqual(self.names('week-schedule'), ['ANA DRIVER', 'BEN DRIVER', 'CAL DRIVER'])
        self.assertEqual(self.names(None), ['ANA DRIVER', 'BEN DRIVER', 'CAL DRIVER'])

    def test_route_itinerary_tab(self):
        recipients = RecipientService.for_tab('route-itinerary', TUESDAY)
        self.assertEqual([r['name'] for r in recipients], ['ANA DRIVER'])
        self.assertEqual(recipients[0]['shift']['date'], '2026-02-10')
        self.assertEqual(recipients[0]['shift']['start_time'], '10:35 AM')


class MessagingAPITestCase(MessagingDataMixin, TestCase):

    def setUp(self):
        self.client = APIClient()
        self.user = AppUser.objects.create_superuser(email='dispatch@symx.test', password='pass12345')
        self.client.force_authenticate(user=self.user)


class TestSendMessages(MessagingAPITestCase):

    def setUp(self):
        super().setUp()
        self.make_employee('Ana', 'T1')
        self.schedule = self.make_shift('T1', TUESDAY)

    def payload(self, **overrides):
        payload = {
            'recipients': [{'phone': '5551234567', 'name': 'ANA DRIVER', 'schedule_id': str(self.schedule.id)}],
            'message': 'Hello {name}, stand-up at {standupTime}',
            'message_type': 'shift',
        }
        payload.update(overrides)
        return payload

    @patch('messaging.services.requests.post')
    def test_send_success(self, mock_post):
        mock_post.return_value = openphone_response()

        response = self.client.post('/api/messaging/send/', self.payload(), format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['summary'], {'sent': 1, 'failed': 0, 'total': 1})
        sent_body = mock_post.call_args.kwargs['json']
        self.assertEqual(sent_body['to'], ['+15551234567'])
        self.assertEqual(sent_body['content'], 'Hello ANA DRIVER, stand-up at 10:40 AM')
        self.assertEqual(mock_post.call_args.kwargs['headers']['Authorization'], 'test-openphone-key')

        log = MessageLog.objects.get()
        self.assertEqual(log.openphone_message_id, 'AC123')
        self.assertEqual(log.status, 'sent')
        status_entry = ScheduleMessageStatus.objects.get()
        self.assertEqual(status_entry.channel, 'shift_notification')
        self.assertEqual(status_entry.status, 'sent')
        self.assertEqual(status_entry.created_by, 'dispatch@symx.test')

    @patch('messaging.services.requests.post')
    def test_send_failure_is_logged(self, mock_post):
        mock_post.side_effect = [
            openphone_response(ok=False, status_code=400, body={'message': 'Invalid number'}),
            requests.ConnectionError('timeout'),
        ]
        recipients = [{'phone': '+1555000001', 'name': 'A'}, {'phone': '+1555000002', 'name': 'B'}]

        response = self.client.post('/api/messaging/send/', self.payload(recipients=recipients), format='json')

        body = response.json()
        self.assertEqual(body['summary'], {'sent': 0, 'failed': 2, 'total': 2})
        self.assertEqual(body['results'][0]['error'], 'Invalid number')
        self.assertEqual(MessageLog.objects.filter(status='failed').count(), 2)
        self.assertFalse(ScheduleMessageStatus.objects.exists())

    @patch('messaging.services.requests.post')
    def test_send_without_schedule_uses_first_shift_in_scope(self, mock_post):
        mock_post.return_value = openphone_response()
        recipients = [{'phone': '5551234567', 'name': 'ANA DRIVER'}]

        response = self.client.post(
            '/api/messaging/send/', self.payload(recipients=recipients, date='2026-02-10'), format='json'
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(mock_post.call_args.kwargs['json']['content'], 'Hello ANA DRIVER, stand-up at 10:40 AM')
        self.assertEqual(ScheduleMessageStatus.objects.get().schedule, self.schedule)

    @patch('messaging.services.requests.post')
    def test_send_with_unknown_schedule_falls_back(self, mock_post):
        mock_post.return_value = openphone_response()
        recipients = [{
            'phone': '+15551234567', 'name': 'ANA DRIVER', 'schedule_id': '00000000-0000-0000-0000-000000000000',
        }]

        MessagingService.send_batch(recipients, 'Start {startTime} on {dayOfWeek}', 'shift', day=TUESDAY)

        self.assertEqual(MessageLog.objects.get().content, 'Start 10:35 AM on Tuesday')

    @patch('messaging.services.requests.post')
    def test_send_without_matching_shift_blanks_placeholders(self, mock_post):
        mock_post.return_value = openphone_response()
        recipients = [{'phone': '5559999999', 'name': 'GUEST'}]

        MessagingService.send_batch(recipients, 'Hi {name} {startTime}', 'shift', day=TUESDAY)

        self.assertEqual(MessageLog.objects.get().content, 'Hi GUEST ')
        self.assertFalse(ScheduleMessageStatus.objects.exists())

    def test_empty_recipients_rejected(self):
        response = self.client.post('/api/messaging/send/', self.payload(recipients=[]), format='json')
        self.assertEqual(response.status_code, 400)

    def test_blank_message_rejected(self):
        response = self.client.post('/api/messaging/send/', self.payload(message='  '), format='json')
        self.assertEqual(response.status_code, 400)

    @override_settings(OPENPHONE_API_KEY='')
    def test_missing_api_key(self):
        response = self.client.post('/api/messaging/send/', self.payload(), format='json')
        self.assertEqual(response.status_code, 500)

    @patch('messaging.services.requests.post')
    def test_async_send_returns_202(self, mock_post):
        mock_post.return_value = openphone_response()

        response = self.client.post('/api/messaging/send/', self.payload(**{'async': True}), format='json')

        self.assertEqual(response.status_code, 202)
        self.assertTrue(response.json()['queued'])
        # Eager Celery in tests
        self.assertEqual(MessageLog.objects.count(), 1)


class TestWebhook(MessagingAPITestCase):

    def setUp(self):
        super().setUp()
        self.make_employee('Ana', 'T1')
        self.schedule = self.make_shift('T1', TUESDAY)
        self.log = MessageLog.objects.create(
            openphone_message_id='AC123', to_number='+15551234567',
            message_type='shift', content='Hello',
        )
        ScheduleMessageStatus.objects.create(
            schedule=self.schedule, channel='shift_notification', status='sent', message_log=self.log,
        )
        self.client.force_authenticate(user=None)

    def test_ping(self):
        response = self.client.get('/api/messaging/webhook/')
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()['ok'])

    def test_delivered(self):
        response = self.client.post('/api/messaging/webhook/', {
            'type': 'message.delivered',
            'data': {'object': {'id': 'AC123', 'deliveredAt': '2026-02-10T15:00:00Z'}},
        }, format='json')

        self.assertEqual(response.status_code, 200)
        self.log.refresh_from_db()
        self.assertEqual(self.log.status, 'delivered')
        self.assertIsNotNone(self.log.delivered_at)
        self.assertTrue(
            ScheduleMessageStatus.objects.filter(schedule=self.schedule, status='delivered').exists()
        )

    def test_delivered_unknown_message_creates_stub(self):
        WebhookService.handle({
            'type': 'message.delivered',
            'data': {'object': {'id': 'AC999', 'from': '+15550000000', 'to': ['+15557654321']}},
        })
        stub = MessageLog.objects.get(openphone_message_id='AC999')
        self.assertEqual(stub.message_type, 'unknown')
        self.assertEqual(stub.to_number, '+15557654321')

    def test_reply_attached_to_latest_log(self):
        self.client.post('/api/messaging/webhook/', {
            'type': 'message.received',
            'data': {'object': {'from': '+15551234567', 'content': 'Y'}},
        }, format='json')

        self.log.refresh_from_db()
        self.assertEqual(self.log.status, 'received_reply')
        self.assertEqual(self.log.reply_content, 'Y')
        self.assertTrue(
            ScheduleMessageStatus.objects.filter(schedule=self.schedule, status='received').exists()
        )

    def test_reply_without_log_creates_inbound(self):
        WebhookService.handle({
            'type': 'message.received',
            'data': {'object': {'from': '+15550001111', 'to': '+15550000000', 'content': 'Who is this?'}},
        })
        inbound = MessageLog.objects.get(to_number='+15550001111')
        self.assertEqual(inbound.message_type, 'inbound')
        self.assertEqual(inbound.status, 'received_reply')

    def test_unhandled_event(self):
        response = self.client.post('/api/messaging/webhook/', {'type': 'call.completed'}, format='json')
        self.assertFalse(response.json()['handled'])

    @patch('messaging.views.WebhookService.handle', side_effect=RuntimeError('boom'))
    def test_errors_still_return_200(self, _mock_handle):
        response = self.client.post('/api/messaging/webhook/', {'type': 'message.delivered'}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.json()['ok'])


class TestTemplates(MessagingAPITestCase):

    def test_upsert_by_type(self):
        response = self.client.put('/api/messaging/templates/shift/', {'content': 'Hi {name}'}, format='json')
        self.assertEqual(response.status_code, 201)

        response = self.client.put('/api/messaging/templates/shift/', {'content': 'Hello {name}'}, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(MessagingTemplate.objects.get().content, 'Hello {name}')

        listing = self.client.get('/api/messaging/templates/').json()
        self.assertEqual(listing[0]['updated_by'], 'dispatch@symx.test')

    def test_unknown_type_rejected(self):
        response = self.client.put('/api/messaging/templates/birthday/', {'content': 'Hi'}, format='json')
        self.assertEqual(response.status_code, 400)

    @patch('messaging.services.requests.get')
    def test_phone_numbers_proxy(self, mock_get):
        mock_get.return_value = openphone_response(
            ok=True, status_code=200, body={'data': [{'id': 'PN1', 'phoneNumber': '+15550000000'}]}
        )
        response = self.client.get('/api/messaging/phone-numbers/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['data'][0]['id'], 'PN1')


class TestMessageLogs(MessagingAPITestCase):

    def setUp(self):
        super().setUp()
        now = timezone.now()
        self.old = MessageLog.objects.create(
            to_number='+15550000001', message_type='shift', content='a', status='delivered',
            sent_at=now - timedelta(hours=2),
        )
        self.new = MessageLog.objects.create(
            to_number='+15550000002', message_type='week-schedule', content='b', status='failed',
            sent_at=now,
        )

    def ids(self, response):
        return [row['id'] for row in response.json()['results']]

    def test_newest_first(self):
        response = self.client.get('/api/messaging/logs/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.ids(response), [str(self.new.id), str(self.old.id)])

    def test_filters(self):
        self.assertEqual(self.ids(self.client.get('/api/messaging/logs/', {'status': 'failed'})), [str(self.new.id)])
        self.assertEqual(
            self.ids(self.client.get('/api/messaging/logs/', {'message_type': 'shift'})), [str(self.old.id)]
        )
        self.assertEqual(
            self.ids(self.client.get('/api/messaging/logs/', {'to_number': '+15550000002'})), [str(self.new.id)]
        )

    def test_read_only(self):
        response = self.client.post('/api/messaging/logs/', {'to_number': '+1', 'content': 'x'}, format='json')
        self.assertEqual(response.status_code, 405)
