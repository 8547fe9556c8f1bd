"""
SYMX HR Tests
==============

Tests for:
1. Employee import (header matching, value coercion, upsert by email)
2. Employee API (409 on duplicate email, partial updates)
3. Weekly schedules (grid, generation of default weeks)
4. Public confirmation links (confirm, change request, expiry)
"""

from datetime import date, timedelta

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from core.models import AppUser, AppRole
from hr.models import Employee, EmployeeSchedule, EmployeeStatus, ScheduleConfirmation, ScheduleMessageStatus
from hr.services import ConfirmationService, EmployeeImporter, ScheduleService, normalize_header
from messaging.models import MessageLog
from scorecard.models import AvailableWeek


class TestEmployeeImporter(TestCase):

    def test_normalize_header(self):
        self.assertEqual(normalize_header('First Name'), 'firstname')
        self.assertEqual(normalize_header('first_name'), 'firstname')
        self.assertEqual(normalize_header('firstName'), 'firstname')

    def test_coerces_values_by_field_type(self):
        values = EmployeeImporter().build_values({
            'First Name': ' Ana ',
            'Email': 'ana@symx.test',
            'Hire Date': '02/03/2026',
            'DOB': 'not a date',
            'Rate': '21.50',
            'Eligibility': 'Yes',
            'Final Check Issued': 'no',
            'Unknown Column': 'ignored',
        })
        self.assertEqual(values['first_name'], 'Ana')
        self.assertEqual(values['hired_date'], date(2026, 2, 3))
        self.assertNotIn('dob', values)
        self.assertEqual(values['rate'], 21.5)
        self.assertTrue(values['eligibility'])
        self.assertFalse(values['final_check_issued'])
        self.assertNotIn('Unknown Column', values)

    def test_empty_number_is_skipped(self):
        values = EmployeeImporter().build_values({'Rate': ''})
        self.assertNotIn('rate', values)

    def test_upsert_by_email(self):
        Employee.objects.create(first_name='Old', email='ana@symx.test', transporter_id='A1')

        result = EmployeeImporter().run([
            {'First Name': 'Ana', 'Email': 'ANA@symx.test', 'Phone': '555-0101'},
            {'First Name': 'Ben', 'Email': 'ben@symx.test', 'Transporter ID': 'B2'},
            {'First Name': 'No email'},
        ])

        self.assertEqual(result, {'count': 2, 'matched': 1, 'skipped': 1})
        ana = Employee.objects.get(email='ana@symx.test')
        self.assertEqual(ana.first_name, 'Ana')
        self.assertEqual(ana.phone_number, '555-0101')
        self.assertEqual(ana.transporter_id, 'A1')
        self.assertTrue(Employee.objects.filter(transporter_id='B2').exists())


class HRAPITestMixin:

    def setUp(self):
        self.user = AppUser.objects.create_superuser(email='owner@symx.test', password='pass12345')
        self.client = APIClient()
        self.client.force_authenticate(user=self.user)


class TestEmployeeAPI(HRAPITestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.employee = Employee.objects.create(
            first_name='Ana', last_name='Diaz', email='ana@symx.test', transporter_id='A1'
        )

    def test_list(self):
        response = self.client.get('/api/hr/employees/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['full_name'], 'Ana Diaz')

    def test_duplicate_email_conflict(self):
        response = self.client.post('/api/hr/employees/', {
            'first_name': 'Copy', 'email': 'ANA@symx.test',
        }, format='json')
        self.assertEqual(response.status_code, 409)

    def test_create_lowercases_email(self):
        response = self.client.post('/api/hr/employees/', {
            'first_name': 'Ben', 'email': 'Ben@SYMX.test',
        }, format='json')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['email'], 'ben@symx.test')

    def test_update_is_partial(self):
        response = self.client.put(
            f'/api/hr/employees/{self.employee.pk}/', {'phone_number': '555-0101'}, format='json'
        )
        self.assertEqual(response.status_code, 200)
        self.employee.refresh_from_db()
        self.assertEqual(self.employee.phone_number, '555-0101')
        self.assertEqual(self.employee.first_name, 'Ana')

    def test_update_to_taken_email_conflict(self):
        other = Employee.objects.create(first_name='Ben', email='ben@symx.test')
        response = self.client.patch(
            f'/api/hr/employees/{other.pk}/', {'email': 'ana@symx.test'}, format='json'
        )
        self.assertEqual(response.status_code, 409)

    def test_import_json_rows(self):
        response = self.client.post('/api/hr/employees/import/', {
            'data': [{'First Name': 'Cara', 'Email': 'cara@symx.test'}],
        }, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['count'], 1)
        self.assertTrue(Employee.objects.filter(email='cara@symx.test').exists())

    def test_import_csv_file(self):
        upload = SimpleUploadedFile(
            'employees.csv',
            b'First Name,Last Name,Email,Status\nDan,Moe,dan@symx.test,Active\n',
            content_type='text/csv',
        )
        response = self.client.post('/api/hr/employees/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(Employee.objects.get(email='dan@symx.test').last_name, 'Moe')

    def test_import_csv_file_in_windows_1252(self):
        upload = SimpleUploadedFile(
            'employees.csv',
            'First Name,Last Name,Email\nJosé,Pérez,jose@symx.test\n'.encode('cp1252'),
            content_type='text/csv',
        )
        response = self.client.post('/api/hr/employees/import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(Employee.objects.get(email='jose@symx.test').last_name, 'Pérez')

    def test_import_requires_rows_or_file(self):
        response = self.client.post('/api/hr/employees/import/', {}, format='json')
        self.assertEqual(response.status_code, 400)

    def test_hr_module_permission(self):
        AppRole.objects.create(name='Viewer', permissions=[{'module': 'HR', 'actions': {'view': True}}])
        viewer = AppUser.objects.create_user(email='viewer@symx.test', app_role='Viewer')
        self.client.force_authenticate(user=viewer)

        self.assertEqual(self.client.get('/api/hr/employees/').status_code, 200)
        response = self.client.post('/api/hr/employees/', {'first_name': 'X', 'email': 'x@symx.test'}, format='json')
        self.assertEqual(response.status_code, 403)


class TestSchedules(HRAPITestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.ana = Employee.objects.create(first_name='Ana', email='ana@symx.test', transporter_id='A1')
        Employee.objects.create(first_name='Ben', email='ben@symx.test', transporter_id='')
        Employee.objects.create(
            first_name='Cara', email='cara@symx.test', transporter_id='C3', status=EmployeeStatus.INACTIVE
        )

    def test_generate_week_for_active_employees(self):
        result = ScheduleService.generate_week('2026-W07')

        self.assertEqual(result['created'], 7)
        self.assertEqual(result['employees'], 1)
        self.assertFalse(result['already_exists'])
        first = EmployeeSchedule.objects.order_by('date').first()
        self.assertEqual(first.date, date(2026, 2, 8))
        self.assertEqual(first.week_day, 'Sunday')
        self.assertEqual(first.type, 'Off')
        self.assertTrue(AvailableWeek.objects.filter(week='2026-W07').exists())

    def test_generate_week_is_idempotent(self):
        ScheduleService.generate_week('2026-W07')
        result = ScheduleService.generate_week('2026-W07')
        self.assertEqual(result['created'], 0)
        self.assertTrue(result['already_exists'])
        self.assertEqual(EmployeeSchedule.objects.count(), 7)

    def test_generate_defaults_to_week_after_latest(self):
        AvailableWeek.objects.create(week='2026-W07')
        result = ScheduleService.generate_week()
        self.assertEqual(result['year_week'], '2026-W08')

    def test_generate_without_weeks_fails(self):
        response = self.client.post('/api/hr/schedules/generate/', {}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'No existing weeks found')

    def test_week_grid(self):
        ScheduleService.generate_week('2026-W07')
        EmployeeSchedule.objects.filter(date=date(2026, 2, 10)).update(type='Route', start_time='10:00 AM')

        response = self.client.get('/api/hr/schedules/', {'year_week': '2026-W07'})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['total_employees'], 1)
        self.assertEqual(response.data['dates'][0], '2026-02-08')
        entry = response.data['employees'][0]
        self.assertEqual(entry['employee']['name'], 'ANA')
        self.assertEqual(entry['days'][2]['type'], 'Route')
        self.assertEqual(entry['days'][2]['week_day'], 'Tuesday')

    def test_grid_requires_valid_week(self):
        self.assertEqual(self.client.get('/api/hr/schedules/').status_code, 400)
        self.assertEqual(self.client.get('/api/hr/schedules/', {'year_week': '2026-7'}).status_code, 400)

    def test_weeks_list(self):
        ScheduleService.generate_week('2026-W07')
        ScheduleService.generate_week('2026-W08')
        response = self.client.get('/api/hr/schedules/', {'weeks_list': 'true'})
        self.assertEqual(response.data['weeks'], ['2026-W08', '2026-W07'])

    def test_update_schedule_cell(self):
        ScheduleService.generate_week('2026-W07')
        schedule = EmployeeSchedule.objects.get(date=date(2026, 2, 9))
        response = self.client.patch(
            f'/api/hr/schedules/{schedule.pk}/', {'type': 'Route', 'van': 'V12'}, format='json'
        )
        self.assertEqual(response.status_code, 200)
        schedule.refresh_from_db()
        self.assertEqual(schedule.van, 'V12')
        self.assertEqual(schedule.transporter_id, 'A1')

    def test_generate_rejects_week_missing_from_iso_year(self):
        response = self.client.post('/api/hr/schedules/generate/', {'year_week': '2025-W53'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertFalse(EmployeeSchedule.objects.exists())

    def test_grid_rejects_week_missing_from_iso_year(self):
        self.assertEqual(self.client.get('/api/hr/schedules/', {'year_week': '2025-W53'}).status_code, 400)


class TestScheduleConfirmations(HRAPITestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.ana = Employee.objects.create(first_name='Ana', last_name='Diaz', email='ana@symx.test', transporter_id='A1')
        self.schedule = EmployeeSchedule.objects.create(
            employee=self.ana, transporter_id='A1', week_day='Tuesday', year_week='2026-W07',
            date=date(2026, 2, 10), type='Route', start_time='10:35 AM', van='V12',
        )
        self.log = MessageLog.objects.create(to_number='+15551234567', message_type='shift', content='Confirm?')
        self.public = APIClient()

    def url(self, confirmation):
        return f'/api/hr/confirm/{confirmation.token}/'

    def test_issue_link(self):
        response = self.client.post(
            f'/api/hr/schedules/{self.schedule.pk}/confirmation-link/',
            {'message_type': 'future-shift', 'message_log': str(self.log.pk)}, format='json',
        )
        self.assertEqual(response.status_code, 201)
        confirmation = ScheduleConfirmation.objects.get()
        self.assertEqual(confirmation.message_log, self.log)
        self.assertEqual(confirmation.status, 'pending')
        self.assertEqual(len(confirmation.token), 48)
        self.assertTrue(response.data['url'].endswith(f'/api/hr/confirm/{confirmation.token}/'))

    def test_issue_link_needs_schedule_edit(self):
        AppRole.objects.create(name='Viewer', permissions=[{'module': 'Schedules', 'actions': {'view': True}}])
        viewer = AppUser.objects.create_user(email='viewer@symx.test', app_role='Viewer')
        self.client.force_authenticate(user=viewer)
        response = self.client.post(f'/api/hr/schedules/{self.schedule.pk}/confirmation-link/', {}, format='json')
        self.assertEqual(response.status_code, 403)

    def test_public_get(self):
        confirmation = ConfirmationService.create_link(self.schedule, 'shift')
        response = self.public.get(self.url(confirmation))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['employee_name'], 'Ana Diaz')
        self.assertEqual(response.data['status'], 'pending')
        self.assertEqual(response.data['schedule']['start_time'], '10:35 AM')
        self.assertEqual(response.data['schedule']['van'], 'V12')

    def test_unknown_token(self):
        self.assertEqual(self.public.get('/api/hr/confirm/nope/').status_code, 404)
        response = self.public.post('/api/hr/confirm/nope/', {'action': 'confirm'}, format='json')
        self.assertEqual(response.status_code, 404)

    def test_expired_link(self):
        confirmation = ConfirmationService.create_link(self.schedule, 'shift', ttl_hours=0)
        ScheduleConfirmation.objects.filter(pk=confirmation.pk).update(
            expires_at=timezone.now() - timedelta(minutes=1)
        )
        self.assertEqual(self.public.get(self.url(confirmation)).status_code, 410)
        response = self.public.post(self.url(confirmation), {'action': 'confirm'}, format='json')
        self.assertEqual(response.status_code, 410)
        self.schedule.refresh_from_db()
        self.assertEqual(self.schedule.day_of_confirmation, '')

    def test_confirm(self):
        confirmation = ConfirmationService.create_link(self.schedule, 'shift', self.log)

        response = self.public.post(self.url(confirmation), {'action': 'confirm'}, format='json')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data, {'success': True, 'status': 'confirmed'})
        confirmation.refresh_from_db()
        self.assertIsNotNone(confirmation.confirmed_at)
        self.schedule.refresh_from_db()
        self.assertEqual(self.schedule.day_of_confirmation, 'Confirmed')
        self.log.refresh_from_db()
        self.assertEqual(self.log.status, 'received_reply')
        self.assertEqual(self.log.reply_content, '✅ Confirmed via link')
        entry = ScheduleMessageStatus.objects.get()
        self.assertEqual((entry.channel, entry.status), ('shift_notification', 'received'))

    def test_change_request_on_week_schedule(self):
        confirmation = ConfirmationService.create_link(self.schedule, 'week-schedule')

        response = self.public.post(
            self.url(confirmation), {'action': 'change_request', 'remarks': 'Need Thursday off'}, format='json'
        )

        self.assertEqual(response.data['status'], 'change_requested')
        confirmation.refresh_from_db()
        self.assertEqual(confirmation.change_remarks, 'Need Thursday off')
        self.assertIsNotNone(confirmation.change_requested_at)
        self.schedule.refresh_from_db()
        self.assertEqual(self.schedule.week_confirmation, 'Change Requested')
        self.assertEqual(self.schedule.day_of_confirmation, '')

    def test_day_before_field(self):
        confirmation = ConfirmationService.create_link(self.schedule, 'future-shift')
        ConfirmationService.respond(confirmation, 'confirm')
        self.schedule.refresh_from_db()
        self.assertEqual(self.schedule.day_before_confirmation, 'Confirmed')

    def test_invalid_action(self):
        confirmation = ConfirmationService.create_link(self.schedule, 'shift')
        response = self.public.post(self.url(confirmation), {'action': 'maybe'}, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'Invalid action')
        with self.assertRaises(ValueError):
            ConfirmationService.respond(confirmation, 'maybe')
