"""
SYMX Core Tests
================

Tests for:
1. Console user model (email login, super admin)
2. Role module permissions
3. Users / roles / notifications API
4. Security middleware and health endpoints
"""

import uuid
from io import BytesIO

from django.test import TestCase
from rest_framework.test import APIClient

from core.models import AppUser, AppRole, Notification, CONSOLE_MODULES, SUPER_ADMIN_ROLE
from core.utils import read_csv_rows


class TestAppUserModel(TestCase):
    """Tests for the custom AppUser model."""

    def test_create_user_normalizes_email(self):
        user = AppUser.objects.create_user(email='Dispatch@SYMX.test', password='pass12345')
        self.assertEqual(user.email, 'dispatch@symx.test')
        self.assertTrue(user.check_password('pass12345'))
        self.assertIsInstance(user.id, uuid.UUID)

    def test_create_user_without_password(self):
        user = AppUser.objects.create_user(email='nopass@symx.test')
        self.assertFalse(user.has_usable_password())

    def test_email_required(self):
        with self.assertRaises(ValueError):
            AppUser.objects.create_user(email='')

    def test_superuser_gets_super_admin_role(self):
        admin = AppUser.objects.create_superuser(email='owner@symx.test', password='pass12345')
        self.assertEqual(admin.app_role, SUPER_ADMIN_ROLE)
        self.assertTrue(admin.is_super_admin)
        self.assertTrue(admin.has_module_access('Fleet', 'delete'))


class TestRolePermissions(TestCase):
    """Module/action checks resolved through AppRole."""

    def setUp(self):
        AppRole.objects.create(
            name='Dispatcher',
            permissions=[
                {'module': 'Fleet', 'actions': {'view': True, 'edit': True}},
                {'module': 'HR', 'actions': {'view': True}},
            ],
        )
        self.user = AppUser.objects.create_user(
            email='dispatcher@symx.test', password='pass12345', app_role='Dispatcher'
        )

    def test_allowed_actions(self):
        self.assertTrue(self.user.has_module_access('Fleet', 'view'))
        self.assertTrue(self.user.has_module_access('fleet', 'edit'))
        self.assertTrue(self.user.has_module_access('HR'))

    def test_denied_actions(self):
        self.assertFalse(self.user.has_module_access('Fleet', 'delete'))
        self.assertFalse(self.user.has_module_access('HR', 'edit'))
        self.assertFalse(self.user.has_module_access('Scorecard', 'view'))

    def test_unknown_role_denies_everything(self):
        user = AppUser.objects.create_user(email='ghost@symx.test', app_role='Ghost')
        self.assertFalse(user.has_module_access('Fleet', 'view'))

    def test_inactive_user_denied(self):
        self.user.is_active = False
        self.assertFalse(self.user.has_module_access('Fleet', 'view'))

    def test_module_permission_on_api(self):
        client = APIClient()
        client.force_authenticate(user=self.user)
        self.assertEqual(client.get('/api/fleet/vehicles/').status_code, 200)
        self.assertEqual(client.get('/api/scorecard/employee-performance/').status_code, 403)

    def test_viewable_modules(self):
        self.assertEqual(self.user.viewable_modules(), ['HR', 'Fleet'])
        ghost = AppUser.objects.create_user(email='ghost@symx.test', app_role='Ghost')
        self.assertEqual(ghost.viewable_modules(), [])

    def test_permissions_endpoint(self):
        client = APIClient()
        client.force_authenticate(user=self.user)
        response = client.get('/api/users/permissions/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['role'], 'Dispatcher')
        self.assertFalse(response.data['is_super_admin'])
        self.assertEqual(response.data['modules'], ['HR', 'Fleet'])
        self.assertEqual(response.data['permissions'][0]['module'], 'Fleet')

    def test_permissions_endpoint_super_admin(self):
        admin = AppUser.objects.create_superuser(email='owner@symx.test', password='pass12345')
        client = APIClient()
        client.force_authenticate(user=admin)
        response = client.get('/api/users/permissions/')
        self.assertTrue(response.data['is_super_admin'])
        self.assertEqual(response.data['modules'], list(CONSOLE_MODULES))

    def test_permissions_endpoint_requires_login(self):
        self.assertEqual(APIClient().get('/api/users/permissions/').status_code, 401)


class TestConsoleAPI(TestCase):
    """Users, roles and notifications endpoints."""

    def setUp(self):
        self.admin = AppUser.objects.create_superuser(email='owner@symx.test', password='pass12345')
        self.manager = AppUser.objects.create_user(email='manager@symx.test', password='pass12345')
        self.client = APIClient()
        self.client.force_authenticate(user=self.admin)

    def test_me(self):
        self.client.force_authenticate(user=self.manager)
        response = self.client.get('/api/users/me/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['email'], 'manager@symx.test')

    def test_user_admin_requires_super_admin(self):
        self.client.force_authenticate(user=self.manager)
        response = self.client.get('/api/users/')
        self.assertEqual(response.status_code, 403)

    def test_create_user_rejects_duplicate_email(self):
        response = self.client.post('/api/users/', {
            'email': 'MANAGER@symx.test', 'name': 'Dup', 'app_role': 'Manager',
        }, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertIn('email', response.data)

    def test_cannot_delete_self(self):
        response = self.client.delete(f'/api/users/{self.admin.pk}/')
        self.assertEqual(response.status_code, 400)
        self.assertTrue(AppUser.objects.filter(pk=self.admin.pk).exists())

    def test_role_permissions_are_normalized(self):
        response = self.client.post('/api/roles/', {
            'name': 'Fleet Lead',
            'permissions': [{'module': 'Fleet', 'actions': {'view': True, 'approve': 1}}],
        }, format='json')
        self.assertEqual(response.status_code, 201)
        actions = response.data['permissions'][0]['actions']
        self.assertEqual(actions['view'], True)
        self.assertEqual(actions['approve'], True)
        self.assertEqual(actions['delete'], False)

    def test_role_permission_needs_module(self):
        response = self.client.post('/api/roles/', {
            'name': 'Broken', 'permissions': [{'actions': {'view': True}}],
        }, format='json')
        self.assertEqual(response.status_code, 400)

    def test_notifications_mark_read(self):
        first = Notification.objects.create(title='Shipment Update: MSCU1234567', message='x')
        Notification.objects.create(title='Import finished', message='y')

        response = self.client.get('/api/notifications/unread_count/')
        self.assertEqual(response.data['count'], 2)

        response = self.client.post(f'/api/notifications/{first.pk}/mark_read/')
        self.assertTrue(response.data['read'])

        response = self.client.post('/api/notifications/mark_all_read/')
        self.assertEqual(response.data['updated'], 1)
        self.assertFalse(Notification.objects.filter(read=False).exists())


class TestCsvRows(TestCase):

    def test_strips_bom_and_blank_rows(self):
        upload = BytesIO('\ufeffName , Transporter ID\nAna, A1\n,\n'.encode('utf-8'))
        rows = read_csv_rows(upload)
        self.assertEqual(rows, [{'Name': 'Ana', 'Transporter ID': 'A1'}])

    def test_windows_1252_upload(self):
        upload = BytesIO('Name,Transporter ID\nJosé Pérez,A1\n'.encode('cp1252'))
        rows = read_csv_rows(upload)
        self.assertEqual(rows, [{'Name': 'José Pérez', 'Transporter ID': 'A1'}])


class TestSecurityMiddleware(TestCase):
    """Tests for security middleware and health endpoints."""

    def test_health_endpoint_accessible(self):
        response = self.client.get('/health/')
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['status'], 'ok')
        self.assertEqual(data['service'], 'symx-console')

    def test_readiness_endpoint_accessible(self):
        response = self.client.get('/health/ready/')
        self.assertIn(response.status_code, [200, 503])
        self.assertIn('checks', response.json())

    def test_security_headers_present(self):
        response = self.client.get('/health/')
        self.assertEqual(response['X-Content-Type-Options'], 'nosniff')
        self.assertEqual(response['X-Frame-Options'], 'DENY')
        self.assertIn('Referrer-Policy', response)

    def test_api_requires_authentication(self):
        response = self.client.get('/api/users/')
        self.assertEqual(response.status_code, 401)
