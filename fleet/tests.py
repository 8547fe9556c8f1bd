"""
SYMX Fleet Tests
=================

Tests for:
1. Dashboard KPIs and breakdowns
2. Vehicle detail aggregation (FK / vin / unit number matching)
3. Repair search, paging and completion
4. Inspection comparison
"""

from datetime import timedelta
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework.test import APIClient

from core.models import AppUser
from fleet.models import (
    Vehicle, VehicleRepair, VehicleActivityLog, VehicleInspection, VehicleRentalAgreement,
)
from fleet.services import FleetService


class FleetTestMixin:

    def setUp(self):
        self.client = APIClient()
        self.user = AppUser.objects.create_superuser(email='fleet@symx.test', password='pass12345')
        self.client.force_authenticate(user=self.user)

        self.van = Vehicle.objects.create(vin='VIN001', unit_number='U-1', status='Active', ownership='Owned')
        self.grounded = Vehicle.objects.create(vin='VIN002', unit_number='U-2', status='Grounded', ownership='Rented')


class TestFleetDashboard(FleetTestMixin, TestCase):

    def test_kpis_and_breakdowns(self):
        VehicleRepair.objects.create(vin='VIN001', current_status='In Progress')
        VehicleRepair.objects.create(vin='VIN001', current_status='Completed')
        VehicleInspection.objects.create(vin='VIN001')

        data = FleetService.get_dashboard()

        self.assertEqual(data['kpis']['total_vehicles'], 2)
        self.assertEqual(data['kpis']['active_vehicles'], 1)
        self.assertEqual(data['kpis']['grounded_vehicles'], 1)
        self.assertEqual(data['kpis']['open_repairs'], 1)
        self.assertEqual(data['kpis']['total_inspections'], 1)
        self.assertIn({'name': 'Active', 'value': 1, 'color': '#10b981'}, data['status_breakdown'])
        self.assertIn({'name': 'Rented', 'value': 1, 'color': '#ec4899'}, data['ownership_breakdown'])
        self.assertIn({'name': 'In Progress', 'value': 1}, data['repair_status_breakdown'])

    def test_upcoming_registrations_within_30_days(self):
        today = timezone.localdate()
        soon = VehicleActivityLog.objects.create(vin='VIN001', registration_expiration=today + timedelta(days=10))
        VehicleActivityLog.objects.create(vin='VIN001', registration_expiration=today + timedelta(days=45))
        VehicleActivityLog.objects.create(vin='VIN001', registration_expiration=today - timedelta(days=1))

        upcoming = list(FleetService.get_dashboard()['upcoming_registrations'])
        self.assertEqual(upcoming, [soon])

    def test_dashboard_endpoint(self):
        response = self.client.get('/api/fleet/dashboard/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['kpis']['total_vehicles'], 2)


class TestVehicleDetail(FleetTestMixin, TestCase):

    def test_related_records_matched_by_fk_vin_or_unit(self):
        VehicleRepair.objects.create(vehicle=self.van, current_status='Not Started')
        VehicleRepair.objects.create(vin='VIN001', current_status='Completed')
        VehicleRepair.objects.create(unit_number='U-1', current_status='In Progress')
        VehicleRepair.objects.create(vin='VIN002')
        VehicleInspection.objects.create(vin='VIN001', overall_result='Pass')
        VehicleInspection.objects.create(vin='VIN001', overall_result='Fail')
        VehicleRentalAgreement.objects.create(vin='VIN001', amount=Decimal('450.00'))
        VehicleRentalAgreement.objects.create(unit_number='U-1', amount=Decimal('50.00'))

        stats = FleetService.get_vehicle_detail(self.van)['stats']

        self.assertEqual(stats['open_repairs'], 2)
        self.assertEqual(stats['completed_repairs'], 1)
        self.assertEqual(stats['passed_inspections'], 1)
        self.assertEqual(stats['failed_inspections'], 1)
        self.assertEqual(stats['total_rental_amount'], Decimal('500.00'))

    def test_detail_endpoint(self):
        VehicleRepair.objects.create(vehicle=self.van)
        response = self.client.get(f'/api/fleet/vehicles/{self.van.id}/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['vehicle']['vin'], 'VIN001')
        self.assertEqual(len(response.json()['repairs']), 1)

    def test_record_linked_by_vin_on_create(self):
        response = self.client.post('/api/fleet/activity/', {'vin': 'VIN001', 'service_type': 'Oil change'}, format='json')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(VehicleActivityLog.objects.get().vehicle, self.van)


class TestRepairs(FleetTestMixin, TestCase):

    def test_search_and_paging(self):
        for i in range(5):
            VehicleRepair.objects.create(vin='VIN001', description=f'Brake job {i}')
        VehicleRepair.objects.create(vin='VIN002', description='Windshield')

        page = FleetService.search_repairs(q='brake', skip=0, limit=2)
        self.assertEqual(page['total'], 5)
        self.assertEqual(len(page['results']), 2)
        self.assertTrue(page['has_more'])

        last = FleetService.search_repairs(q='brake', skip=4, limit=2)
        self.assertEqual(len(last['results']), 1)
        self.assertFalse(last['has_more'])

    def test_limit_is_clamped(self):
        self.assertEqual(FleetService.parse_paging(-5, 5000), (0, 1000))
        self.assertEqual(FleetService.parse_paging('x', '0'), (0, 1))
        self.assertEqual(FleetService.parse_paging(None, 'abc'), (0, 50))

    def test_list_endpoint_shape(self):
        VehicleRepair.objects.create(vin='VIN001', description='Tire rotation')
        response = self.client.get('/api/fleet/repairs/', {'q': 'tire'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['total'], 1)
        self.assertFalse(response.json()['has_more'])

    def test_completion_fills_duration_and_last_edit(self):
        repair = VehicleRepair.objects.create(vin='VIN001')
        VehicleRepair.objects.filter(pk=repair.pk).update(creation_date=timezone.now() - timedelta(days=3, hours=2))
        before = VehicleRepair.objects.get(pk=repair.pk).last_edit_on

        response = self.client.patch(f'/api/fleet/repairs/{repair.id}/', {'current_status': 'Completed'}, format='json')
        self.assertEqual(response.status_code, 200)

        repair.refresh_from_db()
        self.assertEqual(repair.repair_duration, 3)
        self.assertGreater(repair.last_edit_on, before)


class TestInspectionCompare(FleetTestMixin, TestCase):

    def test_compare_with_previous(self):
        now = timezone.now()
        VehicleInspection.objects.create(
            vehicle=self.van, vin='VIN001', inspection_date=now - timedelta(days=30), tires_condition='Good'
        )
        current = VehicleInspection.objects.create(
            vehicle=self.van, vin='VIN001', inspection_date=now, tires_condition='Poor'
        )

        response = self.client.get(f'/api/fleet/inspections/{current.id}/compare/')
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertIsNotNone(body['previous'])
        self.assertEqual(body['changes'], [{'field': 'tires_condition', 'previous': 'Good', 'current': 'Poor'}])

    def test_first_inspection_has_no_previous(self):
        inspection = VehicleInspection.objects.create(vehicle=self.van, vin='VIN001')
        comparison = FleetService.compare_inspection(inspection)
        self.assertIsNone(comparison['previous'])
        self.assertEqual(comparison['changes'], [])
