"""
SYMX Shipments Tests
=====================

Tests for:
1. SeaRates payload flattening
2. Container refresh (history append, Delivered mapping, notification)
3. Refresh-all summary with failures
4. Tracker rows and endpoints
"""

from unittest.mock import patch, MagicMock

import requests
from django.test import TestCase, override_settings
from rest_framework.test import APIClient
from rest_framework_api_key.models import APIKey

from core.models import AppUser, Notification
from inventory.models import Supplier, SupplierLocation, Product
from shipments.models import PurchaseOrder, CustomerPO, ShippingLine, TrackingRecord
from shipments.services import (
    SeaRatesService, TrackingError, refresh_container_tracking, refresh_all, tracker_rows,
)


def searates_payload(status='IN_TRANSIT', event='Vessel departure', pin=(31.2, 121.5)):
    return {
        'status': 'success',
        'message': 'OK',
        'data': {
            'metadata': {'number': 'MSCU1234567', 'sealine': 'MSCU', 'status': status},
            'locations': [
                {'id': 1, 'name': 'Shanghai', 'country': 'China'},
                {'id': 2, 'name': 'Los Angeles', 'country': 'United States'},
            ],
            'route': {
                'pol': {'location': 1, 'date': '2026-02-01 08:00:00'},
                'pod': {'location': 2, 'date': '2026-02-20 10:00:00', 'predictive_eta': '2026-02-21 12:00:00'},
            },
            'route_data': {'pin': list(pin)},
            'containers': [{
                'number': 'MSCU1234567',
                'events': [
                    {'location': 1, 'description': 'Gate in', 'date': '2026-01-30 09:00:00', 'actual': True},
                    {'location': 1, 'description': event, 'date': '2026-02-01 08:00:00', 'actual': True},
                    {'location': 2, 'description': 'Discharge', 'date': '2026-02-20 10:00:00', 'actual': False},
                ],
            }],
        },
    }


def mock_response(payload):
    response = MagicMock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


class ShipmentsTestMixin:

    def make_line(self, container='MSCU1234567', status='IN_TRANSIT', **kwargs):
        order, _ = PurchaseOrder.objects.get_or_create(vbpo_no='VBPO-1', defaults={'order_type': 'Import'})
        customer_po, _ = CustomerPO.objects.get_or_create(
            purchase_order=order, po_no='PO-1',
            defaults={'customer': 'Fresh Mart', 'customer_po_no': 'FM-77', 'warehouse': 'LA'},
        )
        return ShippingLine.objects.create(
            customer_po=customer_po, spo_no=kwargs.pop('spo_no', 'SPO-1'),
            container_no=container, status=status, **kwargs
        )


class TestSeaRatesFlatten(TestCase):

    def test_flatten(self):
        data = SeaRatesService.flatten(searates_payload())
        self.assertEqual(data['status'], 'IN_TRANSIT')
        self.assertEqual(data['latlong'], '31.2,121.5')
        self.assertEqual(data['last_event_status'], 'Vessel departure')
        self.assertEqual(data['last_event_location'], 'Shanghai, China')
        self.assertEqual(data['pod_predictive_eta'], '2026-02-21 12:00:00')

    def test_flatten_empty_payload(self):
        data = SeaRatesService.flatten({'status': 'success', 'data': {}})
        self.assertIsNone(data['status'])
        self.assertIsNone(data['latlong'])
        self.assertIsNone(data['last_event_location'])

    @patch('shipments.services.requests.get')
    def test_provider_error_raises(self, mock_get):
        mock_get.return_value = mock_response({'status': 'error', 'message': 'Container not found'})
        with self.assertRaisesMessage(TrackingError, 'Container not found'):
            SeaRatesService.get_tracking('BAD0000000')

    @patch('shipments.services.requests.get')
    def test_network_error_raises(self, mock_get):
        mock_get.side_effect = requests.ConnectionError('down')
        with self.assertRaises(TrackingError):
            SeaRatesService.get_tracking('MSCU1234567')


@patch('shipments.services.requests.get')
class TestRefreshContainer(ShipmentsTestMixin, TestCase):

    def test_first_refresh_appends_record(self, mock_get):
        mock_get.return_value = mock_response(searates_payload())
        line = self.make_line()

        data = refresh_container_tracking('MSCU1234567')

        self.assertEqual(data['status'], 'IN_TRANSIT')
        self.assertEqual(line.tracking_records.count(), 1)
        notification = Notification.objects.get()
        self.assertEqual(notification.title, 'Shipment Update: MSCU1234567')
        self.assertEqual(
            notification.message,
            'Status changed to IN_TRANSIT. Last event: Vessel departure at Shanghai, China.'
        )
        self.assertEqual(notification.related_id, 'MSCU1234567')

    def test_unchanged_refresh_is_noop(self, mock_get):
        mock_get.return_value = mock_response(searates_payload())
        line = self.make_line()

        refresh_container_tracking('MSCU1234567')
        refresh_container_tracking('MSCU1234567')

        self.assertEqual(line.tracking_records.count(), 1)
        self.assertEqual(Notification.objects.count(), 1)

    def test_unknown_status_stored_as_delivered(self, mock_get):
        mock_get.return_value = mock_response(searates_payload(status='unknown'))
        line = self.make_line()

        refresh_container_tracking('MSCU1234567')

        line.refresh_from_db()
        self.assertEqual(line.status, 'Delivered')
        self.assertEqual(line.latest_tracking.data['status'], 'unknown')

    def test_every_line_with_container_updated(self, mock_get):
        mock_get.return_value = mock_response(searates_payload(status='ON_WATER'))
        first = self.make_line()
        second = self.make_line(spo_no='SPO-2')

        refresh_container_tracking('MSCU1234567')

        self.assertEqual(TrackingRecord.objects.count(), 2)
        for line in (first, second):
            line.refresh_from_db()
            self.assertEqual(line.status, 'ON_WATER')

    def test_missing_container_rejected(self, mock_get):
        from rest_framework.exceptions import ValidationError
        with self.assertRaises(ValidationError):
            refresh_container_tracking('  ')
        mock_get.assert_not_called()


@patch('shipments.services.requests.get')
class TestRefreshAll(ShipmentsTestMixin, TestCase):

    def test_summary_collects_errors(self, mock_get):
        self.make_line(container='GOOD0000001', status='IN_TRANSIT')
        self.make_line(container='BAD00000002', status='On Water', spo_no='SPO-2')
        self.make_line(container='DONE0000003', status='Delivered', spo_no='SPO-3')

        def fake_get(url, params, timeout):
            if params['number'].startswith('BAD'):
                return mock_response({'status': 'error', 'message': 'No data'})
            return mock_response(searates_payload())

        mock_get.side_effect = fake_get

        summary = refresh_all()

        self.assertEqual(summary['total'], 2)
        self.assertEqual(summary['success'], 1)
        self.assertEqual(summary['failed'], 1)
        self.assertEqual(summary['errors'], [{'container': 'BAD00000002', 'error': 'No data'}])

    @override_settings(SEARATES_API_KEY='')
    def test_missing_api_key_counts_as_failure(self, mock_get):
        self.make_line()
        summary = refresh_all()
        self.assertEqual(summary['failed'], 1)
        mock_get.assert_not_called()


class TestTracker(ShipmentsTestMixin, TestCase):

    def test_rows_resolve_names(self):
        supplier = Supplier.objects.create(vb_id='SUP-1', name='Acme Foods')
        SupplierLocation.objects.create(supplier=supplier, vb_id='LOC-1', location_name='Plant')
        Product.objects.create(vb_id='PRD-1', name='Mandarins')
        self.make_line(
            supplier_location='LOC-1', product='PRD-1',
            is_isf_filing=True, all_documents_provided=False,
        )
        self.make_line(spo_no='SPO-2', product='RAW-9')

        rows = {row['spo_no']: row for row in tracker_rows()}

        self.assertEqual(rows['SPO-1']['supplier'], 'Acme Foods')
        self.assertEqual(rows['SPO-1']['product'], 'Mandarins')
        self.assertEqual(rows['SPO-1']['isf'], 'Yes')
        self.assertEqual(rows['SPO-1']['customs_status'], 'Pending')
        self.assertEqual(rows['SPO-1']['documents'], 'Missing')
        self.assertEqual(rows['SPO-2']['product'], 'RAW-9')
        self.assertIsNone(rows['SPO-2']['latest_tracking'])


class TestShipmentsAPI(ShipmentsTestMixin, TestCase):

    def setUp(self):
        self.client = APIClient()
        self.admin = AppUser.objects.create_superuser(email='ops@symx.test', password='pass12345')

    def test_purchase_orders_nested(self):
        self.make_line()
        self.client.force_authenticate(user=self.admin)

        response = self.client.get('/api/shipments/purchase-orders/')

        self.assertEqual(response.status_code, 200)
        order = response.json()['results'][0]
        self.assertEqual(order['customer_pos'][0]['shipping_lines'][0]['spo_no'], 'SPO-1')

    def test_refresh_requires_container(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get('/api/shipments/refresh/')
        self.assertEqual(response.status_code, 400)

    @patch('shipments.views.refresh_all')
    def test_refresh_all_with_api_key(self, mock_refresh):
        mock_refresh.return_value = {'total': 0, 'success': 0, 'failed': 0, 'errors': []}
        _, key = APIKey.objects.create_key(name='scheduler')

        response = self.client.post('/api/shipments/refresh-all/', HTTP_AUTHORIZATION=f'Api-Key {key}')

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['total'], 0)

    def test_refresh_all_rejects_regular_user(self):
        user = AppUser.objects.create_user(email='driver@symx.test', password='pass12345')
        self.client.force_authenticate(user=user)
        response = self.client.post('/api/shipments/refresh-all/')
        self.assertEqual(response.status_code, 403)

    @patch('shipments.services.refresh_all')
    def test_beat_task_returns_summary(self, mock_refresh):
        from shipments.tasks import refresh_all_shipments
        mock_refresh.return_value = {'total': 1, 'success': 1, 'failed': 0, 'errors': []}
        result = refresh_all_shipments.delay()
        self.assertEqual(result.get()['success'], 1)
