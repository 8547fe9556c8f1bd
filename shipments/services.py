"""
SHIPMENTS App - Container tracking (SeaRates) and tracker rows

Refreshing a container:
1. Fetch the SeaRates payload and flatten it to a handful of keys
2. For every shipping line carrying the container, compare against the
   last tracking record
3. On change, append a TrackingRecord, update the line status and raise
   a console notification
"""

import logging
import requests
from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework.exceptions import ValidationError

from core.models import Notification, NotificationType
from inventory.models import SupplierLocation, Product
from .models import PurchaseOrder, ShippingLine, TrackingRecord

logger = logging.getLogger(__name__)


# Keys compared between two consecutive tracking snapshots
TRACKING_KEYS = [
    'status', 'latlong', 'last_event_date', 'last_event_status',
    'last_event_location', 'pod_predictive_eta', 'pol_date', 'pod_date',
]

# Terminal provider statuses stored as Delivered on the line
DELIVERED_ALIASES = {'UNKNOWN', 'ERROR'}

SHIPMENTS_LINK = '/admin/live-shipments'


class TrackingError(Exception):
    """SeaRates could not return tracking for a container."""


class SeaRatesService:
    """
    SeaRates container tracking client.

    API: GET {SEARATES_API_URL}?api_key=&number=&sealine=auto
    """

    @classmethod
    def _get_config(cls):
        return {
            'url': getattr(settings, 'SEARATES_API_URL', 'https://tracking.searates.com/tracking'),
            'api_key': getattr(settings, 'SEARATES_API_KEY', ''),
            'timeout': getattr(settings, 'SEARATES_TIMEOUT', 30),
        }

    @classmethod
    def get_tracking(cls, container: str) -> dict:
        """Fetch and flatten tracking for one container number."""
        config = cls._get_config()
        if not config['api_key']:
            raise TrackingError("SeaRates API key is not configured")

        try:
            response = requests.get(
                config['url'],
                params={'api_key': config['api_key'], 'number': container, 'sealine': 'auto'},
                timeout=config['timeout'],
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"[SEARATES] Request failed for {container}: {e}")
            raise TrackingError(f"Tracking request failed: {e}") from e
        except ValueError as e:
            logger.error(f"[SEARATES] Invalid JSON for {container}: {e}")
            raise TrackingError("Tracking provider returned an invalid response") from e

        if payload.get('status') == 'error':
            message = payload.get('message') or 'Tracking provider error'
            logger.warning(f"[SEARATES] {container}: {message}")
            raise TrackingError(message)

        return cls.flatten(payload)

    @staticmethod
    def flatten(payload: dict) -> dict:
        """
        Reduce a SeaRates payload to the keys stored on tracking records.

        The last event is the latest actual event of the first container,
        falling back to the latest planned one.
        """
        data = payload.get('data') or {}
        metadata = data.get('metadata') or {}
        locations = {loc.get('id'): loc for loc in data.get('locations') or []}
        route = data.get('route') or {}
        pin = (data.get('route_data') or {}).get('pin') or []

        def location_name(location_id):
            location = locations.get(location_id)
            if not location:
                return None
            parts = [location.get('name'), location.get('country')]
            return ', '.join(p for p in parts if p) or None

        events = []
        for container in data.get('containers') or []:
            events = container.get('events') or []
            break
        actual = [e for e in events if e.get('actual')]
        last_event = (actual or events or [None])[-1] or {}

        pol = route.get('pol') or {}
        pod = route.get('pod') or {}

        return {
            'container': metadata.get('number'),
            'sealine': metadata.get('sealine'),
            'status': metadata.get('status'),
            'latlong': f"{pin[0]},{pin[1]}" if len(pin) >= 2 else None,
            'last_event_date': last_event.get('date'),
            'last_event_status': last_event.get('description'),
            'last_event_location': location_name(last_event.get('location')),
            'pol_date': pol.get('date'),
            'pod_date': pod.get('date'),
            'pod_predictive_eta': pod.get('predictive_eta'),
        }


def line_status_for(tracking_status):
    if tracking_status and tracking_status.upper() in DELIVERED_ALIASES:
        return 'Delivered'
    return tracking_status or ''


def tracking_changed(previous, current) -> bool:
    if previous is None:
        return True
    return any(previous.data.get(key) != current.get(key) for key in TRACKING_KEYS)


def refresh_container_tracking(container: str) -> dict:
    """Refresh every shipping line carrying `container`; returns the fetched data."""
    container = (container or '').strip()
    if not container:
        raise ValidationError({'container': 'Container number is required'})

    data = SeaRatesService.get_tracking(container)

    changed = False
    with transaction.atomic():
        lines = ShippingLine.objects.select_for_update().filter(container_no=container)
        for line in lines:
            if not tracking_changed(line.latest_tracking, data):
                continue
            TrackingRecord.objects.create(shipping_line=line, data=data, timestamp=timezone.now())
            line.status = line_status_for(data.get('status'))
            line.save(update_fields=['status'])
            changed = True

    if changed:
        status = line_status_for(data.get('status'))
        Notification.objects.create(
            title=f"Shipment Update: {container}",
            message=(
                f"Status changed to {status}. "
                f"Last event: {data.get('last_event_status') or 'N/A'} "
                f"at {data.get('last_event_location') or 'unknown location'}."
            ),
            type=NotificationType.INFO,
            related_id=container,
            link=SHIPMENTS_LINK,
        )
        logger.info(f"[SHIPMENTS] {container} updated: {status}")
    else:
        logger.debug(f"[SHIPMENTS] {container} unchanged")

    return data


def refresh_all() -> dict:
    """Refresh every in-transit container; failures are collected, not raised."""
    statuses = getattr(settings, 'SHIPMENT_STATUSES_TO_REFRESH', [])
    containers = (
        ShippingLine.objects
        .filter(status__in=statuses)
        .exclude(container_no='')
        .values_list('container_no', flat=True)
        .distinct()
        .order_by('container_no')
    )

    summary = {'total': 0, 'success': 0, 'failed': 0, 'errors': []}
    for container in containers:
        summary['total'] += 1
        try:
            refresh_container_tracking(container)
            summary['success'] += 1
        except (TrackingError, ValidationError) as e:
            summary['failed'] += 1
            summary['errors'].append({'container': container, 'error': str(e)})

    logger.info(
        f"[SHIPMENTS] Refresh-all: {summary['success']}/{summary['total']} ok, "
        f"{summary['failed']} failed"
    )
    return summary


def tracker_rows() -> list:
    """One flat row per shipping line for the tracker page."""
    supplier_names = dict(
        SupplierLocation.objects.select_related('supplier')
        .values_list('vb_id', 'supplier__name')
    )
    product_names = dict(Product.objects.values_list('vb_id', 'name'))

    rows = []
    orders = PurchaseOrder.objects.prefetch_related(
        'customer_pos__shipping_lines__tracking_records'
    )
    for order in orders:
        for customer_po in order.customer_pos.all():
            for line in customer_po.shipping_lines.all():
                records = list(line.tracking_records.all())
                latest = records[-1] if records else None
                rows.append({
                    'id': str(line.id),
                    'vbpo_no': order.vbpo_no,
                    'order_type': order.order_type,
                    'po_no': customer_po.po_no,
                    'customer': customer_po.customer,
                    'customer_po_no': customer_po.customer_po_no,
                    'warehouse': customer_po.warehouse,
                    'spo_no': line.spo_no,
                    'supplier': supplier_names.get(line.supplier_location) or '',
                    'product': product_names.get(line.product) or line.product,
                    'container_no': line.container_no,
                    'carrier': line.carrier,
                    'status': line.status,
                    'eta': line.eta,
                    'updated_eta': line.updated_eta,
                    'isf': 'Yes' if line.is_isf_filing else 'No',
                    'customs_status': 'Cleared' if line.is_customs_status else 'Pending',
                    'documents': 'All Provided' if line.all_documents_provided else 'Missing',
                    'latest_tracking': latest.data if latest else None,
                })
    return rows
