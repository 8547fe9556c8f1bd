"""
SYMX Scorecard Tests
=====================

Tests for:
1. Week helpers (Sunday..Saturday weeks, filename/row detection)
2. Tier classification and duration parsing
3. Weekly CSV importer (upsert, skipping, DVIC week, batching)
4. Performance merge and DSP metrics
5. Remarks upsert with history
6. API endpoints
"""

import os
import tempfile
from datetime import date
from io import StringIO

from django.core.management import call_command
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from core.models import AppUser
from hr.models import Employee
from scorecard.importers import ImportFormatError, ScorecardImporter, coerce_value
from scorecard.models import (
    AvailableWeek, DeliveryExcellence, PhotoOnDelivery, DVICInspection, SafetyEvent,
    CDFNegative, QualityDSBDNR, ScoreCardRemarks,
)
from scorecard.services import PerformanceService, RemarksService
from scorecard.tiers import (
    classify_overall, classify_rate, classify_percent, classify_fico, classify_dsb,
    classify_ced, tier_value, safe_avg, parse_pct, duration_seconds, is_rushed,
)
from scorecard.weeks import (
    is_valid_week, week_range, week_dates, date_to_week, next_week,
    extract_week_from_filename, detect_week_from_rows, parse_date,
)


class TestWeeks(TestCase):
    """Week strings run Sunday..Saturday."""

    def test_valid_week_format(self):
        self.assertTrue(is_valid_week('2026-W07'))
        self.assertFalse(is_valid_week('2026-W7'))
        self.assertFalse(is_valid_week('2026-W54'))
        self.assertFalse(is_valid_week('W07-2026'))
        self.assertFalse(is_valid_week(None))

    def test_week_53_only_in_long_iso_years(self):
        self.assertTrue(is_valid_week('2026-W53'))
        self.assertFalse(is_valid_week('2025-W53'))
        self.assertFalse(is_valid_week('2026-W00'))
        self.assertIsNone(extract_week_from_filename('pod_2025-W53.csv'))

    def test_week_range_starts_on_sunday(self):
        sunday, saturday = week_range('2026-W07')
        self.assertEqual(sunday, date(2026, 2, 8))
        self.assertEqual(saturday, date(2026, 2, 14))
        self.assertEqual(len(week_dates('2026-W07')), 7)

    def test_sunday_belongs_to_the_week_it_opens(self):
        self.assertEqual(date_to_week(date(2026, 2, 8)), '2026-W07')
        self.assertEqual(date_to_week(date(2026, 2, 14)), '2026-W07')
        self.assertEqual(date_to_week(date(2026, 2, 15)), '2026-W08')

    def test_next_week_crosses_year_boundary(self):
        self.assertEqual(next_week('2026-W07'), '2026-W08')
        self.assertEqual(next_week('2025-W52'), '2026-W01')
        self.assertEqual(next_week('2026-W53'), '2027-W01')

    def test_extract_week_from_filename(self):
        self.assertEqual(extract_week_from_filename('POD_2026-W5.csv'), '2026-W05')
        self.assertEqual(extract_week_from_filename('dcr_2026_week-5.csv'), '2026-W05')
        self.assertEqual(extract_week_from_filename('2026-WEEK_05 export.csv'), '2026-W05')
        self.assertIsNone(extract_week_from_filename('2026-W60.csv'))
        self.assertIsNone(extract_week_from_filename('export.csv'))

    def test_detect_week_from_rows(self):
        rows = [{'Name': 'x', 'Delivery Date': ''}, {'Name': 'y', 'Delivery Date': '02/10/2026'}]
        self.assertEqual(detect_week_from_rows(rows), '2026-W07')
        self.assertIsNone(detect_week_from_rows([{'Name': 'x'}]))

    def test_parse_date_formats(self):
        self.assertEqual(parse_date('2026-02-10'), date(2026, 2, 10))
        self.assertEqual(parse_date('02/10/2026 7:45 AM'), date(2026, 2, 10))
        self.assertIsNone(parse_date('not a date'))


class TestTiers(TestCase):

    def test_overall_thresholds(self):
        self.assertEqual(classify_overall(850), 'Fantastic Plus')
        self.assertEqual(classify_overall(750), 'Fantastic')
        self.assertEqual(classify_overall(749.9), 'Great')
        self.assertEqual(classify_overall(500), 'Fair')
        self.assertEqual(classify_overall(10), 'Poor')

    def test_rate_lower_is_better(self):
        self.assertEqual(classify_rate(0.5), 'Fantastic')
        self.assertEqual(classify_rate(1.0), 'Great')
        self.assertEqual(classify_rate(2.0), 'Fair')
        self.assertEqual(classify_rate(2.01), 'Poor')

    def test_other_classifiers(self):
        self.assertEqual(classify_percent(99.5), 'Fantastic Plus')
        self.assertEqual(classify_percent(94), 'Poor')
        self.assertEqual(classify_fico(850), 'Fantastic')
        self.assertEqual(classify_dsb(20), 'Great')
        self.assertEqual(classify_ced(31), 'Poor')

    def test_tier_value(self):
        self.assertEqual(tier_value('Fantastic Plus'), 5)
        self.assertEqual(tier_value('fantastic'), 4)
        self.assertEqual(tier_value('Poor'), 1)
        self.assertEqual(tier_value('N/A'), 0)
        self.assertEqual(tier_value(None), 0)

    def test_safe_avg_and_parse_pct(self):
        self.assertEqual(safe_avg([1, None, 3]), 2)
        self.assertEqual(safe_avg([]), 0)
        self.assertEqual(parse_pct('99.60%'), 99.6)
        self.assertIsNone(parse_pct('N/A'))

    def test_duration_parsing(self):
        self.assertEqual(duration_seconds('75'), 75)
        self.assertEqual(duration_seconds('2 min'), 120)
        self.assertEqual(duration_seconds('00:01:20'), 80)
        self.assertEqual(duration_seconds('1:05'), 65)
        self.assertIsNone(duration_seconds('quick'))
        self.assertIsNone(duration_seconds(''))

    def test_rushed_inspection(self):
        self.assertTrue(is_rushed('45'))
        self.assertTrue(is_rushed('1:29'))
        self.assertFalse(is_rushed('2 min'))
        self.assertFalse(is_rushed(''))


class TestScorecardImporter(TestCase):
    """Weekly export upserts."""

    def setUp(self):
        self.employee = Employee.objects.create(
            first_name='Ana', last_name='Diaz', email='ana@example.com', transporter_id='A1'
        )

    def pod_row(self, transporter_id='A1', rejects='2'):
        return {
            'Transporter ID': transporter_id,
            'First Name': 'Ana',
            'Opportunities': '10',
            'Success': '8',
            'Rejects': rejects,
            'Blurry Photo': '1',
            'Unrelated Column': 'ignored',
        }

    def test_insert_then_update_by_natural_key(self):
        first = ScorecardImporter('import-pod').run([self.pod_row()], week='2026-W07')
        self.assertEqual(first['inserted'], 1)
        self.assertEqual(first['updated'], 0)

        second = ScorecardImporter('import-pod').run([self.pod_row(rejects='3')], week='2026-W07')
        self.assertEqual(second['inserted'], 0)
        self.assertEqual(second['updated'], 1)

        record = PhotoOnDelivery.objects.get(week='2026-W07', transporter_id='A1')
        self.assertEqual(record.rejects, 3)
        self.assertEqual(record.blurry_photo, 1)
        self.assertEqual(record.employee, self.employee)

    def test_rows_missing_key_are_skipped(self):
        result = ScorecardImporter('import-pod').run(
            [self.pod_row(), self.pod_row(transporter_id='')], week='2026-W07'
        )
        self.assertEqual(result, {
            'type': 'import-pod', 'week': '2026-W07',
            'inserted': 1, 'updated': 0, 'skipped': 1, 'total': 2,
        })

    def test_week_is_registered(self):
        ScorecardImporter('import-pod').run([self.pod_row()], week='2026-W07')
        self.assertTrue(AvailableWeek.objects.filter(week='2026-W07').exists())

    def test_week_detected_from_filename(self):
        result = ScorecardImporter('import-pod').run([self.pod_row()], filename='POD_2026-W6.csv')
        self.assertEqual(result['week'], '2026-W06')

    def test_unknown_type_rejected(self):
        with self.assertRaises(ImportFormatError):
            ScorecardImporter('weekly-vibes')

    def test_malformed_week_rejected(self):
        with self.assertRaises(ImportFormatError):
            ScorecardImporter('import-pod').run([self.pod_row()], week='2026-7')

    def test_undetectable_week_rejected(self):
        with self.assertRaises(ImportFormatError):
            ScorecardImporter('import-pod').run([self.pod_row()])

    def test_dvic_week_comes_from_start_date(self):
        rows = [{
            'Start Date': '02/10/2026',
            'Transporter ID': 'A1',
            'VIN': '1FTBW3XM0KKA00001',
            'Start Time': '07:02',
            'Duration': '45',
        }]
        ScorecardImporter('dvic-vehicle-inspection').run(rows, week='2026-W01')

        record = DVICInspection.objects.get()
        self.assertEqual(record.week, '2026-W07')
        self.assertEqual(record.start_date, '2026-02-10')
        self.assertTrue(AvailableWeek.objects.filter(week='2026-W07').exists())

    def test_cdf_negative_keys_on_delivery_associate(self):
        rows = [{'Delivery Associate': 'A1', 'Tracking ID': 'TBA1', 'DA Mishandled Package': '1'}]
        result = ScorecardImporter('cdf-negative').run(rows, week='2026-W07')
        self.assertEqual(result['inserted'], 1)
        self.assertEqual(CDFNegative.objects.get().da_mishandled_package, '1')

    def test_quality_aliases(self):
        rows = [{'Transporter ID': 'A1', 'DSB': '4', 'Delivered > 50m': '2', 'SNDNR': '1'}]
        ScorecardImporter('quality-dsb-dnr').run(rows, week='2026-W07')
        record = QualityDSBDNR.objects.get()
        self.assertEqual(record.dsb_count, 4)
        self.assertEqual(record.delivered_over_50m, 2)
        self.assertEqual(record.scanned_not_delivered_not_returned, 1)

    @override_settings(SCORECARD_IMPORT_BATCH_SIZE=2)
    def test_batches_cover_every_row(self):
        rows = [self.pod_row(transporter_id=f'T{i}') for i in range(5)]
        result = ScorecardImporter('import-pod').run(rows, week='2026-W07')
        self.assertEqual(result['inserted'], 5)
        self.assertEqual(PhotoOnDelivery.objects.count(), 5)

    def test_numeric_coercion(self):
        pct_field = DeliveryExcellence._meta.get_field('overall_score')
        int_field = PhotoOnDelivery._meta.get_field('opportunities')
        self.assertEqual(coerce_value(pct_field, '98.5%'), 98.5)
        self.assertEqual(coerce_value(int_field, '1,234'), 1234)
        self.assertIsNone(coerce_value(int_field, '-'))


class TestPerformanceService(TestCase):
    """Per-driver merge and DSP metrics."""

    WEEK = '2026-W07'

    def setUp(self):
        DeliveryExcellence.objects.create(
            week=self.WEEK, transporter_id='A1', delivery_associate='Ana Diaz',
            overall_standing='Great', overall_score=80, dcr='99.00%', pod='98.00%',
            dsb=3, speeding_event_rate=0.2, packages_delivered=1200,
        )
        DeliveryExcellence.objects.create(
            week=self.WEEK, transporter_id='B2', delivery_associate='Ben Cole',
            overall_standing='Fair', overall_score=60, dsb=0, packages_delivered=900,
        )
        PhotoOnDelivery.objects.create(
            week=self.WEEK, transporter_id='A1', opportunities=10, success=8, rejects=2, blurry_photo=2,
        )
        CDFNegative.objects.create(
            week=self.WEEK, transporter_id='B2', delivery_associate='B2', tracking_id='TBA1',
            da_mishandled_package='1', never_received_delivery='0',
        )
        SafetyEvent.objects.create(
            week=self.WEEK, transporter_id='C3', delivery_associate='Cy Moss', event_id='E1',
            metric_type='Speeding',
        )
        DVICInspection.objects.create(
            week=self.WEEK, transporter_id='A1', vin='V1', start_time='07:00',
            start_date='2026-02-08', duration='45',
        )
        DVICInspection.objects.create(
            week='2026-W08', transporter_id='A1', vin='V1', start_time='07:00',
            start_date='2026-02-15', duration='200',
        )

    def test_available_weeks_backfilled_from_data(self):
        self.assertEqual(PerformanceService.available_weeks(), ['2026-W08', '2026-W07'])
        self.assertEqual(AvailableWeek.objects.count(), 2)

    def test_drivers_merged_and_sorted(self):
        report = PerformanceService.build(self.WEEK)

        self.assertEqual(report['total_drivers'], 3)
        self.assertEqual([d['transporter_id'] for d in report['drivers']], ['A1', 'B2', 'C3'])

        ana, ben, cy = report['drivers']
        self.assertEqual(ana['pod_reject_breakdown'], {'Blurry Photo': 2})
        self.assertEqual(ana['issue_count'], 2)
        self.assertEqual(ana['dvic_total_inspections'], 1)
        self.assertEqual(ana['dvic_rushed_count'], 1)
        self.assertEqual(ben['cdf_negative_count'], 1)
        self.assertEqual(cy['name'], 'Cy Moss')
        self.assertEqual(cy['overall_standing'], 'N/A')

    def test_dsp_metrics(self):
        metrics = PerformanceService.build(self.WEEK)['dsp_metrics']

        self.assertEqual(metrics['overall_score'], 70)
        self.assertEqual(metrics['overall_tier'], 'Great')
        self.assertEqual(metrics['delivery_quality']['dcr'], 99)
        self.assertEqual(metrics['delivery_quality']['pod_acceptance_rate'], 80)
        self.assertEqual(metrics['tier_distribution'], {'Great': 1, 'Fair': 1, 'N/A': 1})
        self.assertEqual(metrics['dvic_summary']['total_inspections'], 1)
        self.assertEqual(metrics['safety_aggregate']['by_metric_type'], {'Speeding': 1})
        self.assertEqual(metrics['cdf_negative_aggregate']['da_mishandled_package'], 1)
        self.assertEqual(metrics['cdf_negative_aggregate']['never_received_delivery'], 0)

    def test_focus_areas_top_three(self):
        areas = PerformanceService.focus_areas(
            total_ced=0, total_dsb=12, total_pod_rejects=7, worst_safety_rate=2.0, avg_dcr=95
        )
        self.assertEqual(
            [a['area'] for a in areas],
            ['Delivery Success Behaviors', 'Photo-On-Delivery Compliance', 'Delivery Completion Rate'],
        )

    def test_on_road_safety_reason(self):
        areas = PerformanceService.focus_areas(0, 0, 0, 1.75, 100)
        self.assertEqual(areas[0]['reason'], 'Worst rate: 1.75 events/100 trips')

    def test_pod_rows_sorted_by_rejects(self):
        PhotoOnDelivery.objects.create(week=self.WEEK, transporter_id='B2', rejects=5)
        rows = PerformanceService.build(self.WEEK)['pod_rows']
        self.assertEqual([r['transporter_id'] for r in rows], ['B2', 'A1'])


class TestRemarksService(TestCase):

    def setUp(self):
        self.user = AppUser.objects.create_superuser(email='manager@symx.test', password='pass12345')

    def test_create_records_history(self):
        remarks = RemarksService.upsert('A1', '2026-W07', {'driver_remarks': 'Will improve'}, user=self.user)

        self.assertEqual(remarks.driver_remarks, 'Will improve')
        entry = remarks.history.get()
        self.assertEqual(entry.action, 'created')
        self.assertEqual(entry.changed_fields, ['driver_remarks'])
        self.assertEqual(entry.changed_by, 'manager@symx.test')

    def test_signature_sets_and_clears_timestamp(self):
        RemarksService.upsert('A1', '2026-W07', {'driver_signature': 'data:image/png;base64,AAA'})
        remarks = ScoreCardRemarks.objects.get()
        self.assertIsNotNone(remarks.driver_signature_at)

        RemarksService.upsert('A1', '2026-W07', {'driver_signature': ''})
        remarks.refresh_from_db()
        self.assertEqual(remarks.driver_signature, '')
        self.assertIsNone(remarks.driver_signature_at)
        self.assertEqual(remarks.history.last().action, 'updated')

    def test_only_provided_fields_written(self):
        RemarksService.upsert('A1', '2026-W07', {'driver_remarks': 'a', 'manager_remarks': 'b'})
        RemarksService.upsert('A1', '2026-W07', {'manager_remarks': 'c'})
        remarks = ScoreCardRemarks.objects.get()
        self.assertEqual(remarks.driver_remarks, 'a')
        self.assertEqual(remarks.manager_remarks, 'c')


class TestScorecardAPI(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.user = AppUser.objects.create_superuser(email='admin@symx.test', password='pass12345')
        self.client.force_authenticate(user=self.user)

    def test_requires_authentication(self):
        response = APIClient().get('/api/scorecard/employee-performance/')
        self.assertEqual(response.status_code, 401)

    def test_weeks_list(self):
        AvailableWeek.objects.create(week='2026-W06')
        AvailableWeek.objects.create(week='2026-W07')
        response = self.client.get('/api/scorecard/employee-performance/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'weeks': ['2026-W07', '2026-W06']})

    def test_performance_invalid_week(self):
        response = self.client.get('/api/scorecard/employee-performance/', {'week': 'bad'})
        self.assertEqual(response.status_code, 400)

    def test_import_json_rows(self):
        response = self.client.post('/api/scorecard/import/', {
            'type': 'import-pod',
            'week': '2026-W07',
            'data': [{'Transporter ID': 'A1', 'Opportunities': '4'}],
        }, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['inserted'], 1)

    def test_import_unknown_type(self):
        response = self.client.post('/api/scorecard/import/', {
            'type': 'nope', 'week': '2026-W07', 'data': [{'a': 'b'}],
        }, format='json')
        self.assertEqual(response.status_code, 400)

    def test_import_malformed_week(self):
        response = self.client.post('/api/scorecard/import/', {
            'type': 'import-pod', 'week': '2026-7', 'data': [{'Transporter ID': 'A1'}],
        }, format='json')
        self.assertEqual(response.status_code, 400)

    def test_import_rejects_week_missing_from_iso_year(self):
        response = self.client.post('/api/scorecard/import/', {
            'type': 'import-pod', 'week': '2025-W53', 'data': [{'Transporter ID': 'A1'}],
        }, format='json')
        self.assertEqual(response.status_code, 400)
        self.assertFalse(AvailableWeek.objects.filter(week='2025-W53').exists())
        self.assertFalse(PhotoOnDelivery.objects.exists())

    def test_performance_week_53(self):
        response = self.client.get('/api/scorecard/employee-performance/', {'week': '2025-W53'})
        self.assertEqual(response.status_code, 400)
        response = self.client.get('/api/scorecard/employee-performance/', {'week': '2026-W53'})
        self.assertEqual(response.status_code, 200)

    def test_remarks_put_then_get(self):
        response = self.client.put('/api/scorecard/remarks/', {
            'transporter_id': 'A1', 'week': '2026-W07', 'manager_remarks': 'Good week',
        }, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['manager_remarks'], 'Good week')

        response = self.client.get('/api/scorecard/remarks/', {'week': '2026-W07', 'transporter_id': 'A1'})
        self.assertEqual(response.json()['remarks']['manager_remarks'], 'Good week')
        self.assertEqual(len(response.json()['remarks']['history']), 1)


class TestImportScorecardCommand(TestCase):

    def test_imports_csv_file(self):
        with tempfile.NamedTemporaryFile('w', suffix='_2026-W07.csv', delete=False) as handle:
            handle.write('Transporter ID,Opportunities,Rejects\nA1,10,1\nB2,5,0\n')
            path = handle.name
        try:
            out = StringIO()
            call_command('import_scorecard', 'import-pod', path, stdout=out)
        finally:
            os.unlink(path)

        self.assertIn('2 inserted', out.getvalue())
        self.assertEqual(PhotoOnDelivery.objects.filter(week='2026-W07').count(), 2)
