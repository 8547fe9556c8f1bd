"""
SYMX Reports Tests
===================

Tests for the driver scorecard PDF (WeasyPrint mocked).
"""

from io import BytesIO
from unittest.mock import patch

from django.test import TestCase
from rest_framework.test import APIClient

from core.models import AppUser
from reports.services import ReportGenerator, ReportNotFound
from scorecard.models import DeliveryExcellence, ScoreCardRemarks

WEEK = '2026-W07'


class DriverScorecardTestMixin:

    def setUp(self):
        DeliveryExcellence.objects.create(
            week=WEEK, transporter_id='A1', delivery_associate='Ana Diaz',
            overall_standing='Great', overall_score=80, dcr='99.00%', packages_delivered=1200,
        )
        ScoreCardRemarks.objects.create(
            week=WEEK, transporter_id='A1', driver_remarks='Will slow down', manager_name='Sam Lee',
        )


class TestReportGenerator(DriverScorecardTestMixin, TestCase):

    def test_context(self):
        context = ReportGenerator.driver_scorecard_context(WEEK, 'A1')
        self.assertEqual(context['driver']['name'], 'Ana Diaz')
        self.assertEqual(context['remarks'].driver_remarks, 'Will slow down')
        self.assertEqual(len(context['safety_rates']), 5)

    def test_unknown_driver(self):
        with self.assertRaises(ReportNotFound):
            ReportGenerator.driver_scorecard_context(WEEK, 'ZZ9')

    def test_html_renders_driver_and_remarks(self):
        context = ReportGenerator.driver_scorecard_context(WEEK, 'A1')
        html = ReportGenerator._render_html('reports/driver_scorecard.html', context)
        self.assertIn('Ana Diaz', html)
        self.assertIn('Will slow down', html)
        self.assertIn('Sam Lee', html)

    @patch.object(ReportGenerator, '_html_to_pdf', return_value=BytesIO(b'%PDF-1.7 test'))
    def test_generate_passes_html_to_pdf(self, mock_pdf):
        buffer = ReportGenerator.generate_driver_scorecard(WEEK, 'A1')
        self.assertEqual(buffer.read(), b'%PDF-1.7 test')
        self.assertIn('Ana Diaz', mock_pdf.call_args.args[0])


class TestDriverScorecardView(DriverScorecardTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.client = APIClient()
        self.client.force_authenticate(
            user=AppUser.objects.create_superuser(email='manager@symx.test', password='pass12345')
        )

    @patch.object(ReportGenerator, '_html_to_pdf', return_value=BytesIO(b'%PDF-1.7 test'))
    def test_download(self, _mock_pdf):
        response = self.client.get(f'/reports/scorecard/{WEEK}/A1/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response['Content-Type'], 'application/pdf')
        self.assertIn('scorecard_A1_2026-W07.pdf', response['Content-Disposition'])

    def test_unknown_driver_404(self):
        response = self.client.get(f'/reports/scorecard/{WEEK}/ZZ9/')
        self.assertEqual(response.status_code, 404)

    def test_invalid_week_400(self):
        response = self.client.get('/reports/scorecard/week-7/A1/')
        self.assertEqual(response.status_code, 400)

    @patch.object(ReportGenerator, '_html_to_pdf', side_effect=ImportError('no weasyprint'))
    def test_missing_weasyprint_500(self, _mock_pdf):
        response = self.client.get(f'/reports/scorecard/{WEEK}/A1/')
        self.assertEqual(response.status_code, 500)

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)
        response = self.client.get(f'/reports/scorecard/{WEEK}/A1/')
        self.assertEqual(response.status_code, 401)
