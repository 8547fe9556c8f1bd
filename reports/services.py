"""
REPORTS App - PDF Generation Service

Uses WeasyPrint to generate PDF reports from HTML templates.
"""

import logging
from io import BytesIO
from typing import Any, Dict

from django.template.loader import render_to_string
from django.utils import timezone

from scorecard.models import ScoreCardRemarks
from scorecard.services import PerformanceService, SAFETY_RATES

logger = logging.getLogger(__name__)


class ReportNotFound(Exception):
    """No scorecard data for the requested driver and week."""


# ===========================================
# REPORT GENERATOR SERVICE
# ===========================================

class ReportGenerator:
    """
    Service for generating PDF reports.

    WeasyPrint is imported lazily so the rest of the console runs
    without its system libraries.
    """

    BASE_CSS = '''
        @page {
            size: A4;
            margin: 1.5cm;
        }
        body {
            font-family: "Helvetica Neue", Helvetica, Arial, sans-serif;
            font-size: 10pt;
            color: #333;
            line-height: 1.4;
        }
        h1 { font-size: 18pt; color: #1f2937; margin-bottom: 0.3em; }
        h2 { font-size: 13pt; color: #374151; margin-top: 1em; }
        table { width: 100%; border-collapse: collapse; margin: 0.8em 0; }
        th, td { padding: 6px 10px; text-align: left; border-bottom: 1px solid #e5e7eb; }
        th { background: #f9fafb; font-weight: 600; }
        .header { border-bottom: 2px solid #2563eb; padding-bottom: 0.8em; margin-bottom: 1em; }
        .logo { font-size: 22pt; font-weight: bold; color: #2563eb; }
        .stats-grid { display: flex; gap: 1em; flex-wrap: wrap; margin: 1em 0; }
        .stat-card { flex: 1; min-width: 110px; background: #eff6ff; padding: 0.8em; border-radius: 8px; }
        .stat-value { font-size: 18pt; font-weight: bold; color: #2563eb; }
        .stat-label { font-size: 8pt; color: #6b7280; text-transform: uppercase; }
        .signature img { max-height: 60px; }
        .footer { margin-top: 2em; padding-top: 1em; border-top: 1px solid #e5e7eb;
                  font-size: 8pt; color: #6b7280; text-align: center; }
    '''

    @staticmethod
    def _render_html(template_name: str, context: Dict[str, Any]) -> str:
        """Render HTML from Django template."""
        return render_to_string(template_name, context)

    @classmethod
    def _html_to_pdf(cls, html_content: str) -> BytesIO:
        """
        Convert HTML to PDF using WeasyPrint.

        Args:
            html_content: Rendered HTML string

        Returns:
            BytesIO buffer containing PDF data
        """
        try:
            from weasyprint import HTML, CSS
            from weasyprint.text.fonts import FontConfiguration
        except ImportError:
            logger.error("[REPORTS] WeasyPrint not installed. Run: pip install weasyprint")
            raise ImportError("WeasyPrint is required for PDF generation")

        font_config = FontConfiguration()
        base_css = CSS(string=cls.BASE_CSS, font_config=font_config)

        pdf_buffer = BytesIO()
        HTML(string=html_content).write_pdf(pdf_buffer, stylesheets=[base_css], font_config=font_config)
        pdf_buffer.seek(0)
        return pdf_buffer

    @staticmethod
    def driver_scorecard_context(week: str, transporter_id: str) -> Dict[str, Any]:
        """
        Context of the driver scorecard report.

        Raises:
            ReportNotFound: the driver has no scorecard data that week
        """
        scorecard = PerformanceService.driver_scorecard(week, transporter_id)
        if scorecard is None:
            raise ReportNotFound(f"No scorecard for {transporter_id} in {week}")

        driver = scorecard['driver']
        return {
            'week': week,
            'driver': driver,
            'dsp_metrics': scorecard['dsp_metrics'],
            'total_drivers': scorecard['total_drivers'],
            'safety_rates': [
                {
                    'label': rate.replace('_', ' ').title(),
                    'value': driver[rate],
                    'tier': driver[f'{rate}_tier'],
                }
                for rate in SAFETY_RATES
            ],
            'remarks': ScoreCardRemarks.objects.filter(week=week, transporter_id=transporter_id).first(),
            'generated_at': timezone.now(),
        }

    @classmethod
    def generate_driver_scorecard(cls, week: str, transporter_id: str) -> BytesIO:
        """
        Generate the weekly scorecard of one driver.

        Returns:
            BytesIO buffer containing PDF
        """
        context = cls.driver_scorecard_context(week, transporter_id)
        html = cls._render_html('reports/driver_scorecard.html', context)
        logger.info(f"[REPORTS] Driver scorecard {transporter_id} {week}")
        return cls._html_to_pdf(html)
