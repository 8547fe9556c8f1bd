"""
Django management command to import a weekly scorecard CSV export.

Usage:
    python manage.py import_scorecard import-pod ./POD_2026-W07.csv
    python manage.py import_scorecard quality-dcr ./dcr.csv --week 2026-W07
"""
from django.core.management.base import BaseCommand, CommandError

from core.utils import read_csv_rows
from scorecard.importers import EXPORT_TYPES, ImportFormatError, ScorecardImporter


class Command(BaseCommand):
    help = 'Import a weekly scorecard CSV export'

    def add_arguments(self, parser):
        parser.add_argument('type', choices=sorted(EXPORT_TYPES), help='Export type')
        parser.add_argument('csv_path', help='Path to the CSV file')
        parser.add_argument('--week', default=None, help='Week (YYYY-Www); detected when omitted')

    def handle(self, *args, **options):
        path = options['csv_path']
        try:
            with open(path, 'rb') as handle:
                rows = read_csv_rows(handle)
        except OSError as e:
            raise CommandError(f"Cannot read {path}: {e}")

        try:
            result = ScorecardImporter(options['type']).run(rows, week=options['week'], filename=path)
        except ImportFormatError as e:
            raise CommandError(str(e))

        self.stdout.write(self.style.SUCCESS(
            f"✅ {result['type']} {result['week']}: {result['inserted']} inserted, "
            f"{result['updated']} updated, {result['skipped']} skipped ({result['total']} rows)"
        ))
