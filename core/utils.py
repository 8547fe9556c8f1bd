"""
SYMX - Shared utilities
========================
CSV helpers used by the employee and scorecard imports.
"""

import csv
import io
import logging
from typing import Dict, List

logger = logging.getLogger(__name__)


def read_csv_rows(uploaded_file) -> List[Dict[str, str]]:
    """
    Read an uploaded CSV into a list of dict rows.

    Handles the UTF-8 BOM written by Excel, falls back to Windows-1252 for
    files saved in a legacy encoding, and drops rows where every cell is
    empty.
    """
    content = uploaded_file.read()
    if isinstance(content, bytes):
        try:
            content = content.decode('utf-8-sig')
        except UnicodeDecodeError:
            logger.warning(f"[CSV] {getattr(uploaded_file, 'name', 'upload')} is not UTF-8, reading as cp1252")
            content = content.decode('cp1252', errors='replace')
    else:
        content = content.lstrip('\ufeff')

    reader = csv.DictReader(io.StringIO(content))
    rows = []
    for row in reader:
        cleaned = {
            (key or '').strip(): (value.strip() if isinstance(value, str) else value)
            for key, value in row.items()
            if key
        }
        if any(value not in (None, '') for value in cleaned.values()):
            rows.append(cleaned)
    return rows
