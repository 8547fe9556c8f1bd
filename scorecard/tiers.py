"""
SCORECARD App - Tier classification and metric parsing helpers
"""

import re
from typing import Iterable, Optional

from django.conf import settings

FANTASTIC_PLUS = 'Fantastic Plus'
FANTASTIC = 'Fantastic'
GREAT = 'Great'
FAIR = 'Fair'
POOR = 'Poor'
NOT_AVAILABLE = 'N/A'

MINUTES_RE = re.compile(r'(\d+(?:\.\d+)?)\s*min', re.IGNORECASE)


def classify_overall(score: float) -> str:
    """Overall score on a 0-1000 scale."""
    if score >= 850:
        return FANTASTIC_PLUS
    if score >= 750:
        return FANTASTIC
    if score >= 650:
        return GREAT
    if score >= 500:
        return FAIR
    return POOR


def classify_rate(rate: float) -> str:
    """Event rates per 100 trips; lower is better."""
    if rate <= 0.5:
        return FANTASTIC
    if rate <= 1.0:
        return GREAT
    if rate <= 2.0:
        return FAIR
    return POOR


def classify_percent(pct: float) -> str:
    if pct >= 99.5:
        return FANTASTIC_PLUS
    if pct >= 98.5:
        return FANTASTIC
    if pct >= 97:
        return GREAT
    if pct >= 95:
        return FAIR
    return POOR


def classify_fico(fico: float) -> str:
    if fico >= 850:
        return FANTASTIC
    if fico >= 750:
        return GREAT
    if fico >= 650:
        return FAIR
    return POOR


def classify_dsb(total: float) -> str:
    if total <= 5:
        return FANTASTIC
    if total <= 20:
        return GREAT
    if total <= 50:
        return FAIR
    return POOR


def classify_ced(total: float) -> str:
    if total <= 5:
        return FANTASTIC
    if total <= 15:
        return GREAT
    if total <= 30:
        return FAIR
    return POOR


def tier_value(tier: Optional[str]) -> int:
    """Rank a tier label (higher is better); unknown labels rank 0."""
    label = (tier or '').lower()
    if 'fantastic plus' in label:
        return 5
    if 'fantastic' in label:
        return 4
    if 'great' in label:
        return 3
    if 'fair' in label:
        return 2
    if 'poor' in label:
        return 1
    return 0


def safe_avg(values: Iterable[Optional[float]]) -> float:
    valid = [v for v in values if v is not None and v == v]
    if not valid:
        return 0
    return sum(valid) / len(valid)


def parse_pct(value) -> Optional[float]:
    """'99.60%' -> 99.6; numbers pass through; None when unparseable."""
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).replace('%', '').strip())
    except ValueError:
        return None


def duration_seconds(value) -> Optional[float]:
    """
    Parse a DVIC duration.

    Accepts plain seconds ("75"), minutes ("2 min"), "HH:MM:SS" and
    "MM:SS". Returns None when the value cannot be read.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None

    try:
        return float(text)
    except ValueError:
        pass

    minutes = MINUTES_RE.search(text)
    if minutes:
        return float(minutes.group(1)) * 60

    parts = text.split(':')
    if len(parts) >= 2:
        try:
            numbers = [int(p) for p in parts[:3]]
        except ValueError:
            return None
        if len(numbers) == 3:
            return numbers[0] * 3600 + numbers[1] * 60 + numbers[2]
        return numbers[0] * 60 + numbers[1]
    return None


def is_rushed(duration) -> bool:
    seconds = duration_seconds(duration)
    threshold = getattr(settings, 'DVIC_RUSHED_THRESHOLD_SECONDS', 90)
    return seconds is not None and seconds < threshold


def round2(value: float) -> float:
    return round(value * 100) / 100
