"""
SYMX Health Check Endpoints
============================

/health/        liveness, the process answers
/health/ready/  readiness: database and cache must answer, Celery is reported
"""

import logging
import time

from django.core.cache import cache
from django.db import connection
from django.http import JsonResponse
from django.utils import timezone
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET

logger = logging.getLogger('symx.monitoring')

SERVICE_NAME = 'symx-console'


def _elapsed_ms(start: float) -> float:
    return round((time.monotonic() - start) * 1000, 2)


def check_database() -> dict:
    start = time.monotonic()
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()
    return {'status': 'healthy', 'engine': connection.vendor, 'response_time_ms': _elapsed_ms(start)}


def check_cache() -> dict:
    start = time.monotonic()
    cache.set('_healthcheck_ping', 'pong', 10)
    if cache.get('_healthcheck_ping') != 'pong':
        raise RuntimeError("Cache read/write mismatch")
    return {'status': 'healthy', 'response_time_ms': _elapsed_ms(start)}


def check_celery() -> dict:
    from symx_core.celery import app as celery_app

    start = time.monotonic()
    workers = celery_app.control.inspect(timeout=1.0).ping() or {}
    if not workers:
        return {'status': 'degraded', 'error': 'No workers responding', 'response_time_ms': _elapsed_ms(start)}
    return {'status': 'healthy', 'workers': len(workers), 'response_time_ms': _elapsed_ms(start)}


# name -> (check, required for readiness)
READINESS_CHECKS = (
    ('database', check_database, True),
    ('cache', check_cache, True),
    ('celery', check_celery, False),
)


@csrf_exempt
@require_GET
def health_check(request):
    """Liveness check for load balancers and container healthchecks."""
    return JsonResponse({
        'status': 'ok',
        'service': SERVICE_NAME,
        'timestamp': timezone.now().isoformat(),
    })


@csrf_exempt
@require_GET
def readiness_check(request):
    """
    Readiness check.

    503 when a required dependency fails; a missing Celery worker only
    shows up as "degraded" in the report.
    """
    checks = {}
    ready = True

    for name, check, required in READINESS_CHECKS:
        try:
            checks[name] = check()
        except Exception as e:
            checks[name] = {'status': 'unhealthy', 'error': str(e)}
            logger.error(f"[HEALTH] {name} unhealthy: {e}")
            ready = ready and not required
            continue
        if checks[name]['status'] == 'degraded':
            logger.warning(f"[HEALTH] {name} degraded: {checks[name].get('error')}")

    return JsonResponse({
        'status': 'healthy' if ready else 'unhealthy',
        'service': SERVICE_NAME,
        'timestamp': timezone.now().isoformat(),
        'checks': checks,
    }, status=200 if ready else 503)
