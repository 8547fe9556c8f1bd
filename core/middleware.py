"""
SYMX Security Middleware
========================

Provides:
1. Rate limiting per client IP and path prefix (Django cache)
2. Security response headers
3. Audit log of API writes, auth calls and failed requests
"""

import hashlib
import logging

from django.conf import settings
from django.core.cache import cache
from django.http import JsonResponse

logger = logging.getLogger('symx.security')


def client_ip(request) -> str:
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR', '')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR', '0.0.0.0')


class RateLimitMiddleware:
    """
    Fixed-window request counter keyed by IP and path.

    Rules are checked in order, first matching prefix wins:
    - token refresh: 20/min
    - login: 10/min
    - OpenPhone webhook: 300/min
    - any other /api/ path: 200/min
    """

    RULES = (
        ('/api/auth/token/refresh/', 20, 60),
        ('/api/auth/token/', 10, 60),
        ('/api/messaging/webhook/', 300, 60),
        ('/api/', 200, 60),
    )

    def __init__(self, get_response):
        self.get_response = get_response

    @staticmethod
    def enabled() -> bool:
        if not getattr(settings, 'RATE_LIMIT_ENABLED', True):
            return False
        return not settings.DEBUG or getattr(settings, 'RATE_LIMIT_IN_DEBUG', False)

    def rule_for(self, path):
        for prefix, limit, window in self.RULES:
            if path.startswith(prefix):
                return limit, window
        return None

    def __call__(self, request):
        rule = self.rule_for(request.path) if self.enabled() else None
        if rule is None:
            return self.get_response(request)

        limit, window = rule
        ip = client_ip(request)
        key = f"rl:{ip}:{hashlib.md5(request.path.encode()).hexdigest()[:8]}"

        # add() only sets the key when missing, so the window starts on first hit
        if cache.add(key, 0, window):
            count = 0
        else:
            count = cache.get(key, 0)

        if count >= limit:
            logger.warning(f"[RATE LIMIT] {ip} {request.path} {count}/{limit} in {window}s")
            return JsonResponse(
                {
                    'error': 'rate_limit_exceeded',
                    'message': 'Too many requests. Please try again later.',
                    'retry_after': window,
                },
                status=429,
                headers={'Retry-After': str(window), 'X-RateLimit-Limit': str(limit), 'X-RateLimit-Remaining': '0'},
            )

        try:
            count = cache.incr(key)
        except ValueError:
            cache.set(key, 1, window)
            count = 1

        response = self.get_response(request)
        response['X-RateLimit-Limit'] = str(limit)
        response['X-RateLimit-Remaining'] = str(max(0, limit - count))
        return response


class SecurityHeadersMiddleware:
    """Set hardening headers on every response."""

    HEADERS = {
        'X-Content-Type-Options': 'nosniff',
        'Referrer-Policy': 'strict-origin-when-cross-origin',
        'Permissions-Policy': 'geolocation=(), camera=(), microphone=(), payment=()',
    }

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        for header, value in self.HEADERS.items():
            response[header] = value

        # Admin popups (related-object lookups) are framed by the admin itself
        if not request.path.startswith('/admin/'):
            response['X-Frame-Options'] = 'DENY'
        if not settings.DEBUG:
            response['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        if 'Server' in response:
            del response['Server']
        return response


class RequestAuditMiddleware:
    """
    Audit trail for the API.

    Logged: auth endpoints, writes (POST/PUT/PATCH/DELETE) and any 4xx/5xx
    under /api/; outside the API only server errors.
    """

    WRITE_METHODS = {'POST', 'PUT', 'PATCH', 'DELETE'}

    def __init__(self, get_response):
        self.get_response = get_response

    def should_log(self, request, status_code: int) -> bool:
        if not request.path.startswith('/api/'):
            return status_code >= 500
        return '/auth/' in request.path or request.method in self.WRITE_METHODS or status_code >= 400

    def __call__(self, request):
        response = self.get_response(request)
        status_code = response.status_code
        if not self.should_log(request, status_code):
            return response

        user = getattr(request, 'user', None)
        who = user.email if user is not None and user.is_authenticated else 'anonymous'
        entry = f"{request.method} {request.path} -> {status_code} user={who} ip={client_ip(request)}"

        if status_code >= 500:
            logger.error(f"AUDIT [ERROR] {entry}")
        elif status_code >= 400:
            logger.warning(f"AUDIT [WARN] {entry}")
        else:
            logger.info(f"AUDIT [OK] {entry}")
        return response
