"""
Security Module - Client IP resolution, rate limiting and response headers
"""

import time
import threading
from flask import request, current_app


# Rate Limiting
RATE_LIMIT_REQUESTS = {}  # {(ip, bucket): [timestamp, ...]}
RATE_LIMIT_WINDOWS = {}  # {bucket: window}
RATE_LIMIT_SWEEP_INTERVAL = 60
_rate_limit_lock = threading.Lock()
_last_sweep = 0.0


def get_client_ip():
    """Get real client IP address (ProxyFix has already applied X-Forwarded-For)"""
    return request.remote_addr or request.environ.get('REMOTE_ADDR', 'unknown')


def check_rate_limit(bucket, max_requests, window, client_ip=None):
    """
    Sliding-window rate limit per client IP and bucket

    Args:
        bucket (str): Limit name, e.g. 'general' or 'contact'
        max_requests (int): Requests allowed inside the window
        window (int): Window length in seconds
        client_ip (str, optional): Defaults to the current request's IP

    Returns:
        bool: True if the request is allowed
    """
    if not current_app.config.get('RATELIMIT_ENABLED', True):
        return True

    key = (client_ip or get_client_ip(), bucket)
    current_time = time.time()

    with _rate_limit_lock:
        RATE_LIMIT_WINDOWS[bucket] = window
        _sweep_stale_clients(current_time)

        # Clean old requests outside the window
        recent = [ts for ts in RATE_LIMIT_REQUESTS.get(key, [])
                  if current_time - ts < window]

        if len(recent) >= max_requests:
            RATE_LIMIT_REQUESTS[key] = recent
            return False

        recent.append(current_time)
        RATE_LIMIT_REQUESTS[key] = recent
        return True


def _sweep_stale_clients(current_time):
    """Drop clients with no request inside their bucket's window. Caller holds the lock."""
    global _last_sweep
    if current_time - _last_sweep < RATE_LIMIT_SWEEP_INTERVAL:
        return
    _last_sweep = current_time
    stale = [key for key, stamps in RATE_LIMIT_REQUESTS.items()
             if not stamps or current_time - stamps[-1] >= RATE_LIMIT_WINDOWS.get(key[1], 0)]
    for key in stale:
        del RATE_LIMIT_REQUESTS[key]


def reset_rate_limits():
    global _last_sweep
    with _rate_limit_lock:
        RATE_LIMIT_REQUESTS.clear()
        RATE_LIMIT_WINDOWS.clear()
        _last_sweep = 0.0


def apply_security_headers(response, production=False):
    """Add security headers to all responses"""
    response.headers.setdefault('X-Content-Type-Options', 'nosniff')
    response.headers.setdefault('X-Frame-Options', 'SAMEORIGIN')
    response.headers.setdefault('Referrer-Policy', 'no-referrer')
    response.headers.setdefault('X-DNS-Prefetch-Control', 'off')
    if production:
        response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
    return response


__all__ = [
    'get_client_ip',
    'check_rate_limit',
    'reset_rate_limits',
    'apply_security_headers'
]
