"""
Decorators Module - Request guards for API routes
"""

from functools import wraps
from flask import current_app, request, abort
from .security import check_rate_limit


def rate_limited(bucket, config_key):
    """Decorator to apply a per-IP rate limit read from app config as (max, window)"""
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            max_requests, window = current_app.config[config_key]
            if not check_rate_limit(bucket, max_requests, window):
                current_app.logger.warning(f"Rate limit '{bucket}' exceeded for {request.remote_addr}")
                abort(429)
            return f(*args, **kwargs)
        return decorated_function
    return decorator


def json_body(f):
    """Decorator to pass the decoded JSON object body as ``payload``"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        payload = {}
        if request.data:
            payload = request.get_json(silent=True)
            if not isinstance(payload, dict):
                abort(400, description='Invalid JSON body')
        kwargs['payload'] = payload
        return f(*args, **kwargs)
    return decorated_function
