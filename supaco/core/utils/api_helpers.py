"""Shared API utilities: auth decorator, JSON body helper, error helper, rate limiter."""
import time
import logging
from collections import defaultdict
from functools import wraps

from flask import jsonify, request
from flask_login import current_user

logger = logging.getLogger('supaco.api')


# ============== Decorators ==============

def api_login_required(f):
    """Like @login_required but answers with JSON 401 instead of a redirect."""
    @wraps(f)
    def decorated(*args, **kwargs):
        if not current_user.is_authenticated:
            return jsonify({'message': 'Authentication required'}), 401
        return f(*args, **kwargs)
    return decorated


def rate_limited(limiter, max_requests, window_seconds=60, key_func=None):
    """Reject calls over max_requests per window with a JSON 429.

    key_func builds the limiter key; defaults to the current user id, or the
    remote address for anonymous requests.
    """
    def decorator(f):
        @wraps(f)
        def decorated(*args, **kwargs):
            if key_func is not None:
                key = key_func()
            elif current_user.is_authenticated:
                key = f'{f.__name__}:user:{current_user.id}'
            else:
                key = f'{f.__name__}:ip:{request.remote_addr}'

            allowed, retry_after = limiter.is_allowed(
                key, max_requests=max_requests, window_seconds=window_seconds)
            if not allowed:
                return jsonify({
                    'message': 'Too many requests',
                    'retry_after': retry_after,
                }), 429
            return f(*args, **kwargs)
        return decorated
    return decorator


# ============== Request Validation ==============

def get_json_or_error():
    """Get the JSON body or a ready-made 400 response.

        data, error = get_json_or_error()
        if error:
            return error
    """
    data = request.get_json(silent=True)
    if data is None or not isinstance(data, dict):
        return None, (jsonify({'message': 'Invalid or missing JSON body'}), 400)
    return data, None


# ============== Error Handling ==============

def safe_error_response(e, status_code=500):
    """Error response that never leaks database internals.

    ValueError is business validation and is safe to echo as a 400;
    everything else is logged and answered with a generic message.
    """
    if isinstance(e, ValueError):
        return jsonify({'message': str(e)}), 400

    logger.exception('Unhandled error in API route')
    return jsonify({'message': 'Server error'}), status_code


# ============== Rate Limiter ==============

class RateLimiter:
    """Sliding-window in-memory rate limiter.

    State is per worker process.
    """

    def __init__(self):
        self._requests = defaultdict(list)

    def is_allowed(self, key, max_requests=10, window_seconds=60):
        """Record a hit for key and report whether it is within the limit.

        Returns:
            (is_allowed, retry_after_seconds)
        """
        now = time.time()
        window_start = now - window_seconds

        hits = [ts for ts in self._requests[key] if ts > window_start]
        self._requests[key] = hits

        if len(hits) >= max_requests:
            retry_after = int(min(hits) + window_seconds - now) + 1
            return False, max(1, retry_after)

        hits.append(now)
        return True, 0
