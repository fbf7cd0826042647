"""
Pending action signatures.

A pending action travels through the client between the proposal and the
confirmation. The token binds it to the user it was proposed for and to its
exact arguments, and expires after a TTL.

Token format: base64url("{issued_at}.{hex hmac-sha256}") over
user_id, function, canonical JSON args and issued_at.
"""

import base64
import hashlib
import hmac
import json
import time
from typing import Any, Dict, Optional

from ..exceptions import InvalidActionTokenError


def _normalize(value: Any) -> Any:
    # Whole-number floats sign as ints, the way JSON.stringify writes them
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {key: _normalize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    return value


def _canonical(user_id: int, function: str, args: Dict[str, Any], issued_at: int) -> bytes:
    payload = json.dumps(_normalize(args), sort_keys=True, separators=(',', ':'), default=str)
    return f'{user_id}\n{function}\n{payload}\n{issued_at}'.encode('utf-8')


def _digest(secret: str, message: bytes) -> str:
    return hmac.new(secret.encode('utf-8'), message, hashlib.sha256).hexdigest()


def sign_action(function: str, args: Dict[str, Any], user_id: int, secret: str,
                now: Optional[float] = None) -> str:
    """Return a token authorising user_id to run function(args)."""
    issued_at = int(now if now is not None else time.time())
    signature = _digest(secret, _canonical(user_id, function, args, issued_at))
    raw = f'{issued_at}.{signature}'.encode('ascii')
    return base64.urlsafe_b64encode(raw).decode('ascii').rstrip('=')


def verify_action(token: str, function: str, args: Dict[str, Any], user_id: int, secret: str,
                  ttl: int, now: Optional[float] = None) -> None:
    """
    Check that token was issued for exactly this user, function and args.

    Raises:
        InvalidActionTokenError: if the token is malformed, forged, bound to
            another user or other arguments, or older than ttl seconds
    """
    if not token or not isinstance(token, str):
        raise InvalidActionTokenError("Missing action token")

    try:
        padded = token + '=' * (-len(token) % 4)
        issued_part, signature = base64.urlsafe_b64decode(padded).decode('ascii').split('.', 1)
        issued_at = int(issued_part)
    except (ValueError, UnicodeDecodeError):
        raise InvalidActionTokenError("Malformed action token")

    expected = _digest(secret, _canonical(user_id, function, args, issued_at))
    if not hmac.compare_digest(expected, signature):
        raise InvalidActionTokenError("Action token does not match this action")

    current = now if now is not None else time.time()
    if current - issued_at > ttl:
        raise InvalidActionTokenError("Action token expired")
