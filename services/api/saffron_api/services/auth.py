"""Admin credentials and bearer tokens.

Passwords: pbkdf2_sha256${iterations}${salt_hex}${hash_hex}

Tokens: saffron-v1:{hmac_sha256_hex}:{base64url(json payload)}

The signature is computed over the base64 section with the server's
secret key, so any edit to the payload or signature is rejected. The
payload carries admin_id, username and an absolute expiry (epoch seconds).
"""

import base64
import hashlib
import hmac
import json
import secrets
import time
from typing import Any, Dict, Optional

from ..settings import settings

PBKDF2_ITERATIONS = 260_000
CURRENT_VERSION = "v1"
PREFIX = f"saffron-{CURRENT_VERSION}:"
MAX_TOKEN_LENGTH = 4 * 1024


class TokenError(Exception):
    """Base exception for token-related errors."""
    pass


class TokenCorruptedError(TokenError):
    """Token signature mismatch or invalid format."""
    pass


class TokenExpiredError(TokenError):
    """Token is well-formed but past its expiry."""
    pass


# --- Passwords ---

def hash_password(password: str, *, iterations: int = PBKDF2_ITERATIONS) -> str:
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"pbkdf2_sha256${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        algorithm, iterations, salt_hex, hash_hex = stored.split("$")
    except ValueError:
        return False
    if algorithm != "pbkdf2_sha256":
        return False
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt_hex), int(iterations)
    )
    return hmac.compare_digest(digest.hex(), hash_hex)


# --- Tokens ---

def _sign(data: str, secret: str) -> str:
    return hmac.new(secret.encode("utf-8"), data.encode("ascii"), hashlib.sha256).hexdigest()


def issue_token(
    admin_id: str,
    username: str,
    *,
    ttl_seconds: Optional[int] = None,
    secret: Optional[str] = None,
    now: Optional[float] = None,
) -> str:
    """Create a signed bearer token for an admin account."""
    ttl = ttl_seconds if ttl_seconds is not None else settings.token_ttl_minutes * 60
    issued = int(now if now is not None else time.time())
    payload = {"admin_id": admin_id, "username": username, "iat": issued, "exp": issued + ttl}

    json_bytes = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    b64 = base64.urlsafe_b64encode(json_bytes).decode("ascii")
    signature = _sign(b64, secret or settings.secret_key)
    return f"{PREFIX}{signature}:{b64}"


def decode_token(
    token: str,
    *,
    secret: Optional[str] = None,
    now: Optional[float] = None,
) -> Dict[str, Any]:
    """Validate a bearer token and return its payload.

    Raises:
        TokenCorruptedError: If the format or signature is invalid
        TokenExpiredError: If the token is past its expiry
    """
    if len(token) > MAX_TOKEN_LENGTH:
        raise TokenCorruptedError("Token too large")

    if not token.startswith(PREFIX):
        raise TokenCorruptedError("Invalid token format: missing 'saffron-v1:' prefix")

    parts = token[len(PREFIX):].split(":", 1)
    if len(parts) != 2:
        raise TokenCorruptedError("Invalid token format: missing signature or payload")

    signature, b64 = parts
    if len(signature) != 64 or not all(c in "0123456789abcdef" for c in signature):
        raise TokenCorruptedError("Invalid signature format")

    expected = _sign(b64, secret or settings.secret_key)
    if not hmac.compare_digest(signature, expected):
        raise TokenCorruptedError("Token signature mismatch")

    try:
        payload = json.loads(base64.urlsafe_b64decode(b64))
    except (ValueError, TypeError) as e:
        raise TokenCorruptedError(f"Failed to decode token payload: {e}")

    if not isinstance(payload, dict) or "admin_id" not in payload or "exp" not in payload:
        raise TokenCorruptedError("Token payload is missing required claims")

    current = now if now is not None else time.time()
    if current >= payload["exp"]:
        raise TokenExpiredError("Token has expired")

    return payload
