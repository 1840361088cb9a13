"""Admin credentials for the suggestions editor.

Three credentials are accepted on ``x-admin-passcode``: the configured
passcode itself, a signed session token issued by ``/api/admin/session``,
and (while ``allow_session_sentinel`` is on) the literal ``SESSION``
sentinel older clients send after unlocking the editor once. The sentinel
grants write access to anyone who knows it and is kept only for those
clients.
"""
import hashlib
import hmac
import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from wedding_api.config import settings

logger = logging.getLogger(__name__)

SESSION_SENTINEL = "SESSION"
ALGORITHM = "HS256"
TOKEN_TYPE = "admin_session"


def _signing_key() -> str:
    if settings.session_secret_key:
        return settings.session_secret_key
    if not settings.admin_passcode:
        return ""
    # rotating the passcode invalidates every outstanding token
    return hashlib.sha256(f"admin-session:{settings.admin_passcode}".encode()).hexdigest()


def check_passcode(candidate: str) -> bool:
    admin = settings.admin_passcode
    if not candidate or not admin:
        return False
    return hmac.compare_digest(candidate.encode(), admin.encode())


def create_session_token(now: datetime | None = None) -> tuple[str, datetime]:
    key = _signing_key()
    if not key:
        raise ValueError("admin passcode not configured")
    now = now or datetime.now(timezone.utc)
    expires_at = now + timedelta(minutes=settings.session_ttl_minutes)
    claims = {"sub": "admin", "type": TOKEN_TYPE, "iat": now, "exp": expires_at}
    return jwt.encode(claims, key, algorithm=ALGORITHM), expires_at


def verify_session_token(token: str) -> bool:
    key = _signing_key()
    if not token or not key:
        return False
    try:
        payload = jwt.decode(token, key, algorithms=[ALGORITHM])
    except JWTError:
        return False
    return payload.get("type") == TOKEN_TYPE


def is_admin_credential(value: str) -> bool:
    if check_passcode(value):
        return True
    if value == SESSION_SENTINEL:
        if settings.allow_session_sentinel:
            logger.warning("Suggestions write authorized by the legacy SESSION sentinel")
            return True
        return False
    return verify_session_token(value)
