"""Session token creation and validation (ES256).

The session cookie carries a signed JWT rather than a server-side session
id: the only server state is the revocation list consulted on each request
(see session_revocation.py).
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import jwt
from cryptography.hazmat.primitives.asymmetric import ec

from marketplace.core.config import SETTINGS

# Dev/test: an ephemeral EC key pair generated on import, so sessions do
# not survive a restart.
_private_key = ec.generate_private_key(ec.SECP256R1())
_public_key = _private_key.public_key()

ALGORITHM = "ES256"
ISSUER = "course-marketplace"
SESSION_AUDIENCE = "course-marketplace-session"
SESSION_COOKIE_NAME = "session"


def create_session_token(*, sub: str, ttl_min: int | None = None) -> str:
    """Build and sign a session JWT for the session cookie."""
    now = datetime.now(UTC)
    ttl = ttl_min if ttl_min is not None else SETTINGS.session_ttl_min
    payload = {
        "sub": sub,
        "iss": ISSUER,
        "aud": SESSION_AUDIENCE,
        "exp": now + timedelta(minutes=ttl),
        "iat": now,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, _private_key, algorithm=ALGORITHM)


def decode_session_token(token: str) -> dict:
    """Verify a session JWT.  Pins algorithm and audience.

    Raises jwt.ExpiredSignatureError, jwt.InvalidTokenError on failure.
    """
    return jwt.decode(
        token,
        _public_key,
        algorithms=[ALGORITHM],
        issuer=ISSUER,
        audience=SESSION_AUDIENCE,
        options={"require": ["sub", "exp", "iat", "jti"]},
    )
