from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """Authenticated identity extracted from a validated session cookie.

    Carried through the request via FastAPI's dependency system.

        user_id: subject of the session token
        session_id: the token's jti, used to revoke it on logout
        expires_at: token expiry (Unix seconds), bounds the revocation TTL
    """

    user_id: int
    session_id: str
    expires_at: float
