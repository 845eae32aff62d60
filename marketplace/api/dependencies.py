from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

import jwt
from fastapi import Depends, Path, Request

from marketplace.api.schemas import MAX_ROW_ID
from marketplace.core.errors import Unauthenticated
from marketplace.db import engine
from marketplace.models.principal import Principal
from marketplace.models.user import User
from marketplace.repos.registry import Repos, build_pg_repos, memory_repos
from marketplace.services import token_service
from marketplace.services.session_revocation import revocation_list

logger = logging.getLogger(__name__)


async def get_repos() -> AsyncGenerator[Repos, None]:
    """Request-scoped repository bundle.

    In-memory when DATABASE_URL is unset; otherwise bound to one
    session that commits when the endpoint returns and rolls back if it
    raises.
    """
    if engine.async_session_factory is None:
        yield memory_repos
        return
    async with engine.async_session_factory() as session:
        try:
            yield build_pg_repos(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def require_user(request: Request) -> Principal:
    """Validate the session cookie and return the Principal.  401 otherwise."""
    cookie = request.cookies.get(token_service.SESSION_COOKIE_NAME)
    if not cookie:
        raise Unauthenticated()
    try:
        claims = token_service.decode_session_token(cookie)
    except jwt.ExpiredSignatureError:
        logger.info("Expired session cookie rejected")
        raise Unauthenticated("Session expired") from None
    except jwt.InvalidTokenError as e:
        logger.warning("Invalid session cookie rejected: %s", e)
        raise Unauthenticated() from None

    if await revocation_list.is_revoked(claims["jti"]):
        logger.info("Revoked session rejected jti=%s", claims["jti"])
        raise Unauthenticated()

    try:
        user_id = int(claims["sub"])
    except ValueError:
        raise Unauthenticated() from None

    return Principal(
        user_id=user_id,
        session_id=claims["jti"],
        expires_at=float(claims["exp"]),
    )


async def get_current_user(
    principal: Annotated[Principal, Depends(require_user)],
    repos: Annotated[Repos, Depends(get_repos)],
) -> User:
    user = await repos.users.get_by_id(principal.user_id)
    if user is None:
        # token outlived its user (e.g. store reset)
        raise Unauthenticated()
    return user


ReposDep = Annotated[Repos, Depends(get_repos)]
CurrentUser = Annotated[User, Depends(get_current_user)]
RowId = Annotated[int, Path(le=MAX_ROW_ID)]
