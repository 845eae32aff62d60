"""Session auth endpoints: register, login, logout, current user.

Register and login both set the ``session`` cookie (an ES256 JWT) and
return the user.  Logout revokes the cookie's jti so a copied cookie
stops working immediately, then clears it.
"""

from __future__ import annotations

import logging

import jwt
from fastapi import APIRouter, Request, Response, status
from pydantic import EmailStr, Field

from marketplace.api.dependencies import CurrentUser, ReposDep
from marketplace.api.schemas import CamelModel, UserOut
from marketplace.core.config import SETTINGS
from marketplace.core.errors import Unauthenticated
from marketplace.models.user import User
from marketplace.services import auth_service, token_service
from marketplace.services.session_revocation import revocation_list

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


class RegisterIn(CamelModel):
    username: str = Field(min_length=3, max_length=64)
    email: EmailStr
    password: str = Field(min_length=8)


class LoginIn(CamelModel):
    username: str
    password: str


def _start_session(response: Response, user: User) -> None:
    token = token_service.create_session_token(sub=str(user.id))
    response.set_cookie(
        token_service.SESSION_COOKIE_NAME,
        token,
        max_age=SETTINGS.session_ttl_min * 60,
        httponly=True,
        samesite="lax",
        secure=SETTINGS.is_prod,
    )


@router.post(
    "/register", response_model=UserOut, status_code=status.HTTP_201_CREATED
)
async def register(payload: RegisterIn, response: Response, repos: ReposDep) -> UserOut:
    user = await auth_service.register_user(
        repos.users,
        username=payload.username.strip(),
        email=str(payload.email).lower(),
        password=payload.password,
    )
    _start_session(response, user)
    return UserOut.from_domain(user)


@router.post("/login", response_model=UserOut)
async def login(payload: LoginIn, response: Response, repos: ReposDep) -> UserOut:
    username = payload.username.strip()
    user = await auth_service.authenticate_user(repos.users, username, payload.password)
    if user is None:
        logger.warning("Login failed username=%s", username)
        raise Unauthenticated("Invalid username or password")

    logger.info("Login succeeded user=%s", user.id)
    _start_session(response, user)
    return UserOut.from_domain(user)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: Request) -> Response:
    """Idempotent: an absent or invalid cookie still yields 204."""
    cookie = request.cookies.get(token_service.SESSION_COOKIE_NAME)
    if cookie:
        try:
            claims = token_service.decode_session_token(cookie)
        except jwt.InvalidTokenError:
            claims = None
        if claims:
            await revocation_list.revoke(claims["jti"], float(claims["exp"]))
            logger.info("Session revoked user=%s jti=%s", claims["sub"], claims["jti"])

    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(token_service.SESSION_COOKIE_NAME)
    return response


@router.get("/user", response_model=UserOut)
async def current_user(user: CurrentUser) -> UserOut:
    return UserOut.from_domain(user)
