"""Session-token checks deciding where each request may go.

``verify_token`` and ``guard`` are plain functions of their inputs; the
middleware in ``finance_web.middleware`` applies the decision to a request.
"""
import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass

import jwt

from ..errors import AuthFailure
from ..schemas import Identity

logger = logging.getLogger(__name__)

PUBLIC_ROUTES = ("/auth/login", "/auth/register")
LOGIN_PATH = "/auth/login"
HOME_PATH = "/dashboard"

# Paths the guard never looks at
EXCLUDED_PREFIXES = ("/api/auth", "/static", "/assets", "/favicon.ico", "/health")


class GuardAction(enum.Enum):
    """What the middleware does with a request."""
    PASS = "pass"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class GuardDecision:
    action: GuardAction
    location: str | None = None
    identity: Identity | None = None
    forward_identity: bool = False


def verify_token(
    token: str,
    secret: str,
    algorithms: Sequence[str] = ("HS256",),
) -> Identity:
    """Check signature and expiry and return the identity in the claims.

    Raises AuthFailure for any token that does not verify.
    """
    try:
        claims = jwt.decode(token, secret, algorithms=list(algorithms))
    except jwt.PyJWTError as exc:
        raise AuthFailure(f"Invalid token: {exc}") from exc

    subject = claims.get("userId") or claims.get("sub")
    if not subject:
        raise AuthFailure("Token has no subject")
    return Identity(
        subject=str(subject),
        email=claims.get("email") or "",
        username=claims.get("username") or "",
    )


def _try_verify(token: str, secret: str, algorithms: Sequence[str]) -> Identity | None:
    try:
        return verify_token(token, secret, algorithms)
    except AuthFailure as exc:
        logger.info("Token verification failed: %s", exc.message)
        return None


def is_excluded(path: str) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in EXCLUDED_PREFIXES)


def guard(
    path: str,
    token: str | None,
    secret: str,
    algorithms: Sequence[str] = ("HS256",),
    public_routes: Sequence[str] = PUBLIC_ROUTES,
    login_path: str = LOGIN_PATH,
    home_path: str = HOME_PATH,
) -> GuardDecision:
    """Decide what happens to a request for ``path`` carrying ``token``."""
    if is_excluded(path):
        return GuardDecision(GuardAction.PASS)

    is_public = path in public_routes

    if not token:
        if is_public:
            return GuardDecision(GuardAction.PASS)
        return GuardDecision(GuardAction.REDIRECT, location=login_path)

    identity = _try_verify(token, secret, algorithms)

    if is_public:
        if identity is not None:
            return GuardDecision(GuardAction.REDIRECT, location=home_path)
        # Bad token on a public page: treat the visitor as anonymous
        return GuardDecision(GuardAction.PASS)

    if identity is None:
        return GuardDecision(GuardAction.REDIRECT, location=login_path)

    return GuardDecision(
        GuardAction.PASS,
        identity=identity,
        forward_identity=path.startswith("/api/"),
    )
