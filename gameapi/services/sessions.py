from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from flask_login import UserMixin
from jwt.exceptions import PyJWTError

from gameapi.models import ROLE_ADMIN


@dataclass(frozen=True, eq=False)
class Caller(UserMixin):
    """Identity of the authenticated caller, passed explicitly to services."""

    id: int
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def _expiration_minutes() -> int:
    return int(current_app.config.get('SESSION_EXPIRATION_MINUTES', 60))


def issue(user) -> Tuple[str, datetime]:
    """Sign a session token for ``user``; returns the token and its expiry."""
    lifetime = timedelta(minutes=_expiration_minutes())
    token = create_access_token(
        identity=str(user.id),
        additional_claims={
            'username': user.username,
            'email': user.email,
            'role': user.role,
        },
        expires_delta=lifetime,
    )
    return token, datetime.now(timezone.utc) + lifetime


def verify(token: str) -> Optional[Caller]:
    """Return the caller asserted by ``token``, or None when it is invalid or expired."""
    try:
        claims = decode_token(token)
        return Caller(id=int(claims['sub']), username=claims['username'], role=claims['role'])
    except (PyJWTError, JWTExtendedException, KeyError, ValueError) as exc:
        current_app.logger.info(f"[auth] rejected session token: {type(exc).__name__}")
        return None


def bearer_token(header: Optional[str]) -> Optional[str]:
    if not header:
        return None
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()
