"""Session lookup for incoming requests."""

from dataclasses import dataclass

from fastapi import Request

from src.database import get_orm_client
from src.models.enums import Role
from src.models.staff_member import StaffMember
from src.models.user import User
from src.services.auth import STAFF_TOKEN, decode_access_token


@dataclass(frozen=True)
class SessionUser:
    """The part of an authenticated principal that route handlers rely on."""

    id: int | str
    email: str
    role: str = Role.USER.value
    name: str | None = None
    is_staff: bool = False


@dataclass(frozen=True)
class AuthSession:
    user: SessionUser


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token:
        return None
    return token.strip()


def get_session(request: Request) -> AuthSession | None:
    """Resolve the session for a request from its bearer token.

    Returns None when there is no token, the token is invalid, or the
    principal it names no longer exists. Database errors propagate.
    """
    token = _bearer_token(request)
    if token is None:
        return None

    payload = decode_access_token(token)
    if payload is None or payload.get("sub") is None:
        return None

    with get_orm_client()() as db:
        if payload.get("kind") == STAFF_TOKEN:
            staff = db.query(StaffMember).filter(StaffMember.id == payload["sub"]).first()
            if staff is None or not staff.is_active:
                return None
            return AuthSession(
                SessionUser(
                    id=staff.id, email=staff.email, role=staff.role, name=staff.name, is_staff=True
                )
            )

        user = db.query(User).filter(User.id == int(payload["sub"])).first()
        if user is None:
            return None
        return AuthSession(
            SessionUser(id=user.id, email=user.email, role=user.role or Role.USER.value, name=user.name)
        )
