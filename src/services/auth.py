"""Authentication service for JWT, password, and token handling."""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.staff_member import StaffMember
from src.models.user import User

settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

USER_TOKEN = "user"  # noqa: S105
STAFF_TOKEN = "staff"  # noqa: S105


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(subject: int | str, email: str, role: str, kind: str = USER_TOKEN) -> str:
    """Create a JWT access token."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(subject),
        "email": email,
        "role": role,
        "kind": kind,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def authenticate_staff(db: Session, email: str, password: str) -> StaffMember | None:
    """Authenticate an active staff member by email and password."""
    staff = db.query(StaffMember).filter(StaffMember.email == email).first()
    if not staff or not staff.is_active:
        return None
    if not verify_password(password, staff.password):
        return None
    return staff


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def create_user(
    db: Session, email: str, password: str, name: str | None = None, **profile: Any
) -> User:
    """Create a new user. Extra keyword arguments are stored as profile columns."""
    hashed_password = get_password_hash(password)
    user = User(email=email, password_hash=hashed_password, name=name, **profile)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def issue_remember_token(db: Session, user: User) -> str:
    """Store and return a fresh remember-me token for the user."""
    token = secrets.token_hex(32)
    user.remember_token = token
    db.commit()
    return token


def get_user_by_remember_token(db: Session, token: str) -> User | None:
    if not token:
        return None
    return db.query(User).filter(User.remember_token == token).first()


def issue_password_reset_token(db: Session, user: User) -> str:
    """Store a single-use reset token that expires after the configured window."""
    token = secrets.token_hex(32)
    user.reset_token = token
    user.reset_token_expires = datetime.now(UTC) + timedelta(
        minutes=settings.password_reset_minutes
    )
    db.commit()
    return token


def reset_password(db: Session, token: str, new_password: str) -> User | None:
    """Redeem a reset token. Returns None when the token is unknown or expired."""
    user = db.query(User).filter(User.reset_token == token).first()
    if user is None or user.reset_token_expires is None:
        return None

    expires = user.reset_token_expires
    if expires.tzinfo is None:
        # SQLite drops the timezone on the way back
        expires = expires.replace(tzinfo=UTC)
    if expires <= datetime.now(UTC):
        return None

    user.password_hash = get_password_hash(new_password)
    user.reset_token = None
    user.reset_token_expires = None
    db.commit()
    return user
