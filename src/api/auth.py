"""Authentication API endpoints."""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Response
from sqlalchemy.exc import IntegrityError

from src.api.dependencies import AUTHENTICATED
from src.api.handler import HandlerContext, HandlerOptions, api_route
from src.api.responses import success
from src.database import open_session
from src.errors import BadRequestError, ConflictError, UnauthorizedError
from src.schemas.auth import (
    AuthResponse,
    ForgotPassword,
    RememberMeLogin,
    ResetPassword,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.services.auth import (
    authenticate_user,
    create_access_token,
    create_user,
    get_user_by_email,
    get_user_by_remember_token,
    issue_password_reset_token,
    issue_remember_token,
    reset_password,
)
from src.tasks.mail import send_password_reset_email, send_welcome_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])

RESET_REQUESTED_MESSAGE = (
    "If your email exists in our system, you will receive a password reset link"
)


def _queue(task, *args) -> None:
    """Queue a background email; a broker outage must not fail the request."""
    try:
        task.delay(*args)
    except Exception as e:
        logger.warning(f"Could not queue {task.name}: {e}")


@api_route(router, "/register", HandlerOptions(method="POST", schema=UserRegister), status_code=201)
async def register(ctx: HandlerContext) -> Response:
    """Register a new restaurant account from the signup wizard."""
    data: UserRegister = ctx.data
    contact = data.contact_details
    company = data.company_info

    with open_session() as db:
        if get_user_by_email(db, contact.contact_email):
            raise ConflictError("Email already in use")

        try:
            user = create_user(
                db,
                contact.contact_email,
                data.account_credentials.password,
                contact.contact_name,
                username=data.account_credentials.username,
                phone=contact.phone_number,
                job_title=contact.job_title,
                company_name=company.name,
                industry=company.industry,
                business_size=company.business_size,
                num_locations=company.num_locations,
            )
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("Email already in use") from e

        access_token = create_access_token(user.id, user.email, user.role)
        body = AuthResponse(access_token=access_token, user=UserResponse.model_validate(user))

    logger.info(f"Registered user {body.user.id}")
    _queue(send_welcome_email, body.user.email, body.user.name)
    return success(201, **body.model_dump(exclude={"success"}))


@api_route(router, "/login", HandlerOptions(method="POST", schema=UserLogin))
async def login(ctx: HandlerContext) -> Response:
    """Login with email and password."""
    credentials: UserLogin = ctx.data

    with open_session() as db:
        user = authenticate_user(db, credentials.email, credentials.password)
        if not user:
            raise UnauthorizedError("Incorrect email or password")

        remember_token = issue_remember_token(db, user) if credentials.remember_me else None
        body = AuthResponse(
            access_token=create_access_token(user.id, user.email, user.role),
            remember_token=remember_token,
            user=UserResponse.model_validate(user),
        )

    return success(**body.model_dump(exclude={"success"}))


@api_route(router, "/remember-me", HandlerOptions(method="POST", schema=RememberMeLogin))
async def remember_me(ctx: HandlerContext) -> Response:
    """Exchange a remember-me token for a fresh access token."""
    with open_session() as db:
        user = get_user_by_remember_token(db, ctx.data.token)
        if user is None:
            raise UnauthorizedError("Invalid remember-me token")

        body = AuthResponse(
            access_token=create_access_token(user.id, user.email, user.role),
            user=UserResponse.model_validate(user),
        )

    return success(**body.model_dump(exclude={"success"}))


@api_route(router, "/me", HandlerOptions(method="GET", auth=AUTHENTICATED))
async def get_me(ctx: HandlerContext) -> Response:
    """Get current session information."""
    return success(user=asdict(ctx.user))


@api_route(router, "/forgot-password", HandlerOptions(method="POST", schema=ForgotPassword))
async def forgot_password(ctx: HandlerContext) -> Response:
    """Start a password reset.

    The response is the same whether or not the email is registered.
    """
    with open_session() as db:
        user = get_user_by_email(db, ctx.data.email)
        if user is not None:
            token = issue_password_reset_token(db, user)
            _queue(send_password_reset_email, user.email, user.name, token)

    return success(message=RESET_REQUESTED_MESSAGE)


@api_route(router, "/reset-password", HandlerOptions(method="POST", schema=ResetPassword))
async def reset_password_endpoint(ctx: HandlerContext) -> Response:
    """Set a new password using a reset token."""
    data: ResetPassword = ctx.data
    with open_session() as db:
        user = reset_password(db, data.token, data.password)
        if user is None:
            raise BadRequestError("Invalid or expired reset token")
        # Existing remember-me logins are revoked with the old password
        user.remember_token = None
        db.commit()

    return success(message="Password has been reset successfully")
