"""User account API endpoints."""

from fastapi import APIRouter, Response
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.api.dependencies import ADMIN_ONLY, AUTHENTICATED
from src.api.handler import HandlerContext, HandlerOptions, api_route
from src.api.responses import page_info, pagination, success
from src.database import MAX_INTEGER, open_session
from src.errors import ConflictError, NotFoundError
from src.models.user import User
from src.schemas.user import ProfileUpdate, UserCreate, UserDetail, UserUpdate
from src.services.auth import create_user, get_user_by_email

router = APIRouter(prefix="/api/v1/users", tags=["users"])


def get_user(db: Session, user_id: int) -> User:
    user = None
    if user_id <= MAX_INTEGER:
        user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")
    return user


def _own_account(db: Session, ctx: HandlerContext) -> User:
    if ctx.user.is_staff:
        raise NotFoundError("Staff sessions have no account profile")
    return get_user(db, int(ctx.user.id))


@api_route(router, "", HandlerOptions(method="GET", auth=ADMIN_ONLY))
async def list_users(ctx: HandlerContext) -> Response:
    """List accounts, newest first. Supports ``limit``, ``page`` and ``search``."""
    limit, page, offset = pagination(ctx.search_params)
    search = ctx.search_params.get("search")

    with open_session() as db:
        query = db.query(User)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                func.lower(User.email).like(pattern) | func.lower(User.name).like(pattern)
            )
        total = query.count()
        users = query.order_by(User.created_at.desc(), User.id.desc()).offset(offset).limit(limit).all()
        data = [UserDetail.model_validate(u) for u in users]

    return success(users=data, pagination=page_info(total, page, limit))


@api_route(router, "", HandlerOptions(method="POST", schema=UserCreate, auth=ADMIN_ONLY), status_code=201)
async def create_user_account(ctx: HandlerContext) -> Response:
    """Create an account on behalf of someone else."""
    data: UserCreate = ctx.data

    with open_session() as db:
        if get_user_by_email(db, data.email):
            raise ConflictError("Email already in use")
        try:
            user = create_user(db, data.email, data.password, data.name, role=data.role)
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("Email already in use") from e
        return success(201, user=UserDetail.model_validate(user))


@api_route(router, "/profile", HandlerOptions(method="GET", auth=AUTHENTICATED))
async def get_profile(ctx: HandlerContext) -> Response:
    """Get the caller's own account."""
    with open_session() as db:
        return success(user=UserDetail.model_validate(_own_account(db, ctx)))


@api_route(router, "/profile", HandlerOptions(method="PATCH", schema=ProfileUpdate, auth=AUTHENTICATED))
async def update_profile(ctx: HandlerContext) -> Response:
    """Update the caller's own account."""
    with open_session() as db:
        user = _own_account(db, ctx)
        for name, value in ctx.data.model_dump(exclude_unset=True).items():
            setattr(user, name, value)
        db.commit()
        db.refresh(user)
        return success(user=UserDetail.model_validate(user))


@api_route(router, "/{user_id:int}", HandlerOptions(method="GET", auth=ADMIN_ONLY))
async def get_user_detail(ctx: HandlerContext) -> Response:
    with open_session() as db:
        return success(user=UserDetail.model_validate(get_user(db, ctx.params["user_id"])))


@api_route(router, "/{user_id:int}", HandlerOptions(method="PATCH", schema=UserUpdate, auth=ADMIN_ONLY))
async def update_user(ctx: HandlerContext) -> Response:
    """Admin edit of an account. Accounts are never hard-deleted."""
    data: UserUpdate = ctx.data
    changes = data.model_dump(exclude_unset=True)

    with open_session() as db:
        user = get_user(db, ctx.params["user_id"])

        new_email = changes.get("email")
        if new_email and new_email != user.email and get_user_by_email(db, new_email):
            raise ConflictError("Email already in use")
        for required in ("email", "role"):
            if required in changes and changes[required] is None:
                del changes[required]

        for name, value in changes.items():
            setattr(user, name, value)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise ConflictError("Email already in use") from e
        db.refresh(user)
        return success(user=UserDetail.model_validate(user))
