"""Staff member API endpoints."""

from fastapi import APIRouter, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.api.dependencies import ADMIN_ONLY
from src.api.handler import HandlerContext, HandlerOptions, api_route
from src.api.responses import success
from src.database import open_session
from src.errors import ConflictError, NotFoundError, UnauthorizedError
from src.models.staff_member import StaffMember
from src.schemas.staff import StaffCreate, StaffLogin, StaffResponse, StaffUpdate
from src.services.auth import (
    STAFF_TOKEN,
    authenticate_staff,
    create_access_token,
    get_password_hash,
)

router = APIRouter(prefix="/api/v1/staff", tags=["staff"])


def get_staff_member(db: Session, staff_id: str) -> StaffMember:
    staff = db.query(StaffMember).filter(StaffMember.id == staff_id).first()
    if staff is None:
        raise NotFoundError("Staff member not found")
    return staff


def _ensure_email_available(db: Session, email: str) -> None:
    if db.query(StaffMember.id).filter(StaffMember.email == email).first() is not None:
        raise ConflictError("Email already in use")


def _commit_unique_email(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise ConflictError("Email already in use") from e


@api_route(router, "/login", HandlerOptions(method="POST", schema=StaffLogin))
async def staff_login(ctx: HandlerContext) -> Response:
    """Issue a staff access token."""
    with open_session() as db:
        staff = authenticate_staff(db, ctx.data.email, ctx.data.password)
        if staff is None:
            raise UnauthorizedError("Incorrect email or password")
        token = create_access_token(staff.id, staff.email, staff.role, kind=STAFF_TOKEN)
        return success(access_token=token, token_type="bearer", staff=StaffResponse.model_validate(staff))


@api_route(router, "", HandlerOptions(method="GET", auth=ADMIN_ONLY))
async def list_staff(ctx: HandlerContext) -> Response:
    with open_session() as db:
        members = db.query(StaffMember).order_by(StaffMember.name).all()
        return success(staff=[StaffResponse.model_validate(m) for m in members])


@api_route(router, "", HandlerOptions(method="POST", schema=StaffCreate, auth=ADMIN_ONLY), status_code=201)
async def create_staff(ctx: HandlerContext) -> Response:
    data: StaffCreate = ctx.data
    with open_session() as db:
        _ensure_email_available(db, data.email)
        staff = StaffMember(
            email=data.email,
            name=data.name,
            password=get_password_hash(data.password),
            role=data.role,
            is_active=data.is_active,
        )
        db.add(staff)
        _commit_unique_email(db)
        db.refresh(staff)
        return success(201, staff=StaffResponse.model_validate(staff))


@api_route(router, "/{staff_id}", HandlerOptions(method="GET", auth=ADMIN_ONLY))
async def get_staff(ctx: HandlerContext) -> Response:
    with open_session() as db:
        return success(staff=StaffResponse.model_validate(get_staff_member(db, ctx.params["staff_id"])))


@api_route(router, "/{staff_id}", HandlerOptions(method="PATCH", schema=StaffUpdate, auth=ADMIN_ONLY))
async def update_staff(ctx: HandlerContext) -> Response:
    changes = ctx.data.model_dump(exclude_unset=True)
    with open_session() as db:
        staff = get_staff_member(db, ctx.params["staff_id"])

        if changes.get("email") and changes["email"] != staff.email:
            _ensure_email_available(db, changes["email"])
        if changes.get("password"):
            changes["password"] = get_password_hash(changes["password"])

        for name, value in changes.items():
            if value is not None:
                setattr(staff, name, value)
        _commit_unique_email(db)
        db.refresh(staff)
        return success(staff=StaffResponse.model_validate(staff))


@api_route(router, "/{staff_id}", HandlerOptions(method="DELETE", auth=ADMIN_ONLY))
async def delete_staff(ctx: HandlerContext) -> Response:
    with open_session() as db:
        staff = get_staff_member(db, ctx.params["staff_id"])
        db.delete(staff)
        db.commit()
    return success(message="Staff member deleted")
