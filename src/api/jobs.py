"""Careers API endpoints: public listings and admin management."""

from fastapi import APIRouter, Response
from sqlalchemy.orm import Session

from src.api.dependencies import ADMIN_ONLY, BACK_OFFICE
from src.api.handler import HandlerContext, HandlerOptions, api_route
from src.api.responses import success
from src.database import open_session
from src.errors import NotFoundError
from src.models.job import Job
from src.schemas.job import JobCreate, JobResponse, JobUpdate

router = APIRouter(prefix="/api/v1/jobs", tags=["jobs"])
admin_router = APIRouter(prefix="/api/v1/admin/jobs", tags=["jobs"])

# Columns an update may not clear
NOT_NULLABLE = frozenset(
    {"title", "department", "location", "type", "description", "responsibilities", "requirements", "is_active"}
)


def get_job(db: Session, job_id: str, active_only: bool = False) -> Job:
    query = db.query(Job).filter(Job.id == job_id)
    if active_only:
        query = query.filter(Job.is_active.is_(True))
    job = query.first()
    if job is None:
        raise NotFoundError("Job not found")
    return job


@api_route(router, "", HandlerOptions(method="GET"))
async def list_open_jobs(ctx: HandlerContext) -> Response:
    """Active postings for the careers page, optionally filtered by ``department``."""
    department = ctx.search_params.get("department")
    with open_session() as db:
        query = db.query(Job).filter(Job.is_active.is_(True))
        if department:
            query = query.filter(Job.department == department)
        jobs = query.order_by(Job.created_at.desc()).all()
        return success(jobs=[JobResponse.model_validate(j) for j in jobs])


@api_route(router, "/{job_id}", HandlerOptions(method="GET"))
async def get_open_job(ctx: HandlerContext) -> Response:
    with open_session() as db:
        return success(job=JobResponse.model_validate(get_job(db, ctx.params["job_id"], active_only=True)))


@api_route(admin_router, "", HandlerOptions(method="GET", auth=BACK_OFFICE))
async def list_jobs(ctx: HandlerContext) -> Response:
    with open_session() as db:
        jobs = db.query(Job).order_by(Job.created_at.desc()).all()
        return success(jobs=[JobResponse.model_validate(j) for j in jobs])


@api_route(admin_router, "", HandlerOptions(method="POST", schema=JobCreate, auth=ADMIN_ONLY), status_code=201)
async def create_job(ctx: HandlerContext) -> Response:
    with open_session() as db:
        job = Job(**ctx.data.model_dump())
        db.add(job)
        db.commit()
        db.refresh(job)
        return success(201, job=JobResponse.model_validate(job))


@api_route(admin_router, "/{job_id}", HandlerOptions(method="GET", auth=BACK_OFFICE))
async def get_job_detail(ctx: HandlerContext) -> Response:
    with open_session() as db:
        return success(job=JobResponse.model_validate(get_job(db, ctx.params["job_id"])))


@api_route(admin_router, "/{job_id}", HandlerOptions(method="PATCH", schema=JobUpdate, auth=ADMIN_ONLY))
async def update_job(ctx: HandlerContext) -> Response:
    with open_session() as db:
        job = get_job(db, ctx.params["job_id"])
        for name, value in ctx.data.model_dump(exclude_unset=True).items():
            if value is None and name in NOT_NULLABLE:
                continue
            setattr(job, name, value)
        db.commit()
        db.refresh(job)
        return success(job=JobResponse.model_validate(job))


@api_route(admin_router, "/{job_id}", HandlerOptions(method="DELETE", auth=ADMIN_ONLY))
async def delete_job(ctx: HandlerContext) -> Response:
    with open_session() as db:
        db.delete(get_job(db, ctx.params["job_id"]))
        db.commit()
    return success(message="Job deleted successfully")
