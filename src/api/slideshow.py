"""Dashboard slideshow API endpoints.

Slides are read and written with raw SQL through the shared SQL client.
"""

from fastapi import APIRouter, Response

from src.api.dependencies import ADMIN_ONLY
from src.api.handler import HandlerContext, HandlerOptions, api_route
from src.api.responses import success
from src.database import execute_query
from src.errors import BadRequestError, NotFoundError
from src.models.mixins import generate_id
from src.schemas.slideshow import SlideCreate, SlideResponse, SlideUpdate

router = APIRouter(prefix="/api/v1/slideshow", tags=["slideshow"])

# Request field -> column; "order" is a reserved word
UPDATABLE_COLUMNS = {
    "title": "title",
    "description": "description",
    "image_url": "image_url",
    "icon_type": "icon_type",
    "order": '"order"',
    "is_active": "is_active",
}


def _slides(rows: list[dict]) -> list[SlideResponse]:
    return [SlideResponse.model_validate(row) for row in rows]


@api_route(router, "", HandlerOptions(method="GET"))
async def list_active_slides(ctx: HandlerContext) -> Response:
    """Active slides in display order."""
    rows = execute_query(
        'SELECT * FROM slideshow WHERE is_active = :active ORDER BY "order" ASC, created_at ASC',
        {"active": True},
    )
    return success(slides=_slides(rows))


@api_route(router, "/all", HandlerOptions(method="GET", auth=ADMIN_ONLY))
async def list_all_slides(ctx: HandlerContext) -> Response:
    rows = execute_query('SELECT * FROM slideshow ORDER BY "order" ASC, created_at ASC')
    return success(slides=_slides(rows))


@api_route(router, "", HandlerOptions(method="POST", schema=SlideCreate, auth=ADMIN_ONLY), status_code=201)
async def create_slide(ctx: HandlerContext) -> Response:
    data: SlideCreate = ctx.data
    rows = execute_query(
        """
        INSERT INTO slideshow (id, title, description, image_url, icon_type, "order", is_active)
        VALUES (:id, :title, :description, :image_url, :icon_type, :order, :is_active)
        RETURNING *
        """,
        {"id": generate_id(), **data.model_dump()},
    )
    return success(201, slide=_slides(rows)[0])


@api_route(router, "/{slide_id}", HandlerOptions(method="PATCH", schema=SlideUpdate, auth=ADMIN_ONLY))
async def update_slide(ctx: HandlerContext) -> Response:
    changes = {
        name: value
        for name, value in ctx.data.model_dump(exclude_unset=True).items()
        if value is not None
    }
    if not changes:
        raise BadRequestError("No fields to update")

    assignments = ", ".join(f"{UPDATABLE_COLUMNS[name]} = :{name}" for name in changes)
    rows = execute_query(
        f"UPDATE slideshow SET {assignments}, updated_at = CURRENT_TIMESTAMP "  # noqa: S608
        "WHERE id = :slide_id RETURNING *",
        {**changes, "slide_id": ctx.params["slide_id"]},
    )
    if not rows:
        raise NotFoundError("Slideshow entry not found")
    return success(slide=_slides(rows)[0])


@api_route(router, "/{slide_id}", HandlerOptions(method="DELETE", auth=ADMIN_ONLY))
async def delete_slide(ctx: HandlerContext) -> Response:
    rows = execute_query(
        "DELETE FROM slideshow WHERE id = :slide_id RETURNING id", {"slide_id": ctx.params["slide_id"]}
    )
    if not rows:
        raise NotFoundError("Slideshow entry not found")
    return success(message="Slide deleted")
