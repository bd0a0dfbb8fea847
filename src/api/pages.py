"""CMS page API endpoints."""

from fastapi import APIRouter, Response

from src.api.dependencies import ADMIN_ONLY
from src.api.handler import HandlerContext, HandlerOptions, api_route
from src.api.responses import success
from src.database import open_session
from src.schemas.page import MenuPage, PageCreate, PageResponse, PageUpdate
from src.services.page_service import PageService

router = APIRouter(prefix="/api/v1/pages", tags=["pages"])


@api_route(router, "", HandlerOptions(method="GET", auth=ADMIN_ONLY))
async def list_pages(ctx: HandlerContext) -> Response:
    """List every page in menu order."""
    with open_session() as db:
        pages = [PageResponse.model_validate(p) for p in PageService(db).list_pages()]
    return success(pages=pages, count=len(pages))


@api_route(router, "", HandlerOptions(method="POST", schema=PageCreate, auth=ADMIN_ONLY), status_code=201)
async def create_page(ctx: HandlerContext) -> Response:
    with open_session() as db:
        page = PageService(db).create_page(ctx.data)
        return success(201, page=PageResponse.model_validate(page))


@api_route(router, "/menu", HandlerOptions(method="GET"))
async def get_menu(ctx: HandlerContext) -> Response:
    """Published pages for the site header, or the footer with ``?location=footer``."""
    footer = ctx.search_params.get("location") == "footer"
    with open_session() as db:
        pages = [MenuPage.model_validate(p) for p in PageService(db).menu_pages(footer=footer)]
    return success(pages=pages)


@api_route(router, "/by-slug/{slug}", HandlerOptions(method="GET"))
async def get_page_by_slug(ctx: HandlerContext) -> Response:
    """Public lookup of a published page."""
    with open_session() as db:
        page = PageService(db).get_published_by_slug(ctx.params["slug"])
        return success(page=PageResponse.model_validate(page))


@api_route(router, "/{page_id:int}", HandlerOptions(method="GET", auth=ADMIN_ONLY))
async def get_page(ctx: HandlerContext) -> Response:
    with open_session() as db:
        page = PageService(db).get_page(ctx.params["page_id"])
        return success(page=PageResponse.model_validate(page))


@api_route(router, "/{page_id:int}", HandlerOptions(method=["PATCH", "PUT"], schema=PageUpdate, auth=ADMIN_ONLY))
async def update_page(ctx: HandlerContext) -> Response:
    with open_session() as db:
        page = PageService(db).update_page(ctx.params["page_id"], ctx.data)
        return success(page=PageResponse.model_validate(page))


@api_route(router, "/{page_id:int}", HandlerOptions(method="DELETE", auth=ADMIN_ONLY))
async def delete_page(ctx: HandlerContext) -> Response:
    """Delete a page. Its child pages move to the top level."""
    with open_session() as db:
        PageService(db).delete_page(ctx.params["page_id"])
    return success()
