"""Response helpers shared by route modules."""

from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.datastructures import QueryParams

from src.database import MAX_INTEGER
from src.errors import BadRequestError


def success(status_code: int = 200, **payload: Any) -> JSONResponse:
    """JSON body of the form ``{"success": true, **payload}``."""
    return JSONResponse(jsonable_encoder({"success": True, **payload}), status_code=status_code)


def pagination(
    search_params: QueryParams, default_limit: int = 20, max_limit: int = 100
) -> tuple[int, int, int]:
    """Read ``limit`` and ``page`` from the query string.

    Returns:
        (limit, page, offset)
    """
    try:
        limit = int(search_params.get("limit", default_limit))
        page = int(search_params.get("page", 1))
    except ValueError as e:
        raise BadRequestError("limit and page must be integers") from e
    if limit < 1 or page < 1:
        raise BadRequestError("limit and page must be positive")
    limit = min(limit, max_limit)
    offset = (page - 1) * limit
    if offset > MAX_INTEGER:
        raise BadRequestError("page is out of range")
    return limit, page, offset


def page_info(total: int, page: int, limit: int) -> dict[str, int]:
    return {"total": total, "page": page, "limit": limit, "pages": -(-total // limit)}
