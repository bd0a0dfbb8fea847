"""Declarative route handlers.

``create_api_handler`` turns a route configuration into a Starlette/FastAPI
endpoint that applies the same checks to every route, in this order:

1. HTTP method filter (405 on mismatch)
2. authentication and role check
3. request body validation against a pydantic schema
4. the business handler

Each step short-circuits by raising; every error is rendered once by
``handle_route_error``.
"""

import json
import logging
from collections.abc import Awaitable, Callable, Collection
from dataclasses import dataclass, field
from typing import Any

import pydantic
from fastapi import APIRouter, Request, Response
from starlette.datastructures import QueryParams

from src.errors import (
    BadRequestError,
    ForbiddenError,
    UnauthorizedError,
    ValidationError,
    format_validation_errors,
    handle_route_error,
    method_not_allowed,
)
from src.models.enums import Role
from src.services.session import SessionUser, get_session

logger = logging.getLogger(__name__)

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


@dataclass(frozen=True)
class AuthOptions:
    required: bool = False
    roles: Collection[str] = ()


@dataclass(frozen=True)
class HandlerOptions:
    """Cross-cutting policy for one endpoint."""

    method: str | Collection[str]
    schema: type[pydantic.BaseModel] | None = None
    auth: AuthOptions | None = None

    @property
    def allowed_methods(self) -> frozenset[str]:
        methods = [self.method] if isinstance(self.method, str) else self.method
        return frozenset(m.upper() for m in methods)


@dataclass
class HandlerContext:
    """Everything a business handler gets to see about the request."""

    request: Request
    params: dict[str, Any] = field(default_factory=dict)
    search_params: QueryParams = field(default_factory=QueryParams)
    data: Any = None
    user: SessionUser | None = None


Handler = Callable[[HandlerContext], Awaitable[Response]]


async def validate_data(request: Request, schema: type[pydantic.BaseModel] | None) -> Any:
    """Parse the JSON body against ``schema`` for methods that carry one."""
    if schema is None or request.method not in BODY_METHODS:
        return None

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise BadRequestError("Invalid request data") from e

    try:
        return schema.model_validate(body)
    except pydantic.ValidationError as e:
        raise ValidationError("Validation failed", format_validation_errors(e)) from e


def authenticate_request(request: Request, auth: AuthOptions | None) -> SessionUser | None:
    """Resolve the caller when the route asks for authentication."""
    if auth is None or not auth.required:
        return None

    try:
        session = get_session(request)
    except Exception as e:
        logger.error(f"Authentication error: {e}", exc_info=True)
        raise UnauthorizedError("Authentication failed") from e

    if session is None or session.user is None:
        raise UnauthorizedError("Authentication required")

    if auth.roles:
        role = session.user.role or Role.USER.value
        if role not in auth.roles:
            raise ForbiddenError("Insufficient permissions")

    return session.user


def create_api_handler(options: HandlerOptions, handler: Handler) -> Callable[[Request], Awaitable[Response]]:
    """Build an endpoint that runs ``handler`` behind the configured checks.

    Example::

        endpoint = create_api_handler(
            HandlerOptions(method="GET", auth=AuthOptions(required=True, roles=["admin"])),
            list_pages,
        )
    """
    allowed_methods = options.allowed_methods

    async def endpoint(request: Request) -> Response:
        try:
            if request.method not in allowed_methods:
                return method_not_allowed(request.method)

            user = authenticate_request(request, options.auth)
            data = await validate_data(request, options.schema)

            return await handler(
                HandlerContext(
                    request=request,
                    params=dict(request.path_params),
                    search_params=request.query_params,
                    data=data,
                    user=user,
                )
            )
        except Exception as e:
            return handle_route_error(e)

    # FastAPI derives operation ids and docs from these
    endpoint.__name__ = handler.__name__
    endpoint.__doc__ = handler.__doc__
    return endpoint


def api_route(router: APIRouter, path: str, options: HandlerOptions, **kwargs: Any):
    """Register ``handler`` on ``router`` behind ``create_api_handler``."""

    def decorator(handler: Handler) -> Handler:
        router.add_api_route(
            path,
            create_api_handler(options, handler),
            methods=sorted(options.allowed_methods),
            **kwargs,
        )
        return handler

    return decorator
