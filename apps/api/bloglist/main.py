"""FastAPI application entrypoint."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from bloglist.core.security import PasswordHasher
from bloglist.errors import ApiError
from bloglist.repositories.memory import InMemoryStore
from bloglist.routes import login_router, posts_router, users_router
from bloglist.schemas.error import ErrorResponse


_OPENAPI_RESPONSE_CODES: dict[str, dict[str, set[str]]] = {
    "/api/posts": {"get": {"200"}, "post": {"201", "400", "401"}},
    "/api/posts/stats": {"get": {"200"}},
    "/api/posts/{postId}": {
        "get": {"200", "404"},
        "put": {"200", "400", "401", "403", "404"},
        "delete": {"204", "401", "403", "404"},
    },
    "/api/users": {"get": {"200"}, "post": {"201", "400"}},
    "/api/login": {"post": {"200", "401"}},
}

# Body validation failures on these routes render as 400 VALIDATION_ERROR.
# Keyed by route name: the matched route's path is router-relative on some FastAPI releases.
_VALIDATION_MESSAGES: dict[tuple[str, str], str] = {
    ("POST", "create_post"): "Invalid post payload",
    ("PUT", "update_post"): "Invalid post payload",
    ("POST", "create_user"): "Invalid user payload",
    ("POST", "login"): "Invalid login payload",
}


def _apply_contract_response_codes(schema: dict) -> None:
    """Limit documented response codes to the ones each route can return."""
    for path, methods in _OPENAPI_RESPONSE_CODES.items():
        path_item = schema.get("paths", {}).get(path)
        if not path_item:
            continue

        for method, allowed_codes in methods.items():
            operation = path_item.get(method)
            if not operation:
                continue

            responses = operation.setdefault("responses", {})
            for status_code in list(responses.keys()):
                if status_code not in allowed_codes:
                    responses.pop(status_code, None)

            for status_code in sorted(allowed_codes):
                responses.setdefault(status_code, {"description": "See API contract"})


def create_app(*, store: InMemoryStore | None = None, password_hasher: PasswordHasher | None = None) -> FastAPI:
    app = FastAPI(title="Bloglist API", version="1.0.0")
    app.state.store = store if store is not None else InMemoryStore()
    app.state.password_hasher = password_hasher if password_hasher is not None else PasswordHasher()

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        route = request.scope.get("route")
        route_name = getattr(route, "name", None)
        message = _VALIDATION_MESSAGES.get((request.method.upper(), route_name))
        if message is not None:
            payload = ErrorResponse(
                code="VALIDATION_ERROR",
                message=message,
                details={"fields": [".".join(str(part) for part in error["loc"]) for error in exc.errors()]},
            )
            return JSONResponse(status_code=400, content=payload.model_dump())

        return await request_validation_exception_handler(request, exc)

    api_prefix = "/api"
    app.include_router(posts_router, prefix=api_prefix)
    app.include_router(users_router, prefix=api_prefix)
    app.include_router(login_router, prefix=api_prefix)

    def custom_openapi() -> dict:
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        _apply_contract_response_codes(schema)
        app.openapi_schema = schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app


app = create_app()
