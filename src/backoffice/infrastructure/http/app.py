"""FastAPI application factory.

The app is assembled from already-built collaborators: the repositories
from the composition root and an identity provider that turns bearer
tokens into principals.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backoffice.domain.exceptions import (
    AuthenticationError,
    DomainException,
    EntityNotFoundError,
    ForbiddenError,
    InvalidStateError,
    StoreError,
    ValidationError,
)
from backoffice.infrastructure.bootstrap import Repositories
from backoffice.infrastructure.http.routes import router
from backoffice.infrastructure.http.security import IdentityProvider
from backoffice.infrastructure.logging_config import REQUEST_ID_CTX

logger = logging.getLogger(__name__)

STATUS_CODES: dict[type[DomainException], int] = {
    ValidationError: 400,
    AuthenticationError: 401,
    ForbiddenError: 403,
    EntityNotFoundError: 404,
    InvalidStateError: 409,
    StoreError: 500,
}


def status_code_for(exc: DomainException) -> int:
    for exc_type, code in STATUS_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return 500


async def domain_error_handler(request: Request, exc: DomainException) -> JSONResponse:
    status = status_code_for(exc)
    message = str(exc)
    headers = None
    if status >= 500:
        logger.error("request failed", exc_info=exc, extra={"path": request.url.path})
        message = "internal error"
    elif status == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse({"error": message}, status_code=status, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "invalid request")
    return JSONResponse(
        {"error": f"{location}: {message}" if location else message},
        status_code=400,
    )


async def add_request_id(request: Request, call_next):
    rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = rid
    token = REQUEST_ID_CTX.set(rid)
    try:
        response = await call_next(request)
        logger.info(
            "request handled",
            extra={"path": request.url.path, "method": request.method, "status": response.status_code},
        )
    finally:
        REQUEST_ID_CTX.reset(token)
    response.headers["X-Request-ID"] = rid
    return response


def create_app(repositories: Repositories, identity: IdentityProvider) -> FastAPI:
    app = FastAPI(title="Backoffice API")
    app.state.repositories = repositories
    app.state.identity = identity
    app.add_exception_handler(DomainException, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.middleware("http")(add_request_id)
    app.include_router(router)
    return app
