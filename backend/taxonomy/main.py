from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from .api.middleware.security import SecurityMiddleware
from .api.v1.router import api_router
from .config import settings
from .core.errors import (
    CycleDetectedError,
    DanglingParentError,
    DuplicateNameError,
    DuplicateTermError,
    InvalidParentError,
    MissingVocabularyError,
    TaxonomyError,
)
from .utils.logging import get_logger, setup_logging

if TYPE_CHECKING:
    from fastapi import Request

logger = get_logger(__name__)

ERROR_STATUS: dict[type[TaxonomyError], int] = {
    DuplicateNameError: status.HTTP_409_CONFLICT,
    DuplicateTermError: status.HTTP_409_CONFLICT,
    MissingVocabularyError: status.HTTP_404_NOT_FOUND,
    InvalidParentError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    CycleDetectedError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    DanglingParentError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def taxonomy_error_handler(request: Request, exc: TaxonomyError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("Malformed taxonomy data: %s", exc, extra={"path": request.url.path})
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def create_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title="Taxonomy API",
        debug=settings.debug,
        version="0.1.0",
        root_path=settings.root_path or "",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Accept", "Accept-Language", "Content-Language", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Proxy headers (X-Forwarded-*) when behind ALB/ingress
    app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

    # Trusted hosts (configure in env for production)
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.trusted_hosts)

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    app.add_middleware(SecurityMiddleware)

    app.add_exception_handler(TaxonomyError, taxonomy_error_handler)

    app.include_router(api_router, prefix=settings.api_prefix)
    return app


app = create_app()
