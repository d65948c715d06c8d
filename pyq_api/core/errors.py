import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    """Base exception for catalog errors."""

    status_code: int = HTTP_400_BAD_REQUEST

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(CatalogError):
    """Lookup by id or name yielded nothing."""

    status_code = HTTP_404_NOT_FOUND


class UniversityNotFoundError(NotFoundError):
    """A paper references a university id that does not exist."""

    def __init__(self, university_id: int):
        super().__init__("University not found")
        self.university_id = university_id


class DuplicateNameError(CatalogError):
    """Unique name already taken (university name, account username)."""

    status_code = HTTP_409_CONFLICT


class ValidationError(CatalogError):
    """
    Caller-supplied data rejected at the boundary.

    Default 400; the upload path reuses it with 413 / 415.
    """

    status_code = HTTP_400_BAD_REQUEST


class CatalogIntegrityError(CatalogError):
    """
    Internal invariant broken (e.g. a paper whose university is gone).

    Not a caller error: never expected through the create-only lifecycle.
    """

    status_code = HTTP_500_INTERNAL_SERVER_ERROR


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CatalogError)
    async def handle_catalog_error(request: Request, exc: CatalogError) -> JSONResponse:
        if exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error("Catalog integrity error on %s: %s", request.url.path, exc.message)
        else:
            logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})
