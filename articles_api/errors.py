"""
Domain errors and their HTTP translation.

Service functions raise the exceptions below; the handlers registered by
``register_exception_handlers`` turn them into ``{"message": ...}`` bodies.

Two status policies exist. The legacy policy reports nearly everything as
500 (delete's not-found is the only 404), which is what existing clients
of the service expect. With ``STRICT_STATUS_CODES`` enabled, validation
failures become 400, duplicates 409 and missing rows 404; only
infrastructure failures stay 500.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from articles_api.config import settings

logger = logging.getLogger(__name__)

# Client-facing messages.
MSG_EMPTY_TABLE = "La table 'articles' est vide."
MSG_MISSING_ARTICLE_FIELDS = "Le titre, le contenu et l'auteur de l'article sont requis."
MSG_DUPLICATE_TITLE = "Un article avec ce titre existe déjà."
MSG_ID_REQUIRED = "L'ID de l'article est requis pour la mise à jour."
MSG_ID_AND_TITLE_REQUIRED = "L'ID et le nouveau titre sont requis."
MSG_NOT_FOUND = "Aucun article trouvé avec cet ID."
MSG_DELETE_FAILED = "Erreur lors de la suppression de l'article : {}"


class ArticleServiceError(Exception):
    """Base class; ``status_code`` is the legacy code, ``strict_status_code`` the corrected one."""

    status_code: int = 500
    strict_status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def resolve_status(self, strict: bool) -> int:
        return self.strict_status_code if strict else self.status_code


class MissingFieldError(ArticleServiceError):
    strict_status_code = 400


class DuplicateTitleError(ArticleServiceError):
    strict_status_code = 409

    def __init__(self, message: str = MSG_DUPLICATE_TITLE) -> None:
        super().__init__(message)


class ArticleNotFoundError(ArticleServiceError):
    strict_status_code = 404

    def __init__(self, message: str = MSG_NOT_FOUND, status_code: int | None = None) -> None:
        super().__init__(message, status_code)


class EmptyTableError(ArticleServiceError):
    strict_status_code = 404

    def __init__(self, message: str = MSG_EMPTY_TABLE) -> None:
        super().__init__(message)


class StorageError(ArticleServiceError):
    """The relational store rejected or failed a statement."""


# ---------------------------------------------------------------------------
# FastAPI wiring
# ---------------------------------------------------------------------------

async def article_error_handler(request: Request, exc: ArticleServiceError) -> JSONResponse:
    status = exc.resolve_status(settings.STRICT_STATUS_CODES)
    if isinstance(exc, StorageError):
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=status, content={"message": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Body/path values of the wrong type (e.g. a non-numeric id).
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    if request.method == "DELETE":
        details = MSG_DELETE_FAILED.format(details)
    status = 400 if settings.STRICT_STATUS_CODES else 500
    return JSONResponse(status_code=status, content={"message": details})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ArticleServiceError, article_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
