"""
Article service — business logic for the Article resource.

Design notes
------------
- Every function takes the ``StorageGateway`` as its first argument; the
  router obtains it from the ``get_gateway`` dependency.
- Statements are plain parameterized SQL. Each one commits on its own, so
  a function that issues two statements (the title pre-check followed by
  the insert) is not atomic. The unique constraint on ``articles.title``
  catches the race the pre-check cannot, and the resulting
  ``IntegrityError`` is reported as a duplicate title.
- Store failures are re-raised as ``StorageError`` carrying the driver
  message; the exception handlers in ``articles_api.errors`` pick the
  HTTP status.
"""
from typing import Any

from sqlalchemy.exc import IntegrityError

from articles_api.config import settings
from articles_api.database import STORE_ERRORS, StorageGateway
from articles_api.errors import (
    MSG_DELETE_FAILED,
    MSG_ID_AND_TITLE_REQUIRED,
    MSG_ID_REQUIRED,
    MSG_MISSING_ARTICLE_FIELDS,
    ArticleNotFoundError,
    DuplicateTitleError,
    EmptyTableError,
    MissingFieldError,
    StorageError,
)
from articles_api.schemas import ArticleCreate, ArticleTitleUpdate, ArticleUpdate

MSG_TITLE_UPDATED = "Le titre de l'article a été mis à jour avec succès."
MSG_DELETED = "L'article a été supprimé avec succès."

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_COLUMNS = "id, title, content, author"

SQL_LIST = f"SELECT {_COLUMNS} FROM articles ORDER BY id ASC"
SQL_COUNT_TITLE = "SELECT COUNT(id) AS count FROM articles WHERE title = :title"
SQL_INSERT = (
    "INSERT INTO articles (title, content, author) "
    f"VALUES (:title, :content, :author) RETURNING {_COLUMNS}"
)
SQL_UPDATE = (
    "UPDATE articles SET title = :title, content = :content, author = :author "
    f"WHERE id = :id RETURNING {_COLUMNS}"
)
SQL_UPDATE_TITLE = f"UPDATE articles SET title = :title WHERE id = :id RETURNING {_COLUMNS}"
SQL_DELETE = f"DELETE FROM articles WHERE id = :id RETURNING {_COLUMNS}"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _store_message(exc: Exception) -> str:
    """Driver-level message without SQLAlchemy's statement dump."""
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)


async def title_exists(gateway: StorageGateway, title: str) -> bool:
    rows = await gateway.query(SQL_COUNT_TITLE, {"title": title})
    return rows[0]["count"] > 0


# ---------------------------------------------------------------------------
# Public service functions
# ---------------------------------------------------------------------------

async def list_articles(gateway: StorageGateway) -> list[dict[str, Any]]:
    """
    Return every article ordered by ascending id.

    An empty table raises ``EmptyTableError`` unless
    ``settings.EMPTY_LIST_IS_ERROR`` is off.
    """
    try:
        rows = await gateway.query(SQL_LIST)
    except STORE_ERRORS as exc:
        raise StorageError(_store_message(exc)) from exc
    if not rows and settings.EMPTY_LIST_IS_ERROR:
        raise EmptyTableError()
    return rows


async def create_article(gateway: StorageGateway, data: ArticleCreate) -> dict[str, Any]:
    """Insert a new article and return the stored row."""
    # Only absent values are rejected; empty strings satisfy NOT NULL.
    if data.title is None or data.content is None or data.author is None:
        raise MissingFieldError(MSG_MISSING_ARTICLE_FIELDS)
    try:
        if await title_exists(gateway, data.title):
            raise DuplicateTitleError()
        rows = await gateway.query(
            SQL_INSERT,
            {"title": data.title, "content": data.content, "author": data.author},
        )
    except IntegrityError as exc:
        # Another request inserted the same title after our pre-check.
        raise DuplicateTitleError() from exc
    except STORE_ERRORS as exc:
        raise StorageError(_store_message(exc)) from exc
    return rows[0]


async def update_article(gateway: StorageGateway, data: ArticleUpdate) -> dict[str, Any]:
    """
    Overwrite title, content and author of the article ``data.id``.

    All three columns are written from the request as-is; omitted values are
    sent as NULL and rejected by the NOT NULL constraints.
    """
    if not data.id:
        raise MissingFieldError(MSG_ID_REQUIRED)
    try:
        rows = await gateway.query(
            SQL_UPDATE,
            {"id": data.id, "title": data.title, "content": data.content, "author": data.author},
        )
    except STORE_ERRORS as exc:
        raise StorageError(_store_message(exc)) from exc
    if not rows:
        raise ArticleNotFoundError()
    return rows[0]


async def update_article_title(gateway: StorageGateway, data: ArticleTitleUpdate) -> dict[str, Any]:
    if not data.id or not data.title:
        raise MissingFieldError(MSG_ID_AND_TITLE_REQUIRED)
    try:
        rows = await gateway.query(SQL_UPDATE_TITLE, {"id": data.id, "title": data.title})
    except STORE_ERRORS as exc:
        raise StorageError(_store_message(exc)) from exc
    if not rows:
        raise ArticleNotFoundError()
    return {"message": MSG_TITLE_UPDATED, "result": rows[0]}


async def delete_article(gateway: StorageGateway, article_id: int) -> dict[str, Any]:
    """
    Delete the article identified by *article_id*.

    A missing row is reported as 404 under both status policies.
    """
    try:
        rows = await gateway.query(SQL_DELETE, {"id": article_id})
    except STORE_ERRORS as exc:
        raise StorageError(MSG_DELETE_FAILED.format(_store_message(exc))) from exc
    if not rows:
        raise ArticleNotFoundError(status_code=404)
    return {"message": MSG_DELETED, "deleted_article": rows[0]}
