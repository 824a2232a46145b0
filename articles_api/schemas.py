from pydantic import BaseModel, Field


# --- Requests ---
#
# Every field is optional at the parsing layer: presence is checked by the
# service functions so a missing value produces a ``{message}`` error body
# with the configured status code rather than a 422.

class ArticleCreate(BaseModel):
    title: str | None = None
    content: str | None = None
    author: str | None = None


class ArticleUpdate(ArticleCreate):
    id: int | None = None


class ArticleTitleUpdate(BaseModel):
    id: int | None = None
    title: str | None = None


# --- Responses ---

class ArticleResponse(BaseModel):
    id: int
    title: str
    content: str
    author: str


class TitleUpdateResponse(BaseModel):
    message: str
    result: ArticleResponse


class DeleteResponse(BaseModel):
    message: str
    deleted_article: ArticleResponse = Field(serialization_alias="deletedArticle")
