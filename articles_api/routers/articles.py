from fastapi import APIRouter, Depends
from articles_api.database import StorageGateway, get_gateway
from articles_api.schemas import (
    ArticleCreate,
    ArticleResponse,
    ArticleTitleUpdate,
    ArticleUpdate,
    DeleteResponse,
    TitleUpdateResponse,
)
from articles_api.services import article_service

router = APIRouter(prefix="/articles", tags=["articles"])

@router.get("", response_model=list[ArticleResponse])
async def list_articles(gateway: StorageGateway = Depends(get_gateway)):
    return await article_service.list_articles(gateway)

@router.post("", status_code=201, response_model=ArticleResponse)
async def create_article(data: ArticleCreate, gateway: StorageGateway = Depends(get_gateway)):
    return await article_service.create_article(gateway, data)

@router.put("/edit", response_model=ArticleResponse)
async def update_article(data: ArticleUpdate, gateway: StorageGateway = Depends(get_gateway)):
    return await article_service.update_article(gateway, data)

@router.patch("/edit/title", response_model=TitleUpdateResponse)
async def update_article_title(data: ArticleTitleUpdate, gateway: StorageGateway = Depends(get_gateway)):
    return await article_service.update_article_title(gateway, data)

@router.delete("/{article_id}", response_model=DeleteResponse)
async def delete_article(article_id: int, gateway: StorageGateway = Depends(get_gateway)):
    return await article_service.delete_article(gateway, article_id)
