from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Response

from app.config import load_config
from app.schemas.article import ArticleCreate, ArticleOut, ArticleUpdate
from app.services import article_service
from app.services.errors import RecordNotFound


router = APIRouter(prefix="/articles", tags=["articles"])


@router.get("", response_model=List[ArticleOut])
def list_articles(
    status: Optional[str] = None,
    category: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1),
):
    return article_service.list_articles(status=status, category=category, limit=limit)


@router.get("/latest", response_model=List[ArticleOut])
def latest(limit: Optional[int] = Query(None, ge=1)):
    limit = limit or int(load_config().get("articles", {}).get("latest_limit", 5))
    return article_service.latest_articles(limit=limit)


@router.get("/search", response_model=List[ArticleOut])
def search(q: str = Query(..., min_length=1)):
    return article_service.search_articles(q)


@router.post("", response_model=ArticleOut, status_code=201)
def create_article(inp: ArticleCreate):
    return article_service.create_article(inp)


@router.get("/{article_id}", response_model=ArticleOut)
def get_article(article_id: int):
    try:
        return article_service.get_article(article_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{article_id}", response_model=ArticleOut)
def update_article(article_id: int, inp: ArticleUpdate):
    try:
        return article_service.update_article(article_id, inp)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{article_id}", status_code=204)
def delete_article(article_id: int) -> Response:
    try:
        article_service.delete_article(article_id)
    except RecordNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
