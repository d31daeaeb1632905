from __future__ import annotations

import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.db.models import Article
from app.db.session import SessionLocal
from app.schemas.article import ArticleCreate, ArticleOut, ArticleUpdate
from app.services.errors import RecordNotFound
from app.utils.time import today


logger = logging.getLogger(__name__)

PUBLISHED = "published"


def _get(db: Session, article_id: int) -> Article:
    row = db.get(Article, article_id)
    if row is None:
        raise RecordNotFound("article", article_id)
    return row


def _stamp_publication(row: Article) -> None:
    if row.status == PUBLISHED and row.published_on is None:
        row.published_on = today()


def list_articles(
    status: Optional[str] = None,
    category: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[ArticleOut]:
    db = SessionLocal()
    try:
        q = db.query(Article)
        if status:
            q = q.filter(Article.status == status)
        if category:
            q = q.filter(Article.category == category)
        q = q.order_by(Article.published_on.desc(), Article.id.desc())
        if limit:
            q = q.limit(limit)
        return [ArticleOut.model_validate(r) for r in q.all()]
    finally:
        db.close()


def latest_articles(limit: int = 5) -> List[ArticleOut]:
    return list_articles(status=PUBLISHED, limit=limit)


def search_articles(query: str) -> List[ArticleOut]:
    """Published articles whose title or body contains the query."""
    pattern = f"%{query.strip()}%"
    db = SessionLocal()
    try:
        rows = (
            db.query(Article)
            .filter(Article.status == PUBLISHED)
            .filter(or_(Article.title.ilike(pattern), Article.body.ilike(pattern)))
            .order_by(Article.published_on.desc(), Article.id.desc())
            .all()
        )
        return [ArticleOut.model_validate(r) for r in rows]
    finally:
        db.close()


def get_article(article_id: int) -> ArticleOut:
    db = SessionLocal()
    try:
        return ArticleOut.model_validate(_get(db, article_id))
    finally:
        db.close()


def create_article(data: ArticleCreate) -> ArticleOut:
    db = SessionLocal()
    try:
        row = Article(**data.model_dump())
        _stamp_publication(row)
        db.add(row)
        db.commit()
        db.refresh(row)
        logger.info("Created article id=%s status=%s", row.id, row.status)
        return ArticleOut.model_validate(row)
    finally:
        db.close()


def update_article(article_id: int, data: ArticleUpdate) -> ArticleOut:
    fields = data.model_dump(exclude_unset=True)
    db = SessionLocal()
    try:
        row = _get(db, article_id)
        for k, v in fields.items():
            setattr(row, k, v)
        _stamp_publication(row)
        db.commit()
        db.refresh(row)
        logger.info("Updated article id=%s status=%s", article_id, row.status)
        return ArticleOut.model_validate(row)
    finally:
        db.close()


def delete_article(article_id: int) -> None:
    db = SessionLocal()
    try:
        db.delete(_get(db, article_id))
        db.commit()
        logger.info("Deleted article id=%s", article_id)
    finally:
        db.close()
