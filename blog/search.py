"""Search index for ORM records.

``register_searchable(Post, "title", "body")`` keeps one row per record in
``search_documents`` holding the lower-cased text of the given fields. The
row is written on the flushing connection, so it commits or rolls back with
the record itself.
"""

import logging
from typing import List, Optional

from sqlalchemy import Column, String, Text, Table, and_, delete, event, insert, select
from sqlalchemy.orm import Session

from blog.db.database import Base

logger = logging.getLogger(__name__)

search_documents = Table(
    "search_documents",
    Base.metadata,
    Column("record_type", String(50), primary_key=True),
    Column("record_id", String(36), primary_key=True),
    Column("content", Text, nullable=False, default=""),
)

# tablename -> indexed fields
_registry: dict[str, tuple[str, ...]] = {}


def build_document(record, fields) -> str:
    parts = [getattr(record, field, None) for field in fields]
    return " ".join(str(part) for part in parts if part).lower()


def _remove_document(connection, record_type: str, record_id: str):
    connection.execute(
        delete(search_documents).where(
            and_(
                search_documents.c.record_type == record_type,
                search_documents.c.record_id == record_id,
            )
        )
    )


def _write_document(connection, record_type: str, record_id: str, content: str):
    _remove_document(connection, record_type, record_id)
    connection.execute(
        insert(search_documents).values(
            record_type=record_type, record_id=record_id, content=content
        )
    )


def register_searchable(model, *fields: str):
    """Index ``fields`` of ``model`` on every insert, update and delete."""
    if not fields:
        raise ValueError("register_searchable needs at least one field")
    record_type = model.__tablename__
    _registry[record_type] = fields

    def index_record(mapper, connection, target):
        _write_document(connection, record_type, target.id, build_document(target, fields))
        logger.debug("Indexed %s %s", record_type, target.id)

    def unindex_record(mapper, connection, target):
        _remove_document(connection, record_type, target.id)
        logger.debug("Removed %s %s from index", record_type, target.id)

    event.listen(model, "after_insert", index_record)
    event.listen(model, "after_update", index_record)
    event.listen(model, "after_delete", unindex_record)
    return model


def search(session: Session, model, query: str, limit: Optional[int] = None) -> List:
    """Records whose indexed text contains every term of ``query``, newest first"""
    terms = (query or "").lower().split()
    if not terms:
        return []

    stmt = select(model).join(
        search_documents,
        and_(
            search_documents.c.record_type == model.__tablename__,
            search_documents.c.record_id == model.id,
        ),
    )
    for term in terms:
        stmt = stmt.where(search_documents.c.content.contains(term, autoescape=True))
    stmt = stmt.order_by(model.created_at.desc())
    if limit is not None:
        stmt = stmt.limit(limit)
    return list(session.execute(stmt).scalars().all())


def reindex(session: Session, model) -> int:
    """Rebuild every document of ``model``; returns how many records were indexed"""
    record_type = model.__tablename__
    fields = _registry.get(record_type)
    if fields is None:
        raise ValueError(f"{model.__name__} is not registered as searchable")

    session.execute(delete(search_documents).where(search_documents.c.record_type == record_type))
    records = session.execute(select(model)).scalars().all()
    for record in records:
        session.execute(
            insert(search_documents).values(
                record_type=record_type,
                record_id=record.id,
                content=build_document(record, fields),
            )
        )
    session.commit()
    logger.info("Reindexed %d %s", len(records), record_type)
    return len(records)
