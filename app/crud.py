import logging
from contextlib import contextmanager

import errors
import models
from sqlalchemy import delete, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

logger = logging.getLogger("tinylink.store")

RETRYABLE_ERRORS = (OperationalError, PoolTimeoutError)

# Every operation below commits or rolls back before returning, so none of
# them depends on a transaction left open by an earlier call.

@contextmanager
def _store_operation(db: Session, operation: str):
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Store %s failed", operation)
        raise errors.StoreError(operation, retryable=isinstance(exc, RETRYABLE_ERRORS)) from exc

def insert_unique(db: Session, code: str, target_url: str) -> models.Link:
    # every column is set here, so the committed instance needs no refresh
    link = models.Link(code=code, target_url=target_url, clicks=0, last_clicked=None)
    with _store_operation(db, "insert"):
        db.add(link)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            raise errors.CodeConflict(code) from exc
    return link

def get_link(db: Session, code: str) -> models.Link | None:
    with _store_operation(db, "get"):
        link = db.query(models.Link).filter_by(code=code).first()
        db.commit()
    return link

def get_links(db: Session, skip: int = 0, limit: int | None = None) -> list[models.Link]:
    with _store_operation(db, "list"):
        query = (
            db.query(models.Link)
            .order_by(models.Link.created_at.desc(), models.Link.id.desc())
            .offset(skip)
        )
        if limit is not None:
            query = query.limit(limit)
        links = query.all()
        db.commit()
    return links

def count_links(db: Session) -> int:
    with _store_operation(db, "count"):
        total = db.query(models.Link).count()
        db.commit()
    return total

def increment_click(db: Session, code: str) -> Row:
    """Bump clicks and last_clicked in one UPDATE and return the new values.

    The addition happens inside the database, so concurrent redirects on the
    same code serialize on the row instead of overwriting each other.
    """
    stmt = (
        update(models.Link)
        .where(models.Link.code == code)
        .values(clicks=models.Link.clicks + 1, last_clicked=models.utcnow())
        .returning(models.Link.target_url, models.Link.clicks, models.Link.last_clicked)
        .execution_options(synchronize_session=False)
    )
    with _store_operation(db, "increment"):
        row = db.execute(stmt).one_or_none()
        db.commit()
    if row is None:
        raise errors.LinkNotFound(code)
    return row

def delete_link(db: Session, code: str) -> Row:
    stmt = (
        delete(models.Link)
        .where(models.Link.code == code)
        .returning(
            models.Link.code,
            models.Link.target_url,
            models.Link.clicks,
            models.Link.last_clicked,
            models.Link.created_at,
        )
        .execution_options(synchronize_session=False)
    )
    with _store_operation(db, "delete"):
        row = db.execute(stmt).one_or_none()
        db.commit()
    if row is None:
        raise errors.LinkNotFound(code)
    return row
