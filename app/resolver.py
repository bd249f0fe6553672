import logging
from dataclasses import dataclass
from datetime import datetime

import crud
import errors
import validators
from sqlalchemy.orm import Session

logger = logging.getLogger("tinylink.resolver")


@dataclass(frozen=True)
class RedirectResult:
    code: str
    target_url: str
    clicks: int
    last_clicked: datetime


def resolve(db: Session, code: str) -> RedirectResult:
    # malformed path segments never reach the store
    if not validators.is_valid_code(code):
        raise errors.LinkNotFound(code)

    # the update doubles as the lookup: no row touched means no such link
    row = crud.increment_click(db, code)
    logger.info("Redirect %s -> %s (clicks=%d)", code, row.target_url, row.clicks)
    return RedirectResult(
        code=code,
        target_url=row.target_url,
        clicks=row.clicks,
        last_clicked=row.last_clicked,
    )
