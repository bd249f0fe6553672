import logging

import codes
import crud
import errors
import models
import validators
from sqlalchemy.orm import Session

logger = logging.getLogger("tinylink.registrar")

MAX_GENERATION_ATTEMPTS = 10

# Path segments the web layer routes itself; a link under one of these
# names could never be reached through GET /{code}.
RESERVED_CODES = {"healthz"}

def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None

def create_link(db: Session, target_url: str | None, custom_code: str | None = None) -> models.Link:
    """Validate the request and persist a new link.

    The insert itself decides who owns a code: a unique-constraint violation
    is reported as CodeConflict for custom codes and retried with a fresh
    candidate for generated ones. There is no lookup before the insert.
    """
    target_url = _clean(target_url)
    custom_code = _clean(custom_code)

    if not target_url or not validators.is_valid_url(target_url):
        raise errors.InvalidUrl()

    if custom_code is not None:
        if not validators.is_valid_code(custom_code):
            raise errors.InvalidCodeFormat()
        if custom_code in RESERVED_CODES:
            raise errors.CodeConflict(custom_code)
        link = crud.insert_unique(db, custom_code, target_url)
        logger.info("Created link %s -> %s (custom)", link.code, link.target_url)
        return link

    for attempt in range(1, MAX_GENERATION_ATTEMPTS + 1):
        candidate = codes.generate_code()
        try:
            link = crud.insert_unique(db, candidate, target_url)
        except errors.CodeConflict:
            logger.debug("Generated code %s collided (attempt %d)", candidate, attempt)
            continue
        logger.info("Created link %s -> %s", link.code, link.target_url)
        return link

    logger.error(
        "Gave up generating a code for %s after %d collisions", target_url, MAX_GENERATION_ATTEMPTS
    )
    raise errors.CodeGenerationExhausted(MAX_GENERATION_ATTEMPTS)
