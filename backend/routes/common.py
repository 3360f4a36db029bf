import logging
from collections.abc import Iterator

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.services.errors import InternalError

logger = logging.getLogger(__name__)


def get_db(request: Request) -> Iterator[Session]:
    with request.app.state.database.session() as db:
        yield db


def storage_failure(db: Session, exc: SQLAlchemyError, action: str) -> InternalError:
    """Roll back, log the storage error, and return the opaque error to raise."""
    db.rollback()
    logger.exception('Database error while %s', action, exc_info=exc)
    return InternalError()
