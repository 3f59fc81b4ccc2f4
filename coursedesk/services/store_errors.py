"""
Store error normalization.

Entity access modules run store work inside ``translate_store_errors`` so any
SQLAlchemy failure is logged with detail and re-raised as a catalog error.
"""
import logging
from contextlib import contextmanager
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from coursedesk.core.exceptions import CatalogError, DuplicateValueError, StoreError, is_unique_violation

logger = logging.getLogger(__name__)


@contextmanager
def translate_store_errors(db: Session, action: str, duplicate_message: Optional[str] = None):
    try:
        yield
    except CatalogError:
        raise
    except IntegrityError as e:
        db.rollback()
        if duplicate_message and is_unique_violation(e):
            logger.warning(f"Unique constraint rejected {action}: {e.orig}")
            raise DuplicateValueError(duplicate_message) from e
        logger.error(f"Integrity error during {action}: {e.orig}")
        raise StoreError(f"Failed to {action}") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Store error during {action}: {e}", exc_info=True)
        raise StoreError(f"Failed to {action}") from e
