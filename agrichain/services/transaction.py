import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from agrichain.core.exceptions import ConflictError, LedgerServiceError

logger = logging.getLogger(__name__)


@contextmanager
def atomic(db: Session, name: str):
    """
    Commit everything written inside the block once, or nothing.

    Event records, ledger adjustments and activity entries written by a
    lifecycle operation share this boundary.
    """
    try:
        yield
        db.commit()
    except LedgerServiceError:
        db.rollback()
        raise
    except IntegrityError as exc:
        db.rollback()
        logger.warning("%s rejected by the store: %s", name, exc.orig)
        raise ConflictError(f"{name} conflicts with existing data") from exc
    except Exception:
        db.rollback()
        logger.exception("%s failed, transaction rolled back", name)
        raise
