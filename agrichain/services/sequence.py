"""
Integer identifiers for record series.

Each series (one per table) owns a row in ``sequence_counters``. The row is
locked with ``SELECT ... FOR UPDATE`` and incremented inside the caller's
transaction, so two concurrent requests never receive the same id and a
rolled-back request gives its value back.

The first call for a series seeds the counter from the highest id already
stored in the table, so existing data keeps counting from max + 1.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from agrichain.core.exceptions import ConflictError
from agrichain.models.inventory import SequenceCounter

logger = logging.getLogger(__name__)


def _locked_counter(db: Session, name: str) -> SequenceCounter | None:
    return db.scalar(
        select(SequenceCounter)
        .where(SequenceCounter.name == name)
        .with_for_update()
        .execution_options(populate_existing=True)
    )


def next_id(db: Session, model) -> int:
    """Return the next id for ``model``'s series. Does not commit."""
    name = model.__tablename__
    counter = _locked_counter(db, name)
    if counter is None:
        current_max = db.scalar(select(func.max(model.id))) or 0
        counter = SequenceCounter(name=name, current_value=int(current_max))
        db.add(counter)
        try:
            db.flush()
        except IntegrityError as exc:
            logger.warning("Concurrent creation of sequence counter %s", name)
            raise ConflictError(f"Sequence {name} is being initialised, retry the request") from exc

    counter.current_value += 1
    db.flush()
    logger.debug("Allocated %s id %s", name, counter.current_value)
    return int(counter.current_value)
