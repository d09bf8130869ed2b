import logging

from agrichain.core.exceptions import ValidationError
from agrichain.models.events import EventStatus
from agrichain.services.ledger import InventoryLedger

logger = logging.getLogger(__name__)


def parse_status(value) -> EventStatus:
    try:
        return EventStatus(value)
    except ValueError as exc:
        raise ValidationError("Valid status is required (pending, completed, rejected)") from exc


def post_status_change(
    ledger: InventoryLedger,
    *,
    previous: EventStatus,
    current: EventStatus,
    cooperative_id: int,
    product_id: int,
    quantity,
    source_type: str,
    source_id: int,
) -> str | None:
    """
    Apply the completed-state rule for a status change.

    Entering ``completed`` from any other status draws ``quantity`` from the
    cooperative's stock; leaving ``completed`` puts it back. Every other
    change, including completed -> completed, leaves the ledger untouched.
    Returns ``"decrement"``, ``"increment"`` or ``None``.
    """
    if current == EventStatus.COMPLETED and previous != EventStatus.COMPLETED:
        ledger.decrement(
            cooperative_id,
            product_id,
            quantity,
            source_type=source_type,
            source_id=source_id,
            reason=f"{source_type} {source_id} completed",
        )
        return "decrement"
    if previous == EventStatus.COMPLETED and current != EventStatus.COMPLETED:
        ledger.increment(
            cooperative_id,
            product_id,
            quantity,
            source_type=source_type,
            source_id=source_id,
            reason=f"{source_type} {source_id} {previous.value} -> {current.value}",
        )
        return "increment"
    logger.debug("%s %s: %s -> %s has no stock effect", source_type, source_id, previous.value, current.value)
    return None
