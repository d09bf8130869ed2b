# tests/unit/services/test_sequence.py
from datetime import date, time

from sqlalchemy import select

from agrichain.models.events import Activity, Procurement
from agrichain.models.inventory import SequenceCounter
from agrichain.services.sequence import next_id


def _counter_value(db_session, name):
    return db_session.scalar(select(SequenceCounter.current_value).where(SequenceCounter.name == name))


def test_empty_series_starts_at_one(db_session):
    assert _counter_value(db_session, "procurements") is None
    assert next_id(db_session, Procurement) == 1


def test_sequential_calls_are_strictly_increasing(db_session):
    values = [next_id(db_session, Procurement) for _ in range(5)]

    assert values == sorted(values)
    assert len(set(values)) == 5


def test_series_are_independent(db_session):
    next_id(db_session, Procurement)
    next_id(db_session, Procurement)

    assert next_id(db_session, Activity) == 1
    assert _counter_value(db_session, "procurements") == 2


def test_counter_seeds_from_existing_rows(db_session):
    db_session.add(
        Activity(
            id=41,
            activity_date=date(2024, 1, 10),
            activity_time=time(9, 30),
            type="procurement",
            product_name="Wheat",
        )
    )
    db_session.commit()

    assert next_id(db_session, Activity) == 42


def test_rolled_back_allocation_is_reused(db_session):
    next_id(db_session, Procurement)
    db_session.commit()

    next_id(db_session, Procurement)
    db_session.rollback()

    assert next_id(db_session, Procurement) == 2
