"""
Session Ledger Service

Keeps, per (user, day), a dense 1-based ordered list of session durations
plus the day's shared metadata (facility name, condition and satisfaction
ratings).

Rules:
- A day's session_order values are always exactly 1..N.
- Append goes to MAX(order) + 1.
- Remove deletes one order and shifts every later order down by one.
- Replace deletes the whole list and re-inserts 1..N; metadata is kept.
- Metadata lives on the day, so a day emptied by a replace still carries it
  into the next append.

Every write runs in one transaction that first locks the day row, so writes
for the same day serialize and a failure leaves nothing behind.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from saunalog.database import Database
from saunalog.errors import InvalidIndex, Unauthorized
from saunalog.models import SaunaDay, SaunaSession
from saunalog.services.validators import (
    clean_minutes_list,
    normalize_meta,
    normalize_minutes,
    parse_date_key,
    parse_index,
)
from saunalog.time_config import today_key

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO NOTHING
UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}

EMPTY_META = {
    "facility_name": None,
    "condition_rating": None,
    "satisfaction_rating": None,
}


def _require_user(user_id: Any) -> str:
    if user_id is None or not str(user_id).strip():
        raise Unauthorized()
    return str(user_id)


def _find_day(db: Session, user_id: str, day: date, lock: bool = False) -> Optional[SaunaDay]:
    query = db.query(SaunaDay).filter(SaunaDay.user_id == user_id, SaunaDay.date == day)
    if lock:
        query = query.with_for_update()
    return query.first()


def _touch(db: Session, record: SaunaDay):
    """Write the day row so the transaction holds its write lock from here on."""
    record.updated_at = func.now()
    db.flush()


def _ensure_day(db: Session, user_id: str, day: date) -> SaunaDay:
    """Get the day row, creating it if absent, and lock it for this transaction."""
    make_insert = UPSERT_INSERTS.get(db.get_bind().dialect.name)
    if make_insert is not None:
        stmt = (
            make_insert(SaunaDay.__table__)
            .values(user_id=user_id, date=day)
            .on_conflict_do_nothing(index_elements=["user_id", "date"])
        )
        db.execute(stmt)
    elif _find_day(db, user_id, day) is None:
        db.add(SaunaDay(user_id=user_id, date=day))
        db.flush()

    record = _find_day(db, user_id, day, lock=True)
    _touch(db, record)
    return record


def _session_count(db: Session, day_id: int) -> int:
    return db.query(func.count(SaunaSession.id)).filter(SaunaSession.day_id == day_id).scalar()


def _day_minutes(db: Session, day_id: int) -> List[int]:
    rows = (
        db.query(SaunaSession.minutes)
        .filter(SaunaSession.day_id == day_id)
        .order_by(SaunaSession.session_order.asc())
        .all()
    )
    return [int(row.minutes) for row in rows if row.minutes and row.minutes > 0]


class SessionLedger:
    """Per-user, per-day session ledger backed by an injected Database handle."""

    def __init__(self, database: Database):
        self.database = database

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def append(
        self,
        user_id: str,
        date_key: str,
        minutes: Any,
        meta: Optional[Mapping] = None,
    ) -> int:
        """
        Append a session at the end of the day's list.

        Metadata fields present in `meta` overwrite the day's values; absent
        fields keep whatever the day already has.

        Args:
            user_id: Owning principal
            date_key: YYYY-MM-DD day key
            minutes: Duration, rounded to whole minutes
            meta: Optional mapping of day metadata fields

        Returns:
            The 1-based order assigned to the new session
        """
        user_id = _require_user(user_id)
        day = parse_date_key(date_key)
        minutes = normalize_minutes(minutes)
        updates = normalize_meta(meta)

        with self.database.transaction() as db:
            record = _ensure_day(db, user_id, day)
            for field, value in updates.items():
                setattr(record, field, value)

            max_order = (
                db.query(func.coalesce(func.max(SaunaSession.session_order), 0))
                .filter(SaunaSession.day_id == record.id)
                .scalar()
            )
            next_order = max_order + 1
            db.add(SaunaSession(day_id=record.id, session_order=next_order, minutes=minutes))

        logger.info(f"Appended session #{next_order} ({minutes} min) for {user_id} on {day}")
        return next_order

    def remove_at(self, user_id: str, date_key: str, index: Any):
        """Delete the session at 0-based `index` and close the gap it leaves."""
        user_id = _require_user(user_id)
        day = parse_date_key(date_key)
        index = parse_index(index)

        with self.database.transaction() as db:
            record = _find_day(db, user_id, day, lock=True)
            if record is not None:
                _touch(db, record)
            count = _session_count(db, record.id) if record is not None else 0
            if index >= count:
                raise InvalidIndex(f"Invalid index: {index} (day has {count} sessions)")

            order = index + 1
            db.query(SaunaSession).filter(
                SaunaSession.day_id == record.id,
                SaunaSession.session_order == order,
            ).delete(synchronize_session=False)

            # Shift through negative values so no intermediate row collides
            # with the (day_id, session_order) unique constraint.
            db.query(SaunaSession).filter(
                SaunaSession.day_id == record.id,
                SaunaSession.session_order > order,
            ).update(
                {SaunaSession.session_order: 1 - SaunaSession.session_order},
                synchronize_session=False,
            )
            db.query(SaunaSession).filter(
                SaunaSession.day_id == record.id,
                SaunaSession.session_order < 0,
            ).update(
                {SaunaSession.session_order: -SaunaSession.session_order},
                synchronize_session=False,
            )

        logger.info(f"Removed session #{order} for {user_id} on {day}")

    def replace_all(self, user_id: str, date_key: str, minutes_list: Any) -> int:
        """
        Replace the day's sessions with `minutes_list`, in list order.

        Entries that are not finite or do not round to a positive integer are
        dropped. Day metadata is preserved.

        Returns:
            Number of sessions stored
        """
        user_id = _require_user(user_id)
        day = parse_date_key(date_key)
        cleaned = clean_minutes_list(minutes_list)

        with self.database.transaction() as db:
            if cleaned:
                record = _ensure_day(db, user_id, day)
            else:
                record = _find_day(db, user_id, day, lock=True)
                if record is None:
                    return 0
                _touch(db, record)

            db.query(SaunaSession).filter(
                SaunaSession.day_id == record.id
            ).delete(synchronize_session=False)
            db.add_all(
                SaunaSession(day_id=record.id, session_order=i, minutes=value)
                for i, value in enumerate(cleaned, start=1)
            )

        logger.info(f"Replaced sessions for {user_id} on {day}: {len(cleaned)} stored")
        return len(cleaned)

    def set_day_meta(self, user_id: str, date_key: str, meta: Optional[Mapping]) -> bool:
        """
        Update the day's metadata for the fields present in `meta`.

        Only applies to a day that has at least one session; otherwise it is
        a no-op and nothing is kept for later.

        Returns:
            True if the day was updated
        """
        user_id = _require_user(user_id)
        day = parse_date_key(date_key)
        updates = normalize_meta(meta)

        with self.database.transaction() as db:
            record = _find_day(db, user_id, day, lock=True)
            if record is None or _session_count(db, record.id) == 0:
                logger.info(f"Ignored metadata for {user_id} on {day}: no sessions")
                return False

            for field, value in updates.items():
                setattr(record, field, value)
            _touch(db, record)

        return True

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_sessions(self, user_id: str, date_key: str) -> List[int]:
        """Minutes of the day's sessions in ascending order."""
        user_id = _require_user(user_id)
        day = parse_date_key(date_key)

        with self.database.session() as db:
            record = _find_day(db, user_id, day)
            if record is None:
                return []
            return _day_minutes(db, record.id)

    def get_day_meta(self, user_id: str, date_key: str) -> Dict[str, Any]:
        user_id = _require_user(user_id)
        day = parse_date_key(date_key)

        with self.database.session() as db:
            record = _find_day(db, user_id, day)
            if record is None:
                return dict(EMPTY_META)
            return record.meta

    def day_summary(self, user_id: str, date_key: str) -> Dict[str, Any]:
        """Sessions, total, daily average and metadata for one day."""
        user_id = _require_user(user_id)
        day = parse_date_key(date_key)

        with self.database.session() as db:
            record = _find_day(db, user_id, day)
            sessions = _day_minutes(db, record.id) if record is not None else []
            meta = record.meta if record is not None else dict(EMPTY_META)

        total = sum(sessions)
        return {
            "date": day.isoformat(),
            "sessions": sessions,
            "count": len(sessions),
            "total": total,
            "average": total / len(sessions) if sessions else 0,
            "meta": meta,
        }

    def today_summary(self, user_id: str) -> Dict[str, Any]:
        return self.day_summary(user_id, today_key())

    def list_days_with_sessions(self, user_id: str, facility: Optional[str] = None) -> List[str]:
        """
        Day keys having at least one session, newest first.

        Args:
            user_id: Owning principal
            facility: Exact facility name to filter on; blank means no filter
        """
        user_id = _require_user(user_id)

        with self.database.session() as db:
            query = (
                db.query(SaunaDay.date)
                .join(SaunaSession, SaunaSession.day_id == SaunaDay.id)
                .filter(SaunaDay.user_id == user_id)
            )
            if facility is not None and facility.strip():
                query = query.filter(SaunaDay.facility_name == facility.strip())
            rows = query.distinct().order_by(SaunaDay.date.desc()).all()

        return [row.date.isoformat() for row in rows]

    def overall_average(self, user_id: str) -> float:
        """Average minutes per session over all of the user's sessions (0 if none)."""
        user_id = _require_user(user_id)

        with self.database.session() as db:
            count, total = (
                db.query(
                    func.count(SaunaSession.id),
                    func.coalesce(func.sum(SaunaSession.minutes), 0),
                )
                .select_from(SaunaSession)
                .join(SaunaDay, SaunaSession.day_id == SaunaDay.id)
                .filter(SaunaDay.user_id == user_id)
                .one()
            )

        if not count:
            return 0
        return int(total) / count

    def list_facilities(self, user_id: str) -> List[str]:
        """Distinct non-empty facility names the user has recorded."""
        user_id = _require_user(user_id)

        with self.database.session() as db:
            rows = (
                db.query(SaunaDay.facility_name)
                .filter(
                    SaunaDay.user_id == user_id,
                    SaunaDay.facility_name.isnot(None),
                    SaunaDay.facility_name != "",
                )
                .distinct()
                .order_by(SaunaDay.facility_name)
                .all()
            )

        return [row.facility_name for row in rows]
