"""
Sauna Day Model

One row per (user, calendar day) holding the day-level metadata shared by
every session of that day: facility name and the two 1-5 ratings.

The day row outlives its sessions, so metadata survives a bulk replace that
empties the day and is picked up again by the next append.
"""

from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    DateTime,
    CheckConstraint,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship
from saunalog.database import Base


class SaunaDay(Base):
    __tablename__ = "sauna_days"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(64), nullable=False, index=True)
    date = Column(Date, nullable=False)
    facility_name = Column(String(255), nullable=True, index=True)
    condition_rating = Column(Integer, nullable=True)
    satisfaction_rating = Column(Integer, nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    sessions = relationship(
        "SaunaSession",
        back_populates="day",
        order_by="SaunaSession.session_order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_sauna_days_user_date"),
        CheckConstraint(
            "condition_rating IS NULL OR condition_rating BETWEEN 1 AND 5",
            name="ck_sauna_days_condition_rating",
        ),
        CheckConstraint(
            "satisfaction_rating IS NULL OR satisfaction_rating BETWEEN 1 AND 5",
            name="ck_sauna_days_satisfaction_rating",
        ),
    )

    META_FIELDS = ("facility_name", "condition_rating", "satisfaction_rating")

    @property
    def meta(self) -> dict:
        return {field: getattr(self, field) for field in self.META_FIELDS}

    def __repr__(self):
        return f"<SaunaDay {self.user_id} {self.date}>"
