from sqlalchemy import Column, Integer, DateTime, ForeignKey, CheckConstraint, UniqueConstraint, func
from sqlalchemy.orm import relationship
from saunalog.database import Base


class SaunaSession(Base):
    __tablename__ = "sauna_sessions"

    id = Column(Integer, primary_key=True)
    day_id = Column(
        Integer, ForeignKey("sauna_days.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # 1-based and dense within a day
    session_order = Column(Integer, nullable=False)
    minutes = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    day = relationship("SaunaDay", back_populates="sessions")

    __table_args__ = (
        UniqueConstraint("day_id", "session_order", name="uq_sauna_sessions_day_order"),
        CheckConstraint("minutes > 0", name="ck_sauna_sessions_minutes_positive"),
    )

    def __repr__(self):
        return f"<SaunaSession day:{self.day_id} #{self.session_order} {self.minutes}min>"
