from sqlalchemy import Column, String, DateTime, func
from saunalog.database import Base


class User(Base):
    """Profile of a principal issued by the external identity provider."""

    __tablename__ = "users"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(DateTime, nullable=True, onupdate=func.now())

    def __repr__(self):
        return f"<User {self.id}>"
