from datetime import datetime, timezone

from database import Base
from sqlalchemy import Column, DateTime, Integer, String, Text


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Link(Base):
    __tablename__ = "links"

    id = Column(Integer, primary_key=True)
    # unique constraint is the only arbiter of code ownership
    code = Column(String(8), unique=True, index=True, nullable=False)
    target_url = Column(Text, nullable=False)
    clicks = Column(Integer, nullable=False, default=0, server_default="0")
    last_clicked = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self) -> str:
        return f"<Link {self.code} -> {self.target_url} clicks={self.clicks}>"
