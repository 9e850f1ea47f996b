"""
SQLAlchemy ORM entities.
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from aarya.models.database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class KnowledgeRecord(Base):
    __tablename__ = "knowledge"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_uuid)
    topic: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    keywords: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    response: Mapped[str] = mapped_column(Text, nullable=False)
    match_count: Mapped[int] = mapped_column(Integer, default=0)  # written by analytics, never by the matcher
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
