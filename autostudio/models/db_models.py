"""
AutoStudio - SQLAlchemy Database Models
Key/value blob table backing the persisted studio state
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from autostudio.database import db


class DBStoredBlob(db.Model):
    """One JSON-serialized blob stored under a fixed key"""
    __tablename__ = 'stored_blobs'

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<DBStoredBlob {self.key}>'
