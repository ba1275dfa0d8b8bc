from sqlalchemy import Column, Text, Integer, TIMESTAMP, JSON, Index, func

from .base import Base


class Record(Base):
    """
    One key-value entry of the record store.

    Values are JSON objects (user profiles, positions, applications, the
    logged-in session marker). ``version`` increases on every write and backs
    compare-and-set updates.
    """
    __tablename__ = 'record'

    key = Column(Text, primary_key=True)
    value = Column(JSON, nullable=False)
    version = Column(Integer, nullable=False, default=1)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_record_created', 'created_at'),
    )
