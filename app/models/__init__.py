"""
SQLAlchemy models for the subscription aggregator.
"""
from __future__ import annotations

import uuid

from sqlalchemy import Column, Date, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class Subscription(Base):
    __tablename__ = "subscriptions"
    __table_args__ = (
        Index("ix_subscriptions_user_service", "user_id", "service_name"),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    service_name = Column(Text, nullable=False)
    price = Column(Integer, nullable=False)
    user_id = Column(String(64), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)

    def __repr__(self) -> str:
        return (
            f"Subscription(id={self.id!r}, user_id={self.user_id!r}, "
            f"service_name={self.service_name!r}, price={self.price!r})"
        )
