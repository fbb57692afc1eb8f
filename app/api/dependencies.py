"""Shared API dependencies."""
from __future__ import annotations

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.repositories.subscriptions import SubscriptionRepository


def get_logger() -> logging.Logger:
    return logging.getLogger("app.subscriptions")


def get_subscription_repository(
    db: Session = Depends(get_db),
    logger: logging.Logger = Depends(get_logger),
) -> SubscriptionRepository:
    return SubscriptionRepository(db, logger=logger)


__all__ = ["get_logger", "get_subscription_repository"]
