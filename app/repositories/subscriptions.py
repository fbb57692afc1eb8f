"""
Subscription persistence backed by a SQLAlchemy session.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, StorageError
from app.models import Subscription
from app.services.proration import sum_total_cost

UPDATABLE_FIELDS = ("service_name", "price", "user_id", "start_date", "end_date")


class SubscriptionRepository:
    """CRUD and billing queries over the subscriptions table."""

    def __init__(self, db: Session, logger: Optional[logging.Logger] = None) -> None:
        self.db = db
        self.logger = logger or logging.getLogger(__name__)

    def _fail(self, operation: str, exc: SQLAlchemyError, **context: Any) -> StorageError:
        self.db.rollback()
        self.logger.error("Unable to %s subscription %s: %s", operation, context, exc)
        return StorageError(f"unable to {operation} subscription: {exc}")

    def save(self, sub: Subscription) -> Subscription:
        try:
            self.db.add(sub)
            self.db.commit()
            self.db.refresh(sub)
        except SQLAlchemyError as exc:
            raise self._fail("save", exc, subscription_id=sub.id) from exc

        self.logger.info("Subscription saved successfully subscription_id=%s", sub.id)
        return sub

    def delete(self, subscription_id: str) -> None:
        sub = self.get_by_id(subscription_id)
        try:
            self.db.delete(sub)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail("delete", exc, subscription_id=subscription_id) from exc

        self.logger.info("Subscription deleted successfully subscription_id=%s", subscription_id)

    def get_by_id(self, subscription_id: str) -> Subscription:
        try:
            sub = self.db.query(Subscription).filter(Subscription.id == subscription_id).first()
        except SQLAlchemyError as exc:
            raise self._fail("get", exc, subscription_id=subscription_id) from exc

        if sub is None:
            self.logger.warning("Failed to find subscription subscription_id=%s", subscription_id)
            raise NotFoundError("subscription", subscription_id)

        return sub

    def list_by_user(self, user_id: str) -> List[Subscription]:
        try:
            subs = (
                self.db.query(Subscription)
                .filter(Subscription.user_id == user_id)
                .order_by(Subscription.start_date.asc(), Subscription.id.asc())
                .all()
            )
        except SQLAlchemyError as exc:
            raise self._fail("list", exc, user_id=user_id) from exc

        self.logger.info("Subscriptions listed successfully user_id=%s count=%d", user_id, len(subs))
        return subs

    def update(self, subscription_id: str, fields: Dict[str, Any]) -> Subscription:
        sub = self.get_by_id(subscription_id)
        for name in UPDATABLE_FIELDS:
            if name in fields:
                setattr(sub, name, fields[name])

        try:
            self.db.commit()
            self.db.refresh(sub)
        except SQLAlchemyError as exc:
            raise self._fail("update", exc, subscription_id=subscription_id) from exc

        self.logger.info("Subscription updated successfully subscription_id=%s", subscription_id)
        return sub

    def find_overlapping(
        self,
        user_id: str,
        service_name: str,
        period_start: date,
        period_end: date,
    ) -> List[Subscription]:
        """Subscriptions of the user/service whose active interval may touch the window."""
        try:
            return (
                self.db.query(Subscription)
                .filter(
                    Subscription.user_id == user_id,
                    Subscription.service_name == service_name,
                    or_(Subscription.end_date.is_(None), Subscription.end_date > period_start),
                    Subscription.start_date < period_end,
                )
                .all()
            )
        except SQLAlchemyError as exc:
            raise self._fail("query", exc, user_id=user_id, service_name=service_name) from exc

    def sum_total_cost(
        self,
        user_id: str,
        service_name: str,
        period_start: date,
        period_end: date,
    ) -> int:
        records = self.find_overlapping(user_id, service_name, period_start, period_end)
        total = sum_total_cost(records, user_id, service_name, period_start, period_end)
        self.logger.info(
            "Total cost computed user_id=%s service_name=%s records=%d total=%d",
            user_id,
            service_name,
            len(records),
            total,
        )
        return total
