from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.exceptions import DateOrderError, ValidationError
from app.core.periods import format_period, parse_optional_period, parse_period
from app.models import Subscription

logger = logging.getLogger(__name__)


class SubscriptionRequest(BaseModel):
    """Create/update payload. Dates are MM-YYYY tokens."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    service_name: str = Field(alias="serviceName", min_length=1)
    price: int = Field(ge=0)
    user_id: str = Field(alias="userID", min_length=1)
    start_date: str = Field(alias="startDate", examples=["01-2024"])
    end_date: Optional[str] = Field(default=None, alias="endDate", examples=["12-2024"])


class SubscriptionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    service_name: str = Field(alias="serviceName")
    price: int
    user_id: str = Field(alias="userID")
    start_date: str = Field(alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")

    @classmethod
    def from_model(cls, sub: Subscription) -> "SubscriptionResponse":
        return cls(
            id=str(sub.id),
            service_name=sub.service_name,
            price=sub.price,
            user_id=sub.user_id,
            start_date=format_period(sub.start_date),
            end_date=format_period(sub.end_date) if sub.end_date else None,
        )


def to_model_fields(
    req: SubscriptionRequest, log: Optional[logging.Logger] = None
) -> dict[str, Any]:
    """
    Map a request onto Subscription column values, parsing both dates.

    Every column is listed explicitly; ``id`` is never taken from the request.
    """
    log = log or logger
    try:
        start_date = parse_period(req.start_date)
    except ValidationError as exc:
        log.warning("failed to parse start date: %s", exc)
        raise

    try:
        end_date = parse_optional_period(req.end_date)
    except ValidationError as exc:
        log.warning("failed to parse end date: %s", exc)
        raise

    if end_date is not None and end_date <= start_date:
        log.warning("end date %s is not after start date %s", req.end_date, req.start_date)
        raise DateOrderError("endDate must be after startDate")

    return {
        "service_name": req.service_name,
        "price": req.price,
        "user_id": req.user_id,
        "start_date": start_date,
        "end_date": end_date,
    }
