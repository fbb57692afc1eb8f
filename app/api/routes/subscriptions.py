"""
Subscriptions API Routes
CRUD over user subscriptions and the total-cost report
"""
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from app.api.dependencies import get_logger, get_subscription_repository
from app.core.exceptions import DateOrderError, NotFoundError, StorageError, ValidationError
from app.core.periods import parse_period
from app.models import Subscription
from app.repositories.subscriptions import SubscriptionRepository
from app.schemas.subscription import SubscriptionRequest, SubscriptionResponse, to_model_fields

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SubscriptionRequest)
def create_subscription(
    payload: SubscriptionRequest,
    request: Request,
    response: Response,
    repo: SubscriptionRepository = Depends(get_subscription_repository),
    log: logging.Logger = Depends(get_logger),
) -> SubscriptionRequest:
    """
    Create a subscription. Dates must be in MM-YYYY format.
    """
    try:
        fields = to_model_fields(payload, log)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"invalid request data: {exc}")

    sub = Subscription(**fields)
    try:
        repo.save(sub)
    except StorageError as exc:
        log.error("could not save subscription: %s", exc)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="could not save subscription")

    log.info("Successfully saved subscription subscription_id=%s", sub.id)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{sub.id}"
    return payload


@router.get("", response_model=List[SubscriptionResponse])
def list_subscriptions(
    user_id: Optional[str] = Query(default=None),
    repo: SubscriptionRepository = Depends(get_subscription_repository),
    log: logging.Logger = Depends(get_logger),
) -> List[SubscriptionResponse]:
    """
    List every subscription of a user
    """
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="no user ID")

    try:
        subs = repo.list_by_user(user_id)
    except StorageError as exc:
        log.error("could not get list subscriptions: %s user_id=%s", exc, user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="could not get list subscriptions"
        )

    return [SubscriptionResponse.from_model(s) for s in subs]


@router.get("/total-cost")
def total_cost(
    user_id: Optional[str] = Query(default=None),
    service_name: Optional[str] = Query(default=None),
    period_start: Optional[str] = Query(default=None, description="MM-YYYY"),
    period_end: Optional[str] = Query(default=None, description="MM-YYYY, exclusive"),
    repo: SubscriptionRepository = Depends(get_subscription_repository),
    log: logging.Logger = Depends(get_logger),
) -> int:
    """
    Total paid by a user for one service over [period_start, period_end)
    """
    if not user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="no user ID")
    if not service_name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="no service name")

    try:
        start = parse_period(period_start or "")
        end = parse_period(period_end or "")
        if start > end:
            raise DateOrderError("period_start must not be after period_end")
    except ValidationError as exc:
        log.warning("invalid total cost period: %s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))

    try:
        result = repo.sum_total_cost(user_id, service_name, start, end)
    except StorageError as exc:
        log.error("could not get sum subscriptions: %s user_id=%s", exc, user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="could not get sum subscriptions"
        )

    log.info("Successfully get sum subscriptions user_id=%s", user_id)
    return result


@router.get("/{subscription_id}", response_model=SubscriptionResponse)
def get_subscription(
    subscription_id: str,
    repo: SubscriptionRepository = Depends(get_subscription_repository),
    log: logging.Logger = Depends(get_logger),
) -> SubscriptionResponse:
    try:
        sub = repo.get_by_id(subscription_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subscription not found")
    except StorageError as exc:
        log.error("could not get subscription: %s subscription_id=%s", exc, subscription_id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="could not get subscription")

    return SubscriptionResponse.from_model(sub)


@router.put("/{subscription_id}", response_model=SubscriptionRequest)
def update_subscription(
    subscription_id: str,
    payload: SubscriptionRequest,
    repo: SubscriptionRepository = Depends(get_subscription_repository),
    log: logging.Logger = Depends(get_logger),
) -> SubscriptionRequest:
    try:
        fields = to_model_fields(payload, log)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"invalid request data: {exc}")

    try:
        repo.update(subscription_id, fields)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subscription not found")
    except StorageError as exc:
        log.error("could not update subscription: %s subscription_id=%s", exc, subscription_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="could not update subscription"
        )

    log.info("Successfully update subscription subscription_id=%s", subscription_id)
    return payload


@router.delete("/{subscription_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_subscription(
    subscription_id: str,
    repo: SubscriptionRepository = Depends(get_subscription_repository),
    log: logging.Logger = Depends(get_logger),
) -> Response:
    try:
        repo.delete(subscription_id)
    except NotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Subscription not found")
    except StorageError as exc:
        log.error("could not delete subscription: %s subscription_id=%s", exc, subscription_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="could not delete subscription"
        )

    log.info("Successfully deleted subscription subscription_id=%s", subscription_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
