"""Credit balance bookkeeping: daily allotment, scan debits, top-up requests."""

import logging
from datetime import date, datetime, timezone

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from docscan.config import settings
from docscan.errors import InsufficientCredits, InvalidAmount, RequestNotFound, StorageError, ValidationError
from docscan.models.credit_request import CreditRequest, PENDING, APPROVED, DENIED
from docscan.models.user import User

logger = logging.getLogger("docscan.credits")


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def reset_due(last_reset: date | None, today: date) -> bool:
    return last_reset != today


def apply_daily_reset(user: User, today: date) -> bool:
    """Refill ``user`` to the daily allotment once per calendar day.

    Returns True when the user was changed; the caller owns the commit.
    """
    if not reset_due(user.last_reset, today):
        return False
    user.credits = settings.daily_credits
    user.last_reset = today
    logger.info("daily credit reset for user %s", user.id)
    return True


def debit_credit(db: Session, user_id: int) -> int:
    """Take one credit from ``user_id`` and return the new balance.

    The balance check and the decrement are one conditional UPDATE, so two
    concurrent scans cannot both spend the last credit.
    """
    result = db.execute(
        update(User)
        .where(User.id == user_id, User.credits >= 1)
        .values(credits=User.credits - 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        db.rollback()
        raise InsufficientCredits()
    db.commit()
    return db.query(User.credits).filter(User.id == user_id).scalar()


def _check_amount(amount) -> int:
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmount()
    return amount


def request_credits(db: Session, user: User, amount) -> CreditRequest:
    amount = _check_amount(amount)
    req = CreditRequest(user_id=user.id, requested_credits=amount, status=PENDING)
    db.add(req)
    _commit(db, "failed to store credit request for user %s", user.id)
    db.refresh(req)
    logger.info("user %s requested %s credits (request %s)", user.id, amount, req.id)
    return req


def _commit(db: Session, message: str, *args) -> None:
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(message, *args)
        raise StorageError("Failed to update credits") from e


def _get_request(db: Session, request_id, missing=RequestNotFound) -> CreditRequest:
    if request_id is None:
        raise ValidationError("Request ID required")
    req = db.get(CreditRequest, request_id)
    if req is None:
        raise missing("Credit request not found")
    return req


def approve_credits(db: Session, request_id, amount) -> CreditRequest:
    amount = _check_amount(amount)
    req = _get_request(db, request_id)
    if req.status != PENDING:
        # no idempotency guard: approving again grants the credits again
        logger.warning("credit request %s re-resolved from %s to approved", req.id, req.status)

    db.execute(
        update(User)
        .where(User.id == req.user_id)
        .values(credits=User.credits + amount)
        .execution_options(synchronize_session=False)
    )
    req.status = APPROVED
    req.approved_credits = amount
    _commit(db, "failed to approve credit request %s", req.id)
    db.refresh(req)
    logger.info("credit request %s approved with %s credits", req.id, amount)
    return req


def deny_credits(db: Session, request_id) -> CreditRequest:
    # denial answers 400 for an unknown id, approval answers 404
    req = _get_request(db, request_id, missing=ValidationError)
    if req.status != PENDING:
        logger.warning("credit request %s re-resolved from %s to denied", req.id, req.status)
    req.status = DENIED
    _commit(db, "failed to deny credit request %s", req.id)
    db.refresh(req)
    logger.info("credit request %s denied", req.id)
    return req
