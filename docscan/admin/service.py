"""Usage analytics for the admin dashboard."""

from sqlalchemy import func
from sqlalchemy.orm import Session
from docscan.models.credit_request import CreditRequest
from docscan.models.scan import ScanEvent
from docscan.models.user import User


def user_usage(db: Session) -> list[dict]:
    rows = (
        db.query(
            User.username.label("username"),
            User.credits.label("credits"),
            func.count(ScanEvent.id).label("total_scans"),
        )
        .outerjoin(ScanEvent, ScanEvent.user_id == User.id)
        .group_by(User.id)
        .order_by(User.id)
        .all()
    )
    return [dict(r._mapping) for r in rows]


def credit_request_log(db: Session) -> list[dict]:
    rows = (
        db.query(
            CreditRequest.id.label("request_id"),
            User.username.label("username"),
            CreditRequest.requested_credits.label("requested_credits"),
            CreditRequest.status.label("status"),
            CreditRequest.approved_credits.label("approved_credits"),
            CreditRequest.request_date.label("request_date"),
        )
        .join(User, User.id == CreditRequest.user_id)
        .order_by(CreditRequest.id.asc())
        .all()
    )
    return [dict(r._mapping) for r in rows]


def analytics(db: Session) -> dict:
    return {"users": user_usage(db), "credit_requests": credit_request_log(db)}
