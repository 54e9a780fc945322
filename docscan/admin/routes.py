
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from docscan.admin.service import analytics
from docscan.auth.deps import get_db, require_admin
from docscan.credits.ledger import approve_credits, deny_credits
from docscan.models.user import User
from docscan.schemas.auth import MessageOut
from docscan.schemas.credits import AnalyticsEnvelope, ApproveIn, ApproveOut, DenyIn

router = APIRouter(prefix="/admin", tags=["admin"])

@router.get("/analytics", response_model=AnalyticsEnvelope)
def get_analytics(db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    return {"analytics": analytics(db)}

@router.post("/credits/approve", response_model=ApproveOut)
def approve(body: ApproveIn, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    req = approve_credits(db, body.requestId, body.additionalCredits)
    return ApproveOut(
        message=f"Credit request approved. {req.approved_credits} credits added.",
        approvedCredits=req.approved_credits,
    )

@router.post("/credits/deny", response_model=MessageOut)
def deny(body: DenyIn, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    deny_credits(db, body.requestId)
    return MessageOut(message="Credit request denied")
