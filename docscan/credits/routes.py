
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from docscan.auth.deps import get_db, get_current_user
from docscan.credits.ledger import request_credits
from docscan.models.user import User
from docscan.schemas.credits import CreditRequestIn, CreditRequestOut

router = APIRouter(prefix="/credits", tags=["credits"])

@router.post("/request", response_model=CreditRequestOut)
def create_credit_request(body: CreditRequestIn, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    req = request_credits(db, user, body.requestedCredits)
    return CreditRequestOut(message="Credit request submitted", requestId=req.id)
