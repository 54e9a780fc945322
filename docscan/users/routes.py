
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from docscan.auth.deps import get_db, get_current_user
from docscan.models.document import Document
from docscan.models.scan import ScanEvent
from docscan.models.user import User
from docscan.schemas.user import ProfileOut, ProfileUserOut, ScanOut

router = APIRouter(prefix="/user", tags=["user"])

@router.get("/profile", response_model=ProfileOut)
def profile(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    rows = (db.query(ScanEvent.id, ScanEvent.document_id, ScanEvent.scan_date, Document.filename)
              .join(Document, Document.id == ScanEvent.document_id)
              .filter(ScanEvent.user_id == user.id)
              .order_by(ScanEvent.scan_date.desc(), ScanEvent.id.desc())
              .all())
    return ProfileOut(
        user=ProfileUserOut.model_validate(user),
        scans=[ScanOut(id=r.id, document_id=r.document_id, filename=r.filename, scan_date=r.scan_date) for r in rows],
    )
