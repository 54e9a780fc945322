
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from docscan.auth.deps import get_db, get_current_user
from docscan.errors import DocumentNotFound
from docscan.schemas.document import DocumentOut, DocumentSummaryOut
from docscan.models.document import Document

router = APIRouter(prefix="/documents", tags=["documents"])

@router.get("", response_model=list[DocumentSummaryOut])
def list_documents(db: Session = Depends(get_db), user=Depends(get_current_user)):
    return (db.query(Document)
              .filter(Document.user_id == user.id)
              .order_by(Document.upload_date.desc(), Document.id.desc())
              .all())

@router.get("/{doc_id}", response_model=DocumentOut)
def get_document(doc_id: int, db: Session = Depends(get_db), user=Depends(get_current_user)):
    doc = db.get(Document, doc_id)
    if not doc or doc.user_id != user.id:
        raise DocumentNotFound()
    return doc
