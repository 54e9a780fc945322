from fastapi import APIRouter, UploadFile, File, Depends
from sqlalchemy.orm import Session
from pdfminer.high_level import extract_text
import io, re
from docscan.auth.deps import get_db, get_current_user
from docscan.config import settings
from docscan.errors import ValidationError
from docscan.models.user import User
from docscan.scanner.service import scan_upload, matches_for_document, ScanResult
from docscan.schemas.document import (
    ScanUploadIn, ScanUploadOut, UploadMatchOut, MatchesOut, MatchOut,
)


router = APIRouter(tags=["scan"])

def _clean_pdf_text(raw: str) -> str:
    if not raw:
        return ""

    raw = raw.replace("\x0c", "\n\n")
    raw = raw.replace("\r\n", "\n").replace("\r", "\n")
    raw = re.sub(r"\n{3,}", "\n\n", raw)
    raw = re.sub(r"[ \t]{2,}", " ", raw)
    raw = "\n".join(line.strip() for line in raw.split("\n"))

    return raw.strip()

def _read_upload_text(filename: str, content_type: str | None, data: bytes) -> str:
    if filename.lower().endswith(".pdf") or content_type == "application/pdf":
        try:
            return _clean_pdf_text(extract_text(io.BytesIO(data)) or "")
        except Exception as e:
            raise ValidationError(f"Could not extract text from {filename}: {e}")
    if filename.lower().endswith(".txt") or (content_type or "").startswith("text/"):
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            raise ValidationError(f"'{filename}' is not UTF-8 text")
    raise ValidationError(f"'{filename}' is not a .txt or .pdf file")

def _scan_response(result: ScanResult) -> ScanUploadOut:
    return ScanUploadOut(
        message="Document scanned successfully",
        documentId=result.document.id,
        credits=result.credits,
        matches=[UploadMatchOut(filename=m.filename, similarity=m.similarity) for m in result.matches],
    )

@router.post("/scanUpload", response_model=ScanUploadOut)
def scan_upload_json(
    body: ScanUploadIn,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    result = scan_upload(db, user, body.filename, body.document_content)
    return _scan_response(result)

@router.post("/scanUpload/file", response_model=ScanUploadOut)
def scan_upload_file(
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not file.filename:
        raise ValidationError("Filename and document content required")
    data = file.file.read()
    if len(data) > settings.max_upload_mb * 1024 * 1024:
        raise ValidationError(f"{file.filename} is larger than {settings.max_upload_mb}MB")

    text = _read_upload_text(file.filename, file.content_type, data)
    result = scan_upload(db, user, file.filename, text)
    return _scan_response(result)

@router.get("/matches/{doc_id}", response_model=MatchesOut)
def matches(doc_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    found = matches_for_document(db, doc_id)
    return MatchesOut(matches=[MatchOut(id=m.id, filename=m.filename, similarity=m.similarity) for m in found])
