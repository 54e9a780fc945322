"""Upload-and-scan workflow and on-demand match lookups."""

import logging
import os
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from docscan.config import settings
from docscan.credits.ledger import debit_credit
from docscan.errors import DocumentNotFound, StorageError, ValidationError
from docscan.models.document import Document
from docscan.models.scan import ScanEvent
from docscan.models.user import User
from docscan.scanner.similarity import CorpusEntry, Match, scan

logger = logging.getLogger("docscan.scanner")


@dataclass
class ScanResult:
    document: Document
    credits: int
    matches: list[Match]


def load_corpus(db: Session, exclude_id: int) -> list[CorpusEntry]:
    rows = (db.query(Document.id, Document.filename, Document.content)
              .filter(Document.id != exclude_id)
              .order_by(Document.id)
              .all())
    return [CorpusEntry(r.id, r.filename, r.content) for r in rows]


def _mirror_path(filename: str) -> str | None:
    if not settings.corpus_dir:
        return None
    name = os.path.basename(filename.replace("\\", "/"))
    if name in ("", ".", ".."):
        raise ValidationError("Invalid filename")
    return os.path.join(settings.corpus_dir, name)


def write_mirror(filename: str, content: str) -> None:
    """Keep a plain-text copy of the upload under ``settings.corpus_dir``."""
    path = _mirror_path(filename)
    if path is None:
        return
    try:
        os.makedirs(settings.corpus_dir, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        logger.exception("failed to write %s", path)
        raise StorageError("Failed to save file") from e


def scan_upload(db: Session, user: User, filename: str, content: str) -> ScanResult:
    filename = (filename or "").strip()
    if not filename or not content or not content.strip():
        raise ValidationError("Filename and document content required")
    _mirror_path(filename)

    # credit is spent here and is not refunded if persisting fails below
    credits = debit_credit(db, user.id)

    write_mirror(filename, content)
    doc = Document(user_id=user.id, filename=filename, content=content)
    try:
        db.add(doc)
        db.flush()
        db.add(ScanEvent(user_id=user.id, document_id=doc.id))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("failed to store document %r for user %s", filename, user.id)
        raise StorageError("Failed to store document") from e
    db.refresh(doc)

    matches = scan(content, load_corpus(db, exclude_id=doc.id), settings.similarity_threshold)
    logger.info("user %s scanned document %s: %d match(es)", user.id, doc.id, len(matches))
    return ScanResult(document=doc, credits=credits, matches=matches)


def matches_for_document(db: Session, doc_id: int) -> list[Match]:
    doc = db.get(Document, doc_id)
    if doc is None:
        raise DocumentNotFound()
    return scan(doc.content, load_corpus(db, exclude_id=doc.id), settings.similarity_threshold)
