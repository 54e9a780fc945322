
from datetime import datetime
from pydantic import BaseModel, Field

class ScanUploadIn(BaseModel):
    filename: str = Field(min_length=1, max_length=255)
    document_content: str = Field(min_length=1, alias="documentContent")

class UploadMatchOut(BaseModel):
    filename: str
    similarity: float

class MatchOut(UploadMatchOut):
    id: int

class ScanUploadOut(BaseModel):
    message: str
    documentId: int
    credits: int
    matches: list[UploadMatchOut]

class MatchesOut(BaseModel):
    matches: list[MatchOut]

class DocumentSummaryOut(BaseModel):
    id: int
    filename: str
    upload_date: datetime

    class Config:
        from_attributes = True

class DocumentOut(DocumentSummaryOut):
    content: str
