
from datetime import datetime
from pydantic import BaseModel

class ProfileUserOut(BaseModel):
    username: str
    credits: int
    role: str

    class Config:
        from_attributes = True

class ScanOut(BaseModel):
    id: int
    document_id: int
    filename: str
    scan_date: datetime

class ProfileOut(BaseModel):
    user: ProfileUserOut
    scans: list[ScanOut]
