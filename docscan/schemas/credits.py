
from datetime import datetime
from pydantic import BaseModel

class CreditRequestIn(BaseModel):
    requestedCredits: int | None = None

class CreditRequestOut(BaseModel):
    message: str
    requestId: int

class ApproveIn(BaseModel):
    requestId: int | None = None
    additionalCredits: int | None = None

class ApproveOut(BaseModel):
    message: str
    approvedCredits: int

class DenyIn(BaseModel):
    requestId: int | None = None

class UserUsageOut(BaseModel):
    username: str
    credits: int
    total_scans: int

class CreditRequestRowOut(BaseModel):
    request_id: int
    username: str
    requested_credits: int
    status: str
    approved_credits: int
    request_date: datetime

class AnalyticsOut(BaseModel):
    users: list[UserUsageOut]
    credit_requests: list[CreditRequestRowOut]

class AnalyticsEnvelope(BaseModel):
    analytics: AnalyticsOut
