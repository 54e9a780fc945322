
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from docscan.db.session import Base

PENDING = "pending"
APPROVED = "approved"
DENIED = "denied"

class CreditRequest(Base):
    __tablename__ = "credit_requests"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    requested_credits = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default=PENDING)  # pending | approved | denied
    approved_credits = Column(Integer, nullable=False, default=0)
    request_date = Column(DateTime, default=datetime.utcnow, nullable=False)

    requester = relationship("User", back_populates="credit_requests")
