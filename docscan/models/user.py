
from sqlalchemy import Column, Integer, String, Date, DateTime, func
from sqlalchemy.orm import relationship
from docscan.db.session import Base

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(120), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="user")
    credits = Column(Integer, nullable=False, default=20)
    last_reset = Column(Date, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    documents = relationship("Document", back_populates="owner")
    credit_requests = relationship("CreditRequest", back_populates="requester")

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
