# ledger/db/models.py - User, Transaction and the server-side Session store
from sqlalchemy import Column, Integer, String, DateTime, func, Text, ForeignKey, Enum
from sqlalchemy.orm import relationship
from .base import Base
from ledger.schemas.transaction import AMOUNT_MAX_LENGTH, TransactionType

class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(150), nullable=False, unique=True, index=True)
    # "<hexHash>.<hexSalt>", see services/security.py
    password = Column(String(255), nullable=False)

    # relationships
    transactions = relationship(
        "Transaction", back_populates="user", cascade="all, delete-orphan"
    )
    sessions = relationship(
        "UserSession", back_populates="user", cascade="all, delete-orphan"
    )

class Transaction(Base):
    __tablename__ = "transactions"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # validated decimal string, kept exactly as submitted
    amount = Column(String(AMOUNT_MAX_LENGTH), nullable=False)
    category = Column(Text, nullable=False)
    merchant = Column(Text, nullable=False, default="", server_default="")
    date = Column(DateTime, nullable=False)
    description = Column(Text, nullable=False)
    type = Column(Enum(TransactionType, name="transaction_type"), nullable=False)

    user = relationship("User", back_populates="transactions")

class UserSession(Base):
    __tablename__ = "sessions"
    id = Column(String(64), primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)

    user = relationship("User", back_populates="sessions")
