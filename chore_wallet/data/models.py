"""
SQLAlchemy ORM models defining the database schema.
Core tables: users, chores, goals and transactions.
Money columns are fixed-point with two fraction digits and load as Decimal.
"""
import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from chore_wallet.config import DEFAULT_CHORE_ICON
from chore_wallet.data.database import Base

TRANSACTION_CHORE_COMPLETED = "chore_completed"
TRANSACTION_GOAL_ALLOCATION = "goal_allocation"


def utcnow() -> datetime.datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored."""
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


MONEY = Numeric(10, 2, asdecimal=True)


class User(Base):
    """
    The account that owns chores, goals and transactions.

    Attributes:
        id: Unique identifier
        username: Login name (unique)
        password: Salted password hash, never exposed by the API
        total_balance: Unallocated money; equals the signed sum of the user's transactions
        created_at: Timestamp when the account was created
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(80), nullable=False, unique=True)
    password = Column(Text, nullable=False)
    total_balance = Column(MONEY, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    chores = relationship("Chore", back_populates="user")
    goals = relationship("Goal", back_populates="user")
    transactions = relationship("Transaction", back_populates="user")


class Chore(Base):
    """
    A paid task. Deleting a chore only clears is_active so that past
    transactions keep a valid chore_id.
    """
    __tablename__ = "chores"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(MONEY, nullable=False)
    icon = Column(String(40), nullable=True, default=DEFAULT_CHORE_ICON)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", back_populates="chores")


class Goal(Base):
    """
    A savings target. Goals are hard-deleted; transactions pointing at a
    deleted goal get goal_id set to NULL where the database enforces it.

    Attributes:
        target_amount: Amount to save (> 0)
        current_amount: Amount allocated so far (>= 0)
        is_completed: current_amount >= target_amount, recomputed on every change
    """
    __tablename__ = "goals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    target_amount = Column(MONEY, nullable=False)
    current_amount = Column(MONEY, nullable=False, default=0)
    is_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", back_populates="goals")


class Transaction(Base):
    """
    One ledger entry. Chore payouts carry a positive amount, goal
    allocations a negative one.
    """
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    type = Column(String(20), nullable=False)  # chore_completed, goal_allocation
    amount = Column(MONEY, nullable=False)
    description = Column(Text, nullable=False)
    chore_id = Column(Integer, ForeignKey("chores.id"), nullable=True)
    goal_id = Column(Integer, ForeignKey("goals.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    user = relationship("User", back_populates="transactions")
