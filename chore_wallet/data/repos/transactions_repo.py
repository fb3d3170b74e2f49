from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from chore_wallet.data.models import Transaction


def create_transaction(session: Session, transaction: Transaction) -> Transaction:
    session.add(transaction)
    session.flush()
    return transaction


def get_transaction(session: Session, transaction_id: int) -> Optional[Transaction]:
    return session.get(Transaction, transaction_id)


def list_transactions(session: Session, user_id: int, limit: Optional[int] = None) -> List[Transaction]:
    query = (
        select(Transaction)
        .where(Transaction.user_id == user_id)
        .order_by(Transaction.created_at.desc(), Transaction.id.desc())
    )
    if limit is not None:
        query = query.limit(limit)
    return session.execute(query).scalars().all()


def delete_transaction(session: Session, transaction: Transaction) -> None:
    session.delete(transaction)
    session.flush()


def delete_user_transactions(session: Session, user_id: int) -> int:
    result = session.execute(delete(Transaction).where(Transaction.user_id == user_id))
    return result.rowcount
