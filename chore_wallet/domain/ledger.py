"""
Balance ledger: the operations that change a user's balance together with
goal progress and transaction history.

Every operation holds the user's lock from its first read until its commit
or rollback, and writes everything in one database transaction. After each
operation the user's balance equals the signed sum of the transactions
still stored for that user.
"""
import datetime
import logging
import threading
from contextlib import contextmanager
from decimal import Decimal
from typing import Dict, Iterator, Optional, Tuple

from sqlalchemy.orm import Session

from chore_wallet.config import UNDO_WINDOW_HOURS
from chore_wallet.data.models import (
    TRANSACTION_CHORE_COMPLETED,
    TRANSACTION_GOAL_ALLOCATION,
    Goal,
    Transaction,
    User,
    utcnow,
)
from chore_wallet.data.repos import chores_repo, goals_repo, transactions_repo, users_repo
from chore_wallet.domain.errors import (
    BalanceLimitError,
    ExpiredError,
    InsufficientFundsError,
    InvalidAmountError,
    NotFoundError,
    UnauthorizedError,
)
from chore_wallet.domain.money import MAX_AMOUNT, ZERO, to_money

logger = logging.getLogger("chore_wallet.ledger")

UNDO_WINDOW = datetime.timedelta(hours=UNDO_WINDOW_HOURS)

_registry_lock = threading.Lock()
_user_locks: Dict[int, threading.Lock] = {}


def get_user_lock(user_id: int) -> threading.Lock:
    with _registry_lock:
        lock = _user_locks.get(user_id)
        if lock is None:
            lock = threading.Lock()
            _user_locks[user_id] = lock
        return lock


@contextmanager
def user_lock(user_id: int) -> Iterator[None]:
    lock = get_user_lock(user_id)
    with lock:
        yield


@contextmanager
def ledger_operation(session: Session, user_id: int) -> Iterator[None]:
    """Serialize on the user and commit all writes at once, or none of them."""
    with user_lock(user_id):
        try:
            yield
            session.commit()
        except Exception:
            session.rollback()
            raise


def _load_user(session: Session, user_id: int) -> User:
    user = users_repo.get_user(session, user_id, for_update=True)
    if not user:
        raise NotFoundError("User not found")
    return user


def _apply_goal_amount(goal: Goal, new_amount: Decimal) -> None:
    goal.current_amount = new_amount
    goal.is_completed = new_amount >= to_money(goal.target_amount)


# ============================================
# CLAIM
# ============================================

def claim_chore(session: Session, user_id: int, chore_id: int) -> Tuple[Transaction, Decimal]:
    """
    Pay out a completed chore.

    Adds the chore's amount to the balance and records a chore_completed
    transaction. Only active chores owned by the user can be claimed.

    Returns:
        (transaction, new_balance)

    Raises:
        NotFoundError: chore missing, inactive or owned by someone else, or user missing
        BalanceLimitError: the payout would push the balance past MAX_AMOUNT
    """
    with ledger_operation(session, user_id):
        chore = chores_repo.get_chore(session, chore_id)
        if not chore or not chore.is_active or chore.user_id != user_id:
            raise NotFoundError("Chore not found")
        user = _load_user(session, user_id)

        amount = to_money(chore.amount)
        new_balance = to_money(user.total_balance) + amount
        if new_balance > MAX_AMOUNT:
            raise BalanceLimitError(f"Balance cannot exceed {MAX_AMOUNT}")
        users_repo.update_balance(session, user, new_balance)

        transaction = transactions_repo.create_transaction(
            session,
            Transaction(
                user_id=user_id,
                type=TRANSACTION_CHORE_COMPLETED,
                amount=amount,
                description=f"Completed: {chore.name}",
                chore_id=chore.id,
                goal_id=None,
                created_at=utcnow(),
            ),
        )

    logger.info(
        "chore claimed user=%s chore=%s amount=%s balance=%s", user_id, chore_id, amount, new_balance
    )
    return transaction, new_balance


# ============================================
# ALLOCATE
# ============================================

def allocate_to_goal(
    session: Session, user_id: int, goal_id: int, amount: Decimal
) -> Tuple[Transaction, Decimal, Goal]:
    """
    Move money from the balance into a goal.

    Returns:
        (transaction, new_balance, updated_goal)

    Raises:
        InvalidAmountError: amount is not greater than zero
        NotFoundError: user or goal missing
        InsufficientFundsError: amount exceeds the balance; nothing is changed
        BalanceLimitError: the goal would hold more than MAX_AMOUNT
    """
    amount = to_money(amount)
    if amount <= ZERO:
        raise InvalidAmountError("Amount must be a positive number")

    with ledger_operation(session, user_id):
        user = _load_user(session, user_id)
        goal = goals_repo.get_goal(session, goal_id, for_update=True)
        if not goal or goal.user_id != user_id:
            raise NotFoundError("Goal not found")

        balance = to_money(user.total_balance)
        if amount > balance:
            raise InsufficientFundsError("Insufficient balance")

        goal_amount = to_money(goal.current_amount) + amount
        if goal_amount > MAX_AMOUNT:
            raise BalanceLimitError(f"Goal amount cannot exceed {MAX_AMOUNT}")

        new_balance = balance - amount
        users_repo.update_balance(session, user, new_balance)
        _apply_goal_amount(goal, goal_amount)

        transaction = transactions_repo.create_transaction(
            session,
            Transaction(
                user_id=user_id,
                type=TRANSACTION_GOAL_ALLOCATION,
                amount=-amount,
                description=f"Allocated to: {goal.name}",
                chore_id=None,
                goal_id=goal.id,
                created_at=utcnow(),
            ),
        )

    logger.info(
        "goal allocation user=%s goal=%s amount=%s balance=%s completed=%s",
        user_id,
        goal_id,
        amount,
        new_balance,
        goal.is_completed,
    )
    return transaction, new_balance, goal


# ============================================
# UNDO
# ============================================

def undo_transaction(
    session: Session, user_id: int, transaction_id: int, now: Optional[datetime.datetime] = None
) -> None:
    """
    Reverse a recent transaction and delete it.

    A chore payout is taken back off the balance. A goal allocation is put
    back on the balance and, if the goal still exists, taken off the goal
    (never below zero). When the goal has been deleted only the balance is
    restored.

    Raises:
        NotFoundError: transaction missing (including a second undo of the same id)
        UnauthorizedError: transaction belongs to another user
        ExpiredError: transaction is older than the undo window; nothing is changed
        BalanceLimitError: returning an allocation would push the balance past MAX_AMOUNT
    """
    now = now or utcnow()

    with ledger_operation(session, user_id):
        transaction = transactions_repo.get_transaction(session, transaction_id)
        if not transaction:
            raise NotFoundError("Transaction not found or unauthorized")
        if transaction.user_id != user_id:
            raise UnauthorizedError("Transaction not found or unauthorized")
        user = _load_user(session, user_id)

        if now - transaction.created_at > UNDO_WINDOW:
            raise ExpiredError(f"Cannot undo transactions older than {UNDO_WINDOW_HOURS} hours")

        amount = to_money(transaction.amount)
        new_balance = to_money(user.total_balance)
        if transaction.type == TRANSACTION_CHORE_COMPLETED:
            new_balance -= amount
            users_repo.update_balance(session, user, new_balance)
        elif transaction.type == TRANSACTION_GOAL_ALLOCATION:
            amount = abs(amount)
            new_balance += amount
            if new_balance > MAX_AMOUNT:
                raise BalanceLimitError(f"Balance cannot exceed {MAX_AMOUNT}")
            users_repo.update_balance(session, user, new_balance)
            goal = None
            if transaction.goal_id:
                goal = goals_repo.get_goal(session, transaction.goal_id, for_update=True)
            if goal:
                _apply_goal_amount(goal, max(ZERO, to_money(goal.current_amount) - amount))
            else:
                logger.warning(
                    "undo of transaction %s restored balance but goal %s no longer exists",
                    transaction_id,
                    transaction.goal_id,
                )

        transactions_repo.delete_transaction(session, transaction)

    logger.info("transaction undone user=%s transaction=%s balance=%s", user_id, transaction_id, new_balance)


# ============================================
# RESET
# ============================================

def complete_reset(session: Session, user_id: int) -> None:
    """Delete all of the user's transactions, chores and goals and zero the balance."""
    with ledger_operation(session, user_id):
        user = _load_user(session, user_id)
        removed_transactions = transactions_repo.delete_user_transactions(session, user_id)
        removed_chores = chores_repo.delete_user_chores(session, user_id)
        removed_goals = goals_repo.delete_user_goals(session, user_id)
        users_repo.update_balance(session, user, ZERO)

    logger.info(
        "complete reset user=%s transactions=%s chores=%s goals=%s",
        user_id,
        removed_transactions,
        removed_chores,
        removed_goals,
    )
