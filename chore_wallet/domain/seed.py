import hashlib
import logging
import os

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from chore_wallet.config import DEFAULT_PASSWORD, DEFAULT_USERNAME
from chore_wallet.data.models import User
from chore_wallet.data.repos import users_repo
from chore_wallet.domain.money import ZERO

logger = logging.getLogger("chore_wallet.seed")

HASH_ROUNDS = 200_000


def hash_password(password: str) -> str:
    """Stored as pbkdf2_sha256$<rounds>$<salt hex>$<digest hex>."""
    salt = os.urandom(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, HASH_ROUNDS)
    return f"pbkdf2_sha256${HASH_ROUNDS}${salt.hex()}${digest.hex()}"


def ensure_default_user(session: Session) -> User:
    """Return the default account, creating it on first access."""
    user = users_repo.get_user_by_username(session, DEFAULT_USERNAME)
    if user:
        return user

    try:
        user = users_repo.create_user(
            session,
            User(
                username=DEFAULT_USERNAME,
                password=hash_password(DEFAULT_PASSWORD),
                total_balance=ZERO,
            ),
        )
        session.commit()
    except IntegrityError:
        # Another request created it first
        session.rollback()
        return users_repo.get_user_by_username(session, DEFAULT_USERNAME)

    logger.info("created default user %s (id=%s)", user.username, user.id)
    return user
