"""
FastAPI application entry point for Chore Wallet.
Sets up logging, error handlers, routes and database initialization.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chore_wallet.api import chores, goals, transactions, user
from chore_wallet.config import ALLOWED_ORIGINS
from chore_wallet.core.exceptions import register_exception_handlers
from chore_wallet.core.logging import setup_logging
from chore_wallet.core.request_logging import request_logger
from chore_wallet.data.database import Base, SessionLocal, engine
from chore_wallet.domain.seed import ensure_default_user

setup_logging()
logger = logging.getLogger("chore_wallet.startup")

# Create FastAPI application instance
app = FastAPI(title="Chore Wallet")

# The mobile UI is served from another origin
if ALLOWED_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
app.middleware("http")(request_logger)
register_exception_handlers(app)

app.include_router(user.router)
app.include_router(chores.router)
app.include_router(goals.router)
app.include_router(transactions.router)


@app.on_event("startup")
def on_startup() -> None:
    """
    Application startup handler.
    - Creates all database tables if they don't exist
    - Creates the default user so the first request finds it
    """
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_default_user(db)
    finally:
        db.close()
    logger.info("startup complete")
