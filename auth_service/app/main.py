# app/main.py
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from shared.core.config import settings
from shared.core.database import AuthBase, AuthSessionLocal, auth_engine
from shared.core.logging_config import setup_logging
from shared.helpers.exception_handler import setup_exception_handlers

from .models import users, roles, userroles
from .routers import adminrouter, authrouter
from .services import userservices

setup_logging()
logger = logging.getLogger(__name__)

# Create tables
AuthBase.metadata.create_all(bind=auth_engine)


def seed_identity():
    db = AuthSessionLocal()
    try:
        userservices.seed_roles(db)
        if userservices.ensure_admin_user(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD):
            logger.info("Bootstrap admin %s created", settings.ADMIN_EMAIL)
    finally:
        db.close()


seed_identity()

# This MUST exist for uvicorn
app = FastAPI(title="Faulty Asset Tracker Auth")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
setup_exception_handlers(app)

# Routers
app.include_router(authrouter.router)
app.include_router(adminrouter.router)


@app.get("/health")
def health():
    return {"status": "healthy"}
