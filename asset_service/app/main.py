import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from shared.core.config import settings
from shared.core.database import asset_engine, Base
from shared.core.logging_config import setup_logging
from shared.helpers.exception_handler import setup_exception_handlers

from .models import faulty_assets, audit_logs
from .router import faulty_assets_router

setup_logging()
logger = logging.getLogger(__name__)

# Create all tables
Base.metadata.create_all(bind=asset_engine)

app = FastAPI(title="Faulty Asset Service API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
setup_exception_handlers(app)

# Include routers
app.include_router(faulty_assets_router.router)


@app.get("/health")
def health():
    return {"status": "healthy"}


logger.info("Faulty asset service ready")
