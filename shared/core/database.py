from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from shared.core.config import AUTH_DATABASE_URL, ASSET_DATABASE_URL

# Separate bases
AuthBase = declarative_base()
Base = declarative_base()

POOL_SIZE = 2
MAX_OVERFLOW = 2


def build_engine(url: str):
    # SQLite has no server-side pool to size
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False}
        )

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=POOL_SIZE,          # max idle connections
        max_overflow=MAX_OVERFLOW,      # max temporary extra connections
        pool_timeout=30       # wait time before failing
    )


# Auth DB
auth_engine = build_engine(AUTH_DATABASE_URL)
AuthSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=auth_engine)

# Asset DB
asset_engine = build_engine(ASSET_DATABASE_URL)
AssetSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=asset_engine)


# Dependency


def get_auth_db():
    db = AuthSessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_asset_db():
    db = AssetSessionLocal()
    try:
        yield db
    finally:
        db.close()
