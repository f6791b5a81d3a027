import os
from typing import List
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    JWT_SECRET: str = os.getenv(
        "JWT_SECRET", "change-me-faulty-asset-tracker-secret")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(
        os.getenv("JWT_EXPIRE_MINUTES", 180))  # 3 hours default
    JWT_ISSUER: str = os.getenv("JWT_ISSUER", "FaultyAssetTracker")
    JWT_AUDIENCE: str = os.getenv(
        "JWT_AUDIENCE", "FaultyAssetTrackerUsers")

    AUTH_DATABASE_URL: str = os.getenv(
        "AUTH_DATABASE_URL", f"sqlite:///{os.path.join(BASE_DIR, 'auth.db')}")
    ASSET_DATABASE_URL: str = os.getenv(
        "ASSET_DATABASE_URL", f"sqlite:///{os.path.join(BASE_DIR, 'assets.db')}")

    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:8080",
    ]

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Bootstrap admin, created on auth service startup when both are set
    ADMIN_EMAIL: str | None = os.getenv("ADMIN_EMAIL")
    ADMIN_PASSWORD: str | None = os.getenv("ADMIN_PASSWORD")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()

AUTH_DATABASE_URL = settings.AUTH_DATABASE_URL

ASSET_DATABASE_URL = settings.ASSET_DATABASE_URL
