import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Force-load .env (Windows-safe, reload-safe)
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env")


@dataclass(frozen=True)
class Settings:
    database_url: str
    access_token_secret: Optional[str]
    access_token_expires_seconds: int
    jwt_algorithm: str
    stripe_secret_key: Optional[str]
    payment_currency: str
    cors_origins: list
    log_level: str
    port: int


@lru_cache()
def get_settings() -> Settings:
    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        database_url=os.getenv("DATABASE_URL", "sqlite:///./eco_electric.db"),
        access_token_secret=os.getenv("ACCESS_TOKEN_SECRET"),
        access_token_expires_seconds=int(os.getenv("ACCESS_TOKEN_EXPIRES_SECONDS", "3600")),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        stripe_secret_key=os.getenv("STRIPE_SECRET_KEY"),
        payment_currency=os.getenv("PAYMENT_CURRENCY", "usd").lower(),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        port=int(os.getenv("PORT", "5000")),
    )
