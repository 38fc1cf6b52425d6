from typing import List, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "RentEazy API"
    ENV: str = "development"
    PORT: int = 5000

    # -------------------------------------------------
    # CORS (comma-separated, built below)
    # -------------------------------------------------
    CORS_ORIGINS: Optional[str] = None
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (single persistence backend)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None

    # -------------------------------------------------
    # Razorpay
    # -------------------------------------------------
    RAZORPAY_KEY_ID: Optional[str] = None
    RAZORPAY_KEY_SECRET: Optional[str] = None

    # -------------------------------------------------
    # Session tokens
    # -------------------------------------------------
    JWT_SECRET_KEY: str = "dev-secret-change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # When false, endpoints accept requests without a token (legacy open API)
    REQUIRE_AUTH: bool = False

    # -------------------------------------------------
    # Roles
    # -------------------------------------------------
    DEFAULT_ROLE: str = "tenant"
    AUTO_PROVISION_ROLES: bool = Field(True, description="Grant DEFAULT_ROLE to users with no role row at login")
    ALLOW_ADMIN_SIGNUP: bool = False

    # -------------------------------------------------
    # Community
    # -------------------------------------------------
    CONFLICT_RETRY_ATTEMPTS: int = 5
    CHAT_ROOM_IDLE_TTL_HOURS: int = Field(72, description="Empty rooms idle longer than this are evicted")
    CHAT_ROOM_SWEEP_MINUTES: int = 30
    ENABLE_SCHEDULER: bool = True

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list after loading settings
# -------------------------------------------------
cors_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:8080",
]

if settings.CORS_ORIGINS:
    cors_origins.extend(
        o.strip().rstrip("/") for o in settings.CORS_ORIGINS.split(",") if o.strip()
    )

# remove duplicates
settings.BACKEND_CORS_ORIGINS = sorted(list(set(cors_origins)))
