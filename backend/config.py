import os
from dotenv import load_dotenv

load_dotenv()

# --- Environment ---
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
IS_PRODUCTION = ENVIRONMENT == "production"

# --- JWT Configuration ---
JWT_SECRET = os.getenv("JWT_SECRET", "change-this-secret-key")
JWT_ALGORITHM = "HS256"
JWT_EXPIRY_HOURS = int(os.getenv("JWT_EXPIRY_HOURS", "168"))  # 7 days
JWT_ISSUER = os.getenv("JWT_ISSUER", "fittracker-app")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE", "fittracker-users")

# --- Auth cookie ---
AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "auth-token")
AUTH_COOKIE_MAX_AGE = 7 * 24 * 60 * 60

# --- Rate limiting (per client address, fixed window) ---
LOGIN_RATE_LIMIT = int(os.getenv("LOGIN_RATE_LIMIT", "5"))
REGISTER_RATE_LIMIT = int(os.getenv("REGISTER_RATE_LIMIT", "3"))
RATE_LIMIT_WINDOW_SECONDS = int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", str(15 * 60)))
# Only honour X-Forwarded-For / X-Real-IP when a trusted proxy sets them
TRUST_PROXY_HEADERS = os.getenv("TRUST_PROXY_HEADERS", "false").lower() in ("1", "true", "yes")

# --- Database ---
# Default to local SQLite, but prefer environment variable
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/fittracker.db")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)

# --- Calculations ---
DEFAULT_WEIGHT_KG = float(os.getenv("DEFAULT_WEIGHT_KG", "70"))
# Timezone used to decide "today" when the client doesn't send one
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "UTC")

# --- CORS ---
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
