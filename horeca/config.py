# HORECA/backend/horeca/config.py

import os
from dotenv import load_dotenv
from pathlib import Path

# Folder containing this file (horeca/)
BASE_DIR = Path(__file__).parent.absolute()
env_path = BASE_DIR / '.env'

# Load variables from the .env file
print(f"🔍 Loading .env from: {env_path}")
if env_path.exists():
    load_dotenv(dotenv_path=env_path)
    print("✅ .env file found and loaded")
else:
    print(f"❌ .env file not found at: {env_path}")

# ============================================
# ENVIRONMENT
# ============================================
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")

# ============================================
# DATABASE
# ============================================
DATABASE_URL = os.getenv("DATABASE_URL")
if DATABASE_URL:
    print(f"📊 DATABASE_URL loaded: {DATABASE_URL.split('@')[0].split('://')[0]}://****@...")
else:
    print("⚠️  DATABASE_URL not set, falling back to local SQLite")
    if ENVIRONMENT == "production":
        raise ValueError("DATABASE_URL must be set in production")
    DATABASE_URL = "sqlite:///./horeca.db"

# ============================================
# REDIS (events + worker)
# ============================================
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
REDIS_ENABLED = os.getenv("REDIS_ENABLED", "false").lower() == "true"
EVENTS_CHANNEL = os.getenv("EVENTS_CHANNEL", "horeca:events")
TASKS_QUEUE = os.getenv("TASKS_QUEUE", "horeca:tasks")
TASK_RESULT_TTL = int(os.getenv("TASK_RESULT_TTL", "3600"))
REDIS_RETRY_BASE_DELAY = float(os.getenv("REDIS_RETRY_BASE_DELAY", "0.5"))

# ============================================
# JWT / AUTH
# ============================================
SECRET_KEY = os.getenv("SECRET_KEY", "change_this_secret_key_in_production")
if SECRET_KEY == "change_this_secret_key_in_production" and ENVIRONMENT == "production":
    raise ValueError("SECRET_KEY must be changed in production")

ALGORITHM = os.getenv("ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))  # 24 hours

# Usernames typed without a domain are completed with this one
DEFAULT_EMAIL_DOMAIN = os.getenv("DEFAULT_EMAIL_DOMAIN", "horeca.app")

# Login throttling
LOGIN_MAX_ATTEMPTS = int(os.getenv("LOGIN_MAX_ATTEMPTS", "5"))
LOGIN_WINDOW_SECONDS = int(os.getenv("LOGIN_WINDOW_SECONDS", "900"))
LOGIN_MAX_TRACKED = int(os.getenv("LOGIN_MAX_TRACKED", "10000"))

# ============================================
# FIRST ADMIN (seed script)
# ============================================
ADMIN_CONFIG = {
    "email": os.getenv("ADMIN_EMAIL", "admin@horeca.app"),
    "password": os.getenv("ADMIN_PASSWORD", "Admin1234"),
    "name": os.getenv("ADMIN_NAME", "Admin"),
}

# ============================================
# EXPORTS
# ============================================
REPORTS_DIR = Path(os.getenv("REPORTS_DIR", "/data/reports"))
REPORTS_RETENTION_DAYS = int(os.getenv("REPORTS_RETENTION_DAYS", "7"))

# ============================================
# CORS (Frontend)
# ============================================
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:5173,http://localhost:8080").split(",")

# ============================================
# LOGGING
# ============================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

print(f"✅ Configuration loaded - Environment: {ENVIRONMENT}")

# ============================================
# HELPERS
# ============================================
def is_production():
    """Are we running in production"""
    return ENVIRONMENT == "production"
