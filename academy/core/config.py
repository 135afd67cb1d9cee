import os

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./academy.db")

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "60"))

CORS_ORIGINS = _get_list(os.getenv("CORS_ORIGINS")) or ["http://localhost:5173"]

# Registrations with one of these emails get the admin role.
ADMIN_EMAILS = {email.lower() for email in _get_list(os.getenv("ADMIN_EMAILS"))}

SEED_COURSES = _get_bool(os.getenv("SEED_COURSES"), default=True)

# Off by default: any authenticated user may verify any enrollment id.
ENFORCE_ENROLLMENT_OWNERSHIP = _get_bool(os.getenv("ENFORCE_ENROLLMENT_OWNERSHIP"), default=False)

def validate_runtime_config() -> None:
    if APP_ENV.lower() == "production" and JWT_SECRET_KEY == "change-me":
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
