import os


def _int_env(name, default):
    raw = str(os.getenv(name, str(default))).strip()
    try:
        return int(raw)
    except ValueError:
        return default


def _email_set(raw):
    return frozenset(e.strip().lower() for e in (raw or "").split(",") if e.strip())


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "hotel-admin-dev-secret")
    MONGO_URI = os.getenv("MONGO_URI", "mongodb://localhost:27017/hotel_admin")

    # Only these addresses may sign in to the console
    ADMIN_EMAILS = _email_set(os.getenv("ADMIN_EMAILS"))
    SESSION_TTL_HOURS = _int_env("SESSION_TTL_HOURS", 24)

    CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_UPLOAD_PRESET = os.getenv("CLOUDINARY_UPLOAD_PRESET", "")
    UPLOAD_TIMEOUT_SECONDS = _int_env("UPLOAD_TIMEOUT_SECONDS", 30)

    STAFF_ROSTER_LIMIT = _int_env("STAFF_ROSTER_LIMIT", 100)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.getenv("LOG_FILE") or None

    # Printed on the staff ID cards
    COMPANY_NAME = os.getenv("COMPANY_NAME", "360 Degree Global Estate Ltd.")
    COMPANY_ADDRESS = os.getenv("COMPANY_ADDRESS", "")
    COMPANY_CONTACT = os.getenv("COMPANY_CONTACT", "")


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    MONGO_URI = "mongodb://localhost:27017/hotel_admin_test"
    ADMIN_EMAILS = frozenset({"admin@example.com"})
    CLOUDINARY_CLOUD_NAME = "demo"
    CLOUDINARY_UPLOAD_PRESET = "unsigned"
    LOG_LEVEL = "WARNING"
