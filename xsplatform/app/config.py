import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_WEB_DIR = Path(__file__).resolve().parent.parent / "web"


def _csv(name: str, default: str = "") -> list[str]:
    return [o.strip() for o in os.getenv(name, default).split(",") if o.strip()]


class Config:
    # Secrets come from the environment only; create_app refuses to start without SECRET_KEY.
    SECRET_KEY = os.getenv("SECRET_KEY")
    JWT_SECRET = os.getenv("JWT_SECRET")  # falls back to SECRET_KEY
    JWT_EXPIRES_HOURS = int(os.getenv("JWT_EXPIRES_HOURS", "24"))
    SESSION_HOURS = int(os.getenv("SESSION_HOURS", "24"))

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///xsplatform.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    JSON_SORT_KEYS = False

    # Comma-separated list
    CORS_ORIGINS = _csv("CORS_ORIGINS")

    WEB_DIR = os.getenv("WEB_DIR", str(DEFAULT_WEB_DIR))
    PAGES_DIR = os.getenv("PAGES_DIR", str(DEFAULT_WEB_DIR / "customer"))
    CACHE_HEADER_SHELL = os.getenv("CACHE_HEADER_SHELL", "1") not in ("0", "false", "no")

    PROTECTED_PAGES = _csv("PROTECTED_PAGES", "profile,wishlist,orders,checkout,cart")
    HOME_PATH = os.getenv("HOME_PATH", "/home")
    LOGIN_PATH = os.getenv("LOGIN_PATH", "/auth/login")

    APP_HOST = os.getenv("APP_HOST", "0.0.0.0")
    APP_PORT = int(os.getenv("APP_PORT", "5000"))
