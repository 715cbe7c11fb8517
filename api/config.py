"""
Environment-aware configuration.
Database URL selection lives in models.db_storage (APP_ENV / DATABASE_URL);
here we keep Flask settings, CORS, and the role credentials used by grant-roles.
"""
import os
from dotenv import load_dotenv

load_dotenv()  # Read .env if present


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    # Keep a copy of env for visibility
    APP_ENV = os.getenv("APP_ENV", "dev")
    JSON_SORT_KEYS = False

    # Database accounts (admin / staff / readonly). Passwords are never defaulted.
    DATABASE_NAME = os.getenv("BS_DATABASE_NAME", "bookstore_db")
    ROLE_HOST = os.getenv("BS_ROLE_HOST", "localhost")
    ROLE_PASSWORDS = {
        "admin": os.getenv("BS_ADMIN_PASSWORD"),
        "staff": os.getenv("BS_STAFF_PASSWORD"),
        "readonly": os.getenv("BS_READONLY_PASSWORD"),
    }


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    # In dev, propagate exceptions so our error handler has full context
    PROPAGATE_EXCEPTIONS = True


class TestingConfig(BaseConfig):
    TESTING = True
    APP_ENV = "testing"


class ProductionConfig(BaseConfig):
    DEBUG = False


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/test/prod).
    """
    if name:
        name = name.lower()
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
