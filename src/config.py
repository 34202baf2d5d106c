import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    APP_ENV = os.getenv("APP_ENV", "development")
    # Explicit "enforced" / "bypassed"; derived from APP_ENV when unset
    AUTHORIZATION_POLICY = os.getenv("AUTHORIZATION_POLICY")
    DEBUG = os.getenv("FLASK_DEBUG", "0") == "1"
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "postgresql://postgres@127.0.0.1:5432/tenant_admin")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = os.getenv("SECRET_KEY", "change_me")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change_me_jwt")
    ACCESS_TOKEN_EXPIRATION_HOURS = int(os.getenv("ACCESS_TOKEN_EXPIRATION_HOURS", "24"))
    DEFAULT_PAGE_SIZE = int(os.getenv("DEFAULT_PAGE_SIZE", "20"))
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

class TestConfig(Config):
    TESTING = True
    APP_ENV = "test"
    AUTHORIZATION_POLICY = None
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-secret-key-for-signing-access-tokens"
    LOG_LEVEL = "WARNING"
