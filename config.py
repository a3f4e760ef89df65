import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./shoptrack.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRE_MINUTES", 60))
    DEFAULT_PAGE_SIZE = int(data.get("DEFAULT_PAGE_SIZE", 10))
    MAX_PAGE_SIZE = int(data.get("MAX_PAGE_SIZE", 100))
    LOW_STOCK_THRESHOLD = int(data.get("LOW_STOCK_THRESHOLD", 10))
    ALLOW_MISSING_PROFILE_FALLBACK = bool(data.get("ALLOW_MISSING_PROFILE_FALLBACK", True))
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))
