import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./test.db")
    DB_CREATE_ALL = bool(data.get("DB_CREATE_ALL", True))
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    SESSION_TTL_MINUTES = int(data.get("SESSION_TTL_MINUTES", 60))
    INVITE_DEFAULT_EXPIRY_DAYS = int(data.get("INVITE_DEFAULT_EXPIRY_DAYS", 7))
    INVITE_MAX_EXPIRY_DAYS = int(data.get("INVITE_MAX_EXPIRY_DAYS", 30))
    PUBLIC_AUTO_APPROVE_JOIN = bool(data.get("PUBLIC_AUTO_APPROVE_JOIN", True))
    ORG_ADMIN_IMPLICIT_COMMUNITY_ACCESS = bool(
        data.get("ORG_ADMIN_IMPLICIT_COMMUNITY_ACCESS", False)
    )
