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
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./bizauth.db")
    REDIS_URL = data.get("REDIS_URL", "redis://localhost:6379/0")
    CACHE_BACKEND = data.get("CACHE_BACKEND", "memory")  # redis | memory
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    # Peers whose X-Forwarded-For / X-Real-IP headers name the client
    TRUSTED_PROXIES = data.get("TRUSTED_PROXIES", [])
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_EXPIRES_IN_SECONDS = int(data.get("JWT_EXPIRES_IN_SECONDS", 7 * 24 * 60 * 60))
    LOGIN_RATE_LIMIT = int(data.get("LOGIN_RATE_LIMIT", 5))
    LOGIN_RATE_WINDOW_SECONDS = int(data.get("LOGIN_RATE_WINDOW_SECONDS", 60))
    RATE_LIMIT_SWEEP_INTERVAL = int(data.get("RATE_LIMIT_SWEEP_INTERVAL", 300))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
