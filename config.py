import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.environ.get("AUTH_CONFIG_FILE", os.path.join(ROOT_PATH, "env.yaml"))
ENV_PREFIX = "AUTH_"

# Settings that are always strings, whatever YAML would make of them
STRING_KEYS = {
    "SERVICE_NAME",
    "DB_URI",
    "REDIS_URL",
    "SESSION_BACKEND",
    "CREDENTIAL_BACKEND",
    "API_HOST",
    "LOG_LEVEL",
    "JWT_SECRET",
    "JWT_ALGORITHM",
}


def load_settings(path=CONFIG_FILE_PATH, environ=os.environ) -> dict:
    """Read env.yaml, then let AUTH_<KEY> environment variables win"""
    if os.path.exists(path):
        with open(path, "r") as r_file:
            settings = yaml.safe_load(r_file) or dict()
    else:
        settings = dict()

    for key, raw in environ.items():
        if not key.startswith(ENV_PREFIX) or key == "AUTH_CONFIG_FILE":
            continue
        name = key[len(ENV_PREFIX):]
        settings[name] = raw if name in STRING_KEYS else yaml.safe_load(raw)

    for name in STRING_KEYS:
        if settings.get(name) is not None:
            settings[name] = str(settings[name])

    return settings


data = load_settings()


class ApplicationConfig:
    SERVICE_NAME = data.get("SERVICE_NAME", "auth-service")
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./auth.db")
    CREATE_TABLES = bool(data.get("CREATE_TABLES", True))
    REDIS_URL = data.get("REDIS_URL", "redis://localhost:6379/0")
    SESSION_BACKEND = data.get("SESSION_BACKEND", "redis")
    CREDENTIAL_BACKEND = data.get("CREDENTIAL_BACKEND", "sql")
    API_PORT = data.get("API_PORT", 3001)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    ENABLE_LOGGING_MIDDLEWARE = bool(data.get("ENABLE_LOGGING_MIDDLEWARE", 1))
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_TTL_SECONDS = int(data.get("ACCESS_TOKEN_TTL_SECONDS", 15 * 60))
    REFRESH_TOKEN_TTL_SECONDS = int(data.get("REFRESH_TOKEN_TTL_SECONDS", 7 * 24 * 60 * 60))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    OPERATION_TIMEOUT_SECONDS = float(data.get("OPERATION_TIMEOUT_SECONDS", 5))
    # Register and login attempts per client within the window; 0 disables
    AUTH_RATE_LIMIT_MAX_ATTEMPTS = int(data.get("AUTH_RATE_LIMIT_MAX_ATTEMPTS", 5))
    AUTH_RATE_LIMIT_WINDOW_SECONDS = int(data.get("AUTH_RATE_LIMIT_WINDOW_SECONDS", 15 * 60))
