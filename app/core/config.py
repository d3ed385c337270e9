import os
from dotenv import load_dotenv

load_dotenv()


def _split_origins(raw: str) -> list:
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings:
    PORT: int = int(os.environ.get("PORT", 3000))
    HOST: str = os.environ.get("HOST", "0.0.0.0")
    ICHIRAN_CLI: str = os.environ.get("ICHIRAN_CLI", "ichiran-cli")
    ICHIRAN_TIMEOUT_SECONDS: float = float(os.environ.get("ICHIRAN_TIMEOUT_SECONDS", 30))
    ICHIRAN_MAX_OUTPUT_BYTES: int = int(os.environ.get("ICHIRAN_MAX_OUTPUT_BYTES", 1024 * 1024))
    ICHIRAN_DEFAULT_LIMIT: int = int(os.environ.get("ICHIRAN_DEFAULT_LIMIT", 1))
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
    CORS_ALLOW_ORIGINS = _split_origins(os.environ.get("CORS_ALLOW_ORIGINS", "*"))


settings = Settings()
