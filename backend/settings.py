import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from backend/.env (optional) before reading them
load_dotenv(Path(__file__).resolve().parent / ".env")

DEFAULT_PORT = 4000


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_int(val: str | None, default: int) -> int:
    try:
        return int(val)
    except (TypeError, ValueError):
        return default


def _as_list(val: str | None, default: list[str]) -> list[str]:
    if not val:
        return default
    return [item.strip() for item in val.split(",") if item.strip()]


class Settings:
    def __init__(self) -> None:
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = _as_int(os.getenv("PORT"), DEFAULT_PORT)
        self.DB_FILE: str = os.getenv("DB_FILE", "db.json")
        # Off: get-by-id returns a list and delete never 404s
        self.STRICT_LOOKUPS: bool = _as_bool(os.getenv("STRICT_LOOKUPS"), False)
        self.SERIALIZE_WRITES: bool = _as_bool(os.getenv("SERIALIZE_WRITES"), True)
        self.CORS_ORIGINS: list[str] = _as_list(os.getenv("CORS_ORIGINS"), ["*"])
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
