# backend/config.py

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

BACKEND_DIR = Path(__file__).resolve().parent

MAX_UPLOAD_BYTES = 5 * 1024 * 1024


def _int_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def _origins_env() -> List[str]:
    raw = os.getenv("CORS_ALLOWED_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()]


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("./data")
    max_upload_bytes: int = MAX_UPLOAD_BYTES
    index_path: Path = BACKEND_DIR / "ui" / "index.html"
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])
    host: str = "localhost"
    port: int = 8080
    log_level: str = "INFO"


def load_settings() -> Settings:
    """
    Build settings from the environment.
    Unset variables fall back to the defaults above.
    """
    max_upload = _int_env("MAX_UPLOAD_BYTES", MAX_UPLOAD_BYTES)
    if max_upload <= 0:
        raise ValueError("MAX_UPLOAD_BYTES must be positive")

    return Settings(
        data_dir=Path(os.getenv("DATA_DIR", "./data")),
        max_upload_bytes=max_upload,
        index_path=Path(os.getenv("INDEX_PATH", str(BACKEND_DIR / "ui" / "index.html"))),
        allowed_origins=_origins_env(),
        host=os.getenv("HOST", "localhost"),
        port=_int_env("PORT", 8080),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
