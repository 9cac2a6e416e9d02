from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

_DATA_DIR = Path(__file__).resolve().parent / "data"


def _default_log_level() -> str:
    if os.getenv("DEBUG"):
        return "DEBUG"
    return os.getenv("LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class AppConfig:
    tours_csv: Path = Path(os.getenv("EXPLORECALI_TOURS_CSV", str(_DATA_DIR / "tours.csv")))
    ratings_csv: Path = Path(
        os.getenv("EXPLORECALI_RATINGS_CSV", str(_DATA_DIR / "tour_ratings.csv"))
    )
    max_limit: int = 100
    default_customer_limit: int = 5
    log_level: str = _default_log_level()
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


DEFAULT_CONFIG = AppConfig()
