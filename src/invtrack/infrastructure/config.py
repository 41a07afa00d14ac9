"""
Central configuration loader.
Reads from environment variables (via .env at the project root).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# When installed in editable mode the project root is the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]
load_dotenv(_PROJECT_ROOT / ".env")

DEFAULT_DB_PATH = _PROJECT_ROOT / "data" / "product_inventory.db"


@dataclass(frozen=True)
class Settings:
    db_path: Path
    log_level: str


def get_settings() -> Settings:
    raw_path = os.getenv("INVTRACK_DB_PATH")
    return Settings(
        db_path=Path(raw_path).expanduser() if raw_path else DEFAULT_DB_PATH,
        log_level=os.getenv("INVTRACK_LOG_LEVEL", "WARNING").upper(),
    )
