"""
simpledb/config.py
------------------
Central configuration module. Loads environment variables
from the .env file and exposes them as typed constants.
"""

import os
from urllib.parse import quote

from dotenv import load_dotenv

load_dotenv()


# ── Database ──────────────────────────────────────────────
DB_DRIVER: str = os.getenv("DB_DRIVER", "sqlite")
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT") or 0)
DB_NAME: str = os.getenv("DB_NAME", "simpledb.sqlite3")
DB_USER: str = os.getenv("DB_USER", "")
DB_PASS: str = os.getenv("DB_PASS", "")


def _compose_url() -> str:
    """Build a connection target from the DB_* variables."""
    if DB_DRIVER == "sqlite":
        return f"sqlite:{DB_NAME}"
    credentials = f"{quote(DB_USER, safe='')}:{quote(DB_PASS, safe='')}@" if DB_USER else ""
    port = f":{DB_PORT}" if DB_PORT else ""
    return f"{DB_DRIVER}://{credentials}{DB_HOST}{port}/{DB_NAME}"


DATABASE_URL: str = os.getenv("SIMPLEDB_DATABASE_URL", "") or _compose_url()

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_STDOUT: bool = os.getenv("LOG_STDOUT", "").lower() in ("1", "true", "yes")
