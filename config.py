"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.
"""

import os
from urllib.parse import quote

from dotenv import load_dotenv

load_dotenv()


# ── ClickHouse ────────────────────────────────────────────
CLICKHOUSE_HOST: str = os.getenv("CLICKHOUSE_HOST", "localhost")
CLICKHOUSE_PORT: int = int(os.getenv("CLICKHOUSE_PORT", "8123"))
CLICKHOUSE_USER: str = os.getenv("CLICKHOUSE_USER", "default")
CLICKHOUSE_PASSWORD: str = os.getenv("CLICKHOUSE_PASSWORD", "")
CLICKHOUSE_DATABASE: str = os.getenv("CLICKHOUSE_DATABASE", "default")

CLICKHOUSE_URL: str = os.getenv("CLICKHOUSE_URL") or (
    f"http://{quote(CLICKHOUSE_USER, safe='')}:{quote(CLICKHOUSE_PASSWORD, safe='')}"
    f"@{CLICKHOUSE_HOST}:{CLICKHOUSE_PORT}/{CLICKHOUSE_DATABASE}"
)

# ── Connection Pool ───────────────────────────────────────
POOL_MAX_SIZE: int = int(os.getenv("POOL_MAX_SIZE", "20"))
POOL_MIN_IDLE: int = int(os.getenv("POOL_MIN_IDLE", "10"))
POOL_TIMEOUT_SECONDS: float = float(os.getenv("POOL_TIMEOUT_SECONDS", "30"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
