"""Configuration loaded from .env"""

import os
from pathlib import Path

from dotenv import load_dotenv

from constants import DEFAULT_INSIGHT_LIMIT, MOOD_WINDOW_SIZE

load_dotenv()

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Fixture data
DATA_DIR = Path(os.getenv("FLOWSYNC_DATA_DIR", str(_PROJECT_ROOT / "data")))

# Analytics
INSIGHT_LIMIT = int(os.getenv("FLOWSYNC_INSIGHT_LIMIT", str(DEFAULT_INSIGHT_LIMIT)))
MOOD_WINDOW = int(os.getenv("FLOWSYNC_MOOD_WINDOW", str(MOOD_WINDOW_SIZE)))

# Logging
LOG_LEVEL = os.getenv("FLOWSYNC_LOG_LEVEL", "INFO").upper()

# API
FRONTEND_ORIGINS = [
    o.strip() for o in os.getenv("FRONTEND_ORIGINS", "").split(",") if o.strip()
] or [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
API_HOST = os.getenv("FLOWSYNC_API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("PORT", "8000"))
