# appgen/utils/config.py
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


GEMINI_MODEL = os.environ.get("AI_GEMINI_MODEL", "gemini-2.5-flash-lite")
TEMPERATURE = _env_float("AI_TEMPERATURE", 0.5)
JSON_MODE = _env_flag("AI_JSON_MODE", "1")

LOG_DIR = os.environ.get("AI_BACKEND_LOG_DIR", "./ai_backend_logs")
DEBUG_LOGS = _env_flag("AI_DEBUG_LOGS")
LOG_LEVEL = os.environ.get("AI_LOG_LEVEL", "INFO").upper()

# bounded store sample sent to the model
MAX_SAMPLE_PRODUCTS = _env_int("AI_MAX_SAMPLE_PRODUCTS", 10)
MAX_SAMPLE_COLLECTIONS = _env_int("AI_MAX_SAMPLE_COLLECTIONS", 8)

DEFAULT_PRIMARY_COLOR = "#4F46E5"


def get_gemini_api_key() -> Optional[str]:
    """
    Prefer GOOGLE_API_KEY_GEMINI, fall back to the plain GOOGLE_API_KEY the
    Google client reads on its own.
    """
    return os.getenv("GOOGLE_API_KEY_GEMINI") or os.getenv("GOOGLE_API_KEY")
