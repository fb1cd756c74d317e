"""
Centralized Configuration - Single source of truth for all settings.

All environment variables are read here, validated, and exposed as module-level
constants. Other modules import from here instead of reading os.environ directly.

Usage:
    from prospector.config import DB_PATH, MIN_HIRE_PROBABILITY, LOG_LEVEL
"""

import os
import sys

# ─── PATHS ───────────────────────────────────────────────────

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
LOGS_DIR = os.path.join(PROJECT_ROOT, "logs")

# ─── DATABASE ────────────────────────────────────────────────

DB_PATH = os.environ.get("PROSPECTOR_DB_PATH", os.path.join(PROJECT_ROOT, "prospector.db"))
DB_JOURNAL_MODE = os.environ.get("PROSPECTOR_JOURNAL_MODE", "WAL")

# ─── PROSPECTING RULES ───────────────────────────────────────

# Only prospects scoring strictly above this are admissible from a search batch
MIN_HIRE_PROBABILITY = int(os.environ.get("PROSPECTOR_MIN_PROBABILITY", "80"))
SEARCH_RESULT_LIMIT = int(os.environ.get("PROSPECTOR_SEARCH_LIMIT", "10"))
DEFAULT_SORT = os.environ.get("PROSPECTOR_DEFAULT_SORT", "probability")

# ─── API ─────────────────────────────────────────────────────

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "8000"))
CORS_ORIGINS = os.environ.get(
    "PROSPECTOR_CORS_ORIGINS", "http://localhost:3000,http://localhost:8000"
).split(",")

# ─── LOGGING ─────────────────────────────────────────────────

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.environ.get("LOG_FORMAT", "text")  # "text" or "json"
LOG_FILE = os.environ.get("LOG_FILE", "")  # empty = stdout only

# ─── VALIDATION ──────────────────────────────────────────────

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_VALID_LOG_FORMATS = {"text", "json"}
_VALID_JOURNAL_MODES = {"WAL", "DELETE", "MEMORY", "OFF"}
_VALID_SORT_KEYS = {"probability", "name", "date"}

_errors = []

if LOG_LEVEL not in _VALID_LOG_LEVELS:
    _errors.append(f"LOG_LEVEL must be one of {_VALID_LOG_LEVELS}, got '{LOG_LEVEL}'")

if LOG_FORMAT not in _VALID_LOG_FORMATS:
    _errors.append(f"LOG_FORMAT must be one of {_VALID_LOG_FORMATS}, got '{LOG_FORMAT}'")

if DB_JOURNAL_MODE not in _VALID_JOURNAL_MODES:
    _errors.append(f"PROSPECTOR_JOURNAL_MODE must be one of {_VALID_JOURNAL_MODES}, got '{DB_JOURNAL_MODE}'")

if not 0 <= MIN_HIRE_PROBABILITY <= 100:
    _errors.append(f"PROSPECTOR_MIN_PROBABILITY must be within 0-100, got {MIN_HIRE_PROBABILITY}")

if SEARCH_RESULT_LIMIT < 1:
    _errors.append(f"PROSPECTOR_SEARCH_LIMIT must be positive, got {SEARCH_RESULT_LIMIT}")

if DEFAULT_SORT not in _VALID_SORT_KEYS:
    _errors.append(f"PROSPECTOR_DEFAULT_SORT must be one of {_VALID_SORT_KEYS}, got '{DEFAULT_SORT}'")

if _errors:
    for e in _errors:
        print(f"[config] ERROR: {e}", file=sys.stderr)
    # Import must not crash; callers that care use validate(strict=True)


def validate(strict: bool = False) -> list:
    """Validate all configuration settings.

    Args:
        strict: If True, raise ValueError on any errors.

    Returns:
        List of error messages (empty if all valid).
    """
    if strict and _errors:
        raise ValueError(f"Configuration errors: {'; '.join(_errors)}")
    return list(_errors)


def print_config():
    """Print current configuration (safe - no secrets)."""
    print("=" * 50)
    print("Prospector Configuration")
    print("=" * 50)
    print(f"  DB_PATH:              {DB_PATH}")
    print(f"  DB_JOURNAL_MODE:      {DB_JOURNAL_MODE}")
    print(f"  MIN_HIRE_PROBABILITY: {MIN_HIRE_PROBABILITY}")
    print(f"  SEARCH_RESULT_LIMIT:  {SEARCH_RESULT_LIMIT}")
    print(f"  DEFAULT_SORT:         {DEFAULT_SORT}")
    print(f"  API_HOST:             {API_HOST}")
    print(f"  API_PORT:             {API_PORT}")
    print(f"  LOG_LEVEL:            {LOG_LEVEL}")
    print(f"  LOG_FORMAT:           {LOG_FORMAT}")
    print(f"  PROJECT_ROOT:         {PROJECT_ROOT}")
    print("=" * 50)
