"""Application-wide constants and configuration defaults.

All tuneable defaults live here so there is a single place to adjust them.
Amounts are in thousands of won (천원).
"""
from __future__ import annotations

import os
from decimal import Decimal
from pathlib import Path

# ── Default location (LoanState start-up) ─────────────────────────────────────

DEFAULT_CITY: str = "서울특별시"
DEFAULT_DISTRICT: str = "강남구"
DEFAULT_NEIGHBORHOOD: str = "역삼동"
DEFAULT_VILLAGE: str = ""

# ── Default collateral fields ─────────────────────────────────────────────────

DEFAULT_MAJOR_CATEGORY: str = "주택"
DEFAULT_MINOR_CATEGORY: str = "아파트"
DEFAULT_ITEM_LTV = Decimal("70")
DEFAULT_FIRST_PROPERTY_ID: str = "1"
DEFAULT_FIRST_PROPERTY_USAGE: str = "대지"

# Reserved inputs: stored on the session, not used by the limit derivation.
DEFAULT_INTEREST_RATE = Decimal("4.5")
DEFAULT_ANNUAL_INCOME = Decimal("0")

# ── Local storage ─────────────────────────────────────────────────────────────

STORAGE_NAMESPACE: str = "nh"
STORAGE_VERSION: str = "v6_0"


def storage_key(name: str) -> str:
    """Versioned storage key, e.g. ``nh_todos_v6_0``."""
    return f"{STORAGE_NAMESPACE}_{name}_{STORAGE_VERSION}"


TODOS_KEY: str = storage_key("todos")
SCHEDULES_KEY: str = storage_key("schedules")
NEWS_KEY: str = storage_key("news")

DATA_DIR_ENV: str = "LOAN_PARTNER_DATA_DIR"
DEFAULT_DATA_DIR: Path = Path.home() / ".loan_partner"


def data_dir() -> Path:
    override = os.environ.get(DATA_DIR_ENV)
    return Path(override).expanduser() if override else DEFAULT_DATA_DIR

# ── News parsing ──────────────────────────────────────────────────────────────

NEWS_MIN_LINE_LENGTH: int = 6
NEWS_STRIP_CHARS: str = "#*"

# ── Collateral location map link ──────────────────────────────────────────────

MAP_SEARCH_URL: str = "https://map.kakao.com/?q={query}"

# ── Generative-AI service ─────────────────────────────────────────────────────

API_KEY_ENVS: tuple[str, ...] = ("GEMINI_API_KEY", "API_KEY")
CONSULT_MODEL: str = "gemini-3-pro-preview"
NEWS_MODEL: str = "gemini-3-flash-preview"
CONSULT_TEMPERATURE: float = 0.1
# Seconds. Exiting waits up to this long for a request already in flight.
CONSULT_TIMEOUT: int = 30
NEWS_TIMEOUT: int = 15

CONSULT_FAILURE_MESSAGE: str = "AI 연결 오류가 발생했습니다."
NEWS_EMPTY_MESSAGE: str = "뉴스를 불러오지 못했습니다."

# ── Numeric convenience ───────────────────────────────────────────────────────

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Amounts whose decimal exponent exceeds this are treated as malformed input.
MAX_AMOUNT_EXPONENT: int = 15
