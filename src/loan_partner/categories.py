"""Static collateral classification: major category → ordered minor categories."""
from __future__ import annotations

_MINOR_CATEGORIES: dict[str, list[str]] = {
    "주택": ["아파트", "다세대", "연립", "단독주택", "다가구", "오피스텔(주거)"],
    "상가": ["근린상가", "집합상가", "오피스텔(업무)", "지식산업센터", "사무실"],
    "토지": ["대지", "전", "답", "임야", "잡종지"],
    "공장": ["일반공장", "아파트형공장", "창고"],
    "기타": ["숙박시설", "종교시설", "주차장", "기타"],
}

MAJOR_CATEGORIES: tuple[str, ...] = tuple(_MINOR_CATEGORIES)


def minor_categories_of(major: str) -> list[str]:
    """Ordered minor categories of *major*; empty for an unknown major category."""
    return list(_MINOR_CATEGORIES.get(major, []))


def default_minor_of(major: str) -> str:
    minors = _MINOR_CATEGORIES.get(major, [])
    return minors[0] if minors else ""


def is_valid_pair(major: str, minor: str) -> bool:
    return minor in _MINOR_CATEGORIES.get(major, [])
