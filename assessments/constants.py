from __future__ import annotations

from typing import Iterable

RIASEC_CODES = ["R", "I", "A", "S", "E", "C"]
APTITUDE_CODES = ["LOGICAL", "NUMERICAL", "VERBAL"]
PERSONALITY_CODES = ["LEADERSHIP", "TEAMWORK", "DISCIPLINE"]

CATEGORY_CODES = RIASEC_CODES + APTITUDE_CODES + PERSONALITY_CODES

# Questions drawn per category for one assessment (40 in total).
CATEGORY_QUOTAS = {
    "R": 4,
    "I": 4,
    "A": 4,
    "S": 4,
    "E": 4,
    "C": 4,
    "LOGICAL": 3,
    "NUMERICAL": 3,
    "VERBAL": 2,
    "LEADERSHIP": 3,
    "TEAMWORK": 3,
    "DISCIPLINE": 2,
}

ASSESSMENT_SIZE = sum(CATEGORY_QUOTAS.values())

SECTION_CODES = {
    "interest": RIASEC_CODES,
    "aptitude": APTITUDE_CODES,
    "personality": PERSONALITY_CODES,
}


def empty_scores() -> dict[str, int]:
    """Return a score map with every known category initialised to zero."""
    return {code: 0 for code in CATEGORY_CODES}


def normalize_codes(values: Iterable[str] | None) -> list[str]:
    """Return the RIASEC codes from ``values``, uppercased and de-duplicated."""
    if not values:
        return []
    codes: list[str] = []
    for value in values:
        if not value:
            continue
        key = str(value).strip().upper()
        if key in RIASEC_CODES and key not in codes:
            codes.append(key)
    return codes
