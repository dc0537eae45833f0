"""Best-effort entity extraction from free-form French travel requests."""

from __future__ import annotations

import re
from typing import Any

EMAIL_PATTERN = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
DATE_PATTERN = re.compile(r"\b(20\d{2})[-/](0[1-9]|1[0-2])[-/](0[1-9]|[12]\d|3[01])\b")
TRAVELER_COUNT_PATTERN = re.compile(
    r"\b(\d{1,2})\s*(?:voyageurs?|pers|personnes?)\b",
    re.IGNORECASE,
)
BARE_NUMBER_PATTERN = re.compile(r"\b(\d{1,2})\b")
MONEY_PATTERN = re.compile(r"(\d[\d\s.,]*)(?:\s?€|\s?eur\b|\s?euros?\b)", re.IGNORECASE)
NARROW_SPACES = re.compile(r"[\u202f\u00a0]")

DEPARTURE_TRIGGERS = {"depuis", "de", "from"}
DESTINATION_TRIGGERS = {"vers", "pour", "destination", "to"}

MIN_TRAVELERS = 1
MAX_TRAVELERS = 20


def capitalize(value: str) -> str:
    if not value:
        return value
    return value[0].upper() + value[1:]


def infer_name_from_email(email: str | None) -> str | None:
    local = str(email or "").split("@")[0]
    if not local:
        return None
    parts = [part for part in re.split(r"[._-]+", local) if part][:3]
    if not parts:
        return None
    return " ".join(capitalize(part) for part in parts)


def _mask(text: str, patterns: list[re.Pattern[str]]) -> str:
    for pattern in patterns:
        text = pattern.sub(lambda match: " " * len(match.group(0)), text)
    return text


def extract_email(text: str) -> str | None:
    match = EMAIL_PATTERN.search(text)
    return match.group(0) if match else None


def extract_dates(text: str) -> list[str]:
    return [f"{year}-{month}-{day}" for year, month, day in DATE_PATTERN.findall(text)]


def extract_traveler_count(text: str) -> int | None:
    # Digits inside emails, dates and amounts are not headcounts.
    cleaned = _mask(NARROW_SPACES.sub(" ", text), [EMAIL_PATTERN, DATE_PATTERN, MONEY_PATTERN])
    match = TRAVELER_COUNT_PATTERN.search(cleaned) or BARE_NUMBER_PATTERN.search(cleaned)
    if not match:
        return None
    count = int(match.group(1))
    if MIN_TRAVELERS <= count <= MAX_TRAVELERS:
        return count
    return None


def extract_budget(text: str) -> float | None:
    match = MONEY_PATTERN.search(NARROW_SPACES.sub(" ", text))
    if not match:
        return None
    raw = re.sub(r"\s+", "", match.group(1)).replace(",", ".")
    number = re.match(r"\d+(?:\.\d+)?", raw)
    if not number:
        return None
    value = float(number.group(0))
    return value if value > 0 else None


def extract_cities(text: str) -> dict[str, str]:
    found: dict[str, str] = {}
    tokens = text.split()
    for index, token in enumerate(tokens[:-1]):
        lowered = token.lower()
        if lowered in DEPARTURE_TRIGGERS:
            key = "departure_city"
        elif lowered in DESTINATION_TRIGGERS:
            key = "destination"
        else:
            continue
        candidate = re.sub(r"[.,]", "", tokens[index + 1]).strip()
        if not candidate or not candidate[0].isalpha():
            continue
        found[key] = capitalize(candidate)
    return found


def extract_entities(text: str) -> dict[str, Any]:
    found: dict[str, Any] = {}
    if not text:
        return found

    email = extract_email(text)
    if email:
        found["email"] = email

    dates = extract_dates(text)
    if len(dates) > 0:
        found["start_date"] = dates[0]
    if len(dates) > 1:
        found["end_date"] = dates[1]

    travelers = extract_traveler_count(text)
    if travelers is not None:
        found["n_travelers"] = travelers

    budget = extract_budget(text)
    if budget is not None:
        found["budget"] = budget

    found.update(extract_cities(text))
    return found
