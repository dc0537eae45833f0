"""Quick-reply suggestions for the field being asked."""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Any

from travelbot.data.presets import (
    BUDGET_PER_TRAVELER_TIERS,
    COMMON_DEPARTURE_CITIES,
    DEFAULT_TRAVELER_COUNT,
    EXAMPLE_FULL_NAME,
    EXAMPLE_MAILBOX,
    INTEREST_PRESETS,
    MAIL_PROVIDERS,
    NOTE_PRESETS,
    OTHER_OPTION,
    POPULAR_DESTINATIONS,
    TRAVELER_COUNT_PRESETS,
)
from travelbot.services.entity_extractor import infer_name_from_email
from travelbot.services.field_validator import try_parse_date

SATURDAY = 5
MONDAY = 0


def next_weekend(today: date) -> tuple[date, date]:
    start = today + timedelta(days=(SATURDAY - today.weekday()) % 7)
    return start, start + timedelta(days=1)


def next_week_start(today: date) -> date:
    return today + timedelta(days=(MONDAY - today.weekday()) % 7)


def _traveler_count(data: dict[str, Any]) -> int:
    try:
        count = int(data.get("n_travelers") or DEFAULT_TRAVELER_COUNT)
    except (TypeError, ValueError):
        return DEFAULT_TRAVELER_COUNT
    return count if count > 0 else DEFAULT_TRAVELER_COUNT


def _mailbox_base(data: dict[str, Any]) -> str:
    full_name = str(data.get("full_name") or "").strip()
    if not full_name:
        return EXAMPLE_MAILBOX
    return re.sub(r"\s+", ".", full_name.lower())


def suggest_for_field(
    field: str | None,
    data: dict[str, Any] | None = None,
    *,
    today: date | None = None,
) -> list[str]:
    data = data or {}
    today = today or date.today()

    if field == "full_name":
        guess = infer_name_from_email(data.get("email")) if data.get("email") else None
        return [guess or EXAMPLE_FULL_NAME, OTHER_OPTION]

    if field == "email":
        base = _mailbox_base(data)
        return [*(f"{base}@{provider}" for provider in MAIL_PROVIDERS), OTHER_OPTION]

    if field == "departure_city":
        return [*COMMON_DEPARTURE_CITIES, OTHER_OPTION]

    if field == "destination":
        return [*POPULAR_DESTINATIONS[:5], OTHER_OPTION]

    if field == "start_date":
        weekend_start, _ = next_weekend(today)
        return [
            weekend_start.isoformat(),
            (today + timedelta(days=3)).isoformat(),
            next_week_start(today).isoformat(),
            OTHER_OPTION,
        ]

    if field == "end_date":
        start = try_parse_date(data.get("start_date"))
        if start:
            start_day = date.fromisoformat(start)
            return [
                *((start_day + timedelta(days=offset)).isoformat() for offset in (3, 6, 13)),
                OTHER_OPTION,
            ]
        _, weekend_end = next_weekend(today)
        return [weekend_end.isoformat(), (today + timedelta(days=7)).isoformat(), OTHER_OPTION]

    if field == "n_travelers":
        return [*(str(count) for count in TRAVELER_COUNT_PRESETS), OTHER_OPTION]

    if field == "budget":
        travelers = _traveler_count(data)
        return [*(str(tier * travelers) for tier in BUDGET_PER_TRAVELER_TIERS), OTHER_OPTION]

    if field == "interests":
        return [*INTEREST_PRESETS, OTHER_OPTION]

    if field == "notes":
        return [*NOTE_PRESETS, OTHER_OPTION]

    return []
