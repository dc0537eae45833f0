"""Human-readable recap of a completed travel request."""

from typing import Any


def format_amount(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_interests(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(item) for item in value)
    return str(value if value is not None else "")


def build_recap(data: dict[str, Any], user_phrase: str | None = None) -> str:
    lines = [
        f"- Nom: {data.get('full_name', '')}",
        f"- Email: {data.get('email', '')}",
        f"- Départ: {data.get('departure_city', '')}",
        f"- Destination: {data.get('destination', '')}",
        f"- Dates: {data.get('start_date', '')} → {data.get('end_date', '')}",
        f"- Voyageurs: {data.get('n_travelers', '')}",
        f"- Budget: {format_amount(data.get('budget', ''))}€",
        f"- Intérêts: {format_interests(data.get('interests'))}",
        f"- Notes: {data.get('notes') or ''}",
        f"- Phrase: {user_phrase or ''}",
    ]
    return "\n".join(lines)
