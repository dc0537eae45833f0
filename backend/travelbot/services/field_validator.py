"""Authoritative validation and normalization of a single solicited field."""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any

from travelbot.services.entity_extractor import EMAIL_PATTERN, infer_name_from_email
from travelbot.services.flow_definitions import field_label

logger = logging.getLogger(__name__)

NAME_BAD_HINTS = re.compile(
    r"(?:\bj['’]|\b(?:je|veux|souhait\w*|voyag\w*|vers|pour|destination|aller|faire|"
    r"réserv\w*|billet|métro|train|avion)\b)",
    re.IGNORECASE,
)
NAME_DISALLOWED_CHARS = re.compile(r"[^A-Za-zÀ-ÖØ-öø-ÿ' -]")
NAME_NOT_A_NAME = re.compile(r"[@\d]")
NAME_MAX_LENGTH = 60
NAME_MIN_TOKENS = 2
NAME_MAX_TOKENS = 4
NAME_MIN_LENGTH = 5

STRICT_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
LEADING_INT_PATTERN = re.compile(r"^[+-]?\d+")
LEADING_FLOAT_PATTERN = re.compile(r"^[+-]?\d+(?:\.\d+)?")
CURRENCY_WORDS = re.compile(r"€|\beuros?\b|\beur\b", re.IGNORECASE)

ValidationResult = tuple[Any, str | None]


def normalize_name(value: str) -> str | None:
    cleaned = re.sub(r"\s+", " ", NAME_DISALLOWED_CHARS.sub(" ", str(value))).strip()
    parts = [part for part in cleaned.split(" ") if part]
    if len(parts) < NAME_MIN_TOKENS or len(parts) > NAME_MAX_TOKENS:
        return None
    pretty = " ".join(part[0].upper() + part[1:].lower() for part in parts)
    if len(pretty) < NAME_MIN_LENGTH:
        return None
    return pretty


def try_parse_full_name(value: Any, email_fallback: str | None = None) -> ValidationResult:
    text = str(value or "").strip()
    if not text:
        return None, "Merci d’indiquer vos nom et prénom (ex: Hugo Grillon)."

    if NAME_BAD_HINTS.search(text) or NAME_NOT_A_NAME.search(text) or len(text) > NAME_MAX_LENGTH:
        guess = infer_name_from_email(email_fallback)
        hint = f' Par exemple: "{guess}".' if guess else ""
        return None, f"Indiquez uniquement votre nom et prénom.{hint}"

    name = normalize_name(text)
    if not name:
        guess = infer_name_from_email(email_fallback)
        hint = f' Par exemple: "{guess}".' if guess else " Exemple: Hugo Grillon."
        return None, f"Nom invalide.{hint}"
    return name, None


def try_parse_date(value: Any) -> str | None:
    if value is None:
        return None
    normalized = str(value).strip().replace("/", "-")
    if not STRICT_DATE_PATTERN.fullmatch(normalized):
        return None
    try:
        date.fromisoformat(normalized)
    except ValueError:
        return None
    return normalized


def parse_traveler_count(value: str) -> int | None:
    match = LEADING_INT_PATTERN.match(value.strip())
    if not match:
        return None
    return int(match.group(0))


def parse_budget(value: str) -> float | None:
    cleaned = re.sub(r"\s+", "", CURRENCY_WORDS.sub("", value))
    if "," in cleaned:
        cleaned = cleaned.replace(".", "").replace(",", ".")
    match = LEADING_FLOAT_PATTERN.match(cleaned)
    if not match:
        return None
    return float(match.group(0))


def validate_field(field: str, message: Any, data: dict[str, Any] | None = None) -> ValidationResult:
    """Return ``(normalized, None)`` on success or ``(None, reason)`` on rejection.

    ``data`` is the session's accumulated fields; only the known email is used,
    to suggest a name when the submitted one is refused.
    """
    data = data or {}
    text = str(message if message is not None else "").strip()
    try:
        if field == "full_name":
            return try_parse_full_name(text, data.get("email"))

        if field == "email":
            match = EMAIL_PATTERN.search(text)
            if match:
                return match.group(0), None
            return None, "Adresse e-mail invalide. Exemple: prenom.nom@gmail.com"

        if field in {"start_date", "end_date"}:
            parsed = try_parse_date(text)
            if parsed:
                return parsed, None
            return None, "Format de date invalide. Utilisez YYYY-MM-DD (ex: 2025-09-12)."

        if field == "n_travelers":
            count = parse_traveler_count(text)
            if count is not None and count > 0:
                return count, None
            return None, "Le nombre de voyageurs doit être > 0."

        if field == "budget":
            amount = parse_budget(text)
            if amount is not None and amount > 0:
                return amount, None
            return None, "Le budget doit être > 0."

        return text, None
    except Exception:
        logger.exception("Unexpected failure while validating field %s", field)
        return None, f"Valeur invalide pour {field_label(field)}."
