"""Field catalogue and keyword sets for the travel intake flow."""

from typing import Any

REQUIRED_FIELDS_ORDER = [
    "full_name",
    "email",
    "departure_city",
    "destination",
    "start_date",
    "end_date",
    "n_travelers",
    "budget",
    "interests",
]

OPTIONAL_FIELDS = ["notes"]

FIELD_LABELS_FR = {
    "full_name": "votre nom complet",
    "email": "votre adresse e-mail",
    "departure_city": "votre ville de départ",
    "destination": "la destination souhaitée",
    "start_date": "la date de départ (YYYY-MM-DD)",
    "end_date": "la date de retour (YYYY-MM-DD)",
    "n_travelers": "le nombre de voyageurs",
    "budget": "le budget total en €",
    "interests": "vos centres d’intérêt (ex: musées, nature, gastronomie)",
    "notes": "des notes complémentaires (optionnel)",
}

RESET_WORDS = frozenset({"reset", "recommencer"})
GREETING_WORDS = frozenset({"start", "bonjour", "salut", "hello"})
CONFIRM_WORDS = frozenset({"valider", "ok"})
CONTROL_WORDS = RESET_WORDS | GREETING_WORDS | CONFIRM_WORDS

ESCAPE_PREFIX = "autre"
CONFIRM_SUGGESTIONS = ["valider", "reset"]

# Shortest utterance kept as the lead's free-form phrase.
USER_PHRASE_MIN_LENGTH = 8


def field_label(field: str | None) -> str:
    if not field:
        return "la prochaine information"
    return FIELD_LABELS_FR.get(field, field)


def is_missing(value: Any) -> bool:
    if value is None or value == "":
        return True
    if isinstance(value, (list, tuple)) and len(value) == 0:
        return True
    return False


def find_next_missing(data: dict[str, Any]) -> str | None:
    for field in REQUIRED_FIELDS_ORDER:
        if is_missing(data.get(field)):
            return field
    return None
