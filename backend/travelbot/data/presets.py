"""Curated quick-reply values offered alongside each question."""

OTHER_OPTION = "Autre…"

COMMON_DEPARTURE_CITIES = ["Paris", "Lyon", "Marseille", "Lille", "Toulouse"]

POPULAR_DESTINATIONS = ["Barcelone", "Rome", "Lisbonne", "Athènes", "New York", "Tokyo"]

INTEREST_PRESETS = [
    "Gastronomie",
    "Musées & Culture",
    "Nature & Randonnée",
    "Plage & Détente",
    "Vie nocturne",
]

NOTE_PRESETS = ["Vols en journée", "Hôtel central", "Activités pour enfants"]

TRAVELER_COUNT_PRESETS = [1, 2, 4, 6]

BUDGET_PER_TRAVELER_TIERS = [300, 600, 1000]

DEFAULT_TRAVELER_COUNT = 2

EXAMPLE_FULL_NAME = "Jean Dupont"

EXAMPLE_MAILBOX = "prenom.nom"

MAIL_PROVIDERS = ["gmail.com", "outlook.com"]
