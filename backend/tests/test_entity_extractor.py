"""
Tests for best-effort entity extraction.

Ambiguous input is dropped, not guessed: these tests pin the patterns that must be
recognised and the inputs that must yield nothing.
"""

from travelbot.services.entity_extractor import (
    capitalize,
    extract_budget,
    extract_cities,
    extract_dates,
    extract_entities,
    extract_traveler_count,
    infer_name_from_email,
)


class TestFullSentence:
    """A complete request in a single utterance."""

    def test_trip_sentence_yields_all_structured_fields(self):
        text = "Je pars de Paris vers Rome le 2025-09-12 au 2025-09-20 pour 2 voyageurs avec 1500€"

        assert extract_entities(text) == {
            "destination": "Rome",
            "departure_city": "Paris",
            "start_date": "2025-09-12",
            "end_date": "2025-09-20",
            "n_travelers": 2,
            "budget": 1500,
        }

    def test_empty_text_yields_nothing(self):
        assert extract_entities("") == {}

    def test_plain_name_yields_nothing(self):
        assert extract_entities("Hugo Grillon") == {}


class TestEmail:
    def test_first_email_is_kept(self):
        found = extract_entities("écrivez à hugo.grillon@gmail.com ou h@outlook.fr")
        assert found["email"] == "hugo.grillon@gmail.com"

    def test_infer_name_from_email_local_part(self):
        assert infer_name_from_email("hugo.grillon@gmail.com") == "Hugo Grillon"
        assert infer_name_from_email("jean_paul-marie.dupont@x.fr") == "Jean Paul Marie"

    def test_infer_name_without_local_part(self):
        assert infer_name_from_email("") is None
        assert infer_name_from_email(None) is None
        assert infer_name_from_email("@gmail.com") is None


class TestDates:
    def test_dates_in_document_order(self):
        assert extract_dates("du 2025/09/12 au 2025-09-20 puis 2025-10-01") == [
            "2025-09-12",
            "2025-09-20",
            "2025-10-01",
        ]

    def test_third_date_is_ignored(self):
        found = extract_entities("2025-09-12 2025-09-20 2025-10-01")
        assert found["start_date"] == "2025-09-12"
        assert found["end_date"] == "2025-09-20"

    def test_single_date_is_start_only(self):
        found = extract_entities("départ le 2025-09-12")
        assert found["start_date"] == "2025-09-12"
        assert "end_date" not in found

    def test_impossible_month_is_not_a_date(self):
        assert extract_dates("2025-13-01") == []


class TestTravelerCount:
    def test_number_with_traveler_word(self):
        assert extract_traveler_count("nous serons 4 personnes") == 4

    def test_traveler_word_wins_over_earlier_number(self):
        assert extract_traveler_count("le 14 juillet pour 3 voyageurs") == 3

    def test_bare_number(self):
        assert extract_traveler_count("2") == 2

    def test_out_of_range_is_ignored(self):
        assert extract_traveler_count("25 personnes") is None
        assert extract_traveler_count("0 voyageur") is None

    def test_digits_inside_dates_and_emails_are_not_headcounts(self):
        assert extract_traveler_count("hugo12@gmail.com le 2025-09-12") is None


class TestBudget:
    def test_euro_sign(self):
        assert extract_budget("avec 1500€") == 1500.0

    def test_grouped_amount_with_decimal_comma(self):
        assert extract_budget("1 200,50 €") == 1200.5

    def test_narrow_no_break_space_grouping(self):
        assert extract_budget("1\u202f200\u00a0euros") == 1200.0
        assert extract_budget("2 000 EUR") == 2000.0

    def test_number_without_currency_is_not_a_budget(self):
        assert extract_budget("1500") is None


class TestCities:
    def test_departure_and_destination_triggers(self):
        assert extract_cities("from london to lisbonne.") == {
            "departure_city": "London",
            "destination": "Lisbonne",
        }

    def test_later_match_overwrites(self):
        assert extract_cities("vers Rome ou plutôt vers Athènes")["destination"] == "Athènes"

    def test_numeric_token_is_not_a_city(self):
        assert extract_cities("pour 2 personnes") == {}

    def test_trigger_as_last_token(self):
        assert extract_cities("je pars de") == {}

    def test_capitalize_keeps_rest_of_word(self):
        assert capitalize("new-York") == "New-York"
        assert capitalize("") == ""
