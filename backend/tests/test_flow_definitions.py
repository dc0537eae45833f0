"""Tests for the field catalogue and next-missing-field selection."""

import pytest

from travelbot.services.flow_definitions import (
    FIELD_LABELS_FR,
    REQUIRED_FIELDS_ORDER,
    field_label,
    find_next_missing,
    is_missing,
)


class TestIsMissing:
    @pytest.mark.parametrize("value", [None, "", [], ()])
    def test_absent_values(self, value):
        assert is_missing(value) is True

    @pytest.mark.parametrize("value", ["Rome", 0, 0.0, ["musées"], False])
    def test_present_values(self, value):
        assert is_missing(value) is False


class TestFindNextMissing:
    def test_empty_data_asks_for_the_name_first(self):
        assert find_next_missing({}) == "full_name"

    def test_order_is_fixed_regardless_of_insertion(self):
        data = {"budget": 1000, "destination": "Rome", "full_name": "Hugo Grillon"}
        assert find_next_missing(data) == "email"

    def test_blank_string_counts_as_missing(self, complete_lead):
        complete_lead["start_date"] = ""
        assert find_next_missing(complete_lead) == "start_date"

    def test_notes_are_never_required(self, complete_lead):
        assert "notes" not in complete_lead
        assert find_next_missing(complete_lead) is None


class TestLabels:
    def test_every_required_field_has_a_label(self):
        assert set(REQUIRED_FIELDS_ORDER) <= set(FIELD_LABELS_FR)

    def test_label_falls_back_for_unknown_and_empty(self):
        assert field_label("budget") == "le budget total en €"
        assert field_label("unknown") == "unknown"
        assert field_label(None) == "la prochaine information"
