from datetime import date

import pytest
from pydantic import ValidationError

from catalog.schemas.author import (
    AuthorForm,
    parse_iso8601_date,
    sanitize,
    validate_author_form,
)


class TestAuthorFormRules:
    """Test the per-field author rules."""

    def test_valid_form(self):
        data, errors = validate_author_form(
            {
                "first_name": "  Jane ",
                "family_name": "Austen",
                "date_of_birth": "1775-12-16",
                "date_of_death": "1817-07-18",
            }
        )
        assert errors == []
        assert data is not None
        assert data.first_name == "Jane"
        assert data.family_name == "Austen"
        assert data.date_of_birth == date(1775, 12, 16)
        assert data.date_of_death == date(1817, 7, 18)

    def test_blank_dates_are_none(self):
        data, errors = validate_author_form(
            {"first_name": "Jane", "family_name": "Austen", "date_of_birth": "", "date_of_death": "  "}
        )
        assert errors == []
        assert data.date_of_birth is None
        assert data.date_of_death is None

    def test_missing_first_name(self):
        data, errors = validate_author_form({"first_name": "", "family_name": "Doe"})
        assert data is None
        assert [(e.param, e.msg) for e in errors] == [
            ("first_name", "First name must be specified."),
        ]

    def test_whitespace_family_name(self):
        data, errors = validate_author_form({"first_name": "John", "family_name": "   "})
        assert data is None
        assert errors[0].param == "family_name"
        assert errors[0].msg == "Last name must be specified."

    def test_absent_fields_are_reported(self):
        data, errors = validate_author_form({})
        assert data is None
        assert [e.param for e in errors] == ["first_name", "family_name"]

    def test_all_rules_reported_in_form_order(self):
        _, errors = validate_author_form(
            {
                "date_of_death": "yesterday",
                "date_of_birth": "1775-13-40",
                "family_name": "",
                "first_name": "",
            }
        )
        assert [e.msg for e in errors] == [
            "First name must be specified.",
            "Last name must be specified.",
            "Invalid date of birth.",
            "Invalid date of death.",
        ]
        assert errors[2].value == "1775-13-40"

    def test_name_too_long(self):
        _, errors = validate_author_form({"first_name": "x" * 101, "family_name": "Doe"})
        assert errors[0].msg == "First name must be 100 characters or fewer."

    def test_control_characters_are_dropped(self):
        data, _ = validate_author_form({"first_name": "Ja\x00ne", "family_name": "Aus\x07ten"})
        assert data.first_name == "Jane"
        assert data.family_name == "Austen"

    def test_markup_is_kept_verbatim(self):
        data, _ = validate_author_form({"first_name": "<b>Jane</b>", "family_name": "Austen"})
        assert data.first_name == "<b>Jane</b>"

    def test_model_raises_directly(self):
        with pytest.raises(ValidationError) as exc_info:
            AuthorForm(first_name="Jane")
        assert "Last name must be specified." in str(exc_info.value)


class TestIso8601Dates:
    """Test ISO-8601 date parsing."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2001-02-03", date(2001, 2, 3)),
            ("2001-02-03T10:20:30", date(2001, 2, 3)),
            ("2001-02-03T10:20:30Z", date(2001, 2, 3)),
            ("2001-02-03T10:20:30+02:00", date(2001, 2, 3)),
            (" 2001-02-03 ", date(2001, 2, 3)),
        ],
    )
    def test_accepted(self, value, expected):
        assert parse_iso8601_date(value) == expected

    @pytest.mark.parametrize("value", ["03/02/2001", "2001-02-30", "not a date", "2001-02-03Tnoon"])
    def test_rejected(self, value):
        with pytest.raises(ValueError):
            parse_iso8601_date(value)

    def test_sanitize(self):
        assert sanitize("  a\tb\n ") == "ab"
