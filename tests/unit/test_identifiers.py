"""
Identifier Sanitizer Tests

Table names are interpolated into SQL text, so only [A-Za-z0-9_-] may pass.
"""

import pytest

from expdb.persistence.errors import ExpdbError, InvalidIdentifierError
from expdb.persistence.identifiers import (
    is_valid_identifier,
    quote_identifier,
    validate_identifier,
)


class TestValidateIdentifier:
    """Test the allow-list check."""

    @pytest.mark.parametrize(
        "name", ["results-1-5", "experiments", "runs", "layout_2", "A-z_09"]
    )
    def test_accepts_allowed_characters(self, name):
        assert validate_identifier(name) == name

    @pytest.mark.parametrize(
        "name",
        [
            "bad name!",
            "drop;table",
            'results-1-1"; DROP TABLE runs; --',
            "x'y",
            "schema.table",
            "",
            "tab\tle",
            "résultats",
            "results-1-1\n",
        ],
    )
    def test_rejects_disallowed_characters(self, name):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            validate_identifier(name)

        assert exc_info.value.identifier == name

    @pytest.mark.parametrize("value", [None, 12, b"runs", ["runs"]])
    def test_rejects_non_strings(self, value):
        with pytest.raises(InvalidIdentifierError):
            validate_identifier(value)

    def test_error_is_catchable_as_value_error(self):
        """Callers that only know ValueError still see the failure."""
        with pytest.raises(ValueError):
            validate_identifier("bad name!")
        with pytest.raises(ExpdbError):
            validate_identifier("bad name!")

    def test_error_message_names_the_value(self):
        with pytest.raises(InvalidIdentifierError, match="drop;table"):
            validate_identifier("drop;table")


class TestQuoteIdentifier:
    """Test quoting for interpolation."""

    def test_wraps_in_double_quotes(self):
        assert quote_identifier("results-1-5") == '"results-1-5"'

    def test_validates_before_quoting(self):
        with pytest.raises(InvalidIdentifierError):
            quote_identifier('evil"name')


def test_is_valid_identifier_predicate():
    assert is_valid_identifier("results-1-5")
    assert not is_valid_identifier("bad name!")
    assert not is_valid_identifier(None)
