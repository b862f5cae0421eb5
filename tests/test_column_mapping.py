"""Tests for column mappings and bank presets."""

import pytest

from ledgerport.domain.column_mapping import (
    BANK_OF_AMERICA,
    BANK_PRESETS,
    CHASE,
    ColumnMapping,
    get_preset,
)
from ledgerport.domain.errors import ValidationError


class TestColumnMapping:
    """Tests for ColumnMapping validation."""

    def test_single_amount_column(self):
        mapping = ColumnMapping(date_column="Date", description_column="Desc", amount_column="Amt")
        assert not mapping.uses_debit_credit_columns
        assert mapping.required_columns == ("Date", "Desc", "Amt")
        assert mapping.date_format == "yyyy-MM-dd"
        assert mapping.delimiter == ","
        assert mapping.has_header

    def test_debit_credit_pair(self):
        mapping = ColumnMapping(
            date_column="Date",
            description_column="Desc",
            debit_column="Out",
            credit_column="In",
        )
        assert mapping.uses_debit_credit_columns
        assert mapping.required_columns == ("Date", "Desc", "Out", "In")

    def test_requires_an_amount_source(self):
        with pytest.raises(ValidationError, match="Must specify either"):
            ColumnMapping(date_column="Date", description_column="Desc")

    def test_rejects_partial_pair(self):
        with pytest.raises(ValidationError, match="together"):
            ColumnMapping(date_column="Date", description_column="Desc", debit_column="Out")

    def test_rejects_amount_and_pair(self):
        with pytest.raises(ValidationError, match="not both"):
            ColumnMapping(
                date_column="Date",
                description_column="Desc",
                amount_column="Amt",
                debit_column="Out",
                credit_column="In",
            )

    def test_rejects_blank_columns(self):
        with pytest.raises(ValidationError):
            ColumnMapping(date_column=" ", description_column="Desc", amount_column="Amt")

    def test_rejects_multi_character_delimiter(self):
        with pytest.raises(ValidationError, match="single character"):
            ColumnMapping(
                date_column="Date", description_column="Desc", amount_column="Amt", delimiter=";;"
            )

    def test_rejects_unknown_date_format(self):
        with pytest.raises(ValidationError, match="Unsupported date format"):
            ColumnMapping(
                date_column="Date",
                description_column="Desc",
                amount_column="Amt",
                date_format="MMM d, yyyy",
            )


class TestPresets:
    """Tests for the bank preset table."""

    def test_preset_names(self):
        assert list(BANK_PRESETS) == ["Chase", "Wells Fargo", "Bank of America", "Simple"]

    def test_chase_preset(self):
        assert CHASE.date_column == "Transaction Date"
        assert CHASE.date_format == "MM/dd/yyyy"

    def test_bank_of_america_uses_debit_credit(self):
        assert BANK_OF_AMERICA.uses_debit_credit_columns

    def test_get_preset_case_insensitive(self):
        assert get_preset("wells fargo") is BANK_PRESETS["Wells Fargo"]

    def test_get_unknown_preset(self):
        with pytest.raises(ValidationError, match="Available presets"):
            get_preset("Monzo")

    def test_preset_table_is_read_only(self):
        with pytest.raises(TypeError):
            BANK_PRESETS["Monzo"] = CHASE
