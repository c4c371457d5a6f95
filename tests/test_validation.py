"""Tests for entry validation."""

from decimal import Decimal

import pytest

from jobledger.domain.errors import DomainError, ValidationError
from jobledger.domain.validation import (
    validate_expense_input,
    validate_invoice_input,
    validate_job_input,
)

QUOTE_DATE = "2025-09-05T04:00:00.000Z"
DUE_DATE = "2025-10-05T03:00:00.000Z"


class TestExpenseInput:
    """Tests for expense validation."""

    def test_valid_input_is_normalized(self):
        """Test trimming and amount parsing."""
        assert validate_expense_input("  Cables ", "35.000,75") == ("Cables", Decimal("35000.75"))

    @pytest.mark.parametrize("description", ["", "   ", None])
    def test_blank_description(self, description):
        """Test that a description is required."""
        with pytest.raises(ValidationError, match="Description is required"):
            validate_expense_input(description, "1000")

    @pytest.mark.parametrize("amount", ["0", "", "abc", "-5", None])
    def test_amount_must_be_positive(self, amount):
        """Test that amounts must parse to more than zero."""
        with pytest.raises(ValidationError, match="greater than 0"):
            validate_expense_input("Cables", amount)

    def test_validation_error_is_domain_error(self):
        """Test that validation errors keep ValueError compatibility."""
        with pytest.raises(DomainError):
            validate_expense_input("", "1")
        with pytest.raises(ValueError):
            validate_expense_input("", "1")


class TestJobInput:
    """Tests for job validation."""

    def test_valid_input(self):
        """Test a valid job form."""
        assert validate_job_input(" Roof ", "1.500.000", QUOTE_DATE, DUE_DATE) == ("Roof", Decimal("1500000"))

    def test_name_required(self):
        """Test that the name is checked first."""
        with pytest.raises(ValidationError, match="Job name is required"):
            validate_job_input(" ", "0", None, None)

    def test_quote_must_be_positive(self):
        """Test that the quote must be positive."""
        with pytest.raises(ValidationError, match="Quote must be greater than 0"):
            validate_job_input("Roof", "0", QUOTE_DATE, DUE_DATE)

    def test_quote_date_required(self):
        """Test that the quote date is required."""
        with pytest.raises(ValidationError, match="Quote date is required"):
            validate_job_input("Roof", "100", "", DUE_DATE)

    def test_due_date_required(self):
        """Test that the due date is required."""
        with pytest.raises(ValidationError, match="Due date is required"):
            validate_job_input("Roof", "100", QUOTE_DATE, None)


class TestInvoiceInput:
    """Tests for invoice validation."""

    def test_valid_input(self):
        """Test a valid invoice form."""
        result = validate_invoice_input(" F-1 ", QUOTE_DATE, DUE_DATE, "100.000", "19.000")
        assert result == ("F-1", Decimal("100000"), Decimal("19000"))

    def test_number_required(self):
        """Test that the invoice number is required."""
        with pytest.raises(ValidationError, match="Invoice number is required"):
            validate_invoice_input("", QUOTE_DATE, DUE_DATE, "1", "0")

    def test_dates_required(self):
        """Test that both dates are required."""
        with pytest.raises(ValidationError, match="Issue date is required"):
            validate_invoice_input("F-1", "", DUE_DATE, "1", "0")
        with pytest.raises(ValidationError, match="Due date is required"):
            validate_invoice_input("F-1", QUOTE_DATE, "", "1", "0")

    def test_negative_amounts_rejected(self):
        """Test that net and VAT cannot be negative."""
        with pytest.raises(ValidationError, match="cannot be negative"):
            validate_invoice_input("F-1", QUOTE_DATE, DUE_DATE, "-1", "0")

    def test_negative_total_rejected(self):
        """Test that a supplied total follows the same rule as net and VAT."""
        with pytest.raises(ValidationError, match="cannot be negative"):
            validate_invoice_input("F-1", QUOTE_DATE, DUE_DATE, "1", "0", total="-10")

    def test_total_is_optional(self):
        """Test that an omitted or valid total passes."""
        assert validate_invoice_input("F-1", QUOTE_DATE, DUE_DATE, "1", "0", total=None)[0] == "F-1"
        assert validate_invoice_input("F-1", QUOTE_DATE, DUE_DATE, "1", "0", total="1")[0] == "F-1"
