"""Tests for intime.domain.receipt pure functions."""

from decimal import Decimal

from intime.domain.receipt import (
    build_result,
    extract_total,
    find_currency_values,
    match_labeled_total,
    parse_amount,
)


class TestParseAmount:
    """Tests for parse_amount."""

    def test_decimal_comma(self) -> None:
        """Should treat a comma as the decimal separator."""
        assert parse_amount("45,90") == Decimal("45.90")

    def test_decimal_point(self) -> None:
        """Should accept a decimal point."""
        assert parse_amount("45.90") == Decimal("45.90")

    def test_integer(self) -> None:
        """Should parse whole amounts."""
        assert parse_amount("12") == Decimal("12")

    def test_trailing_separator(self) -> None:
        """Should parse a number cut off after the separator."""
        assert parse_amount("45,") == Decimal("45")

    def test_zero_is_rejected(self) -> None:
        """Should return None for zero."""
        assert parse_amount("0,00") is None

    def test_non_numeric_is_rejected(self) -> None:
        """Should return None for text that isn't a number."""
        assert parse_amount("abc") is None
        assert parse_amount("") is None


class TestExtractTotal:
    """Tests for extract_total."""

    def test_total_label(self) -> None:
        """Should read the amount after 'Total'."""
        assert extract_total("Total: R$ 45,90") == Decimal("45.90")

    def test_total_label_case_insensitive(self) -> None:
        """Should match labels regardless of case."""
        assert extract_total("TOTAL R$45,90") == Decimal("45.90")

    def test_total_without_currency_marker(self) -> None:
        """Should accept a total without R$."""
        assert extract_total("TOTAL 45.90") == Decimal("45.90")

    def test_total_label_across_noise(self) -> None:
        """Should find the total among other receipt lines."""
        text = "MERCADO BOM PRECO\nARROZ 5KG R$ 25,90\nFEIJAO R$ 8,50\nTOTAL R$ 34,40\nDINHEIRO R$ 50,00"

        assert extract_total(text) == Decimal("34.40")

    def test_total_preferred_over_total_geral_and_subtotal(self) -> None:
        """Should pick the 'total' rule's amount, skipping the subtotal."""
        assert extract_total("Subtotal R$10,00 \n Total Geral R$ 55,00") == Decimal("55.00")

    def test_total_geral_alone(self) -> None:
        """Should read 'Total Geral' on its own."""
        assert extract_total("Total Geral R$ 55,00") == Decimal("55.00")

    def test_valor_total(self) -> None:
        """Should read 'Valor Total'."""
        assert extract_total("Valor Total: R$ 30,00") == Decimal("30.00")

    def test_subtotal_alone(self) -> None:
        """Should fall back to the subtotal when there's no total line."""
        assert extract_total("Subtotal R$ 10,00\nTroco R$ 90,00") == Decimal("10.00")

    def test_rule_priority_beats_text_order(self) -> None:
        """Should prefer the total rule even when a subtotal appears first."""
        assert extract_total("Subtotal R$ 100,00\nDesconto R$ 10,00\nTOTAL R$ 90,00") == Decimal("90.00")

    def test_trailing_total(self) -> None:
        """Should read an amount printed before the word total."""
        assert extract_total("R$ 80,00 total") == Decimal("80.00")

    def test_zero_total_falls_through_to_next_rule(self) -> None:
        """Should skip a rule whose amount doesn't parse to a positive number."""
        assert extract_total("Total: R$ 0,00\nSubtotal R$ 10,00") == Decimal("10.00")

    def test_fallback_takes_largest_value(self) -> None:
        """Should take the largest currency amount when there's no label."""
        assert extract_total("item A R$12,00 item B R$99,50") == Decimal("99.50")

    def test_fallback_accepts_dollar_marker(self) -> None:
        """Should accept a bare $ marker in the fallback scan."""
        assert extract_total("cafe $ 5.50 pao $12") == Decimal("12")

    def test_fallback_can_pick_a_line_item(self) -> None:
        """Should pick the largest amount even if it's not the real total."""
        assert extract_total("Item R$ 150,00\nPago R$ 100,00") == Decimal("150.00")

    def test_fallback_ignores_unmarked_numbers(self) -> None:
        """Should only consider numbers with a currency marker."""
        assert extract_total("CNPJ 12345678 item R$ 9,99") == Decimal("9.99")

    def test_no_numbers(self) -> None:
        """Should return 0 when nothing looks like an amount."""
        assert extract_total("no numbers here") == Decimal("0")

    def test_only_zero_amounts(self) -> None:
        """Should return 0 when every amount is zero."""
        assert extract_total("R$ 0,00") == Decimal("0")

    def test_empty_text(self) -> None:
        """Should return 0 for empty or blank text."""
        assert extract_total("") == Decimal("0")
        assert extract_total("   \n\t ") == Decimal("0")

    def test_is_idempotent(self) -> None:
        """Should return identical results for identical inputs."""
        text = "Subtotal R$10,00 \n Total Geral R$ 55,00"

        assert extract_total(text) == extract_total(text)


class TestMatchLabeledTotal:
    """Tests for match_labeled_total."""

    def test_reports_matching_rule(self) -> None:
        """Should name the rule that matched."""
        assert match_labeled_total("Total Geral R$ 55,00") == ("total", Decimal("55.00"))
        assert match_labeled_total("Subtotal R$ 10,00") == ("subtotal", Decimal("10.00"))
        assert match_labeled_total("R$ 80,00 total") == ("trailing total", Decimal("80.00"))

    def test_no_label(self) -> None:
        """Should return None without a labeled amount."""
        assert match_labeled_total("item A R$12,00") is None


class TestFindCurrencyValues:
    """Tests for find_currency_values."""

    def test_finds_values_in_order(self) -> None:
        """Should return every positive amount in text order."""
        assert find_currency_values("R$ 3,00 R$0,00 r$ 1,50") == [Decimal("3.00"), Decimal("1.50")]


class TestBuildResult:
    """Tests for build_result."""

    def test_successful_extraction(self) -> None:
        """Should mark a positive total as success."""
        result = build_result("Total: R$ 45,90")

        assert result.raw_text == "Total: R$ 45,90"
        assert result.total_value == Decimal("45.90")
        assert result.success is True

    def test_failed_extraction(self) -> None:
        """Should mark a zero total as failure."""
        result = build_result("no numbers here")

        assert result.total_value == Decimal("0")
        assert result.success is False

    def test_empty_text(self) -> None:
        """Should fail without raising on empty text."""
        assert build_result("").success is False
