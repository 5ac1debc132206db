"""Unit tests for number, hashrate and timestamp formatting."""

from __future__ import annotations

import math

import pytest

from kaspabot.formatting import (
    format_amount,
    format_halving,
    format_hashrate,
    format_integer,
    format_number,
    group_digits,
    split_wait,
)


class TestFormatNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (1_500_000, "1.50M"),
            (2_300_000_000, "2.30B"),
            (4_200_000_000_000, "4.20T"),
            (999_999, "999999.00"),
            (12.5, "12.50"),
            (-2_000_000, "-2.00M"),
            ("1500000", "1.50M"),
        ],
    )
    def test_suffixes(self, value: object, expected: str) -> None:
        assert format_number(value) == expected

    @pytest.mark.parametrize(
        "value", [0, 0.0, math.nan, math.inf, -math.inf, None, "abc", True]
    )
    def test_degenerate_values_render_zero(self, value: object) -> None:
        assert format_number(value) == "0"


class TestFormatHashrate:
    def test_terahash(self) -> None:
        assert format_hashrate(100) == "100.00 TH/s"

    def test_scales_down_below_one_terahash(self) -> None:
        assert format_hashrate(0.5) == "500.00 GH/s"

    def test_one_decimal_between_ten_and_hundred(self) -> None:
        assert format_hashrate(0.05) == "50.0 GH/s"
        assert format_hashrate(20_000) == "20.0 PH/s"

    def test_exahash(self) -> None:
        assert format_hashrate(1_500_000) == "1.50 EH/s"

    def test_zero_uses_base_unit(self) -> None:
        assert format_hashrate(0) == "0.00 H/s"

    @pytest.mark.parametrize("value", [math.nan, math.inf])
    def test_non_finite_rejected(self, value: float) -> None:
        with pytest.raises(ValueError):
            format_hashrate(value)


class TestGrouping:
    def test_group_digits(self) -> None:
        assert group_digits("1234567") == "1,234,567"
        assert group_digits("123") == "123"

    def test_group_digits_keeps_precision_of_huge_counts(self) -> None:
        assert group_digits("123456789012345678901234567890") == (
            "123,456,789,012,345,678,901,234,567,890"
        )

    def test_format_integer(self) -> None:
        assert format_integer(1234567) == "1,234,567"
        assert format_integer("9876543210") == "9,876,543,210"

    def test_format_amount_trims_zeros(self) -> None:
        assert format_amount(1234.5) == "1,234.5"
        assert format_amount(500.0) == "500"
        assert format_amount(0.0) == "0"
        assert format_amount(1.23456789) == "1.23456789"


class TestHalving:
    def test_epoch(self) -> None:
        assert format_halving(12.5, 0) == (
            "12.50000000 KAS\non Thu, 01 Jan 1970\n00:00:00 GMT"
        )

    def test_three_lines(self) -> None:
        text = format_halving(55.0, 1_700_000_000)
        lines = text.split("\n")
        assert len(lines) == 3
        assert lines[0] == "55.00000000 KAS"
        assert lines[1] == "on Tue, 14 Nov 2023"
        assert lines[2] == "22:13:20 GMT"


class TestSplitWait:
    @pytest.mark.parametrize(
        ("remaining", "expected"),
        [
            (125, (2, 5)),
            (899.9, (14, 59)),
            (900, (15, 0)),
            (0, (0, 0)),
            (-3, (0, 0)),
            (3725, (2, 5)),
        ],
    )
    def test_split(self, remaining: float, expected: tuple[int, int]) -> None:
        assert split_wait(remaining) == expected
