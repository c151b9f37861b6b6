"""Unit tests for Eclipse Phase percentile grading."""

from __future__ import annotations

import pytest

from dicebot.errors import OutOfRange
from dicebot.percentile import (
    SELF_TEST_ROLLS,
    TargetError,
    TargetErrorKind,
    grade,
    parse_target,
    self_test,
)


class TestGrade:
    @pytest.mark.parametrize(
        ("roll", "text"),
        [
            (0, "00 vs 50 -- ULTIMATE SUCCESS!!! (MoS = 50)"),
            (20, "20 vs 50 -- Excellent Success! (MoS = 30)"),
            (22, "22 vs 50 -- CRITICAL SUCCESS!!! (MoS = 28)"),
            (40, "40 vs 50 -- Success! (MoS = 10)"),
            (44, "44 vs 50 -- CRITICAL SUCCESS!!! (MoS = 6)"),
            (50, "50 vs 50 -- Success!"),
            (60, "60 vs 50 -- Failure (MoF = 10)"),
            (66, "66 vs 50 -- CRITICAL FAILURE (MoF = 16)"),
            (80, "80 vs 50 -- Severe Failure (MoF = 30)"),
            (88, "88 vs 50 -- CRITICAL FAILURE (MoF = 38)"),
            (99, "99 vs 50 -- ULTIMATE FAILURE!! (MoF = 49)"),
        ],
    )
    def test_target_50(self, roll: int, text: str) -> None:
        assert grade(roll, 50).text == text

    def test_fields(self) -> None:
        g = grade(22, 50)
        assert g.roll == 22
        assert g.target == 50
        assert g.is_critical
        assert g.is_success
        assert g.margin == 28
        assert g.label == "CRITICAL SUCCESS!!!"

    def test_criticals_are_multiples_of_eleven(self) -> None:
        crits = [r for r in range(100) if grade(r, 50).is_critical]
        assert crits == [0, 11, 22, 33, 44, 55, 66, 77, 88, 99]

    def test_99_always_fails(self) -> None:
        g = grade(99, 150)
        assert not g.is_success
        assert g.margin == 0
        assert g.text == "99 vs 150 -- ULTIMATE FAILURE!!"

    def test_zero_vs_zero(self) -> None:
        assert grade(0, 0).text == "00 vs 00 -- ULTIMATE SUCCESS!!!"

    def test_small_target_is_zero_padded(self) -> None:
        assert grade(7, 5).text == "07 vs 05 -- Failure (MoF = 2)"

    def test_excellent_needs_thirty(self) -> None:
        assert grade(21, 50).label == "Success!"
        assert grade(21, 51).label == "Excellent Success!"

    def test_severe_needs_thirty(self) -> None:
        assert grade(79, 50).label == "Failure"
        assert grade(81, 50).label == "Severe Failure"

    @pytest.mark.parametrize("roll", [-1, 100])
    def test_roll_out_of_range(self, roll: int) -> None:
        with pytest.raises(OutOfRange):
            grade(roll, 50)


class TestParseTarget:
    @pytest.mark.parametrize(("token", "value"), [("50", 50), ("0", 0), ("+7", 7), ("-0", 0), ("150", 150)])
    def test_valid(self, token: str, value: int) -> None:
        assert parse_target(token) == value

    @pytest.mark.parametrize("token", ["abc", "", "5.5", "1_000", "５0", "50%", None])
    def test_non_numeric(self, token) -> None:
        result = parse_target(token)
        assert isinstance(result, TargetError)
        assert result.kind is TargetErrorKind.NON_NUMERIC_TARGET

    @pytest.mark.parametrize("token", ["9" * 5000, "-" + "9" * 5000, "1234567890"])
    def test_overlong_is_non_numeric(self, token: str) -> None:
        assert parse_target(token) == TargetError(TargetErrorKind.NON_NUMERIC_TARGET, token)

    def test_negative(self) -> None:
        assert parse_target("-5") == TargetError(TargetErrorKind.NEGATIVE_TARGET, "-5")


class TestSelfTest:
    def test_one_line_per_roll(self) -> None:
        lines = self_test()
        assert len(lines) == len(SELF_TEST_ROLLS)
        assert lines[0] == "00 vs 50 -- ULTIMATE SUCCESS!!! (MoS = 50)"
        assert lines[-1] == "99 vs 50 -- ULTIMATE FAILURE!! (MoF = 49)"
