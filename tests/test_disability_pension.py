import pytest

from disability_pension import (
    calculate_disability_from_periods,
    calculate_disability_pension_amounts,
    disability_rules_summary,
    spouse_bonus_for,
)
from pension_calc import CareerPeriod


def test_level_2_with_spouse_and_child():
    result = calculate_disability_pension_amounts(2, True, 40, [5], 300000, 300)
    assert result.basic_pension == 816000 + 234800
    assert result.employee_pension == pytest.approx(493290 + 234800)
    assert result.spouse_bonus == 234800
    assert result.total == pytest.approx(1050800 + 728090)
    assert result.eligible_children == 1


def test_level_3_minimum_and_no_basic():
    result = calculate_disability_pension_amounts(3, True, 40, [5], 300000, 300)
    assert result.basic_pension == 0
    assert result.employee_pension == 623800
    assert result.spouse_bonus == 0


def test_spouse_bonus_age_limit():
    assert spouse_bonus_for(True, 64) == 234800
    assert spouse_bonus_for(True, 65) == 0
    assert spouse_bonus_for(False, 40) == 0
    assert spouse_bonus_for(True, None) == 0


def test_invalid_level():
    with pytest.raises(ValueError):
        calculate_disability_pension_amounts(0, False, None, [], 300000, 300)


def test_from_career_periods():
    periods = [
        CareerPeriod("1998/04", "2003/03", 250000, 0),
        CareerPeriod("2003/04", "2024/03", 0, 350000),
    ]
    result = calculate_disability_from_periods(2, periods)
    assert result.employee_pension == pytest.approx(590299.2)
    assert result.total == pytest.approx(816000 + 590299.2)


def test_rules_summary():
    rows = disability_rules_summary()
    assert [row["等級"] for row in rows] == ["1級", "2級", "3級"]
    assert rows[2]["障害基礎年金"] == "なし"
