# disability_pension.py
"""Disability pension (障害年金) amounts for levels 1 to 3."""

from dataclasses import dataclass

from pension_calc import (
    DISABILITY_BASIC_1,
    DISABILITY_BASIC_2,
    DISABILITY_LEVEL3_MINIMUM,
    SPOUSE_BONUS,
    _check_level,
    calculate_disability_basic_pension,
    calculate_disability_employee_pension,
    calculate_eligible_children_count,
    format_currency,
    remuneration_from_periods,
)

SPOUSE_BONUS_AGE_LIMIT = 65


@dataclass
class DisabilityPensionResult:
    level: int
    basic_pension: float
    employee_pension: float
    spouse_bonus: float
    total: float
    eligible_children: int


def spouse_bonus_for(has_spouse, age_spouse):
    if has_spouse and age_spouse is not None and age_spouse < SPOUSE_BONUS_AGE_LIMIT:
        return SPOUSE_BONUS
    return 0


def calculate_disability_pension_amounts(level, has_spouse, age_spouse, children_ages,
                                         avg_std_monthly, months, use_minashi_300=True):
    _check_level(level)
    eligible_children = calculate_eligible_children_count(children_ages)
    spouse_bonus = spouse_bonus_for(has_spouse, age_spouse)

    basic = calculate_disability_basic_pension(level, eligible_children)
    employee = calculate_disability_employee_pension(
        level, spouse_bonus, 0, avg_std_monthly, months, use_minashi_300)

    return DisabilityPensionResult(
        level=level,
        basic_pension=basic,
        employee_pension=employee,
        spouse_bonus=spouse_bonus if level < 3 else 0,
        total=basic + employee,
        eligible_children=eligible_children,
    )


def calculate_disability_from_periods(level, periods, has_spouse=False, age_spouse=None,
                                      children_ages=(), use_minashi_300=True):
    """Same as calculate_disability_pension_amounts but from dated career periods."""
    _check_level(level)
    eligible_children = calculate_eligible_children_count(children_ages)
    spouse_bonus = spouse_bonus_for(has_spouse, age_spouse)
    base = remuneration_from_periods(periods, use_minashi_300)

    basic = calculate_disability_basic_pension(level, eligible_children)
    employee = calculate_disability_employee_pension(level, spouse_bonus, base)
    return DisabilityPensionResult(
        level=level,
        basic_pension=basic,
        employee_pension=employee,
        spouse_bonus=spouse_bonus if level < 3 else 0,
        total=basic + employee,
        eligible_children=eligible_children,
    )


def disability_rules_summary():
    return [
        {"等級": "1級",
         "障害基礎年金": f"{format_currency(DISABILITY_BASIC_1)}円 + 子の加算",
         "障害厚生年金": "報酬比例部分 × 1.25 + 配偶者加給年金"},
        {"等級": "2級",
         "障害基礎年金": f"{format_currency(DISABILITY_BASIC_2)}円 + 子の加算",
         "障害厚生年金": "報酬比例部分 + 配偶者加給年金"},
        {"等級": "3級",
         "障害基礎年金": "なし",
         "障害厚生年金": f"報酬比例部分（最低保障 {format_currency(DISABILITY_LEVEL3_MINIMUM)}円）"},
    ]
