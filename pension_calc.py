# pension_calc.py
"""Shared public-pension arithmetic (FY2024 amounts).

Pure Python, no Streamlit imports. Used by the survivor, disability and
necessary-coverage simulators.
"""

import datetime as dt
import math
from dataclasses import dataclass, field

# --- Policy modes ---
POLICY_MODES = {
    "current": {"name": "現行制度", "description": "2027年までの現行制度"},
    "revised2028": {"name": "2028年改正案", "description": "2028年以降の改正案（試算）"},
}

# --- Annual amounts (令和6年度) ---
KISO_BASE_ANNUAL = 816000
CHILD_ADDITION_1_2 = 234800
CHILD_ADDITION_3_PLUS = 78300
CHUKOREI_KASAN = 612000
DISABILITY_BASIC_1 = 1020000
DISABILITY_BASIC_2 = 816000
DISABILITY_LEVEL3_MINIMUM = 623800
SPOUSE_BONUS = 234800

# --- Remuneration-proportional coefficients ---
COEF_BEFORE_2003 = 7.125 / 1000
COEF_AFTER_2003 = 5.481 / 1000
MINASHI_MONTHS = 300

# --- Early / deferred old-age pension ---
STANDARD_OLD_AGE_START = 65
EARLY_REDUCTION_PER_MONTH = 0.004
EARLY_REDUCTION_CAP = 0.24
DEFERRAL_INCREASE_PER_MONTH = 0.007
DEFERRAL_INCREASE_CAP = 0.84

CHILD_ELIGIBLE_AGE = 18
DISABILITY_LEVELS = (1, 2, 3)

# months threshold -> lump sum; first threshold not reached wins
LUMP_SUM_DEATH_TABLE = [
    (36, 0),
    (180, 120000),
    (240, 145000),
    (300, 170000),
    (360, 220000),
    (420, 270000),
]
LUMP_SUM_DEATH_MAX = 320000


@dataclass
class TimelineItem:
    age: int
    year: int
    label: str
    amount: float
    type: str = "pension"
    breakdown: list = field(default_factory=list)


@dataclass
class CareerPeriod:
    """One employment period, year-month strings like '1998/04'."""
    start: str
    end: str
    avg_std_monthly_before_2003: float = 0
    avg_std_amount_after_2003: float = 0


def calculate_age(birth_date, target_date=None):
    target_date = target_date or dt.date.today()
    age = target_date.year - birth_date.year
    if (target_date.month, target_date.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age


def calculate_fiscal_year_age(birth_date, fiscal_year):
    # the age reached during the fiscal year
    return fiscal_year - birth_date.year


def round_half_up(value):
    return math.floor(value + 0.5)


def format_currency(amount):
    return f"{round_half_up(amount):,}"


def format_year_month_man(annual):
    """'123.4万円/年 (約10.3万円/月)' with thousand-yen / hundred-yen rounding."""
    annual_rounded = round_half_up(annual / 1000) * 1000
    man_y = annual_rounded / 10000
    man_y_str = str(int(man_y)) if float(man_y).is_integer() else f"{man_y:.1f}".removesuffix(".0")
    monthly_rounded = round_half_up(annual / 12 / 100) * 100
    return f"{man_y_str}万円/年 (約{monthly_rounded / 10000:.1f}万円/月)"


def _child_additions(children_count):
    amount = 0
    if children_count >= 1:
        amount += CHILD_ADDITION_1_2
    if children_count >= 2:
        amount += CHILD_ADDITION_1_2
    if children_count >= 3:
        amount += CHILD_ADDITION_3_PLUS * (children_count - 2)
    return amount


def _deemed_months(months, use_minashi_300):
    return max(months, MINASHI_MONTHS) if use_minashi_300 else months


def remuneration_proportional(avg_std_monthly, months, use_minashi_300=False):
    if months < 0:
        raise ValueError(f"months must not be negative: {months}")
    return avg_std_monthly * _deemed_months(months, use_minashi_300) * COEF_AFTER_2003


def calculate_survivor_basic_pension(children_count):
    if children_count <= 0:
        return 0
    return KISO_BASE_ANNUAL + _child_additions(children_count)


def calculate_survivor_employee_pension(avg_std_monthly, months, use_minashi_300=True):
    # 3/4 of the deceased's remuneration-proportional part
    return remuneration_proportional(avg_std_monthly, months, use_minashi_300) * 0.75


def calculate_old_age_basic_pension():
    # full 40-year contribution assumed
    return KISO_BASE_ANNUAL


def calculate_old_age_employee_pension(avg_std_monthly, months):
    return remuneration_proportional(avg_std_monthly, months)


def calculate_chukorei_kasan():
    return CHUKOREI_KASAN


def calculate_widow_pension(avg_std_monthly=0, months=0):
    # simplified to 3/4 of the full basic pension
    return KISO_BASE_ANNUAL * 0.75


def calculate_lump_sum_death(months):
    for threshold, amount in LUMP_SUM_DEATH_TABLE:
        if months < threshold:
            return amount
    return LUMP_SUM_DEATH_MAX


def _check_level(level):
    if level not in DISABILITY_LEVELS:
        raise ValueError(f"disability level must be one of {DISABILITY_LEVELS}, got {level!r}")


def calculate_disability_basic_pension(level, children_count):
    _check_level(level)
    if level == 3:
        return 0
    base = DISABILITY_BASIC_1 if level == 1 else DISABILITY_BASIC_2
    return base + _child_additions(children_count)


def calculate_disability_employee_pension(level, spouse_bonus, remuneration_base,
                                          avg_std_monthly=0, months=0, use_minashi_300=True):
    _check_level(level)
    amount = remuneration_base
    if amount == 0 and avg_std_monthly > 0:
        amount = remuneration_proportional(avg_std_monthly, months, use_minashi_300)

    if level == 1:
        amount *= 1.25
    if level == 3 and amount < DISABILITY_LEVEL3_MINIMUM:
        amount = DISABILITY_LEVEL3_MINIMUM
    if level < 3:
        amount += spouse_bonus
    return amount


def calculate_eligible_children_count(children_ages):
    return len([age for age in children_ages if age < CHILD_ELIGIBLE_AGE])


def calculate_old_age_adjustment(amount, start_age):
    if start_age == STANDARD_OLD_AGE_START:
        return amount
    if start_age < STANDARD_OLD_AGE_START:
        months_early = (STANDARD_OLD_AGE_START - start_age) * 12
        return amount * (1 - min(months_early * EARLY_REDUCTION_PER_MONTH, EARLY_REDUCTION_CAP))
    months_late = (start_age - STANDARD_OLD_AGE_START) * 12
    return amount * (1 + min(months_late * DEFERRAL_INCREASE_PER_MONTH, DEFERRAL_INCREASE_CAP))


# --- Career periods split at April 2003 ---

def _parse_year_month(value):
    try:
        year, month = (int(part) for part in value.split("/")[:2])
    except (AttributeError, ValueError):
        raise ValueError(f"expected 'YYYY/MM', got {value!r}")
    if not 1 <= month <= 12:
        raise ValueError(f"month out of range in {value!r}")
    return year, month


def months_between(start, end):
    """Inclusive month count between two 'YYYY/MM' strings; 0 if reversed."""
    start_year, start_month = _parse_year_month(start)
    end_year, end_month = _parse_year_month(end)
    return max(0, (end_year - start_year) * 12 + (end_month - start_month) + 1)


def split_months_by_2003(start, end):
    """Return (months up to 2003/03, months from 2003/04)."""
    start_key = _parse_year_month(start)
    end_key = _parse_year_month(end)
    if start_key >= (2003, 4):
        return 0, months_between(start, end)
    if end_key <= (2003, 3):
        return months_between(start, end), 0
    return months_between(start, "2003/03"), months_between("2003/04", end)


def remuneration_from_periods(periods, use_minashi_300=True):
    total = 0.0
    total_months = 0
    for period in periods:
        before, after = split_months_by_2003(period.start, period.end)
        total += period.avg_std_monthly_before_2003 * COEF_BEFORE_2003 * before
        total += period.avg_std_amount_after_2003 * COEF_AFTER_2003 * after
        total_months += before + after

    # short careers are topped up at the last period's post-2003 wage
    if use_minashi_300 and periods and 0 < total_months < MINASHI_MONTHS:
        shortage = MINASHI_MONTHS - total_months
        total += periods[-1].avg_std_amount_after_2003 * COEF_AFTER_2003 * shortage
    return max(0.0, total)


# --- Timeline ---

def generate_timeline(current_age, target_age, children_ages, pension_amounts,
                      is_wife, old_age_start=65, current_year=None):
    """Yearly survivor-pension rows, keeping milestone ages only.

    pension_amounts: dict with 'basic', 'employee', 'chukorei'.
    """
    current_year = current_year or dt.date.today().year
    items = []
    for age in range(current_age, target_age + 1):
        offset = age - current_age
        ages_now = [a + offset for a in children_ages]
        eligible = len([a for a in ages_now if a < CHILD_ELIGIBLE_AGE])

        amount = 0
        breakdown = []
        label = ""
        if eligible > 0:
            basic = calculate_survivor_basic_pension(eligible)
            amount += basic
            breakdown.append({"name": "遺族基礎年金", "amount": basic})
            label = "遺族基礎年金 + 遺族厚生年金"

        amount += pension_amounts["employee"]
        breakdown.append({"name": "遺族厚生年金", "amount": pension_amounts["employee"]})
        label = label or "遺族厚生年金"

        if is_wife and 40 <= age < 65 and eligible == 0 and pension_amounts.get("chukorei", 0) > 0:
            amount += pension_amounts["chukorei"]
            breakdown.append({"name": "中高齢寡婦加算", "amount": pension_amounts["chukorei"]})
            label += " + 中高齢寡婦加算"

        if age >= old_age_start:
            label = "老齢年金 + 遺族厚生年金（調整あり）"

        is_milestone = age == current_age or age % 5 == 0 or age in (40, 65)
        child_turns_18 = any(a == CHILD_ELIGIBLE_AGE for a in ages_now)
        if is_milestone or child_turns_18:
            items.append(TimelineItem(age=age, year=current_year + offset, label=label,
                                      amount=amount, breakdown=breakdown))
    return items


def kiso_annual_by_count(count):
    return calculate_survivor_basic_pension(count)


def proportion_annual(avg_std_monthly, months, use_minashi_300):
    return calculate_survivor_employee_pension(avg_std_monthly, months, use_minashi_300)
