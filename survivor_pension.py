# survivor_pension.py
"""Survivor pension (遺族年金) amounts for a widow or a widower.

Amounts are split into three phases: while eligible children remain, after
the youngest child turns 18, and once the survivor draws an old-age pension.
"""

from dataclasses import dataclass, field

from pension_calc import (
    CHILD_ELIGIBLE_AGE,
    POLICY_MODES,
    calculate_chukorei_kasan,
    calculate_eligible_children_count,
    calculate_old_age_adjustment,
    calculate_old_age_basic_pension,
    calculate_old_age_employee_pension,
    calculate_survivor_basic_pension,
    calculate_survivor_employee_pension,
)

WIDOWER_MIN_AGE = 55
WIDOWER_PAYMENT_AGE = 60
YOUNG_WIDOW_AGE = 30
CHUKOREI_AGE_RANGE = (40, 65)
FIXED_TERM_YEARS = 5


@dataclass
class PensionSource:
    avg_std_monthly: float
    months: int
    use_minashi_300: bool = True


@dataclass
class SurvivorPensionResult:
    basic_pension: float
    employee_pension: float
    total: float
    with_children_amount: float
    after_children_amount: float
    old_age_amount: float
    years_until_child_18: int
    age_after_child: int
    pension_types_with_children: list = field(default_factory=list)
    pension_types_after_children: list = field(default_factory=list)
    pension_types_old_age: list = field(default_factory=list)


def _after_children_revised(survivor_employee, age_after_child, old_age_start):
    # 2028 proposal: fixed 5-year benefit for both sexes, no widow addition
    years_after_child = old_age_start - age_after_child
    if 0 < years_after_child <= FIXED_TERM_YEARS:
        return survivor_employee, ["遺族厚生年金（5年間）"]
    return 0, []


def _after_children_widower(survivor_employee, age_husband, age_after_child):
    if age_husband < WIDOWER_MIN_AGE:
        return 0, []
    if age_after_child >= WIDOWER_PAYMENT_AGE:
        return survivor_employee, ["遺族厚生年金（60歳〜）"]
    if age_after_child >= WIDOWER_MIN_AGE:
        return 0, ["遺族厚生年金（60歳まで停止）"]
    return 0, []


def _after_children_widow(survivor_employee, age_after_child):
    if age_after_child < YOUNG_WIDOW_AGE:
        return survivor_employee, ["遺族厚生年金（5年間・30歳未満）"]
    low, high = CHUKOREI_AGE_RANGE
    chukorei = calculate_chukorei_kasan() if low <= age_after_child < high else 0
    types = ["遺族厚生年金"]
    if chukorei > 0:
        types.append("中高齢寡婦加算")
    return survivor_employee + chukorei, types


def calculate_survivor_pension_amounts(age_wife, age_husband, children_ages, survivor_source,
                                       own_source, old_age_start, is_wife_death, mode="current"):
    """Survivor benefits when the husband (is_wife_death=False) or the wife dies.

    survivor_source is the deceased's record, own_source the survivor's own
    record used for the old-age phase.
    """
    if mode not in POLICY_MODES:
        raise ValueError(f"unknown policy mode: {mode!r}")

    eligible_children = calculate_eligible_children_count(children_ages)
    basic_pension = calculate_survivor_basic_pension(eligible_children)
    survivor_employee = calculate_survivor_employee_pension(
        survivor_source.avg_std_monthly, survivor_source.months, survivor_source.use_minashi_300)

    youngest = min(children_ages) if children_ages else None
    years_until_child_18 = max(0, CHILD_ELIGIBLE_AGE - youngest) if youngest is not None else 0
    survivor_age = age_husband if is_wife_death else age_wife
    age_after_child = survivor_age + years_until_child_18

    own_basic = calculate_old_age_adjustment(calculate_old_age_basic_pension(), old_age_start)
    own_employee = calculate_old_age_adjustment(
        calculate_old_age_employee_pension(own_source.avg_std_monthly, own_source.months), old_age_start)

    # --- with children: basic + employee regardless of the survivor's sex ---
    with_children_amount = basic_pension + survivor_employee
    types_with_children = ["遺族基礎年金", "遺族厚生年金"]

    # --- after children ---
    if mode == "revised2028":
        after_amount, types_after = _after_children_revised(survivor_employee, age_after_child, old_age_start)
    elif is_wife_death:
        after_amount, types_after = _after_children_widower(survivor_employee, age_husband, age_after_child)
    else:
        after_amount, types_after = _after_children_widow(survivor_employee, age_after_child)

    # --- old age ---
    types_old_age = ["老齢基礎年金", "老齢厚生年金"]
    survivor_right = not is_wife_death or age_husband >= WIDOWER_MIN_AGE
    if mode == "revised2028" or not survivor_right:
        old_age_amount = own_basic + own_employee
    else:
        old_age_amount = own_basic + max(survivor_employee, own_employee)
        if survivor_employee > own_employee:
            types_old_age.append("遺族厚生年金（差額）")

    return SurvivorPensionResult(
        basic_pension=basic_pension,
        employee_pension=survivor_employee,
        total=with_children_amount,
        with_children_amount=with_children_amount,
        after_children_amount=after_amount,
        old_age_amount=old_age_amount,
        years_until_child_18=years_until_child_18,
        age_after_child=age_after_child,
        pension_types_with_children=types_with_children,
        pension_types_after_children=types_after,
        pension_types_old_age=types_old_age,
    )


def derive_child_phases(children_ages):
    """Consecutive (years, eligible_count) phases until the youngest turns 18."""
    remaining = sorted(max(0, CHILD_ELIGIBLE_AGE - age) for age in children_ages)
    phases = []
    cuts = [0] + remaining
    for i in range(len(cuts) - 1):
        years = cuts[i + 1] - cuts[i]
        if years > 0:
            phases.append({"years": years, "count": len(remaining) - i})
    return phases


def phase_rows(result, survivor_age, old_age_start, end_age=100):
    """Phase table rows (start age, end age, annual amount, labels) for display."""
    rows = []
    if result.years_until_child_18 > 0:
        rows.append({"phase": "子のいる期間", "from_age": survivor_age,
                     "to_age": result.age_after_child, "annual": result.with_children_amount,
                     "types": " + ".join(result.pension_types_with_children)})
    if result.age_after_child < old_age_start:
        to_age = old_age_start
        if "5年" in "".join(result.pension_types_after_children):
            to_age = min(old_age_start, result.age_after_child + FIXED_TERM_YEARS)
        rows.append({"phase": "子が18歳到達後", "from_age": result.age_after_child,
                     "to_age": to_age, "annual": result.after_children_amount,
                     "types": " + ".join(result.pension_types_after_children) or "支給なし"})
    rows.append({"phase": "老齢年金期間", "from_age": max(old_age_start, result.age_after_child),
                 "to_age": end_age, "annual": result.old_age_amount,
                 "types": " + ".join(result.pension_types_old_age)})
    return rows
