# necessary_coverage.py
"""Required life/disability coverage (必要保障額) from a customer profile.

Each scenario walks the survivor's (or the disabled person's household's)
remaining life year by year, compares guaranteed income against a target and
sums the shortfall up to the scenario's end age.
"""

import logging
from dataclasses import asdict, dataclass, field

import pandas as pd

from pension_calc import (
    KISO_BASE_ANNUAL,
    CHUKOREI_KASAN,
    SPOUSE_BONUS,
    STANDARD_OLD_AGE_START,
    calculate_disability_basic_pension,
    calculate_disability_employee_pension,
    calculate_eligible_children_count,
    kiso_annual_by_count,
    proportion_annual,
)

logger = logging.getLogger(__name__)

MAX_AGE = 100
RETIREMENT_AGE = 65
RESERVE_RATIO = 0.1
TAKE_HOME_RATIO = 0.8
SICKNESS_ALLOWANCE_RATIO = 0.67
SICKNESS_ALLOWANCE_MONTHS = 18
SHORTFALL_THRESHOLD = 10000
ALLOWANCE_CHILD_AGE = 19

DEFAULT_RATIOS = {"survivor": 70, "disability": 110, "work_income": 90}

SCENARIOS = {
    "husbandDeath": ("survivor", "husband"),
    "wifeDeath": ("survivor", "wife"),
    "husbandDisability": ("disability", "husband"),
    "wifeDisability": ("disability", "wife"),
    "singleDeath": ("survivor", "single"),
    "singleDisability": ("disability", "single"),
}

SCENARIO_TITLES = {
    ("survivor", "husband"): "夫死亡時の収支",
    ("survivor", "wife"): "妻死亡時の収支",
    ("survivor", "single"): "本人死亡時の収支",
    ("disability", "husband"): "夫障害時の収支",
    ("disability", "wife"): "妻障害時の収支",
    ("disability", "single"): "本人障害時の収支",
}

END_AGE_MODES = {
    "child19": "末子19歳まで",
    "child23": "末子23歳まで",
    "retirement": "老齢年金開始まで",
    "custom": "年齢を指定",
}


@dataclass
class YearlyRow:
    age: int
    year: int
    pension: float
    work_income: float
    base_expense: float
    education_cost: float
    reserve_target: float
    base_income: float
    total_income: float
    total_target: float
    base_shortfall: float
    shortfall: float
    months_active: int
    gray_area: float
    child_allowance_monthly: float
    child_support_allowance_monthly: float
    sickness_annual: float = 0
    savings_annual: float = 0


@dataclass
class ScenarioResult:
    title: str
    category: str
    target: str
    end_age: int
    total_shortfall: float
    net_shortfall: float
    sickness_deduction: float
    savings_applied: float
    exempted_housing_loan: float
    monthly_shortfall_max: float
    has_shortfall: bool
    active_months: int
    target_active_total: float
    data: list = field(default_factory=list)


@dataclass
class CoverageSettings:
    expense_ratio_survivor: float = DEFAULT_RATIOS["survivor"]
    expense_ratio_disability: float = DEFAULT_RATIOS["disability"]
    work_income_ratio: float = DEFAULT_RATIOS["work_income"]
    current_savings: float = 0


# --- Public allowances (monthly) ---

def calculate_child_allowance(children_ages):
    """児童手当: counted from the oldest child."""
    total = 0
    for index, age in enumerate(sorted(children_ages, reverse=True)):
        first_or_second = index < 2
        if age < 3:
            total += 15000 if first_or_second else 30000
        elif age < ALLOWANCE_CHILD_AGE:
            total += 10000 if first_or_second else 30000
    return total


def calculate_child_support_allowance(children_ages, survivor_annual_income):
    """児童扶養手当 for a single parent, midpoint of the partial band."""
    eligible = len([age for age in children_ages if age < ALLOWANCE_CHILD_AGE])
    if eligible == 0:
        return 0
    if survivor_annual_income < 1600000:
        return 43070 + (eligible - 1) * 10170
    if survivor_annual_income < 3650000:
        return 28850 + (eligible - 1) * 8275
    return 0


def estimate_education_cost(age):
    """Rough annual education cost for one child."""
    if age < 6:
        return 15000 * 12
    if age < 12:
        return 20000 * 12
    if age < 15:
        return 30000 * 12
    if age < 18:
        return 40000 * 12
    if age < 23:
        return 80000 * 12
    return 0


def sickness_allowance_total(profile):
    return round(max(profile.monthly_living_expense, 0) * SICKNESS_ALLOWANCE_RATIO * SICKNESS_ALLOWANCE_MONTHS)


# --- Profile accessors ---

def _gross_income(profile, person):
    if person == "husband":
        return profile.annual_income_husband or profile.avg_std_monthly_husband * 12 or 0
    if person == "wife":
        return profile.annual_income_wife or profile.avg_std_monthly_wife * 12 or 0
    return profile.annual_income or profile.avg_std_monthly * 12 or 0


def _spouse_of(person):
    return {"husband": "wife", "wife": "husband"}.get(person)


def _start_ages(profile, target):
    if target == "wife":
        return profile.age_husband, profile.age_husband
    if target == "husband":
        return profile.age_wife, profile.age_wife
    return profile.age, 0


def resolve_end_age(profile, mode, custom_age=None):
    if mode not in END_AGE_MODES:
        raise ValueError(f"unknown end-age mode: {mode!r}")
    if profile.is_couple:
        current_age = profile.age_husband or profile.age_wife or 0
        old_age_start = profile.old_age_start_husband or profile.old_age_start_wife or STANDARD_OLD_AGE_START
    else:
        current_age = profile.age or 0
        old_age_start = profile.old_age_start or STANDARD_OLD_AGE_START

    if mode == "child19" and profile.children_ages:
        return current_age + (19 - min(profile.children_ages))
    if mode == "child23" and profile.children_ages:
        return current_age + (23 - min(profile.children_ages))
    if mode == "retirement":
        return old_age_start
    if mode == "custom" and custom_age:
        return custom_age
    return RETIREMENT_AGE


def current_salary_monthly(profile, target):
    return _gross_income(profile, target) * TAKE_HOME_RATIO / 12


# --- Yearly pension per scenario ---

def _survivor_pension(profile, target, age, eligible):
    if target == "single":
        return proportion_annual(profile.avg_std_monthly, profile.employee_pension_months, profile.use_minashi_300)

    kiso = kiso_annual_by_count(eligible) if eligible > 0 else 0
    if target == "husband":
        kousei = proportion_annual(profile.avg_std_monthly_husband, profile.months_husband,
                                   profile.use_minashi_300_husband)
        if age >= RETIREMENT_AGE:
            return kousei + KISO_BASE_ANNUAL
        chukorei = CHUKOREI_KASAN if eligible == 0 and 40 <= age < RETIREMENT_AGE else 0
        return kiso + kousei + chukorei

    kousei = proportion_annual(profile.avg_std_monthly_wife, profile.months_wife, profile.use_minashi_300_wife)
    return kiso + kousei


def _disability_pension(profile, target, spouse_age, children_now):
    level = 2
    kiso = calculate_disability_basic_pension(level, calculate_eligible_children_count(children_now))
    spouse_bonus = SPOUSE_BONUS if 0 < spouse_age < RETIREMENT_AGE else 0
    if target == "husband":
        kousei = calculate_disability_employee_pension(
            level, spouse_bonus, 0, profile.avg_std_monthly_husband, profile.months_husband, True)
    elif target == "wife":
        kousei = calculate_disability_employee_pension(
            level, spouse_bonus, 0, profile.avg_std_monthly_wife, profile.months_wife, True)
    else:
        kousei = calculate_disability_employee_pension(
            level, 0, 0, profile.avg_std_monthly, profile.employee_pension_months, False)
    return kiso + kousei


def calculate_scenario(profile, category, target, end_age, settings=None):
    """Year-by-year balance for one scenario, with savings applied proportionally."""
    if category not in ("survivor", "disability"):
        raise ValueError(f"unknown scenario category: {category!r}")
    if target not in ("husband", "wife", "single"):
        raise ValueError(f"unknown scenario target: {target!r}")
    settings = settings or CoverageSettings()

    start_age, spouse_start_age = _start_ages(profile, target)
    spouse = _spouse_of(target)
    survivor_income = _gross_income(profile, spouse) if spouse else 0

    expense_annual = (profile.monthly_living_expense or 0) * 12
    housing_loan_annual = profile.housing_loan_monthly * 12
    reserve_annual = round(expense_annual * RESERVE_RATIO)
    target_take_home = _gross_income(profile, target) * TAKE_HOME_RATIO
    work_ratio = settings.work_income_ratio / 100

    rows = []
    active_months_sum = 0
    for i in range(MAX_AGE - start_age + 1):
        age = start_age + i
        spouse_age = spouse_start_age + i if spouse_start_age > 0 else 0
        children_now = [a + i for a in profile.children_ages]
        eligible18 = len([a for a in children_now if a < ALLOWANCE_CHILD_AGE])

        if category == "survivor":
            pension = _survivor_pension(profile, target, age, eligible18)
            work_income = survivor_income * work_ratio if age < RETIREMENT_AGE else 0
            expense_ratio = settings.expense_ratio_survivor / 100
            expense_base = expense_annual - housing_loan_annual
        else:
            pension = _disability_pension(profile, target, spouse_age, children_now)
            work_income = survivor_income * work_ratio if 0 < spouse_age < RETIREMENT_AGE else 0
            expense_ratio = settings.expense_ratio_disability / 100
            expense_base = expense_annual

        base_expense = round(expense_base * expense_ratio)
        education_cost = sum(estimate_education_cost(a) for a in children_now)

        child_allowance = 0
        child_support = 0
        if category == "survivor":
            child_allowance = calculate_child_allowance(children_now)
            child_support = calculate_child_support_allowance(children_now, survivor_income)

        if category == "survivor":
            # green area is pension only; work income stays out of the guaranteed layer
            base_income = pension
            freed_living = max(0, expense_annual - housing_loan_annual) * (1 - settings.expense_ratio_survivor / 100)
            gray_area = housing_loan_annual + freed_living
            total_target = max(0, target_take_home - gray_area)
        else:
            base_income = pension + work_income
            gray_area = 0
            total_target = base_expense + education_cost + reserve_annual

        allowances_annual = (child_allowance + child_support) * 12
        base_shortfall = max(0, total_target - (base_income + allowances_annual))
        months_active = max(0, min(12, (end_age - age) * 12)) if age < end_age else 0
        active_months_sum += months_active

        rows.append(YearlyRow(
            age=age, year=i, pension=pension, work_income=work_income,
            base_expense=base_expense, education_cost=education_cost,
            reserve_target=reserve_annual, base_income=base_income,
            total_income=base_income, total_target=total_target,
            base_shortfall=base_shortfall, shortfall=base_shortfall,
            months_active=months_active, gray_area=gray_area,
            child_allowance_monthly=child_allowance,
            child_support_allowance_monthly=child_support,
        ))

    weights = [row.base_shortfall * (row.months_active / 12) for row in rows]
    weighted_total = sum(weights)

    # sickness allowance feeds the income layer only; the net figure deducts savings alone
    sickness_deduction = min(sickness_allowance_total(profile), weighted_total) if category == "disability" else 0
    savings_applied = min(max(0, settings.current_savings), weighted_total)

    for row, weight in zip(rows, weights):
        share = weight / weighted_total if weighted_total > 0 else 0
        row.sickness_annual = share * sickness_deduction
        row.savings_annual = share * savings_applied
        allowances_annual = (row.child_allowance_monthly + row.child_support_allowance_monthly) * 12
        row.total_income = min(row.total_target,
                               row.base_income + allowances_annual + row.sickness_annual + row.savings_annual)
        row.shortfall = max(0, row.total_target - row.total_income)

    net_shortfall = max(0, weighted_total - savings_applied)
    active_shortfalls = [row.shortfall / 12 for row in rows if row.months_active > 0]

    result = ScenarioResult(
        title=SCENARIO_TITLES[(category, target)],
        category=category,
        target=target,
        end_age=end_age,
        total_shortfall=weighted_total,
        net_shortfall=net_shortfall,
        sickness_deduction=sickness_deduction,
        savings_applied=savings_applied,
        exempted_housing_loan=housing_loan_annual * (active_months_sum / 12) if category == "survivor" else 0,
        monthly_shortfall_max=max(active_shortfalls) if active_shortfalls else 0,
        has_shortfall=net_shortfall > SHORTFALL_THRESHOLD,
        active_months=active_months_sum,
        target_active_total=sum(row.total_target * (row.months_active / 12) for row in rows),
        data=rows,
    )
    logger.info("Scenario %s: net shortfall %.0f over %d months", result.title, net_shortfall, active_months_sum)
    return result


def calculate_all_scenarios(profile, end_ages=None, settings=None):
    """All scenarios applicable to the household type, keyed like SCENARIOS."""
    end_ages = end_ages or {}
    wanted = ("husbandDeath", "wifeDeath", "husbandDisability", "wifeDisability") if profile.is_couple \
        else ("singleDeath", "singleDisability")
    results = {}
    for key in wanted:
        category, target = SCENARIOS[key]
        results[key] = calculate_scenario(profile, category, target, end_ages.get(key, RETIREMENT_AGE), settings)
    return results


def scenario_frame(result):
    return pd.DataFrame([asdict(row) for row in result.data])


# --- Step chart layers ---

def build_monthly_layers(rows, salary_monthly, end_age=RETIREMENT_AGE, show_allowances=False):
    """Monthly pension / allowance / gray / shortfall / surplus layers before end_age."""
    layers = []
    for row in rows:
        if row.age >= end_age:
            continue
        pension = min(row.pension / 12, salary_monthly)
        allowances_total = row.child_allowance_monthly + row.child_support_allowance_monthly
        allowances = min(allowances_total, salary_monthly - pension) if show_allowances else 0
        remaining = salary_monthly - pension - allowances
        gray = min(max(0, row.gray_area / 12), max(0, remaining))
        income = pension + allowances_total
        target = salary_monthly - gray
        layers.append({
            "age": row.age,
            "pension": pension,
            "allowances": allowances,
            "gray": gray,
            "shortfall": max(0, target - income),
            "surplus": max(0, income - target),
        })
    return layers


def segment_change_points(layers):
    """Merge consecutive years whose layers round to the same 0.1万円 values."""
    if not layers:
        return []

    def key(layer):
        return tuple(f"{layer[name] / 10000:.1f}" for name in ("pension", "allowances", "gray", "shortfall", "surplus"))

    segments = []
    previous = None
    for layer in layers:
        if previous is not None and key(previous) == key(layer):
            segments[-1]["end_age"] = layer["age"] + 1
        else:
            segments.append({**layer, "end_age": layer["age"] + 1})
        previous = layer
    return segments
