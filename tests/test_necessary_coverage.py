import pytest

from customer_profile import CustomerProfile, sample_couple_profile
from necessary_coverage import (
    CoverageSettings,
    build_monthly_layers,
    calculate_all_scenarios,
    calculate_child_allowance,
    calculate_child_support_allowance,
    calculate_scenario,
    current_salary_monthly,
    estimate_education_cost,
    resolve_end_age,
    scenario_frame,
    segment_change_points,
    sickness_allowance_total,
)


@pytest.fixture
def single_profile():
    return CustomerProfile(
        spouse_type="none",
        age=40,
        old_age_start=65,
        has_employee_pension=True,
        avg_std_monthly=300000,
        employee_pension_months=300,
        use_minashi_300=False,
        monthly_living_expense=300000,
    )


def test_child_allowance_counts_from_oldest():
    assert calculate_child_allowance([1]) == 15000
    assert calculate_child_allowance([1, 10, 5]) == 10000 + 10000 + 30000
    assert calculate_child_allowance([19]) == 0


def test_child_support_allowance_income_bands():
    assert calculate_child_support_allowance([], 1000000) == 0
    assert calculate_child_support_allowance([5], 1000000) == 43070
    assert calculate_child_support_allowance([5, 3], 2000000) == 28850 + 8275
    assert calculate_child_support_allowance([5], 4000000) == 0


def test_education_estimate():
    assert estimate_education_cost(0) == 180000
    assert estimate_education_cost(20) == 960000
    assert estimate_education_cost(23) == 0


def test_sickness_allowance_total(single_profile):
    assert sickness_allowance_total(single_profile) == 3618000


def test_resolve_end_age_modes():
    profile = sample_couple_profile()
    assert resolve_end_age(profile, "child19") == 50
    assert resolve_end_age(profile, "child23") == 54
    assert resolve_end_age(profile, "retirement") == 65
    assert resolve_end_age(profile, "custom", 70) == 70
    assert resolve_end_age(profile, "custom") == 65
    with pytest.raises(ValueError):
        resolve_end_age(profile, "forever")


def test_current_salary_uses_take_home_ratio():
    assert current_salary_monthly(sample_couple_profile(), "husband") == pytest.approx(240000)


def test_single_disability_scenario(single_profile):
    settings = CoverageSettings(current_savings=1000000)
    result = calculate_scenario(single_profile, "disability", "single", 65, settings)

    first = result.data[0]
    assert first.pension == pytest.approx(816000 + 493290)
    assert first.work_income == 0
    assert first.total_target == 3960000 + 360000
    assert result.active_months == 25 * 12
    assert result.total_shortfall == pytest.approx((4320000 - 1309290) * 25)
    assert result.sickness_deduction == 3618000
    assert result.savings_applied == 1000000
    # sickness allowance is not part of the net figure
    assert result.net_shortfall == pytest.approx(result.total_shortfall - 1000000)
    assert result.has_shortfall
    assert result.monthly_shortfall_max == pytest.approx((3010710 - (3618000 + 1000000) / 25) / 12)
    assert result.target_active_total == pytest.approx(4320000 * 25)
    assert result.title == "本人障害時の収支"


def test_savings_cover_whole_shortfall(single_profile):
    settings = CoverageSettings(current_savings=10 ** 9)
    result = calculate_scenario(single_profile, "disability", "single", 65, settings)
    assert result.net_shortfall == 0
    assert result.savings_applied == pytest.approx(result.total_shortfall)
    assert not result.has_shortfall


def test_single_death_scenario(single_profile):
    result = calculate_scenario(single_profile, "survivor", "single", 65)
    first = result.data[0]
    assert first.pension == pytest.approx(369967.5)
    assert first.gray_area == pytest.approx(1080000)
    assert first.total_target == pytest.approx(2880000 - 1080000)
    assert first.shortfall == pytest.approx(1800000 - 369967.5)
    assert result.exempted_housing_loan == 0


def test_rows_after_end_age_are_inactive():
    result = calculate_scenario(sample_couple_profile(), "survivor", "husband", 50)
    assert result.data[0].age == 32
    assert len(result.data) == 100 - 32 + 1
    assert all(row.months_active == 0 for row in result.data if row.age >= 50)
    assert result.active_months == 18 * 12
    assert result.has_shortfall == (result.net_shortfall > 10000)


def test_invalid_scenario_arguments(single_profile):
    with pytest.raises(ValueError):
        calculate_scenario(single_profile, "illness", "single", 65)
    with pytest.raises(ValueError):
        calculate_scenario(single_profile, "survivor", "child", 65)


def test_all_scenarios_by_household(single_profile):
    assert list(calculate_all_scenarios(sample_couple_profile())) == [
        "husbandDeath", "wifeDeath", "husbandDisability", "wifeDisability"]
    assert list(calculate_all_scenarios(single_profile)) == ["singleDeath", "singleDisability"]


def test_scenario_frame(single_profile):
    df = scenario_frame(calculate_scenario(single_profile, "disability", "single", 65))
    assert len(df) == 61
    assert "shortfall" in df.columns


def test_layers_and_segments_for_flat_scenario(single_profile):
    result = calculate_scenario(single_profile, "disability", "single", 65)
    layers = build_monthly_layers(result.data, 240000, 65)
    assert len(layers) == 25
    assert layers[0]["pension"] == pytest.approx(1309290 / 12)
    assert layers[0]["shortfall"] == pytest.approx(240000 - 1309290 / 12)

    segments = segment_change_points(layers)
    assert len(segments) == 1
    assert segments[0]["age"] == 40
    assert segments[0]["end_age"] == 65


def test_segments_split_on_change():
    def layer(age, pension):
        return {"age": age, "pension": pension, "allowances": 0, "gray": 0, "shortfall": 0, "surplus": 0}

    segments = segment_change_points([layer(30, 100000), layer(31, 100400), layer(32, 150000)])
    assert [(seg["age"], seg["end_age"]) for seg in segments] == [(30, 32), (32, 33)]
    assert segment_change_points([]) == []


@pytest.fixture
def couple_with_loan():
    profile = sample_couple_profile()
    profile.details["housing_loan"] = 50000
    return profile


def test_husband_death_rows(couple_with_loan):
    result = calculate_scenario(couple_with_loan, "survivor", "husband", 50)
    rows = {row.age: row for row in result.data}
    kousei = 369967.5

    # two children under 19: basic pension with two child additions
    assert rows[32].pension == pytest.approx(816000 + 234800 * 2 + kousei)
    assert rows[32].work_income == pytest.approx(3000000 * 0.9)
    assert rows[32].child_allowance_monthly == 10000 + 15000
    assert rows[32].child_support_allowance_monthly == 28850 + 8275
    assert rows[48].pension == pytest.approx(816000 + 234800 + kousei)

    # no eligible child left: middle-aged widow addition until 65
    assert rows[50].pension == pytest.approx(kousei + 612000)
    assert rows[64].pension == pytest.approx(kousei + 612000)
    assert rows[50].child_allowance_monthly == 0
    assert rows[50].child_support_allowance_monthly == 0
    assert rows[65].pension == pytest.approx(kousei + 816000)
    assert rows[65].work_income == 0


def test_husband_death_gray_area_and_housing_loan(couple_with_loan):
    result = calculate_scenario(couple_with_loan, "survivor", "husband", 50)
    first = result.data[0]
    gray = 600000 + (3360000 - 600000) * 0.3
    assert first.gray_area == pytest.approx(gray)
    assert first.total_target == pytest.approx(2880000 - gray)
    assert first.base_expense == 1932000
    assert result.exempted_housing_loan == pytest.approx(600000 * 18)


def test_wife_death_has_no_widow_addition(couple_with_loan):
    result = calculate_scenario(couple_with_loan, "survivor", "wife", 50)
    rows = {row.age: row for row in result.data}
    kousei = 250000 * 300 * 5.481 / 1000 * 0.75
    assert rows[32].pension == pytest.approx(816000 + 234800 * 2 + kousei)
    assert rows[50].pension == pytest.approx(kousei)


def test_husband_disability_spouse_bonus_ends_at_65(couple_with_loan):
    result = calculate_scenario(couple_with_loan, "disability", "husband", 65)
    rows = {row.age: row for row in result.data}

    assert rows[32].pension == pytest.approx(816000 + 234800 * 2 + 493290 + 234800)
    assert rows[32].work_income == pytest.approx(3000000 * 0.9)
    assert rows[32].gray_area == 0
    assert rows[64].pension == pytest.approx(816000 + 493290 + 234800)
    assert rows[65].pension == pytest.approx(816000 + 493290)
    assert rows[65].work_income == 0
    assert result.exempted_housing_loan == 0
