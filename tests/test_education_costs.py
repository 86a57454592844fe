import pytest

from education_costs import calculate_household_education_cost, get_education_cost_per_month, school_stage


@pytest.mark.parametrize("age, stage", [
    (2, None), (3, "kindergarten"), (11, "elementary"), (12, "junior_high"),
    (17, "high_school"), (21, "university"), (22, None),
])
def test_school_stage(age, stage):
    assert school_stage(age) == stage


def test_elementary_is_public_for_every_course():
    assert get_education_cost_per_month("private_jhs", 8) == 15000
    assert get_education_cost_per_month("public", 8, {"elementary": True}) == 30000
    assert get_education_cost_per_month("private_jhs", 8, {"elementary": True}) == 45000


def test_private_from_high_school():
    assert get_education_cost_per_month("private_hs", 13) == 25000
    assert get_education_cost_per_month("private_hs", 16) == 60000
    assert get_education_cost_per_month("private_hs", 16, {"high_school": True}) == 100000


def test_university_has_no_cram_school():
    assert get_education_cost_per_month("private_uni", 19, {"high_school": True}) == 120000
    assert get_education_cost_per_month("public", 19) == 80000


def test_kindergarten():
    assert get_education_cost_per_month("public", 4) == 15000
    assert get_education_cost_per_month("private_uni", 4) == 30000


def test_unknown_course():
    with pytest.raises(ValueError):
        get_education_cost_per_month("boarding", 10)


def test_household_total():
    assert calculate_household_education_cost("public", [3, 8, 19, 1]) == 15000 + 15000 + 80000
