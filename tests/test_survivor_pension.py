import pytest

from survivor_pension import (
    PensionSource,
    calculate_survivor_pension_amounts,
    derive_child_phases,
    phase_rows,
)

HUSBAND = PensionSource(300000, 300, True)
WIFE = PensionSource(250000, 300)


def test_widow_with_children():
    result = calculate_survivor_pension_amounts(32, 32, [3, 1], HUSBAND, WIFE, 65, is_wife_death=False)

    assert result.basic_pension == 816000 + 234800 * 2
    assert result.employee_pension == pytest.approx(369967.5)
    assert result.with_children_amount == pytest.approx(1285600 + 369967.5)
    assert result.years_until_child_18 == 17
    assert result.age_after_child == 49
    assert result.after_children_amount == pytest.approx(369967.5 + 612000)
    assert result.pension_types_after_children == ["遺族厚生年金", "中高齢寡婦加算"]
    # own employee pension is larger than the survivor benefit
    assert result.old_age_amount == pytest.approx(816000 + 411075)
    assert "遺族厚生年金（差額）" not in result.pension_types_old_age


def test_young_widow_gets_five_year_benefit():
    result = calculate_survivor_pension_amounts(28, 30, [], HUSBAND, WIFE, 65, is_wife_death=False)
    assert result.after_children_amount == pytest.approx(369967.5)
    assert result.pension_types_after_children == ["遺族厚生年金（5年間・30歳未満）"]

    rows = phase_rows(result, 28, 65)
    assert rows[0]["phase"] == "子が18歳到達後"
    assert rows[0]["to_age"] == 33


def test_widower_under_55_gets_nothing_after_children():
    result = calculate_survivor_pension_amounts(38, 40, [], WIFE, HUSBAND, 65, is_wife_death=True)
    assert result.after_children_amount == 0
    assert result.pension_types_after_children == []
    assert "遺族厚生年金（差額）" not in result.pension_types_old_age

    rows = phase_rows(result, 40, 65)
    assert rows[0]["types"] == "支給なし"
    assert rows[-1]["phase"] == "老齢年金期間"


def test_widower_suspended_until_60():
    result = calculate_survivor_pension_amounts(54, 56, [], WIFE, HUSBAND, 65, is_wife_death=True)
    assert result.after_children_amount == 0
    assert result.pension_types_after_children == ["遺族厚生年金（60歳まで停止）"]


def test_widower_paid_from_60():
    result = calculate_survivor_pension_amounts(58, 61, [], WIFE, HUSBAND, 65, is_wife_death=True)
    assert result.after_children_amount == pytest.approx(result.employee_pension)
    assert result.pension_types_after_children == ["遺族厚生年金（60歳〜）"]


def test_old_age_difference_added_when_survivor_benefit_is_larger():
    low_earner = PensionSource(100000, 300)
    result = calculate_survivor_pension_amounts(45, 45, [], HUSBAND, low_earner, 65, is_wife_death=False)
    assert result.old_age_amount == pytest.approx(816000 + 369967.5)
    assert "遺族厚生年金（差額）" in result.pension_types_old_age


def test_revised_mode_fixed_term_only_close_to_old_age():
    near = calculate_survivor_pension_amounts(62, 62, [], HUSBAND, WIFE, 65, is_wife_death=False,
                                              mode="revised2028")
    assert near.after_children_amount == pytest.approx(369967.5)
    assert near.pension_types_after_children == ["遺族厚生年金（5年間）"]

    far = calculate_survivor_pension_amounts(50, 50, [], HUSBAND, WIFE, 65, is_wife_death=False,
                                             mode="revised2028")
    assert far.after_children_amount == 0
    assert far.old_age_amount == pytest.approx(816000 + 411075)


def test_unknown_mode():
    with pytest.raises(ValueError):
        calculate_survivor_pension_amounts(30, 30, [], HUSBAND, WIFE, 65, False, mode="future")


def test_derive_child_phases():
    assert derive_child_phases([3, 1]) == [{"years": 15, "count": 2}, {"years": 2, "count": 1}]
    assert derive_child_phases([18]) == []
    assert derive_child_phases([]) == []


def test_phase_rows_with_children():
    result = calculate_survivor_pension_amounts(32, 32, [3, 1], HUSBAND, WIFE, 65, is_wife_death=False)
    rows = phase_rows(result, 32, 65)
    assert [row["phase"] for row in rows] == ["子のいる期間", "子が18歳到達後", "老齢年金期間"]
    assert rows[0]["from_age"] == 32 and rows[0]["to_age"] == 49
    assert rows[1]["to_age"] == 65
    assert rows[2]["to_age"] == 100
