import json

import pytest

from customer_profile import (
    DEFAULT_EXPENSE_DETAILS,
    CustomerProfile,
    load_profile,
    profile_path,
    resize_children_ages,
    sample_couple_profile,
    save_profile,
)


def test_resize_children_ages():
    assert resize_children_ages([3], 3) == [3, 0, 0]
    assert resize_children_ages([3, 1, 5], 2) == [3, 1]
    assert resize_children_ages([3], 0) == []
    assert resize_children_ages([3], None) == []
    with pytest.raises(ValueError):
        resize_children_ages([], 6)


def test_default_details_total():
    profile = CustomerProfile()
    assert profile.details_total() == 290000
    assert profile.housing_loan_monthly == 0
    assert not profile.is_couple


def test_sample_profile_is_couple():
    profile = sample_couple_profile()
    assert profile.is_couple
    assert profile.children_ages == [3, 1]


def test_from_dict_ignores_unknown_keys_and_merges_details():
    profile = CustomerProfile.from_dict({
        "spouse_type": "couple",
        "children_count": 2,
        "children_ages": [7],
        "legacy_field": "x",
        "details": {"housing_loan": 90000},
    })
    assert profile.children_ages == [7, 0]
    assert profile.housing_loan_monthly == 90000
    assert profile.details["food"] == DEFAULT_EXPENSE_DETAILS["food"]


def test_save_and_load(tmp_path):
    profile = sample_couple_profile()
    path = save_profile(profile, tmp_path)
    assert path == profile_path(tmp_path)

    with open(path, encoding="utf-8") as f:
        assert json.load(f)["age_husband"] == 32
    assert load_profile(tmp_path) == profile


def test_missing_or_corrupt_file_gives_defaults(tmp_path):
    assert load_profile(tmp_path) == CustomerProfile()

    with open(profile_path(tmp_path), "w", encoding="utf-8") as f:
        f.write("{not json")
    assert load_profile(tmp_path) == CustomerProfile()
