# customer_profile.py
"""Household profile shared by all simulators, persisted as JSON."""

import json
import logging
import os
from dataclasses import asdict, dataclass, field, fields

logger = logging.getLogger(__name__)

DATA_DIR = os.environ.get("LIFEPLAN_DATA_DIR", ".lifeplan_data")
PROFILE_FILE = "customer_profile.json"

SPOUSE_TYPES = {"couple": "夫婦", "none": "独身"}
MAX_CHILDREN = 5
CHILD_MAX_AGE = 18
OLD_AGE_START_RANGE = (60, 75)

EXPENSE_DETAIL_LABELS = {
    "food": "食費",
    "communication": "通信費",
    "utilities": "水道光熱費",
    "education": "教育費",
    "housing_loan": "住宅ローン",
    "rent": "家賃",
    "daily_goods": "日用品",
    "entertainment": "娯楽費",
    "life_insurance": "生命保険料",
    "savings": "貯蓄",
}

DEFAULT_EXPENSE_DETAILS = {
    "food": 50000,
    "communication": 10000,
    "utilities": 15000,
    "education": 30000,
    "housing_loan": 0,
    "rent": 80000,
    "daily_goods": 20000,
    "entertainment": 20000,
    "life_insurance": 15000,
    "savings": 50000,
}


@dataclass
class CustomerProfile:
    spouse_type: str = None
    children_count: int = None
    children_ages: list = field(default_factory=list)

    age_wife: int = 0
    old_age_start_wife: int = 0
    avg_std_monthly_wife: float = 0
    annual_income_wife: float = 0
    months_wife: int = 300
    use_minashi_300_wife: bool = False

    age_husband: int = 0
    old_age_start_husband: int = 0
    avg_std_monthly_husband: float = 0
    annual_income_husband: float = 0
    months_husband: int = 300
    use_minashi_300_husband: bool = False

    # single household
    age: int = 0
    old_age_start: int = 0
    has_employee_pension: bool = False
    employee_pension_months: int = 300
    avg_std_monthly: float = 0
    annual_income: float = 0
    use_minashi_300: bool = False

    monthly_living_expense: float = 0
    details: dict = field(default_factory=lambda: dict(DEFAULT_EXPENSE_DETAILS))

    @property
    def is_couple(self):
        return self.spouse_type == "couple"

    @property
    def housing_loan_monthly(self):
        return self.details.get("housing_loan", 0) or 0

    def details_total(self):
        return sum(self.details.get(key, 0) or 0 for key in EXPENSE_DETAIL_LABELS)

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        profile = cls(**values)
        profile.details = {**DEFAULT_EXPENSE_DETAILS, **(data.get("details") or {})}
        profile.children_ages = resize_children_ages(profile.children_ages, profile.children_count)
        return profile


def sample_couple_profile():
    """Example couple in their early thirties with two small children."""
    return CustomerProfile(
        spouse_type="couple",
        children_count=2,
        children_ages=[3, 1],
        age_wife=32,
        old_age_start_wife=65,
        avg_std_monthly_wife=250000,
        months_wife=300,
        use_minashi_300_wife=True,
        age_husband=32,
        old_age_start_husband=65,
        avg_std_monthly_husband=300000,
        months_husband=300,
        use_minashi_300_husband=True,
        monthly_living_expense=280000,
        details={
            "food": 60000,
            "communication": 15000,
            "utilities": 20000,
            "education": 20000,
            "housing_loan": 0,
            "rent": 90000,
            "daily_goods": 25000,
            "entertainment": 25000,
            "life_insurance": 15000,
            "savings": 30000,
        },
    )


def resize_children_ages(ages, count):
    """Pad with 0-year-olds or truncate so len(ages) == count."""
    if not count:
        return []
    if count > MAX_CHILDREN:
        raise ValueError(f"at most {MAX_CHILDREN} children are supported, got {count}")
    ages = list(ages or [])
    if len(ages) < count:
        ages.extend([0] * (count - len(ages)))
    return ages[:count]


def profile_path(data_dir=None):
    return os.path.join(data_dir or DATA_DIR, PROFILE_FILE)


def load_profile(data_dir=None):
    path = profile_path(data_dir)
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError:
                logger.warning("Profile file %s is not valid JSON, using defaults", path)
                return CustomerProfile()
        logger.info("Loaded customer profile from %s", path)
        return CustomerProfile.from_dict(data)
    return CustomerProfile()


def save_profile(profile, data_dir=None):
    path = profile_path(data_dir)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(profile.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info("Saved customer profile to %s", path)
    return path
