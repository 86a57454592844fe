# education_costs.py
"""Monthly education cost estimates per child, by school stage and course."""

EDUCATION_COURSE_LABELS = {
    "public": "すべて公立（約1,000万円）",
    "private_uni": "大学のみ私立（約1,200万円）",
    "private_hs": "高校から私立（約1,400万円）",
    "private_jhs": "中学から私立（約1,800万円）",
}

# school fees + lunch + non-cram activities, yen per month
EDUCATION_MONTHLY_COSTS = {
    "kindergarten": {"public": 15000, "private": 30000},
    "elementary": {"public": 15000, "private": 80000},
    "junior_high": {"public": 25000, "private": 90000},
    "high_school": {"public": 30000, "private": 60000},
    "university": {"public": 80000, "private": 120000},
}

CRAM_SCHOOL_MONTHLY_COSTS = {
    "elementary": {"public": 15000, "private": 30000},
    "junior_high": {"public": 30000, "private": 25000},
    "high_school": {"public": 35000, "private": 40000},
}

NO_CRAM_SCHOOL = {"elementary": False, "junior_high": False, "high_school": False}

# courses that go private from a given stage onward
_PRIVATE_FROM = {
    "junior_high": ("private_jhs",),
    "high_school": ("private_jhs", "private_hs"),
    "university": ("private_jhs", "private_hs", "private_uni"),
}


def school_stage(age):
    if age < 3:
        return None
    if age <= 5:
        return "kindergarten"
    if age <= 11:
        return "elementary"
    if age <= 14:
        return "junior_high"
    if age <= 17:
        return "high_school"
    if age <= 21:
        return "university"
    return None


def get_education_cost_per_month(course, age, cram_school=None):
    if course not in EDUCATION_COURSE_LABELS:
        raise ValueError(f"unknown education course: {course!r}")
    cram_school = cram_school or NO_CRAM_SCHOOL
    stage = school_stage(age)
    if stage is None:
        return 0

    if stage == "kindergarten":
        return EDUCATION_MONTHLY_COSTS[stage]["public" if course == "public" else "private"]

    if stage == "elementary":
        cost = EDUCATION_MONTHLY_COSTS[stage]["public"]
        if cram_school.get(stage):
            # private_jhs families prepare for entrance exams
            cost += CRAM_SCHOOL_MONTHLY_COSTS[stage]["private" if course == "private_jhs" else "public"]
        return cost

    kind = "private" if course in _PRIVATE_FROM[stage] else "public"
    cost = EDUCATION_MONTHLY_COSTS[stage][kind]
    if stage != "university" and cram_school.get(stage):
        cost += CRAM_SCHOOL_MONTHLY_COSTS[stage][kind]
    return cost


def calculate_household_education_cost(course, children_ages, cram_school=None):
    return sum(get_education_cost_per_month(course, age, cram_school) for age in children_ages)
