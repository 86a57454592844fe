# risk_stats.py
import pandas as pd

from config_data import (
    PROBABILITY_AGES,
    PROBABILITY_CUMULATIVE,
    PROBABILITY_WATERFALL,
    RISK_MATRIX_QUADRANTS,
    ZONE_A_RISKS,
    ZONE_B_RISKS,
)


def cumulative_risk(age):
    """Cumulative probability (%) of death or severe disability from age 20, linearly interpolated."""
    if age <= PROBABILITY_AGES[0]:
        return PROBABILITY_CUMULATIVE[0]
    if age >= PROBABILITY_AGES[-1]:
        return PROBABILITY_CUMULATIVE[-1]
    i = 0
    while i < len(PROBABILITY_AGES) - 1 and PROBABILITY_AGES[i + 1] < age:
        i += 1
    progress = (age - PROBABILITY_AGES[i]) / (PROBABILITY_AGES[i + 1] - PROBABILITY_AGES[i])
    low, high = PROBABILITY_CUMULATIVE[i], PROBABILITY_CUMULATIVE[i + 1]
    return round(low + (high - low) * progress, 1)


def risk_comment(age):
    if age == 20:
        return "20代のリスクは低水準ですが、ゼロではありません。"
    if age < 35:
        return "20代〜30代前半。まだ確率は低いですが、少しずつ積み上がっています。"
    if age < 50:
        return "30代後半〜40代。カーブが急になり始め、同世代での発症事例が出始めます。"
    if age < 60:
        return "50代。三大疾病などのリスクが顕在化し、確率が大きく上昇します。"
    return "定年直前。およそ7〜8人に1人が、ここに至るまでに何らかの重大な事由に遭遇しています。"


def waterfall_steps():
    """(label, base, value) rows; the last row is the total."""
    rows = []
    base = 0
    for step in PROBABILITY_WATERFALL:
        rows.append((step['Label'], base, step['Value']))
        base = round(base + step['Value'], 1)
    rows.append(('合計', 0, base))
    return rows


def zone_frame(zone):
    risks = {'A': ZONE_A_RISKS, 'B': ZONE_B_RISKS}.get(zone)
    if risks is None:
        raise ValueError(f"unknown risk zone: {zone!r}")
    return pd.DataFrame(risks)


def find_risk(risk_id):
    for risk in ZONE_A_RISKS + ZONE_B_RISKS:
        if risk['Id'] == risk_id:
            return risk
    raise KeyError(risk_id)


def quadrant_titles():
    return {q['Quadrant']: [find_risk(risk_id)['Title'] for risk_id in q['Risks']] for q in RISK_MATRIX_QUADRANTS}
