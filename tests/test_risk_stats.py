import pytest

from risk_stats import cumulative_risk, find_risk, quadrant_titles, risk_comment, waterfall_steps, zone_frame


@pytest.mark.parametrize("age, expected", [(18, 0.1), (20, 0.1), (32, 1.7), (60, 11.5), (65, 13.5), (70, 13.5)])
def test_cumulative_risk(age, expected):
    assert cumulative_risk(age) == expected


def test_risk_comment_bands():
    assert risk_comment(20).startswith("20代のリスク")
    assert risk_comment(45).startswith("30代後半〜40代")
    assert risk_comment(64).startswith("定年直前")


def test_waterfall_steps():
    steps = waterfall_steps()
    assert steps[1] == ('② 重度障害', 6.5, 4.0)
    assert steps[-1] == ('合計', 0, 13.5)


def test_zone_frames():
    assert len(zone_frame('A')) == 9
    assert len(zone_frame('B')) == 6
    assert zone_frame('A')['Cost Estimate'].max() == 50000000
    with pytest.raises(ValueError):
        zone_frame('C')


def test_find_risk():
    assert find_risk('risk-b-6')['Chart Label'] == '風邪・インフル'
    with pytest.raises(KeyError):
        find_risk('risk-z-1')


def test_quadrant_titles_cover_every_risk():
    titles = quadrant_titles()
    assert len(titles) == 4
    assert sum(len(items) for items in titles.values()) == 15
