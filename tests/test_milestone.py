# tests/test_milestone.py
import pytest

from feasibility.models.io import MilestoneCard, MilestoneParameters, MilestoneRow
from feasibility.services.milestone import compute_milestone_row, cumulative_rewards


def test_reference_segment(milestone_card):
    m = compute_milestone_row(milestone_card.rows[0], milestone_card.parameters)
    assert m.reward_tier_count == 2
    assert m.cr_combined == pytest.approx(0.15)
    assert m.campaign_audience == pytest.approx(2500)
    # 2500 * 0.5 * (0.10 * 20 + 0.05 * 50): share counted a second time in spend
    assert m.spend == pytest.approx(5625)
    assert m.incremental_passengers == pytest.approx(37.5)
    assert m.cost_inc_passenger == pytest.approx(150)
    assert m.trip_fc == pytest.approx(1650)
    assert m.inc_trip_fc == pytest.approx(150)
    assert m.cost_inc_trip == pytest.approx(37.5)


def test_rewards_are_cumulative():
    params = MilestoneParameters(reward_tier_count=3, reward_amounts=["10", "15", "25"])
    assert cumulative_rewards(params) == [10, 25, 50]


def test_tier_count_clamps_and_defaults():
    assert MilestoneParameters(reward_tier_count="7").reward_tier_count == 5
    assert MilestoneParameters(reward_tier_count="abc").reward_tier_count == 3
    assert MilestoneParameters(reward_tier_count="0").reward_tier_count == 1
    assert MilestoneParameters(reward_tier_count=0).reward_tier_count == 3
    params = MilestoneParameters(reward_tier_count="7")
    assert len(params.reward_amounts) == 5
    m = compute_milestone_row(MilestoneRow(id=1), params)
    assert m.reward_tier_count == 5


def test_rates_outside_tier_count_are_ignored():
    card = MilestoneCard(id="x", parameters={"reward_tier_count": 1, "reward_amounts": ["10"]},
                         rows=[{"id": 1, "base_audience": "100", "audience_share_percent": "100",
                                "conversion_rates": ["10", "90", "90"]}])
    m = compute_milestone_row(card.rows[0], card.parameters)
    assert m.cr_combined == pytest.approx(0.1)


def test_share_read_as_rate():
    row = MilestoneRow(id=1, base_audience="1.000", audience_share_percent="0,05",
                       conversion_rates=["10", "", ""])
    m = compute_milestone_row(row, MilestoneParameters())
    assert m.campaign_audience == pytest.approx(50)


def test_ratio_between_tenth_and_one_is_divided_again():
    row = MilestoneRow(id=1, base_audience="1.000", audience_share_percent="100",
                       conversion_rates=["0,15", "", ""])
    m = compute_milestone_row(row, MilestoneParameters())
    assert m.cr_combined == pytest.approx(0.0015)


def test_zero_growth_gives_zero_unit_costs(milestone_card):
    params = milestone_card.parameters.model_copy(update={"passenger_growth_percent": "0"})
    m = compute_milestone_row(milestone_card.rows[0], params)
    assert m.spend > 0
    assert m.incremental_passengers == 0
    assert m.cost_inc_passenger == 0
    assert m.cost_inc_trip == 0
