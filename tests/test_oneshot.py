# tests/test_oneshot.py
import pytest

from feasibility.models.io import OneShotParameters, OneShotRow
from feasibility.services.oneshot import compute_oneshot_row


def _row(**kw):
    return OneShotRow(id=1, **kw)


def test_reference_segment(oneshot_card):
    m = compute_oneshot_row(oneshot_card.rows[0], oneshot_card.parameters)
    assert m.campaign_audience == pytest.approx(1000)
    assert m.incremental_passengers == pytest.approx(10)
    assert m.budget == pytest.approx(3000)
    assert m.cost_per_inc_passenger == pytest.approx(300)
    assert m.total_trips == pytest.approx(120)
    assert m.incremental_trips == pytest.approx(20)
    assert m.cost_per_inc_trip == pytest.approx(150)


def test_trip_growth_adds_baseline_trips(oneshot_card):
    params = oneshot_card.parameters.model_copy(update={"trip_growth_percent": "50"})
    m = compute_oneshot_row(oneshot_card.rows[0], params)
    # 10 new riders * 2 * 1.5 + 50 baseline riders * 2 * 0.5
    assert m.incremental_trips == pytest.approx(80)
    assert m.total_trips == pytest.approx(180)
    assert m.cost_per_inc_trip == pytest.approx(37.5)


def test_no_growth_gives_zero_unit_costs(oneshot_card):
    params = oneshot_card.parameters.model_copy(update={"passenger_growth_percent": ""})
    m = compute_oneshot_row(oneshot_card.rows[0], params)
    assert m.budget == pytest.approx(2500)
    assert m.incremental_passengers == 0
    assert m.cost_per_inc_passenger == 0
    assert m.incremental_trips == 0
    assert m.cost_per_inc_trip == 0


def test_blank_row_is_all_zero():
    m = compute_oneshot_row(_row(), OneShotParameters())
    assert all(v == 0 for v in vars(m).values())


def test_garbage_input_is_zero_not_error():
    row = _row(base_audience="lots", audience_share_percent="%%", weekly_conversion_rate_percent="x")
    m = compute_oneshot_row(row, OneShotParameters(incentive_per_passenger="fifty"))
    assert m.budget == 0
    assert m.cost_per_inc_trip == 0
