import pytest

from feasibility.campaigns.cards import new_card, set_parameter, set_row_field


@pytest.fixture
def oneshot_card():
    """10.000 riders, 10% share, 5% weekly CR, 2 trips, 50 TL incentive, +20% passengers."""
    card = new_card("oneshot", "os-1")
    set_parameter(card, "incentive_per_passenger", "50")
    set_parameter(card, "passenger_growth_percent", "20")
    set_parameter(card, "trip_growth_percent", "0")
    for field, value in [("segment_name", "Dormant"), ("base_audience", "10.000"),
                         ("audience_share_percent", "10"), ("weekly_conversion_rate_percent", "5"),
                         ("avg_trips_per_passenger", "2")]:
        set_row_field(card, 1, field, value)
    return card


@pytest.fixture
def milestone_card():
    """Two tiers (20 + 30), 5.000 riders, 50% share, CR 10% / 5%, 4 trips per 2 weeks, +10% passengers."""
    card = new_card("milestone", "ms-1")
    set_parameter(card, "reward_tier_count", "2")
    set_parameter(card, "reward_amount", "20", tier=1)
    set_parameter(card, "reward_amount", "30", tier=2)
    set_parameter(card, "passenger_growth_percent", "10")
    for field, value in [("base_audience", "5.000"), ("audience_share_percent", "50"),
                         ("avg_trips_per_two_weeks", "4")]:
        set_row_field(card, 1, field, value)
    set_row_field(card, 1, "conversion_rate", "10", tier=1)
    set_row_field(card, 1, "conversion_rate", "5", tier=2)
    return card
