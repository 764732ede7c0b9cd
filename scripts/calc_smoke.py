# scripts/calc_smoke.py
import sys
from pathlib import Path

# Add the project root to the python path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from feasibility.campaigns.cards import new_card, set_parameter, set_row_field, add_row
from feasibility.exporters.table import view_frame
from feasibility.services.engine import compute_card

print("Running smoke test for the campaign calculator...")

try:
    card = new_card("oneshot", "smoke")
    set_parameter(card, "incentive_per_passenger", "50")
    set_parameter(card, "passenger_growth_percent", "20")
    set_row_field(card, 1, "segment_name", "Dormant riders")
    set_row_field(card, 1, "base_audience", "10.000")
    set_row_field(card, 1, "audience_share_percent", "10")
    set_row_field(card, 1, "weekly_conversion_rate_percent", "5")
    set_row_field(card, 1, "avg_trips_per_passenger", "2")
    add_row(card)

    view = compute_card(card)
    print(view_frame(view).to_string(index=False))
    assert round(view["totals"]["cost_per_inc_passenger"], 6) == 300.0

    ms = new_card("milestone", "smoke-ms")
    set_parameter(ms, "reward_tier_count", "2")
    set_parameter(ms, "reward_amount", "20", tier=1)
    set_parameter(ms, "reward_amount", "30", tier=2)
    set_parameter(ms, "passenger_growth_percent", "10")
    set_row_field(ms, 1, "base_audience", "5.000")
    set_row_field(ms, 1, "audience_share_percent", "50")
    set_row_field(ms, 1, "conversion_rate", "10", tier=1)
    set_row_field(ms, 1, "conversion_rate", "5", tier=2)
    set_row_field(ms, 1, "avg_trips_per_two_weeks", "4")
    print(view_frame(compute_card(ms)).to_string(index=False))

    print("Smoke test passed!")

except Exception as e:
    print(f"❌ Smoke test failed: {e}")
    raise
