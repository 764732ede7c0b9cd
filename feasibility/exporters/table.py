from typing import Any, Dict, List, Tuple

import pandas as pd

from feasibility.services.engine import format_view

# (view key, column header) per card kind, in display order
COLUMNS: Dict[str, List[Tuple[str, str]]] = {
    "oneshot": [
        ("segment_name", "Segment"),
        ("base_audience", "Base audience"),
        ("weekly_conversion_rate_percent", "CR / week %"),
        ("audience_share_percent", "Share %"),
        ("avg_trips_per_passenger", "Avg trips"),
        ("campaign_audience", "Campaign audience"),
        ("budget", "Budget"),
        ("incremental_passengers", "Inc. passengers"),
        ("cost_per_inc_passenger", "Cost / inc. passenger"),
        ("total_trips", "Total trips"),
        ("incremental_trips", "Inc. trips"),
        ("cost_per_inc_trip", "Cost / inc. trip"),
    ],
    "milestone": [
        ("segment_name", "Segment"),
        ("base_audience", "Base audience"),
        ("cr_combined", "CR (≥1) %"),
        ("audience_share_percent", "Share %"),
        ("avg_trips_per_two_weeks", "Avg trips / 2w"),
        ("campaign_audience", "Campaign audience"),
        ("spend", "Spend"),
        ("incremental_passengers", "Inc. passengers"),
        ("cost_inc_passenger", "Cost / inc. passenger"),
        ("trip_fc", "Trip FC"),
        ("inc_trip_fc", "Inc. trip FC"),
        ("cost_inc_trip", "Cost / inc. trip"),
    ],
}


def view_frame(view: Dict[str, Any]) -> pd.DataFrame:
    """Display table for a computed card: formatted rows plus a TOTAL row."""
    cols = COLUMNS[view["kind"]]
    shown = format_view(view)
    records = [{header: row.get(key, "") for key, header in cols} for row in shown["rows"]]
    total = {header: shown["totals"].get(key, "") for key, header in cols}
    total[cols[0][1]] = "TOTAL"
    return pd.DataFrame(records + [total], columns=[h for _, h in cols]).fillna("")


def build_csv(view: Dict[str, Any]) -> str:
    return view_frame(view).to_csv(index=False)
