# feasibility/services/engine.py
from dataclasses import asdict
from typing import Any, Dict

from feasibility.models.io import CampaignCard, OneShotCard, MilestoneCard
from feasibility.services.oneshot import compute_oneshot_row
from feasibility.services.milestone import compute_milestone_row
from feasibility.services.totals import oneshot_totals, milestone_totals
from feasibility.utils.fmt import format_number, format_percent_from_ratio

# Metrics shown as percentages; everything else numeric is a count or amount
PERCENT_METRICS = {"cr_combined"}
# Integer fields that are carried through the view untouched
PASSTHROUGH_METRICS = {"reward_tier_count"}


def compute_card(card: CampaignCard) -> Dict[str, Any]:
    """
    Recompute every row of a card from its raw fields.
    Returns {card_id, kind, title, rows: [raw row + metrics], totals}.
    """
    if isinstance(card, OneShotCard):
        metrics = [compute_oneshot_row(row, card.parameters) for row in card.rows]
        totals = oneshot_totals(metrics)
    elif isinstance(card, MilestoneCard):
        metrics = [compute_milestone_row(row, card.parameters) for row in card.rows]
        totals = milestone_totals(metrics)
    else:
        raise TypeError(f"Unsupported campaign card: {type(card).__name__}")

    rows = [{**row.model_dump(), **asdict(m)} for row, m in zip(card.rows, metrics)]
    return {
        "card_id": card.id,
        "kind": card.kind,
        "title": card.title,
        "rows": rows,
        "metric_keys": list(asdict(metrics[0]).keys()),
        "totals": asdict(totals),
    }


def _fmt(key: str, value: Any) -> Any:
    if key in PASSTHROUGH_METRICS:
        return value
    if key in PERCENT_METRICS:
        return format_percent_from_ratio(value)
    return format_number(value)


def format_view(view: Dict[str, Any]) -> Dict[str, Any]:
    """Same shape as compute_card, with every metric rendered for display."""
    keys = set(view["metric_keys"])
    rows = [{k: (_fmt(k, v) if k in keys else v) for k, v in row.items()} for row in view["rows"]]
    totals = {k: _fmt(k, v) for k, v in view["totals"].items()}
    return {**view, "rows": rows, "totals": totals}
