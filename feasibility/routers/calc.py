from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException, Query
from pydantic import ValidationError

from feasibility.models.io import Kind, card_from_snapshot
from feasibility.services.engine import compute_card, format_view

router = APIRouter(prefix="/api/calc", tags=["calc"])


def _calc(kind: Kind, body: Dict[str, Any], formatted: bool) -> Dict[str, Any]:
    try:
        card = card_from_snapshot(str(body.get("id") or "adhoc"), kind, body)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))
    view = compute_card(card)
    return format_view(view) if formatted else view


@router.post("/oneshot")
def calc_oneshot(body: Dict[str, Any] = Body(...), formatted: bool = Query(False)) -> Dict[str, Any]:
    """Compute a one-shot card {title, parameters, rows} without storing it."""
    return _calc("oneshot", body, formatted)


@router.post("/milestone")
def calc_milestone(body: Dict[str, Any] = Body(...), formatted: bool = Query(False)) -> Dict[str, Any]:
    return _calc("milestone", body, formatted)
