from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError

from feasibility.campaigns.cards import CardFieldError
from feasibility.campaigns.legacy import from_legacy
from feasibility.campaigns.state import JsonFileStore
from feasibility.campaigns.workspace import Workspace
from feasibility.config import STATE_FILE
from feasibility.models.io import CardSummary, FieldIn, LegacyImportIn, NewCardIn, TitleIn, snapshot
from feasibility.services.engine import compute_card, format_view

router = APIRouter(prefix="/api/campaigns", tags=["campaigns"])
log = logging.getLogger("campaigns")

_WORKSPACE: Optional[Workspace] = None


def get_workspace() -> Workspace:
    """Process-wide workspace, restored from the state file on first use."""
    global _WORKSPACE
    if _WORKSPACE is None:
        _WORKSPACE = Workspace(JsonFileStore(STATE_FILE))
    return _WORKSPACE


def _view(ws: Workspace, card_id: str, formatted: bool = False) -> Dict[str, Any]:
    view = compute_card(ws.get(card_id))
    return format_view(view) if formatted else view


def _apply(ws: Workspace, card_id: str, op, *args, formatted: bool = False) -> Dict[str, Any]:
    try:
        op(card_id, *args)
        return _view(ws, card_id, formatted)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Campaign not found: {card_id}")
    except CardFieldError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("", response_model=List[CardSummary])
def list_cards(ws: Workspace = Depends(get_workspace)) -> List[Dict[str, Any]]:
    return [{"id": c.id, "kind": c.kind, "title": c.title} for c in ws.cards]


@router.post("", status_code=201)
def add_card(req: NewCardIn, ws: Workspace = Depends(get_workspace)) -> Dict[str, Any]:
    card = ws.add_card(req.kind)
    log.info("Added %s card %s", card.kind, card.id)
    return compute_card(card)


@router.post("/import", status_code=201)
def import_legacy(req: LegacyImportIn, ws: Workspace = Depends(get_workspace)) -> Dict[str, Any]:
    try:
        card = from_legacy(req.kind, req.snapshot)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))
    card = ws.add_existing(card)
    log.info("Imported legacy %s card as %s", card.kind, card.id)
    return compute_card(card)


@router.get("/{card_id}")
def get_card(card_id: str, ws: Workspace = Depends(get_workspace)) -> Dict[str, Any]:
    try:
        card = ws.get(card_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Campaign not found: {card_id}")
    return {"id": card.id, "kind": card.kind, **snapshot(card)}


@router.delete("/{card_id}", status_code=204)
def delete_card(card_id: str, ws: Workspace = Depends(get_workspace)) -> None:
    try:
        ws.delete_card(card_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Campaign not found: {card_id}")
    log.info("Deleted card %s", card_id)


@router.get("/{card_id}/view")
def card_view(card_id: str, formatted: bool = Query(False),
              ws: Workspace = Depends(get_workspace)) -> Dict[str, Any]:
    try:
        return _view(ws, card_id, formatted)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Campaign not found: {card_id}")


@router.put("/{card_id}/title")
def set_title(card_id: str, req: TitleIn, formatted: bool = Query(False),
              ws: Workspace = Depends(get_workspace)) -> Dict[str, Any]:
    return _apply(ws, card_id, ws.set_title, req.text, formatted=formatted)


@router.patch("/{card_id}/parameters")
def set_parameter(card_id: str, req: FieldIn, formatted: bool = Query(False),
                  ws: Workspace = Depends(get_workspace)) -> Dict[str, Any]:
    return _apply(ws, card_id, ws.set_parameter, req.field, req.value, req.tier, formatted=formatted)


@router.post("/{card_id}/rows")
def add_row(card_id: str, formatted: bool = Query(False),
            ws: Workspace = Depends(get_workspace)) -> Dict[str, Any]:
    return _apply(ws, card_id, ws.add_row, formatted=formatted)


@router.delete("/{card_id}/rows/last")
def remove_last_row(card_id: str, formatted: bool = Query(False),
                    ws: Workspace = Depends(get_workspace)) -> Dict[str, Any]:
    return _apply(ws, card_id, ws.remove_last_row, formatted=formatted)


@router.patch("/{card_id}/rows/{row_id}")
def set_row_field(card_id: str, row_id: int, req: FieldIn, formatted: bool = Query(False),
                  ws: Workspace = Depends(get_workspace)) -> Dict[str, Any]:
    return _apply(ws, card_id, ws.set_row_field, row_id, req.field, req.value, req.tier,
                  formatted=formatted)
