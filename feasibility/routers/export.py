from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response, StreamingResponse

from ..campaigns.workspace import Workspace
from ..exporters.ppt import build_ppt
from ..exporters.table import build_csv
from .campaigns import get_workspace

router = APIRouter(prefix="/api/campaigns", tags=["export"])


def _filename(title: str, ext: str) -> str:
    # header values must stay latin-1
    name = (title or "").strip().encode("ascii", "ignore").decode() or "campaign"
    return f"{name}.{ext}".replace(" ", "_").replace('"', "")


@router.get("/{card_id}/export/pptx")
def export_pptx(card_id: str, ws: Workspace = Depends(get_workspace)):
    try:
        view = ws.view(card_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Campaign not found: {card_id}")
    deck = build_ppt(view)
    return StreamingResponse(
        deck,
        media_type="application/vnd.openxmlformats-officedocument.presentationml.presentation",
        headers={"Content-Disposition": f'attachment; filename="{_filename(view["title"], "pptx")}"'}
    )


@router.get("/{card_id}/export/csv")
def export_csv(card_id: str, ws: Workspace = Depends(get_workspace)):
    try:
        view = ws.view(card_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Campaign not found: {card_id}")
    return Response(
        content=build_csv(view),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{_filename(view["title"], "csv")}"'}
    )
