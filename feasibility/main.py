from typing import Any, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# --- Import ALL routers ---
from feasibility.routers import calc, campaigns, export
from feasibility.config import APP_TITLE, APP_VERSION, ALLOW_ORIGINS, STATE_FILE

# --- App Setup ---
app = FastAPI(title=APP_TITLE, version=APP_VERSION)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(export.router)
app.include_router(campaigns.router)
app.include_router(calc.router)


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/meta")
def meta() -> Dict[str, Any]:
    return {"title": app.title, "version": app.version, "state_file": str(STATE_FILE)}
