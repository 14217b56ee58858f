from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from denom_picker.routers.api import JsonRenderer, get_state
from denom_picker.services.controller import AppState, Controller

router = APIRouter(tags=["ui"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


@router.get("/", response_class=HTMLResponse)
async def ui_home(request: Request, state: AppState = Depends(get_state)):
    """Picker page, server-rendered with the current state.

    The page script then talks to /api/* and repaints from the returned payloads.
    """
    renderer = JsonRenderer()
    Controller(state, renderer).render()
    payload = renderer.payload(state)
    settings = request.app.state.settings
    context = {
        "version": settings.version,
        "app_name": settings.app_name,
        "max_selections": state.selection.max_selections,
        "denominations": [
            {
                "value": d.value,
                "display": d.display,
                "power": d.power,
                "selected": state.selection.contains(d.value),
            }
            for d in state.catalog
        ],
        "total": payload.total,
        "selection": payload.selection,
        "preview": payload.preview,
        "rate": payload.rate,
        "toast_ms": int(state.toast_seconds * 1000),
    }
    return templates.TemplateResponse(request, "index.html", context)
