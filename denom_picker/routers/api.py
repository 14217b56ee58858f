from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Request

from denom_picker.core.errors import ClipboardError
from denom_picker.models.denomination import (
    CopyResultIn,
    DenominationOut,
    PickerStateOut,
    PreviewOut,
    RateOut,
    SelectionOut,
    ToastOut,
    TotalOut,
)
from denom_picker.models.rates import ManualRateIn
from denom_picker.services.controller import (
    AppState,
    Controller,
    SelectionView,
    Toast,
    TotalSummary,
)
from denom_picker.services.image_cache import QrPreview

"""Picker JSON API: the browser page's binding to the core.

Every mutating endpoint runs one Controller capability against a per-request
JsonRenderer and returns the full render payload, plus any toasts the core
raised (selection limit warnings, copy feedback).

    - GET  /api/denominations
    - GET  /api/state
    - POST /api/selection/{value}/toggle
    - POST /api/rate/manual      {text}
    - POST /api/rate/refresh
    - POST /api/export/copy     {primary_ok, legacy_ok}
"""

router = APIRouter(prefix="/api", tags=["picker"])


class JsonRenderer:
    """Renderer that records the latest display values for a JSON response."""

    def __init__(self) -> None:
        self.total: Optional[TotalSummary] = None
        self.selection: Optional[SelectionView] = None
        self.preview: Optional[QrPreview] = None
        self.toasts: List[Toast] = []

    def display_total(self, summary: TotalSummary) -> None:
        self.total = summary

    def display_selection(self, view: SelectionView) -> None:
        self.selection = view

    def display_preview(self, preview: QrPreview) -> None:
        self.preview = preview

    def display_toast(self, toast: Toast) -> None:
        self.toasts.append(toast)

    def payload(self, state: AppState) -> PickerStateOut:
        if self.total is None or self.selection is None or self.preview is None:
            raise RuntimeError("payload requested before render()")
        quote = state.rates.quote
        return PickerStateOut(
            total=TotalOut(
                total_msat=self.total.total_msat,
                total_display=self.total.total_display,
                count=self.total.count,
                fiat_display=self.total.fiat_display,
            ),
            selection=SelectionOut(
                values=self.selection.values,
                export_text=self.selection.export_text,
                placeholder=self.selection.placeholder,
                can_copy=self.selection.can_copy,
            ),
            preview=PreviewOut(
                src=self.preview.src, alt=self.preview.alt, info=self.preview.info
            ),
            rate=RateOut(
                rate=quote.rate if quote else None,
                source=quote.source if quote else None,
                updated_at=quote.updated_at.isoformat() if quote else None,
                input_text=state.rates.rate_input_text(),
            ),
            toasts=[
                ToastOut(
                    message=t.message, level=t.level, duration_seconds=t.duration_seconds
                )
                for t in self.toasts
            ],
        )


class ReportedClipboard:
    """Clipboard adapter replaying the outcome the page reported.

    The copy itself runs in the browser (clipboard API, then the select +
    execCommand fallback); each path raises here if it failed there, so
    Controller.copy_export picks the toast.
    """

    def __init__(self, primary_ok: bool, legacy_ok: bool) -> None:
        self.primary_ok = primary_ok
        self.legacy_ok = legacy_ok
        self.text: Optional[str] = None

    def write_text(self, text: str) -> None:
        if not self.primary_ok:
            raise ClipboardError("clipboard API write failed in the browser")
        self.text = text

    def legacy_copy(self, text: str) -> None:
        if not self.legacy_ok:
            raise ClipboardError("legacy copy failed in the browser")
        self.text = text


def get_state(request: Request) -> AppState:
    return request.app.state.picker


def _respond(controller: Controller, renderer: JsonRenderer, **extra) -> dict:
    controller.render()
    body = renderer.payload(controller.state).model_dump()
    body.update(extra)
    return body


@router.get(
    "/denominations",
    response_model=list[DenominationOut],
    summary="List selectable denominations",
)
async def list_denominations(state: AppState = Depends(get_state)):
    return [
        DenominationOut.from_denomination(d, selected=state.selection.contains(d.value))
        for d in state.catalog
    ]


@router.get("/state", response_model=PickerStateOut, summary="Current render payload")
async def get_picker_state(state: AppState = Depends(get_state)):
    renderer = JsonRenderer()
    controller = Controller(state, renderer)
    controller.render()
    return renderer.payload(state)


@router.post("/selection/{value}/toggle", summary="Toggle a denomination")
async def toggle_denomination(value: int, state: AppState = Depends(get_state)):
    renderer = JsonRenderer()
    controller = Controller(state, renderer)
    applied = controller.toggle(value)
    return _respond(controller, renderer, applied=applied, selected=state.selection.contains(value))


@router.post("/rate/manual", summary="Set the BTC/USD rate from user input")
async def set_manual_rate(payload: ManualRateIn, state: AppState = Depends(get_state)):
    renderer = JsonRenderer()
    controller = Controller(state, renderer)
    accepted = controller.set_manual_rate(payload.text)
    return _respond(controller, renderer, accepted=accepted)


@router.post("/rate/refresh", summary="Refetch the BTC/USD rate from the price feed")
async def refresh_rate(state: AppState = Depends(get_state)):
    renderer = JsonRenderer()
    controller = Controller(state, renderer)
    refreshed = await controller.refresh_rate()
    return _respond(controller, renderer, refreshed=refreshed)


@router.post("/export/copy", summary="Report a browser clipboard copy of the selected msat values")
async def copy_export(payload: CopyResultIn, state: AppState = Depends(get_state)):
    renderer = JsonRenderer()
    clipboard = ReportedClipboard(payload.primary_ok, payload.legacy_ok)
    controller = Controller(state, renderer, clipboard=clipboard)
    copied = controller.copy_export()
    return _respond(controller, renderer, copied=copied is not None, clipboard_text=copied)
