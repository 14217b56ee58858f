"""Picker controller.

The core never touches a rendering surface. A Presentation Binder (the web
page, a test double) implements ``Renderer`` and drives the core through
``Controller``:

  toggle / set_manual_rate / refresh_rate / copy_export
      -> mutate AppState
      -> recompute derived display values
      -> push them to the Renderer

All state lives on one ``AppState`` object owned by the binder; nothing is
module global. User interactions are synchronous end to end; only the rate
refresh suspends.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from denom_picker.core.config import Settings
from denom_picker.core.errors import SelectionLimitReached
from denom_picker.models.constants import (
    COPY_FAILURE_TEXT,
    COPY_SUCCESS_TEXT,
    NO_SELECTION_TEXT,
)
from denom_picker.services.catalog import DenominationCatalog
from denom_picker.services.image_cache import ImageLoadError, QrImageCache, QrPreview
from denom_picker.services.money import format_amount, format_fiat, to_fiat
from denom_picker.services.rates import RateProvider
from denom_picker.services.selection import SelectionManager

logger = logging.getLogger("denom_picker.controller")

DEFAULT_TOAST_SECONDS = 3.0


@dataclass(frozen=True)
class Toast:
    message: str
    level: str = "error"  # success | warning | error
    duration_seconds: float = DEFAULT_TOAST_SECONDS


@dataclass(frozen=True)
class TotalSummary:
    total_msat: int
    total_display: str
    count: int
    fiat_display: Optional[str]


@dataclass(frozen=True)
class SelectionView:
    values: List[int]
    export_text: str
    placeholder: str

    @property
    def can_copy(self) -> bool:
        return bool(self.values)


class Renderer(Protocol):
    def display_total(self, summary: TotalSummary) -> None: ...

    def display_selection(self, view: SelectionView) -> None: ...

    def display_preview(self, preview: QrPreview) -> None: ...

    def display_toast(self, toast: Toast) -> None: ...


class Clipboard(Protocol):
    def write_text(self, text: str) -> None:
        """Primary clipboard path; may raise."""
        ...

    def legacy_copy(self, text: str) -> None:
        """Select-and-copy fallback used when write_text fails."""
        ...


@dataclass
class AppState:
    catalog: DenominationCatalog
    selection: SelectionManager
    rates: RateProvider
    images: QrImageCache
    fiat_symbol: str = "$"
    toast_seconds: float = DEFAULT_TOAST_SECONDS
    started: bool = field(default=False)

    @classmethod
    def from_settings(cls, settings: Settings, rates: RateProvider) -> "AppState":
        catalog = DenominationCatalog.generate(settings.min_exponent, settings.max_exponent)
        images = QrImageCache(
            settings.qr_images_dir or settings.static_dir / settings.qr_image_subdir,
            settings.qr_url_prefix,
            max_key=settings.max_selections,
            prefix=settings.qr_image_prefix,
            ext=settings.qr_image_ext,
            width=settings.qr_index_width,
        )
        return cls(
            catalog=catalog,
            selection=SelectionManager(catalog, settings.max_selections),
            rates=rates,
            images=images,
            fiat_symbol=settings.fiat_symbol,
            toast_seconds=settings.toast_duration_seconds,
        )


async def startup(state: AppState, fail_fast: bool = True) -> None:
    """Startup sequence: preload images, then fetch the rate.

    Images are awaited before the fetch so the first render reflects the
    catalog even while the rate is still absent.
    """
    try:
        failed = await state.images.preload(fail_fast=fail_fast)
    except ImageLoadError as e:
        logger.warning("failed to preload some QR images: %s", e)
    else:
        if failed:
            logger.warning("failed to preload QR images %s", failed)
        else:
            logger.info("QR images preloaded successfully")
    await state.rates.fetch_remote()
    state.started = True


class Controller:
    def __init__(
        self,
        state: AppState,
        renderer: Renderer,
        clipboard: Optional[Clipboard] = None,
    ):
        self.state = state
        self.renderer = renderer
        self.clipboard = clipboard

    def _toast(self, message: str, level: str) -> None:
        self.renderer.display_toast(
            Toast(message=message, level=level, duration_seconds=self.state.toast_seconds)
        )

    # Derived values ------------------------------------------
    def summary(self) -> TotalSummary:
        selection = self.state.selection
        total = selection.total()
        fiat_display = None
        if selection.count > 0:
            fiat = to_fiat(total, self.state.rates.rate)
            if fiat is not None:
                fiat_display = format_fiat(fiat, self.state.fiat_symbol)
        return TotalSummary(
            total_msat=total,
            total_display=format_amount(total),
            count=selection.count,
            fiat_display=fiat_display,
        )

    def selection_view(self) -> SelectionView:
        export = self.state.selection.export_text()
        if export is None:
            return SelectionView(values=[], export_text="", placeholder=NO_SELECTION_TEXT)
        return SelectionView(
            values=list(self.state.selection.sorted_values()),
            export_text=export,
            placeholder="",
        )

    def render(self) -> None:
        self.renderer.display_total(self.summary())
        self.renderer.display_selection(self.selection_view())
        self.renderer.display_preview(self.state.images.preview(self.state.selection.count))

    # Capabilities ----------------------------------------------
    def toggle(self, value: int) -> bool:
        """Toggle a denomination; False when rejected by the selection limit."""
        try:
            self.state.selection.toggle(value)
        except SelectionLimitReached as e:
            self._toast(str(e), "warning")
            return False
        self.render()
        return True

    def set_manual_rate(self, text: str) -> bool:
        accepted = self.state.rates.set_manual(text)
        if accepted:
            self.render()
        return accepted

    async def refresh_rate(self) -> bool:
        rate = await self.state.rates.fetch_remote()
        self.render()
        return rate is not None

    def copy_export(self) -> Optional[str]:
        """Copy the export text; returns it, or None when nothing was copied.

        A failing primary clipboard falls back to the legacy path, and success
        is reported once either path completes.
        """
        text = self.state.selection.export_text()
        if text is None or self.clipboard is None:
            return None
        try:
            self.clipboard.write_text(text)
        except Exception as e:  # clipboard backends raise arbitrary errors
            logger.error("failed to copy: %s", e)
            try:
                self.clipboard.legacy_copy(text)
            except Exception as legacy_err:
                logger.error("legacy copy failed: %s", legacy_err)
                self._toast(COPY_FAILURE_TEXT, "error")
                return None
        self._toast(COPY_SUCCESS_TEXT, "success")
        return text
