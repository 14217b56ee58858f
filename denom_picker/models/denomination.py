from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel


@dataclass(frozen=True)
class Denomination:
    value: int  # msat
    display: str
    power: int


class DenominationOut(BaseModel):
    value: int
    display: str
    power: int
    selected: bool = False

    @classmethod
    def from_denomination(cls, d: Denomination, selected: bool = False) -> "DenominationOut":
        return cls(value=d.value, display=d.display, power=d.power, selected=selected)


class TotalOut(BaseModel):
    total_msat: int
    total_display: str
    count: int
    fiat_display: Optional[str] = None


class SelectionOut(BaseModel):
    values: List[int]
    export_text: str
    placeholder: str
    can_copy: bool


class PreviewOut(BaseModel):
    src: str
    alt: str
    info: str


class ToastOut(BaseModel):
    message: str
    level: str
    duration_seconds: float


class RateOut(BaseModel):
    rate: Optional[float] = None
    source: Optional[str] = None
    updated_at: Optional[str] = None
    input_text: str = ""


class PickerStateOut(BaseModel):
    total: TotalOut
    selection: SelectionOut
    preview: PreviewOut
    rate: RateOut
    toasts: List[ToastOut] = []


class CopyResultIn(BaseModel):
    # Outcome of the copy the page already attempted
    primary_ok: bool
    legacy_ok: bool = False
