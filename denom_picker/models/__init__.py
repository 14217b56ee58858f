"""Domain models and API payloads for the denomination picker."""

from .constants import (
    MSAT_PER_BTC,
    SCALE_STEPS,
    NO_SELECTION_TEXT,
)  # re-export
from .denomination import (
    Denomination,
    DenominationOut,
    TotalOut,
    SelectionOut,
    PreviewOut,
    ToastOut,
    RateOut,
    PickerStateOut,
    CopyResultIn,
)
from .rates import ManualRateIn

__all__ = [
    "MSAT_PER_BTC",
    "SCALE_STEPS",
    "NO_SELECTION_TEXT",
    "Denomination",
    "DenominationOut",
    "TotalOut",
    "SelectionOut",
    "PreviewOut",
    "ToastOut",
    "RateOut",
    "PickerStateOut",
    "CopyResultIn",
    "ManualRateIn",
]
