"""Domain constants for amounts, scales and display text."""

from typing import Tuple

# 100,000,000 sat per BTC, 1000 msat per sat
MSAT_PER_BTC: int = 100_000_000_000

# (multiplier in msat, unit symbol), ascending
SCALE_STEPS: Tuple[Tuple[int, str], ...] = (
    (1, "msat"),
    (1_000, "sat"),
    (1_000_000, "ksat"),
    (1_000_000_000, "Msat"),
    (1_000_000_000_000, "Gsat"),
    (1_000_000_000_000_000, "Tsat"),
)

SIGNIFICANT_FIGURES: int = 3

DEFAULT_MIN_EXPONENT: int = 10
DEFAULT_MAX_EXPONENT: int = 29
DEFAULT_MAX_SELECTIONS: int = 4

NO_SELECTION_TEXT = "No denominations selected"
COPY_SUCCESS_TEXT = "Values copied to clipboard!"
COPY_FAILURE_TEXT = "Could not copy values to clipboard."
