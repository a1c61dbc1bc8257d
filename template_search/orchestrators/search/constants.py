"""Shared typed constants for search orchestration control flow."""

from enum import StrEnum

DEFAULT_PAGE_SIZE = 9
MIN_RESULTS_BEFORE_TOP_UP = 4
DEFAULT_PAGE_BUILDER = "spectra"
OTHERS_BUSINESS_TYPE = "others"


class GenerationState(StrEnum):
    """Lifecycle of one search generation."""

    IDLE = "idle"
    FETCHING = "fetching"
    SETTLED = "settled"
    CANCELLED = "cancelled"


class DiscardReason(StrEnum):
    """Why a resolution was dropped instead of merged."""

    SUPERSEDED = "superseded"
    CANCELLED = "cancelled"
