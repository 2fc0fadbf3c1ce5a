"""Re-export individual schema modules for easy imports."""

from .canteen import (
    CanteenCreate,
    CanteenCreated,
    CanteenOut,
    HistoricalMenuUpdate,
    HistoricalMenuUpdated,
)
from .menu import GenerateRequest, GenerateResponse, GeneratedMenuOut, MenuHistory, QuotaOut

__all__ = [
    "CanteenCreate",
    "CanteenCreated",
    "CanteenOut",
    "HistoricalMenuUpdate",
    "HistoricalMenuUpdated",
    "GenerateRequest",
    "GenerateResponse",
    "GeneratedMenuOut",
    "MenuHistory",
    "QuotaOut",
]
