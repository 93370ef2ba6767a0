"""API request/response schemas."""

from .provider import ProviderSummary, RefreshOutcome

__all__ = [
    "ProviderSummary",
    "RefreshOutcome",
]
