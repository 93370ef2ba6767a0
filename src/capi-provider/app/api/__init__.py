"""API routers for the CAPI catalog provider."""

from . import health, providers, status

__all__ = ["health", "providers", "status"]
