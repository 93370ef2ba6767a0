"""CAPI catalog provider service."""
