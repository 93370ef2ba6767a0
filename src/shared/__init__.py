"""CAPI Catalog Provider Shared Package.

This package contains components shared by the provider service and its tools:
- models: Pydantic data models
- config: Configuration management
- observability: Structured logging
"""

__version__ = "0.1.0"
