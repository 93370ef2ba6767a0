"""Base model configuration for all Pydantic models."""

from pydantic import BaseModel, ConfigDict


class CatalogBaseModel(BaseModel):
    """Base model with common configuration.

    Conventions:
    - Python field names are snake_case; wire names are the camelCase
      aliases used by Kubernetes and the catalog
    - Models accept either name when constructed
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=True,
    )
