"""Typed application config tree.

The application config is a hierarchical YAML document shared with the rest
of the developer portal. Only the branches this service reads are modelled;
everything else is preserved as extra fields and ignored.

    catalog:
      providers:
        capi: {...}              # one provider, or a map of named providers
    kubernetes:
      clusterLocatorMethods:
        - type: config
          clusters:
            - name: hub
              url: https://hub.example.com:6443
              serviceAccountToken: ...
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field


class ConfigNode(BaseModel):
    """Base for config tree nodes (camelCase keys, unknown keys kept)."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ClusterLocatorEntry(ConfigNode):
    """A named cluster in a cluster locator method."""

    name: str
    url: str | None = None
    service_account_token: str | None = Field(default=None, alias="serviceAccountToken")
    ca_data: str | None = Field(default=None, alias="caData")
    skip_tls_verify: bool = Field(default=False, alias="skipTLSVerify")


class ClusterLocatorMethod(ConfigNode):
    type: str = "config"
    clusters: list[ClusterLocatorEntry] = Field(default_factory=list)


class KubernetesConfig(ConfigNode):
    cluster_locator_methods: list[ClusterLocatorMethod] | None = Field(
        default=None, alias="clusterLocatorMethods"
    )


class CatalogProvidersConfig(ConfigNode):
    # Either a single provider object or a map of named provider objects;
    # the provider resolver decides which.
    capi: dict[str, Any] | None = None


class CatalogConfig(ConfigNode):
    providers: CatalogProvidersConfig | None = None


class RootConfig(ConfigNode):
    """Root of the application config."""

    catalog: CatalogConfig | None = None
    kubernetes: KubernetesConfig | None = None

    @property
    def capi_providers(self) -> dict[str, Any] | None:
        """The raw ``catalog.providers.capi`` node, if present."""
        if self.catalog is None or self.catalog.providers is None:
            return None
        return self.catalog.providers.capi


def parse_app_config(data: dict[str, Any] | None) -> RootConfig:
    """Validate a raw config mapping into a RootConfig.

    Raises:
        pydantic.ValidationError: If the tree does not match the schema
    """
    return RootConfig.model_validate(data or {})


def load_app_config(path: str | Path) -> RootConfig:
    """Load and validate the YAML application config.

    Raises:
        OSError: If the file cannot be read
        yaml.YAMLError: If the file is not valid YAML
        pydantic.ValidationError: If the tree does not match the schema
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is not None and not isinstance(data, dict):
        raise ValueError(f"Application config {path} must be a mapping")
    return parse_app_config(data)
