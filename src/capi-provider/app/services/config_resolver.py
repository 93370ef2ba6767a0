"""Provider configuration resolution.

Reads ``catalog.providers.capi`` from the application config. The node is
either a single provider (it carries ``hubClusterName`` directly, and gets the
id ``default``) or a map of provider id to provider object.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from shared.config import RootConfig, parse_app_config
from shared.models import ProviderConfig

from ..errors import ConfigurationError

DEFAULT_PROVIDER_ID = "default"
HUB_CLUSTER_NAME_KEY = "hubClusterName"


def as_root_config(root_config: RootConfig | Mapping[str, Any]) -> RootConfig:
    """Accept either a validated config tree or a raw mapping."""
    if isinstance(root_config, RootConfig):
        return root_config
    try:
        return parse_app_config(dict(root_config))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid application config: {e}") from e


def read_provider_config(provider_id: str, node: Any) -> ProviderConfig:
    """Parse one provider object.

    Raises:
        ConfigurationError: If the node is not a mapping, lacks
            ``hubClusterName`` or carries an invalid schedule/defaults
    """
    if not isinstance(node, Mapping):
        raise ConfigurationError(
            f"CAPI provider {provider_id} configuration must be a mapping"
        )
    if not node.get(HUB_CLUSTER_NAME_KEY):
        raise ConfigurationError(
            f"Missing required config value at "
            f"'catalog.providers.capi.{HUB_CLUSTER_NAME_KEY}' for provider {provider_id}"
        )
    try:
        return ProviderConfig.model_validate({**node, "id": provider_id})
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration for CAPI provider {provider_id}: {e}"
        ) from e


def read_provider_configs(
    root_config: RootConfig | Mapping[str, Any],
) -> list[ProviderConfig]:
    """Resolve every configured CAPI provider.

    Returns an empty list when no ``catalog.providers.capi`` node exists.
    """
    providers = as_root_config(root_config).capi_providers
    if not providers:
        return []

    if HUB_CLUSTER_NAME_KEY in providers:
        return [read_provider_config(DEFAULT_PROVIDER_ID, providers)]

    return [
        read_provider_config(provider_id, node)
        for provider_id, node in providers.items()
    ]
