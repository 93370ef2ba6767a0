"""Provider error taxonomy.

Construction-time errors (configuration) propagate to the caller of the
factory and abort startup. Errors raised during a refresh cycle propagate up
to the scheduled task wrapper, which logs them.
"""


class ProviderError(Exception):
    """Base class for provider errors."""

    pass


class ConfigurationError(ProviderError):
    """Raised when provider configuration is missing or invalid."""

    pass


class ClusterNotFoundError(ConfigurationError):
    """Raised when a hub cluster is not defined in the cluster locators."""

    def __init__(self, cluster_name: str):
        self.cluster_name = cluster_name
        super().__init__(
            f"CAPI hub cluster {cluster_name} not defined in kubernetes config"
        )


class NotInitializedError(ProviderError):
    """Raised when refresh is invoked before a catalog connection is bound."""

    pass


class CatalogSubmissionError(ProviderError):
    """Raised when the catalog rejects an entity mutation."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
