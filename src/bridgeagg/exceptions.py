class BridgeAggError(Exception):
    """Base error for the bridge aggregation adapters."""


class ExternalServiceError(BridgeAggError):
    """Transient failure talking to an HTTP API or RPC node. Retried by tenacity."""


class FetchError(BridgeAggError):
    """A remote document could not be fetched or parsed. Fatal for adapter build."""


class ConfigurationError(BridgeAggError):
    """Adapter configuration is incomplete (no provider, missing contract address)."""


class RowValidationError(BridgeAggError):
    """A canonical transaction row is not fit for insertion."""
