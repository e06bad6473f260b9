from bridgeagg.db.models.bridge_config import BridgeConfig
from bridgeagg.db.models.cache_entry import CacheEntry
from bridgeagg.db.models.transaction import BridgeTransaction

__all__ = [
    "BridgeConfig",
    "BridgeTransaction",
    "CacheEntry",
]
