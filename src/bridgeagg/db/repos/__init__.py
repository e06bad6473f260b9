from bridgeagg.db.repos.bridge_config_repo import BridgeConfigRepo
from bridgeagg.db.repos.cache_repo import CacheRepo
from bridgeagg.db.repos.transaction_repo import TransactionRepo

__all__ = ["BridgeConfigRepo", "CacheRepo", "TransactionRepo"]
