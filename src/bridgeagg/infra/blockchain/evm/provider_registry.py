"""Chain name -> EvmProvider lookup, with a static table of known public endpoints."""

import logging

from bridgeagg.infra.blockchain.evm.provider import EvmProvider

logger = logging.getLogger(__name__)

# Provider key -> chain id + public RPC endpoints. Keys follow the aggregator's chain naming,
# which differs from the Hyperlane registry for some chains (avax/avalanche, xdai/gnosis, era/zksync).
PROVIDER_LIST: dict[str, dict] = {
    "ethereum": {"chain_id": 1, "rpc": ["https://eth.llamarpc.com"]},
    "optimism": {"chain_id": 10, "rpc": ["https://mainnet.optimism.io"]},
    "bsc": {"chain_id": 56, "rpc": ["https://bsc-dataseed.binance.org"]},
    "xdai": {"chain_id": 100, "rpc": ["https://rpc.gnosischain.com"]},
    "polygon": {"chain_id": 137, "rpc": ["https://polygon-rpc.com"]},
    "fraxtal": {"chain_id": 252, "rpc": ["https://rpc.frax.com"]},
    "era": {"chain_id": 324, "rpc": ["https://mainnet.era.zksync.io"]},
    "polygon_zkevm": {"chain_id": 1101, "rpc": ["https://zkevm-rpc.com"]},
    "moonbeam": {"chain_id": 1284, "rpc": ["https://rpc.api.moonbeam.network"]},
    "sei": {"chain_id": 1329, "rpc": ["https://evm-rpc.sei-apis.com"]},
    "mantle": {"chain_id": 5000, "rpc": ["https://rpc.mantle.xyz"]},
    "base": {"chain_id": 8453, "rpc": ["https://mainnet.base.org"]},
    "mode": {"chain_id": 34443, "rpc": ["https://mainnet.mode.network"]},
    "arbitrum": {"chain_id": 42161, "rpc": ["https://arb1.arbitrum.io/rpc"]},
    "celo": {"chain_id": 42220, "rpc": ["https://forno.celo.org"]},
    "avax": {"chain_id": 43114, "rpc": ["https://api.avax.network/ext/bc/C/rpc"]},
    "linea": {"chain_id": 59144, "rpc": ["https://rpc.linea.build"]},
    "blast": {"chain_id": 81457, "rpc": ["https://rpc.blast.io"]},
    "taiko": {"chain_id": 167000, "rpc": ["https://rpc.mainnet.taiko.xyz"]},
    "scroll": {"chain_id": 534352, "rpc": ["https://rpc.scroll.io"]},
}


class ProviderRegistry:
    """Per-run provider cache. Explicit RPC URLs take precedence over PROVIDER_LIST endpoints."""

    def __init__(
        self,
        rpc_urls: dict[str, str] | None = None,
        provider_list: dict[str, dict] | None = None,
    ) -> None:
        self._rpc_urls = dict(rpc_urls or {})
        self.provider_list = provider_list if provider_list is not None else PROVIDER_LIST
        self._providers: dict[str, EvmProvider] = {}

    def get_provider(self, name: str) -> EvmProvider | None:
        if name in self._providers:
            return self._providers[name]

        entry = self.provider_list.get(name)
        rpc_url = self._rpc_urls.get(name) or (entry["rpc"][0] if entry and entry.get("rpc") else None)
        if entry is None or rpc_url is None:
            return None

        provider = EvmProvider(name=name, chain_id=entry["chain_id"], rpc_url=rpc_url)
        self._providers[name] = provider
        return provider

    def set_provider(self, name: str, provider: EvmProvider) -> None:
        self._providers[name] = provider

    def find_key_by_chain_id(self, chain_id: int | str) -> str | None:
        """Provider key whose chain id matches, or None."""
        for key, entry in self.provider_list.items():
            if str(entry.get("chain_id")) == str(chain_id):
                return key
        return None
