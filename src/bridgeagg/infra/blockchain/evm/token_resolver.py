import logging

from eth_utils import to_checksum_address

from bridgeagg.infra.blockchain.abi import ContractInterface
from bridgeagg.infra.blockchain.evm.provider import EvmProvider

logger = logging.getLogger(__name__)


class TokenResolver:
    """Memoizes wrapper contract -> underlying token per (chain_id, address) for one run.

    Failures are cached too: a contract without wrappedToken() is its own token.
    """

    def __init__(self) -> None:
        self._cache: dict[tuple[int, str], str] = {}

    def __len__(self) -> int:
        return len(self._cache)

    async def resolve(self, provider: EvmProvider, iface: ContractInterface, address: str) -> str:
        key = (provider.chain_id, address)
        if key in self._cache:
            return self._cache[key]

        wrapped = await self._read_wrapped_token(provider, iface, address)
        token = wrapped if wrapped is not None else address
        self._cache[key] = token
        return token

    async def _read_wrapped_token(self, provider: EvmProvider, iface: ContractInterface, address: str) -> str | None:
        """Underlying token address, or None if the call reverts or returns undecodable data."""
        try:
            data = iface.encode_function_data("wrappedToken")
            result = await provider.call(address, data)
            return to_checksum_address(iface.decode_function_result("wrappedToken", result)[0])
        except Exception as e:
            logger.debug("wrappedToken() unavailable on %s %s: %s", provider.name, address, e)
            return None
