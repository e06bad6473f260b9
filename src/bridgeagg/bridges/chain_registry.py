"""Hyperlane registry loader: which chains the bridge runs on and which provider serves each."""

import logging

import httpx
import yaml
from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from bridgeagg.config import settings
from bridgeagg.domain.enums import ChainProtocol
from bridgeagg.domain.models.bridge import ChainDescriptor, ChainTable
from bridgeagg.exceptions import ExternalServiceError, FetchError
from bridgeagg.infra.blockchain.evm.provider_registry import ProviderRegistry
from bridgeagg.infra.http.rate_limited_client import RateLimitedClient

logger = logging.getLogger(__name__)


def is_mainnet_evm(chain: ChainDescriptor) -> bool:
    return not chain.is_testnet and chain.protocol == ChainProtocol.ETHEREUM.value


class ChainRegistryResolver:
    def __init__(
        self,
        http_client: RateLimitedClient,
        providers: ProviderRegistry,
        base_uri: str | None = None,
    ) -> None:
        self._http = http_client
        self._providers = providers
        self._base_uri = (base_uri or settings.hyperlane_registry_uri).rstrip("/")

    async def resolve(self) -> ChainTable:
        """Load chain metadata + addresses and register providers for mainnet EVM chains.

        Raises FetchError if either document cannot be fetched or parsed.
        """
        metadata = await self._load_document("chains/metadata.yaml")
        addresses = await self._load_document("chains/addresses.yaml")

        table = ChainTable(addresses={k: dict(v or {}) for k, v in addresses.items()})
        for key, raw in metadata.items():
            try:
                chain = ChainDescriptor.model_validate(raw)
            except ValidationError as e:
                logger.warning("Skipping malformed registry entry %s: %s", key, e.error_count())
                continue
            if not is_mainnet_evm(chain):
                continue
            table.chains[key] = chain
            self._register_provider(chain, table)

        unusable = [k for k in table.chains if self._providers.get_provider(table.provider_key(k)) is None]
        logger.info(
            "Registry: %d mainnet EVM chains, %d aliased, %d without provider",
            len(table.chains), len(table.aliases), len(unusable),
        )
        if unusable:
            logger.debug("Chains without provider: %s", ", ".join(sorted(unusable)))
        return table

    def _register_provider(self, chain: ChainDescriptor, table: ChainTable) -> None:
        if self._providers.get_provider(chain.name) is not None:
            return
        alias = self._providers.find_key_by_chain_id(chain.chain_id)
        if alias is None:
            return
        provider = self._providers.get_provider(alias)
        if provider is None:
            return
        self._providers.set_provider(chain.name, provider)
        table.aliases[chain.name] = alias

    async def _load_document(self, path: str) -> dict:
        url = f"{self._base_uri}/{path}"
        try:
            text = await self._get_text(url)
        except ExternalServiceError as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e

        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise FetchError(f"Failed to parse {url}: {e}") from e
        if not isinstance(document, dict):
            raise FetchError(f"Unexpected document shape at {url}: {type(document).__name__}")
        return document

    @retry(
        retry=retry_if_exception_type(ExternalServiceError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def _get_text(self, url: str) -> str:
        try:
            resp = await self._http.get(url)
        except httpx.HTTPError as e:
            raise ExternalServiceError(str(e)) from e

        if resp.status_code >= 500:
            raise ExternalServiceError(f"HTTP {resp.status_code}")
        if resp.status_code >= 400:
            raise FetchError(f"Failed to fetch {url}: HTTP {resp.status_code}")
        return resp.text
