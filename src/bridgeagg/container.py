from dependency_injector import containers, providers

from bridgeagg.bridges.event_logs import EventLogFetcher
from bridgeagg.config import Settings
from bridgeagg.db.session import build_engine, build_session_factory
from bridgeagg.infra.blockchain.evm.provider_registry import ProviderRegistry
from bridgeagg.infra.blockchain.evm.token_resolver import TokenResolver


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    # Per-run shared state: one container per task invocation
    provider_registry = providers.Singleton(
        ProviderRegistry,
        rpc_urls=settings.provided.rpc_urls,
    )

    token_resolver = providers.Singleton(TokenResolver)

    event_fetcher = providers.Singleton(
        EventLogFetcher,
        providers=provider_registry,
        token_resolver=token_resolver,
    )
