from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    db_host: str = "localhost"
    db_port: int = 54377
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "bridges"
    redis_url: str = "redis://localhost:6379/0"
    hyperlane_registry_uri: str = "https://raw.githubusercontent.com/hyperlane-xyz/hyperlane-registry/main"
    rpc_urls: dict[str, str] = {}  # chain name -> RPC URL, overrides PROVIDER_LIST
    layerzero_data_dir: str = "data/layerzero"
    ingest_batch_size: int = 250
    http_rate_per_second: float = 5.0
    debug: bool = True

    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    class Config:
        env_file = ".env"


settings = Settings()
