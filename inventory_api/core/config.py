from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Mongo
    MONGO_URI: str
    MONGO_DB_NAME: str = "estoque"
    PRODUCTS_COLLECTION: str = "ProdutosNoEstoque"
    STORAGE_TIMEOUT_SECONDS: float = 5.0

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    RELOAD: bool = False
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = ["*"]

    # Stock rules
    ALLOW_NEGATIVE_STOCK: bool = True  # false turns negative deltas into conditional increments

    # Keep-alive ping, disabled when no URL is set
    KEEPALIVE_URL: str | None = None
    KEEPALIVE_INTERVAL_SECONDS: float = 840.0

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", case_sensitive=False)

@lru_cache
def get_settings() -> Settings:
    return Settings()
