from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./tablemaster.db"

    # JWT
    secret_key: str = "your-secret-key-change-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 12  # one service shift

    # Frontend URL for CORS
    frontend_url: str = "http://localhost:5173"

    # Redis (optional read-through cache for menu reads; empty = no cache)
    redis_url: str = ""  # e.g. redis://localhost:6379/0
    menu_cache_ttl_seconds: int = 60 * 60 * 24

    # Menu normalization
    steak_category_slug: str = "steaks"
    # Advisory only: unknown codes are logged, never rejected
    steak_country_codes: str = "CA,US,AU,JP,NZ,AR,UY,IE,GB"
    # Create a missing menu category from its slug instead of failing the write
    auto_create_menu_categories: bool = False
    default_currency: str = "CAD"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"

    @property
    def steak_country_code_set(self) -> set[str]:
        return {c.strip().upper() for c in self.steak_country_codes.split(",") if c.strip()}


@lru_cache
def get_settings() -> Settings:
    return Settings()
