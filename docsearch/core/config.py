from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str
    database_echo: bool = False
    auto_create_tables: bool = True

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    # Кэш запросов к документам живёт в памяти процесса; включать только
    # при запуске в один воркер, иначе другие процессы не узнают о записи
    cache_ttl_seconds: float = 0.0
    cache_max_entries: int = 1024

    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
