from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = Field(default="usernorm", alias="APP_NAME")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    default_email_domain: str = Field(default="hzxb.com", alias="DEFAULT_EMAIL_DOMAIN")
    database_url: str = Field(default="sqlite+pysqlite:///./usernorm.db", alias="DATABASE_URL")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
