import json
from functools import lru_cache
from typing import Annotated, Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    # Storage connection (mandatory)
    db_host: str
    db_user: str
    db_password: str
    db_name: str
    db_port: int = 3306
    db_driver: str = "mysql+aiomysql"

    # Full SQLAlchemy URL, overrides the DB_* values (e.g. sqlite+aiosqlite:///./data/cms.db)
    database_url: Optional[str] = None

    # Connection pool: requests beyond capacity wait for a free connection
    db_pool_size: int = 10
    db_pool_timeout: float = 30.0
    db_statement_timeout: float = 10.0

    # Uploads
    upload_root: str = "uploads"
    upload_timeout: float = 60.0
    public_base_url: Optional[str] = None

    # CORS allow-list: "*", "https://a.com,https://b.com" or a JSON array
    cors_origins: Annotated[list[str], NoDecode] = ["http://localhost:3000"]

    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "INFO"

    class Config:
        env_file = ".env"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        value = value.strip()
        if value.startswith("["):
            return json.loads(value)
        return [origin.strip() for origin in value.split(",") if origin.strip()]

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        url = URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )
        return url.render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
