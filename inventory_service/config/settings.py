"""
Application settings loaded from the environment (and a `.env` file).
"""
import urllib.parse
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    app_host: str = "0.0.0.0"
    app_port: int = 3000
    cache_dir: str = "./cache"
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Database
    # DATABASE_URL wins over the DB_* values (e.g. "sqlite:///./inventory.db")
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "inventory"
    db_driver: str = "{MySQL ODBC 8.0 Unicode Driver}"

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_format: str = "default"

    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        params = urllib.parse.quote_plus(
            f"DRIVER={self.db_driver};SERVER={self.db_host};PORT={self.db_port};"
            f"DATABASE={self.db_name};UID={self.db_user};PWD={self.db_password};"
            f"CHARSET=utf8mb4;"
        )
        return f"mysql+pyodbc:///?odbc_connect={params}"


@lru_cache
def get_settings() -> Settings:
    return Settings()
