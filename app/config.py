"""Configuration for Widget Layout Service"""
import os
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Service info
    SERVICE_NAME: str = "Widget Layout Service"
    SERVICE_VERSION: str = "1.0.0"
    SERVICE_HOST: str = os.getenv("SERVICE_HOST", "0.0.0.0")
    SERVICE_PORT: int = int(os.getenv("SERVICE_PORT", "8000"))
    API_PREFIX: str = "/api/widget-layout/v1"

    # Database
    PGSQL_HOSTNAME: str = "localhost"
    PGSQL_PORT: int = 5432
    PGSQL_USER: str = "widget_layout"
    PGSQL_PASSWORD: str = "widget_layout"
    PGSQL_DATABASE: str = "widget_layout"
    PGSQL_SSL_MODE: str = "disable"
    DATABASE_URL: Optional[str] = None

    # Catalogs, JSON arrays; empty means no entries
    BASE_WIDGET_DASHBOARD_TEMPLATES: str = ""
    WIDGET_MAPPING_CONFIG: str = ""

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def SQLALCHEMY_DATABASE_URL(self) -> str:
        """Construct database URL"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql://{self.PGSQL_USER}:{self.PGSQL_PASSWORD}"
            f"@{self.PGSQL_HOSTNAME}:{self.PGSQL_PORT}/{self.PGSQL_DATABASE}"
            f"?sslmode={self.PGSQL_SSL_MODE}"
        )

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
