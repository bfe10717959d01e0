"""Configuration management"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/vaultsettings.db"

    # Remote vault API
    API_VERSION: str = "v21.2"
    SETTING_OBJECT: str = "vsdk_setting__c"
    REMOTE_TIMEOUT: float = 30.0

    # Defaults created in remote mode are also written to the local table
    PERSIST_REMOTE_DEFAULTS_LOCALLY: bool = True

    # Directories
    BASE_DIR: Path = Path(__file__).parent.parent
    DATA_DIR: Path = BASE_DIR / "data"
    LOGS_DIR: Path = DATA_DIR / "logs"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8765
    ALLOWED_ORIGINS: Optional[str] = None  # Comma-separated origins for the API

    class Config:
        env_file = ".env"
        case_sensitive = True

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Ensure directories exist
        self.DATA_DIR.mkdir(exist_ok=True)
        self.LOGS_DIR.mkdir(exist_ok=True)


# Global settings instance
settings = Settings()
