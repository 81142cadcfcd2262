from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./realestate.db"
    PROPERTIES_TABLE: str = "properties"
    OWNERS_TABLE: str = "owners"
    SQL_ECHO: bool = False
    AUTO_CREATE_SCHEMA: bool = True
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "https://localhost:5173",
        "http://localhost:3000",
        "https://localhost:3000",
    ]
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    class Config:
        env_file = ".env"

settings = Settings()
