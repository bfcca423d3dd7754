from dotenv import load_dotenv
from pydantic_settings import BaseSettings
from typing import Optional

# Cargar variables de entorno
load_dotenv()

class Settings(BaseSettings):
    # Database
    DB_HOST: str = "127.0.0.1"
    DB_PORT: int = 3306
    DB_USERNAME: str = "root"
    DB_PASSWORD: str = ""
    DB_DATABASE: str = "shopping_mall"
    # URL completa, tiene prioridad sobre DB_* (ej. sqlite:// en pruebas)
    DATABASE_URL: Optional[str] = None
    DB_ECHO: bool = False
    DB_AUTO_CREATE: bool = True

    # API
    API_TITLE: str = "Shopping Mall Database API"
    API_VERSION: str = "1.0.0"
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000

    # CORS
    CORS_ORIGINS: list = ["http://localhost:3000", "http://localhost:5173"]

    # Seguridad
    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "shopping-mall"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7
    BCRYPT_ROUNDS: int = 12

    # Paginación
    DEFAULT_PAGE_LIMIT: int = 10
    MAX_PAGE_LIMIT: int = 1000

    # Debug
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
