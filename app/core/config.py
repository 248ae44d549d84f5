# app/core/config.py
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import PostgresDsn, computed_field


class Settings(BaseSettings):
    """
    Gestiona la configuración de la aplicación cargando variables de entorno.
    Utiliza Pydantic para la validación de tipos.
    """
    model_config = SettingsConfigDict(
        env_file=".env", env_ignore_case=True, extra="ignore"
    )

    PROJECT_NAME: str = "StreamingHanz API"
    API_PREFIX: str = "/api/v1"

    # Variables de la base de datos leídas desde el archivo .env
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = ""
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_DB: str = "streaminghanz"
    POSTGRES_PORT: int = 5432
    # Permite usar otra URI completa (ej. SQLite en pruebas)
    DATABASE_URL: Optional[str] = None

    # --- Límites del pool y timeouts de la base de datos ---
    DB_CONNECT_TIMEOUT: int = 5
    DB_STATEMENT_TIMEOUT_MS: int = 5000
    DB_POOL_SIZE: int = 10
    DB_POOL_TIMEOUT: int = 10

    # --- JWT Settings ---
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # --- Admin ---
    # ADMIN_PASSWORD es obligatorio; acepta texto plano o un hash bcrypt
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str

    # --- CORS / Logging ---
    BACKEND_CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]
    LOG_DIR: str = "logs"
    LOG_LEVEL: str = "INFO"

    @computed_field
    @property
    def DATABASE_URI(self) -> str:
        """
        Genera la URI de conexión a la base de datos en formato SQLAlchemy.
        Si DATABASE_URL está definida se usa tal cual.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        dsn = PostgresDsn.build(
            scheme="postgresql+psycopg2",
            username=self.POSTGRES_USER,
            password=self.POSTGRES_PASSWORD,
            host=self.POSTGRES_SERVER,
            port=self.POSTGRES_PORT,
            path=self.POSTGRES_DB,
        )
        return str(dsn)


# Instancia única de la configuración que será usada en toda la aplicación.
settings = Settings()
