"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales.

Los valores por defecto reproducen el despliegue original (cuenta fija en
devnet, sincronizacion cada 60 segundos, puerto 5000); todos se pueden
sobreescribir por variable de entorno o archivo .env.
"""
import json
from pathlib import Path
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field


PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno y proporciona valores por defecto.
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="Aptos Resource Mirror")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=5000)

    # Base de datos
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./aptos.db")
    DB_POOL_SIZE: int = Field(default=5)
    DB_MAX_OVERFLOW: int = Field(default=10)

    # Nodo Aptos y cuenta espejada
    APTOS_NODE_URL: str = Field(default="https://fullnode.devnet.aptoslabs.com/v1")
    APTOS_ACCOUNT: str = Field(
        default="0xdc85284115cd06f683956a36bee54bf70144eb2d5f9497cbced98bd01c389178"
    )

    # Sincronizacion periodica
    SYNC_INTERVAL_SECONDS: int = Field(default=60, gt=0)
    SYNC_ENABLED: bool = Field(default=True)

    # Dashboard estatico
    STATIC_DIR: str = Field(default=str(PROJECT_ROOT / "public"))

    # CORS (acepta lista JSON o "*" para todos los origenes)
    CORS_ORIGINS: str = Field(default="*")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


def get_cors_origins(cors_string: str) -> List[str]:
    """
    Parsea la configuracion de CORS.
    Acepta "*" para todos los origenes o una lista JSON.
    """
    if cors_string == "*":
        return ["*"]
    try:
        return json.loads(cors_string)
    except json.JSONDecodeError:
        # Si no es JSON valido, retornar como lista simple
        return [origin.strip() for origin in cors_string.split(",")]


# Instancia global de configuracion
settings = Settings()
