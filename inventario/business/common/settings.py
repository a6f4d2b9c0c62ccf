import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

# Cargar variables del archivo .env
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "si")


class Settings(BaseModel):
    db_path: str = "inventario.db"
    images_dir: str = "images/productos"
    db_echo: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None
    reset_legacy_schema: bool = False
    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def database_url(self) -> str:
        return f"sqlite+aiosqlite:///{self.db_path}"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from INVENTARIO_* environment variables."""
        return cls(
            db_path=os.getenv("INVENTARIO_DB_PATH", "inventario.db"),
            images_dir=os.getenv("INVENTARIO_IMAGES_DIR", "images/productos"),
            db_echo=_env_flag("INVENTARIO_DB_ECHO"),
            log_level=os.getenv("INVENTARIO_LOG_LEVEL", "INFO"),
            log_file=os.getenv("INVENTARIO_LOG_FILE") or None,
            reset_legacy_schema=_env_flag("INVENTARIO_RESET_LEGACY_SCHEMA"),
            host=os.getenv("INVENTARIO_HOST", "127.0.0.1"),
            port=int(os.getenv("INVENTARIO_PORT", "8000")),
        )
