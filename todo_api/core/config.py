"""
➡️ But : Centraliser tous les paramètres configurables (nom d’app, URL de la DB, pool, logs, URL publique…)

Utilise pydantic-settings pour charger automatiquement les variables d’environnement (.env, variables système…).

Fournit un objet settings par défaut, mais chaque composant accepte aussi un Settings explicite :

from todo_api.core.config import Settings
app = create_app(Settings(DATABASE_URL="sqlite://"))


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code.

Facilite le passage entre environnements (dev / prod / test).
"""

from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "todo-api"
    ENV: str = "dev"  # dev | prod | test

    # -----------------------------
    # HTTP
    # -----------------------------
    HOST: str = "0.0.0.0"
    PORT: int = 6767
    # Base des liens renvoyés au client (champ "url" de chaque todo)
    SITE_ROOT_URL: str = "http://0.0.0.0:6767/"
    CORS_ALLOW_ORIGINS: List[str] = ["*"]

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "todos.db"  # fichier SQLite
    # Si tu veux forcer une URL différente (ex: Postgres), définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None

    DB_POOL_SIZE: int = 10        # connexions gardées dans le pool
    DB_MAX_OVERFLOW: int = 0      # 0 = plafond strict à DB_POOL_SIZE
    DB_POOL_TIMEOUT: float = 30   # secondes d'attente quand le pool est épuisé
    DB_ECHO: bool = False

    # -----------------------------
    # Logs
    # -----------------------------
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None
    LOG_REQUESTS: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    @field_validator("SITE_ROOT_URL")
    @classmethod
    def _slash_terminated(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("SITE_ROOT_URL cannot be empty")
        if not value.endswith("/"):
            value += "/"
        return value

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite:")


# Instance globale importable partout
settings = Settings()
