"""
➡️ But : Configurer la base et gérer les sessions de base de données.

build_engine(settings) : moteur SQLAlchemy avec un pool de connexions borné.

init_db(engine) : crée la table `todos` si elle n'existe pas (idempotent, ne détruit rien).

get_session() : dépendance FastAPI qui emprunte une connexion au pool pour la durée de la requête,
puis la rend proprement.

🔹 Avantages :

Un seul endroit pour gérer les connexions DB.

Réutilisable par injection (Depends(get_session)).
"""

from typing import Any, Dict

from fastapi import Request
from loguru import logger
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# Import du modèle pour que create_all connaisse la table
from todo_api.db.models.todos import Todo  # noqa: F401

from todo_api.core.config import Settings
from todo_api.core.errors import InternalFault


def _is_memory_sqlite(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


def build_engine(settings: Settings) -> Engine:
    url = settings.DATABASE_URL

    connect_args: Dict[str, Any] = {}
    pool_args: Dict[str, Any] = {}
    if settings.is_sqlite:
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        connect_args["check_same_thread"] = False

    if _is_memory_sqlite(url):
        # Une base mémoire n'existe que sur sa connexion : on la partage
        pool_args["poolclass"] = StaticPool
    else:
        pool_args["pool_size"] = settings.DB_POOL_SIZE
        pool_args["max_overflow"] = settings.DB_MAX_OVERFLOW
        pool_args["pool_timeout"] = settings.DB_POOL_TIMEOUT

    return create_engine(
        url,
        echo=settings.DB_ECHO,
        connect_args=connect_args,
        pool_pre_ping=not settings.is_sqlite,  # ping utile pour Postgres/MySQL ; inutile pour SQLite
        **pool_args,
    )


def init_db(engine: Engine) -> None:
    """
    CREATE TABLE IF NOT EXISTS pour la table `todos`.
    Sûr à chaque démarrage : les données existantes sont conservées.
    """
    try:
        SQLModel.metadata.create_all(engine)
    except SQLAlchemyError as exc:
        logger.exception("Schema bootstrap failed")
        raise InternalFault("Schema bootstrap failed") from exc


def get_session(request: Request):
    """
    Dépendance FastAPI : fournit une session par requête, liée au moteur de l'application.
    Utilisation :
        def route(..., session: Session = Depends(get_session)):
            ...
    """
    with Session(request.app.state.engine) as session:
        yield session
