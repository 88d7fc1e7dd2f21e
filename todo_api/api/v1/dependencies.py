"""
➡️ But : Centraliser les dépendances réutilisables des routes.

get_todo_service() : crée un TodoService à partir d’une session DB.

todo_id_param() : extrait et valide l'id du chemin.

get_site_root_url() : base des liens, lue dans les settings de l'application.

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

Facile à injecter dans plusieurs endpoints (Depends()).
"""

import re

from fastapi import Depends, Path, Request
from sqlmodel import Session

from todo_api.core.errors import BadInput
from todo_api.db.models.todos import INT32_MAX, INT32_MIN
from todo_api.db.repositories.todos import TodoStore
from todo_api.db.session import get_session
from todo_api.features.todos.services import TodoService

# Même grammaire qu'un entier signé ASCII : ni "_", ni chiffres Unicode
ID_PATTERN = re.compile(r"[+-]?[0-9]+")


def todo_id_param(
    todo_id: str = Path(..., description="Identifiant du todo", examples=["1"]),
) -> int:
    raw = todo_id.strip()
    if not ID_PATTERN.fullmatch(raw):
        raise BadInput(f"Malformed todo id: {todo_id!r}")
    value = int(raw)
    if not INT32_MIN <= value <= INT32_MAX:
        raise BadInput(f"Todo id out of range: {value}")
    return value


def get_site_root_url(request: Request) -> str:
    return request.app.state.settings.SITE_ROOT_URL


# -----------------------------
# Todos
# -----------------------------
def get_todo_store() -> TodoStore:
    return TodoStore()


def get_todo_service(
    session: Session = Depends(get_session),
    store: TodoStore = Depends(get_todo_store),
) -> TodoService:
    return TodoService(store=store, session=session)
