"""
➡️ But : Orchestrer le store pour la couche HTTP.

merge(target, diff) : fusion champ par champ, sans effet de bord.

TodoService : lecture, création, mise à jour partielle (lire → fusionner → sauver), suppression.

Les erreurs (NotFound, InternalFault) remontent telles quelles : c'est le router qui choisit le code HTTP.

⚠️ update() n'est pas transactionnel : deux PATCH simultanés sur le même id peuvent
s'écraser (le dernier écrit gagne).
"""

from typing import List

from sqlmodel import Session

from todo_api.db.models.todos import Todo
from todo_api.db.repositories.todos import TodoStore
from todo_api.features.todos.schemas import TodoCreate, TodoPatch


def merge(target: Todo, diff: TodoPatch) -> Todo:
    """Nouveau Todo : les champs présents dans diff remplacent ceux de target, l'id est conservé."""
    changes = diff.model_dump(exclude_unset=True)
    return Todo(
        id=target.id,
        title=changes.get("title", target.title),
        order=changes.get("order", target.order),
        completed=changes.get("completed", target.completed),
    )


class TodoService:
    def __init__(self, store: TodoStore, session: Session):
        self.store = store
        self.session = session

    def list(self) -> List[Todo]:
        return self.store.all(self.session)

    def get(self, todo_id: int) -> Todo:
        return self.store.find_by_id(self.session, todo_id)

    def create(self, payload: TodoCreate) -> Todo:
        todo = payload.to_draft()
        self.store.save(todo, self.session)
        return todo

    def update(self, todo_id: int, patch: TodoPatch) -> Todo:
        todo = merge(self.get(todo_id), patch)
        self.store.save(todo, self.session)
        return todo

    def delete(self, todo_id: int) -> None:
        self.store.delete_by_id(self.session, todo_id)

    def clear(self) -> None:
        self.store.delete_all(self.session)
