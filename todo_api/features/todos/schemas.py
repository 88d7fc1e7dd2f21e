"""
➡️ But : Définir les formats d’entrée/sortie de l’API (couche validation).

TodoCreate → corps de requête POST /todos

TodoPatch → corps PATCH /todos/{id} (chaque champ est indépendamment optionnel)

TodoOut → réponse de l’API, avec le lien absolu vers la ressource

Sépare le modèle "de stockage" (Todo, toujours complet) du "diff" (TodoPatch, partiel).

🔹 Avantages :

Validation automatique.

Un champ omis et un champ présent ne se confondent jamais : null est refusé dans un patch.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from todo_api.db.models.todos import INT32_MAX, INT32_MIN, Todo


class TodoCreate(BaseModel):
    title: str = Field(..., examples=["Acheter du lait"])
    order: int = Field(0, ge=INT32_MIN, le=INT32_MAX, examples=[1])
    completed: bool = Field(False, examples=[False])

    def to_draft(self) -> Todo:
        return Todo(title=self.title, order=self.order, completed=self.completed)


class TodoPatch(BaseModel):
    title: Optional[str] = Field(None, examples=["Aller courir"])
    order: Optional[int] = Field(None, ge=INT32_MIN, le=INT32_MAX, examples=[2])
    completed: Optional[bool] = Field(None, examples=[True])

    @field_validator("title", "order", "completed", mode="before")
    @classmethod
    def _not_null(cls, value):
        # Appelé seulement pour les champs présents dans le corps
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class TodoOut(BaseModel):
    id: int
    title: str
    order: int
    completed: bool
    url: str

    @classmethod
    def render(cls, todo: Todo, site_root_url: str) -> "TodoOut":
        return cls(
            id=todo.id,
            title=todo.title,
            order=todo.order,
            completed=todo.completed,
            url=f"{site_root_url}todos/{todo.id}",
        )
