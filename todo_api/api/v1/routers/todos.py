"""
➡️ But : Définir les endpoints de l’API.

C’est la couche la plus proche du web :

Réceptionne les requêtes HTTP (GET, POST, PATCH, DELETE…)

Appelle le service correspondant

Traduit les erreurs métier en codes HTTP (NotFound → 404, InternalFault → 500)

Retourne les schémas de sortie (response_model)
"""

from contextlib import contextmanager
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from todo_api.api.v1.dependencies import get_site_root_url, get_todo_service, todo_id_param
from todo_api.core.errors import InternalFault, NotFound
from todo_api.features.todos.schemas import TodoCreate, TodoOut, TodoPatch
from todo_api.features.todos.services import TodoService

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
    responses={
        400: {"description": "Bad Request"},
        404: {"description": "Not Found"},
        500: {"description": "Internal Server Error"},
    },
)


@contextmanager
def http_errors():
    try:
        yield
    except NotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.detail)
    except InternalFault as e:
        logger.opt(exception=e).error("Storage fault: {}", e.detail)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.detail)


@router.get(
    "",
    summary="Lister les todos",
    description="Retourne toutes les tâches, triées par id.",
    response_model=List[TodoOut],
)
def list_todos(
    svc: TodoService = Depends(get_todo_service),
    root: str = Depends(get_site_root_url),
):
    with http_errors():
        return [TodoOut.render(t, root) for t in svc.list()]


@router.post(
    "",
    summary="Créer un todo",
    status_code=status.HTTP_201_CREATED,
    response_model=TodoOut,
)
def create_todo(
    payload: TodoCreate,
    svc: TodoService = Depends(get_todo_service),
    root: str = Depends(get_site_root_url),
):
    with http_errors():
        todo = svc.create(payload)
    logger.debug("Created todo {}", todo.id)
    return TodoOut.render(todo, root)


@router.delete(
    "",
    summary="Supprimer tous les todos",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_todos(svc: TodoService = Depends(get_todo_service)):
    with http_errors():
        svc.clear()
    logger.info("Deleted all todos")
    return None


@router.get(
    "/{todo_id}",
    summary="Récupérer un todo",
    response_model=TodoOut,
)
def get_todo(
    todo_id: int = Depends(todo_id_param),
    svc: TodoService = Depends(get_todo_service),
    root: str = Depends(get_site_root_url),
):
    with http_errors():
        return TodoOut.render(svc.get(todo_id), root)


@router.patch(
    "/{todo_id}",
    summary="Mettre à jour un todo",
    description="Seuls les champs présents dans le corps sont modifiés.",
    response_model=TodoOut,
)
@router.post(
    "/{todo_id}",
    summary="Mettre à jour un todo (alias POST)",
    response_model=TodoOut,
)
def update_todo(
    payload: TodoPatch,
    todo_id: int = Depends(todo_id_param),
    svc: TodoService = Depends(get_todo_service),
    root: str = Depends(get_site_root_url),
):
    with http_errors():
        todo = svc.update(todo_id, payload)
    return TodoOut.render(todo, root)


@router.delete(
    "/{todo_id}",
    summary="Supprimer un todo",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_todo(
    todo_id: int = Depends(todo_id_param),
    svc: TodoService = Depends(get_todo_service),
):
    with http_errors():
        svc.delete(todo_id)
    logger.info("Deleted todo {}", todo_id)
    return None
