# todo_api/db/repositories/todos.py
from contextlib import contextmanager
from typing import Iterator, List

from sqlalchemy import delete, insert, update
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from todo_api.core.errors import InternalFault
from todo_api.db.models.todos import Todo
from todo_api.db.repositories.base import Affected, DataStore

todos_table = Todo.__table__


class TodoStore(DataStore[Todo, int, Session]):
    """Table `todos` : requêtes SQL paramétrées + traduction des cardinalités."""

    resource = "todo"

    # ---------- HELPERS ----------

    @contextmanager
    def _storage(self, conn: Session) -> Iterator[None]:
        """Toute erreur du driver annule la transaction et remonte en InternalFault."""
        try:
            yield
        except SQLAlchemyError as exc:
            conn.rollback()
            raise InternalFault(f"Storage failure ({exc.__class__.__name__})") from exc

    def _select_todo(self):
        return select(Todo.id, Todo.title, Todo.order, Todo.completed)

    def _hydrate(self, row) -> Todo:
        id_, title, order, completed = row
        return Todo(id=id_, title=title, order=order, completed=completed)

    def _execute_on_one(self, conn: Session, statement, id_: int, operation: str) -> None:
        # Commit seulement si exactement une ligne est touchée
        with self._storage(conn):
            result = conn.connection().execute(statement)
            outcome = Affected.of(result.rowcount)
            if outcome is Affected.ONE:
                conn.commit()
            else:
                conn.rollback()
        self._expect_one(outcome, id_, operation)

    # ---------- READ ----------

    def find_by_id(self, conn: Session, id_: int) -> Todo:
        with self._storage(conn):
            # Deux lignes suffisent pour détecter un doublon
            rows = conn.exec(self._select_todo().where(Todo.id == id_)).fetchmany(2)
        self._expect_one(Affected.of(len(rows)), id_, "find_by_id")
        return self._hydrate(rows[0])

    def all(self, conn: Session) -> List[Todo]:
        with self._storage(conn):
            rows = conn.exec(self._select_todo().order_by(Todo.id)).all()
        return [self._hydrate(row) for row in rows]

    # ---------- WRITE ----------

    def save(self, entity: Todo, conn: Session) -> None:
        if entity.is_draft:
            self._insert(entity, conn)
        else:
            self._update(entity, conn)

    def _insert(self, todo: Todo, conn: Session) -> None:
        statement = insert(todos_table).values(
            title=todo.title, order=todo.order, completed=todo.completed
        )
        with self._storage(conn):
            result = conn.connection().execute(statement)
            # RETURNING id sur Postgres, lastrowid sur SQLite
            new_id = result.inserted_primary_key[0] if result.inserted_primary_key else None
            if Affected.of(result.rowcount) is not Affected.ONE or new_id is None:
                conn.rollback()
                raise InternalFault(f"Insert affected {result.rowcount} rows instead of one")
            conn.commit()
        todo.id = new_id

    def _update(self, todo: Todo, conn: Session) -> None:
        statement = (
            update(todos_table)
            .where(todos_table.c.id == todo.id)
            .values(title=todo.title, order=todo.order, completed=todo.completed)
        )
        self._execute_on_one(conn, statement, todo.id, "update")

    # ---------- DELETE ----------

    def delete_by_id(self, conn: Session, id_: int) -> None:
        statement = delete(todos_table).where(todos_table.c.id == id_)
        self._execute_on_one(conn, statement, id_, "delete")

    def delete_all(self, conn: Session) -> None:
        with self._storage(conn):
            conn.connection().execute(delete(todos_table))
            conn.commit()
