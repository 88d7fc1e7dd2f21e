"""
➡️ But : Définir la table `todos` (ORM).

Un Todo sans id est un brouillon (jamais persisté) : il ne peut qu'être inséré.
Un Todo avec id est persisté : la seule écriture possible est l'update par id.

Les champs portent toujours une valeur concrète ("" / 0 / False), jamais None,
pour servir tels quels dans les requêtes et la sérialisation.
"""

from typing import Optional

from sqlalchemy import false, text
from sqlmodel import Field, SQLModel

# Entiers signés 32 bits (SERIAL / INTEGER côté Postgres)
INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


class Todo(SQLModel, table=True):
    __tablename__ = "todos"
    # AUTOINCREMENT : un id supprimé n'est jamais réattribué
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str = Field(default="", nullable=False)
    order: int = Field(default=0, nullable=False, sa_column_kwargs={"server_default": text("0")})
    completed: bool = Field(default=False, nullable=False, sa_column_kwargs={"server_default": false()})

    @property
    def is_draft(self) -> bool:
        return self.id is None
