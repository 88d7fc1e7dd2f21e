from abc import ABC, abstractmethod
from enum import Enum
from typing import Generic, List, TypeVar

from loguru import logger

from todo_api.core.errors import InternalFault, NotFound

EntityT = TypeVar("EntityT")
IdT = TypeVar("IdT")
ConnT = TypeVar("ConnT")


class Affected(Enum):
    """Cardinalité d'une opération sur un identifiant unique."""

    NONE = "none"
    ONE = "one"
    MANY = "many"
    UNKNOWN = "unknown"  # rowcount -1 : le driver ne sait pas

    @classmethod
    def of(cls, count: int) -> "Affected":
        if count < 0:
            return cls.UNKNOWN
        if count == 0:
            return cls.NONE
        if count == 1:
            return cls.ONE
        return cls.MANY


class DataStore(ABC, Generic[EntityT, IdT, ConnT]):
    """
    Contrat de persistance d'une ressource.

    👉 Une implémentation concrète par type de ressource (ex : TodoStore).
    👉 La connexion est passée à chaque appel : le store ne garde aucun état.
    👉 Les échecs sont levés (NotFound / InternalFault), jamais loggés ni réessayés,
       sauf la violation d'unicité d'un id qui est aussi signalée dans les logs.
    """

    resource: str = "resource"

    @abstractmethod
    def find_by_id(self, conn: ConnT, id_: IdT) -> EntityT:
        """Retourne l'unique entité portant cet id."""

    @abstractmethod
    def all(self, conn: ConnT) -> List[EntityT]:
        """Retourne toutes les entités (liste vide possible)."""

    @abstractmethod
    def save(self, entity: EntityT, conn: ConnT) -> None:
        """
        Insert si l'entité n'a pas d'id (l'id généré lui est assigné en place),
        update par id sinon.
        """

    @abstractmethod
    def delete_by_id(self, conn: ConnT, id_: IdT) -> None:
        """Supprime l'unique entité portant cet id."""

    @abstractmethod
    def delete_all(self, conn: ConnT) -> None:
        """Vide la collection."""

    # ---------- HELPERS ----------

    def _expect_one(self, outcome: Affected, id_: IdT, operation: str) -> None:
        """Traduit la cardinalité d'une opération en succès / NotFound / InternalFault."""
        if outcome is Affected.ONE:
            return
        if outcome is Affected.NONE:
            raise NotFound(f"{self.resource.capitalize()} {id_} not found")
        if outcome is Affected.UNKNOWN:
            raise InternalFault(f"{operation} on {self.resource} {id_} reported no row count")
        logger.error("{} on {} {} matched more than one row", operation, self.resource, id_)
        raise InternalFault(f"{operation} matched more than one {self.resource} for id {id_}")
