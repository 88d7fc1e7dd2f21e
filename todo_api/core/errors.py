"""
➡️ But : Les trois sortes d'échec qu'une opération sur les todos peut produire.

NotFound      → l'identifiant n'existe pas (ou la mutation n'a touché aucune ligne)  → 404
BadInput      → identifiant ou corps de requête mal formé                          → 400
InternalFault → cardinalité inattendue, erreur du driver SQL, bootstrap raté        → 500

Le store lève ces exceptions, la couche HTTP décide du code de réponse.
"""


class TodoError(Exception):
    """Base de toutes les erreurs métier de l'API."""

    default_detail = "Todo error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFound(TodoError):
    default_detail = "Todo not found"


class BadInput(TodoError):
    default_detail = "Malformed input"


class InternalFault(TodoError):
    default_detail = "Internal storage error"
