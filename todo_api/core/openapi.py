"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) complète le schéma généré par FastAPI avec les conventions de l'API.
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API Todo-Backend : FastAPI + SQLModel.\n\n"
            "### Conventions\n"
            "- `PATCH /todos/{id}` ne modifie que les champs présents ; `null` est refusé.\n"
            "- Chaque todo renvoie son lien absolu dans `url`.\n"
            "- Erreurs : 400 entrée invalide, 404 id inconnu, 500 erreur de stockage.\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
