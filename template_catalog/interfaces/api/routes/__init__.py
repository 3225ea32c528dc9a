from fastapi import FastAPI

from .catalog import router as catalog_router


def register_routes(app: FastAPI) -> None:
    """Registra todos los routers de la API en la aplicación FastAPI."""

    app.include_router(catalog_router)
