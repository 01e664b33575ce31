from fastapi import FastAPI

from .auth import router as auth_router
from .widgets import router as widgets_router


def register_routes(app: FastAPI) -> None:
    """Registra todos los routers de la API en la aplicación FastAPI."""

    app.include_router(auth_router)
    app.include_router(widgets_router)
