import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.interfaces.api.routes import register_routes
from app.infrastructure.database import initialize_database, engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Inicializa la base de datos al arrancar y libera los recursos al cerrar."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Crea y configura la aplicación principal de FastAPI."""

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(lifespan=lifespan)

    # El widget se embebe en sitios de clientes; los orígenes vienen de la configuración.
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_routes(app)
    return app


app = create_app()
