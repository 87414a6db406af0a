"""
Punto de entrada principal de la aplicación FastAPI.
Configura la aplicación, middlewares, rutas, dashboard estático y ciclo de vida.
"""
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from app.core.config import Settings, settings, get_cors_origins
from app.core.events import build_lifespan
from app.api.v1.router import api_router
from app.api.middlewares.error_handler import ErrorHandlerMiddleware
from app.shared.exceptions.base import AppException


def create_application(config: Settings = settings) -> FastAPI:
    """
    Factory para crear y configurar la aplicación FastAPI.

    Args:
        config: Configuracion a usar (por defecto la global)

    Returns:
        FastAPI: Instancia configurada de la aplicación
    """
    application = FastAPI(
        title=config.APP_NAME,
        version=config.APP_VERSION,
        description="Espejo de recursos on-chain de una cuenta Aptos",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=build_lifespan(config),
    )
    application.state.settings = config

    # Configurar CORS
    cors_origins = get_cors_origins(config.CORS_ORIGINS)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Middleware personalizado para manejo de errores
    application.add_middleware(ErrorHandlerMiddleware)

    # Incluir routers de la API
    application.include_router(api_router, prefix="/api")

    # Manejador global de excepciones personalizadas
    @application.exception_handler(AppException)
    async def app_exception_handler(request, exc: AppException):
        return JSONResponse(status_code=exc.status_code, content=exc.to_content())

    # Health check endpoint
    @application.get("/health", tags=["Health"])
    async def health_check():
        """Endpoint para verificar el estado de la aplicación."""
        return {
            "status": "healthy",
            "app_name": config.APP_NAME,
            "version": config.APP_VERSION,
            "environment": config.ENVIRONMENT,
            "account": config.APTOS_ACCOUNT,
        }

    # Dashboard estático
    static_dir = Path(config.STATIC_DIR)
    application.mount("/static", StaticFiles(directory=static_dir, check_dir=False), name="static")

    @application.get("/", include_in_schema=False)
    async def dashboard():
        return FileResponse(static_dir / "dashboard.html")

    return application


# Crear instancia de la aplicación
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
