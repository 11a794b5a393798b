# backend/main.py
from contextlib import asynccontextmanager
from typing import Optional
import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings, settings as default_settings
from models.errors import StorageError, UserValidationError
from repositories.user_repository import UserStore, build_user_store
from routes.user_routes import router as user_router, legacy_router

# =====================================================
# * Configuración de Logging global
# =====================================================
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s"
)
logger = logging.getLogger("main")


# =====================================================
# * Ciclo de vida: crear y liberar el almacenamiento
# =====================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    app_settings: Settings = app.state.settings
    built_here = getattr(app.state, "user_store", None) is None
    if built_here:
        app.state.user_store = build_user_store(app_settings)
    logger.info(f"🚀 {app_settings.ENV.upper()} servidor listo ({app_settings.STORE_BACKEND})")
    try:
        yield
    finally:
        app.state.user_store.close()
        # un almacenamiento inyectado se conserva entre arranques
        if built_here:
            app.state.user_store = None
        logger.info("🛑 Servidor detenido, almacenamiento liberado.")


# =====================================================
# * Manejo de errores
# =====================================================
async def user_validation_error_handler(request: Request, exc: UserValidationError):
    logger.warning(f"⚠️ Registro rechazado: {exc.message}")
    return JSONResponse(status_code=400, content={"error": exc.message})


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    # sin "input": podría contener la contraseña
    errors = [(error["loc"], error["msg"]) for error in exc.errors()]
    logger.warning(f"⚠️ Cuerpo de petición inválido en {request.url.path}: {errors}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


async def storage_error_handler(request: Request, exc: StorageError):
    cause = exc.__cause__ or exc
    logger.error(f"❌ Internal Server Error: {exc} ({cause!r})")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error. Please try again later."},
    )


# =====================================================
# * Inicialización de la aplicación
# =====================================================
def create_app(settings: Optional[Settings] = None, user_store: Optional[UserStore] = None) -> FastAPI:
    app_settings = settings or default_settings

    app = FastAPI(
        title=f"{app_settings.PROJECT_NAME} API",
        version=app_settings.VERSION,
        debug=app_settings.DEBUG,
        docs_url="/swagger",
        redoc_url=None,
        openapi_url="/swagger/doc.json",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.user_store = user_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def server_header(request: Request, call_next):
        response = await call_next(request)
        response.headers["Server"] = app_settings.PROJECT_NAME
        return response

    app.add_exception_handler(UserValidationError, user_validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)

    app.include_router(user_router, prefix="/api/v1", tags=["Users"])
    app.include_router(legacy_router, tags=["Users"])

    @app.get("/", summary="Ruta raíz del backend")
    def root():
        return {
            "message": f"🚀 {app_settings.PROJECT_NAME} Backend activo",
            "version": app_settings.VERSION,
            "env": app_settings.ENV,
        }

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=default_settings.SERVER_HOST, port=default_settings.SERVER_PORT,
                server_header=False)
