# backend/routes/user_routes.py
from fastapi import APIRouter, Depends, Request
import logging

from models.errors import StorageError
from models.user import User, validate_user
from repositories.user_repository import UserStore

logger = logging.getLogger("routes.users")

router = APIRouter()
legacy_router = APIRouter()


def get_user_store(request: Request) -> UserStore:
    store = getattr(request.app.state, "user_store", None)
    if store is None:
        raise StorageError("El almacenamiento de usuarios no está inicializado")
    return store


# ------------------------------------------------------------
# 🔹 Ping
# ------------------------------------------------------------
@router.get("/ping", summary="Verificar que el servicio responde")
def ping():
    return {"message": "pong"}


# ------------------------------------------------------------
# 🔹 Registrar usuario
# ------------------------------------------------------------
@router.post("/register", status_code=201, summary="Registrar nuevo usuario")
def register_user(user: User, store: UserStore = Depends(get_user_store)):
    logger.info(f"🧩 Intentando registrar usuario: {user.email}")
    validate_user(user)
    stored = store.insert(user)
    return {"message": "User created successfully", "user": stored.model_dump()}


# ------------------------------------------------------------
# 🔹 Listar usuarios
# ------------------------------------------------------------
@router.get("/all", summary="Obtener lista de usuarios")
def list_users(store: UserStore = Depends(get_user_store)):
    users = store.list()
    if not users:
        logger.warning("⚠️ No se encontraron usuarios registrados.")
    return {
        "message": "Users retrieved successfully",
        "users": [user.model_dump() for user in users],
    }


# ------------------------------------------------------------
# 🔹 Registro sin versión (formato de respuesta original)
# ------------------------------------------------------------
@legacy_router.post("/register", summary="Registrar usuario (ruta sin versión)")
def register_user_legacy(user: User, store: UserStore = Depends(get_user_store)):
    validate_user(user)
    stored = store.insert(user)
    return {"message": "User registered successfully", "data": stored.model_dump()}
