# backend/repositories/user_repository.py
from abc import ABC, abstractmethod
from threading import Lock
from typing import List, Optional
import logging

from bson import ObjectId
from pydantic import ValidationError
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from config import Settings
from database.connection import connect_mongo, close_mongo, get_users_collection
from models.errors import StorageError
from models.user import User, StoredUser

logger = logging.getLogger("repositories.users")

# ============================================================
# 🧩 Interfaz común de almacenamiento
# ============================================================
class UserStore(ABC):
    @abstractmethod
    def insert(self, user: User) -> StoredUser:
        ...

    @abstractmethod
    def list(self) -> List[StoredUser]:
        ...

    def close(self) -> None:
        """Libera los recursos del backend al apagar el servidor."""


# ============================================================
# 🧠 Almacenamiento en memoria
# ============================================================
class InMemoryUserStore(UserStore):
    """Secuencia ordenada en proceso; solo permite agregar."""

    def __init__(self):
        self._users: List[StoredUser] = []
        self._lock = Lock()

    def insert(self, user: User) -> StoredUser:
        # id y append en la misma sección crítica
        with self._lock:
            stored = StoredUser(id=len(self._users) + 1, **user.model_dump())
            self._users.append(stored)
        logger.info(f"✅ Usuario creado en memoria con ID {stored.id}")
        return stored

    def list(self) -> List[StoredUser]:
        with self._lock:
            return list(self._users)


# ============================================================
# 🍃 Almacenamiento en MongoDB
# ============================================================
def deserialize_user(doc: dict) -> StoredUser:
    """Convierte un documento Mongo en StoredUser (ObjectId -> str)."""
    data = dict(doc)
    raw_id = data.pop("_id", None)
    if not isinstance(raw_id, ObjectId):
        raise StorageError(f"Documento con _id inválido: {raw_id!r}")
    try:
        # el _id de Mongo prevalece sobre cualquier campo "id" guardado
        return StoredUser.model_validate({**data, "id": str(raw_id)})
    except (ValidationError, TypeError) as e:
        raise StorageError(f"No se pudo decodificar el usuario {raw_id}") from e


class MongoUserStore(UserStore):
    def __init__(self, collection, client: Optional[MongoClient] = None):
        self.collection = collection
        self.client = client

    def insert(self, user: User) -> StoredUser:
        user_doc = user.model_dump()
        try:
            result = self.collection.insert_one(user_doc)
        except PyMongoError as e:
            raise StorageError("Error insertando usuario en MongoDB") from e
        stored = StoredUser(id=str(result.inserted_id), **user.model_dump())
        logger.info(f"✅ Usuario creado con ID {stored.id}")
        return stored

    def list(self) -> List[StoredUser]:
        users: List[StoredUser] = []
        try:
            cursor = self.collection.find({})
            try:
                for doc in cursor:
                    users.append(deserialize_user(doc))
            finally:
                cursor.close()
        except PyMongoError as e:
            raise StorageError("Error leyendo usuarios desde MongoDB") from e
        return users

    def close(self) -> None:
        if self.client is not None:
            close_mongo(self.client)


# ============================================================
# 🏭 Selección de backend al arrancar
# ============================================================
def build_user_store(settings: Settings, client: Optional[MongoClient] = None) -> UserStore:
    backend = settings.STORE_BACKEND
    if backend == "memory":
        logger.info("🧠 Usando almacenamiento de usuarios en memoria")
        return InMemoryUserStore()
    if backend == "mongo":
        if client is None:
            client = connect_mongo(settings.MONGODB_URI)
        collection = get_users_collection(
            client, settings.MONGO_DB, settings.MONGO_USERS_COLLECTION
        )
        logger.info(
            f"🍃 Usando MongoDB: {settings.MONGO_DB}.{settings.MONGO_USERS_COLLECTION}"
        )
        return MongoUserStore(collection, client=client)
    raise ValueError(f"STORE_BACKEND desconocido: {backend!r}")
