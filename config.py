# backend/config.py
import os
import logging
from dotenv import load_dotenv
from pathlib import Path

logger = logging.getLogger("config")

BASE_DIR = Path(__file__).resolve().parent

# ============================================================
# 🌍 DETECTAR ENTORNO Y CARGAR .env CORRESPONDIENTE
# ============================================================
def get_env() -> str:
    return os.getenv("APP_ENV") or "local"


def load_env() -> str:
    """Carga `.env.<APP_ENV>`; si no existe se usan las variables del sistema."""
    env = get_env()
    env_file = BASE_DIR / f".env.{env}"
    if not env_file.exists():
        logger.warning(f"⚠️ No se encontró {env_file.name}, usando variables de entorno del sistema")
    else:
        load_dotenv(env_file)
    return env


# ============================================================
# ⚙️ CONFIGURACIÓN GENERAL
# ============================================================
class Settings:
    def __init__(self):
        self.ENV: str = get_env()
        self.PROJECT_NAME: str = os.getenv("PROJECT_NAME", "ManageMe")
        self.VERSION: str = os.getenv("VERSION", "1.0")

        # 🔹 Servidor
        self.SERVER_HOST: str = os.getenv("SERVER_HOST", "0.0.0.0")
        self.SERVER_PORT: int = int(os.getenv("SERVER_PORT", "8080"))

        # 🔹 Almacenamiento de usuarios: "memory" o "mongo"
        self.STORE_BACKEND: str = os.getenv("STORE_BACKEND", "memory").strip().lower()

        # 🔹 Mongo
        self.MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
        self.MONGO_DB: str = os.getenv("MONGO_DB", "manage-me")
        self.MONGO_USERS_COLLECTION: str = os.getenv("MONGO_USERS_COLLECTION", "users")

        # 🔹 Otros
        self.ALLOWED_ORIGINS: list = os.getenv("ALLOWED_ORIGINS", "*").split(",")
        self.DEBUG: bool = self.ENV in ("local", "development")


load_env()
settings = Settings()
