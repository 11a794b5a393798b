# backend/database/connection.py
import logging
from pymongo import MongoClient
from pymongo.errors import PyMongoError

logger = logging.getLogger("database.connection")

# ============================================================
# 🔌 CONEXIÓN A MONGODB
# ============================================================
def connect_mongo(uri: str) -> MongoClient:
    """Crea el cliente y verifica la conexión con un ping."""
    client = MongoClient(uri)
    try:
        client.admin.command("ping")
    except PyMongoError as e:
        logger.error(f"❌ Error conectando a MongoDB: {e}")
        client.close()
        raise
    logger.info("🚀 Conexión a MongoDB establecida")
    return client


def get_users_collection(client: MongoClient, db_name: str, collection_name: str):
    return client[db_name][collection_name]


# ============================================================
# 🔒 CIERRE DE CONEXIÓN
# ============================================================
def close_mongo(client: MongoClient) -> None:
    client.close()
    logger.info("🔒 Conexión a MongoDB cerrada")
