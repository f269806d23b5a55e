import logging

from pymongo import MongoClient

from techmarket.config import mongodb_config

logger = logging.getLogger(__name__)


class NotConnectedError(RuntimeError):
    pass


class MongoDBConnection:
    def __init__(self, uri=None, db_name=None):
        config = mongodb_config()
        self.uri = uri or config["uri"]
        self.db_name = db_name or config["db_name"]
        # UUIDs gravados como subtipo binário 4 (padrão RFC 4122)
        self.client = MongoClient(self.uri, uuidRepresentation="standard")
        self.db = None

    def connect(self):
        if self.db is None:
            # Força a conexão agora em vez de esperar a primeira operação
            self.client.admin.command("ping")
            self.db = self.client[self.db_name]
            logger.info("Connected to MongoDB")
        return self.db

    def close(self):
        self.client.close()
        self.db = None
        logger.info("Disconnected from MongoDB")

    def get_db(self):
        if self.db is None:
            raise NotConnectedError("MongoDB not connected. Call connect() first.")
        return self.db
