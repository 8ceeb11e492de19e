# ezgest/config/database.py
from typing import Iterator

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError
from loguru import logger

from .setting import settings


class DatabaseConnection:
    """
    MongoDB connection manager.

    One client (and therefore one connection pool) per process. It is
    connected by the application lifespan and closed on shutdown; request
    handlers borrow the database handle through ``get_db``.
    """

    def __init__(self):
        self._client = None
        self._db = None

    def connect(self) -> bool:
        """Establish database connection"""
        try:
            client = MongoClient(
                settings.MONGODB_URI,
                serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
                connectTimeoutMS=settings.MONGODB_TIMEOUT_MS,
                maxPoolSize=settings.MONGODB_MAX_POOL_SIZE,
                minPoolSize=settings.MONGODB_MIN_POOL_SIZE
            )

            client.admin.command('ping')
            self.bind(client)

            logger.info(f"Connected to MongoDB: {settings.DATABASE_NAME}")
            return True

        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            return False

    def bind(self, client) -> None:
        """Attach an already constructed client and prepare the indexes"""
        self._client = client
        self._db = client[settings.DATABASE_NAME]
        self.ensure_indexes()

    def ensure_indexes(self) -> None:
        """Indexes the auth core relies on"""
        self._db.users.create_index([("email", ASCENDING)], unique=True)
        self._db.users.create_index([("companies", ASCENDING)])
        self._db.companies.create_index([("inviteCode", ASCENDING)])
        for collection in ("categories", "products", "sales"):
            self._db[collection].create_index([("companyId", ASCENDING)])

    def disconnect(self):
        """Close database connection"""
        if self._client is not None:
            self._client.close()
            self._client = None
            self._db = None
            logger.info("Disconnected from MongoDB")

    def get_database(self) -> Database:
        """Get database instance"""
        if self._db is None:
            if not self.connect():
                raise ConnectionFailure("MongoDB is not reachable")
        return self._db

    def health_check(self) -> bool:
        """Check database health"""
        try:
            if self._client is None:
                return False
            self._client.admin.command('ping')
            return True
        except Exception:
            return False


# Global connection
db_connection = DatabaseConnection()


def get_database() -> Database:
    """Get the shared database instance"""
    return db_connection.get_database()


def get_db() -> Iterator[Database]:
    """
    Request-scoped dependency.

    The pooled client hands out a socket per operation and returns it when
    the operation completes, so nothing needs to be released here.
    """
    yield db_connection.get_database()
