"""
MongoDB Connection Utility

MongoDB stores:
- Raw resume text extracted from uploads
- Conversations and their messages
- Stored files for the resumes / avatars / bgv buckets
"""
from pymongo import MongoClient, ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.collection import Collection
from loguru import logger

from jobportal.core.config import get_settings

settings = get_settings()

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def set_mongo_client(client: MongoClient) -> None:
    """Swap the process-wide client (used by scripts and tests)."""
    global _client, _db
    _client = client
    _db = None


def get_mongo_db() -> Database:
    """Get the jobportal_docs database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection (see COLLECTIONS)."""
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.error(f"MongoDB connection failed: {e}")
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "raw_resumes": "raw_resumes",
    "conversations": "conversations",
    "messages": "messages",
    "storage_objects": "storage_objects"
}


def init_mongo_indexes():
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    db[COLLECTIONS["raw_resumes"]].create_index("candidate_id")

    db[COLLECTIONS["conversations"]].create_index("participants")
    db[COLLECTIONS["messages"]].create_index([
        ("conversation_id", ASCENDING),
        ("timestamp", DESCENDING)
    ])

    # One object per bucket/path (uploads are upserts)
    db[COLLECTIONS["storage_objects"]].create_index([
        ("bucket", ASCENDING),
        ("path", ASCENDING)
    ], unique=True)

    logger.info("MongoDB indexes created successfully")
