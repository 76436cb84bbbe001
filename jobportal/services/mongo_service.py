"""
MongoDB Service - CRUD operations for document collections.

Collections:
1. raw_resumes   - Text extracted from uploaded resumes
2. conversations - One-to-one and group chat threads
3. messages      - Chat messages (one document per message)

Binary files live in storage_objects, see storage_service.
"""

from datetime import datetime
from typing import Optional, List, Dict

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING
from pymongo.collection import Collection

from jobportal.db.mongodb import get_collection, COLLECTIONS


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse an id from a URL, None when it isn't a valid ObjectId."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


# ============================================================
# RAW RESUMES COLLECTION
# ============================================================

class RawResumeService:
    """
    Text extracted from candidate resume uploads.
    The newest document per candidate is the current resume.
    """

    def __init__(self, collection: Collection = None):
        self.collection: Collection = collection if collection is not None else get_collection(COLLECTIONS["raw_resumes"])

    def insert(self, candidate_id: int, resume_text: str, filename: str = None,
               file_url: str = None, extracted_skills: List[str] = None) -> str:
        """
        Insert a raw resume document.

        Returns:
            MongoDB ObjectId as string
        """
        doc = {
            "candidate_id": candidate_id,
            "resume_text": resume_text,
            "filename": filename,
            "file_url": file_url,
            "extracted_skills": extracted_skills or [],
            "uploaded_at": datetime.utcnow()
        }
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def get_by_candidate(self, candidate_id: int) -> Optional[dict]:
        """Fetch latest raw resume for a candidate."""
        doc = self.collection.find_one(
            {"candidate_id": candidate_id},
            sort=[("uploaded_at", DESCENDING)]  # Most recent first
        )
        return serialize_doc(doc)


# ============================================================
# CONVERSATIONS & MESSAGES
# ============================================================

class ConversationService:
    """
    Chat threads between users. Participants are user ids; unread counts
    are tracked per participant under "unread.<user_id>".
    """

    def __init__(self, conversations: Collection = None, messages: Collection = None):
        self.conversations: Collection = conversations if conversations is not None else get_collection(COLLECTIONS["conversations"])
        self.messages: Collection = messages if messages is not None else get_collection(COLLECTIONS["messages"])

    def create(self, conversation_type: str, participants: List[int],
               participant_names: Dict[int, str] = None, group_id: int = None,
               group_name: str = None) -> dict:
        """Create a conversation, reusing an existing one-to-one thread."""
        participants = sorted(set(participants))

        if conversation_type == "one-to-one":
            existing = self.conversations.find_one({
                "type": "one-to-one",
                "participants": {"$all": participants, "$size": len(participants)}
            })
            if existing:
                return serialize_doc(existing)

        doc = {
            "type": conversation_type,
            "participants": participants,
            "participant_names": {str(k): v for k, v in (participant_names or {}).items()},
            "group_id": group_id,
            "group_name": group_name,
            "last_message": None,
            "last_message_time": None,
            "unread": {str(p): 0 for p in participants},
            "created_at": datetime.utcnow()
        }
        result = self.conversations.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_doc(doc)

    def get(self, conversation_id: str) -> Optional[dict]:
        oid = to_object_id(conversation_id)
        if oid is None:
            return None
        return serialize_doc(self.conversations.find_one({"_id": oid}))

    def list_for_user(self, user_id: int) -> List[dict]:
        """Conversations the user takes part in, most recent activity first."""
        docs = self.conversations.find({"participants": user_id})
        docs = sorted(
            docs,
            key=lambda d: d.get("last_message_time") or d.get("created_at") or datetime.min,
            reverse=True
        )
        return serialize_docs(docs)

    def add_message(self, conversation: dict, sender_id: int, sender_name: str, text: str) -> dict:
        """Store a message and update the thread summary/unread counters."""
        now = datetime.utcnow()
        message = {
            "conversation_id": conversation["_id"],
            "sender_id": sender_id,
            "sender_name": sender_name,
            "text": text,
            "timestamp": now
        }
        result = self.messages.insert_one(message)
        message["_id"] = result.inserted_id

        increments = {
            f"unread.{p}": 1 for p in conversation["participants"] if p != sender_id
        }
        update = {"$set": {"last_message": text, "last_message_time": now}}
        if increments:
            update["$inc"] = increments
        self.conversations.update_one({"_id": ObjectId(conversation["_id"])}, update)

        return serialize_doc(message)

    def get_messages(self, conversation_id: str, limit: int = 100) -> List[dict]:
        """Oldest-first messages (the last `limit` of them)."""
        docs = list(
            self.messages.find({"conversation_id": conversation_id})
            .sort([("timestamp", DESCENDING), ("_id", DESCENDING)])
            .limit(limit)
        )
        docs.reverse()
        return serialize_docs(docs)

    def mark_read(self, conversation_id: str, user_id: int) -> None:
        oid = to_object_id(conversation_id)
        if oid is not None:
            self.conversations.update_one({"_id": oid}, {"$set": {f"unread.{user_id}": 0}})
