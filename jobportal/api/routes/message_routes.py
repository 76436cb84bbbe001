"""
Messaging Routes (MongoDB)

POST /conversations                       - Start a one-to-one or group conversation
GET  /conversations                       - My conversations, latest activity first
GET  /conversations/{id}/messages         - Messages, oldest first
POST /conversations/{id}/messages         - Send a message
POST /conversations/{id}/read             - Reset my unread counter
"""

from fastapi import APIRouter, HTTPException, Depends, Query
from typing import List

from jobportal.db.database import execute_raw_sql, fetch_one
from jobportal.core.auth import get_current_user
from jobportal.services.mongo_service import ConversationService
from jobportal.schemas.schemas import (
    ConversationCreate, ConversationResponse, ChatMessageCreate, ChatMessageResponse, MessageResponse
)

router = APIRouter(prefix="/conversations", tags=["Messaging"])


def _to_response(doc: dict, user_id: int) -> ConversationResponse:
    return ConversationResponse(
        conversation_id=doc["_id"],
        type=doc["type"],
        participants=doc["participants"],
        participant_names=doc.get("participant_names") or {},
        group_id=doc.get("group_id"),
        group_name=doc.get("group_name"),
        last_message=doc.get("last_message"),
        last_message_time=doc.get("last_message_time"),
        unread_count=(doc.get("unread") or {}).get(str(user_id), 0)
    )


def _get_participating(service: ConversationService, conversation_id: str, user_id: int) -> dict:
    conversation = service.get(conversation_id)
    if not conversation:
        raise HTTPException(status_code=404, detail="Conversation not found")
    if user_id not in conversation["participants"]:
        raise HTTPException(status_code=403, detail="You are not part of this conversation")
    return conversation


@router.post("", response_model=ConversationResponse, status_code=201)
async def create_conversation(body: ConversationCreate, user: dict = Depends(get_current_user)):
    """
    One-to-one threads are reused if they already exist. Group threads
    must reference an existing campus group, and every participant must be
    an approved member of it.
    """
    participants = sorted(set(body.participant_ids) | {user["user_id"]})

    if body.type.value == "one-to-one" and len(participants) != 2:
        raise HTTPException(status_code=400, detail="A one-to-one conversation needs exactly one other user")

    placeholders = ", ".join(f":p{i}" for i in range(len(participants)))
    rows = execute_raw_sql(
        f"""
        SELECT u.user_id, p.full_name FROM users u LEFT JOIN profiles p ON p.user_id = u.user_id
        WHERE u.user_id IN ({placeholders}) AND u.is_active = :active
        """,
        {**{f"p{i}": pid for i, pid in enumerate(participants)}, "active": True}
    )
    names = {r["user_id"]: r["full_name"] for r in rows}
    missing = [pid for pid in participants if pid not in names]
    if missing:
        raise HTTPException(status_code=404, detail=f"Unknown users: {missing}")

    group_name = None
    if body.type.value == "group":
        if body.group_id is None:
            raise HTTPException(status_code=400, detail="group_id is required for group conversations")
        group = fetch_one("SELECT name FROM student_groups WHERE group_id = :gid", {"gid": body.group_id})
        if not group:
            raise HTTPException(status_code=404, detail="Group not found")
        group_name = group["name"]

        members = {
            r["user_id"] for r in execute_raw_sql(
                "SELECT user_id FROM group_members WHERE group_id = :gid AND status = 'approved'",
                {"gid": body.group_id}
            )
        }
        outsiders = [pid for pid in participants if pid not in members]
        if outsiders:
            raise HTTPException(status_code=403, detail=f"Not approved members of the group: {outsiders}")

    doc = ConversationService().create(
        body.type.value, participants, participant_names=names,
        group_id=body.group_id if body.type.value == "group" else None, group_name=group_name
    )
    return _to_response(doc, user["user_id"])


@router.get("", response_model=List[ConversationResponse])
async def list_conversations(user: dict = Depends(get_current_user)):
    return [_to_response(d, user["user_id"]) for d in ConversationService().list_for_user(user["user_id"])]


@router.get("/{conversation_id}/messages", response_model=List[ChatMessageResponse])
async def get_messages(
    conversation_id: str,
    limit: int = Query(100, ge=1, le=500),
    user: dict = Depends(get_current_user)
):
    service = ConversationService()
    _get_participating(service, conversation_id, user["user_id"])
    return [
        ChatMessageResponse(message_id=m["_id"], **{k: v for k, v in m.items() if k != "_id"})
        for m in service.get_messages(conversation_id, limit)
    ]


@router.post("/{conversation_id}/messages", response_model=ChatMessageResponse, status_code=201)
async def send_message(conversation_id: str, body: ChatMessageCreate, user: dict = Depends(get_current_user)):
    service = ConversationService()
    conversation = _get_participating(service, conversation_id, user["user_id"])

    message = service.add_message(conversation, user["user_id"], user["full_name"], body.text)
    return ChatMessageResponse(message_id=message["_id"], **{k: v for k, v in message.items() if k != "_id"})


@router.post("/{conversation_id}/read", response_model=MessageResponse)
async def mark_read(conversation_id: str, user: dict = Depends(get_current_user)):
    service = ConversationService()
    _get_participating(service, conversation_id, user["user_id"])
    service.mark_read(conversation_id, user["user_id"])
    return MessageResponse(message="Conversation marked as read")
