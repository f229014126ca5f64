"""
Chat and presence routes.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from lokality import chats
from lokality.auth import Identity, get_identity
from lokality.db import DbClient
from lokality.dependencies import get_db_client, get_presence_client
from lokality.presence import PresenceClient
from lokality.schemas import (
    ChatListResponse,
    PresenceResponse,
    PresenceUpdateRequest,
    SendMessageRequest,
    StartChatRequest,
    document,
)

router = APIRouter()


@router.post("/chats")
def start_chat(
    payload: StartChatRequest,
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    """Opens the conversation with another user, creating it if needed."""
    chat = chats.start_chat(
        db,
        identity.uid,
        payload.target_id,
        payload.target_name,
        payload.target_avatar,
    )
    return document(chat)


@router.get("/chats", response_model=ChatListResponse)
def list_chats(
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    conversations = chats.list_conversations(db, identity.uid)
    return ChatListResponse(chats=[document(chat) for chat in conversations])


@router.get("/chats/{chat_id}")
def get_chat(
    chat_id: str,
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    return document(chats.get_conversation(db, chat_id, identity.uid))


@router.post("/chats/{chat_id}/messages", status_code=201)
def send_message(
    chat_id: str,
    payload: SendMessageRequest,
    identity: Identity = Depends(get_identity),
    db: DbClient = Depends(get_db_client),
):
    return document(chats.send_message(db, chat_id, identity.uid, payload.text))


@router.get("/presence/{user_id}", response_model=PresenceResponse)
def get_presence(
    user_id: str, presence: PresenceClient = Depends(get_presence_client)
):
    return PresenceResponse(user_id=user_id, status=presence.get_status(user_id))


@router.put("/presence", response_model=PresenceResponse)
def set_presence(
    payload: PresenceUpdateRequest,
    identity: Identity = Depends(get_identity),
    presence: PresenceClient = Depends(get_presence_client),
):
    presence.set_status(identity.uid, payload.status)
    return PresenceResponse(user_id=identity.uid, status=payload.status)
