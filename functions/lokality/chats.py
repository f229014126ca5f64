"""
Conversations between a seeker and a lister.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional

from lokality.db import DbClient
from lokality.exceptions import (
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from shared.constants import CHAT_STARTED_TEXT, MAX_CHAT_MESSAGE_LENGTH, PLACEHOLDER_AVATAR
from shared.types import ChatConversation, ChatMessage, LastMessage, Participant
from shared.utils import get_unique_id, utc_now

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def start_chat(
    db: DbClient,
    current_user_id: Optional[str],
    target_id: str,
    target_name: str,
    target_avatar: Optional[str] = None,
) -> ChatConversation:
    """
    Returns the conversation between the current user and the target,
    creating it when the two have not spoken before.
    """
    if not current_user_id:
        raise AuthenticationError("You need to be logged in to start a chat.")
    if current_user_id == target_id:
        raise ValidationError("You cannot start a chat with yourself.")

    for chat in db.list_chats_for_user(current_user_id):
        if target_id in chat.participant_ids:
            return chat

    current_user = db.get_user(current_user_id)
    if current_user is None:
        raise NotFoundError("Could not find your profile to start the chat.")

    chat = ChatConversation(
        id="",
        participant_ids=[current_user_id, target_id],
        participants={
            current_user_id: Participant(
                name=current_user.name,
                avatar=current_user.avatar or PLACEHOLDER_AVATAR,
            ),
            target_id: Participant(
                name=target_name, avatar=target_avatar or PLACEHOLDER_AVATAR
            ),
        },
        last_message=LastMessage(
            text=CHAT_STARTED_TEXT, sender_id=current_user_id, timestamp=utc_now()
        ),
        unread_count=0,
        messages=[],
    )
    # Concurrent starts for the same pair converge on one conversation.
    created = db.create_chat(chat)
    logger.info("Chat %s between %s and %s", created.id, current_user_id, target_id)
    return created


def _get_for_participant(db: DbClient, chat_id: str, user_id: str) -> ChatConversation:
    chat = db.get_chat(chat_id)
    if chat is None:
        raise NotFoundError("Chat not found.")
    if user_id not in chat.participant_ids:
        raise PermissionDeniedError("You are not a participant in this chat.")
    return chat


def send_message(db: DbClient, chat_id: str, sender_id: str, text: str) -> ChatMessage:
    chat = _get_for_participant(db, chat_id, sender_id)
    text = (text or "").strip()
    if not text:
        raise ValidationError("Message cannot be empty.")
    if len(text) > MAX_CHAT_MESSAGE_LENGTH:
        raise ValidationError(
            f"Message cannot exceed {MAX_CHAT_MESSAGE_LENGTH} characters."
        )
    message = ChatMessage(
        id=get_unique_id(), sender_id=sender_id, text=text, timestamp=utc_now()
    )
    db.append_chat_message(chat.id, message)
    return message


def list_conversations(db: DbClient, user_id: str) -> List[ChatConversation]:
    """Conversations for the chat list, most recent activity first."""
    chats = db.list_chats_for_user(user_id)
    return sorted(
        chats,
        key=lambda chat: chat.last_message.timestamp or _EPOCH,
        reverse=True,
    )


def get_conversation(db: DbClient, chat_id: str, user_id: str) -> ChatConversation:
    chat = _get_for_participant(db, chat_id, user_id)
    chat.messages = sorted(chat.messages, key=lambda m: m.timestamp or _EPOCH)
    return chat
