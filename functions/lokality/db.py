"""
Database abstraction: an in-memory implementation for development and
tests, a SQLAlchemy implementation (Postgres in production, SQLite in
tests) and a Firestore implementation for the hosted document store.

Records cross this boundary as the dataclasses in `shared.types`; each
backend stores them as camelCase documents.
"""

from __future__ import annotations

import copy
import logging
import threading
from typing import Dict, Iterable, List, Optional, Protocol

from sqlalchemy import (
    JSON,
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    create_engine,
    select,
)
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from shared import constants
from shared.json_utils import from_document, to_document
from shared.types import (
    ChatConversation,
    ChatMessage,
    IroningOrder,
    IroningPriceItem,
    IroningProfile,
    LastMessage,
    Property,
    PropertyStatus,
    UserProfile,
)
from shared.utils import get_unique_id

logger = logging.getLogger(__name__)


def pair_key(participant_ids: Iterable[str]) -> str:
    """Order-independent key identifying the conversation between two users."""
    return "|".join(sorted(participant_ids))


def merge_ironing_profile(
    existing: Optional[IroningProfile], update: IroningProfile
) -> IroningProfile:
    """Set-with-merge: fields present on `update` overwrite `existing`."""
    merged = copy.deepcopy(existing) if existing else IroningProfile()
    for field_name in ("name", "email", "phone", "address"):
        value = getattr(update, field_name)
        if value is not None:
            setattr(merged, field_name, copy.deepcopy(value))
    return merged


def _newest_first(properties: List[Property]) -> List[Property]:
    return sorted(properties, key=lambda p: p.posted_on, reverse=True)


class DbClient(Protocol):
    """Interface for document storage."""

    # Properties
    def create_property(self, property: Property) -> Property:
        ...

    def get_property(self, property_id: str) -> Optional[Property]:
        ...

    def get_properties(self, property_ids: List[str]) -> List[Property]:
        ...

    def list_properties(
        self, status: Optional[PropertyStatus] = None
    ) -> List[Property]:
        ...

    def save_property(self, property: Property) -> None:
        ...

    def delete_property(self, property_id: str) -> bool:
        ...

    # Users
    def get_user(self, user_id: str) -> Optional[UserProfile]:
        ...

    def save_user(self, profile: UserProfile) -> None:
        ...

    def find_user_by_email(self, email: str) -> Optional[UserProfile]:
        ...

    # Chats
    def list_chats_for_user(self, user_id: str) -> List[ChatConversation]:
        ...

    def get_chat(self, chat_id: str) -> Optional[ChatConversation]:
        ...

    def create_chat(self, chat: ChatConversation) -> ChatConversation:
        ...

    def append_chat_message(self, chat_id: str, message: ChatMessage) -> None:
        ...

    # Ironing
    def get_price_list(self) -> Optional[List[IroningPriceItem]]:
        ...

    def save_price_list(self, items: List[IroningPriceItem]) -> None:
        ...

    def place_ironing_order(
        self, order: IroningOrder, profile_update: IroningProfile
    ) -> IroningOrder:
        ...

    def get_ironing_order(self, order_id: str) -> Optional[IroningOrder]:
        ...

    def save_ironing_order(self, order: IroningOrder) -> None:
        ...

    def list_ironing_orders(
        self, user_id: Optional[str] = None
    ) -> List[IroningOrder]:
        ...

    def get_ironing_profile(self, user_id: str) -> Optional[IroningProfile]:
        ...


class InMemoryDbClient:
    """Simple in-memory database for development and tests."""

    def __init__(self):
        self.properties: Dict[str, Property] = {}
        self.users: Dict[str, UserProfile] = {}
        self.chats: Dict[str, ChatConversation] = {}
        self.ironing_orders: Dict[str, IroningOrder] = {}
        self.ironing_profiles: Dict[str, IroningProfile] = {}
        self.price_list: Optional[List[IroningPriceItem]] = None
        self.order_counter = 0
        self._lock = threading.Lock()

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.properties.clear()
        self.users.clear()
        self.chats.clear()
        self.ironing_orders.clear()
        self.ironing_profiles.clear()
        self.price_list = None
        self.order_counter = 0

    def create_property(self, property: Property) -> Property:
        if not property.id:
            property.id = get_unique_id()
        self.properties[property.id] = copy.deepcopy(property)
        return property

    def get_property(self, property_id: str) -> Optional[Property]:
        return copy.deepcopy(self.properties.get(property_id))

    def get_properties(self, property_ids: List[str]) -> List[Property]:
        return [
            copy.deepcopy(self.properties[property_id])
            for property_id in property_ids
            if property_id in self.properties
        ]

    def list_properties(
        self, status: Optional[PropertyStatus] = None
    ) -> List[Property]:
        items = [
            copy.deepcopy(p)
            for p in self.properties.values()
            if status is None or p.status == status
        ]
        return _newest_first(items)

    def save_property(self, property: Property) -> None:
        self.properties[property.id] = copy.deepcopy(property)

    def delete_property(self, property_id: str) -> bool:
        return self.properties.pop(property_id, None) is not None

    def get_user(self, user_id: str) -> Optional[UserProfile]:
        return copy.deepcopy(self.users.get(user_id))

    def save_user(self, profile: UserProfile) -> None:
        self.users[profile.id] = copy.deepcopy(profile)

    def find_user_by_email(self, email: str) -> Optional[UserProfile]:
        for profile in self.users.values():
            if profile.email == email:
                return copy.deepcopy(profile)
        return None

    def list_chats_for_user(self, user_id: str) -> List[ChatConversation]:
        return [
            copy.deepcopy(chat)
            for chat in self.chats.values()
            if user_id in chat.participant_ids
        ]

    def get_chat(self, chat_id: str) -> Optional[ChatConversation]:
        return copy.deepcopy(self.chats.get(chat_id))

    def create_chat(self, chat: ChatConversation) -> ChatConversation:
        key = pair_key(chat.participant_ids)
        with self._lock:
            for existing in self.chats.values():
                if pair_key(existing.participant_ids) == key:
                    return copy.deepcopy(existing)
            if not chat.id:
                chat.id = get_unique_id()
            self.chats[chat.id] = copy.deepcopy(chat)
        return chat

    def append_chat_message(self, chat_id: str, message: ChatMessage) -> None:
        chat = self.chats.get(chat_id)
        if not chat:
            return
        chat.messages.append(copy.deepcopy(message))
        chat.last_message = LastMessage(
            text=message.text,
            sender_id=message.sender_id,
            timestamp=message.timestamp,
        )

    def get_price_list(self) -> Optional[List[IroningPriceItem]]:
        return copy.deepcopy(self.price_list)

    def save_price_list(self, items: List[IroningPriceItem]) -> None:
        self.price_list = copy.deepcopy(items)

    def place_ironing_order(
        self, order: IroningOrder, profile_update: IroningProfile
    ) -> IroningOrder:
        with self._lock:
            self.order_counter += 1
            order.order_id = self.order_counter
            if not order.id:
                order.id = get_unique_id()
            self.ironing_orders[order.id] = copy.deepcopy(order)
            self.ironing_profiles[order.user_id] = merge_ironing_profile(
                self.ironing_profiles.get(order.user_id), profile_update
            )
        return order

    def get_ironing_order(self, order_id: str) -> Optional[IroningOrder]:
        return copy.deepcopy(self.ironing_orders.get(order_id))

    def save_ironing_order(self, order: IroningOrder) -> None:
        self.ironing_orders[order.id] = copy.deepcopy(order)

    def list_ironing_orders(
        self, user_id: Optional[str] = None
    ) -> List[IroningOrder]:
        orders = [
            copy.deepcopy(order)
            for order in self.ironing_orders.values()
            if user_id is None or order.user_id == user_id
        ]
        return sorted(orders, key=lambda o: o.placed_at, reverse=True)

    def get_ironing_profile(self, user_id: str) -> Optional[IroningProfile]:
        return copy.deepcopy(self.ironing_profiles.get(user_id))


class SqlDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).

    Documents live in JSON columns; the columns queried or ordered on are
    mirrored into indexed scalar columns.
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)
        self._seed_counter(constants.IRONING_ORDERS_COUNTER_DOCUMENT)

    def _seed_counter(self, name: str) -> None:
        """Creates the counter row up front so order placement only updates it."""
        with self.Session() as session:
            if session.get(CounterRow, name) is not None:
                return
            session.add(CounterRow(name=name, current_id=0))
            try:
                session.commit()
            except IntegrityError:
                # Another process seeded it first.
                session.rollback()

    # Properties

    def _property_row(self, property: Property, row: "PropertyRow | None"):
        data = to_document(property, serialize_dates=True)
        if row is None:
            row = PropertyRow(id=property.id)
        row.status = property.status.value
        row.lister_id = property.lister.id
        row.posted_on = property.posted_on.timestamp()
        row.data = data
        return row

    def create_property(self, property: Property) -> Property:
        if not property.id:
            property.id = get_unique_id()
        with self.Session() as session:
            session.add(self._property_row(property, None))
            session.commit()
        return property

    def get_property(self, property_id: str) -> Optional[Property]:
        with self.Session() as session:
            row = session.get(PropertyRow, property_id)
            if not row:
                return None
            return from_document(Property, row.id, row.data)

    def get_properties(self, property_ids: List[str]) -> List[Property]:
        if not property_ids:
            return []
        with self.Session() as session:
            rows = session.execute(
                select(PropertyRow).where(PropertyRow.id.in_(property_ids))
            ).scalars()
            by_id = {row.id: from_document(Property, row.id, row.data) for row in rows}
        return [by_id[pid] for pid in property_ids if pid in by_id]

    def list_properties(
        self, status: Optional[PropertyStatus] = None
    ) -> List[Property]:
        with self.Session() as session:
            stmt = select(PropertyRow).order_by(PropertyRow.posted_on.desc())
            if status is not None:
                stmt = stmt.where(PropertyRow.status == status.value)
            rows = session.execute(stmt).scalars().all()
            return [from_document(Property, row.id, row.data) for row in rows]

    def save_property(self, property: Property) -> None:
        with self.Session() as session:
            row = session.get(PropertyRow, property.id)
            session.add(self._property_row(property, row))
            session.commit()

    def delete_property(self, property_id: str) -> bool:
        with self.Session() as session:
            row = session.get(PropertyRow, property_id)
            if not row:
                return False
            session.delete(row)
            session.commit()
            return True

    # Users

    def get_user(self, user_id: str) -> Optional[UserProfile]:
        with self.Session() as session:
            row = session.get(UserRow, user_id)
            if not row:
                return None
            return from_document(UserProfile, row.id, row.data)

    def save_user(self, profile: UserProfile) -> None:
        with self.Session() as session:
            row = session.get(UserRow, profile.id)
            data = to_document(profile, serialize_dates=True)
            if row:
                row.email = profile.email
                row.data = data
            else:
                session.add(UserRow(id=profile.id, email=profile.email, data=data))
            session.commit()

    def find_user_by_email(self, email: str) -> Optional[UserProfile]:
        with self.Session() as session:
            row = session.execute(
                select(UserRow).where(UserRow.email == email).limit(1)
            ).scalar_one_or_none()
            if not row:
                return None
            return from_document(UserProfile, row.id, row.data)

    # Chats

    def list_chats_for_user(self, user_id: str) -> List[ChatConversation]:
        with self.Session() as session:
            rows = session.execute(
                select(ChatRow)
                .join(ChatParticipantRow, ChatParticipantRow.chat_id == ChatRow.id)
                .where(ChatParticipantRow.user_id == user_id)
            ).scalars().all()
            return [from_document(ChatConversation, row.id, row.data) for row in rows]

    def get_chat(self, chat_id: str) -> Optional[ChatConversation]:
        with self.Session() as session:
            row = session.get(ChatRow, chat_id)
            if not row:
                return None
            return from_document(ChatConversation, row.id, row.data)

    def _get_chat_by_pair(self, key: str) -> Optional[ChatConversation]:
        with self.Session() as session:
            row = session.execute(
                select(ChatRow).where(ChatRow.pair_key == key)
            ).scalar_one_or_none()
            if not row:
                return None
            return from_document(ChatConversation, row.id, row.data)

    def create_chat(self, chat: ChatConversation) -> ChatConversation:
        key = pair_key(chat.participant_ids)
        existing = self._get_chat_by_pair(key)
        if existing:
            return existing
        if not chat.id:
            chat.id = get_unique_id()
        with self.Session() as session:
            session.add(
                ChatRow(
                    id=chat.id,
                    pair_key=key,
                    data=to_document(chat, serialize_dates=True),
                )
            )
            for user_id in chat.participant_ids:
                session.add(ChatParticipantRow(chat_id=chat.id, user_id=user_id))
            try:
                session.commit()
            except IntegrityError:
                # Another request created the same conversation first.
                session.rollback()
                logger.info("Chat for pair %s already exists", key)
                return self._get_chat_by_pair(key)
        return chat

    def append_chat_message(self, chat_id: str, message: ChatMessage) -> None:
        with self.Session() as session:
            row = session.get(ChatRow, chat_id, with_for_update=True)
            if not row:
                return
            chat = from_document(ChatConversation, row.id, row.data)
            chat.messages.append(message)
            chat.last_message = LastMessage(
                text=message.text,
                sender_id=message.sender_id,
                timestamp=message.timestamp,
            )
            row.data = to_document(chat, serialize_dates=True)
            session.commit()

    # Ironing

    def get_price_list(self) -> Optional[List[IroningPriceItem]]:
        with self.Session() as session:
            row = session.get(DocumentRow, _PRICE_LIST_KEY)
            if not row:
                return None
            return [
                from_document(IroningPriceItem, None, item)
                for item in row.data.get("items", [])
            ]

    def save_price_list(self, items: List[IroningPriceItem]) -> None:
        data = {"items": [to_document(item) for item in items]}
        with self.Session() as session:
            row = session.get(DocumentRow, _PRICE_LIST_KEY)
            if row:
                row.data = data
            else:
                session.add(DocumentRow(key=_PRICE_LIST_KEY, data=data))
            session.commit()

    def place_ironing_order(
        self, order: IroningOrder, profile_update: IroningProfile
    ) -> IroningOrder:
        with self.Session() as session:
            counter = session.get(
                CounterRow, constants.IRONING_ORDERS_COUNTER_DOCUMENT, with_for_update=True
            )
            counter.current_id += 1
            order.order_id = counter.current_id
            if not order.id:
                order.id = get_unique_id()
            session.add(
                IroningOrderRow(
                    id=order.id,
                    order_id=order.order_id,
                    user_id=order.user_id,
                    placed_at=order.placed_at.timestamp(),
                    data=to_document(order, serialize_dates=True),
                )
            )
            profile_row = session.get(IroningProfileRow, order.user_id)
            existing = (
                from_document(IroningProfile, None, profile_row.data)
                if profile_row
                else None
            )
            merged = to_document(
                merge_ironing_profile(existing, profile_update), serialize_dates=True
            )
            if profile_row:
                profile_row.data = merged
            else:
                session.add(IroningProfileRow(user_id=order.user_id, data=merged))
            session.commit()
        return order

    def get_ironing_order(self, order_id: str) -> Optional[IroningOrder]:
        with self.Session() as session:
            row = session.get(IroningOrderRow, order_id)
            if not row:
                return None
            return from_document(IroningOrder, row.id, row.data)

    def save_ironing_order(self, order: IroningOrder) -> None:
        with self.Session() as session:
            row = session.get(IroningOrderRow, order.id)
            if not row:
                row = IroningOrderRow(id=order.id)
                session.add(row)
            row.order_id = order.order_id
            row.user_id = order.user_id
            row.placed_at = order.placed_at.timestamp()
            row.data = to_document(order, serialize_dates=True)
            session.commit()

    def list_ironing_orders(
        self, user_id: Optional[str] = None
    ) -> List[IroningOrder]:
        with self.Session() as session:
            stmt = select(IroningOrderRow).order_by(IroningOrderRow.placed_at.desc())
            if user_id is not None:
                stmt = stmt.where(IroningOrderRow.user_id == user_id)
            rows = session.execute(stmt).scalars().all()
            return [from_document(IroningOrder, row.id, row.data) for row in rows]

    def get_ironing_profile(self, user_id: str) -> Optional[IroningProfile]:
        with self.Session() as session:
            row = session.get(IroningProfileRow, user_id)
            if not row:
                return None
            return from_document(IroningProfile, None, row.data)


class FirestoreDbClient:
    """
    Firestore-backed implementation using the Firebase Admin SDK.

    Collection and field names match the documents the web client reads.
    """

    def __init__(self, client=None):
        from firebase_admin import firestore

        self._firestore = firestore
        self.db = client or firestore.client()

    def _collection(self, name: str):
        return self.db.collection(name)

    # Properties

    def create_property(self, property: Property) -> Property:
        collection = self._collection(constants.PROPERTIES_COLLECTION)
        doc_ref = (
            collection.document(property.id) if property.id else collection.document()
        )
        property.id = doc_ref.id
        doc_ref.set(to_document(property))
        return property

    def get_property(self, property_id: str) -> Optional[Property]:
        snapshot = (
            self._collection(constants.PROPERTIES_COLLECTION)
            .document(property_id)
            .get()
        )
        if not snapshot.exists:
            return None
        return from_document(Property, snapshot.id, snapshot.to_dict())

    def get_properties(self, property_ids: List[str]) -> List[Property]:
        collection = self._collection(constants.PROPERTIES_COLLECTION)
        refs = [collection.document(pid) for pid in property_ids]
        by_id = {
            snapshot.id: from_document(Property, snapshot.id, snapshot.to_dict())
            for snapshot in self.db.get_all(refs)
            if snapshot.exists
        }
        return [by_id[pid] for pid in property_ids if pid in by_id]

    def list_properties(
        self, status: Optional[PropertyStatus] = None
    ) -> List[Property]:
        # Ordered query without a status filter avoids a composite index;
        # status is filtered here instead.
        query = self._collection(constants.PROPERTIES_COLLECTION).order_by(
            "postedOn", direction=self._firestore.Query.DESCENDING
        )
        items = [
            from_document(Property, snapshot.id, snapshot.to_dict())
            for snapshot in query.stream()
        ]
        if status is not None:
            items = [p for p in items if p.status == status]
        return items

    def save_property(self, property: Property) -> None:
        self._collection(constants.PROPERTIES_COLLECTION).document(
            property.id
        ).set(to_document(property))

    def delete_property(self, property_id: str) -> bool:
        doc_ref = self._collection(constants.PROPERTIES_COLLECTION).document(
            property_id
        )
        if not doc_ref.get().exists:
            return False
        doc_ref.delete()
        return True

    # Users

    def get_user(self, user_id: str) -> Optional[UserProfile]:
        snapshot = self._collection(constants.USERS_COLLECTION).document(user_id).get()
        if not snapshot.exists:
            return None
        return from_document(UserProfile, snapshot.id, snapshot.to_dict())

    def save_user(self, profile: UserProfile) -> None:
        data = to_document(profile)
        # Profiles keep their own id field for the web client.
        data["id"] = profile.id
        self._collection(constants.USERS_COLLECTION).document(profile.id).set(data)

    def find_user_by_email(self, email: str) -> Optional[UserProfile]:
        from google.cloud.firestore_v1.base_query import FieldFilter

        query = (
            self._collection(constants.USERS_COLLECTION)
            .where(filter=FieldFilter("email", "==", email))
            .limit(1)
        )
        for snapshot in query.stream():
            return from_document(UserProfile, snapshot.id, snapshot.to_dict())
        return None

    # Chats

    def list_chats_for_user(self, user_id: str) -> List[ChatConversation]:
        from google.cloud.firestore_v1.base_query import FieldFilter

        query = self._collection(constants.CHATS_COLLECTION).where(
            filter=FieldFilter("participantIds", "array_contains", user_id)
        )
        return [
            from_document(ChatConversation, snapshot.id, snapshot.to_dict())
            for snapshot in query.stream()
        ]

    def get_chat(self, chat_id: str) -> Optional[ChatConversation]:
        snapshot = self._collection(constants.CHATS_COLLECTION).document(chat_id).get()
        if not snapshot.exists:
            return None
        return from_document(ChatConversation, snapshot.id, snapshot.to_dict())

    def create_chat(self, chat: ChatConversation) -> ChatConversation:
        firestore = self._firestore
        pair_ref = self._collection(constants.CHAT_PAIRS_COLLECTION).document(
            pair_key(chat.participant_ids)
        )
        chats = self._collection(constants.CHATS_COLLECTION)
        transaction = self.db.transaction()

        @firestore.transactional
        def _create_chat_transaction(transaction) -> str:
            pair_snapshot = pair_ref.get(transaction=transaction)
            if pair_snapshot.exists:
                return pair_snapshot.get("chatId")
            chat_ref = chats.document(chat.id) if chat.id else chats.document()
            transaction.set(chat_ref, to_document(chat))
            transaction.set(pair_ref, {"chatId": chat_ref.id})
            return chat_ref.id

        chat_id = _create_chat_transaction(transaction)
        if chat.id and chat.id == chat_id:
            return chat
        existing = self.get_chat(chat_id)
        if existing:
            return existing
        chat.id = chat_id
        return chat

    def append_chat_message(self, chat_id: str, message: ChatMessage) -> None:
        message_doc = to_document(message)
        message_doc["id"] = message.id
        self._collection(constants.CHATS_COLLECTION).document(chat_id).update(
            {
                "messages": self._firestore.ArrayUnion([message_doc]),
                "lastMessage": to_document(
                    LastMessage(
                        text=message.text,
                        sender_id=message.sender_id,
                        timestamp=message.timestamp,
                    )
                ),
            }
        )

    # Ironing

    def _price_list_ref(self):
        return self._collection(constants.CLOTHES_COLLECTION).document(
            constants.DEFAULT_PRICES_DOCUMENT
        )

    def get_price_list(self) -> Optional[List[IroningPriceItem]]:
        snapshot = self._price_list_ref().get()
        if not snapshot.exists:
            return None
        return [
            from_document(IroningPriceItem, None, item)
            for item in (snapshot.to_dict() or {}).get("items", [])
        ]

    def save_price_list(self, items: List[IroningPriceItem]) -> None:
        self._price_list_ref().set({"items": [to_document(item) for item in items]})

    def place_ironing_order(
        self, order: IroningOrder, profile_update: IroningProfile
    ) -> IroningOrder:
        firestore = self._firestore
        counter_ref = self._collection(constants.COUNTERS_COLLECTION).document(
            constants.IRONING_ORDERS_COUNTER_DOCUMENT
        )
        order_ref = self._collection(constants.IRONING_ORDERS_COLLECTION).document()
        profile_ref = self._collection(
            constants.IRONING_PROFILES_COLLECTION
        ).document(order.user_id)
        transaction = self.db.transaction()

        @firestore.transactional
        def _place_order_transaction(transaction) -> int:
            counter_snapshot = counter_ref.get(transaction=transaction)
            new_order_id = 1
            if counter_snapshot.exists:
                new_order_id = counter_snapshot.get("currentId") + 1
            transaction.set(counter_ref, {"currentId": new_order_id}, merge=True)
            order.order_id = new_order_id
            transaction.set(order_ref, to_document(order))
            profile_doc = {
                key: value
                for key, value in to_document(profile_update).items()
                if value is not None
            }
            transaction.set(profile_ref, profile_doc, merge=True)
            return new_order_id

        order.order_id = _place_order_transaction(transaction)
        order.id = order_ref.id
        return order

    def get_ironing_order(self, order_id: str) -> Optional[IroningOrder]:
        snapshot = (
            self._collection(constants.IRONING_ORDERS_COLLECTION)
            .document(order_id)
            .get()
        )
        if not snapshot.exists:
            return None
        return from_document(IroningOrder, snapshot.id, snapshot.to_dict())

    def save_ironing_order(self, order: IroningOrder) -> None:
        self._collection(constants.IRONING_ORDERS_COLLECTION).document(
            order.id
        ).set(to_document(order))

    def list_ironing_orders(
        self, user_id: Optional[str] = None
    ) -> List[IroningOrder]:
        from google.cloud.firestore_v1.base_query import FieldFilter

        query = self._collection(constants.IRONING_ORDERS_COLLECTION)
        if user_id is not None:
            query = query.where(filter=FieldFilter("userId", "==", user_id))
        query = query.order_by("placedAt", direction=self._firestore.Query.DESCENDING)
        return [
            from_document(IroningOrder, snapshot.id, snapshot.to_dict())
            for snapshot in query.stream()
        ]

    def get_ironing_profile(self, user_id: str) -> Optional[IroningProfile]:
        snapshot = (
            self._collection(constants.IRONING_PROFILES_COLLECTION)
            .document(user_id)
            .get()
        )
        if not snapshot.exists:
            return None
        return from_document(IroningProfile, None, snapshot.to_dict())


_PRICE_LIST_KEY = f"{constants.CLOTHES_COLLECTION}/{constants.DEFAULT_PRICES_DOCUMENT}"

Base = declarative_base()


class PropertyRow(Base):
    __tablename__ = "properties"

    id = Column(String, primary_key=True)
    status = Column(String, nullable=False, index=True)
    lister_id = Column(String, nullable=False, index=True)
    posted_on = Column(Float, nullable=False, index=True)
    data = Column(JSON, nullable=False)


class UserRow(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True)
    email = Column(String, nullable=True, index=True)
    data = Column(JSON, nullable=False)


class ChatRow(Base):
    __tablename__ = "chats"

    id = Column(String, primary_key=True)
    pair_key = Column(String, nullable=False, unique=True)
    data = Column(JSON, nullable=False)


class ChatParticipantRow(Base):
    __tablename__ = "chat_participants"

    chat_id = Column(String, ForeignKey("chats.id"), primary_key=True)
    user_id = Column(String, primary_key=True, index=True)


class IroningOrderRow(Base):
    __tablename__ = "ironing_orders"

    id = Column(String, primary_key=True)
    order_id = Column(Integer, nullable=False, unique=True)
    user_id = Column(String, nullable=False, index=True)
    placed_at = Column(Float, nullable=False, index=True)
    data = Column(JSON, nullable=False)


class IroningProfileRow(Base):
    __tablename__ = "ironing_profiles"

    user_id = Column(String, primary_key=True)
    data = Column(JSON, nullable=False)


class CounterRow(Base):
    __tablename__ = "counters"

    name = Column(String, primary_key=True)
    current_id = Column(Integer, nullable=False, default=0)


class DocumentRow(Base):
    __tablename__ = "documents"

    key = Column(String, primary_key=True)
    data = Column(JSON, nullable=False)
