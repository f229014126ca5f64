import os
import tempfile
import unittest
from datetime import timedelta

from lokality.db import SqlDbClient
from shared.types import (
    ChatConversation,
    ChatMessage,
    IroningAddress,
    IroningOrder,
    IroningOrderItem,
    IroningOrderStatus,
    IroningPriceItem,
    IroningProfile,
    LastMessage,
    Participant,
    PropertyStatus,
    SearchHistoryItem,
    UserRole,
)

from testing_utils import BASE_TIME, make_profile, make_property


def make_chat(a="u1", b="u2") -> ChatConversation:
    return ChatConversation(
        id="",
        participant_ids=[a, b],
        participants={a: Participant(name="A", avatar=""), b: Participant(name="B", avatar="")},
        last_message=LastMessage(text="Chat started.", sender_id=a, timestamp=BASE_TIME),
    )


def make_order(user_id="u1", minutes=0) -> IroningOrder:
    return IroningOrder(
        id="",
        order_id=0,
        user_id=user_id,
        user_email=f"{user_id}@example.com",
        items=[IroningOrderItem(name="Shirt", price=15, quantity=2)],
        total_cost=30,
        total_items=2,
        status=IroningOrderStatus.PLACED,
        placed_at=BASE_TIME + timedelta(minutes=minutes),
        address=IroningAddress(apartment_name="A", block="B", floor_no="1", flat_no="101"),
    )


class SqlDbClientTests(unittest.TestCase):
    """
    Uses SQLite via SQLAlchemy URL for fast/local testing of the SQL client logic.
    """

    def setUp(self):
        self.db = SqlDbClient("sqlite+pysqlite:///:memory:")

    def test_property_round_trip(self):
        property = make_property("p1")
        property.parking.has_4_wheeler = True
        self.db.create_property(property)
        loaded = self.db.get_property("p1")
        self.assertEqual(loaded, property)
        self.assertEqual(loaded.posted_on, BASE_TIME)
        self.assertEqual(loaded.status, PropertyStatus.AVAILABLE)
        self.assertTrue(loaded.parking.has_4_wheeler)

    def test_create_assigns_id(self):
        property = make_property("")
        created = self.db.create_property(property)
        self.assertTrue(created.id)
        self.assertIsNotNone(self.db.get_property(created.id))

    def test_list_properties_by_status_newest_first(self):
        self.db.create_property(make_property("old", days_ago=2))
        self.db.create_property(make_property("new", days_ago=0))
        self.db.create_property(
            make_property("pending", status=PropertyStatus.PENDING_REVIEW)
        )
        available = self.db.list_properties(PropertyStatus.AVAILABLE)
        self.assertEqual([p.id for p in available], ["new", "old"])
        self.assertEqual(len(self.db.list_properties()), 3)

    def test_get_properties_keeps_requested_order(self):
        self.db.create_property(make_property("a"))
        self.db.create_property(make_property("b"))
        found = self.db.get_properties(["b", "zzz", "a"])
        self.assertEqual([p.id for p in found], ["b", "a"])

    def test_save_and_delete_property(self):
        property = make_property("p1")
        self.db.create_property(property)
        property.status = PropertyStatus.OCCUPIED
        self.db.save_property(property)
        self.assertEqual(self.db.get_property("p1").status, PropertyStatus.OCCUPIED)
        self.assertTrue(self.db.delete_property("p1"))
        self.assertFalse(self.db.delete_property("p1"))

    def test_user_round_trip_and_email_lookup(self):
        profile = make_profile("u1", role=UserRole.ADMIN)
        profile.search_history = [
            SearchHistoryItem(
                display="Looking to rent, in HSR, up to ₹ 3 Lakh",
                filters={"lookingTo": "rent", "has2WheelerParking": True},
            )
        ]
        self.db.save_user(profile)
        loaded = self.db.get_user("u1")
        self.assertEqual(loaded, profile)
        # Stored filter objects keep the client's keys.
        self.assertIn("has2WheelerParking", loaded.search_history[0].filters)
        self.assertEqual(self.db.find_user_by_email("u1@example.com").id, "u1")
        self.assertIsNone(self.db.find_user_by_email("nobody@example.com"))

    def test_chat_pair_is_unique(self):
        first = self.db.create_chat(make_chat("u1", "u2"))
        second = self.db.create_chat(make_chat("u2", "u1"))
        self.assertEqual(first.id, second.id)
        self.assertEqual([c.id for c in self.db.list_chats_for_user("u2")], [first.id])
        self.assertEqual(self.db.list_chats_for_user("u3"), [])

    def test_chat_participants_keep_user_id_keys(self):
        chat = self.db.create_chat(make_chat("user_one", "userTwo"))
        loaded = self.db.get_chat(chat.id)
        self.assertEqual(set(loaded.participants), {"user_one", "userTwo"})

    def test_append_chat_message(self):
        chat = self.db.create_chat(make_chat())
        message = ChatMessage(
            id="m1", sender_id="u2", text="Hi", timestamp=BASE_TIME + timedelta(minutes=1)
        )
        self.db.append_chat_message(chat.id, message)
        loaded = self.db.get_chat(chat.id)
        self.assertEqual(loaded.messages, [message])
        self.assertEqual(loaded.last_message.text, "Hi")
        self.assertEqual(loaded.last_message.sender_id, "u2")

    def test_price_list(self):
        self.assertIsNone(self.db.get_price_list())
        items = [IroningPriceItem(name="Shirt", price=15, category="men")]
        self.db.save_price_list(items)
        self.assertEqual(self.db.get_price_list(), items)

    def test_place_ironing_order_counter_and_profile(self):
        first = self.db.place_ironing_order(
            make_order(minutes=0),
            IroningProfile(email="u1@example.com", phone="+91 1"),
        )
        second = self.db.place_ironing_order(
            make_order(minutes=5), IroningProfile(email="u1@example.com")
        )
        self.assertEqual((first.order_id, second.order_id), (1, 2))
        profile = self.db.get_ironing_profile("u1")
        self.assertEqual(profile.phone, "+91 1")

        orders = self.db.list_ironing_orders(user_id="u1")
        self.assertEqual([o.order_id for o in orders], [2, 1])
        self.assertEqual(self.db.list_ironing_orders(user_id="u2"), [])

    def test_save_ironing_order(self):
        order = self.db.place_ironing_order(make_order(), IroningProfile())
        order.status = IroningOrderStatus.PROCESSING
        order.estimated_delivery = BASE_TIME + timedelta(days=2)
        self.db.save_ironing_order(order)
        loaded = self.db.get_ironing_order(order.id)
        self.assertEqual(loaded.status, IroningOrderStatus.PROCESSING)
        self.assertEqual(loaded.estimated_delivery, BASE_TIME + timedelta(days=2))

    def test_clients_sharing_a_database_share_the_order_counter(self):
        handle, path = tempfile.mkstemp(suffix=".db")
        os.close(handle)
        self.addCleanup(os.remove, path)
        url = f"sqlite+pysqlite:///{path}"
        first_client = SqlDbClient(url)
        second_client = SqlDbClient(url)
        first = first_client.place_ironing_order(make_order(), IroningProfile())
        second = second_client.place_ironing_order(make_order("u2"), IroningProfile())
        self.assertEqual((first.order_id, second.order_id), (1, 2))
        first_client.engine.dispose()
        second_client.engine.dispose()


if __name__ == "__main__":
    unittest.main()
