import unittest
from datetime import datetime, timezone

from lokality import ironing
from lokality.auth import Identity
from lokality.db import InMemoryDbClient
from lokality.exceptions import NotFoundError, PermissionDeniedError, ValidationError
from shared.types import (
    IroningAddress,
    IroningOrderItem,
    IroningOrderStatus,
    IroningPriceItem,
)

from testing_utils import make_admin, make_profile, make_provider

ADDRESS = IroningAddress(
    apartment_name="Green Acres", block="B", floor_no="3", flat_no="304"
)


def shirts(quantity=2):
    return IroningOrderItem(name="Shirt", price=15, quantity=quantity)


class PriceListTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.db.save_user(make_provider())
        self.db.save_user(make_admin())
        self.db.save_user(make_profile("customer"))

    def test_defaults_written_on_first_read(self):
        self.assertIsNone(self.db.price_list)
        items = ironing.get_price_list(self.db)
        self.assertEqual(len(items), 16)
        self.assertEqual(
            {item.category for item in items}, {"men", "women", "kids"}
        )
        self.assertEqual(len(self.db.price_list), 16)

    def test_update_price_list(self):
        items = [IroningPriceItem(name="Saree", price=60, category="women")]
        ironing.update_price_list(self.db, "provider", items)
        self.assertEqual(ironing.get_price_list(self.db), items)
        ironing.update_price_list(self.db, "admin", items)

    def test_update_price_list_permissions(self):
        with self.assertRaises(PermissionDeniedError):
            ironing.update_price_list(self.db, "customer", [])

    def test_negative_price_rejected(self):
        items = [IroningPriceItem(name="Saree", price=-1, category="women")]
        with self.assertRaises(ValidationError):
            ironing.update_price_list(self.db, "provider", items)


class PlaceOrderTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.db.save_user(make_profile("customer", name="Asha"))
        self.identity = Identity(
            uid="customer", email="asha@example.com", phone_number="+911234567890"
        )

    def test_place_order(self):
        order = ironing.place_order(
            self.db,
            self.identity,
            [shirts(2), IroningOrderItem(name="Saree", price=50, quantity=0)],
            ADDRESS,
        )
        self.assertEqual(order.order_id, 1)
        self.assertEqual(order.status, IroningOrderStatus.PLACED)
        self.assertEqual([item.name for item in order.items], ["Shirt"])
        self.assertEqual(order.total_cost, 30)
        self.assertEqual(order.total_items, 2)
        self.assertEqual(order.user_name, "Asha")
        self.assertEqual(order.user_email, "asha@example.com")

        profile = ironing.get_ironing_profile(self.db, "customer")
        self.assertEqual(profile.address, ADDRESS)
        self.assertEqual(profile.phone, "+911234567890")

    def test_order_ids_are_sequential(self):
        first = ironing.place_order(self.db, self.identity, [shirts()], ADDRESS)
        second = ironing.place_order(self.db, self.identity, [shirts()], ADDRESS)
        self.assertEqual((first.order_id, second.order_id), (1, 2))

    def test_missing_profile_uses_placeholders(self):
        identity = Identity(uid="new", email="new@example.com")
        order = ironing.place_order(self.db, identity, [shirts()], ADDRESS)
        self.assertEqual(order.user_name, "N/A")
        self.assertEqual(order.user_phone, "N/A")

    def test_empty_order_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            ironing.place_order(self.db, self.identity, [shirts(0)], ADDRESS)
        self.assertEqual(ctx.exception.message, "Please add at least one item.")

    def test_address_required(self):
        address = IroningAddress(
            apartment_name="Green Acres", block="", floor_no="3", flat_no="304"
        )
        with self.assertRaises(ValidationError):
            ironing.place_order(self.db, self.identity, [shirts()], address)
        self.assertEqual(self.db.order_counter, 0)

    def test_profile_merge_keeps_earlier_fields(self):
        ironing.place_order(self.db, self.identity, [shirts()], ADDRESS)
        no_phone = Identity(uid="customer", email="asha@example.com")
        ironing.place_order(self.db, no_phone, [shirts()], ADDRESS)
        profile = ironing.get_ironing_profile(self.db, "customer")
        self.assertEqual(profile.phone, "+911234567890")


class DashboardTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.db.save_user(make_provider())
        self.db.save_user(make_profile("customer"))
        identity = Identity(uid="customer", email="c@example.com")
        self.order = ironing.place_order(
            self.db,
            identity,
            [shirts(2), IroningOrderItem(name="Saree", price=50, quantity=1)],
            ADDRESS,
        )

    def test_next_status(self):
        self.assertEqual(
            ironing.next_status(IroningOrderStatus.PLACED),
            IroningOrderStatus.PICKED_UP,
        )
        self.assertEqual(
            ironing.next_status(IroningOrderStatus.OUT_FOR_DELIVERY),
            IroningOrderStatus.COMPLETED,
        )
        self.assertIsNone(ironing.next_status(IroningOrderStatus.COMPLETED))

    def test_advance_order_records_history(self):
        updated = ironing.advance_order(
            self.db, "provider", self.order.id, IroningOrderStatus.PICKED_UP
        )
        self.assertEqual(updated.status, IroningOrderStatus.PICKED_UP)
        [entry] = self.db.get_ironing_order(self.order.id).status_history
        self.assertEqual(entry.status, IroningOrderStatus.PICKED_UP)
        self.assertEqual(entry.updated_by, "provider")

    def test_advance_must_follow_status_flow(self):
        with self.assertRaises(ValidationError):
            ironing.advance_order(
                self.db, "provider", self.order.id, IroningOrderStatus.COMPLETED
            )
        self.assertEqual(
            self.db.get_ironing_order(self.order.id).status, IroningOrderStatus.PLACED
        )

    def test_completed_order_cannot_move(self):
        status = IroningOrderStatus.PLACED
        while ironing.next_status(status) is not None:
            status = ironing.next_status(status)
            ironing.advance_order(self.db, "provider", self.order.id, status)
        with self.assertRaises(ValidationError):
            ironing.advance_order(
                self.db, "provider", self.order.id, IroningOrderStatus.PLACED
            )
        order = self.db.get_ironing_order(self.order.id)
        self.assertEqual(order.status, IroningOrderStatus.COMPLETED)
        self.assertEqual(len(order.status_history), 4)

    def test_dashboard_requires_provider(self):
        with self.assertRaises(PermissionDeniedError):
            ironing.advance_order(
                self.db, "customer", self.order.id, IroningOrderStatus.PICKED_UP
            )
        with self.assertRaises(PermissionDeniedError):
            ironing.list_all_orders(self.db, "customer")

    def test_unknown_order(self):
        with self.assertRaises(NotFoundError):
            ironing.advance_order(
                self.db, "provider", "missing", IroningOrderStatus.PICKED_UP
            )

    def test_set_estimated_delivery(self):
        when = datetime(2025, 3, 1, tzinfo=timezone.utc)
        updated = ironing.set_estimated_delivery(
            self.db, "provider", self.order.id, when
        )
        self.assertEqual(updated.estimated_delivery, when)

    def test_update_item_price_recomputes_total(self):
        updated = ironing.update_item_price(
            self.db, "provider", self.order.id, 1, 80
        )
        self.assertEqual(updated.items[1].price, 80)
        self.assertEqual(updated.total_cost, 110)
        with self.assertRaises(ValidationError):
            ironing.update_item_price(self.db, "provider", self.order.id, 5, 10)

    def test_order_lists_newest_first(self):
        second = ironing.place_order(
            self.db, Identity(uid="other", email="o@example.com"), [shirts()], ADDRESS
        )
        all_orders = ironing.list_all_orders(self.db, "provider")
        self.assertEqual([o.id for o in all_orders], [second.id, self.order.id])
        mine = ironing.list_user_orders(self.db, "customer")
        self.assertEqual([o.id for o in mine], [self.order.id])


if __name__ == "__main__":
    unittest.main()
