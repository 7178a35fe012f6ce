import unittest
from decimal import Decimal

from apps.carts.commands import CartEntryCommand, QuantityUpdateCommand
from apps.carts.store import InvalidCartEntryError


class CartEntryCommandTests(unittest.TestCase):
    def test_camel_case_payload(self):
        cmd = CartEntryCommand.from_raw(
            {
                "id": "m1",
                "name": "Benachin",
                "price": "150.50",
                "vendorId": "r9",
                "vendorName": "Mama's Kitchen",
                "imageUrl": "https://img/1.png",
                "entityType": "restaurant",
            }
        )
        entry = cmd.entry
        self.assertEqual(entry.id, "m1")
        self.assertEqual(entry.price, Decimal("150.50"))
        self.assertEqual(entry.vendor_id, "r9")
        self.assertEqual(entry.image_url, "https://img/1.png")
        self.assertEqual(entry.entity_type, "restaurant")
        self.assertIsNone(entry.description)

    def test_legacy_restaurant_keys_and_integer_ids(self):
        cmd = CartEntryCommand.from_raw(
            {"id": 42, "name": "Tea", "price": 20, "restaurantId": 7, "restaurantName": "Cafe"}
        )
        self.assertEqual(cmd.entry.id, "42")
        self.assertEqual(cmd.entry.vendor_id, "7")
        self.assertEqual(cmd.entry.vendor_name, "Cafe")

    def test_snake_case_keys(self):
        cmd = CartEntryCommand.from_raw(
            {"id": "p1", "price": 3, "vendor_id": "s1", "vendor_name": "Shop", "image_url": "x"}
        )
        self.assertEqual(cmd.entry.vendor_id, "s1")
        self.assertEqual(cmd.entry.image_url, "x")
        self.assertEqual(cmd.entry.name, "")

    def test_missing_fields_raise(self):
        cases = [
            ({"price": 1, "vendorId": "v"}, "id"),
            ({"id": "a", "price": 1}, "vendorId"),
            ({"id": "a", "vendorId": "v"}, "price"),
            ({"id": "a", "vendorId": "v", "price": -2}, "price"),
        ]
        for payload, field in cases:
            with self.assertRaises(InvalidCartEntryError) as ctx:
                CartEntryCommand.from_raw(payload)
            self.assertEqual(ctx.exception.field, field)

    def test_non_dict_payload_rejected(self):
        with self.assertRaises(InvalidCartEntryError):
            CartEntryCommand.from_raw(["m1"])


class QuantityUpdateCommandTests(unittest.TestCase):
    def test_coerces_string_quantity(self):
        cmd = QuantityUpdateCommand.from_raw("m1", {"quantity": "3"})
        self.assertEqual(cmd.item_id, "m1")
        self.assertEqual(cmd.quantity, 3)

    def test_allows_zero_and_negative(self):
        self.assertEqual(QuantityUpdateCommand.from_raw("m1", {"quantity": 0}).quantity, 0)
        self.assertEqual(QuantityUpdateCommand.from_raw("m1", {"quantity": -2}).quantity, -2)

    def test_rejects_non_integer_quantity(self):
        for bad in ({}, {"quantity": "many"}, {"quantity": True}, {"quantity": 1.5}):
            with self.assertRaises(InvalidCartEntryError):
                QuantityUpdateCommand.from_raw("m1", bad)
