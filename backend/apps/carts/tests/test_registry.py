import unittest

from apps.carts.registry import CartSessionRegistry
from apps.carts.store import CartEntry


class CartSessionRegistryTests(unittest.TestCase):
    def setUp(self):
        self.registry = CartSessionRegistry()

    def test_open_creates_empty_store_once(self):
        store = self.registry.open("s1")
        self.assertTrue(store.is_empty)
        self.assertIs(self.registry.open("s1"), store)
        self.assertEqual(len(self.registry), 1)
        self.assertIn("s1", self.registry)

    def test_sessions_are_isolated(self):
        self.registry.open("s1").add_to_cart(
            CartEntry(id="m1", name="Soup", price=5, vendor_id="v1", vendor_name="Grill")
        )
        self.assertTrue(self.registry.open("s2").is_empty)
        self.assertEqual(self.registry.open("s1").get_total_quantity(), 1)

    def test_get_does_not_create(self):
        self.assertIsNone(self.registry.get("missing"))
        self.assertEqual(len(self.registry), 0)

    def test_teardown_discards_store(self):
        store = self.registry.open("s1")
        store.add_to_cart(
            CartEntry(id="m1", name="Soup", price=5, vendor_id="v1", vendor_name="Grill")
        )
        self.assertTrue(self.registry.teardown("s1"))
        self.assertNotIn("s1", self.registry)
        self.assertFalse(self.registry.teardown("s1"))
        self.assertTrue(self.registry.open("s1").is_empty)

    def test_iterates_over_session_ids(self):
        self.registry.open("a")
        self.registry.open("b")
        self.assertEqual(sorted(self.registry), ["a", "b"])


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


class CartSessionRegistryIdleTests(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.registry = CartSessionRegistry(idle_timeout=60, clock=self.clock)

    def test_open_sweeps_sessions_idle_past_timeout(self):
        self.registry.open("old")
        self.clock.now += 30
        self.registry.open("recent")
        self.clock.now += 45
        self.registry.open("new")
        self.assertEqual(sorted(self.registry), ["new", "recent"])

    def test_get_refreshes_and_expires(self):
        self.registry.open("s1")
        self.clock.now += 50
        self.assertIsNotNone(self.registry.get("s1"))
        self.clock.now += 50
        self.assertIsNotNone(self.registry.get("s1"))
        self.clock.now += 61
        self.assertIsNone(self.registry.get("s1"))
        self.assertNotIn("s1", self.registry)

    def test_evict_idle_reports_count(self):
        for sid in ("a", "b"):
            self.registry.open(sid)
        self.clock.now += 120
        self.assertEqual(self.registry.evict_idle(), 2)
        self.assertEqual(len(self.registry), 0)

    def test_no_timeout_keeps_every_session(self):
        registry = CartSessionRegistry(clock=self.clock)
        registry.open("s1")
        self.clock.now += 10 ** 9
        self.assertEqual(registry.evict_idle(), 0)
        self.assertIsNotNone(registry.get("s1"))
