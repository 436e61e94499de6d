import unittest
from shopsmart.domain.ShoppingItem import ShoppingItem
from shopsmart.domain.Store import Store
from shopsmart.logic.pricing.selection import format_cost, item_cost, select_store, total_cost


class TestStoreSelection(unittest.TestCase):

    def test_preferred_store_within_tolerance(self):
        selection = select_store({Store.FAMILA: 11, Store.LIDL: 10})
        self.assertEqual(selection.store, Store.FAMILA)
        self.assertEqual(selection.price, 11)

    def test_preferred_store_at_tolerance_boundary(self):
        selection = select_store({Store.FAMILA: 12, Store.LIDL: 10})
        self.assertEqual(selection.store, Store.FAMILA)

    def test_cheapest_store_beyond_tolerance(self):
        selection = select_store({Store.FAMILA: 13, Store.LIDL: 10})
        self.assertEqual(selection.store, Store.LIDL)
        self.assertEqual(selection.price, 10)

    def test_tie_goes_to_first_store_in_order(self):
        selection = select_store({Store.PRIMOPREZZO: 3, Store.LIDL: 3})
        self.assertEqual(selection.store, Store.LIDL)

    def test_invalid_prices_are_ignored(self):
        self.assertIsNone(select_store({}))
        self.assertIsNone(select_store(None))
        self.assertIsNone(select_store({Store.FAMILA: 0, Store.LIDL: -1}))
        selection = select_store({Store.FAMILA: 0, Store.PRIMOPREZZO: 4})
        self.assertEqual(selection.store, Store.PRIMOPREZZO)

    def test_item_and_total_cost(self):
        items = [
            ShoppingItem('riso', 'Riso', 500, 'g', prices={Store.LIDL: 2.0}),
            ShoppingItem('patate', 'Patate', 1.5, 'kg', prices={Store.FAMILA: 1.0, Store.LIDL: 0.9}),
            ShoppingItem('sale', 'Sale', 10, 'g'),
        ]
        self.assertAlmostEqual(item_cost(items[0]), 1.0)
        self.assertAlmostEqual(item_cost(items[1]), 1.5)
        self.assertIsNone(item_cost(items[2]))
        self.assertAlmostEqual(total_cost(items), 2.5)
        self.assertEqual(total_cost([]), 0)

    def test_format_cost(self):
        self.assertEqual(format_cost(2.5), '€2.50')
        self.assertEqual(format_cost(None), 'N/A')
