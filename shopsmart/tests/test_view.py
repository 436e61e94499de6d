import unittest
from shopsmart.domain.Freshness import Freshness
from shopsmart.domain.ShoppingItem import ShoppingItem
from shopsmart.logic.shopping.view import filter_and_sort


class TestListView(unittest.TestCase):

    def setUp(self):
        self.items = [
            ShoppingItem('zucchine', 'Zucchine', freshness=Freshness.URGENT),
            ShoppingItem('mela', 'Mela', freshness=Freshness.FRESH, is_highlighted=True),
            ShoppingItem('banana', 'Banana', freshness=Freshness.SOON),
            ShoppingItem('arancia', 'Arancia', freshness=Freshness.URGENT),
        ]

    def test_default_puts_highlighted_first(self):
        names = [i.name for i in filter_and_sort(self.items)]
        self.assertEqual(names, ['Mela', 'Arancia', 'Banana', 'Zucchine'])

    def test_alphabetical(self):
        names = [i.name for i in filter_and_sort(self.items, sort_order='alphabetical')]
        self.assertEqual(names, ['Arancia', 'Banana', 'Mela', 'Zucchine'])

    def test_freshness_is_stable(self):
        names = [i.name for i in filter_and_sort(self.items, sort_order='freshness')]
        self.assertEqual(names, ['Zucchine', 'Arancia', 'Banana', 'Mela'])

    def test_query_is_case_insensitive(self):
        names = [i.name for i in filter_and_sort(self.items, query='AN')]
        self.assertEqual(names, ['Arancia', 'Banana'])

    def test_unknown_sort_order(self):
        with self.assertRaises(ValueError):
            filter_and_sort(self.items, sort_order='price')
