import unittest
from shopsmart.domain.DietPlan import DietPlan
from shopsmart.domain.Freshness import Freshness
from shopsmart.domain.ShoppingItem import ShoppingItem
from shopsmart.domain.Store import Store, prices_from_dict


class TestDietPlan(unittest.TestCase):

    def test_from_dict_fills_missing_slots_and_weekdays(self):
        plan = DietPlan.from_dict({
            'dayTypes': [{'id': 'dt-1', 'name': 'Allenamento', 'lunch': [{'name': 'Pasta', 'quantity': '90'}]}],
            'week': {'Monday': 'dt-1', 'funday': 'dt-1'},
        })
        day_type = plan.get_day_type('dt-1')
        self.assertEqual(day_type.breakfast, [])
        self.assertEqual(day_type.lunch[0].quantity, 90.0)
        self.assertEqual(len(plan.week), 7)
        self.assertEqual(plan.week['monday'], 'dt-1')
        self.assertIsNone(plan.week['sunday'])

    def test_from_dict_accepts_index_keyed_day_types(self):
        plan = DietPlan.from_dict({'dayTypes': {'1': {'id': 'b'}, '0': {'id': 'a'}}})
        self.assertEqual([dt.id for dt in plan.day_types], ['a', 'b'])

    def test_usage_counts(self):
        plan = DietPlan.from_dict({
            'dayTypes': [{'id': 'a'}, {'id': 'b'}],
            'week': {'monday': 'a', 'tuesday': 'a', 'friday': 'b'},
        })
        self.assertEqual(plan.usage_counts(), {'a': 2, 'b': 1})

    def test_add_day_type(self):
        plan = DietPlan()
        first = plan.add_day_type()
        second = plan.add_day_type('  Riposo ')
        self.assertEqual(first.name, 'Giorno 1')
        self.assertEqual(second.name, 'Riposo')
        self.assertTrue(first.id.startswith('day-type-'))
        self.assertNotEqual(first.id, second.id)

    def test_remove_day_type_clears_week(self):
        plan = DietPlan.from_dict({
            'dayTypes': [{'id': 'a'}, {'id': 'b'}],
            'week': {'monday': 'a', 'tuesday': 'b'},
        })
        self.assertTrue(plan.remove_day_type('a'))
        self.assertIsNone(plan.week['monday'])
        self.assertEqual(plan.week['tuesday'], 'b')
        self.assertFalse(plan.remove_day_type('missing'))

    def test_round_trip(self):
        data = {
            'dayTypes': [{'id': 'a', 'name': 'A', 'breakfast': [],
                          'lunch': [{'name': 'Riso', 'quantity': 80.0, 'unit': 'g', 'prices': {'lidl': 2.0}}],
                          'dinner': []}],
            'week': {'monday': 'a', 'tuesday': None, 'wednesday': None, 'thursday': None,
                     'friday': None, 'saturday': None, 'sunday': None},
        }
        self.assertEqual(DietPlan.from_dict(data).to_dict(), data)


class TestShoppingItemDomain(unittest.TestCase):

    def test_legacy_freshness_colours(self):
        self.assertEqual(Freshness.parse('red'), Freshness.URGENT)
        self.assertEqual(Freshness.parse('yellow'), Freshness.SOON)
        self.assertEqual(Freshness.parse('green'), Freshness.FRESH)
        self.assertEqual(Freshness.parse(None), Freshness.FRESH)
        self.assertIsNone(Freshness.lookup('purple'))

    def test_from_dict(self):
        item = ShoppingItem.from_dict({
            'id': 'riso', 'name': 'Riso', 'quantity': 180.0, 'unit': 'g',
            'prices': {'Famila': '2.5', 'coop': 3, 'lidl': None},
            'freshness': 'blue', 'isHighlighted': True,
        })
        self.assertEqual(item.quantity, 180)
        self.assertIsInstance(item.quantity, int)
        self.assertEqual(item.prices, {Store.FAMILA: 2.5})
        self.assertEqual(item.freshness, Freshness.FRESH)
        self.assertTrue(item.is_highlighted)
        self.assertEqual(item.to_dict()['freshness'], 'fresh')

    def test_quantity_in_kg(self):
        self.assertEqual(ShoppingItem('a', quantity=250, unit='g').quantity_in_kg(), 0.25)
        self.assertEqual(ShoppingItem('b', quantity=1.5, unit='kg').quantity_in_kg(), 1.5)

    def test_prices_from_dict_ignores_bad_values(self):
        self.assertEqual(prices_from_dict({'lidl': 'abc', 'famila': True, 'primoprezzo': 1}),
                         {Store.PRIMOPREZZO: 1.0})
