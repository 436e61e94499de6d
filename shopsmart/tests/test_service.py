import tempfile
import unittest
from pathlib import Path
from unittest import mock

from shopsmart.domain.DietPlan import DayType, DietFoodItem, DietPlan
from shopsmart.domain.Freshness import Freshness
from shopsmart.domain.Store import Store
from shopsmart.domain.exceptions import ProfileError, StorageError
from shopsmart.events.Event_Bus import GLOBAL_EVENT_BUS, SHOPPING_LIST_RECOMPUTED
from shopsmart.infra.Diet_Repository import DietRepository
from shopsmart.infra.Document_Store import JsonDocumentStore
from shopsmart.infra.Shopping_Repository import ShoppingRepository
from shopsmart.logic.shopping.service import (
    delete_profile_and_recompute, recompute_shopping_list, save_diet_plan_and_recompute
)


def _plan(items, days=('monday',)):
    return DietPlan([DayType('dt-1', lunch=items)], {day: 'dt-1' for day in days})


class TestRecomputeService(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.store = JsonDocumentStore(Path(self._tmp.name) / 'shopsmart.json')
        self.diet_repo = DietRepository(self.store)
        self.shopping_repo = ShoppingRepository(self.store)

    def tearDown(self):
        self._tmp.cleanup()

    def test_save_recomputes_across_profiles(self):
        save_diet_plan_and_recompute('principale', _plan([DietFoodItem('Rice', 80)]),
                                     self.diet_repo, self.shopping_repo)
        result = save_diet_plan_and_recompute('luca', _plan([DietFoodItem('rice', 100)], ('tuesday',)),
                                              self.diet_repo, self.shopping_repo)
        [item] = self.shopping_repo.load_shopping_list()
        self.assertEqual((item.id, item.name, item.quantity, item.unit), ('rice', 'Rice', 180, 'g'))
        self.assertEqual(result.changes.to_dict(), {'upserts': ['rice'], 'deleted': []})

    def test_second_recompute_writes_nothing(self):
        save_diet_plan_and_recompute('principale', _plan([DietFoodItem('Pasta', 100)]),
                                     self.diet_repo, self.shopping_repo)
        with mock.patch.object(self.shopping_repo, 'commit_changes') as commit:
            result = recompute_shopping_list(self.diet_repo, self.shopping_repo)
        commit.assert_not_called()
        self.assertTrue(result.changes.is_empty)

    def test_user_fields_survive_plan_changes(self):
        save_diet_plan_and_recompute('principale', _plan([DietFoodItem('Pasta', 100)]),
                                     self.diet_repo, self.shopping_repo)
        item = self.shopping_repo.get_item('pasta')
        item.prices = {Store.LIDL: 1.2}
        item.freshness = Freshness.SOON
        item.is_highlighted = True
        self.shopping_repo.update_item(item)

        save_diet_plan_and_recompute('principale', _plan([DietFoodItem('Pasta', 100)], ('monday', 'friday')),
                                     self.diet_repo, self.shopping_repo)
        item = self.shopping_repo.get_item('pasta')
        self.assertEqual(item.quantity, 200)
        self.assertEqual(item.prices, {Store.LIDL: 1.2})
        self.assertEqual(item.freshness, Freshness.SOON)
        self.assertTrue(item.is_highlighted)

    def test_delete_profile_drops_its_items(self):
        save_diet_plan_and_recompute('principale', _plan([DietFoodItem('Pasta', 100)]),
                                     self.diet_repo, self.shopping_repo)
        save_diet_plan_and_recompute('anna', _plan([DietFoodItem('Tofu', 150)]),
                                     self.diet_repo, self.shopping_repo)
        result = delete_profile_and_recompute('anna', self.diet_repo, self.shopping_repo)
        self.assertEqual(result.changes.delete_ids, ['tofu'])
        self.assertEqual([i.id for i in self.shopping_repo.load_shopping_list()], ['pasta'])

    def test_default_profile_delete_is_rejected(self):
        with self.assertRaises(ProfileError):
            delete_profile_and_recompute('principale', self.diet_repo, self.shopping_repo)

    def test_failed_read_leaves_list_untouched(self):
        save_diet_plan_and_recompute('principale', _plan([DietFoodItem('Pasta', 100)]),
                                     self.diet_repo, self.shopping_repo)
        with mock.patch.object(self.diet_repo, 'load_all_profiles', side_effect=StorageError('down')):
            with self.assertRaises(StorageError):
                recompute_shopping_list(self.diet_repo, self.shopping_repo)
        self.assertEqual([i.id for i in self.shopping_repo.load_shopping_list()], ['pasta'])

    def test_publishes_recomputed_event(self):
        received = []

        def listener(name, payload):
            received.append(payload)

        GLOBAL_EVENT_BUS.subscribe(SHOPPING_LIST_RECOMPUTED, listener)
        try:
            save_diet_plan_and_recompute('principale', _plan([DietFoodItem('Pasta', 100)]),
                                         self.diet_repo, self.shopping_repo)
        finally:
            GLOBAL_EVENT_BUS.unsubscribe(SHOPPING_LIST_RECOMPUTED, listener)
        self.assertEqual(received[-1]['count'], 1)
        self.assertEqual(received[-1]['upserts'], ['pasta'])
        self.assertEqual(received[-1]['trigger'], 'save:principale')
