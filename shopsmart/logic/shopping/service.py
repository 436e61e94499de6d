"""Shopping list recomputation.

Runs the aggregate -> reconcile -> diff pipeline against the repositories and
commits the change-set in one atomic write. Called after every diet save and
profile deletion. Nothing is written when reading profiles or the stored list
fails, so the previously committed list stays intact.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List

from shopsmart.domain.DietPlan import DietPlan
from shopsmart.domain.ShoppingItem import ShoppingItem
from shopsmart.events.event_helpers import publish_recomputed
from shopsmart.infra.Diet_Repository import DietRepository
from shopsmart.infra.Shopping_Repository import ShoppingRepository
from shopsmart.logic.shopping.aggregator import aggregate
from shopsmart.logic.shopping.reconcile import ShoppingListChanges, diff_shopping_list, reconcile

logger = logging.getLogger(__name__)

__all__ = [
    "RecomputeResult", "recompute_shopping_list",
    "save_diet_plan_and_recompute", "delete_profile_and_recompute",
]


@dataclass
class RecomputeResult:
    items: List[ShoppingItem]
    changes: ShoppingListChanges

    def to_dict(self):
        return {
            'items': [i.to_dict() for i in self.items],
            'count': len(self.items),
            'changes': self.changes.to_dict(),
        }


def recompute_shopping_list(diet_repo: DietRepository, shopping_repo: ShoppingRepository,
                            *, trigger: str = "manual") -> RecomputeResult:
    profiles = diet_repo.load_all_profiles()
    aggregated = aggregate(profiles)
    prior = shopping_repo.load_shopping_list()

    items = reconcile(aggregated, prior)
    changes = diff_shopping_list(items, prior)
    if not changes.is_empty:
        shopping_repo.commit_changes(changes.upserts, changes.delete_ids)
    logger.info("Shopping list recomputed (%s): %d items, %d upserts, %d deletes",
                trigger, len(items), len(changes.upserts), len(changes.delete_ids))
    publish_recomputed(len(items), [i.id for i in changes.upserts], list(changes.delete_ids), trigger)
    return RecomputeResult(items, changes)


def save_diet_plan_and_recompute(profile_id: str, plan: DietPlan, diet_repo: DietRepository,
                                 shopping_repo: ShoppingRepository) -> RecomputeResult:
    diet_repo.save_diet_plan(profile_id, plan)
    return recompute_shopping_list(diet_repo, shopping_repo, trigger=f"save:{profile_id}")


def delete_profile_and_recompute(profile_id: str, diet_repo: DietRepository,
                                 shopping_repo: ShoppingRepository) -> RecomputeResult:
    diet_repo.delete_profile(profile_id)
    return recompute_shopping_list(diet_repo, shopping_repo, trigger=f"delete:{profile_id}")
