"""Shopping list endpoints: read with pricing, recompute and edit the user-owned fields."""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query

from shopsmart.api.dependencies import get_diet_repository, get_shopping_repository
from shopsmart.domain.ShoppingItem import ShoppingItem
from shopsmart.domain.Store import prices_from_dict
from shopsmart.events.event_helpers import publish_item_updated
from shopsmart.infra.Diet_Repository import DietRepository
from shopsmart.infra.Shopping_Repository import ShoppingRepository
from shopsmart.logic.pricing.selection import format_cost, item_cost, select_store, total_cost
from shopsmart.logic.shopping.service import recompute_shopping_list
from shopsmart.logic.shopping.view import filter_and_sort
from shopsmart.utilities.validators import ShoppingItemUpdate

router = APIRouter()
logger = logging.getLogger(__name__)


def _item_view(item: ShoppingItem) -> dict:
    data = item.to_dict()
    selection = select_store(item.prices)
    cost = item_cost(item)
    data["freshness_label"] = item.freshness.label
    data["selected_store"] = selection.to_dict() if selection else None
    data["estimated_cost"] = round(cost, 2) if cost is not None else None
    data["estimated_cost_display"] = format_cost(cost)
    return data


@router.get('/api/shopping-list')
def get_shopping_list(q: str = Query(default=""), sort: str = Query(default="default"),
                      shopping_repo: ShoppingRepository = Depends(get_shopping_repository)):
    items = shopping_repo.load_shopping_list()
    try:
        visible = filter_and_sort(items, q, sort)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    total = total_cost(items)
    visible_total = total_cost(visible)
    return {
        "items": [_item_view(i) for i in visible],
        "count": len(visible),
        "total_count": len(items),
        "total_cost": round(total, 2),
        "total_cost_exact": total,
        "total_cost_display": format_cost(total),
        "visible_cost": round(visible_total, 2),
    }


@router.post('/api/shopping-list/recompute')
def recompute(diet_repo: DietRepository = Depends(get_diet_repository),
              shopping_repo: ShoppingRepository = Depends(get_shopping_repository)):
    result = recompute_shopping_list(diet_repo, shopping_repo, trigger="manual")
    return result.to_dict()


@router.put('/api/shopping-list/{item_id}')
def update_item(item_id: str, payload: ShoppingItemUpdate,
                shopping_repo: ShoppingRepository = Depends(get_shopping_repository)):
    item = shopping_repo.get_item(item_id)
    if payload.prices is not None:
        merged = {store.value: price for store, price in item.prices.items()}
        for store, price in payload.prices.items():
            if price is None:
                merged.pop(store, None)
            else:
                merged[store] = price
        item.prices = prices_from_dict(merged)
    if payload.freshness is not None:
        item.freshness = payload.freshness
    if payload.is_highlighted is not None:
        item.is_highlighted = payload.is_highlighted
    shopping_repo.update_item(item)
    publish_item_updated(item)
    return _item_view(item)


@router.post('/api/shopping-list/{item_id}/highlight')
def toggle_highlight(item_id: str, shopping_repo: ShoppingRepository = Depends(get_shopping_repository)):
    item = shopping_repo.get_item(item_id)
    item.is_highlighted = not item.is_highlighted
    shopping_repo.update_item(item)
    publish_item_updated(item)
    return _item_view(item)


@router.delete('/api/shopping-list/{item_id}')
def delete_item(item_id: str, shopping_repo: ShoppingRepository = Depends(get_shopping_repository)):
    item = shopping_repo.get_item(item_id)
    shopping_repo.delete_item(item.id)
    logger.info("Deleted shopping item %s", item.id)
    return {"deleted": item.id}
